import math
from collections import namedtuple
from fractions import Fraction

from . import Types
from .Config import get_real_epsilon, get_real_precision
from .Errors import VladArithmeticError, VladTypeError


class Value(namedtuple('Value', ['type', 'data'])):
    """
    A Vlad runtime value: the type name plus the Python payload.

        natural, integer -> int
        rational         -> fractions.Fraction (lowest terms, positive denominator)
        real             -> float
        complex          -> complex
        bool             -> bool
        list<T>          -> tuple of Value of type T
    """
    __slots__ = ()

    def __str__(self):
        return render(self)


# -------- CONSTRUCTORS --------
def natural(n):
    if n < 0:
        raise VladArithmeticError(f"natural underflow: {n} is negative")
    return Value(Types.NATURAL, int(n))

def integer(n):
    return Value(Types.INTEGER, int(n))

def rational(numerator, denominator=1):
    if denominator == 0:
        raise VladArithmeticError("division by zero")
    return Value(Types.RATIONAL, Fraction(numerator, denominator))

def real(x):
    return Value(Types.REAL, float(x))

def complex_number(re, im=0.0):
    return Value(Types.COMPLEX, complex(float(re), float(im)))

def boolean(b):
    return Value(Types.BOOL, bool(b))

def list_value(element_type, items):
    target = Types.list_of(element_type)
    return Value(target, tuple(promote(item, element_type) for item in items))


def from_literal(text):
    """Value of a NUMBER token; the spelling decides the numeric kind."""
    if '//' in text:
        numerator, denominator = text.split('//')
        return rational(int(numerator), int(denominator))
    if text.endswith('i'):
        return complex_number(0.0, float(text[:-1]))
    if '.' in text:
        return real(float(text))
    return natural(int(text))


# -------- PROMOTION --------
def _to_float(data):
    try:
        return float(data)
    except OverflowError:
        raise VladArithmeticError(f"overflow converting {data} to real") from None

def _convert(data, target):
    if target in (Types.NATURAL, Types.INTEGER):
        return int(data)
    if target == Types.RATIONAL:
        return Fraction(data)
    if target == Types.REAL:
        return _to_float(data)
    if target == Types.COMPLEX:
        if isinstance(data, complex):
            return data
        return complex(_to_float(data), 0.0)
    return data

def promote(value, target):
    if value.type == target:
        return value
    if not Types.is_promotable(value.type, target):
        raise VladTypeError(f"cannot promote {value.type} to {target}")
    if Types.is_list(target):
        inner = Types.element_type(target)
        return Value(target, tuple(promote(item, inner) for item in value.data))
    return Value(target, _convert(value.data, target))


# -------- ARITHMETIC --------
def _truncating_div(a, b):
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q

def _apply(op, target, a, b):
    if op == '+':
        return a + b
    if op == '-':
        result = a - b
        if target == Types.NATURAL and result < 0:
            raise VladArithmeticError(f"natural underflow: {a} - {b} is negative")
        return result
    if op == '*':
        return a * b
    if op == '/':
        if b == 0:
            raise VladArithmeticError("division by zero")
        if target in (Types.NATURAL, Types.INTEGER):
            return _truncating_div(a, b)
        return a / b
    raise VladTypeError(f"unknown arithmetic operator '{op}'")

def _element_or_self(type_name):
    return Types.element_type(type_name) if Types.is_list(type_name) else type_name

def _elementwise(op, left, right):
    inner = Types.join(_element_or_self(left.type), _element_or_self(right.type))
    if inner is None or not Types.is_numeric(inner):
        raise VladTypeError(f"operator '{op}' expects numeric operands, got {left.type} and {right.type}")

    if Types.is_list(left.type) and Types.is_list(right.type):
        if len(left.data) != len(right.data):
            raise VladArithmeticError(f"list length mismatch: {len(left.data)} and {len(right.data)}")
        pairs = zip(left.data, right.data)
    elif Types.is_list(left.type):
        pairs = ((item, right) for item in left.data)
    else:
        pairs = ((left, item) for item in right.data)

    items = [arithmetic(op, a, b) for a, b in pairs]
    return list_value(inner, items)

def arithmetic(op, left, right):
    """Apply ``op`` after promoting both operands to their join type."""
    if Types.is_list(left.type) or Types.is_list(right.type):
        return _elementwise(op, left, right)

    target = Types.join(left.type, right.type)
    if target is None or not Types.is_numeric(target):
        raise VladTypeError(f"operator '{op}' expects numeric operands, got {left.type} and {right.type}")

    a = promote(left, target).data
    b = promote(right, target).data
    try:
        return Value(target, _apply(op, target, a, b))
    except OverflowError:
        raise VladArithmeticError(f"overflow in {target} '{op}'") from None

def negate(value):
    if Types.is_list(value.type):
        inner = Types.negated(Types.element_type(value.type))
        return list_value(inner, [negate(item) for item in value.data])
    if not Types.is_numeric(value.type):
        raise VladTypeError(f"cannot negate a value of type {value.type}")
    return Value(Types.negated(value.type), -value.data)


# -------- COMPARISON & LOGIC --------
def _equal(target, a, b):
    eps = get_real_epsilon()
    if target == Types.REAL:
        return a == b or abs(a - b) < eps
    if target == Types.COMPLEX:
        return a == b or (abs(a.real - b.real) < eps and abs(a.imag - b.imag) < eps)
    return a == b

def compare(op, left, right):
    target = Types.join(left.type, right.type)
    if target is None or Types.is_list(target):
        raise VladTypeError(f"cannot compare {left.type} with {right.type}")

    a = promote(left, target).data
    b = promote(right, target).data
    if op == '=':
        return boolean(_equal(target, a, b))
    if op == '≠':
        return boolean(not _equal(target, a, b))

    if target in (Types.BOOL, Types.COMPLEX):
        raise VladTypeError(f"{target} values are not ordered")
    if op == '<':
        return boolean(a < b)
    if op == '>':
        return boolean(a > b)
    if op == '≤':
        return boolean(a < b or _equal(target, a, b))
    if op == '≥':
        return boolean(a > b or _equal(target, a, b))
    raise VladTypeError(f"unknown comparison operator '{op}'")

def logical(op, operands):
    for operand in operands:
        if operand.type != Types.BOOL:
            raise VladTypeError(f"operator '{op}' expects bool operands, got {operand.type}")
    flags = [operand.data for operand in operands]
    if op == 'NOT':
        return boolean(not flags[0])
    if op == 'AND':
        return boolean(flags[0] and flags[1])
    if op == 'OR':
        return boolean(flags[0] or flags[1])
    if op == 'XOR':
        return boolean(flags[0] != flags[1])
    raise VladTypeError(f"unknown logical operator '{op}'")


# -------- RENDERING --------
def render_real(x, precision=None):
    if precision is None:
        precision = get_real_precision()
    if math.isnan(x):
        return 'nan'
    if math.isinf(x):
        return 'inf' if x > 0 else '-inf'
    text = f"{x:.{precision}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text

def render(value, precision=None):
    type_name = value.type
    if Types.is_list(type_name):
        return '[' + ', '.join(render(item, precision) for item in value.data) + ']'
    if type_name == Types.BOOL:
        return 'true' if value.data else 'false'
    if type_name in (Types.NATURAL, Types.INTEGER):
        return str(value.data)
    if type_name == Types.RATIONAL:
        return f"{value.data.numerator} / {value.data.denominator}"
    if type_name == Types.REAL:
        return render_real(value.data, precision)
    if type_name == Types.COMPLEX:
        re, im = value.data.real, value.data.imag
        sign = '-' if im < 0 else '+'
        return f"{render_real(re, precision)} {sign} {render_real(abs(im), precision)}i"
    return repr(value.data)
