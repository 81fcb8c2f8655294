import math

from . import Numbers, Types
from .Errors import VladArithmeticError


class Builtin:
    """Native function callable like a user definition."""
    def __init__(self, name, params, return_type, function):
        self.name = name
        self.params = params
        self.return_type = return_type
        self.function = function

    @property
    def param_types(self):
        return [ptype for _, ptype in self.params]

    def __call__(self, args):
        return self.function(*args)


DOMAIN_ERRORS = {
    'sqrt': "square root of a negative value",
    'ln': "logarithm of a non-positive value",
}


def _real_function(name, fn):
    def evaluate(x):
        try:
            return Numbers.real(fn(x.data))
        except OverflowError:
            raise VladArithmeticError(f"overflow in {name}({Numbers.render_real(x.data)})") from None
        except ValueError:
            message = DOMAIN_ERRORS.get(name, f"{name} is undefined")
            raise VladArithmeticError(f"{message}: {name}({Numbers.render_real(x.data)})") from None
    return Builtin(name, [('x', Types.REAL)], Types.REAL, evaluate)


def _re(z):
    return Numbers.real(z.data.real)

def _im(z):
    return Numbers.real(z.data.imag)

def _conj(z):
    return Numbers.Value(Types.COMPLEX, z.data.conjugate())

def _len(items):
    return Numbers.natural(len(items.data))


BUILTINS = {builtin.name: builtin for builtin in (
    _real_function('cos', math.cos),
    _real_function('sin', math.sin),
    _real_function('tan', math.tan),
    _real_function('sqrt', math.sqrt),
    _real_function('abs', math.fabs),
    _real_function('exp', math.exp),
    _real_function('ln', math.log),
    Builtin('re', [('z', Types.COMPLEX)], Types.REAL, _re),
    Builtin('im', [('z', Types.COMPLEX)], Types.REAL, _im),
    Builtin('conj', [('z', Types.COMPLEX)], Types.COMPLEX, _conj),
    Builtin('len', [('items', Types.list_of(Types.COMPLEX))], Types.NATURAL, _len),
)}
