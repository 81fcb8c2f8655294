"""
The Vlad type tower.

Types are kept as their canonical spelling: the scalar names below, or
``list<T>`` for a list whose elements have scalar type ``T``.

    natural < integer < rational < real < complex

``bool`` sits outside the numeric order and never promotes either way.
"""

NATURAL = 'natural'
INTEGER = 'integer'
RATIONAL = 'rational'
REAL = 'real'
COMPLEX = 'complex'
BOOL = 'bool'

NUMERIC_TYPES = (NATURAL, INTEGER, RATIONAL, REAL, COMPLEX)
SCALAR_TYPES = NUMERIC_TYPES + (BOOL,)

LIST_PREFIX = 'list<'


def list_of(element_type):
    return f"{LIST_PREFIX}{element_type}>"


def is_list(type_name):
    return type_name.startswith(LIST_PREFIX) and type_name.endswith('>')


def element_type(type_name):
    if not is_list(type_name):
        raise ValueError(f"'{type_name}' is not a list type")
    return type_name[len(LIST_PREFIX):-1]


def is_numeric(type_name):
    return type_name in NUMERIC_TYPES


def is_numeric_list(type_name):
    return is_list(type_name) and is_numeric(element_type(type_name))


def is_valid(type_name):
    if is_list(type_name):
        return element_type(type_name) in SCALAR_TYPES
    return type_name in SCALAR_TYPES


def rank(type_name):
    return NUMERIC_TYPES.index(type_name)


def join(left, right):
    """Least type both operands promote to, or None when there is none."""
    if left == right:
        return left
    if is_numeric(left) and is_numeric(right):
        return left if rank(left) >= rank(right) else right
    if is_list(left) and is_list(right):
        inner = join(element_type(left), element_type(right))
        return list_of(inner) if inner is not None else None
    return None


def is_promotable(source, target):
    if source == target:
        return True
    if is_numeric(source) and is_numeric(target):
        return rank(source) <= rank(target)
    if is_list(source) and is_list(target):
        return is_promotable(element_type(source), element_type(target))
    return False


def negated(type_name):
    """Type of ``-x``: negating a natural leaves the naturals."""
    if type_name == NATURAL:
        return INTEGER
    if is_list(type_name):
        return list_of(negated(element_type(type_name)))
    return type_name
