from . import Types
from .AST import *
from .Errors import NestingTooDeepError, ParseError
from .Numbers import from_literal
from .Tokenizer import Token, tokenize

ADDITIVE_OPS = {'PLUS': '+', 'MINUS': '-'}
MULTIPLICATIVE_OPS = {'TIMES': '*', 'DIVIDE': '/'}
COMPARISON_OPS = {
    'EQUAL': '=',
    'NEQUAL': '≠',
    'LESS': '<',
    'GREATER': '>',
    'LEQUAL': '≤',
    'GEQUAL': '≥',
}
LOGICAL_OPS = ('AND', 'OR', 'XOR')

KIND_NAMES = {
    'FN': "'fn'",
    'IF': "'if'",
    'ELSE': "'else'",
    'ID': 'identifier',
    'LPAREN': "'('",
    'RPAREN': "')'",
    'LSQUAREBR': "'['",
    'RSQUAREBR': "']'",
    'BEGIN': "'{'",
    'END': "'}'",
    'COMMA': "','",
    'COLON': "':'",
    'ARROW': "'->'",
    'LESS': "'<'",
    'GREATER': "'>'",
    'EOF': 'end of input',
}


def describe(token):
    if token.kind == 'EOF':
        return 'end of input'
    return repr(token.value)


class Parser:
    """
    Recursive-descent parser over the token list of one unit.

    A unit is either a function definition or a single statement; anything
    left over after it is an error.
    """
    def __init__(self, tokens):
        self.tokens = list(tokens)
        if self.tokens:
            last = self.tokens[-1]
            end = (last.line, last.column + len(str(last.value)))
        else:
            end = (1, 1)
        self.tokens.append(Token('EOF', None, *end))
        self.pos = 0

    def current(self):
        return self.tokens[self.pos]

    def error(self, expected):
        token = self.current()
        raise ParseError(expected, describe(token), token.position)

    def eat(self, kind, expected=None):
        token = self.current()
        if token.kind != kind:
            self.error(expected or KIND_NAMES.get(kind, kind))
        self.pos += 1
        return token

    # -------- UNITS --------
    def parse(self):
        if self.current().kind == 'FN':
            node = self.function()
        else:
            node = self.statement()
        if self.current().kind == 'SEMI_COLON':
            self.eat('SEMI_COLON')
        self.eat('EOF')
        return node

    def function(self):
        start = self.eat('FN')
        name = self.eat('ID', 'function name').value
        self.eat('LPAREN')
        params = []
        if self.current().kind != 'RPAREN':
            params.append(self.param())
            while self.current().kind == 'COMMA':
                self.eat('COMMA')
                params.append(self.param())
        self.eat('RPAREN', "',' or ')'")
        self.eat('ARROW')
        return_type = self.type_spec()
        body = self.block()
        return FunctionNode(name, params, return_type, body, start.position)

    def param(self):
        name = self.eat('ID', 'argument name').value
        self.eat('COLON')
        return (name, self.type_spec())

    def type_spec(self):
        token = self.current()
        if token.kind != 'ID' or (token.value != 'list' and token.value not in Types.SCALAR_TYPES):
            self.error('type')
        self.eat('ID')
        if token.value != 'list':
            return token.value

        self.eat('LESS')
        inner = self.current()
        if inner.kind != 'ID' or inner.value not in Types.SCALAR_TYPES:
            self.error('list element type')
        self.eat('ID')
        self.eat('GREATER')
        return Types.list_of(inner.value)

    # -------- STATEMENTS --------
    def block(self):
        self.eat('BEGIN')
        statements = self.statement_list()
        self.eat('END')
        return statements

    def statement_list(self):
        statements = [self.statement()]
        while True:
            kind = self.current().kind
            if kind == 'SEMI_COLON':
                self.eat('SEMI_COLON')
                if self.current().kind == 'END':
                    break
                statements.append(self.statement())
            elif kind == 'END':
                break
            elif isinstance(statements[-1], ConditionalNode):
                statements.append(self.statement())
            else:
                self.error("';' or '}'")
        return statements

    def statement(self):
        if self.current().kind == 'IF':
            return self.conditional_statement()
        return self.compound_condition()

    def conditional_statement(self):
        start = self.eat('IF')
        condition = self.compound_condition()
        body = self.block()
        self.eat('ELSE')
        if self.current().kind == 'IF':
            bodyelse = [self.conditional_statement()]
        else:
            bodyelse = self.block()
        return ConditionalNode(condition, body, bodyelse, start.position)

    # -------- CONDITIONS --------
    def compound_condition(self):
        node = self.condition()
        while self.current().kind in LOGICAL_OPS:
            op = self.eat(self.current().kind)
            node = CompoundCondition(op.kind, [node, self.condition()], op.position)
        return node

    def condition(self):
        token = self.current()
        if token.kind == 'NOT':
            self.eat('NOT')
            return CompoundCondition('NOT', [self.condition()], token.position)
        return self.simple_condition()

    def simple_condition(self):
        node = self.expression()
        op = self.current()
        if op.kind in COMPARISON_OPS:
            self.eat(op.kind)
            node = Comparison(node, COMPARISON_OPS[op.kind], self.expression(), op.position)
        return node

    # -------- EXPRESSIONS --------
    def expression(self):
        node = self.term()
        while self.current().kind in ADDITIVE_OPS:
            op = self.eat(self.current().kind)
            node = BinaryOperation(node, ADDITIVE_OPS[op.kind], self.term(), op.position)
        return node

    def term(self):
        node = self.factor()
        while self.current().kind in MULTIPLICATIVE_OPS:
            op = self.eat(self.current().kind)
            node = BinaryOperation(node, MULTIPLICATIVE_OPS[op.kind], self.factor(), op.position)
        return node

    def factor(self):
        token = self.current()
        kind = token.kind

        if kind in ADDITIVE_OPS:
            self.eat(kind)
            return UnaryOperation(ADDITIVE_OPS[kind], self.factor(), token.position)
        if kind == 'NUMBER':
            self.eat(kind)
            return NumberLiteral(token.value, from_literal(token.value), token.position)
        if kind in ('TRUE', 'FALSE'):
            self.eat(kind)
            return BoolLiteral(kind == 'TRUE', token.position)
        if kind == 'ID':
            self.eat(kind)
            if self.current().kind == 'LPAREN':
                args = self.items('LPAREN', 'RPAREN')
                return FunctionCallNode(token.value, args, token.position)
            return Variable(token.value, token.position)
        if kind == 'LPAREN':
            self.eat(kind)
            node = self.compound_condition()
            self.eat('RPAREN')
            return node
        if kind == 'LSQUAREBR':
            return ListLiteral(self.items('LSQUAREBR', 'RSQUAREBR'), token.position)

        self.error('expression')

    def items(self, opening, closing):
        self.eat(opening)
        items = []
        if self.current().kind != closing:
            items.append(self.compound_condition())
            while self.current().kind == 'COMMA':
                self.eat('COMMA')
                items.append(self.compound_condition())
        self.eat(closing, f"',' or {KIND_NAMES[closing]}")
        return items


def parse(tokens):
    parser = Parser(tokens)
    try:
        return parser.parse()
    except RecursionError:
        raise NestingTooDeepError(parser.current().position) from None

def parse_text(text):
    return parse(tokenize(text))
