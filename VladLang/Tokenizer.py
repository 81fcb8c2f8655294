from collections import namedtuple

import ply.lex as lex

from .Errors import LexError

reserved = {
   'fn' : 'FN',
   'if' : 'IF',
   'else' : 'ELSE',
   'true' : 'TRUE',
   'false' : 'FALSE',
   'and' : 'AND',
   'or' : 'OR',
   'xor' : 'XOR',
   'not' : 'NOT',
}

tokens = [
   'NUMBER',
   'ID',
   'PLUS',
   'MINUS',
   'TIMES',
   'DIVIDE',
   'EQUAL',
   'NEQUAL',
   'LESS',
   'GREATER',
   'LEQUAL',
   'GEQUAL',
   'LPAREN',
   'RPAREN',
   'LSQUAREBR',
   'RSQUAREBR',
   'BEGIN',
   'END',
   'COMMA',
   'COLON',
   'SEMI_COLON',
   'ARROW',
] + list(reserved.values())


t_EQUAL = r'==|='
t_NEQUAL = r'!=|≠'
t_LEQUAL = r'<=|≤'
t_GEQUAL = r'>=|≥'
t_LESS = r'<'
t_GREATER = r'>'
t_AND = r'&'
t_OR = r'\|'
t_XOR = r'\^'
t_NOT = r'!'
t_PLUS    = r'\+'
t_TIMES   = r'\*'
t_DIVIDE  = r'/'
t_MINUS   = r'-'
t_ARROW = r'->'
t_LPAREN  = r'\('
t_RPAREN  = r'\)'
t_LSQUAREBR = r'\['
t_RSQUAREBR = r'\]'
t_BEGIN = r'{'
t_END = r'}'
t_COMMA = r','
t_COLON = r':'
t_SEMI_COLON = r';'

t_ignore  = ' \t\r'
t_ignore_COMMENT = r'\#.*'


def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)

# 2//3 is a rational literal, 3i and 2.5i are imaginary literals
def t_NUMBER(t):
    r'\d+//\d+|\d+(?:\.\d+)?i(?![A-Za-z0-9_])|\d+(?:\.\d+)?'
    return t

def t_ID(t):
    r'[a-zA-Z_][a-zA-Z_0-9]*'
    t.type = reserved.get(t.value,'ID')
    return t

def t_error(t):
    raise LexError(t.value[0], (t.lexer.lineno, find_column(t.lexer.lexdata, t)))


def find_column(input, token):
    line_start = input.rfind('\n', 0, token.lexpos) + 1
    return (token.lexpos - line_start) + 1


class Token(namedtuple('Token', ['kind', 'value', 'line', 'column'])):
    __slots__ = ()

    @property
    def position(self):
        return (self.line, self.column)


_lexer = lex.lex()


def tokenize(text):
    lexer = _lexer.clone()
    lexer.lineno = 1
    lexer.input(text)
    return [Token(tok.type, tok.value, tok.lineno, find_column(text, tok)) for tok in lexer]
