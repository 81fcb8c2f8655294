class VladError(Exception):
    """ Base class for all Vlad errors"""
    label = "VladError"

    def __init__(self, message, position=None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self):
        return f"{self.label}: {self.message}"


class LexError(VladError):
    """ Raised when the source holds a character no token starts with"""
    label = "LexError"

    def __init__(self, character, position):
        line, column = position
        super().__init__(f"unexpected character {character!r} at line {line}, column {column}", position)
        self.character = character


class ParseError(VladError):
    """ Raised when the token stream does not match the grammar"""
    label = "ParseError"

    def __init__(self, expected, found, position):
        line, column = position
        super().__init__(f"expected {expected}, found {found} at line {line}, column {column}", position)
        self.expected = expected
        self.found = found


class NestingTooDeepError(ParseError):
    """ Raised when the input nests deeper than the interpreter can follow"""

    def __init__(self, position=None):
        message = "nesting too deep"
        if position is not None:
            line, column = position
            message += f" at line {line}, column {column}"
        VladError.__init__(self, message, position)
        self.expected = None
        self.found = None


class VladNameError(VladError):
    """ Raised when a name is used before it is defined, or defined twice"""
    label = "NameError"


class UndefinedFunctionError(VladNameError):
    """ Raised when a call names a function that is neither registered nor built in"""


class VladTypeError(VladError):
    """ Raised when the types or the number of operands are incorrect"""
    label = "TypeError"


class VladArithmeticError(VladError):
    """ Raised on division by zero and other numeric domain faults"""
    label = "ArithmeticError"


class CallDepthError(VladError):
    """ Raised when nested calls exceed the configured depth"""
    label = "RecursionError"
