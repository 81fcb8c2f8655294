from .Errors import VladError
from .Registry import FunctionRegistry
from .Session import Session
