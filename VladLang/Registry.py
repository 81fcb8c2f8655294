import logging

from .Errors import VladNameError

logger = logging.getLogger(__name__)


def signature(function):
    """Render ``function <name>: (<types>) -> <type>`` for a definition or built-in."""
    types = ', '.join(function.param_types)
    return f"function {function.name}: ({types}) -> {function.return_type}"


class FunctionRegistry:
    """Session-wide table of accepted function definitions."""
    def __init__(self):
        self.functions = {}

    def define(self, node):
        if node.name in self.functions:
            raise VladNameError(f"duplicate definition of function '{node.name}'", node.position)
        self.functions[node.name] = node
        logger.debug("registered %s", signature(node))
        return node

    def lookup(self, name):
        return self.functions.get(name)

    def __contains__(self, name):
        return name in self.functions

    def __len__(self):
        return len(self.functions)
