import logging
import sys
from functools import reduce

from . import Numbers, Types
from .AST import *
from .Builtins import BUILTINS, Builtin
from .Config import get_max_call_depth
from .Errors import CallDepthError, VladNameError, VladTypeError
from .SemanticAnalysis import SemanticChecker

logger = logging.getLogger(__name__)

# upper bound on the Python frames one level of Vlad calls takes
FRAMES_PER_CALL = 16


def reserve_stack(max_depth):
    needed = max_depth * FRAMES_PER_CALL + 1000
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)


class Evaluator:
    """
    Tree-walking interpreter.

    Calls are resolved by name when they happen, registry first and then the
    built-ins, so a body may call its own function or one defined after it.
    A definition accepted before its callees existed is checked on its first
    call. Each call gets a fresh environment mapping parameter names to
    argument values.
    """
    def __init__(self, registry, builtins=BUILTINS, max_depth=None):
        self.registry = registry
        self.builtins = builtins
        self.max_depth = get_max_call_depth() if max_depth is None else max_depth
        self.depth = 0
        self.checker = SemanticChecker(registry, builtins)
        reserve_stack(self.max_depth)

    def resolve(self, name):
        function = self.registry.lookup(name)
        if function is None:
            function = self.builtins.get(name)
        return function

    def evaluate(self, node, env=None):
        if env is None:
            env = {}

        if isinstance(node, list):
            return self.evaluate_block(node, env)

        if isinstance(node, NumberLiteral):
            return node.value

        if isinstance(node, BoolLiteral):
            return Numbers.boolean(node.value)

        if isinstance(node, ListLiteral):
            items = [self.evaluate(element, env) for element in node.elements]
            return Numbers.list_value(self._element_type(node, items), items)

        if isinstance(node, Variable):
            if node.name not in env:
                raise VladNameError(f"undefined variable '{node.name}'", node.position)
            return env[node.name]

        if isinstance(node, UnaryOperation):
            operand = self.evaluate(node.operand, env)
            if node.op == '-':
                return Numbers.negate(operand)
            if not (Types.is_numeric(operand.type) or Types.is_numeric_list(operand.type)):
                raise VladTypeError(f"operator '+' expects a numeric operand, got {operand.type}", node.position)
            return operand

        if isinstance(node, BinaryOperation):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return Numbers.arithmetic(node.op, left, right)

        if isinstance(node, Comparison):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return Numbers.compare(node.op, left, right)

        if isinstance(node, CompoundCondition):
            operands = [self.evaluate(operand, env) for operand in node.operands]
            return Numbers.logical(node.op, operands)

        if isinstance(node, ConditionalNode):
            condition = self.evaluate(node.condition, env)
            if condition.type != Types.BOOL:
                raise VladTypeError(f"condition must be bool, got {condition.type}", node.position)
            branch = node.body if condition.data else node.bodyelse
            value = self.evaluate_block(branch, env)
            if node.type_name is not None:
                value = Numbers.promote(value, node.type_name)
            return value

        if isinstance(node, FunctionCallNode):
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call(node.name, args)

        raise VladTypeError(f"cannot evaluate {type(node).__name__}", getattr(node, 'position', None))

    def evaluate_block(self, statements, env):
        value = None
        for statement in statements:
            value = self.evaluate(statement, env)
        return value

    def _element_type(self, node, items):
        if node.type_name is not None:
            return Types.element_type(node.type_name)
        if not items:
            return Types.NATURAL
        inner = reduce(lambda acc, t: acc and Types.join(acc, t), (item.type for item in items))
        if inner is None or Types.is_list(inner):
            raise VladTypeError("list elements must share a scalar type", node.position)
        return inner

    def call(self, name, args):
        target = self.resolve(name)
        if target is None:
            raise VladNameError(f"undefined function '{name}'")
        if len(args) != len(target.params):
            raise VladTypeError(f"arity mismatch: '{name}' takes {len(target.params)} arguments, got {len(args)}")

        bound = []
        for i, (arg, (pname, ptype)) in enumerate(zip(args, target.params)):
            if not Types.is_promotable(arg.type, ptype):
                raise VladTypeError(f"argument type mismatch: argument {i+1} of '{name}' expects {ptype}, got {arg.type}")
            bound.append(Numbers.promote(arg, ptype))

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("call %s(%s)", name, ', '.join(str(value) for value in bound))

        if isinstance(target, Builtin):
            result = target(bound)
        else:
            if not target.checked:
                logger.debug("checking deferred definition of '%s'", name)
                self.checker.check(target)
            result = self._call_function(target, bound)

        if not Types.is_promotable(result.type, target.return_type):
            raise VladTypeError(f"return type mismatch: '{name}' declares {target.return_type}, got {result.type}")
        return Numbers.promote(result, target.return_type)

    def _call_function(self, function, bound):
        if self.depth >= self.max_depth:
            raise CallDepthError(f"maximum call depth {self.max_depth} exceeded in '{function.name}'")
        env = {pname: value for (pname, _), value in zip(function.params, bound)}
        self.depth += 1
        try:
            return self.evaluate_block(function.body, env)
        except RecursionError:
            raise CallDepthError(f"interpreter stack exhausted in '{function.name}'") from None
        finally:
            self.depth -= 1
