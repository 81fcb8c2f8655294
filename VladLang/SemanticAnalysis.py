import logging

from . import Types
from .AST import *
from .Builtins import BUILTINS
from .Errors import NestingTooDeepError, UndefinedFunctionError, VladNameError, VladTypeError
from .Registry import signature

logger = logging.getLogger(__name__)


def where(node):
    if node is None or node.position is None:
        return ""
    line, column = node.position
    return f" at line {line}, column {column}"


class SemanticChecker:
    """
    Static checks for one unit against the registry and the built-ins.

    Every visited node gets its verified type stored in ``type_name``; the
    registry itself is never touched.
    """
    def __init__(self, registry, builtins=BUILTINS):
        self.registry = registry
        self.builtins = builtins
        self.symbol_table = {}
        self.current_function = None

    def error(self, msg, node=None, kind=VladTypeError):
        suffix = ""
        if self.current_function:
            suffix = f" in function '{self.current_function.name}'"
        raise kind(f"{msg}{suffix}{where(node)}", node.position if node is not None else None)

    def resolve(self, name):
        if self.current_function is not None and name == self.current_function.name:
            return self.current_function
        function = self.registry.lookup(name)
        if function is None:
            function = self.builtins.get(name)
        return function

    # -------- UNITS --------
    def check(self, unit):
        try:
            if isinstance(unit, FunctionNode):
                return self.check_function(unit)
            self.symbol_table = {}
            self.current_function = None
            return self.visit(unit)
        except RecursionError:
            raise NestingTooDeepError(unit.position) from None

    def check_function(self, node):
        prev_vars = self.symbol_table
        self.symbol_table = {}
        self.current_function = node
        try:
            for pname, ptype in node.params:
                if pname in self.symbol_table:
                    self.error(f"duplicate argument name '{pname}'", node, VladNameError)
                if not Types.is_valid(ptype):
                    self.error(f"unknown type '{ptype}' for argument '{pname}'", node)
                self.symbol_table[pname] = ptype
            if not Types.is_valid(node.return_type):
                self.error(f"unknown return type '{node.return_type}'", node)

            body_type = self.visit_block(node.body)
            if not Types.is_promotable(body_type, node.return_type):
                self.error(f"return type mismatch: expected {node.return_type}, got {body_type}", node)
            node.type_name = node.return_type
            node.checked = True
        finally:
            self.symbol_table = prev_vars
            self.current_function = None

        logger.debug("checked %s", signature(node))
        return node

    # -------- NODES --------
    def visit(self, node):
        type_name = self._get_type(node)
        node.type_name = type_name
        return type_name

    def visit_block(self, statements):
        if not statements:
            self.error("empty statement list")
        types = [self.visit(statement) for statement in statements]
        return types[-1]

    def _get_type(self, node):
        if isinstance(node, NumberLiteral):
            return node.literal_type

        if isinstance(node, BoolLiteral):
            return Types.BOOL

        if isinstance(node, ListLiteral):
            return self._list_type(node)

        if isinstance(node, Variable):
            if node.name not in self.symbol_table:
                self.error(f"undefined variable '{node.name}'", node, VladNameError)
            return self.symbol_table[node.name]

        if isinstance(node, UnaryOperation):
            operand = self.visit(node.operand)
            if not (Types.is_numeric(operand) or Types.is_numeric_list(operand)):
                self.error(f"operator '{node.op}' expects a numeric operand, got {operand}", node)
            return Types.negated(operand) if node.op == '-' else operand

        if isinstance(node, BinaryOperation):
            left = self.visit(node.left)
            right = self.visit(node.right)
            return self._arithmetic_type(node, left, right)

        if isinstance(node, Comparison):
            left = self.visit(node.left)
            right = self.visit(node.right)
            joined = Types.join(left, right)
            if joined is None or Types.is_list(joined):
                self.error(f"cannot compare {left} with {right}", node)
            if joined in (Types.BOOL, Types.COMPLEX) and node.op not in ('=', '≠'):
                self.error(f"operator '{node.op}' is not defined for {joined}", node)
            return Types.BOOL

        if isinstance(node, CompoundCondition):
            for operand in node.operands:
                operand_type = self.visit(operand)
                if operand_type != Types.BOOL:
                    self.error(f"operator '{node.op}' expects bool operands, got {operand_type}", operand)
            return Types.BOOL

        if isinstance(node, ConditionalNode):
            cond_type = self.visit(node.condition)
            if cond_type != Types.BOOL:
                self.error(f"condition must be bool, got {cond_type}", node.condition)
            body_type = self.visit_block(node.body)
            bodyelse_type = self.visit_block(node.bodyelse)
            joined = Types.join(body_type, bodyelse_type)
            if joined is None or joined not in (body_type, bodyelse_type):
                self.error(f"branch type mismatch: if-branch yields {body_type}, else-branch yields {bodyelse_type}", node)
            return joined

        if isinstance(node, FunctionCallNode):
            return self._call_type(node)

        self.error(f"unexpected node {type(node).__name__}", node)

    def _list_type(self, node):
        if not node.elements:
            return Types.list_of(Types.NATURAL)
        inner = None
        for element in node.elements:
            element_type = self.visit(element)
            if Types.is_list(element_type):
                self.error("lists cannot be nested", element)
            joined = element_type if inner is None else Types.join(inner, element_type)
            if joined is None:
                self.error(f"list elements must share a type, got {inner} and {element_type}", element)
            inner = joined
        return Types.list_of(inner)

    def _arithmetic_type(self, node, left, right):
        left_inner = Types.element_type(left) if Types.is_list(left) else left
        right_inner = Types.element_type(right) if Types.is_list(right) else right
        if not (Types.is_numeric(left_inner) and Types.is_numeric(right_inner)):
            self.error(f"operator '{node.op}' expects numeric operands, got {left} and {right}", node)
        joined = Types.join(left_inner, right_inner)
        if Types.is_list(left) or Types.is_list(right):
            return Types.list_of(joined)
        return joined

    def _call_type(self, node):
        target = self.resolve(node.name)
        if target is None:
            self.error(f"undefined function '{node.name}'", node, UndefinedFunctionError)

        expected_params = target.params
        if len(expected_params) != len(node.args):
            self.error(f"arity mismatch: '{node.name}' takes {len(expected_params)} arguments, got {len(node.args)}", node)
        for i, ((pname, expt), arg) in enumerate(zip(expected_params, node.args)):
            argtype = self.visit(arg)
            if not Types.is_promotable(argtype, expt):
                self.error(f"argument type mismatch: argument {i+1} of '{node.name}' expects {expt}, got {argtype}", arg)
        return target.return_type
