
class ASTNode:
    # type_name is filled in by the semantic checker
    def __init__(self, position=None):
        self.position = position
        self.type_name = None

class FunctionNode(ASTNode):
    def __init__(self, name, params, return_type, body, position=None):
        super().__init__(position)
        self.name = name
        self.params = params
        self.return_type = return_type
        self.body = body
        self.checked = False

    @property
    def param_types(self):
        return [ptype for _, ptype in self.params]

class FunctionCallNode(ASTNode):
    def __init__(self, name, args, position=None):
        super().__init__(position)
        self.name = name
        self.args = args

class NumberLiteral(ASTNode):
    def __init__(self, text, value, position=None):
        super().__init__(position)
        self.text = text
        self.value = value
        self.literal_type = value.type

class BoolLiteral(ASTNode):
    def __init__(self, value, position=None):
        super().__init__(position)
        self.value = value

class ListLiteral(ASTNode):
    def __init__(self, elements, position=None):
        super().__init__(position)
        self.elements = elements

class Variable(ASTNode):
    def __init__(self, name, position=None):
        super().__init__(position)
        self.name = name

class UnaryOperation(ASTNode):
    def __init__(self, op, operand, position=None):
        super().__init__(position)
        self.op = op
        self.operand = operand

class BinaryOperation(ASTNode):
    def __init__(self, left, op, right, position=None):
        super().__init__(position)
        self.left = left
        self.right = right
        self.op = op

class Comparison(ASTNode):
    def __init__(self, left, op, right, position=None):
        super().__init__(position)
        self.left = left
        self.right = right
        self.op = op

class CompoundCondition(ASTNode):
    """AND, OR and XOR hold two operands, NOT holds one."""
    def __init__(self, op, operands, position=None):
        super().__init__(position)
        self.op = op
        self.operands = operands

class ConditionalNode(ASTNode):
    """if/else statement; body and bodyelse are statement lists."""
    def __init__(self, condition, body, bodyelse, position=None):
        super().__init__(position)
        self.condition = condition
        self.body = body
        self.bodyelse = bodyelse
