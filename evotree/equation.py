"""
evotree/equation.py - Equation language for symbolic regression, an example Node type
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .errors import ContractViolationError
from .tree import Node


class EquationOp(Enum):
    ADD = ('add', 2)
    SUB = ('sub', 2)
    MUL = ('mul', 2)
    DIV = ('div', 2)
    NEG = ('neg', 1)
    SIN = ('sin', 1)
    COS = ('cos', 1)
    INT = ('int', 0)
    INPUT = ('input', 0)

    def __init__(self, label: str, arity: int):
        self.label = label
        self.arity = arity

    @classmethod
    def from_label(cls, label: str) -> 'EquationOp':
        for op in cls:
            if op.label == label:
                return op
        raise ValueError(f"Unknown equation op: {label}")


# Primitive sets for random generation
BRANCH_OPS = [op for op in EquationOp if op.arity > 0]
LEAF_OPS = [op for op in EquationOp if op.arity == 0]
INT_RANGE = (-1, 1)


def protected_div(numerator, denominator):
    """Division that yields 1.0 wherever the quotient is not finite"""
    with np.errstate(divide='ignore', invalid='ignore'):
        result = np.true_divide(numerator, denominator)
    return np.where(np.isfinite(result), result, 1.0)


class Equation(Node):
    """A node of an arithmetic expression over a single input ``x``"""

    def __init__(self, op: EquationOp, children: Sequence['Equation'] = (),
                 value: Optional[int] = None):
        if len(children) != op.arity:
            raise ContractViolationError(
                f"{op.label} takes {op.arity} children, got {len(children)}"
            )
        self.op = op
        self._children = list(children)
        self.value = value if op is EquationOp.INT else None
        if op is EquationOp.INT and self.value is None:
            self.value = 0

    # Convenience constructors used by tests and the CLI

    @classmethod
    def const(cls, value: int) -> 'Equation':
        return cls(EquationOp.INT, value=value)

    @classmethod
    def var(cls) -> 'Equation':
        return cls(EquationOp.INPUT)

    @classmethod
    def generate_branch(cls, tree_gen, depth: int) -> 'Equation':
        op = tree_gen.choice(BRANCH_OPS)
        children = [cls.generate_node(tree_gen, depth + 1) for _ in range(op.arity)]
        return cls(op, children)

    @classmethod
    def generate_leaf(cls, tree_gen, depth: int) -> 'Equation':
        if tree_gen.choice(LEAF_OPS) is EquationOp.INT:
            return cls.const(tree_gen.randint(*INT_RANGE))
        return cls.var()

    def child_count(self) -> int:
        return self.op.arity

    def children(self) -> List['Equation']:
        return list(self._children)

    def set_child(self, index: int, child: Node) -> None:
        self._children[index] = child

    def evaluate(self, x):
        """Evaluate with ``x`` bound to a scalar or numpy array"""
        op = self.op
        if op is EquationOp.INT:
            return np.full_like(np.asarray(x, dtype=float), float(self.value))
        if op is EquationOp.INPUT:
            return np.asarray(x, dtype=float)

        values = [child.evaluate(x) for child in self._children]
        with np.errstate(over='ignore', invalid='ignore'):
            if op is EquationOp.ADD:
                return values[0] + values[1]
            elif op is EquationOp.SUB:
                return values[0] - values[1]
            elif op is EquationOp.MUL:
                return values[0] * values[1]
            elif op is EquationOp.DIV:
                return protected_div(values[0], values[1])
            elif op is EquationOp.NEG:
                return -values[0]
            elif op is EquationOp.SIN:
                return np.sin(values[0])
            elif op is EquationOp.COS:
                return np.cos(values[0])
        raise ContractViolationError(f"No evaluation rule for {op.label}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        data = {'op': self.op.label}
        if self.op is EquationOp.INT:
            data['value'] = self.value
        if self._children:
            data['children'] = [child.to_dict() for child in self._children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Equation':
        """Deserialize from dictionary"""
        op = EquationOp.from_label(data['op'])
        children = [cls.from_dict(child) for child in data.get('children', [])]
        return cls(op, children, data.get('value'))

    def __eq__(self, other):
        if not isinstance(other, Equation):
            return NotImplemented
        return (self.op, self.value, self._children) == (other.op, other.value, other._children)

    __hash__ = None

    def __repr__(self):
        if self.op is EquationOp.INT:
            return f"Int({self.value})"
        if self.op is EquationOp.INPUT:
            return "Input"
        args = ', '.join(repr(child) for child in self._children)
        return f"{self.op.name.capitalize()}({args})"

    def __str__(self):
        op = self.op
        if op is EquationOp.INT:
            return f"({self.value})"
        if op is EquationOp.INPUT:
            return "x"
        if op is EquationOp.NEG:
            return f"-{self._children[0]}"
        if op in (EquationOp.SIN, EquationOp.COS):
            return f"{op.label}({self._children[0]})"
        left, right = self._children
        if op is EquationOp.ADD:
            return f"{left} + {right}"
        if op is EquationOp.SUB:
            return f"{left} - {right}"
        if op is EquationOp.MUL:
            return f"({left}) * ({right})"
        return f"({left}) / ({right})"
