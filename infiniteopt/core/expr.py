#  ___________________________________________________________________________
#
#  Pyomo: Python Optimization Modeling Objects
#  Copyright (c) 2008-2025
#  National Technology and Engineering Solutions of Sandia, LLC
#  Under the terms of Contract DE-NA0003525 with National Technology and
#  Engineering Solutions of Sandia, LLC, the U.S. Government retains certain
#  rights in this software.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Expression trees over infinite-model references.

Variable references, infinite parameters and the nodes built from them
all derive from :class:`ExpressionBase`, which overloads the arithmetic
and relational operators.  Expressions are not simplified: the tree is
kept as written so that it can be re-evaluated once per support point by
a transformation backend (see :func:`evaluate`).
"""

import enum
import operator

from pyomo.common.collections import ComponentSet
from pyomo.common.numeric_types import native_numeric_types

from infiniteopt.common.errors import InfiniteModelError

_op_symbol = {
    operator.add: '+',
    operator.sub: '-',
    operator.mul: '*',
    operator.truediv: '/',
    operator.pow: '**',
    operator.neg: '-',
}


def _is_operand(obj):
    return obj.__class__ in native_numeric_types or isinstance(obj, ExpressionBase)


class ExpressionBase(object):
    """Base class for everything that can appear in an infinite-model
    expression."""

    __slots__ = ()

    # Relational operators return InfiniteRelation objects, so hashing
    # has to fall back on identity (as with Pyomo components).
    __hash__ = object.__hash__

    def is_variable_type(self):
        return False

    def is_parameter_type(self):
        return False

    def is_expression_type(self):
        return False

    @property
    def parameter_refs(self):
        return ()

    def _binary(self, op, other, reverse=False):
        if not _is_operand(other):
            return NotImplemented
        if reverse:
            return ExpressionNode(op, (other, self))
        return ExpressionNode(op, (self, other))

    def __add__(self, other):
        return self._binary(operator.add, other)

    def __radd__(self, other):
        return self._binary(operator.add, other, reverse=True)

    def __sub__(self, other):
        return self._binary(operator.sub, other)

    def __rsub__(self, other):
        return self._binary(operator.sub, other, reverse=True)

    def __mul__(self, other):
        return self._binary(operator.mul, other)

    def __rmul__(self, other):
        return self._binary(operator.mul, other, reverse=True)

    def __truediv__(self, other):
        return self._binary(operator.truediv, other)

    def __rtruediv__(self, other):
        return self._binary(operator.truediv, other, reverse=True)

    def __pow__(self, other):
        return self._binary(operator.pow, other)

    def __rpow__(self, other):
        return self._binary(operator.pow, other, reverse=True)

    def __neg__(self):
        return ExpressionNode(operator.neg, (self,))

    def __pos__(self):
        return self

    def __le__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return InfiniteRelation(self, other, RelationSense.leq)

    def __ge__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return InfiniteRelation(self, other, RelationSense.geq)

    def __eq__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return InfiniteRelation(self, other, RelationSense.eq)


class ExpressionNode(ExpressionBase):
    """An operator applied to a tuple of operands"""

    __slots__ = ('op', 'args')

    def __init__(self, op, args):
        self.op = op
        self.args = tuple(args)

    def is_expression_type(self):
        return True

    @property
    def parameter_refs(self):
        return expression_parameters(self)

    def __str__(self):
        symbol = _op_symbol.get(self.op, getattr(self.op, '__name__', '?'))
        if len(self.args) == 1:
            return '%s%s' % (symbol, _arg_to_string(self.args[0]))
        return (' %s ' % symbol).join(_arg_to_string(arg) for arg in self.args)

    __repr__ = __str__


def _arg_to_string(arg):
    if isinstance(arg, ExpressionNode):
        return '(%s)' % (arg,)
    return str(arg)


class RelationSense(enum.Enum):
    leq = '<='
    geq = '>='
    eq = '=='

    def __str__(self):
        return self.value


_relation_op = {
    RelationSense.leq: operator.le,
    RelationSense.geq: operator.ge,
    RelationSense.eq: operator.eq,
}


class InfiniteRelation(object):
    """A relational expression ``lhs <sense> rhs``

    Relations are what :meth:`InfiniteModel.add_constraint` accepts.  Like
    Pyomo's relational expressions they cannot be converted to bool.
    """

    __slots__ = ('lhs', 'rhs', 'sense')

    def __init__(self, lhs, rhs, sense):
        self.lhs = lhs
        self.rhs = rhs
        self.sense = RelationSense(sense)

    def __bool__(self):
        raise InfiniteModelError(
            "Cannot convert the relational expression '%s' to bool.  "
            "Relations over infinite-model references are not evaluated "
            "until they are transcribed." % (self,)
        )

    @property
    def parameter_refs(self):
        return expression_parameters(self)

    def __str__(self):
        return '%s %s %s' % (
            _arg_to_string(self.lhs),
            self.sense,
            _arg_to_string(self.rhs),
        )

    __repr__ = __str__


def iterate_leaves(expr):
    """Yield the non-numeric leaves of an expression or relation (in
    depth-first, left-to-right order)"""
    if isinstance(expr, InfiniteRelation):
        stack = [expr.rhs, expr.lhs]
    else:
        stack = [expr]
    while stack:
        node = stack.pop()
        if node.__class__ in native_numeric_types:
            continue
        if isinstance(node, ExpressionNode):
            stack.extend(reversed(node.args))
        else:
            yield node


def expression_variables(expr):
    """Return the unique variable references in `expr` (in first-seen order)"""
    seen = ComponentSet()
    for leaf in iterate_leaves(expr):
        if leaf.is_variable_type():
            seen.add(leaf)
    return list(seen)


def expression_parameters(expr):
    """Return the unique infinite parameters `expr` depends on, either
    directly or through infinite variables (in first-seen order)"""
    seen = ComponentSet()
    for leaf in iterate_leaves(expr):
        for param in leaf.parameter_refs:
            seen.add(param)
    return tuple(seen)


def evaluate(expr, substitute):
    """Rebuild `expr` with every leaf replaced by ``substitute(leaf)``

    The operators stored on each node are re-applied to the substituted
    operands, so substituting Pyomo VarData objects yields a Pyomo
    expression and substituting numbers yields a number.  Relations are
    rebuilt with the corresponding Python relational operator.
    """
    if isinstance(expr, InfiniteRelation):
        return _relation_op[expr.sense](
            evaluate(expr.lhs, substitute), evaluate(expr.rhs, substitute)
        )
    if expr.__class__ in native_numeric_types:
        return expr
    if isinstance(expr, ExpressionNode):
        return expr.op(*[evaluate(arg, substitute) for arg in expr.args])
    return substitute(expr)
