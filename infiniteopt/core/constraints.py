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

import enum

from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.expr import InfiniteRelation, RelationSense
from infiniteopt.core.parameters import support_points


class ConstraintKind(enum.Enum):
    """The flavor of constraint a :class:`GeneralConstraintRef` refers to"""

    general = 'general'
    lower_bound = 'lower_bound'
    upper_bound = 'upper_bound'
    fix = 'fix'

    def __str__(self):
        return self.value


_bound_sense = {
    ConstraintKind.lower_bound: RelationSense.geq,
    ConstraintKind.upper_bound: RelationSense.leq,
    ConstraintKind.fix: RelationSense.eq,
}


class GeneralConstraintRef(object):
    """A reference to a constraint of an InfiniteModel

    General constraints are declared with
    :meth:`InfiniteModel.add_constraint`.  The bounds and fix values of a
    variable are also constraints; references to them are returned by
    :func:`LowerBoundRef`, :func:`UpperBoundRef`, and :func:`FixRef`.

    A constraint is infinite when its relation depends on infinite
    parameters (directly or through infinite variables).  It is then
    enforced at every point in :meth:`supports`.
    """

    def __init__(
        self, model, name, relation, kind=ConstraintKind.general, variable=None
    ):
        if not isinstance(relation, InfiniteRelation):
            raise InfiniteModelError(
                "Constraint '%s' expects a relational expression (e.g., "
                "'x + y >= 1'), not %r" % (name, relation)
            )
        self._model = model
        self._name = name
        self._relation = relation
        self._kind = ConstraintKind(kind)
        self._variable = variable

    @classmethod
    def _for_bound(cls, variable, kind, value):
        name = '%s_%s' % (variable.name, kind)
        relation = InfiniteRelation(variable, value, _bound_sense[kind])
        return cls(variable.model, name, relation, kind=kind, variable=variable)

    def _update_bound(self, value):
        self._relation = InfiniteRelation(
            self._variable, value, _bound_sense[self._kind]
        )

    @property
    def model(self):
        return self._model

    @property
    def name(self):
        return self._name

    @property
    def kind(self):
        return self._kind

    @property
    def relation(self):
        return self._relation

    @property
    def variable(self):
        """The variable whose bound this constraint is (None for general
        constraints)"""
        return self._variable

    def is_bound_constraint(self):
        return self._kind is not ConstraintKind.general

    @property
    def parameter_refs(self):
        if self._variable is not None:
            return self._variable.parameter_refs
        return self._model._order_parameters(self._relation.parameter_refs)

    def is_infinite(self):
        return bool(self.parameter_refs)

    def supports(self):
        return support_points(self.parameter_refs)

    def __str__(self):
        return '%s : %s' % (self._name, self._relation)

    __repr__ = __str__
