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

from pyomo.common.numeric_types import native_numeric_types
from pyomo.core import Reals

from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.constraints import ConstraintKind, GeneralConstraintRef
from infiniteopt.core.expr import ExpressionBase
from infiniteopt.core.parameters import support_key, support_points


class VariableKind(enum.Enum):
    """The flavor of variable a :class:`GeneralVariableRef` refers to"""

    finite = 'finite'
    infinite = 'infinite'
    point = 'point'

    def __str__(self):
        return self.value


class GeneralVariableRef(ExpressionBase):
    """A reference to a variable of an InfiniteModel

    Three kinds of variables are supported:

    * finite variables hold a single value;
    * infinite variables are functions of one or more infinite
      parameters and hold a value at every support point;
    * point variables are infinite variables evaluated at a fixed point
      of their parameters.  They are obtained by calling the infinite
      variable reference, e.g., ``x(0.0)``.

    References are created through :meth:`InfiniteModel.add_variable`.
    """

    def __init__(
        self,
        model,
        name,
        kind,
        parameter_refs=(),
        domain=Reals,
        initialize=None,
        infinite_variable=None,
        point=None,
    ):
        self._model = model
        self._name = name
        self._kind = VariableKind(kind)
        self._parameter_refs = tuple(parameter_refs)
        self._domain = domain
        self._initialize = initialize
        self._infinite_variable = infinite_variable
        self._point = point
        self._lb = None
        self._ub = None
        self._fixed_value = None
        self._bound_refs = {}

    def is_variable_type(self):
        return True

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
    def domain(self):
        return self._domain

    @property
    def initialize(self):
        return self._initialize

    @property
    def parameter_refs(self):
        if self._kind is VariableKind.infinite:
            return self._parameter_refs
        return ()

    @property
    def infinite_variable(self):
        """The infinite variable a point variable was taken from"""
        return self._infinite_variable

    @property
    def point(self):
        """The parameter values of a point variable"""
        return self._point

    def is_infinite(self):
        return self._kind is VariableKind.infinite

    def supports(self):
        if self._kind is VariableKind.point:
            return [support_key(self._point)]
        return support_points(self.parameter_refs)

    def __call__(self, *point):
        if self._kind is not VariableKind.infinite:
            raise InfiniteModelError(
                "Only infinite variables can be evaluated at a point; "
                "'%s' is a %s variable" % (self._name, self._kind)
            )
        if len(point) != len(self._parameter_refs):
            raise InfiniteModelError(
                "Infinite variable '%s' depends on %s parameter(s) (%s) but "
                "was evaluated at %s value(s)"
                % (
                    self._name,
                    len(self._parameter_refs),
                    ', '.join(p.name for p in self._parameter_refs),
                    len(point),
                )
            )
        return self._model._point_variable(self, point)

    #
    # Bounds
    #

    def _owner(self):
        # point variables share the bounds of their infinite variable
        if self._kind is VariableKind.point:
            return self._infinite_variable
        return self

    @property
    def lb(self):
        return self._owner()._lb

    @property
    def ub(self):
        return self._owner()._ub

    @property
    def fixed_value(self):
        return self._owner()._fixed_value

    def has_lower_bound(self):
        return self.lb is not None

    def has_upper_bound(self):
        return self.ub is not None

    def is_fixed(self):
        return self.fixed_value is not None

    def _check_modifiable(self, action):
        if self._kind is VariableKind.point:
            raise InfiniteModelError(
                "Cannot %s the point variable '%s'.  Point variables share "
                "the bounds of their infinite variable '%s'."
                % (action, self._name, self._infinite_variable.name)
            )

    def _validate_bound(self, value, action):
        if value.__class__ not in native_numeric_types:
            raise InfiniteModelError(
                "Cannot %s of variable '%s' to the non-numeric value %r"
                % (action, self._name, value)
            )
        return value

    def _set_bound(self, kind, value):
        ref = self._bound_refs.get(kind)
        if ref is None:
            self._bound_refs[kind] = GeneralConstraintRef._for_bound(self, kind, value)
        else:
            ref._update_bound(value)
        self._model._invalidate()

    def _delete_bound(self, kind):
        del self._bound_refs[kind]
        self._model._invalidate()

    def set_lower_bound(self, value):
        self._check_modifiable('set the lower bound of')
        self._validate_bound(value, 'set the lower bound')
        if self._fixed_value is not None:
            raise InfiniteModelError(
                "Variable '%s' is fixed; unfix it before setting a lower bound"
                % (self._name,)
            )
        self._lb = value
        self._set_bound(ConstraintKind.lower_bound, value)

    def set_upper_bound(self, value):
        self._check_modifiable('set the upper bound of')
        self._validate_bound(value, 'set the upper bound')
        if self._fixed_value is not None:
            raise InfiniteModelError(
                "Variable '%s' is fixed; unfix it before setting an upper "
                "bound" % (self._name,)
            )
        self._ub = value
        self._set_bound(ConstraintKind.upper_bound, value)

    def delete_lower_bound(self):
        self._check_modifiable('delete the lower bound of')
        if self._lb is None:
            raise InfiniteModelError(
                "Variable '%s' does not have a lower bound" % (self._name,)
            )
        self._lb = None
        self._delete_bound(ConstraintKind.lower_bound)

    def delete_upper_bound(self):
        self._check_modifiable('delete the upper bound of')
        if self._ub is None:
            raise InfiniteModelError(
                "Variable '%s' does not have an upper bound" % (self._name,)
            )
        self._ub = None
        self._delete_bound(ConstraintKind.upper_bound)

    def fix(self, value, force=False):
        """Fix the variable to `value`

        Fixing a variable that has bounds requires ``force=True``, which
        deletes the bounds first.
        """
        self._check_modifiable('fix')
        self._validate_bound(value, 'fix the value')
        if self._lb is not None or self._ub is not None:
            if not force:
                raise InfiniteModelError(
                    "Unable to fix '%s' to %s because it has existing "
                    "bounds.  Use fix(value, force=True) to delete the "
                    "bounds and fix the variable." % (self._name, value)
                )
            if self._lb is not None:
                self.delete_lower_bound()
            if self._ub is not None:
                self.delete_upper_bound()
        self._fixed_value = value
        self._set_bound(ConstraintKind.fix, value)

    def unfix(self):
        self._check_modifiable('unfix')
        if self._fixed_value is None:
            raise InfiniteModelError("Variable '%s' is not fixed" % (self._name,))
        self._fixed_value = None
        self._delete_bound(ConstraintKind.fix)

    def _bound_ref(self, kind, description):
        if self._kind is VariableKind.point:
            raise InfiniteModelError(
                "The bound constraints of point variable '%s' belong to its "
                "infinite variable; query them through '%s' instead."
                % (self._name, self._infinite_variable.name)
            )
        ref = self._bound_refs.get(kind)
        if ref is None:
            raise InfiniteModelError(
                "Variable '%s' does not have %s" % (self._name, description)
            )
        return ref

    def _bound_constraints(self):
        return [
            self._bound_refs[kind]
            for kind in ConstraintKind
            if kind in self._bound_refs
        ]

    def __str__(self):
        return self._name

    __repr__ = __str__


def LowerBoundRef(vref):
    """Return the constraint reference of the lower bound of `vref`"""
    return vref._bound_ref(ConstraintKind.lower_bound, 'a lower bound')


def UpperBoundRef(vref):
    """Return the constraint reference of the upper bound of `vref`"""
    return vref._bound_ref(ConstraintKind.upper_bound, 'an upper bound')


def FixRef(vref):
    """Return the constraint reference of the fixing constraint of `vref`"""
    return vref._bound_ref(ConstraintKind.fix, 'a fixed value')
