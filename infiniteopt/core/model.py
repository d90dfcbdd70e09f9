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

import logging

from pyomo.common.collections import ComponentMap
from pyomo.common.config import ConfigDict, ConfigValue, PositiveInt
from pyomo.common.enums import ObjectiveSense, minimize
from pyomo.common.numeric_types import native_numeric_types
from pyomo.core import Reals

from infiniteopt.backends.transcription import TranscriptionBackend
from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.constraints import GeneralConstraintRef
from infiniteopt.core.expr import (
    ExpressionBase,
    InfiniteRelation,
    expression_parameters,
    expression_variables,
    iterate_leaves,
)
from infiniteopt.core.parameters import InfiniteParameter
from infiniteopt.core.variables import GeneralVariableRef, VariableKind

logger = logging.getLogger('infiniteopt.core')


class InfiniteModel(object):
    """An optimization model over infinite parameters

    The model holds infinite parameters, variables (finite, infinite, and
    point), constraints, and an objective.  It is solved through its
    backend, which transforms it into a finite *optimizer model*.  The
    backend is selected when the model is constructed (by default, a
    :class:`TranscriptionBackend`) and cannot be changed afterwards.

    Any change to the model marks the optimizer model as stale; it is
    rebuilt by the next call to :meth:`optimize`.

    Examples
    --------
    >>> m = InfiniteModel(name='example')
    >>> t = m.add_parameter('t', bounds=(0, 10), num_supports=11)
    >>> x = m.add_variable('x', parameter_refs=t, lb=0)
    >>> y = m.add_variable('y')
    >>> c1 = m.add_constraint('c1', x + y >= 2)
    >>> m.set_objective(2 * y + x(0))
    """

    CONFIG = ConfigDict('InfiniteModel')
    CONFIG.declare(
        'name',
        ConfigValue(
            default='unknown',
            domain=str,
            description="The name of the model",
        ),
    )
    CONFIG.declare(
        'default_num_supports',
        ConfigValue(
            default=10,
            domain=PositiveInt,
            description="The number of supports generated for infinite "
            "parameters declared without explicit supports",
        ),
    )

    def __init__(self, backend=None, **kwds):
        self.config = self.CONFIG(kwds)
        self._parameters = []
        self._parameter_order = ComponentMap()
        self._variables = []
        self._constraints = []
        self._names = {}
        self._point_variables = {}
        self._objective = None
        self._objective_sense = minimize
        self._optimizer_model_ready = False
        if backend is None:
            backend = TranscriptionBackend()
        backend.attach(self)
        self._backend = backend

    @property
    def name(self):
        return self.config['name']

    @property
    def backend(self):
        return self._backend

    def _register_name(self, name, obj):
        if not isinstance(name, str) or not name.isidentifier():
            raise InfiniteModelError(
                "%r is not a valid name: names must be valid Python "
                "identifiers" % (name,)
            )
        if name in self._names:
            raise InfiniteModelError(
                "The name '%s' is already in use in InfiniteModel '%s'"
                % (name, self.name)
            )
        self._names[name] = obj

    def _invalidate(self):
        self._optimizer_model_ready = False

    def _check_references(self, expr, context):
        for leaf in iterate_leaves(expr):
            if not isinstance(leaf, ExpressionBase) or leaf.model is not self:
                raise InfiniteModelError(
                    "%s references '%s', which does not belong to "
                    "InfiniteModel '%s'" % (context, leaf, self.name)
                )

    def _order_parameters(self, parameter_refs):
        for param in parameter_refs:
            if param not in self._parameter_order:
                raise InfiniteModelError(
                    "Parameter '%s' does not belong to InfiniteModel '%s'"
                    % (param, self.name)
                )
        return tuple(sorted(parameter_refs, key=self._parameter_order.__getitem__))

    #
    # Parameters
    #

    def add_parameter(self, name, bounds, supports=None, num_supports=None):
        """Declare an infinite parameter

        Parameters
        ----------
        name: str
            The parameter name
        bounds: tuple
            The (lower, upper) bounds of the parameter domain
        supports: list, optional
            Explicit support points
        num_supports: int, optional
            The number of uniformly spaced supports to generate (defaults
            to ``config.default_num_supports``)

        Returns
        -------
        InfiniteParameter
        """
        param = InfiniteParameter(
            self, name, bounds, supports=supports, num_supports=num_supports
        )
        self._register_name(name, param)
        self._parameter_order[param] = len(self._parameters)
        self._parameters.append(param)
        self._invalidate()
        return param

    def parameters(self):
        return list(self._parameters)

    #
    # Variables
    #

    def add_variable(
        self,
        name,
        parameter_refs=(),
        lb=None,
        ub=None,
        fix=None,
        domain=Reals,
        initialize=None,
    ):
        """Declare a finite or infinite variable

        Parameters
        ----------
        name: str
            The variable name
        parameter_refs: InfiniteParameter or tuple, optional
            The infinite parameters the variable depends on.  A variable
            with no parameters is finite.
        lb: float, optional
            Lower bound
        ub: float, optional
            Upper bound
        fix: float, optional
            Fix the variable to this value (incompatible with `lb`/`ub`)
        domain: Set, optional
            The Pyomo domain of the variable (e.g., Reals, Binary)
        initialize: float, optional
            The initial (starting) value at every support point

        Returns
        -------
        GeneralVariableRef
        """
        if isinstance(parameter_refs, InfiniteParameter):
            parameter_refs = (parameter_refs,)
        parameter_refs = tuple(parameter_refs)
        for param in parameter_refs:
            if not isinstance(param, InfiniteParameter) or param.model is not self:
                raise InfiniteModelError(
                    "Variable '%s' can only depend on infinite parameters of "
                    "InfiniteModel '%s' (got %r)" % (name, self.name, param)
                )
        if len(set(map(id, parameter_refs))) != len(parameter_refs):
            raise InfiniteModelError(
                "Variable '%s' lists the same parameter more than once" % (name,)
            )
        if fix is not None and (lb is not None or ub is not None):
            raise InfiniteModelError(
                "Variable '%s' cannot be both fixed and bounded" % (name,)
            )
        if initialize is not None and initialize.__class__ not in native_numeric_types:
            raise InfiniteModelError(
                "Variable '%s': initialize must be a number, not %r"
                % (name, initialize)
            )
        kind = VariableKind.infinite if parameter_refs else VariableKind.finite
        vref = GeneralVariableRef(
            self,
            name,
            kind,
            parameter_refs=parameter_refs,
            domain=domain,
            initialize=initialize,
        )
        # validate everything before the variable becomes part of the model
        for val, action in (
            (lb, 'set the lower bound'),
            (ub, 'set the upper bound'),
            (fix, 'fix the value'),
        ):
            if val is not None:
                vref._validate_bound(val, action)
        self._register_name(name, vref)
        self._variables.append(vref)
        if lb is not None:
            vref.set_lower_bound(lb)
        if ub is not None:
            vref.set_upper_bound(ub)
        if fix is not None:
            vref.fix(fix)
        self._invalidate()
        logger.debug("Added %s variable '%s'", kind, name)
        return vref

    def variables(self):
        """Return the finite and infinite variables of the model"""
        return list(self._variables)

    def point_variables(self):
        return list(self._point_variables.values())

    def _point_variable(self, ivar, point):
        values = []
        for param, val in zip(ivar.parameter_refs, point):
            if val.__class__ not in native_numeric_types:
                raise InfiniteModelError(
                    "Cannot evaluate '%s' at the non-numeric point %r"
                    % (ivar.name, point)
                )
            if not param.lb <= val <= param.ub:
                raise InfiniteModelError(
                    "Cannot evaluate '%s' at %r: %s lies outside of the bounds "
                    "%s of parameter '%s'"
                    % (ivar.name, point, val, param.bounds, param.name)
                )
            values.append(float(val))
        # supports are only added once the whole point is valid
        for param, val in zip(ivar.parameter_refs, values):
            param.add_supports(val)
        key = (ivar.name, tuple(values))
        pvar = self._point_variables.get(key)
        if pvar is None:
            pvar = GeneralVariableRef(
                self,
                '%s(%s)' % (ivar.name, ', '.join(str(v) for v in values)),
                VariableKind.point,
                domain=ivar.domain,
                infinite_variable=ivar,
                point=tuple(values),
            )
            self._point_variables[key] = pvar
        return pvar

    #
    # Constraints
    #

    def add_constraint(self, name, relation):
        """Declare a constraint

        The constraint is infinite when `relation` depends on infinite
        parameters, either directly or through infinite variables.

        Returns
        -------
        GeneralConstraintRef
        """
        if not isinstance(relation, InfiniteRelation):
            raise InfiniteModelError(
                "Constraint '%s' expects a relational expression (e.g., "
                "'x + y >= 1'), not %r" % (name, relation)
            )
        self._check_references(relation, "Constraint '%s'" % (name,))
        if not expression_variables(relation):
            raise InfiniteModelError(
                "Constraint '%s' does not contain any variables" % (name,)
            )
        cref = GeneralConstraintRef(self, name, relation)
        self._register_name(name, cref)
        self._constraints.append(cref)
        self._invalidate()
        return cref

    def constraints(self):
        """Return the general (non-bound) constraints of the model"""
        return list(self._constraints)

    #
    # Objective
    #

    def set_objective(self, expr, sense=minimize):
        """Set the objective

        The objective must be finite: it may reference finite and point
        variables, but not infinite parameters or infinite variables.
        Passing ``expr=None`` removes the objective (a feasibility
        problem).
        """
        if expr is None:
            self._objective = None
            self._invalidate()
            return
        sense = ObjectiveSense(sense)
        if isinstance(expr, InfiniteRelation) or not (
            expr.__class__ in native_numeric_types or isinstance(expr, ExpressionBase)
        ):
            raise InfiniteModelError(
                "The objective must be a numeric expression, not %r" % (expr,)
            )
        self._check_references(expr, "The objective")
        params = expression_parameters(expr)
        if params:
            raise InfiniteModelError(
                "The objective depends on the infinite parameter(s) %s.  "
                "Only finite objectives (over finite and point variables) "
                "are supported." % (', '.join(p.name for p in params),)
            )
        self._objective = expr
        self._objective_sense = sense
        self._invalidate()

    @property
    def objective(self):
        return self._objective

    @property
    def objective_sense(self):
        return self._objective_sense

    def find_component(self, name):
        """Return the parameter, variable, or constraint named `name`
        (None if there is no such component)"""
        return self._names.get(name)

    #
    # Optimizer model
    #

    @property
    def optimizer_model(self):
        return self._backend.optimizer_model

    @property
    def optimizer_model_ready(self):
        return self._optimizer_model_ready

    def build_optimizer_model(self):
        """(Re)build the optimizer model through the backend"""
        self._backend.build(self)
        self._optimizer_model_ready = True
        return self._backend.optimizer_model

    def set_optimizer(self, solver, **options):
        """Set the solver (by SolverFactory name) and its options"""
        self._backend.set_optimizer(solver, **options)

    def optimize(self):
        """Solve the model

        Returns
        -------
        SolveResults
        """
        return self._backend.optimize(self)
