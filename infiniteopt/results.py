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

"""Solver result queries for InfiniteModels and their references

The functions in this module answer result queries in terms of the
InfiniteModel.  Model-level queries (termination_status, solve_time, ...)
are forwarded to the model's backend; reference-level queries (value,
optimizer_index, dual, shadow_price) are forwarded to the mapping
functions of the backend of the model that owns the reference, which
translate the reference into the optimizer model's namespace.

Values of infinite references are lists ordered like their supports::

    >>> value(x)                     # doctest: +SKIP
    [0.0, 0.5, 2.0]
    >>> x.supports()                 # doctest: +SKIP
    [0.0, 5.0, 10.0]
"""

from infiniteopt.backends.results import ResultStatus
from infiniteopt.common.errors import DualOfVariableError
from infiniteopt.core.constraints import GeneralConstraintRef
from infiniteopt.core.variables import GeneralVariableRef


def _backend(ref, accepted=(GeneralVariableRef, GeneralConstraintRef)):
    if not isinstance(ref, accepted):
        raise TypeError(
            "Expected a %s, not %s"
            % (' or '.join(cls.__name__ for cls in accepted), type(ref).__name__)
        )
    return ref.model.backend


def termination_status(model):
    """Return the reason why the solver stopped (a
    :class:`pyomo.opt.TerminationCondition`)"""
    return model.backend.termination_status()


def raw_status(model):
    """Return the reason why the solver stopped, in its own words"""
    return model.backend.raw_status()


def primal_status(model):
    """Return the :class:`ResultStatus` of the most recent primal solution"""
    return model.backend.primal_status()


def dual_status(model):
    """Return the :class:`ResultStatus` of the most recent dual solution"""
    return model.backend.dual_status()


def solve_time(model):
    """Return the solve time (in seconds) reported by the solver (or, if
    the solver does not report it, the measured wall time of the solve)"""
    return model.backend.solve_time()


def has_values(model):
    """Return True if the solver has a primal solution available to query"""
    if not model.backend.has_results():
        return False
    return primal_status(model) != ResultStatus.noSolution


def has_duals(model):
    """Return True if the solver has a dual solution available to query"""
    if not model.backend.has_results():
        return False
    return dual_status(model) != ResultStatus.noSolution


def objective_bound(model):
    """Return the best known bound on the optimal objective value"""
    return model.backend.objective_bound()


def objective_value(model):
    """Return the objective value of the most recent primal solution"""
    return model.backend.objective_value()


def value(ref):
    """Return the value of a variable or constraint in the most recent
    solution

    For a constraint, this is the primal value of the constraint function.
    Infinite references return a list of values, one per support.  Use
    :func:`has_values` to check that a solution exists first.
    """
    return _backend(ref).map_value(ref)


def optimizer_index(ref):
    """Return the optimizer model component(s) (VarData or ConstraintData)
    that correspond to a variable or constraint reference

    Raises
    ------
    NoOptimizer
        If no optimizer has been set
    OptimizerModelNotReady
        If the optimizer model has not been built or is out of date
    """
    return _backend(ref).map_optimizer_index(ref)


def dual(ref):
    """Return the dual value(s) of a constraint in the most recent solution

    Duals are not defined for variables: the duals associated with a
    variable's bounds are queried through :func:`LowerBoundRef`,
    :func:`UpperBoundRef`, or :func:`FixRef`.  See also
    :func:`shadow_price`.
    """
    if isinstance(ref, GeneralVariableRef):
        raise DualOfVariableError()
    return _backend(ref, (GeneralConstraintRef,)).map_dual(ref)


def shadow_price(ref):
    """Return the change in the objective from an infinitesimal relaxation
    of a constraint

    The shadow price is computed from :func:`dual` and can only be
    queried when :func:`has_duals` is True and the model has an
    objective.  For linear constraints it differs at most in sign from
    the dual value.
    """
    return _backend(ref, (GeneralConstraintRef,)).map_shadow_price(ref)
