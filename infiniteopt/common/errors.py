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

from pyomo.common.errors import PyomoException


class InfiniteOptError(PyomoException):
    """
    Exception class for other infiniteopt exceptions to inherit from,
    allowing infiniteopt exceptions to be caught in a general way.
    """


class InfiniteModelError(InfiniteOptError, ValueError):
    """
    Exception class used for errors in the construction of an
    InfiniteModel (e.g., duplicate names, invalid bounds, or supports
    that lie outside of a parameter's domain).
    """


class NoOptimizer(InfiniteOptError, RuntimeError):
    """
    Exception raised when an operation requires an optimizer, but none
    has been set on the InfiniteModel.
    """

    default_message = (
        "No optimizer has been set for the InfiniteModel.  Use "
        "set_optimizer() to attach a solver before calling optimize() "
        "or querying optimizer indices."
    )


class OptimizeNotCalled(InfiniteOptError, RuntimeError):
    """
    Exception raised when solver results are requested before optimize()
    has produced any.
    """

    default_message = (
        "No solver results are available.  Call optimize() before "
        "querying the results of the InfiniteModel."
    )


class OptimizerModelNotReady(InfiniteOptError, RuntimeError):
    """
    Exception raised when the optimizer model has not been built or has
    been invalidated by a change to the InfiniteModel.
    """

    default_message = (
        "The optimizer model is not up to date with the InfiniteModel.  "
        "Call optimize() (or build_optimizer_model()) before mapping "
        "references into the optimizer model."
    )


class ResultNotAvailable(InfiniteOptError, RuntimeError):
    """
    Exception raised when the solver did not provide a requested result
    (e.g., values without a primal solution or duals for a MIP).
    """


class DualOfVariableError(InfiniteOptError, TypeError):
    """
    Exception raised when a dual value is requested for a variable
    reference.  Duals live on the bound constraints of a variable.
    """

    default_message = (
        "To query the dual variables associated with a variable bound, "
        "first obtain a constraint reference using one of UpperBoundRef, "
        "LowerBoundRef, or FixRef, and then call dual() on the returned "
        "constraint reference.\nFor example, if x <= 1, instead of "
        "dual(x), call dual(UpperBoundRef(x))."
    )
