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

"""infiniteopt: infinite-dimensional optimization on top of Pyomo

Models are declared over infinite parameters (time, space, scenarios),
transformed into finite Pyomo models by a backend, and solved with any
solver available through Pyomo's SolverFactory.  Results are queried
with the functions in :mod:`infiniteopt.results`.
"""

from infiniteopt.version import version, version_info, __version__

from infiniteopt.common.errors import (
    InfiniteOptError,
    InfiniteModelError,
    NoOptimizer,
    OptimizeNotCalled,
    OptimizerModelNotReady,
    ResultNotAvailable,
    DualOfVariableError,
)
from infiniteopt.core import (
    InfiniteModel,
    InfiniteParameter,
    GeneralVariableRef,
    GeneralConstraintRef,
    VariableKind,
    ConstraintKind,
    LowerBoundRef,
    UpperBoundRef,
    FixRef,
)
from infiniteopt.backends import (
    OptimizerBackend,
    TranscriptionBackend,
    ResultStatus,
    SolveResults,
)
from infiniteopt.results import (
    termination_status,
    raw_status,
    primal_status,
    dual_status,
    solve_time,
    has_values,
    has_duals,
    objective_bound,
    objective_value,
    value,
    optimizer_index,
    dual,
    shadow_price,
)
