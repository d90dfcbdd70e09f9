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

from infiniteopt.core.expr import (
    ExpressionBase,
    ExpressionNode,
    InfiniteRelation,
    RelationSense,
    evaluate,
    expression_parameters,
    expression_variables,
)
from infiniteopt.core.parameters import InfiniteParameter, generate_supports
from infiniteopt.core.constraints import ConstraintKind, GeneralConstraintRef
from infiniteopt.core.variables import (
    VariableKind,
    GeneralVariableRef,
    LowerBoundRef,
    UpperBoundRef,
    FixRef,
)

# The model imports the default (transcription) backend, which in turn
# depends on the modules above.
from infiniteopt.core.model import InfiniteModel
