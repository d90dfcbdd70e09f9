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
from typing import Optional

from pyomo.common.config import (
    ConfigDict,
    ConfigValue,
    In,
    NonNegativeFloat,
)
from pyomo.opt import SolutionStatus, TerminationCondition


class ResultStatus(enum.Enum):
    """
    An Enum describing the status of a primal or dual solution returned
    by the solver.

    Attributes
    ----------
    noSolution: 0
        The solver did not return a solution.
    infeasiblePoint: 10
        The solver returned a point that does not satisfy the constraints.
    feasiblePoint: 20
        The solver returned a point that satisfies the constraints (to
        within the solver's tolerances).
    unknown: 42
        The solver returned a point, but did not report its status.
    """

    noSolution = 0

    infeasiblePoint = 10

    feasiblePoint = 20

    unknown = 42


_solution_status_map = {
    SolutionStatus.optimal: ResultStatus.feasiblePoint,
    SolutionStatus.locallyOptimal: ResultStatus.feasiblePoint,
    SolutionStatus.globallyOptimal: ResultStatus.feasiblePoint,
    SolutionStatus.feasible: ResultStatus.feasiblePoint,
    SolutionStatus.bestSoFar: ResultStatus.feasiblePoint,
    SolutionStatus.infeasible: ResultStatus.infeasiblePoint,
}


def result_status_from_solution_status(status):
    """Map a (legacy) Pyomo SolutionStatus onto a :class:`ResultStatus`

    ``None`` indicates that no solution was loaded.
    """
    if status is None:
        return ResultStatus.noSolution
    return _solution_status_map.get(status, ResultStatus.unknown)


class SolveResults(ConfigDict):
    """
    The results of the most recent solve of an optimizer model.

    Attributes
    ----------
    termination_condition: :class:`TerminationCondition<pyomo.opt.TerminationCondition>`
        The reason the solver exited.
    raw_status: str
        The reason the solver exited, in the solver's own words.
    primal_status: :class:`ResultStatus`
        The status of the primal solution.
    dual_status: :class:`ResultStatus`
        The status of the dual solution.
    objective_bound: float
        The best objective bound reported by the solver, or None if the
        solver did not report one.
    solve_time: float
        The time (in seconds) spent by the solver.
    solver_name: str
        The name of the solver in use.
    extra_info: ConfigDict
        A ConfigDict to store extra, backend-specific information (e.g.,
        the TranscriptionBackend records the legacy ``solver_status``).
    """

    def __init__(
        self,
        description=None,
        doc=None,
        implicit=False,
        implicit_domain=None,
        visibility=0,
    ):
        super().__init__(
            description=description,
            doc=doc,
            implicit=implicit,
            implicit_domain=implicit_domain,
            visibility=visibility,
        )

        self.termination_condition: TerminationCondition = self.declare(
            'termination_condition',
            ConfigValue(
                domain=In(TerminationCondition),
                default=TerminationCondition.unknown,
                description="The reason the solver exited.  This is a member "
                "of the TerminationCondition enum.",
            ),
        )
        self.raw_status: Optional[str] = self.declare(
            'raw_status',
            ConfigValue(
                domain=str,
                default=None,
                description="The reason the solver exited, in its own words.",
            ),
        )
        self.primal_status: ResultStatus = self.declare(
            'primal_status',
            ConfigValue(
                domain=In(ResultStatus),
                default=ResultStatus.noSolution,
                description="The status of the primal solution.",
            ),
        )
        self.dual_status: ResultStatus = self.declare(
            'dual_status',
            ConfigValue(
                domain=In(ResultStatus),
                default=ResultStatus.noSolution,
                description="The status of the dual solution.",
            ),
        )
        self.objective_bound: Optional[float] = self.declare(
            'objective_bound',
            ConfigValue(
                domain=float,
                default=None,
                description="The best objective bound found.  For "
                "minimization problems, this is the lower bound.  For "
                "maximization problems, this is the upper bound.",
            ),
        )
        self.solve_time: Optional[float] = self.declare(
            'solve_time',
            ConfigValue(
                domain=NonNegativeFloat,
                default=None,
                description="The time (in seconds) spent solving the "
                "optimizer model.",
            ),
        )
        self.solver_name: Optional[str] = self.declare(
            'solver_name',
            ConfigValue(domain=str, description="The name of the solver in use."),
        )
        self.extra_info: ConfigDict = self.declare(
            'extra_info', ConfigDict(implicit=True)
        )
