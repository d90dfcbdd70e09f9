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

import abc
import logging

from pyomo.common.config import Bool, ConfigDict, ConfigValue
from pyomo.common.timing import TicTocTimer

from infiniteopt.backends.results import ResultStatus
from infiniteopt.common.errors import (
    InfiniteModelError,
    NoOptimizer,
    OptimizeNotCalled,
    OptimizerModelNotReady,
    ResultNotAvailable,
)

logger = logging.getLogger('infiniteopt.backends')


class OptimizerBackend(abc.ABC):
    """
    Base class for transformation backends.

    A backend owns the *optimizer model*: the finite model produced from
    an InfiniteModel that is handed to a numerical solver.  It is bound
    to a single InfiniteModel when that model is constructed, and is
    responsible for

        - build: (re)generating the optimizer model from the InfiniteModel,
        - optimize: solving the optimizer model and recording the results,
        - map_value / map_optimizer_index / map_dual / map_shadow_price:
          mapping solver results for infinite-model references back out
          of the optimizer model.

    Status queries (termination_status, primal_status, ...) are answered
    from the :class:`SolveResults<infiniteopt.backends.results.SolveResults>`
    recorded by the most recent call to :meth:`optimize`.
    """

    CONFIG = ConfigDict('backend')
    CONFIG.declare(
        'solver',
        ConfigValue(
            default=None,
            domain=str,
            description="The name of the solver used to optimize the "
            "optimizer model",
        ),
    )
    CONFIG.declare(
        'solver_options',
        ConfigDict(
            implicit=True,
            description="Options passed directly to the solver (with no "
            "validation)",
        ),
    )
    CONFIG.declare(
        'tee',
        ConfigValue(
            default=False,
            domain=Bool,
            description="If True, stream the solver output to the console",
        ),
    )

    def __init__(self, **kwds):
        self.config = self.CONFIG(kwds)
        self._model = None
        self._optimizer_model = None
        self._results = None

    def attach(self, model):
        """Bind this backend to `model` (an InfiniteModel)"""
        if self._model is not None and self._model is not model:
            raise InfiniteModelError(
                "%s is already attached to InfiniteModel '%s'; a backend "
                "can only serve a single model"
                % (type(self).__name__, self._model.name)
            )
        self._model = model

    @property
    def model(self):
        return self._model

    @property
    def optimizer_model(self):
        """The optimizer model built by the most recent call to :meth:`build`
        (None if the model was never built)"""
        return self._optimizer_model

    #
    # Optimizer management
    #

    def set_optimizer(self, solver, **options):
        self.config.solver = solver
        self.config.solver_options.reset()
        self.config.solver_options.set_value(options)

    def has_optimizer(self):
        return self.config.solver is not None

    def _check_optimizer(self):
        if not self.has_optimizer():
            raise NoOptimizer()

    def _check_ready(self, ref):
        if ref.model is not self._model:
            raise InfiniteModelError(
                "'%s' does not belong to the InfiniteModel served by this "
                "backend" % (ref.name,)
            )
        if not self._model.optimizer_model_ready:
            raise OptimizerModelNotReady()

    @abc.abstractmethod
    def build(self, model):
        """Generate the optimizer model from `model`"""

    @abc.abstractmethod
    def _solve_optimizer_model(self):
        """Solve the current optimizer model

        Returns
        -------
        results: SolveResults
            The results of the solve.  `solve_time` may be left unset, in
            which case the wall time of this call is recorded.
        """

    def optimize(self, model):
        """Solve `model`, rebuilding the optimizer model when it is stale

        Returns
        -------
        results: SolveResults
        """
        self._check_optimizer()
        if model is not self._model:
            raise InfiniteModelError(
                "%s is not attached to InfiniteModel '%s'"
                % (type(self).__name__, model.name)
            )
        if not model.optimizer_model_ready:
            model.build_optimizer_model()
        self._results = None
        timer = TicTocTimer()
        timer.tic(None)
        results = self._solve_optimizer_model()
        elapsed = timer.toc(None)
        if results.solve_time is None:
            results.solve_time = elapsed
        self._results = results
        logger.info(
            "Solved InfiniteModel '%s' with %s: termination condition %s "
            "(%0.3f s)",
            model.name,
            results.solver_name,
            results.termination_condition,
            results.solve_time,
        )
        if results.primal_status is ResultStatus.noSolution:
            logger.warning(
                "The solver did not return a primal solution for "
                "InfiniteModel '%s' (termination condition: %s)",
                model.name,
                results.termination_condition,
            )
        return results

    #
    # Results
    #

    @property
    def results(self):
        if self._results is None:
            raise OptimizeNotCalled()
        return self._results

    def has_results(self):
        return self._results is not None

    def termination_status(self):
        return self.results.termination_condition

    def raw_status(self):
        return self.results.raw_status

    def primal_status(self):
        return self.results.primal_status

    def dual_status(self):
        return self.results.dual_status

    def solve_time(self):
        return self.results.solve_time

    def objective_bound(self):
        bound = self.results.objective_bound
        if bound is None:
            raise ResultNotAvailable(
                "The solver %s did not report an objective bound"
                % (self.results.solver_name,)
            )
        return bound

    @abc.abstractmethod
    def objective_value(self):
        """Return the objective value of the primal solution"""

    #
    # Mapping functions
    #

    @abc.abstractmethod
    def map_value(self, ref):
        """Return the primal value(s) of a variable or constraint reference"""

    @abc.abstractmethod
    def map_optimizer_index(self, ref):
        """Return the optimizer model object(s) a reference maps to"""

    @abc.abstractmethod
    def map_dual(self, cref):
        """Return the dual value(s) of a constraint reference"""

    @abc.abstractmethod
    def map_shadow_price(self, cref):
        """Return the shadow price(s) of a constraint reference"""
