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

"""Transcription of an InfiniteModel into a finite Pyomo model

Every infinite parameter is replaced by its supports: infinite variables
become Pyomo Vars indexed by the support points of their parameters and
infinite constraints are enforced at each support point of the
parameters they depend on.  The resulting ConcreteModel (the *optimizer
model*) is laid out as::

    variables    Block   one Var per finite / infinite variable
    bounds       Block   one Constraint per variable bound or fix value
    constraints  Block   one Constraint per general constraint
    objective    Objective
    dual         Suffix  (IMPORT) dual values loaded from the solver
"""

import logging

from pyomo.common.collections import ComponentMap
from pyomo.common.config import Bool, ConfigValue
from pyomo.common.enums import minimize
from pyomo.common.numeric_types import native_numeric_types
from pyomo.environ import (
    Block,
    ConcreteModel,
    Constraint,
    Objective,
    SolverFactory,
    Suffix,
    Var,
    value,
)
from pyomo.opt import SolverStatus

from infiniteopt.backends.base import OptimizerBackend
from infiniteopt.backends.results import (
    ResultStatus,
    SolveResults,
    result_status_from_solution_status,
)
from infiniteopt.common.errors import InfiniteModelError, ResultNotAvailable
from infiniteopt.core.constraints import GeneralConstraintRef
from infiniteopt.core.expr import evaluate
from infiniteopt.core.parameters import support_key
from infiniteopt.core.variables import GeneralVariableRef, VariableKind

logger = logging.getLogger('infiniteopt.backends.transcription')


def _apply(data, fcn):
    if isinstance(data, list):
        return [fcn(d) for d in data]
    return fcn(data)


def _numeric_or_none(val):
    if val.__class__ in native_numeric_types:
        return float(val)
    return None


class TranscriptionBackend(OptimizerBackend):
    """Backend that transcribes an InfiniteModel over the supports of its
    infinite parameters and solves it with a Pyomo solver."""

    CONFIG = OptimizerBackend.CONFIG()
    CONFIG.declare(
        'symbolic_solver_labels',
        ConfigValue(
            default=False,
            domain=Bool,
            description="If True, the optimizer model is written to the "
            "solver using the names of its components",
        ),
    )

    def __init__(self, **kwds):
        super().__init__(**kwds)
        self._var_map = ComponentMap()
        self._con_map = ComponentMap()

    #
    # Building the optimizer model
    #

    def build(self, model):
        self._results = None
        self._var_map = ComponentMap()
        self._con_map = ComponentMap()

        om = ConcreteModel(name=model.name)
        om.variables = Block()
        om.bounds = Block()
        om.constraints = Block()
        om.dual = Suffix(direction=Suffix.IMPORT)
        self._optimizer_model = om

        for vref in model.variables():
            if vref.is_infinite():
                var = Var(vref.supports(), domain=vref.domain, dense=True)
            else:
                var = Var(domain=vref.domain)
            om.variables.add_component(vref.name, var)
            if vref.initialize is not None:
                for vardata in var.values():
                    vardata.set_value(vref.initialize, skip_validation=True)
            self._var_map[vref] = var

        for vref in model.variables():
            for cref in vref._bound_constraints():
                self._con_map[cref] = self._transcribe_constraint(om.bounds, cref)

        for cref in model.constraints():
            self._con_map[cref] = self._transcribe_constraint(om.constraints, cref)

        if model.objective is not None:
            om.objective = Objective(
                expr=evaluate(model.objective, self._substitution((), None)),
                sense=model.objective_sense,
            )

        logger.debug(
            "Transcribed InfiniteModel '%s': %s variables, %s constraints",
            model.name,
            sum(len(v) for v in self._var_map.values()),
            sum(len(c) for c in self._con_map.values()),
        )
        return om

    def _var_data(self, vref, key=None):
        if vref.kind is VariableKind.point:
            return self._var_map[vref.infinite_variable][support_key(vref.point)]
        var = self._var_map[vref]
        if vref.is_infinite():
            return var[key]
        return var

    def _substitution(self, parameter_refs, key):
        """Return a leaf substitution for the support point `key` of
        `parameter_refs`"""
        if not parameter_refs:
            point = ()
        elif len(parameter_refs) == 1:
            point = (key,)
        else:
            point = key
        values = ComponentMap(zip(parameter_refs, point))

        def substitute(leaf):
            if leaf.is_parameter_type():
                return values[leaf]
            if leaf.is_infinite():
                return self._var_data(
                    leaf, support_key(values[p] for p in leaf.parameter_refs)
                )
            return self._var_data(leaf)

        return substitute

    def _transcribe_constraint(self, block, cref):
        parameter_refs = cref.parameter_refs
        if not parameter_refs:
            con = Constraint(
                expr=evaluate(cref.relation, self._substitution((), None))
            )
            block.add_component(cref.name, con)
            return con
        keys = cref.supports()
        con = Constraint(keys)
        block.add_component(cref.name, con)
        for key in keys:
            con[key] = evaluate(cref.relation, self._substitution(parameter_refs, key))
        return con

    #
    # Solving
    #

    def _solve_optimizer_model(self):
        om = self._optimizer_model
        opt = SolverFactory(self.config.solver)
        opt.options.update(self.config.solver_options.value())
        legacy_results = opt.solve(
            om,
            tee=self.config.tee,
            load_solutions=False,
            symbolic_solver_labels=self.config.symbolic_solver_labels,
        )
        solution_status = None
        if (
            len(legacy_results.solution) > 0
            and legacy_results.solver.status != SolverStatus.error
        ):
            solution_status = legacy_results.solution(0).status
            om.solutions.load_from(legacy_results)
        return self._process_results(legacy_results, solution_status)

    def _process_results(self, legacy_results, solution_status):
        """Translate legacy Pyomo SolverResults into SolveResults

        `solution_status` is the status of the solution that was loaded
        into the optimizer model (None if no solution was loaded).
        """
        results = SolveResults()
        results.solver_name = self.config.solver
        solver_info = legacy_results.solver
        results.termination_condition = solver_info.termination_condition
        results.raw_status = self._raw_status(solver_info)
        results.extra_info['solver_status'] = solver_info.status
        results.primal_status = result_status_from_solution_status(solution_status)
        if solution_status is not None and len(self._optimizer_model.dual):
            results.dual_status = ResultStatus.feasiblePoint
        for attr in ('wallclock_time', 'time'):
            solve_time = _numeric_or_none(getattr(solver_info, attr, None))
            if solve_time is not None and solve_time >= 0:
                results.solve_time = solve_time
                break
        if self._model.objective is not None:
            if self._model.objective_sense == minimize:
                bound = getattr(legacy_results.problem, 'lower_bound', None)
            else:
                bound = getattr(legacy_results.problem, 'upper_bound', None)
            results.objective_bound = _numeric_or_none(bound)
        return results

    @staticmethod
    def _raw_status(solver_info):
        for attr in ('message', 'termination_message'):
            msg = getattr(solver_info, attr, None)
            if isinstance(msg, str) and msg:
                return msg
        return str(solver_info.termination_condition)

    #
    # Results
    #

    def _require_primal(self):
        if self.results.primal_status is ResultStatus.noSolution:
            raise ResultNotAvailable(
                "No primal solution is available (termination condition: %s)"
                % (self.results.termination_condition,)
            )

    def _require_dual(self):
        if self.results.dual_status is ResultStatus.noSolution:
            raise ResultNotAvailable(
                "No dual solution is available (termination condition: %s).  "
                "Duals are generally only reported for continuous problems."
                % (self.results.termination_condition,)
            )

    def objective_value(self):
        self._require_primal()
        om = self._optimizer_model
        if om.component('objective') is None:
            # feasibility problem
            return 0.0
        return value(om.objective)

    #
    # Mapping functions
    #

    def _optimizer_data(self, ref):
        if isinstance(ref, GeneralConstraintRef):
            con = self._con_map.get(ref)
            if con is None:
                raise InfiniteModelError(
                    "Constraint '%s' is not part of the optimizer model" % (ref.name,)
                )
            if ref.is_infinite():
                return [con[key] for key in ref.supports()]
            return con
        if isinstance(ref, GeneralVariableRef):
            if ref.is_infinite():
                var = self._var_map[ref]
                return [var[key] for key in ref.supports()]
            return self._var_data(ref)
        raise TypeError(
            "Expected a variable or constraint reference, not %s"
            % (type(ref).__name__,)
        )

    def map_optimizer_index(self, ref):
        self._check_optimizer()
        self._check_ready(ref)
        return self._optimizer_data(ref)

    def map_value(self, ref):
        self._check_ready(ref)
        self._require_primal()
        data = self._optimizer_data(ref)
        if isinstance(ref, GeneralConstraintRef):
            return _apply(data, lambda cd: value(cd.body, exception=False))
        return _apply(data, lambda vd: vd.value)

    def map_dual(self, cref):
        self._check_ready(cref)
        self._require_dual()
        duals = self._optimizer_model.dual

        def _dual(cd):
            if cd not in duals:
                raise ResultNotAvailable(
                    "The solver did not report a dual value for %s" % (cd.name,)
                )
            return duals[cd]

        return _apply(self._optimizer_data(cref), _dual)

    def map_shadow_price(self, cref):
        if self._model.objective is None:
            raise ResultNotAvailable(
                "The shadow price is not defined for feasibility problems "
                "(InfiniteModel '%s' has no objective)" % (self._model.name,)
            )
        duals = self.map_dual(cref)
        sense = self._model.objective_sense

        def _shadow_price(cd, dual):
            # duals are d(objective) / d(rhs); the shadow price is the
            # change in the objective for a relaxation of the constraint
            if cd.equality or (cd.has_lb() and cd.has_ub()):
                if sense == minimize:
                    return -abs(dual)
                return abs(dual)
            if cd.has_ub():
                return dual
            return -dual

        data = self._optimizer_data(cref)
        if isinstance(data, list):
            return [_shadow_price(cd, dual) for cd, dual in zip(data, duals)]
        return _shadow_price(data, duals)
