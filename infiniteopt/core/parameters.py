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

import itertools
import logging

from pyomo.common.numeric_types import native_numeric_types

from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.expr import ExpressionBase

logger = logging.getLogger('infiniteopt.core')


def generate_supports(lb, ub, num_supports):
    """Return `num_supports` uniformly spaced points spanning [lb, ub]

    Both bounds are included exactly (the last point is not subject to
    floating point drift).
    """
    if num_supports < 2:
        raise InfiniteModelError(
            "At least 2 supports are required to span a parameter domain "
            "(got %s)" % (num_supports,)
        )
    step = (ub - lb) / float(num_supports - 1)
    supports = [lb + i * step for i in range(num_supports - 1)]
    supports.append(ub)
    return [float(s) for s in supports]


def support_key(point):
    """Return the index used for a support point in the optimizer model

    Points over a single parameter are keyed by the bare value; points
    over several parameters are keyed by a tuple.
    """
    point = tuple(point)
    if len(point) == 1:
        return point[0]
    return point


def support_points(parameter_refs):
    """Return the support keys spanned by `parameter_refs`

    The points are the cartesian product of the supports of each
    parameter, taken in the order the parameters are given.  An empty
    parameter list spans a single (finite) point, keyed by None.
    """
    if not parameter_refs:
        return [None]
    return [
        support_key(point)
        for point in itertools.product(*(p.supports for p in parameter_refs))
    ]


class InfiniteParameter(ExpressionBase):
    """A continuous parameter over a bounded interval

    Infinite variables and constraints are indexed by infinite parameters.
    The parameter's `supports` are the discrete points at which a
    transcription of the model evaluates them.

    Parameters
    ----------
    model: InfiniteModel
        The model that owns this parameter
    name: str
        The parameter name (unique within the model)
    bounds: tuple
        The (lower, upper) bounds of the parameter domain
    supports: list, optional
        Explicit support points.  These must lie within `bounds`.
    num_supports: int, optional
        The number of uniformly spaced supports to generate when
        `supports` is not given
    """

    def __init__(self, model, name, bounds, supports=None, num_supports=None):
        lb, ub = self._validate_bounds(name, bounds)
        self._model = model
        self._name = name
        self._bounds = (lb, ub)
        self._supports = []
        if supports is None:
            if num_supports is None:
                num_supports = model.config.default_num_supports
            supports = generate_supports(lb, ub, num_supports)
        elif num_supports is not None:
            raise InfiniteModelError(
                "Parameter '%s': specify either 'supports' or "
                "'num_supports', not both" % (name,)
            )
        self._add_supports(supports)

    @staticmethod
    def _validate_bounds(name, bounds):
        try:
            lb, ub = bounds
        except (TypeError, ValueError):
            raise InfiniteModelError(
                "Parameter '%s': bounds must be a (lower, upper) pair, not %r"
                % (name, bounds)
            ) from None
        for val in (lb, ub):
            if val.__class__ not in native_numeric_types or val in (
                float('inf'),
                float('-inf'),
            ):
                raise InfiniteModelError(
                    "Parameter '%s': bounds must be finite numbers, not %r"
                    % (name, bounds)
                )
        if not lb < ub:
            raise InfiniteModelError(
                "Parameter '%s': the lower bound (%s) must be strictly less "
                "than the upper bound (%s)" % (name, lb, ub)
            )
        return float(lb), float(ub)

    def is_parameter_type(self):
        return True

    @property
    def parameter_refs(self):
        return (self,)

    @property
    def model(self):
        return self._model

    @property
    def name(self):
        return self._name

    @property
    def bounds(self):
        return self._bounds

    @property
    def lb(self):
        return self._bounds[0]

    @property
    def ub(self):
        return self._bounds[1]

    @property
    def supports(self):
        return tuple(self._supports)

    @property
    def num_supports(self):
        return len(self._supports)

    def has_support(self, value):
        return float(value) in self._supports

    def add_supports(self, values):
        """Add support points to the parameter

        Values already present are ignored.  Adding new supports
        invalidates any optimizer model built from the owning model.
        """
        if self._add_supports(values):
            self._model._invalidate()

    def _add_supports(self, values):
        if values.__class__ in native_numeric_types:
            values = [values]
        new = set()
        for val in values:
            if val.__class__ not in native_numeric_types:
                raise InfiniteModelError(
                    "Parameter '%s': supports must be numbers, not %r"
                    % (self._name, val)
                )
            if not self.lb <= val <= self.ub:
                raise InfiniteModelError(
                    "Parameter '%s': support %s lies outside of the bounds %s"
                    % (self._name, val, self._bounds)
                )
            val = float(val)
            if val not in self._supports:
                new.add(val)
        if not new:
            return False
        self._supports = sorted(new.union(self._supports))
        logger.debug(
            "Parameter '%s': added %s support(s) (%s total)",
            self._name,
            len(new),
            len(self._supports),
        )
        return True

    def __str__(self):
        return self._name

    __repr__ = __str__
