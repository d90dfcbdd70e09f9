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

import pyomo.common.unittest as unittest
from pyomo.environ import Binary, Reals

from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.constraints import ConstraintKind, GeneralConstraintRef
from infiniteopt.core.expr import RelationSense
from infiniteopt.core.model import InfiniteModel
from infiniteopt.core.variables import (
    FixRef,
    GeneralVariableRef,
    LowerBoundRef,
    UpperBoundRef,
    VariableKind,
)


class TestVariables(unittest.TestCase):
    def setUp(self):
        self.m = InfiniteModel(name='m')
        self.t = self.m.add_parameter('t', bounds=(0, 2), supports=[0, 1, 2])
        self.s = self.m.add_parameter('s', bounds=(0, 1), supports=[0, 1])

    def test_finite_variable(self):
        y = self.m.add_variable('y', domain=Binary, initialize=1)
        self.assertIsInstance(y, GeneralVariableRef)
        self.assertIs(y.kind, VariableKind.finite)
        self.assertIs(y.model, self.m)
        self.assertEqual(y.name, 'y')
        self.assertIs(y.domain, Binary)
        self.assertEqual(y.initialize, 1)
        self.assertEqual(y.parameter_refs, ())
        self.assertFalse(y.is_infinite())
        self.assertEqual(y.supports(), [None])
        self.assertTrue(y.is_variable_type())
        self.assertFalse(y.is_parameter_type())

    def test_infinite_variable(self):
        x = self.m.add_variable('x', parameter_refs=(self.t, self.s))
        self.assertIs(x.kind, VariableKind.infinite)
        self.assertIs(x.domain, Reals)
        self.assertTrue(x.is_infinite())
        self.assertEqual(len(x.parameter_refs), 2)
        self.assertIs(x.parameter_refs[0], self.t)
        self.assertIs(x.parameter_refs[1], self.s)
        self.assertEqual(len(x.supports()), 6)
        self.assertEqual(x.supports()[1], (0.0, 1.0))

        z = self.m.add_variable('z', parameter_refs=self.t)
        self.assertEqual(z.supports(), [0.0, 1.0, 2.0])

    def test_invalid_parameter_refs(self):
        other = InfiniteModel(name='other')
        p = other.add_parameter('p', bounds=(0, 1))
        with self.assertRaisesRegex(InfiniteModelError, "only depend on"):
            self.m.add_variable('x', parameter_refs=p)
        with self.assertRaisesRegex(InfiniteModelError, "more than once"):
            self.m.add_variable('x', parameter_refs=(self.t, self.t))
        with self.assertRaisesRegex(InfiniteModelError, "fixed and bounded"):
            self.m.add_variable('x', lb=0, fix=1)
        with self.assertRaisesRegex(InfiniteModelError, "initialize"):
            self.m.add_variable('x', initialize='a')

    def test_invalid_bounds_leave_model_unchanged(self):
        for kwds in ({'lb': '1'}, {'lb': 0, 'ub': 'b'}, {'fix': 'a'}):
            with self.assertRaisesRegex(InfiniteModelError, "non-numeric"):
                self.m.add_variable('x', parameter_refs=self.t, **kwds)
            self.assertIsNone(self.m.find_component('x'))
            self.assertEqual(self.m.variables(), [])

        x = self.m.add_variable('x', lb=1)
        self.assertIs(self.m.find_component('x'), x)

    def test_invalid_point_leaves_supports_unchanged(self):
        x = self.m.add_variable('x', parameter_refs=(self.t, self.s))
        self.m.build_optimizer_model()
        with self.assertRaisesRegex(InfiniteModelError, "outside of the bounds"):
            x(0.5, 3)
        with self.assertRaisesRegex(InfiniteModelError, "non-numeric"):
            x(0.5, 'a')
        self.assertEqual(self.t.supports, (0.0, 1.0, 2.0))
        self.assertEqual(self.s.supports, (0.0, 1.0))
        self.assertEqual(self.m.point_variables(), [])
        self.assertTrue(self.m.optimizer_model_ready)

    def test_point_variable(self):
        x = self.m.add_variable('x', parameter_refs=self.t, lb=0)
        px = x(1)
        self.assertIs(px.kind, VariableKind.point)
        self.assertEqual(px.name, 'x(1.0)')
        self.assertIs(px.infinite_variable, x)
        self.assertEqual(px.point, (1.0,))
        self.assertEqual(px.parameter_refs, ())
        self.assertFalse(px.is_infinite())
        self.assertEqual(px.supports(), [1.0])
        self.assertIs(x(1.0), px)
        self.assertEqual(px.lb, 0)
        self.assertTrue(px.has_lower_bound())

        # new points become supports of the parameter
        px = x(0.5)
        self.assertTrue(self.t.has_support(0.5))
        self.assertEqual(len(self.m.point_variables()), 2)

    def test_point_variable_errors(self):
        x = self.m.add_variable('x', parameter_refs=(self.t, self.s))
        y = self.m.add_variable('y')
        with self.assertRaisesRegex(InfiniteModelError, "Only infinite"):
            y(0)
        with self.assertRaisesRegex(InfiniteModelError, "2 parameter"):
            x(0)
        with self.assertRaisesRegex(InfiniteModelError, "outside of the bounds"):
            x(0, 3)
        with self.assertRaisesRegex(InfiniteModelError, "non-numeric"):
            x(0, 'a')

        px = x(0, 0)
        with self.assertRaisesRegex(InfiniteModelError, "Cannot fix the point"):
            px.fix(1)
        with self.assertRaisesRegex(InfiniteModelError, "Cannot set the lower"):
            px.set_lower_bound(1)
        with self.assertRaisesRegex(InfiniteModelError, "through 'x'"):
            LowerBoundRef(px)

    def test_bounds(self):
        x = self.m.add_variable('x', parameter_refs=self.t, lb=0, ub=10)
        self.assertEqual(x.lb, 0)
        self.assertEqual(x.ub, 10)
        self.assertFalse(x.is_fixed())

        lb = LowerBoundRef(x)
        self.assertIsInstance(lb, GeneralConstraintRef)
        self.assertIs(lb.kind, ConstraintKind.lower_bound)
        self.assertEqual(lb.name, 'x_lower_bound')
        self.assertIs(lb.variable, x)
        self.assertIs(lb.relation.sense, RelationSense.geq)
        self.assertTrue(lb.is_bound_constraint())
        self.assertTrue(lb.is_infinite())
        self.assertEqual(lb.supports(), [0.0, 1.0, 2.0])

        ub = UpperBoundRef(x)
        self.assertIs(ub.kind, ConstraintKind.upper_bound)
        self.assertIs(ub.relation.sense, RelationSense.leq)
        self.assertEqual(ub.relation.rhs, 10)

        # updating a bound keeps the reference
        x.set_upper_bound(5)
        self.assertIs(UpperBoundRef(x), ub)
        self.assertEqual(ub.relation.rhs, 5)

        x.delete_lower_bound()
        self.assertIsNone(x.lb)
        with self.assertRaisesRegex(InfiniteModelError, "does not have a lower"):
            LowerBoundRef(x)
        with self.assertRaisesRegex(InfiniteModelError, "does not have a lower"):
            x.delete_lower_bound()
        with self.assertRaisesRegex(InfiniteModelError, "does not have a fixed"):
            FixRef(x)
        with self.assertRaisesRegex(InfiniteModelError, "non-numeric"):
            x.set_lower_bound('a')

    def test_fix(self):
        y = self.m.add_variable('y', lb=0, ub=1)
        with self.assertRaisesRegex(InfiniteModelError, "existing bounds"):
            y.fix(3)
        y.fix(3, force=True)
        self.assertTrue(y.is_fixed())
        self.assertEqual(y.fixed_value, 3)
        self.assertIsNone(y.lb)
        self.assertIsNone(y.ub)
        fix = FixRef(y)
        self.assertIs(fix.kind, ConstraintKind.fix)
        self.assertIs(fix.relation.sense, RelationSense.eq)
        self.assertFalse(fix.is_infinite())
        self.assertEqual(len(y._bound_constraints()), 1)

        with self.assertRaisesRegex(InfiniteModelError, "unfix it"):
            y.set_lower_bound(0)

        y.unfix()
        self.assertFalse(y.is_fixed())
        with self.assertRaisesRegex(InfiniteModelError, "is not fixed"):
            y.unfix()

    def test_modifications_invalidate(self):
        y = self.m.add_variable('y')
        self.m.build_optimizer_model()
        self.assertTrue(self.m.optimizer_model_ready)
        y.set_lower_bound(1)
        self.assertFalse(self.m.optimizer_model_ready)

        self.m.build_optimizer_model()
        y.delete_lower_bound()
        self.assertFalse(self.m.optimizer_model_ready)

        self.m.build_optimizer_model()
        y.fix(2)
        self.assertFalse(self.m.optimizer_model_ready)

    def test_bound_constraint_order(self):
        x = self.m.add_variable('x', ub=1, lb=0)
        cons = x._bound_constraints()
        self.assertEqual(len(cons), 2)
        self.assertIs(cons[0], LowerBoundRef(x))
        self.assertIs(cons[1], UpperBoundRef(x))


if __name__ == '__main__':
    unittest.main()
