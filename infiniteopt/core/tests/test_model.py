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
from pyomo.common.enums import maximize, minimize

from infiniteopt.backends.transcription import TranscriptionBackend
from infiniteopt.common.errors import InfiniteModelError
from infiniteopt.core.constraints import ConstraintKind
from infiniteopt.core.model import InfiniteModel


class TestInfiniteModel(unittest.TestCase):
    def test_default_construction(self):
        m = InfiniteModel()
        self.assertEqual(m.name, 'unknown')
        self.assertEqual(m.config.default_num_supports, 10)
        self.assertIsInstance(m.backend, TranscriptionBackend)
        self.assertIs(m.backend.model, m)
        self.assertIsNone(m.optimizer_model)
        self.assertFalse(m.optimizer_model_ready)
        self.assertIsNone(m.objective)
        self.assertEqual(m.objective_sense, minimize)

    def test_name(self):
        m = InfiniteModel(name='m')
        self.assertEqual(m.name, 'm')
        self.assertEqual(m.build_optimizer_model().name, 'm')
        m.add_variable('y')
        with self.assertRaisesRegex(InfiniteModelError, "InfiniteModel 'm'"):
            m.add_variable('y')

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            InfiniteModel(default_num_supports=0)
        with self.assertRaises(ValueError):
            InfiniteModel(nonexistent_option=1)

    def test_backend_selection(self):
        backend = TranscriptionBackend(solver='glpk')
        m = InfiniteModel(backend=backend, name='m')
        self.assertIs(m.backend, backend)
        self.assertTrue(backend.has_optimizer())
        with self.assertRaisesRegex(InfiniteModelError, "already attached"):
            InfiniteModel(backend=backend)

    def test_names(self):
        m = InfiniteModel()
        t = m.add_parameter('t', bounds=(0, 1))
        x = m.add_variable('x', parameter_refs=t)
        c = m.add_constraint('c', x >= 0)
        self.assertIs(m.find_component('t'), t)
        self.assertIs(m.find_component('x'), x)
        self.assertIs(m.find_component('c'), c)
        self.assertIsNone(m.find_component('y'))
        with self.assertRaisesRegex(InfiniteModelError, "already in use"):
            m.add_variable('t')
        with self.assertRaisesRegex(InfiniteModelError, "not a valid name"):
            m.add_variable('x y')
        with self.assertRaisesRegex(InfiniteModelError, "not a valid name"):
            m.add_parameter(3, bounds=(0, 1))
        self.assertEqual(len(m.variables()), 1)
        self.assertEqual(len(m.parameters()), 1)

    def test_add_constraint(self):
        m = InfiniteModel()
        t = m.add_parameter('t', bounds=(0, 1), supports=[0, 1])
        s = m.add_parameter('s', bounds=(0, 1), supports=[0, 0.5, 1])
        x = m.add_variable('x', parameter_refs=(s,))
        y = m.add_variable('y')

        c1 = m.add_constraint('c1', y >= 1)
        self.assertIs(c1.kind, ConstraintKind.general)
        self.assertFalse(c1.is_bound_constraint())
        self.assertIsNone(c1.variable)
        self.assertFalse(c1.is_infinite())
        self.assertEqual(c1.supports(), [None])
        self.assertEqual(str(c1), 'c1 : y >= 1')

        c2 = m.add_constraint('c2', x + y <= 2)
        self.assertTrue(c2.is_infinite())
        self.assertEqual(c2.supports(), [0.0, 0.5, 1.0])

        # parameters are ordered like their declaration in the model
        c3 = m.add_constraint('c3', x * t == y)
        self.assertEqual(len(c3.parameter_refs), 2)
        self.assertIs(c3.parameter_refs[0], t)
        self.assertIs(c3.parameter_refs[1], s)
        self.assertEqual(len(c3.supports()), 6)

        self.assertEqual([c.name for c in m.constraints()], ['c1', 'c2', 'c3'])

    def test_add_constraint_errors(self):
        m = InfiniteModel()
        t = m.add_parameter('t', bounds=(0, 1))
        y = m.add_variable('y')
        with self.assertRaisesRegex(InfiniteModelError, "relational expression"):
            m.add_constraint('c', y + 1)
        with self.assertRaisesRegex(InfiniteModelError, "any variables"):
            m.add_constraint('c', t >= 0)

        other = InfiniteModel(name='other')
        z = other.add_variable('z')
        with self.assertRaisesRegex(InfiniteModelError, "does not belong"):
            m.add_constraint('c', y + z >= 0)
        self.assertEqual(m.constraints(), [])

    def test_objective(self):
        m = InfiniteModel()
        t = m.add_parameter('t', bounds=(0, 1))
        x = m.add_variable('x', parameter_refs=t)
        y = m.add_variable('y')

        m.set_objective(2 * y + x(0), sense=maximize)
        self.assertEqual(str(m.objective), '(2 * y) + x(0.0)')
        self.assertEqual(m.objective_sense, maximize)

        m.set_objective(y, sense='minimize')
        self.assertIs(m.objective, y)
        self.assertEqual(m.objective_sense, minimize)

        m.set_objective(None)
        self.assertIsNone(m.objective)

        m.set_objective(5)
        self.assertEqual(m.objective, 5)

    def test_objective_errors(self):
        m = InfiniteModel()
        t = m.add_parameter('t', bounds=(0, 1))
        x = m.add_variable('x', parameter_refs=t)
        y = m.add_variable('y')
        with self.assertRaisesRegex(InfiniteModelError, "finite objectives"):
            m.set_objective(x + y)
        with self.assertRaisesRegex(InfiniteModelError, "finite objectives"):
            m.set_objective(y * t)
        with self.assertRaisesRegex(InfiniteModelError, "numeric expression"):
            m.set_objective(y >= 1)
        with self.assertRaisesRegex(InfiniteModelError, "numeric expression"):
            m.set_objective('y')
        self.assertIsNone(m.objective)

    def test_build_optimizer_model(self):
        m = InfiniteModel()
        y = m.add_variable('y')
        om = m.build_optimizer_model()
        self.assertTrue(m.optimizer_model_ready)
        self.assertIs(m.optimizer_model, om)
        m.set_objective(y)
        self.assertFalse(m.optimizer_model_ready)
        self.assertIs(m.optimizer_model, om)

    def test_set_optimizer(self):
        m = InfiniteModel()
        self.assertFalse(m.backend.has_optimizer())
        m.set_optimizer('glpk', tmlim=10)
        self.assertTrue(m.backend.has_optimizer())
        self.assertEqual(m.backend.config.solver, 'glpk')
        self.assertEqual(m.backend.config.solver_options.value(), {'tmlim': 10})
        m.set_optimizer('cbc')
        self.assertEqual(m.backend.config.solver_options.value(), {})


if __name__ == '__main__':
    unittest.main()
