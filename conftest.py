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

import pytest

_implicit_markers = {'default'}
_extended_implicit_markers = _implicit_markers.union({'solver'})
_solver_available = {}


def _check_solver(name):
    if name not in _solver_available:
        from pyomo.opt import SolverFactory

        _solver_available[name] = bool(
            SolverFactory(name).available(exception_flag=False)
        )
    return _solver_available[name]


def pytest_collection_modifyitems(items):
    """
    Mark any unmarked tests with the implicit marker ('default')
    """
    for item in items:
        try:
            next(item.iter_markers())
        except StopIteration:
            for marker in _implicit_markers:
                item.add_marker(getattr(pytest.mark, marker))


def pytest_runtest_setup(item):
    """
    Decide whether a (possibly marked) test should run.

        1) If the user asked for a specific solver with '--solver', skip
           every test not marked with that solver.
        2) If the user asked for a specific marker with '-m', fall back on
           pytest's default behavior.
        3) Otherwise, run unmarked, 'default', and 'solver' tests, and skip
           'solver' tests whose solver cannot be found.
    """
    solvernames = [mark.args[0] for mark in item.iter_markers(name="solver")]
    solveroption = item.config.getoption("--solver")
    markeroption = item.config.getoption("-m")
    item_markers = set(mark.name for mark in item.iter_markers())
    if solveroption:
        if solveroption not in solvernames:
            pytest.skip("SKIPPED: Test not marked {!r}".format(solveroption))
    elif markeroption:
        return
    elif item_markers:
        if not _implicit_markers.issubset(item_markers) and not item_markers.issubset(
            _extended_implicit_markers
        ):
            pytest.skip('SKIPPED: Only running default, solver, and unmarked tests.')
    for name in solvernames:
        if not _check_solver(name):
            pytest.skip("SKIPPED: solver {!r} is not available".format(name))


def pytest_addoption(parser):
    parser.addoption(
        "--solver",
        action="store",
        metavar="SOLVER",
        help="Run the tests that use the requested SOLVER.",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "solver(name): mark test as requiring the named solver"
    )
