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

"""
Script to generate the installer for infiniteopt.
"""

import os
from setuptools import setup, find_packages, Command
from setuptools.errors import OptionError


def import_infiniteopt_module(*path):
    _module_globals = dict(globals())
    _module_globals['__name__'] = None
    _source = os.path.join(os.path.dirname(__file__), *path)
    with open(_source) as _FILE:
        exec(_FILE.read(), _module_globals)
    return _module_globals


def get_version():
    # Source infiniteopt/version/info.py to get the version number
    return import_infiniteopt_module('infiniteopt', 'version', 'info.py')[
        '__version__'
    ]


class DependenciesCommand(Command):
    """Custom setuptools command

    This will output the list of dependencies, including any optional
    dependencies for 'extras_require` targets, so that they can be
    passed on to a 'conda install' command when setting up a test
    environment.
    """

    description = "list the dependencies for this package"
    user_options = [('extras=', None, 'extra targets to include')]

    def initialize_options(self):
        self.extras = None

    def finalize_options(self):
        if self.extras is not None:
            self.extras = [e for e in (_.strip() for _ in self.extras.split(',')) if e]
            for e in self.extras:
                if e not in setup_kwargs['extras_require']:
                    raise OptionError(
                        "extras can only include {%s}"
                        % (', '.join(setup_kwargs['extras_require']))
                    )

    def run(self):
        deps = list(setup_kwargs['install_requires'])
        if self.extras is not None:
            for e in self.extras:
                deps.extend(setup_kwargs['extras_require'][e])
        print(' '.join(deps))


setup_kwargs = dict(
    name='infiniteopt',
    description='Infinite-dimensional optimization models transcribed to and '
    'solved with Pyomo',
    license='BSD-3-Clause',
    cmdclass={'dependencies': DependenciesCommand},
    version=get_version(),
    python_requires='>=3.9',
    install_requires=['pyomo>=6.7.2'],
    extras_require={
        'tests': ['coverage', 'pytest'],
    },
    packages=find_packages(include=("infiniteopt", "infiniteopt.*")),
)

setup(**setup_kwargs)
