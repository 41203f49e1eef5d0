# This is the spdzclient setup script.
#
# For an install into the current environment, use:  pip install .
# For a development install, use:                    pip install -e .

# Copyright 2026 The spdzclient Developers.
#
# This file is part of spdzclient, an external client for SPDZ engines.
#
# spdzclient is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License (LGPL)
# as published by the Free Software Foundation, either version 3 of
# the License, or (at your option) any later version.
#
# spdzclient is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with spdzclient. If not, see <http://www.gnu.org/licenses/>.

import sys
if sys.version_info < (3, 6):
    raise SystemExit("spdzclient requires Python version 3.6 or later.")

from setuptools import setup

import spdzclient

setup(name='spdzclient',
      version=spdzclient.__version__,
      author='The spdzclient Developers',
      description='An external client for SPDZ multi-party computation engines',
      long_description="""\
spdzclient lets a party outside a SPDZ computation take part in it.
Features include:

* private inputs masked with preprocessed triples, which are checked
  before anything is sent.

* outputs authenticated with a random value and its product, so that
  a cheating engine is detected.

* arithmetic in prime fields and binary extension fields using the
  engines' wire format.

* a bankers bonus client as an example application.
""",
      keywords=[
        'crypto', 'cryptography', 'multi-party computation', 'MPC', 'SMPC',
        'SPDZ', 'external client', 'Beaver triples'
        ],
      license=spdzclient.__license__,
      packages=['spdzclient', 'spdzclient.test'],
      install_requires=['Twisted', 'gmpy2', 'configobj'],
      python_requires='>=3.6',
      platforms=['any'],
      classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Communications',
        'Topic :: Security :: Cryptography',
        'Topic :: Software Development :: Libraries :: Python Modules'
        ]
      )
