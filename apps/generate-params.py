#!/usr/bin/env python3

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

# This application writes the field parameters for a computation with
# a given number of engines. The engines' own setup normally does this;
# the generated files are meant for testing clients against simulated
# engines. As an example, the parameters for two engines are written to
# Player-Data/2-128-40/Params-Data by:
#
# % ./generate-params.py -n 2
#
# Adding --config parties.ini also writes a party configuration file
# with the engines on --host starting at port --port-base.

from optparse import OptionParser

from spdzclient.config import FieldParameters, save_params, \
    params_filename, generate_players, generate_configs
from spdzclient.constants import PREP_DIR, DEFAULT_LGP, DEFAULT_DEGREE, \
    DEFAULT_HOST, DEFAULT_PORT_BASE
from spdzclient.util import find_prime

parser = OptionParser()
parser.add_option("-n", "--parties", dest="n", type="int",
                  help="number of engines")
parser.add_option("-k", "--security-parameter", type="int", metavar="K",
                  help="bit length of the prime modulus")
parser.add_option("--degree", type="int", metavar="N",
                  help="degree of the binary extension field")
parser.add_option("--prep-dir", metavar="DIR",
                  help="directory for the setup data")
parser.add_option("-c", "--config", metavar="FILE",
                  help="also write a party configuration file")
parser.add_option("--host", help="host name of the engines")
parser.add_option("--port-base", type="int",
                  help="port of the first engine")

parser.set_defaults(n=2, security_parameter=DEFAULT_LGP,
                    degree=DEFAULT_DEGREE, prep_dir=PREP_DIR,
                    host=DEFAULT_HOST, port_base=DEFAULT_PORT_BASE)

(options, args) = parser.parse_args()

if options.n < 1:
    parser.error("need at least one engine")
if options.security_parameter < 2:
    parser.error("the prime must have at least two bits")

prime = find_prime(2**(options.security_parameter - 1))
params = FieldParameters(prime, options.degree)
try:
    params.GF2n
except ValueError as e:
    parser.error(str(e))

filename = params_filename(options.n, options.security_parameter,
                           options.degree, options.prep_dir)
save_params(filename, params)
print("Wrote field parameters to %s" % filename)

if options.config:
    players = generate_players(options.host, options.port_base, options.n)
    generate_configs(players, options.config).write()
    print("Wrote party configuration to %s" % options.config)
