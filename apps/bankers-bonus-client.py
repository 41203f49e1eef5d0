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

# This example is a client for the bankers bonus computation. Each
# banker submits the size of their annual bonus, a private value, to
# the SPDZ engines, and the engines find out which banker pays for
# lunch: the one with the biggest bonus. Nobody learns the bonus of
# anybody else.
#
# Each connecting client sends an increasing identifier, starting
# with 0, and a flag telling the engines whether more clients will
# join this round (0) or whether the result should be computed now
# (1). The result is the identifier of the winning client, returned
# together with authenticating values so that the client can detect a
# cheating engine.
#
# With two engines running on localhost, the clients are started
# like this:
#
# % ./bankers-bonus-client.py 0 2 100 0
# % ./bankers-bonus-client.py 1 2 200 0
# % ./bankers-bonus-client.py 2 2 50 1
#
# and all three should report that the client with identifier 1 won.
#
# The field parameters are loaded from the engines' setup directory,
# see generate-params.py for creating one for testing.

import sys
from optparse import OptionParser

from twisted.internet import reactor
from twisted.logger import globalLogBeginner, textFileLogObserver, \
    FilteringLogObserver, LogLevelFilterPredicate, LogLevel

from spdzclient.config import load_params, params_filename, \
    generate_players, load_config
from spdzclient.constants import DEFAULT_HOST, DEFAULT_PORT_BASE
from spdzclient.errors import ClientError
from spdzclient.runtime import MAX_CLIENT_ID
from spdzclient.session import Session

parser = OptionParser(usage="%prog <client identifier> "
                      "<number of spdz parties> <salary to compare> "
                      "<finish (0 false, 1 true)> [host name] [port base]")
parser.add_option("-v", "--verbose", action="store_true",
                  help="log the progress of the protocol")
Session.add_options(parser)
parser.set_defaults(verbose=False)
(options, args) = parser.parse_args()

if len(args) < 4:
    parser.print_usage()
    sys.exit(0)

try:
    client_id, num_parties, value, finish = [int(arg) for arg in args[:4]]
    port_base = int(args[5]) if len(args) > 5 else DEFAULT_PORT_BASE
except ValueError as e:
    parser.error("arguments must be integers: %s" % e)
host = args[4] if len(args) > 4 else DEFAULT_HOST

if client_id < 0:
    parser.error("client identifier must not be negative")
if client_id > MAX_CLIENT_ID:
    parser.error("client identifier must be at most %d" % MAX_CLIENT_ID)
if num_parties < 1:
    parser.error("need at least one party")
if finish not in (0, 1):
    parser.error("finish must be 0 or 1")

if options.verbose:
    level = LogLevel.debug
else:
    level = LogLevel.warn
predicate = LogLevelFilterPredicate(defaultLogLevel=level)
observer = FilteringLogObserver(textFileLogObserver(sys.stderr), [predicate])
globalLogBeginner.beginLoggingTo([observer], redirectStandardIO=False)

try:
    params = load_params(params_filename(num_parties,
                                         options.security_parameter,
                                         options.degree, options.prep_dir))
    if options.config:
        players = load_config(options.config)
        if len(players) != num_parties:
            raise ClientError("%s describes %d parties, expected %d"
                              % (options.config, len(players), num_parties))
    else:
        players = generate_players(host, port_base, num_parties)
except ClientError as e:
    sys.stderr.write("%s\n" % e)
    sys.exit(1)

session = Session(client_id, finish, value, params, players)

# Stays 1 unless the result is authenticated.
exit_code = [1]

def report(result):
    print("Winning client id is : %d" % int(result))
    exit_code[0] = 0

def abort(failure):
    if failure.check(ClientError):
        sys.stderr.write("%s\n" % failure.getErrorMessage())
    else:
        failure.printTraceback(sys.stderr)

def start():
    result = session.run()
    result.addCallbacks(report, abort)
    result.addBoth(lambda _: reactor.stop())

reactor.callWhenRunning(start)
reactor.run()
sys.exit(exit_code[0])
