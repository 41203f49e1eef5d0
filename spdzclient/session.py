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

"""Session driver. A :class:`Session` runs the complete life of a
client: it connects to the engines, submits the private input, waits
for the result and checks it. The states are::

  DISCONNECTED -> CONNECTED -> INPUT_SUBMITTED -> RESULT_PENDING -> VERIFIED
        |             |                                 |
        +-------------+------------> ABORTED <----------+

:data:`VERIFIED` and :data:`ABORTED` are terminal. The connections
are closed when either is reached, and only then does the Deferred
returned by :meth:`Session.run` fire.
"""

__docformat__ = "restructuredtext"

from optparse import OptionGroup

from twisted.logger import Logger

from spdzclient.constants import PREP_DIR, DEFAULT_LGP, DEFAULT_DEGREE
from spdzclient.runtime import create_client

log = Logger()

DISCONNECTED    = "disconnected"
CONNECTED       = "connected"
INPUT_SUBMITTED = "input submitted"
RESULT_PENDING  = "result pending"
VERIFIED        = "verified"
ABORTED         = "aborted"


class Session(object):
    """One round of a client against a fixed set of engines."""

    @staticmethod
    def add_options(parser):
        group = OptionGroup(parser, "Session options")
        parser.add_option_group(group)

        group.add_option("--prep-dir", metavar="DIR",
                         help="Directory holding the setup data written "
                         "by the engines. Defaults to '%s'." % PREP_DIR)
        group.add_option("-k", "--security-parameter", type="int",
                         metavar="K",
                         help="Bit length of the prime modulus, used to "
                         "locate the setup data. Defaults to %d."
                         % DEFAULT_LGP)
        group.add_option("--degree", type="int", metavar="N",
                         help="Degree of the binary extension field. "
                         "Defaults to %d." % DEFAULT_DEGREE)
        group.add_option("-c", "--config", metavar="FILE",
                         help="Party configuration file. Overrides the "
                         "host name and port base.")

        parser.set_defaults(prep_dir=PREP_DIR,
                            security_parameter=DEFAULT_LGP,
                            degree=DEFAULT_DEGREE,
                            config=None)

    def __init__(self, client_id, finish, value, params, players):
        """Initialize a session.

        The *params* are the field parameters loaded with
        :func:`spdzclient.config.load_params` and *players* maps party
        IDs to :class:`spdzclient.config.Party` addresses.
        """
        self.client_id = client_id
        self.finish = finish
        self.value = value
        self.params = params
        self.players = players
        self.client = None
        self.state = DISCONNECTED
        #: The authenticated result, set when the session is verified.
        self.result = None

    def _enter(self, state):
        log.info("Client {id}: {old} -> {new}",
                 id=self.client_id, old=self.state, new=state)
        self.state = state

    def run(self):
        """Run the session.

        Returns a Deferred which fires with the authenticated result,
        or fails with the :exc:`spdzclient.errors.ClientError` that
        aborted the session.
        """
        result = create_client(self.client_id, self.finish,
                               self.params, self.players)
        result.addCallback(self._connected)
        result.addCallback(self._input_submitted)
        result.addCallbacks(self._verified, self._aborted)
        result.addBoth(self._close)
        return result

    def _connected(self, client):
        self.client = client
        self._enter(CONNECTED)
        return client.submit(self.value)

    def _input_submitted(self, _):
        self._enter(INPUT_SUBMITTED)
        self._enter(RESULT_PENDING)
        return self.client.reveal()

    def _verified(self, result):
        self._enter(VERIFIED)
        self.result = result
        return result

    def _aborted(self, failure):
        self._enter(ABORTED)
        log.info("Client {id} aborted: {error}",
                 id=self.client_id, error=failure.getErrorMessage())
        return failure

    def _close(self, result):
        if self.client is None:
            return result
        closed = self.client.shutdown()
        closed.addCallback(lambda _: result)
        return closed
