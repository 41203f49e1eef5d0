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

"""Client runtime. The runtime holds the connections to the SPDZ
engines and implements the two halves of the client protocol:
submitting private inputs and receiving an authenticated output.

A :class:`Client` is normally obtained from :func:`create_client`
which connects to every engine and returns a Deferred that fires with
the connected client::

    def protocol(client):
        d = client.submit(100)
        d.addCallback(lambda _: client.reveal())
        d.addCallback(lambda result: print("Result:", result))
        d.addBoth(lambda _: client.shutdown())

    pre_client = create_client(0, 1, params, players)
    pre_client.addCallback(protocol)

Both halves rely on triples of field elements, one share from each
engine. Only the sum of all shares is checked; a single engine's share
reveals nothing and proves nothing.
"""

__docformat__ = "restructuredtext"

import struct
from collections import deque

from twisted.internet import reactor
from twisted.internet.defer import Deferred, DeferredList, gatherResults, \
    succeed, fail, FirstError
from twisted.internet.protocol import ClientFactory
from twisted.logger import Logger
from twisted.protocols.basic import IntNStringReceiver

from spdzclient.constants import TRIPLE_SIZE
from spdzclient.errors import ConfigError, PartyConnectionError, \
    ProtocolError, TripleMismatchError, AuthenticationError
from spdzclient.octetstream import OctetStream, LENGTH_SIZE
from spdzclient.util import recombine

log = Logger()

#: Format of the client identifier sent raw when connecting.
CLIENT_ID_FORMAT = "<i"

#: Range of client identifiers which can be sent.
MIN_CLIENT_ID = -2**31
MAX_CLIENT_ID = 2**31 - 1


def is_valid_triple(a, b, c):
    """Check the multiplicative relation of a triple.

    >>> from spdzclient.field import GF
    >>> Zp = GF(19)
    >>> is_valid_triple(Zp(3), Zp(5), Zp(15))
    True
    >>> is_valid_triple(Zp(3), Zp(5), Zp(16))
    False
    """
    return a * b == c


def _unwrap_first_error(failure):
    """Replace a :exc:`FirstError` with the failure it wraps."""
    failure.trap(FirstError)
    return failure.value.subFailure


class EngineConnection(IntNStringReceiver):
    """Send and receive messages from one engine.

    Messages are octet streams prefixed with their length as a
    little-endian integer of :data:`LENGTH_SIZE` bytes.
    """

    structFormat = "<Q"
    prefixLength = LENGTH_SIZE
    MAX_LENGTH = 1 << 24

    def __init__(self):
        self.party_id = None
        self.closed = False
        self.error = None
        self.lost_connection = Deferred()
        #: Messages received but not yet asked for.
        self.incoming_data = deque()
        self.waiting_deferreds = deque()

    def connectionMade(self):
        client = self.factory.client
        try:
            # The identifier goes out raw, only later messages are framed.
            header = struct.pack(CLIENT_ID_FORMAT, client.id)
            os = OctetStream()
            os.store(client.finish)
        except (struct.error, OverflowError, ValueError) as e:
            self.factory.handshake_failed(self, e)
            return
        self.transport.write(header)
        self.sendStream(os)
        self.factory.connection_made(self)

    def connectionLost(self, reason):
        self.closed = True
        if self.error is None:
            self.error = PartyConnectionError(
                "Lost connection to party %d: %s"
                % (self.party_id, reason.getErrorMessage()))
        while self.waiting_deferreds:
            self.waiting_deferreds.popleft().errback(self.error)
        self.lost_connection.callback(self)

    def stringReceived(self, string):
        """Called when a message is received.

        The message is handed to the oldest Deferred returned by
        :meth:`expect_stream` or queued until one is asked for.
        """
        os = OctetStream(string)
        if self.waiting_deferreds:
            self.waiting_deferreds.popleft().callback(os)
        else:
            self.incoming_data.append(os)

    def lengthLimitExceeded(self, length):
        self.error = ProtocolError("Party %d announced a message of %d "
                                   "bytes" % (self.party_id, length))
        IntNStringReceiver.lengthLimitExceeded(self, length)

    def expect_stream(self):
        """Return a Deferred which fires with the next message."""
        if self.incoming_data:
            return succeed(self.incoming_data.popleft())
        if self.closed:
            return fail(self.error)
        deferred = Deferred()
        self.waiting_deferreds.append(deferred)
        return deferred

    def sendStream(self, os):
        """Send an octet stream as one message."""
        self.sendString(os.getvalue())

    def loseConnection(self):
        """Disconnect this protocol instance."""
        self.transport.loseConnection()


class EngineConnectionFactory(ClientFactory):
    """Factory for the connection to a single engine.

    Connections are never retried: *connected* fires with the
    :class:`EngineConnection` or fails with
    :exc:`PartyConnectionError`, or with :exc:`ProtocolError` if the
    handshake cannot be encoded.
    """

    protocol = EngineConnection

    def __init__(self, client, party, connected):
        """Initialize the factory."""
        self.client = client
        self.party = party
        self.connected = connected
        #: The connection, once one has been made.
        self.instance = None

    def buildProtocol(self, addr):
        protocol = ClientFactory.buildProtocol(self, addr)
        protocol.party_id = self.party.id
        self.instance = protocol
        return protocol

    def connection_made(self, protocol):
        log.info("Connected to {party!r}", party=self.party)
        self.connected.callback(protocol)

    def handshake_failed(self, protocol, error):
        protocol.loseConnection()
        self.connected.errback(ProtocolError(
            "Handshake with %r failed: %s" % (self.party, error)))

    def clientConnectionFailed(self, connector, reason):
        self.connected.errback(PartyConnectionError(
            "Cannot connect to %r: %s" % (self.party, reason.getErrorMessage())))


class Client(object):
    """Connections of one client to all engines of a computation."""

    def __init__(self, client_id, finish, params):
        """Initialize a client.

        The *client_id* identifies this client to the engines and
        *finish* tells them whether more clients will join the round.
        The identifier must fit in a signed 4-byte integer and the
        flag must be 0 or 1, otherwise :exc:`ConfigError` is raised.
        """
        if not MIN_CLIENT_ID <= client_id <= MAX_CLIENT_ID:
            raise ConfigError("Client identifier %d is outside the range "
                              "%d to %d" % (client_id, MIN_CLIENT_ID,
                                            MAX_CLIENT_ID))
        if finish not in (0, 1):
            raise ConfigError("Finish flag must be 0 or 1, got %r" % finish)
        self.id = client_id
        self.finish = int(finish)
        self.params = params
        self.Zp = params.Zp
        #: Connections indexed by party ID.
        self.protocols = {}

    def add_party(self, party_id, protocol):
        self.protocols[party_id] = protocol

    @property
    def num_parties(self):
        return len(self.protocols)

    def connections(self):
        """The connections in party order."""
        return [self.protocols[party_id] for party_id in sorted(self.protocols)]

    def receive_streams(self):
        """Receive one message from every engine.

        The returned Deferred fires with the messages in party order
        once all of them have arrived.
        """
        result = gatherResults([protocol.expect_stream()
                                for protocol in self.connections()],
                               consumeErrors=True)
        result.addErrback(_unwrap_first_error)
        return result

    def receive_triples(self, count):
        """Receive *count* triples of shares from every engine.

        The shares are summed across all engines and the result is a
        list of *count* ``(a, b, c)`` tuples. No relation between the
        elements is checked here.
        """

        def sum_shares(streams):
            party_shares = []
            for party_id, os in zip(sorted(self.protocols), streams):
                try:
                    elements = [self.Zp.unpack(os)
                                for _ in range(TRIPLE_SIZE * count)]
                    os.done()
                except ProtocolError as e:
                    raise ProtocolError("Bad message from party %d: %s"
                                        % (party_id, e))
                party_shares.append(elements)

            # Each column holds the shares of one element, one share
            # per party.
            sums = [recombine(column, self.Zp) for column in zip(*party_shares)]
            return [tuple(sums[i:i + TRIPLE_SIZE])
                    for i in range(0, len(sums), TRIPLE_SIZE)]

        result = self.receive_streams()
        result.addCallback(sum_shares)
        return result

    def send_private_inputs(self, values):
        """Send private inputs masked with a random value.

        Shares of one preprocessed triple per input are received from
        each engine, combined and checked. Then ``value + a`` is sent
        to every engine, which lets the engines compute shares of
        each value.

        Returns a Deferred which fires when the masked values have
        been sent, or fails with :exc:`TripleMismatchError` in which
        case nothing is sent.
        """
        assert len(values) > 0, "Cannot send an empty list of inputs"
        values = [self.Zp(value) for value in values]

        def mask_and_send(triples):
            # Check triple relations (is a party cheating?)
            for i, (a, b, c) in enumerate(triples):
                if not is_valid_triple(a, b, c):
                    raise TripleMismatchError("Incorrect triple at %d, "
                                              "aborting" % i)

            os = OctetStream()
            for value, (a, _, _) in zip(values, triples):
                (value + a).pack(os)
            for protocol in self.connections():
                protocol.sendStream(os)
            log.info("Sent {count} masked input(s) to {parties} parties",
                     count=len(values), parties=self.num_parties)

        result = self.receive_triples(len(values))
        result.addCallback(mask_and_send)
        return result

    def submit(self, value):
        """Submit a single private input."""
        return self.send_private_inputs([value])

    def reveal(self):
        """Receive the result and check it.

        Every engine sends shares of the result *y*, a random value
        *r* and their product *w*. An engine which alters its share of
        *y* cannot adjust its share of *w* without knowing *r*, so the
        result is authentic if the sums satisfy ``y * r == w``.

        Returns a Deferred which fires with the result or fails with
        :exc:`AuthenticationError`.
        """

        def authenticate(bundles):
            (y, r, w), = bundles
            if not is_valid_triple(y, r, w):
                raise AuthenticationError("Unable to authenticate output "
                                          "value as correct, aborting")
            return y

        result = self.receive_triples(1)
        result.addCallback(authenticate)
        return result

    def shutdown(self):
        """Close all connections.

        Returns a Deferred which fires when every connection is
        closed.
        """
        lost = []
        for protocol in self.connections():
            if not protocol.closed:
                protocol.loseConnection()
            lost.append(protocol.lost_connection)
        return DeferredList(lost)


def create_client(client_id, finish, params, players):
    """Create a :class:`Client` and connect to the engines.

    The engines are contacted in party order. The return value is a
    Deferred which fires with the client when all connections are
    established and the client identifier and *finish* flag have been
    sent on each of them.

    If any connection fails, the connections which did succeed are
    closed and the Deferred fails with :exc:`PartyConnectionError`.
    An invalid identifier or flag fails it with :exc:`ConfigError`
    before any connection is attempted.
    """
    try:
        client = Client(client_id, finish, params)
    except ConfigError:
        return fail()

    attempts = []
    for party_id in sorted(players):
        party = players[party_id]
        connected = Deferred()
        factory = EngineConnectionFactory(client, party, connected)
        log.debug("Will connect to {party!r}", party=party)
        reactor.connectTCP(party.host, party.port, factory)
        attempts.append(connected)

    def check_connections(results):
        failures = []
        for success, result in results:
            if success:
                client.add_party(result.party_id, result)
            else:
                failures.append(result)
        if not failures:
            return client

        # Abandon the whole set.
        closed = client.shutdown()
        closed.addCallback(lambda _: failures[0])
        return closed

    result = DeferredList(attempts, consumeErrors=True)
    result.addCallback(check_connections)
    return result


if __name__ == "__main__":
    import doctest    #pragma NO COVER
    doctest.testmod() #pragma NO COVER
