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

"""Utility functions and classes used for testing.

The engines are simulated by a :class:`Dealer` which sees everything
in the clear and plays the part of all engines at once. Each engine is
a :class:`FakeEngine` connection speaking the engine side of the wire
protocol, so the client under test talks to real sockets.
"""

import struct

from twisted.internet import reactor
from twisted.internet.defer import Deferred, gatherResults, maybeDeferred
from twisted.internet.protocol import ServerFactory
from twisted.protocols.basic import IntNStringReceiver
from twisted.trial.unittest import TestCase

from spdzclient.config import FieldParameters, Party
from spdzclient.octetstream import OctetStream, LENGTH_SIZE
from spdzclient.runtime import CLIENT_ID_FORMAT
from spdzclient.util import rand, share

#: Size of the raw client identifier.
CLIENT_ID_SIZE = struct.calcsize(CLIENT_ID_FORMAT)


class Dealer(object):
    """The engines of a bankers bonus computation, in the clear.

    Clients get one triple per input. When a client with the finish
    flag set has submitted its inputs, the identifier of the client
    with the largest first input is sent as result to every client.

    The attributes *corrupt_triple* and *corrupt_result* name a party
    whose share is off by one. The share is that of ``c`` and ``y``
    unless *triple_component* (0, 1, 2 for ``a``, ``b``, ``c``) or
    *result_component* (0, 1, 2 for ``y``, ``r``, ``w``) say otherwise.
    The attribute *hang_up* names a party which closes the connection
    instead of sending a triple, *short_triples* makes every party send
    one element too few and *padding* is appended to every triple
    message.
    """

    def __init__(self, params, num_parties, inputs_per_client=1):
        self.Zp = params.Zp
        self.num_parties = num_parties
        self.inputs_per_client = inputs_per_client
        self.corrupt_triple = None
        self.triple_component = 2
        self.corrupt_result = None
        self.result_component = 0
        self.padding = b""
        self.hang_up = None
        self.short_triples = False

        #: Every engine connection ever made.
        self.protocols = []
        #: Maps client ID to a mapping from party ID to connection.
        self.engines = {}
        self.finish_flags = {}
        #: Maps client ID to the triples and their shares.
        self.triples = {}
        #: Maps client ID to a mapping from party ID to masked inputs.
        self.masked = {}
        #: Plaintext inputs in the order they were completed.
        self.inputs = {}
        self.result = None
        self._input_waiters = []

    def random_element(self):
        return self.Zp(rand.randint(1, self.Zp.modulus - 1))

    def triple_shares(self, client_id, party_id):
        """The share of party *party_id* of the triples for a client."""
        if client_id not in self.triples:
            triples = []
            for _ in range(self.inputs_per_client):
                a = self.random_element()
                b = self.random_element()
                shares = [share(x, self.num_parties) for x in (a, b, a * b)]
                if self.corrupt_triple is not None:
                    shares[self.triple_component][self.corrupt_triple] += 1
                triples.append((a, shares))
            self.triples[client_id] = triples

        elements = []
        for _, shares in self.triples[client_id]:
            elements.extend([s[party_id] for s in shares])
        if self.short_triples:
            elements.pop()
        return elements

    def client_connected(self, engine):
        """Called when an engine has received the finish flag."""
        client_id = engine.client_id
        self.engines.setdefault(client_id, {})[engine.party_id] = engine
        self.finish_flags[client_id] = engine.finish
        if engine.party_id == self.hang_up:
            engine.transport.loseConnection()
        else:
            engine.sendElements(self.triple_shares(client_id,
                                                   engine.party_id),
                                self.padding)

    def masked_inputs(self, engine, masked):
        """Called when an engine has received masked inputs."""
        client_id = engine.client_id
        received = self.masked.setdefault(client_id, {})
        received[engine.party_id] = masked
        if len(received) < self.num_parties:
            return

        # A client must broadcast the same values to every engine.
        assert len(set(tuple(m) for m in received.values())) == 1
        values = [m - a for m, (a, _)
                  in zip(masked, self.triples[client_id])]
        self.inputs[client_id] = values
        self._notify_input_waiters()

        if self.finish_flags[client_id]:
            self.send_result()

    def winner(self):
        best_id, best = None, None
        for client_id, values in self.inputs.items():
            if best is None or values[0].signed() > best:
                best_id, best = client_id, values[0].signed()
        return best_id

    def send_result(self):
        self.result = self.Zp(self.winner())
        for client_id in self.inputs:
            r = self.random_element()
            shares = [share(x, self.num_parties)
                      for x in (self.result, r, self.result * r)]
            if self.corrupt_result is not None:
                shares[self.result_component][self.corrupt_result] += 1
            for party_id, engine in self.engines[client_id].items():
                engine.sendElements([s[party_id] for s in shares])

    def wait_for_inputs(self, count):
        """Return a Deferred firing when *count* clients have submitted."""
        d = Deferred()
        self._input_waiters.append((count, d))
        self._notify_input_waiters()
        return d

    def _notify_input_waiters(self):
        waiting = []
        for count, d in self._input_waiters:
            if len(self.inputs) >= count:
                d.callback(None)
            else:
                waiting.append((count, d))
        self._input_waiters = waiting


class FakeEngine(IntNStringReceiver):
    """The engine side of a client connection."""

    structFormat = "<Q"
    prefixLength = LENGTH_SIZE

    def __init__(self, dealer, party_id):
        self.dealer = dealer
        self.party_id = party_id
        self.client_id = None
        self.finish = None
        self.closed = False
        self.lost_connection = Deferred()
        self._header = b""

    def connectionMade(self):
        self.dealer.protocols.append(self)

    def dataReceived(self, data):
        if self.client_id is None:
            self._header += data
            if len(self._header) < CLIENT_ID_SIZE:
                return
            self.client_id, = struct.unpack(CLIENT_ID_FORMAT,
                                            self._header[:CLIENT_ID_SIZE])
            data = self._header[CLIENT_ID_SIZE:]
        if data:
            IntNStringReceiver.dataReceived(self, data)

    def stringReceived(self, string):
        os = OctetStream(string)
        if self.finish is None:
            self.finish = os.get()
            os.done()
            self.dealer.client_connected(self)
        else:
            masked = [self.dealer.Zp.unpack(os)
                      for _ in range(self.dealer.inputs_per_client)]
            os.done()
            self.dealer.masked_inputs(self, masked)

    def sendElements(self, elements, padding=b""):
        os = OctetStream()
        for element in elements:
            element.pack(os)
        os.append(padding)
        self.sendString(os.getvalue())

    def connectionLost(self, reason):
        self.closed = True
        self.lost_connection.callback(self)


class FakeEngineFactory(ServerFactory):

    def __init__(self, dealer, party_id):
        self.dealer = dealer
        self.party_id = party_id

    def buildProtocol(self, addr):
        protocol = FakeEngine(self.dealer, self.party_id)
        protocol.factory = self
        return protocol


class EngineTestCase(TestCase):
    """Test case with simulated engines listening on localhost."""

    #: Number of engines to start.
    num_parties = 2
    #: Inputs sent by each client.
    inputs_per_client = 1
    #: Mersenne prime 2**61 - 1.
    prime = 2305843009213693951
    degree = 40

    def setUp(self):
        """Start the engines.

        .. warning::

           Subclasses that override this method *must* remember to do
           a super-call to it.
        """
        self.params = FieldParameters(self.prime, self.degree)
        self.Zp = self.params.Zp
        self.dealer = Dealer(self.params, self.num_parties,
                             self.inputs_per_client)
        self.ports = []
        self.players = {}
        for party_id in range(self.num_parties):
            factory = FakeEngineFactory(self.dealer, party_id)
            port = reactor.listenTCP(0, factory, interface="127.0.0.1")
            self.ports.append(port)
            self.players[party_id] = Party(party_id, "127.0.0.1",
                                           port.getHost().port)

    def tearDown(self):
        """Close remaining engine connections and stop listening."""
        closed = []
        for engine in self.dealer.protocols:
            if not engine.closed:
                engine.transport.loseConnection()
            closed.append(engine.lost_connection)
        for port in self.ports:
            closed.append(maybeDeferred(port.stopListening))
        return gatherResults(closed)

    def closed_port(self):
        """Return a Deferred firing with a port nobody listens on."""
        port = reactor.listenTCP(0, ServerFactory(), interface="127.0.0.1")
        number = port.getHost().port
        d = maybeDeferred(port.stopListening)
        d.addCallback(lambda _: number)
        return d
