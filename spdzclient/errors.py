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

"""Exceptions raised by the client. Every failure is fatal to the
session that raised it: the errors signal broken configuration or a
violated security property, never a transient condition that could be
retried in the middle of a protocol run.
"""

__docformat__ = "restructuredtext"


class ClientError(Exception):
    """Base class for all client errors."""


class ConfigError(ClientError):
    """The setup artifact or the party configuration is unusable."""


class PartyConnectionError(ClientError, ConnectionError):
    """A connection to a computation party failed or was lost."""


class ProtocolError(ClientError):
    """A party sent a message which cannot be decoded."""


class TripleMismatchError(ClientError):
    """The summed triple shares do not satisfy ``a * b == c``.

    This means that at least one party is cheating or faulty.
    """


class AuthenticationError(ClientError):
    """The summed result shares do not satisfy ``y * r == w``."""
