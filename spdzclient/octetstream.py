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

"""Byte streams exchanged with the SPDZ engines.

An :class:`OctetStream` collects integers and field elements into a
single message. Whole messages are framed with a length prefix of
:data:`LENGTH_SIZE` bytes by the connection that sends them, see
:class:`spdzclient.runtime.EngineConnection`.

>>> os = OctetStream()
>>> os.store(1)
>>> os.store_int(258, 2)
>>> os.getvalue()
b'\\x01\\x00\\x00\\x00\\x02\\x01'
>>> os.get()
1
>>> os.get_int(2)
258
>>> os.left()
0
"""

__docformat__ = "restructuredtext"

from spdzclient.errors import ProtocolError

#: Size of the little-endian length prefix in front of each message.
LENGTH_SIZE = 8

#: Size of the integers written by :meth:`OctetStream.store`.
INT_SIZE = 4


class OctetStream(object):
    """A message buffer with a read head."""

    def __init__(self, data=b""):
        self.buf = bytearray(data)
        self.ptr = 0

    def __len__(self):
        return len(self.buf)

    def reset_write_head(self):
        """Empty the stream."""
        self.buf = bytearray()
        self.ptr = 0

    def reset_read_head(self):
        """Start reading from the beginning again."""
        self.ptr = 0

    def getvalue(self):
        """Return the contents as bytes."""
        return bytes(self.buf)

    def append(self, data):
        """Append raw bytes."""
        self.buf += data

    def consume(self, length):
        """Read *length* raw bytes.

        Raises :exc:`ProtocolError` if the stream holds fewer bytes.
        """
        if length > self.left():
            raise ProtocolError("Cannot read %d bytes, only %d left in "
                                "stream" % (length, self.left()))
        data = bytes(self.buf[self.ptr:self.ptr + length])
        self.ptr += length
        return data

    def left(self):
        """Number of bytes not read yet."""
        return len(self.buf) - self.ptr

    def done(self):
        """Check that the whole stream has been read."""
        if self.left():
            raise ProtocolError("%d unexpected bytes at end of stream"
                                % self.left())

    def store_int(self, value, length):
        """Append *value* as an unsigned little-endian integer."""
        self.append(int(value).to_bytes(length, "little"))

    def get_int(self, length):
        """Read an unsigned little-endian integer of *length* bytes."""
        return int.from_bytes(self.consume(length), "little")

    def store(self, value):
        """Append a small integer such as the termination flag."""
        self.store_int(value, INT_SIZE)

    def get(self):
        """Read an integer written by :meth:`store`."""
        return self.get_int(INT_SIZE)

    def __repr__(self):
        return "<OctetStream %d bytes, %d left>" % (len(self), self.left())


if __name__ == "__main__":
    import doctest    #pragma NO COVER
    doctest.testmod() #pragma NO COVER
