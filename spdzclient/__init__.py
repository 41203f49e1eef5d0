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

"""
Client for SPDZ engines.

spdzclient lets an external participant submit a private input to a
set of SPDZ engines and retrieve an authenticated result, following
the client protocol of Damgard, Damgard, Nielsen, Nordholt and Toft
(IACR ePrint 2015/1006).
"""

__version__ = '1.0'
__license__ = 'GNU LGPL'
