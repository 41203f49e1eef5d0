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

__docformat__ = "restructuredtext"

# Defaults for locating the engines.
DEFAULT_HOST      = "localhost"
DEFAULT_PORT_BASE = 14000

# Defaults for locating the setup artifact written by the engines'
# offline phase.
PREP_DIR          = "Player-Data"
PARAMS_FILENAME   = "Params-Data"
DEFAULT_LGP       = 128
DEFAULT_DEGREE    = 40

# Number of field elements in a triple and in a result bundle.
TRIPLE_SIZE       = 3
