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

"""Functions for loading the configuration of a client. A client needs
two pieces of information before it can talk to the SPDZ engines:

* the field parameters, that is the prime modulus and the degree of
  the binary extension field. The engines' setup writes these to a
  :file:`Params-Data` file which is loaded with :func:`load_params`.

* the addresses of the engines. By default party *i* listens on
  ``port_base + i`` on a single host, see :func:`generate_players`.
  Engines on different hosts are described in an :file:`.ini` file
  which can be loaded with :func:`load_config`.
"""

__docformat__ = "restructuredtext"

import os
from collections import namedtuple

from configobj import ConfigObj, ConfigObjError
from twisted.logger import Logger

from spdzclient.constants import PREP_DIR, PARAMS_FILENAME, \
    DEFAULT_LGP, DEFAULT_DEGREE
from spdzclient.errors import ConfigError
from spdzclient.field import GF, GF2n

log = Logger()


class FieldParameters(namedtuple("FieldParameters", "prime degree")):
    """The fields shared by the client and the engines.

    The parameters are immutable and are passed to every component
    which needs to construct field elements:

    >>> params = FieldParameters(19, 4)
    >>> params.Zp(20)
    {1}
    >>> params.GF2n.degree
    4
    """

    __slots__ = ()

    @property
    def Zp(self):
        """The prime field."""
        return GF(self.prime)

    @property
    def GF2n(self):
        """The binary extension field."""
        return GF2n(self.degree)


def prep_data_prefix(num_parties, lgp=DEFAULT_LGP, degree=DEFAULT_DEGREE,
                     prep_dir=PREP_DIR):
    """Directory holding the setup data for a computation.

    >>> prep_data_prefix(2, prep_dir="Player-Data")
    'Player-Data/2-128-40'
    """
    return os.path.join(prep_dir, "%d-%d-%d" % (num_parties, lgp, degree))


def params_filename(num_parties, lgp=DEFAULT_LGP, degree=DEFAULT_DEGREE,
                    prep_dir=PREP_DIR):
    """Path of the field parameters file."""
    return os.path.join(prep_data_prefix(num_parties, lgp, degree, prep_dir),
                        PARAMS_FILENAME)


def load_params(path):
    """Load field parameters.

    The file holds the prime modulus followed by the degree of the
    binary extension field, separated by whitespace. Anything after
    these two numbers is ignored.

    Raises :exc:`ConfigError` if the file cannot be read, is
    malformed, or if no fields can be built from its contents.
    """
    try:
        with open(path) as params_file:
            tokens = params_file.read().split()
    except (IOError, OSError) as e:
        raise ConfigError("Cannot load field parameters from %s: %s"
                          % (path, e))

    if len(tokens) < 2:
        raise ConfigError("%s must contain a prime and an extension degree"
                          % path)
    try:
        prime = int(tokens[0])
        degree = int(tokens[1])
    except ValueError:
        raise ConfigError("Malformed field parameters in %s" % path)

    params = FieldParameters(prime, degree)
    try:
        # Build both fields now so that bad parameters are reported
        # before any connection is made.
        params.Zp
        params.GF2n
    except ValueError as e:
        raise ConfigError("Invalid field parameters in %s: %s" % (path, e))

    log.info("Loaded field parameters from {path}", path=path)
    return params


def save_params(path, params):
    """Write *params* to *path* in the format read by :func:`load_params`."""
    directory = os.path.dirname(path)
    if directory and not os.path.isdir(directory):
        os.makedirs(directory)
    with open(path, "w") as params_file:
        params_file.write("%d\n%d\n" % (params.prime, params.degree))


class Party:
    """Address of a computation party."""

    def __init__(self, id, host, port):
        """Initialize a party."""
        self.id = id
        self.host = host
        self.port = port

    def __repr__(self):
        """Simple string representation of the party."""
        return "<Party %d: %s:%d>" % (self.id, self.host, self.port)


def generate_players(host, port_base, num_parties):
    """Addresses of *num_parties* engines on a single host.

    Party *i* listens on port ``port_base + i``:

    >>> generate_players("localhost", 14000, 2)
    {0: <Party 0: localhost:14000>, 1: <Party 1: localhost:14001>}
    """
    if num_parties < 1:
        raise ConfigError("Need at least one party, got %d" % num_parties)
    return dict([(i, Party(i, host, port_base + i))
                 for i in range(num_parties)])


def load_config(source):
    """Load a party configuration file.

    Configuration files are simple INI-files with a section called
    ``Party i`` for each party, holding its ``host`` and ``port``.
    Parties must be numbered from zero without gaps.

    Returns a mapping of party IDs to :class:`Party` instances.
    """

    def p_unstr(str):
        """Convert a section name to a party ID."""
        if not str.startswith("Party "):
            raise ValueError("unknown section %r" % str)
        return int(str[6:])

    try:
        if isinstance(source, ConfigObj):
            config = source
        else:
            config = ConfigObj(source, file_error=True)

        players = {}
        for section in config:
            id = p_unstr(section)
            players[id] = Party(id, config[section]['host'],
                                int(config[section]['port']))
    except (IOError, OSError, ConfigObjError) as e:
        raise ConfigError("Cannot load party configuration: %s" % e)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError("Malformed party configuration: %s" % e)

    if sorted(players) != list(range(len(players))) or not players:
        raise ConfigError("Parties must be numbered 0 to n-1, got %s"
                          % sorted(players))
    return players


def generate_configs(players, filename=None):
    """Generate a party configuration.

    The configuration is returned as a :class:`ConfigObj` instance
    and can be saved to disk with its :meth:`write` method if a
    *filename* is given.
    """

    def p_str(party):
        """Convert a party ID to a section name."""
        return "Party " + str(party)

    config = ConfigObj(indent_type='  ')
    config.filename = filename
    config.initial_comment = ['spdzclient config file for %d parties'
                              % len(players)]
    config.final_comment = ['', 'End of config', '']

    for id in sorted(players):
        config[p_str(id)] = dict(host=players[id].host,
                                 port=players[id].port)
        # Attaching an empty string as a comment will result in a newline
        # in the configuration file, making it slightly easier to read
        config.comments[p_str(id)] = ['']
    return config
