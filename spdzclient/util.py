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

"""Miscellaneous utility functions. The most important is the
:data:`rand` random generator which is seeded with a known seed each
time. Using this generator for test data and generated setups ensures
that a run can be reproduced at a later time.

The generator is never used for values the client must keep secret.
"""

__docformat__ = "restructuredtext"

import os
import random

from gmpy2 import next_prime
from twisted.logger import Logger

log = Logger()

#: Seed for :data:`rand`.
_seed = os.environ.get('SEED')

if _seed is None:
    # If the environment variable is not set, then a random seed is
    # chosen.
    _seed = random.randint(0, 10000)
    log.debug("Seeding random generator with random seed {seed}",
              seed=_seed)
    #: Random number generator used for test data and setups.
    #:
    #: The generator is by default initialized with a random seed,
    #: unless the environment variable :envvar:`SEED` is set to a value, in
    #: which case that value is used instead. If :envvar:`SEED` is defined,
    #: but empty, then no seed is used and a run cannot be
    #: reproduced exactly.
    rand = random.Random(_seed)
elif _seed == '':
    # If it is set, but set to the empty string (SEED=), then no seed
    # is used.
    rand = random.SystemRandom()
else:
    # Otherwise use the seed given, which must be an integer.
    _seed = int(_seed)
    log.debug("Seeding random generator with seed {seed}", seed=_seed)
    rand = random.Random(_seed)


def find_prime(lower_bound, blum=False):
    """Find a prime above a lower bound.

    If a prime is given as the lower bound, then this prime is
    returned:

    >>> find_prime(37)
    37

    Blum primes (a prime p such that p % 4 == 3) can be found as well:

    >>> find_prime(12)
    13
    >>> find_prime(12, blum=True)
    19

    If the bound is negative, 2 (the smallest prime) is returned:

    >>> find_prime(-100)
    2
    """
    if lower_bound < 2:
        prime = 2
    else:
        prime = int(next_prime(lower_bound - 1))

    if blum:
        while prime % 4 != 3:
            prime = int(next_prime(prime))

    return prime


def share(secret, num_players):
    """Split *secret* into additive shares.

    The return value is a list of *num_players* field elements which
    sum to *secret*. Any subset of fewer than *num_players* shares is
    uniformly random:

    >>> from spdzclient.field import GF
    >>> Zp = GF(47)
    >>> shares = share(Zp(42), 3)
    >>> len(shares)
    3
    >>> recombine(shares)
    {42}
    """
    assert num_players > 0, "Need at least one player"

    field = secret.field
    shares = [field(rand.randint(0, field.modulus - 1))
              for _ in range(num_players - 1)]
    shares.append(secret - recombine(shares, field))
    return shares


def recombine(shares, field=None):
    """Recombine additive shares by summing them.

    The sum starts from the additive identity of *field*, which
    defaults to the field of the first share:

    >>> from spdzclient.field import GF
    >>> Zp = GF(19)
    >>> recombine([Zp(10), Zp(15), Zp(3)])
    {9}
    """
    if field is None:
        field = shares[0].field
    total = field(0)
    for s in shares:
        total = total + s
    return total


if __name__ == "__main__":
    import doctest    #pragma NO COVER
    doctest.testmod() #pragma NO COVER
