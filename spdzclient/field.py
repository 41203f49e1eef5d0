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

"""Modeling of Galois (finite) fields. The :func:`GF` function creates
classes which implement Galois fields of prime order whereas the
:func:`GF2n` function creates classes for the binary extension fields
GF(2^n). The SPDZ engines use both: the prime field for arithmetic on
client inputs and the binary field for bit operations.

All fields work the same: instantiate an object from a field to get
hold of an element of that field. Elements implement the normal
arithmetic one would expect.

Defining a field:

>>> Zp = GF(19)

Defining field elements:

>>> x = Zp(10)
>>> y = Zp(15)

Addition, subtraction and multiplication (with modulo reduction):

>>> x + y
{6}
>>> x - y
{14}
>>> x * y
{17}

Exponentiation, inversion and division:

>>> x**3
{12}
>>> ~x
{2}
>>> x / y
{7}

Field elements from different fields cannot be mixed, you will get a
type error if you try:

>>> Zq = GF(17)
>>> x + Zq(2)
Traceback (most recent call last):
    ...
TypeError: unsupported operand type(s) for +: 'GFElement' and 'GFElement'

The reason for the slightly confusing error message is that ``x`` and
``Zq(2)`` are instances of two *different* classes called
``GFElement``.

Elements travel to the engines in a fixed width encoding, see
:meth:`pack` and :meth:`unpack` on the element classes.
"""

__docformat__ = "restructuredtext"

from gmpy2 import is_prime, invert


class FieldElement(object):
    """Common base class for elements."""

    def __int__(self):
        """Extract integer value from the field element.

        >>> int(GF(31)(10))
        10
        """
        return self.value

    def __bool__(self):
        """Truth value testing.

        Returns False if this element is zero, True otherwise.
        """
        return self.value != 0

    def __hash__(self):
        """Hash value."""
        return hash((self.field, self.value))

    def pack(self, os):
        """Append the encoding of this element to octet stream *os*."""
        os.store_int(self.encode(), self.n_bytes)

    @classmethod
    def unpack(cls, os):
        """Read one element of this field from octet stream *os*."""
        return cls.decode(os.get_int(cls.n_bytes))


#: Cached fields.
#:
#: Calls to GF with identical modulus must return the same class
#: (field), so we cache them here.
_field_cache = {}


def GF(modulus):
    """Generate a Galois (finite) field with the given modulus.

    The modulus must be a prime:

    >>> Z23 = GF(23) # works
    >>> Z10 = GF(10) # not a prime
    Traceback (most recent call last):
        ...
    ValueError: 10 is not a prime

    Elements are encoded in Montgomery representation, that is, the
    value ``v * R mod p`` is written as a little-endian integer of
    :attr:`n_bytes` bytes where ``R = 2**(8 * n_bytes)`` and
    :attr:`n_bytes` is the size of the 64-bit limbs needed to hold
    the modulus. This matches the engines' internal representation.
    """
    modulus = int(modulus)
    if modulus in _field_cache:
        return _field_cache[modulus]

    if not is_prime(modulus):
        raise ValueError("%d is not a prime" % modulus)

    # Define a new class representing the field. This class will be
    # returned at the end of the function.
    class GFElement(FieldElement):

        def __init__(self, value):
            self.value = int(value) % self.modulus

        def __add__(self, other):
            """Addition."""
            if isinstance(other, GFElement):
                return GFElement(self.value + other.value)
            if isinstance(other, int):
                return GFElement(self.value + other)
            return NotImplemented

        __radd__ = __add__

        def __sub__(self, other):
            """Subtraction."""
            if isinstance(other, GFElement):
                return GFElement(self.value - other.value)
            if isinstance(other, int):
                return GFElement(self.value - other)
            return NotImplemented

        def __rsub__(self, other):
            """Subtraction (reflected argument version)."""
            if not isinstance(other, int):
                return NotImplemented
            return GFElement(other - self.value)

        def __mul__(self, other):
            """Multiplication."""
            if isinstance(other, GFElement):
                return GFElement(self.value * other.value)
            if isinstance(other, int):
                return GFElement(self.value * other)
            return NotImplemented

        __rmul__ = __mul__

        def __pow__(self, exponent):
            """Exponentiation."""
            if exponent < 0:
                return (~self) ** -exponent
            return GFElement(pow(self.value, exponent, self.modulus))

        def __neg__(self):
            """Negation."""
            return GFElement(-self.value)

        def __invert__(self):
            """Inversion.

            Note that zero cannot be inverted, trying to do so will
            raise a ZeroDivisionError.
            """
            if self.value == 0:
                raise ZeroDivisionError("Cannot invert zero")
            return GFElement(int(invert(self.value, self.modulus)))

        def __truediv__(self, other):
            """Division."""
            if isinstance(other, int):
                other = GFElement(other)
            elif not isinstance(other, GFElement):
                return NotImplemented
            return self * ~other

        def __rtruediv__(self, other):
            """Division (reflected argument version)."""
            if not isinstance(other, int):
                return NotImplemented
            return GFElement(other) * ~self

        def signed(self):
            """Return a signed integer representation of the value.

            If x > floor(p/2) then subtract p to obtain negative integer.
            """
            if self.value > (self.modulus - 1) // 2:
                return self.value - self.modulus
            else:
                return self.value

        def encode(self):
            """Integer written on the wire for this element."""
            return self.value * self.montgomery_r % self.modulus

        @classmethod
        def decode(cls, number):
            """Element for an integer read from the wire."""
            return cls(number * cls.montgomery_r_inv)

        def __eq__(self, other):
            """Equality test.

            Testing for equality with integers works as expected.
            """
            if isinstance(other, GFElement):
                return self.value == other.value
            if isinstance(other, int):
                return self.value == other
            return NotImplemented

        __hash__ = FieldElement.__hash__

        def __repr__(self):
            return "{%d}" % self.value

        __str__ = __repr__

    GFElement.modulus = modulus
    GFElement.field = GFElement
    limbs = (modulus.bit_length() + 63) // 64
    GFElement.n_bytes = 8 * limbs
    if modulus % 2:
        GFElement.montgomery_r = pow(2, 64 * limbs, modulus)
        GFElement.montgomery_r_inv = int(invert(GFElement.montgomery_r,
                                                modulus))
    else:
        # No Montgomery representation exists modulo two.
        GFElement.montgomery_r = GFElement.montgomery_r_inv = 1

    _field_cache[modulus] = GFElement
    return GFElement


def _polymod(a, m):
    """Reduce polynomial *a* modulo polynomial *m* over GF(2)."""
    degree = m.bit_length() - 1
    while a.bit_length() - 1 >= degree:
        a ^= m << (a.bit_length() - 1 - degree)
    return a


def _mulmod(a, b, m):
    """Multiply reduced polynomials *a* and *b* modulo *m*."""
    degree = m.bit_length() - 1
    result = 0
    while b:
        if b & 1:
            result ^= a
        b >>= 1
        a <<= 1
        if (a >> degree) & 1:
            a ^= m
    return result


def _polygcd(a, b):
    """Greatest common divisor of two polynomials over GF(2)."""
    while b:
        a, b = b, _polymod(a, b)
    return a


def _prime_factors(n):
    factors = []
    q = 2
    while q * q <= n:
        if n % q == 0:
            factors.append(q)
            while n % q == 0:
                n //= q
        q += 1
    if n > 1:
        factors.append(n)
    return factors


def is_irreducible(polynomial):
    """Rabin's irreducibility test for polynomials over GF(2).

    Polynomials are given as integers, bit *i* holding the coefficient
    of ``x**i``:

    >>> is_irreducible(0b10011)  # x^4 + x + 1
    True
    >>> is_irreducible(0b101)    # x^2 + 1 = (x + 1)^2
    False
    """
    n = polynomial.bit_length() - 1
    if n < 1:
        return False
    x = _polymod(2, polynomial)

    def frobenius(k):
        # Compute x^(2^k) mod polynomial by repeated squaring.
        h = x
        for _ in range(k):
            h = _mulmod(h, h, polynomial)
        return h

    if frobenius(n) != x:
        return False
    for q in _prime_factors(n):
        if _polygcd(polynomial, frobenius(n // q) ^ x) != 1:
            return False
    return True


def find_irreducible(degree):
    """Find a low-weight irreducible polynomial of the given degree.

    Trinomials ``x^n + x^k + 1`` are tried first with increasing *k*,
    then pentanomials ``x^n + x^a + x^b + x^c + 1``.

    >>> bin(find_irreducible(4))
    '0b10011'
    """
    if degree < 2:
        raise ValueError("Extension degree must be at least 2, got %d"
                         % degree)
    top = (1 << degree) | 1
    # No irreducible trinomial exists when 8 divides the degree.
    if degree % 8:
        for k in range(1, degree):
            polynomial = top | (1 << k)
            if is_irreducible(polynomial):
                return polynomial
    for a in range(3, degree):
        for b in range(2, a):
            for c in range(1, b):
                polynomial = top | (1 << a) | (1 << b) | (1 << c)
                if is_irreducible(polynomial):
                    return polynomial
    raise ValueError("No irreducible polynomial of degree %d found" % degree)


#: Cached binary fields, keyed by ``(degree, polynomial)``.
_binary_field_cache = {}

#: Polynomials found by :func:`find_irreducible`, keyed by degree.
_default_polynomials = {}


def GF2n(degree, polynomial=None):
    """Generate the binary extension field GF(2^degree).

    The field is defined by an irreducible *polynomial* of the given
    degree. If none is given, :func:`find_irreducible` picks one. With
    the AES polynomial we get the well known GF(2^8):

    >>> GF256 = GF2n(8, 0x11b)
    >>> GF256(2) * GF256(3)
    [6]
    >>> GF256(16) * GF256(32)
    [54]
    >>> GF256(1) + GF256(1)
    [0]

    A polynomial which is not irreducible is rejected:

    >>> GF2n(2, 0b101)
    Traceback (most recent call last):
        ...
    ValueError: 0x5 is not an irreducible polynomial of degree 2
    """
    degree = int(degree)
    if polynomial is None:
        if degree not in _default_polynomials:
            _default_polynomials[degree] = find_irreducible(degree)
        polynomial = _default_polynomials[degree]
    key = (degree, polynomial)
    if key in _binary_field_cache:
        return _binary_field_cache[key]

    if polynomial.bit_length() - 1 != degree or not is_irreducible(polynomial):
        raise ValueError("%#x is not an irreducible polynomial of degree %d"
                         % (polynomial, degree))

    class GF2nElement(FieldElement):

        def __init__(self, value):
            self.value = _polymod(int(value), self.polynomial)

        def __add__(self, other):
            """Addition, which is exclusive-or in characteristic two."""
            if isinstance(other, GF2nElement):
                return GF2nElement(self.value ^ other.value)
            if isinstance(other, int):
                return GF2nElement(self.value ^ GF2nElement(other).value)
            return NotImplemented

        __radd__ = __add__

        #: Subtraction is the same as addition.
        __sub__ = __rsub__ = __add__

        def __mul__(self, other):
            """Multiplication."""
            if isinstance(other, int):
                other = GF2nElement(other)
            elif not isinstance(other, GF2nElement):
                return NotImplemented
            return GF2nElement(_mulmod(self.value, other.value,
                                       self.polynomial))

        __rmul__ = __mul__

        def __pow__(self, exponent):
            """Exponentiation by square and multiply."""
            if exponent < 0:
                return (~self) ** -exponent
            result = 1
            base = self.value
            while exponent:
                if exponent & 1:
                    result = _mulmod(result, base, self.polynomial)
                base = _mulmod(base, base, self.polynomial)
                exponent >>= 1
            return GF2nElement(result)

        def __neg__(self):
            """Negation."""
            return self

        def __invert__(self):
            """Inversion, computed as ``x**(2**n - 2)``."""
            if self.value == 0:
                raise ZeroDivisionError("Cannot invert zero")
            return self ** (self.modulus - 2)

        def __truediv__(self, other):
            """Division."""
            if isinstance(other, int):
                other = GF2nElement(other)
            elif not isinstance(other, GF2nElement):
                return NotImplemented
            return self * ~other

        def __rtruediv__(self, other):
            """Division (reflected argument version)."""
            if not isinstance(other, int):
                return NotImplemented
            return GF2nElement(other) * ~self

        def encode(self):
            return self.value

        @classmethod
        def decode(cls, number):
            return cls(number)

        def __eq__(self, other):
            """Equality test."""
            if isinstance(other, GF2nElement):
                return self.value == other.value
            if isinstance(other, int):
                return self.value == other
            return NotImplemented

        __hash__ = FieldElement.__hash__

        def __repr__(self):
            return "[%d]" % self.value

        __str__ = __repr__

    GF2nElement.degree = degree
    GF2nElement.polynomial = polynomial
    GF2nElement.modulus = 1 << degree
    GF2nElement.field = GF2nElement
    GF2nElement.n_bytes = 8 * ((degree + 63) // 64)

    _binary_field_cache[key] = GF2nElement
    return GF2nElement


if __name__ == "__main__":
    import doctest    #pragma NO COVER
    doctest.testmod() #pragma NO COVER
