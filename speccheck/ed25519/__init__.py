from typing import ByteString, Union

import hashlib

from . import fe


BYTE_ORDER = "little"
FIELD_MODULUS = 2 ** 255 - 19
GROUP_ORDER = 2 ** 252 + 27742317777372353535851937790883648493
COFACTOR = 8

POINT_SIZE = 32
SCALAR_SIZE = 32
SIGNATURE_SIZE = 64

_Y_MASK = (1 << 255) - 1


class Point:
    """ class representing an element of the full curve group (including all torsion points),
        stored in extended homogeneous coordinates (X:Y:Z:T) with x = X/Z, y = Y/Z, x*y = T/Z
    """

    __slots__ = ["X", "Y", "Z", "T"]

    B: "Point"
    IDENTITY: "Point"

    X: int
    Y: int
    Z: int
    T: int

    def __init__(self, x: int, y: int):
        if not isinstance(x, int) or not isinstance(y, int):
            raise TypeError()
        if not (0 <= x < FIELD_MODULUS) or not (0 <= y < FIELD_MODULUS):
            raise ValueError()
        if not fe.is_on_curve(x, y):
            raise ValueError("The given data represents an invalid point!")
        self.X, self.Y, self.Z, self.T = x, y, 1, fe.mul(x, y)

    @staticmethod
    def _create_raw(X: int, Y: int, Z: int, T: int) -> "Point":
        point = object.__new__(Point)
        point.X, point.Y, point.Z, point.T = X, Y, Z, T
        return point

    @staticmethod
    def from_bytes(value: ByteString, strict: bool = True) -> "Point":
        """ decode a 32 byte point encoding

            strict decoding follows RFC 8032 and rejects field elements >= p as well as a set sign bit for x = 0,
            otherwise the y coordinate is reduced mod p and the sign of x = 0 is ignored
        """
        if len(value) != POINT_SIZE:
            raise ValueError("Invalid data format (32 bytes expected)!")

        y_and_sign = int.from_bytes(bytes(value), BYTE_ORDER)
        sign = y_and_sign >> 255
        y = y_and_sign & _Y_MASK
        if y >= FIELD_MODULUS:
            if strict:
                raise ValueError("Non-canonical field element in point encoding!")
            y -= FIELD_MODULUS

        x = fe.recover_x(y, sign, allow_negative_zero=not strict)
        return Point(x, y)

    @staticmethod
    def base_times(scalar: Union["Scalar", int]) -> "Point":
        return Point.B * scalar

    @property
    def x(self) -> int:
        return fe.div(self.X, self.Z)

    @property
    def y(self) -> int:
        return fe.div(self.Y, self.Z)

    @property
    def sign(self) -> int:
        return self.x & 1

    def is_identity(self) -> bool:
        return self == Point.IDENTITY

    def mul_by_cofactor(self) -> "Point":
        return self.double().double().double()

    def is_small_order(self) -> bool:
        """ true for the eight elements of the torsion subgroup E[8] """
        return self.mul_by_cofactor().is_identity()

    def is_torsion_free(self) -> bool:
        """ true if the point lies in the prime order subgroup """
        return (self * GROUP_ORDER).is_identity()

    def double(self) -> "Point":
        return self + self

    def __eq__(self, other):
        if isinstance(other, Point):
            if self is other:
                return True
            if fe.sub(fe.mul(self.X, other.Z), fe.mul(other.X, self.Z)) != 0:
                return False
            return fe.sub(fe.mul(self.Y, other.Z), fe.mul(other.Y, self.Z)) == 0
        return False

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(bytes(self))

    def __add__(self, other: "Point") -> "Point":
        if isinstance(other, Point):
            a = fe.mul(fe.sub(self.Y, self.X), fe.sub(other.Y, other.X))
            b = fe.mul(fe.add(self.Y, self.X), fe.add(other.Y, other.X))
            c = fe.mul(fe.mul(self.T, fe.d2), other.T)
            d = fe.mul(fe.add(self.Z, self.Z), other.Z)
            e, f, g, h = fe.sub(b, a), fe.sub(d, c), fe.add(d, c), fe.add(b, a)
            return Point._create_raw(fe.mul(e, f), fe.mul(g, h), fe.mul(f, g), fe.mul(e, h))
        raise TypeError()

    def __neg__(self) -> "Point":
        return Point._create_raw(fe.sub(0, self.X), self.Y, self.Z, fe.sub(0, self.T))

    def __sub__(self, other: "Point") -> "Point":
        if isinstance(other, Point):
            return self + (-other)
        raise TypeError()

    def __mul__(self, other: Union["Scalar", int]) -> "Point":
        """ plain double-and-add, the multiplier is NOT reduced mod GROUP_ORDER """
        if isinstance(other, Scalar):
            other = int(other)
        if not isinstance(other, int):
            raise TypeError()
        if other < 0:
            return (-self) * (-other)

        result = Point.IDENTITY
        addend = self
        while other:
            if other & 1:
                result = result + addend
            addend = addend.double()
            other >>= 1
        return result

    def __rmul__(self, other: Union["Scalar", int]) -> "Point":
        return self * other

    def __bytes__(self) -> bytes:
        x, y = self.x, self.y
        return (y | ((x & 1) << 255)).to_bytes(POINT_SIZE, BYTE_ORDER)

    def __copy__(self):
        return Point._create_raw(self.X, self.Y, self.Z, self.T)

    def __len__(self) -> int:
        return POINT_SIZE

    def __repr__(self):
        return f"Point(0x{self.x:064x}, \n      0x{self.y:064x})"


Point.IDENTITY = Point(0, 1)
Point.B = Point(*fe.B)


class Scalar:
    """ an integer modulo GROUP_ORDER """

    __slots__ = ["value"]

    value: int

    def __init__(self, scalar: int):
        if not isinstance(scalar, int):
            raise TypeError()
        if not 0 <= scalar < GROUP_ORDER:
            raise ValueError("The given scalar is not in the expected range!")
        self.value = scalar

    @staticmethod
    def from_bytes(data: bytes) -> "Scalar":
        if len(data) == SCALAR_SIZE:
            return Scalar(int.from_bytes(data, BYTE_ORDER))
        raise ValueError("Invalid data format (32 bytes expected)!")

    @staticmethod
    def reduce(data: bytes) -> "Scalar":
        """ obtain a uniformly distributed scalar value from a at least 40 bytes (~317 bit) random data,
            typically the output of a cryptographic hashfunction
        """
        if isinstance(data, bytes) and len(data) >= 40:
            return Scalar(int.from_bytes(data, BYTE_ORDER) % GROUP_ORDER)
        raise ValueError("Invalid data format (>= 40 bytes expected)!")

    def __eq__(self, other):
        if isinstance(other, Scalar):
            return self.value == other.value
        return False

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.value)

    def __add__(self, other: "Scalar") -> "Scalar":
        if isinstance(other, Scalar):
            return Scalar((self.value + other.value) % GROUP_ORDER)
        raise TypeError()

    def __sub__(self, other: "Scalar") -> "Scalar":
        if isinstance(other, Scalar):
            return Scalar((self.value - other.value) % GROUP_ORDER)
        raise TypeError()

    def __mul__(self, other):
        if isinstance(other, Scalar):
            return Scalar((self.value * other.value) % GROUP_ORDER)
        if isinstance(other, Point):
            return other * self
        raise TypeError()

    def __neg__(self):
        """ compute the negation of the current scalar as new scalar
            s + neg = 0 (mod GROUP_ORDER)
        """
        return Scalar((-self.value) % GROUP_ORDER)

    def __bytes__(self) -> bytes:
        return self.value.to_bytes(SCALAR_SIZE, BYTE_ORDER)

    def __int__(self) -> int:
        return self.value

    def __len__(self) -> int:
        return SCALAR_SIZE

    def __repr__(self):
        return f"Scalar(0x{self.value:064x})"


def H(message: bytes) -> Scalar:
    h = hashlib.sha512(message).digest()
    hint = int.from_bytes(h, BYTE_ORDER) % GROUP_ORDER
    return Scalar(hint)


def compute_challenge(R: ByteString, public_key: ByteString, message: ByteString) -> Scalar:
    """ the EdDSA challenge k = H(R || A || M), computed over exactly the bytes given """
    return H(bytes(R) + bytes(public_key) + bytes(message))


def is_canonical_point_encoding(value: ByteString) -> bool:
    """ checks that the y coordinate is fully reduced and that x = 0 is not encoded with its sign bit set,
        the latter only happens for the points (0, 1) and (0, -1)
    """
    if len(value) != POINT_SIZE:
        return False
    y_and_sign = int.from_bytes(bytes(value), BYTE_ORDER)
    sign = y_and_sign >> 255
    y = y_and_sign & _Y_MASK
    if y >= FIELD_MODULUS:
        return False
    return not (sign and y in (1, FIELD_MODULUS - 1))

