import enum

from dataclasses import dataclass

from speccheck.ed25519 import Point, BYTE_ORDER, POINT_SIZE, SCALAR_SIZE, SIGNATURE_SIZE
from speccheck.errors import EncodingError

NUM_VECTORS = 12


class OrderClass(enum.Enum):
    SMALL = "small"
    MIXED = "mixed"
    FULL = "fullOrder"


class RangeClass(enum.Enum):
    ZERO = "zero"
    REDUCED = "reduced"
    PRE_REDUCED = "preReduced"
    EXCEEDS_ORDER = "exceedsOrder"
    FAR_EXCEEDS_ORDER = "farExceedsOrder"


class Outcome(enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    ERROR = "error"


@dataclass(frozen=True)
class CurvePoint:
    point: Point
    encoding: bytes
    order_class: OrderClass
    canonical: bool

    def __post_init__(self):
        if len(self.encoding) != POINT_SIZE:
            raise EncodingError(f"point encoding must be {POINT_SIZE} bytes, got {len(self.encoding)}")

    def __bytes__(self) -> bytes:
        return bytes(self.encoding)


@dataclass(frozen=True)
class SignatureScalar:
    value: int
    range_class: RangeClass

    def __bytes__(self) -> bytes:
        # raw encoding, values >= GROUP_ORDER are NOT reduced
        try:
            return self.value.to_bytes(SCALAR_SIZE, BYTE_ORDER)
        except OverflowError as e:
            raise EncodingError(f"scalar 0x{self.value:x} does not fit into {SCALAR_SIZE} bytes") from e


@dataclass(frozen=True)
class Signature:
    R: CurvePoint
    S: SignatureScalar

    def __bytes__(self) -> bytes:
        encoded = bytes(self.R) + bytes(self.S)
        if len(encoded) != SIGNATURE_SIZE:
            raise EncodingError(f"signature must be {SIGNATURE_SIZE} bytes, got {len(encoded)}")
        return encoded


@dataclass(frozen=True)
class VectorSpec:
    """ one row of the condition table, describes what a vector must look like and how verifiers should react """

    index: int
    s_class: RangeClass
    a_class: OrderClass
    a_canonical: bool
    r_class: OrderClass
    r_canonical: bool
    cofactored: bool
    cofactorless: bool
    algorithm2: bool
    # the challenge was computed over the canonical re-encoding of A and R instead of the transmitted bytes
    reserialized_challenge: bool
    comment: str


@dataclass(frozen=True)
class TestVector:
    index: int
    message: bytes
    signature: Signature
    public_key: CurvePoint
    expected_cofactored: bool
    expected_cofactorless: bool
    expected_algorithm2: bool
    reserialized_challenge: bool
    comment: str

    __test__ = False

    @property
    def signature_bytes(self) -> bytes:
        return bytes(self.signature)

    @property
    def public_key_bytes(self) -> bytes:
        return bytes(self.public_key)


@dataclass(frozen=True)
class StoredVector:
    """ a vector read back from a vector file, only the bytes a verifier needs """

    index: int
    message: bytes
    public_key_bytes: bytes
    signature_bytes: bytes
