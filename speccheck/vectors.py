""" the fixed set of 12 edge-case vectors for Ed25519 signature verification

    every vector is assembled from points and scalars of a known class, the missing component is solved for so that
    the vector verifies under (at least) the cofactored equation, and messages are ground deterministically until the
    cofactorless equation holds or fails as required by the condition table below
"""

import logging

from typing import Callable, Optional, Tuple

from speccheck import config, points, scalars, utils, verify
from speccheck.data import CurvePoint, OrderClass, RangeClass, Signature, SignatureScalar, TestVector, VectorSpec
from speccheck.ed25519 import H, Point, Scalar, compute_challenge
from speccheck.errors import ConstructionError

logger = logging.getLogger("vectors")

Candidate = Tuple[CurvePoint, SignatureScalar, CurvePoint]

V, X = True, False
SMALL, MIXED, FULL = OrderClass.SMALL, OrderClass.MIXED, OrderClass.FULL

# fmt: off
SPECIFICATION_TABLE: Tuple[VectorSpec, ...] = (
    #          S class                        A      canon  R      canon  cof  less alg2 reser. comment
    VectorSpec(0, RangeClass.ZERO,              SMALL, True,  SMALL, True,  V,   V,   X,   False,
               "small A and R"),
    VectorSpec(1, RangeClass.REDUCED,           SMALL, True,  MIXED, True,  V,   V,   X,   False,
               "small A only"),
    VectorSpec(2, RangeClass.REDUCED,           MIXED, True,  SMALL, True,  V,   V,   V,   False,
               "small R only"),
    VectorSpec(3, RangeClass.REDUCED,           MIXED, True,  MIXED, True,  V,   V,   V,   False,
               "succeeds unless full-order is checked"),
    VectorSpec(4, RangeClass.REDUCED,           MIXED, True,  MIXED, True,  V,   X,   V,   False,
               "torsion components do not cancel, only the cofactored equation holds"),
    VectorSpec(5, RangeClass.PRE_REDUCED,       MIXED, True,  FULL,  True,  V,   X,   V,   False,
               "fails cofactored iff (8k) is pre-reduced"),
    VectorSpec(6, RangeClass.EXCEEDS_ORDER,     FULL,  True,  FULL,  True,  V,   V,   X,   False,
               "S > L, accepted by verifiers without a range check on S"),
    VectorSpec(7, RangeClass.FAR_EXCEEDS_ORDER, FULL,  True,  FULL,  True,  V,   V,   X,   False,
               "S >> L with the top bit set, accepted by verifiers only checking the high bits of S"),
    VectorSpec(8, RangeClass.REDUCED,           MIXED, True,  SMALL, False, V,   V,   X,   True,
               "non-canonical R, reduced for hash"),
    VectorSpec(9, RangeClass.REDUCED,           MIXED, True,  SMALL, False, V,   V,   X,   False,
               "non-canonical R, not reduced for hash"),
    VectorSpec(10, RangeClass.REDUCED,          SMALL, False, MIXED, True,  V,   V,   X,   True,
               "non-canonical A, reduced for hash"),
    VectorSpec(11, RangeClass.REDUCED,          SMALL, False, MIXED, True,  V,   V,   X,   False,
               "non-canonical A, not reduced for hash"),
)
# fmt: on


def challenge(R: CurvePoint, A: CurvePoint, message: bytes, reserialized: bool = False) -> Scalar:
    if reserialized:
        return compute_challenge(bytes(R.point), bytes(A.point), message)
    return compute_challenge(bytes(R), bytes(A), message)


def cofactorless_holds(R: CurvePoint, S: SignatureScalar, A: CurvePoint, message: bytes,
                       reserialized: bool = False) -> bool:
    """ R + [k]A == [S]B, exactly, without any cofactor """
    k = challenge(R, A, message, reserialized)
    return R.point + A.point * k == Point.B * S.value


def _nonce(purpose: str, message: bytes) -> Scalar:
    # RFC 8032 style nonce r = H(prefix || M) with a fixed prefix per vector
    return H(utils.deterministic_random_bytes(32, purpose + " nonce prefix") + message)


def _solve(purpose: str, candidate: Callable[[bytes], Optional[Candidate]],
           accept: Callable[[bytes, CurvePoint, SignatureScalar, CurvePoint], bool]):
    """ grind the message until the candidate built from it is accepted """

    def check(message: bytes) -> bool:
        c = candidate(message)
        return c is not None and accept(message, *c)

    message = utils.find_message(purpose, check, config.MAX_MESSAGE_SEARCH)
    if message is None:
        raise ConstructionError(f"{purpose}: no suitable message within {config.MAX_MESSAGE_SEARCH} candidates")
    R, S, A = candidate(message)
    return message, R, S, A


def _holds(reserialized: bool = False):
    return lambda m, R, S, A: cofactorless_holds(R, S, A, m, reserialized)


def _fails(reserialized: bool = False):
    return lambda m, R, S, A: not cofactorless_holds(R, S, A, m, reserialized)


def _zero_small_small(spec: VectorSpec):
    A = points.small_order_point(1)
    R = points.negate(A)
    S = scalars.zero()
    # R + [k]A = [k - 1]A vanishes iff k = 1 mod 8
    return _solve("vector 0", lambda m: (R, S, A), _holds())


def _non_zero_small_mixed(spec: VectorSpec):
    # public key of order 8 only, R = [S]B - A
    S = scalars.reduced("vector 1 S")
    A = points.small_order_point(3)
    R = points.mixed_order_point(S.value, 5)
    return _solve("vector 1", lambda m: (R, S, A), _holds())


def _non_zero_mixed_small(spec: VectorSpec):
    # R = -T, A = [a]B + T, S = k*a leaks the full-order part of the secret key
    a = scalars.secret("vector 2 secret key")
    A = points.mixed_order_point(a, 3)
    R = points.small_order_point(5)

    def candidate(message):
        k = challenge(R, A, message)
        return R, scalars.reduced(k * a), A

    return _solve("vector 2", candidate, _holds())


def _mixed_mixed(purpose: str, accept):
    # A = [a]B + T, R = [r]B - T, S = r + k*a; the torsion parts cancel iff k = 1 mod 8
    a = scalars.secret(purpose + " secret key")
    A = points.mixed_order_point(a, 1)

    def candidate(message):
        r = _nonce(purpose, message)
        R = points.mixed_order_point(r, 7)
        k = challenge(R, A, message)
        return R, scalars.reduced(r + k * a), A

    return _solve(purpose, candidate, accept)


def _non_zero_mixed_mixed(spec: VectorSpec):
    return _mixed_mixed("vector 3", _holds())


def _non_zero_mixed_mixed_cofactored_only(spec: VectorSpec):
    return _mixed_mixed("vector 4", _fails())


def _pre_reduced_scalar(spec: VectorSpec):
    # A = [a]B + T with T of order 8, R of prime order
    # [8]R + [8k mod L]A = [8S]B + [8k mod L]T, so the pre-reduced check fails iff 8k mod L is not a multiple of 8
    a = scalars.secret("vector 5 secret key")
    A = points.mixed_order_point(a, 3)

    def candidate(message):
        r = _nonce("vector 5", message)
        R = points.full_order_point(r)
        k = challenge(R, A, message)
        if not scalars.is_pre_reducing_challenge(k):
            return None
        return R, scalars.pre_reduced(r, k, a), A

    return _solve("vector 5", candidate, _fails())


def _large_s(purpose: str, enlarge: Callable[[SignatureScalar], SignatureScalar]):
    # an honest signature for a prime order key, S replaced by a congruent but unreduced value
    a = scalars.secret(purpose + " secret key")
    A = points.full_order_point(a)

    def candidate(message):
        r = _nonce(purpose, message)
        R = points.full_order_point(r)
        k = challenge(R, A, message)
        return R, enlarge(scalars.reduced(r + k * a)), A

    return _solve(purpose, candidate, _holds())


def _exceeding_s(spec: VectorSpec):
    return _large_s("vector 6", scalars.exceeds_order)


def _far_exceeding_s(spec: VectorSpec):
    return _large_s("vector 7", scalars.far_exceeds_order)


def _non_canonical_r(purpose: str, reserialized: bool):
    # R = T2 (order 4, y = 0) encoded with y = p, A = [a]B - T2, S = k*a
    # R + [k]A - [S]B = [1 - k]T2 vanishes iff k = 1 mod 4 for the challenge the vector was solved for
    a = scalars.secret(purpose + " secret key")
    A = points.mixed_order_point(a, 6)
    R = points.non_canonical_encoding(points.small_order_point(2))

    def candidate(message):
        k = challenge(R, A, message, reserialized)
        return R, scalars.reduced(k * a), A

    return _solve(purpose, candidate, _holds(reserialized))


def _non_canonical_r_reduced_for_hash(spec: VectorSpec):
    return _non_canonical_r("vector 8", reserialized=True)


def _non_canonical_r_raw_for_hash(spec: VectorSpec):
    return _non_canonical_r("vector 9", reserialized=False)


def _non_canonical_a(purpose: str, reserialized: bool):
    # A = T2 encoded with y = p, R = [s]B - T2; the cofactored equation holds for any challenge,
    # the cofactorless one only for the challenge convention this vector was solved for
    A = points.non_canonical_encoding(points.small_order_point(2))
    S = scalars.reduced(purpose + " S")
    R = points.mixed_order_point(S.value, 6)

    def accept(m, R, S, A):
        return cofactorless_holds(R, S, A, m, reserialized) and not cofactorless_holds(R, S, A, m, not reserialized)

    return _solve(purpose, lambda m: (R, S, A), accept)


def _non_canonical_a_reduced_for_hash(spec: VectorSpec):
    return _non_canonical_a("vector 10", reserialized=True)


def _non_canonical_a_raw_for_hash(spec: VectorSpec):
    return _non_canonical_a("vector 11", reserialized=False)


_BUILDERS = (
    _zero_small_small,
    _non_zero_small_mixed,
    _non_zero_mixed_small,
    _non_zero_mixed_mixed,
    _non_zero_mixed_mixed_cofactored_only,
    _pre_reduced_scalar,
    _exceeding_s,
    _far_exceeding_s,
    _non_canonical_r_reduced_for_hash,
    _non_canonical_r_raw_for_hash,
    _non_canonical_a_reduced_for_hash,
    _non_canonical_a_raw_for_hash,
)

assert len(_BUILDERS) == len(SPECIFICATION_TABLE)


def _check_classes(spec: VectorSpec, R: CurvePoint, S: SignatureScalar, A: CurvePoint):
    actual = (S.range_class, A.order_class, A.canonical, R.order_class, R.canonical)
    expected = (spec.s_class, spec.a_class, spec.a_canonical, spec.r_class, spec.r_canonical)
    if actual != expected:
        raise ConstructionError(f"vector {spec.index}: constructed {actual}, table requires {expected}")


def _check_expectations(vector: TestVector):
    """ re-verify the assembled bytes with the reference verifiers, any mismatch is a construction defect """
    pk, sig = vector.public_key_bytes, vector.signature_bytes
    reserialize = vector.reserialized_challenge
    checks = [
        ("cofactored", verify.VerificationPolicy(cofactored=True, reserialize=reserialize),
         vector.expected_cofactored),
        ("cofactorless", verify.VerificationPolicy(cofactored=False, reserialize=reserialize),
         vector.expected_cofactorless),
        ("algorithm 2", verify.ALGORITHM_2, vector.expected_algorithm2),
    ]
    if vector.signature.S.range_class == RangeClass.PRE_REDUCED:
        checks.append(("pre-reduced", verify.PRE_REDUCED, False))

    for name, policy, expected in checks:
        if verify.verify(pk, vector.message, sig, policy) != expected:
            raise ConstructionError(
                f"vector {vector.index}: {name} verification does not {'accept' if expected else 'reject'}"
            )


def build_vector(spec: VectorSpec) -> TestVector:
    message, R, S, A = _BUILDERS[spec.index](spec)
    _check_classes(spec, R, S, A)

    vector = TestVector(
        index=spec.index,
        message=message,
        signature=Signature(R, S),
        public_key=A,
        expected_cofactored=spec.cofactored,
        expected_cofactorless=spec.cofactorless,
        expected_algorithm2=spec.algorithm2,
        reserialized_challenge=spec.reserialized_challenge,
        comment=spec.comment,
    )
    _check_expectations(vector)
    return vector


def generate_test_vectors() -> Tuple[TestVector, ...]:
    """ build all vectors in index order, any failure aborts the whole set """
    vectors = tuple(build_vector(spec) for spec in SPECIFICATION_TABLE)

    if [v.index for v in vectors] != list(range(len(SPECIFICATION_TABLE))):
        raise ConstructionError("vector indices are not consecutive")
    if len({v.message for v in vectors}) != len(vectors):
        raise ConstructionError("vector messages are not distinct")

    for v in vectors:
        logger.debug("%s", describe_vector(v))
    return vectors


def _describe_point(p: CurvePoint) -> str:
    return f"{p.order_class.value}{'' if p.canonical else ' (non-canonical)'}"


def describe_vector(v: TestVector) -> str:
    def mark(b):
        return "V" if b else "X"

    return (
        f"vector {v.index}: S {v.signature.S.range_class.value}, A {_describe_point(v.public_key)}, "
        f"R {_describe_point(v.signature.R)}\n"
        f"  cofactored {mark(v.expected_cofactored)}, cofactorless {mark(v.expected_cofactorless)}, "
        f"algorithm 2 {mark(v.expected_algorithm2)}"
        f"{', challenge over re-encoded points' if v.reserialized_challenge else ''}\n"
        f"  {v.comment}\n"
        f"  \"message\": \"{v.message.hex()}\", \"pub_key\": \"{v.public_key_bytes.hex()}\", "
        f"\"signature\": \"{v.signature_bytes.hex()}\""
    )
