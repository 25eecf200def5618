import pytest

from speccheck import points, vectors, verify
from speccheck.data import NUM_VECTORS, OrderClass, RangeClass
from speccheck.ed25519 import Point, is_canonical_point_encoding, COFACTOR, GROUP_ORDER
from speccheck.vectors import SPECIFICATION_TABLE, generate_test_vectors

VECTORS = generate_test_vectors()

COFACTORED = {True: verify.VerificationPolicy(cofactored=True, reserialize=True), False: verify.COFACTORED}
COFACTORLESS = {True: verify.VerificationPolicy(cofactored=False, reserialize=True), False: verify.COFACTORLESS}


def _verify(v, policy):
    return verify.verify(v.public_key_bytes, v.message, v.signature_bytes, policy)


def test_fixed_cardinality():
    assert len(SPECIFICATION_TABLE) == NUM_VECTORS
    assert len(VECTORS) == NUM_VECTORS
    assert [v.index for v in VECTORS] == list(range(NUM_VECTORS))


def test_determinism():
    again = generate_test_vectors()
    for a, b in zip(VECTORS, again):
        assert a.message == b.message
        assert a.public_key_bytes == b.public_key_bytes
        assert a.signature_bytes == b.signature_bytes


def test_distinct_messages():
    assert len({v.message for v in VECTORS}) == NUM_VECTORS
    for v in VECTORS:
        assert len(v.message) == 32


@pytest.mark.parametrize("v", VECTORS, ids=lambda v: f"vector{v.index}")
def test_vector_matches_table_row(v):
    spec = SPECIFICATION_TABLE[v.index]
    assert v.signature.S.range_class == spec.s_class
    assert v.public_key.order_class == spec.a_class
    assert v.public_key.canonical == spec.a_canonical
    assert v.signature.R.order_class == spec.r_class
    assert v.signature.R.canonical == spec.r_canonical
    assert v.expected_cofactored == spec.cofactored
    assert v.expected_cofactorless == spec.cofactorless
    assert v.comment == spec.comment

    # the recorded classes describe the actual points
    assert points.classify(v.public_key.point) == v.public_key.order_class
    assert points.classify(v.signature.R.point) == v.signature.R.order_class
    assert is_canonical_point_encoding(v.public_key_bytes) == v.public_key.canonical
    assert is_canonical_point_encoding(v.signature_bytes[:32]) == v.signature.R.canonical
    assert len(v.signature_bytes) == 64


@pytest.mark.parametrize("v", VECTORS, ids=lambda v: f"vector{v.index}")
def test_expected_outcomes(v):
    assert _verify(v, COFACTORED[v.reserialized_challenge]) == v.expected_cofactored
    assert _verify(v, COFACTORLESS[v.reserialized_challenge]) == v.expected_cofactorless
    assert _verify(v, verify.ALGORITHM_2) == v.expected_algorithm2


def test_vector_0():
    v = VECTORS[0]
    assert v.signature.S.value == 0
    assert v.expected_cofactored and v.expected_cofactorless


def test_vectors_3_and_4():
    assert VECTORS[3].expected_cofactored and VECTORS[3].expected_cofactorless
    assert VECTORS[4].expected_cofactored and not VECTORS[4].expected_cofactorless


def test_vector_5_fails_pre_reduced_verification():
    v = VECTORS[5]
    k = vectors.challenge(v.signature.R, v.public_key, v.message)
    assert (COFACTOR * int(k)) % GROUP_ORDER % COFACTOR != 0
    assert _verify(v, verify.COFACTORED)
    assert not _verify(v, verify.PRE_REDUCED)


@pytest.mark.parametrize("index, range_class", [(6, RangeClass.EXCEEDS_ORDER), (7, RangeClass.FAR_EXCEEDS_ORDER)])
def test_large_s(index, range_class):
    v = VECTORS[index]
    s = int.from_bytes(v.signature_bytes[32:], "little")
    assert s >= GROUP_ORDER
    assert v.signature.S.range_class == range_class
    assert (s >> 255 == 1) == (range_class == RangeClass.FAR_EXCEEDS_ORDER)
    # a verifier bound-checking S rejects, the equations still hold
    assert _verify(v, verify.COFACTORED)
    assert not _verify(v, verify.VerificationPolicy(reject_large_s=True))


@pytest.mark.parametrize("index", [8, 9, 10, 11])
def test_non_canonical_vectors(index):
    v = VECTORS[index]
    strict = verify.VerificationPolicy(cofactored=True, reject_non_canonical=True)
    assert not _verify(v, strict)
    # a reducing decoder sees the same point as the canonical encoding
    encoding = v.signature.R if index < 10 else v.public_key
    assert Point.from_bytes(bytes(encoding), strict=False) == encoding.point
    assert encoding.point.y == 0


def test_challenge_convention_of_non_canonical_vectors():
    # rows 8 and 10 only hold against the re-encoded challenge, 9 and 11 only against the raw bytes
    for index in (8, 10):
        v = VECTORS[index]
        assert vectors.cofactorless_holds(v.signature.R, v.signature.S, v.public_key, v.message, reserialized=True)
    for index in (9, 11):
        v = VECTORS[index]
        assert vectors.cofactorless_holds(v.signature.R, v.signature.S, v.public_key, v.message, reserialized=False)
    v = VECTORS[10]
    assert not vectors.cofactorless_holds(v.signature.R, v.signature.S, v.public_key, v.message)
    v = VECTORS[11]
    assert not vectors.cofactorless_holds(v.signature.R, v.signature.S, v.public_key, v.message, reserialized=True)


def test_small_and_mixed_points_are_exclusive():
    for v in VECTORS:
        for p in (v.public_key, v.signature.R):
            if p.order_class == OrderClass.SMALL:
                assert p.point.is_small_order()
            if p.order_class == OrderClass.MIXED:
                assert not p.point.is_small_order() and not p.point.is_torsion_free()


def test_s_equal_to_group_order():
    # replacing S = 0 of vector 0 by L: congruent, but not reduced
    v = VECTORS[0]
    signature = v.signature_bytes[:32] + GROUP_ORDER.to_bytes(32, "little")
    assert verify.verify(v.public_key_bytes, v.message, signature, verify.COFACTORED)
    assert verify.verify(v.public_key_bytes, v.message, signature, verify.COFACTORLESS)
    assert not verify.verify(v.public_key_bytes, v.message, signature, verify.VerificationPolicy(reject_large_s=True))
    assert not verify.verify(v.public_key_bytes, v.message, signature, verify.ALGORITHM_2)


def test_describe_vector():
    text = vectors.describe_vector(VECTORS[4])
    assert text.startswith("vector 4:")
    assert "cofactored V, cofactorless X" in text
    assert SPECIFICATION_TABLE[4].comment in text
    assert VECTORS[4].message.hex() in text

    assert "non-canonical" in vectors.describe_vector(VECTORS[8])
    assert "re-encoded" in vectors.describe_vector(VECTORS[8])
