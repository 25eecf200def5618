import pytest

from speccheck import points, verify
from speccheck.ed25519 import Point, Scalar, compute_challenge, GROUP_ORDER
from speccheck.ed25519.testvectors import KNOWN_ANSWERS

ALL_POLICIES = [
    verify.COFACTORED,
    verify.COFACTORLESS,
    verify.PRE_REDUCED,
    verify.ALGORITHM_2,
    verify.VerificationPolicy(cofactored=True, reserialize=True),
    verify.VerificationPolicy(cofactored=False, reserialize=True),
]


@pytest.mark.parametrize("policy", ALL_POLICIES)
@pytest.mark.parametrize("v", KNOWN_ANSWERS)
def test_rfc8032_signatures_accepted(v, policy):
    assert verify.verify(v.public_key, v.message, v.signature, policy)


@pytest.mark.parametrize("policy", ALL_POLICIES)
@pytest.mark.parametrize("v", KNOWN_ANSWERS)
def test_modified_message_rejected(v, policy):
    assert not verify.verify(v.public_key, v.message + b"\x00", v.signature, policy)


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_malformed_lengths_rejected(policy):
    v = KNOWN_ANSWERS[0]
    assert not verify.verify(v.public_key[:31], v.message, v.signature, policy)
    assert not verify.verify(v.public_key, v.message, v.signature[:63], policy)
    assert not verify.verify(v.public_key, v.message, v.signature + b"\x00", policy)


def _small_key_signature(message):
    """ A of order 8, R = -A and S = 0, the cofactorless equation holds iff k = 1 mod 8 """
    A = points.small_order_point(1)
    R = points.negate(A)
    k = compute_challenge(bytes(R), bytes(A), message)
    return bytes(A), bytes(R) + bytes(32), int(k)


def test_small_order_key():
    for counter in range(64):
        message = counter.to_bytes(4, "little")
        pk, sig, k = _small_key_signature(message)
        assert verify.verify(pk, message, sig, verify.COFACTORED)
        assert verify.verify(pk, message, sig, verify.COFACTORLESS) == (k % 8 == 1)
        assert not verify.verify(pk, message, sig, verify.ALGORITHM_2)


def test_large_s_bound():
    v = KNOWN_ANSWERS[1]
    s = int.from_bytes(v.signature[32:], "little") + GROUP_ORDER
    sig = v.signature[:32] + s.to_bytes(32, "little")
    assert verify.verify(v.public_key, v.message, sig, verify.COFACTORED)
    assert verify.verify(v.public_key, v.message, sig, verify.COFACTORLESS)
    assert not verify.verify(v.public_key, v.message, sig, verify.ALGORITHM_2)


def test_pre_reduction_ignores_key_torsion():
    # mixed key A = [a]B + T8, honest S for the prime order part, challenge with 8k mod L not a multiple of 8
    a, r = Scalar(4711), Scalar(815)
    A = points.mixed_order_point(a, 1)
    R = points.full_order_point(r)
    for counter in range(256):
        message = counter.to_bytes(4, "little")
        k = compute_challenge(bytes(R), bytes(A), message)
        if int(k) % 8 != 0 and (8 * int(k)) % GROUP_ORDER % 8 != 0:
            break
    else:
        pytest.fail("no suitable message found")

    sig = bytes(R) + bytes(r + k * a)
    assert verify.verify(bytes(A), message, sig, verify.COFACTORED)
    assert not verify.verify(bytes(A), message, sig, verify.COFACTORLESS)
    assert not verify.verify(bytes(A), message, sig, verify.PRE_REDUCED)


def test_algorithm2_rejects_negative_zero_encodings():
    # (0, -1) with the sign bit set and the identity with the sign bit set
    for encoding in ("ecffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",
                     "0100000000000000000000000000000000000000000000000000000000000080"):
        pk = bytes.fromhex(encoding)
        assert Point.from_bytes(pk, strict=False).is_small_order()
        assert not verify.verify(pk, b"", bytes(64), verify.ALGORITHM_2)
