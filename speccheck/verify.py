""" reference implementations of the different flavours of the EdDSA verification equation

    [S]B = R + [k]A                  cofactorless
    [8][S]B = [8]R + [8][k]A         cofactored
    [8 S mod L]B = [8]R + [8 k mod L]A  cofactored with pre-reduced scalars (not equivalent!)

    Algorithm 2 refers to the individual verification algorithm of
    Chalkias, Garillot, Nikolaenko: "Taming the many EdDSAs", https://ia.cr/2020/1244
"""

from dataclasses import dataclass

from speccheck.ed25519 import (
    Point,
    compute_challenge,
    is_canonical_point_encoding,
    BYTE_ORDER,
    COFACTOR,
    GROUP_ORDER,
    POINT_SIZE,
    SIGNATURE_SIZE,
)


@dataclass(frozen=True)
class VerificationPolicy:
    cofactored: bool = True
    # multiply 8 into the scalars and reduce mod L before the point multiplication
    pre_reduce: bool = False
    reject_large_s: bool = False
    reject_non_canonical: bool = False
    reject_small_order_key: bool = False
    # hash the canonical re-encoding of R and A instead of the received bytes
    reserialize: bool = False


COFACTORED = VerificationPolicy(cofactored=True)
COFACTORLESS = VerificationPolicy(cofactored=False)
PRE_REDUCED = VerificationPolicy(cofactored=True, pre_reduce=True)
ALGORITHM_2 = VerificationPolicy(
    cofactored=True, reject_large_s=True, reject_non_canonical=True, reject_small_order_key=True
)


def verify(public_key: bytes, message: bytes, signature: bytes, policy: VerificationPolicy = COFACTORED) -> bool:
    """ returns True iff the signature is valid under the given policy,
        malformed keys or signatures are reported as invalid
    """
    if len(public_key) != POINT_SIZE or len(signature) != SIGNATURE_SIZE:
        return False

    R_bytes, S_bytes = bytes(signature[:POINT_SIZE]), bytes(signature[POINT_SIZE:])
    s = int.from_bytes(S_bytes, BYTE_ORDER)
    if policy.reject_large_s and s >= GROUP_ORDER:
        return False

    if policy.reject_non_canonical:
        if not is_canonical_point_encoding(public_key) or not is_canonical_point_encoding(R_bytes):
            return False

    try:
        A = Point.from_bytes(public_key, strict=policy.reject_non_canonical)
        R = Point.from_bytes(R_bytes, strict=policy.reject_non_canonical)
    except ValueError:
        return False

    if policy.reject_small_order_key and A.is_small_order():
        return False

    if policy.reserialize:
        k = int(compute_challenge(bytes(R), bytes(A), message))
    else:
        k = int(compute_challenge(R_bytes, public_key, message))

    if policy.pre_reduce:
        lhs = R.mul_by_cofactor() + A * (COFACTOR * k % GROUP_ORDER)
        return lhs == Point.B * (COFACTOR * s % GROUP_ORDER)

    difference = R + A * k - Point.B * s
    if policy.cofactored:
        difference = difference.mul_by_cofactor()
    return difference.is_identity()
