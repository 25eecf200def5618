""" construction of signature scalars S with a controlled range relative to the group order L """

from speccheck import utils
from speccheck.data import RangeClass, SignatureScalar
from speccheck.ed25519 import Scalar, GROUP_ORDER, COFACTOR
from speccheck.errors import ConstructionError

TOP_BIT = 2 ** 255
MAX_ENCODABLE = 2 ** 256


def zero() -> SignatureScalar:
    return SignatureScalar(0, RangeClass.ZERO)


def reduced(seed) -> SignatureScalar:
    """ a fixed value 0 < S < L, either given as Scalar / int or derived from a seed string """
    if isinstance(seed, str):
        value = int(utils.deterministic_random_scalar(seed))
    else:
        value = int(seed)
    if not 0 < value < GROUP_ORDER:
        raise ConstructionError(f"reduced scalar must satisfy 0 < S < L, got 0x{value:x}")
    return SignatureScalar(value, RangeClass.REDUCED)


def secret(seed: str) -> Scalar:
    """ a fixed non-zero secret scalar (private key or nonce), not part of any signature """
    value = utils.deterministic_random_scalar(seed)
    if int(value) == 0:
        raise ConstructionError(f"seed {seed!r} derives the zero scalar")
    return value


def is_pre_reducing_challenge(challenge: Scalar) -> bool:
    """ true if reducing 8*k mod L leaves a value which is no longer a multiple of 8

        a verifier computing [8k mod L]A then misses the torsion component [8k]T = 0 of the public key,
        see Chalkias, Garillot, Nikolaenko: "Taming the many EdDSAs", 2020
    """
    return (COFACTOR * int(challenge)) % GROUP_ORDER % COFACTOR != 0


def pre_reduced(nonce: Scalar, challenge: Scalar, secret_key: Scalar) -> SignatureScalar:
    """ S = r + k*a mod L for a challenge k for which cofactoring before and after reduction disagree """
    if not is_pre_reducing_challenge(challenge):
        raise ConstructionError("8k mod L is a multiple of 8, pre-reducing would not change the outcome")
    value = int(nonce + challenge * secret_key)
    if value == 0:
        raise ConstructionError("pre-reduced scalar must be non-zero")
    return SignatureScalar(value, RangeClass.PRE_REDUCED)


def exceeds_order(s: SignatureScalar) -> SignatureScalar:
    """ S + L, congruent to S but not reduced, its top bit stays clear """
    value = s.value + GROUP_ORDER
    if not GROUP_ORDER < value < TOP_BIT:
        raise ConstructionError(f"S + L = 0x{value:x} is not in (L, 2^255)")
    return SignatureScalar(value, RangeClass.EXCEEDS_ORDER)


def far_exceeds_order(s: SignatureScalar) -> SignatureScalar:
    """ the smallest S + n*L with the top bit set, defeats verifiers that only check the high bits of S """
    value = s.value
    while value < TOP_BIT:
        value += GROUP_ORDER
    if value >= MAX_ENCODABLE:
        raise ConstructionError(f"0x{value:x} does not fit into 256 bits")
    return SignatureScalar(value, RangeClass.FAR_EXCEEDS_ORDER)
