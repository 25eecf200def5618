""" adapters wrapping concrete Ed25519 verifiers behind a single verify(public_key, message, signature) call

    an adapter returns Outcome.ACCEPT or Outcome.REJECT, where REJECT covers every way in which the library reports
    an invalid signature or an undecodable key; any other exception escapes and is recorded as a fault by the harness
"""

from typing import List, Optional, Protocol

import nacl.exceptions
import nacl.signing

from Crypto.Signature import eddsa
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from speccheck import verify
from speccheck.data import Outcome
from speccheck.ed25519 import is_canonical_point_encoding, BYTE_ORDER, GROUP_ORDER, POINT_SIZE, SIGNATURE_SIZE


class VerifierAdapter(Protocol):
    """ Ed25519 verifier contract, name must be unique within a harness run """

    name: str

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome: ...


def _outcome(valid: bool) -> Outcome:
    return Outcome.ACCEPT if valid else Outcome.REJECT


class ReferenceVerifier:
    """ the pure Python verifier of this package under a fixed policy """

    def __init__(self, name: str, policy: verify.VerificationPolicy):
        self.name = name
        self.policy = policy

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome:
        return _outcome(verify.verify(public_key, message, signature, self.policy))

    def __repr__(self):
        return f"ReferenceVerifier({self.name!r}, {self.policy})"


class LibsodiumVerifier:
    """ libsodium crypto_sign_verify_detached through PyNaCl """

    name = "libsodium"

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome:
        try:
            nacl.signing.VerifyKey(public_key).verify(message, signature)
        except nacl.exceptions.BadSignatureError:
            return Outcome.REJECT
        return Outcome.ACCEPT


class OpenSSLVerifier:
    """ the Ed25519 implementation of the OpenSSL (or BoringSSL / AWS-LC) backend of pyca/cryptography """

    name = "OpenSSL"

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome:
        try:
            key = Ed25519PublicKey.from_public_bytes(public_key)
        except ValueError:
            return Outcome.REJECT
        try:
            key.verify(signature, message)
        except InvalidSignature:
            return Outcome.REJECT
        return Outcome.ACCEPT


class PyCryptodomeVerifier:
    """ PyCryptodome EdDSA in RFC 8032 (pure Ed25519) mode """

    name = "PyCryptodome"

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome:
        try:
            key = eddsa.import_public_key(public_key)
        except ValueError:
            return Outcome.REJECT
        verifier = eddsa.new(key, "rfc8032")
        try:
            verifier.verify(message, signature)
        except ValueError:
            return Outcome.REJECT
        return Outcome.ACCEPT


class StrictEncodingVerifier:
    """ rejects non-canonical encodings of A or R and S >= L before delegating to the wrapped verifier """

    def __init__(self, inner: VerifierAdapter, name: Optional[str] = None):
        self.inner = inner
        self.name = name or f"{inner.name} strict"

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> Outcome:
        if len(public_key) != POINT_SIZE or len(signature) != SIGNATURE_SIZE:
            return Outcome.REJECT
        if not is_canonical_point_encoding(public_key) or not is_canonical_point_encoding(signature[:POINT_SIZE]):
            return Outcome.REJECT
        if int.from_bytes(signature[POINT_SIZE:], BYTE_ORDER) >= GROUP_ORDER:
            return Outcome.REJECT
        return self.inner.verify(public_key, message, signature)


def reference_backends() -> List[VerifierAdapter]:
    return [
        ReferenceVerifier("ref cofactored", verify.COFACTORED),
        ReferenceVerifier("ref cofactored reserialize", verify.VerificationPolicy(cofactored=True, reserialize=True)),
        ReferenceVerifier("ref cofactorless", verify.COFACTORLESS),
        ReferenceVerifier("ref cofactorless reserialize",
                          verify.VerificationPolicy(cofactored=False, reserialize=True)),
        ReferenceVerifier("ref pre-reduced", verify.PRE_REDUCED),
        ReferenceVerifier("ref Alg.2", verify.ALGORITHM_2),
    ]


def default_backends() -> List[VerifierAdapter]:
    """ the registered verifiers, in no particular order (the report sorts them by name) """
    pycryptodome = PyCryptodomeVerifier()
    return reference_backends() + [
        LibsodiumVerifier(),
        OpenSSLVerifier(),
        pycryptodome,
        StrictEncodingVerifier(pycryptodome),
    ]
