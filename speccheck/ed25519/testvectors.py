import os

from typing import List, NamedTuple

RFC8032_VECTORS_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "testvectors.txt"))


class KnownAnswer(NamedTuple):
    """ one honest Ed25519 signature from RFC 8032, section 7.1 """

    seed: bytes
    public_key: bytes
    message: bytes
    signature: bytes


def load_known_answers(path: str = RFC8032_VECTORS_PATH) -> List[KnownAnswer]:
    """ parse the libsodium "sign.input" line format: seed||pk : pk : message : signature||message """
    answers = []
    with open(path, "r") as f:
        for line in f.read().splitlines():
            if not line.strip():
                continue
            seed_and_pk, public_key, message, signed_message = (bytes.fromhex(field) for field in line.split(":")[:4])
            if seed_and_pk[32:] != public_key or signed_message[64:] != message:
                raise ValueError(f"inconsistent known answer line in {path}")
            answers.append(KnownAnswer(seed_and_pk[:32], public_key, message, signed_message[:64]))
    return answers


KNOWN_ANSWERS = load_known_answers()
