""" file formats for the generated vectors

    cases.json  list of objects with hex encoded message, pub_key and signature plus the expected outcomes
    cases.txt   number of vectors, then msg= / pbk= / sig= lines per vector, for test drivers in other languages
"""

import json

from typing import List, Sequence

from speccheck.data import StoredVector, TestVector
from speccheck.ed25519 import POINT_SIZE, SIGNATURE_SIZE
from speccheck.errors import EncodingError


def _as_dict(v: TestVector) -> dict:
    return {
        "index": v.index,
        "message": v.message.hex(),
        "pub_key": v.public_key_bytes.hex(),
        "signature": v.signature_bytes.hex(),
        "expected_cofactored": v.expected_cofactored,
        "expected_cofactorless": v.expected_cofactorless,
    }


def to_json(vectors: Sequence[TestVector]) -> str:
    return json.dumps([_as_dict(v) for v in vectors], indent=2)


def write_json(path: str, vectors: Sequence[TestVector]):
    with open(path, "w") as f:
        f.write(to_json(vectors))
        f.write("\n")


def to_text(vectors: Sequence[TestVector]) -> str:
    lines = [str(len(vectors))]
    for v in vectors:
        lines.append(f"msg={v.message.hex()}")
        lines.append(f"pbk={v.public_key_bytes.hex()}")
        lines.append(f"sig={v.signature_bytes.hex()}")
    return "\n".join(lines)


def write_text(path: str, vectors: Sequence[TestVector]):
    with open(path, "w") as f:
        f.write(to_text(vectors))


def load_json(path: str) -> List[StoredVector]:
    """ read a cases.json file back, the result can be passed to harness.run_all like generated vectors """
    with open(path) as f:
        try:
            entries = json.load(f)
        except ValueError as e:
            raise EncodingError(f"{path} is not a valid json file: {e}") from e
    if not isinstance(entries, list):
        raise EncodingError(f"{path} does not contain a list of vectors")

    loaded = []
    for position, entry in enumerate(entries):
        try:
            index = int(entry.get("index", position))
            message = bytes.fromhex(entry["message"])
            public_key = bytes.fromhex(entry["pub_key"])
            signature = bytes.fromhex(entry["signature"])
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise EncodingError(f"malformed entry {position} in {path}: {e!r}") from e
        if len(public_key) != POINT_SIZE or len(signature) != SIGNATURE_SIZE:
            raise EncodingError(f"entry {position} in {path} has a key or signature of invalid length")
        loaded.append(StoredVector(index, message, public_key, signature))

    indices = [v.index for v in loaded]
    if len(set(indices)) != len(indices):
        raise EncodingError(f"{path} contains duplicate vector indices")
    return loaded
