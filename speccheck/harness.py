""" runs every (backend, vector) pair on a thread pool and collects the outcomes into a ComplianceMatrix

    a faulting or hanging verifier only ever affects its own cell: exceptions and timeouts are recorded as
    Outcome.ERROR together with a BackendError diagnostic and are never raised to the caller
"""

import logging
import threading

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from speccheck import config
from speccheck.backends import VerifierAdapter
from speccheck.data import Outcome, StoredVector, TestVector
from speccheck.errors import BackendError

logger = logging.getLogger("harness")

Key = Tuple[str, int]

# freshly generated or read back from a vector file
Vector = Union[TestVector, StoredVector]


class ComplianceMatrix(Mapping):
    """ read-only mapping (backend name, vector index) -> Outcome

        iteration is ordered by backend name, then by vector index, independent of the order in which the
        cells were completed
    """

    def __init__(self):
        self._outcomes: Dict[Key, Outcome] = {}
        self.errors: Dict[Key, BackendError] = {}

    def _record(self, key: Key, outcome: Outcome, error: Optional[BackendError] = None):
        if key in self._outcomes:
            raise ValueError(f"outcome for {key} already recorded")
        self._outcomes[key] = outcome
        if error is not None:
            self.errors[key] = error

    def __getitem__(self, key: Key) -> Outcome:
        return self._outcomes[key]

    def __iter__(self) -> Iterator[Key]:
        return iter(sorted(self._outcomes))

    def __len__(self) -> int:
        return len(self._outcomes)

    @property
    def backends(self) -> List[str]:
        return sorted({name for name, _ in self._outcomes})

    @property
    def indices(self) -> List[int]:
        return sorted({index for _, index in self._outcomes})

    def row(self, backend: str) -> Tuple[Outcome, ...]:
        return tuple(self._outcomes[(backend, i)] for i in self.indices)

    def __repr__(self):
        return f"ComplianceMatrix({len(self.backends)} backends x {len(self.indices)} vectors)"


def _call(backend: VerifierAdapter, vector: Vector, timeout: float) -> Tuple[Outcome, Optional[BackendError]]:
    """ run a single verify call on a separate daemon thread, bounded by timeout

        a thread can not be killed, a call exceeding the timeout is abandoned and its result discarded
    """
    result = {}

    def target():
        try:
            result["outcome"] = backend.verify(vector.public_key_bytes, vector.message, vector.signature_bytes)
        except Exception as e:  # any fault of the backend is confined to this cell
            result["exception"] = e

    thread = threading.Thread(target=target, name=f"verify-{backend.name}-{vector.index}", daemon=True)
    thread.start()
    thread.join(timeout)

    if thread.is_alive():
        reason = f"no result within {timeout:g} seconds"
    elif "exception" in result:
        e = result["exception"]
        reason = f"{type(e).__name__}: {e}"
    elif not isinstance(result.get("outcome"), Outcome) or result["outcome"] == Outcome.ERROR:
        reason = f"invalid outcome {result.get('outcome')!r}"
    else:
        return result["outcome"], None

    error = BackendError(backend.name, vector.index, reason)
    logger.warning("%s", error)
    return Outcome.ERROR, error


def run_all(
    vectors: Sequence[Vector],
    backends: Sequence[VerifierAdapter],
    timeout: Optional[float] = None,
    max_workers: Optional[int] = None,
) -> ComplianceMatrix:
    if timeout is None:
        timeout = config.CALL_TIMEOUT
    if max_workers is None:
        max_workers = config.MAX_WORKERS
    if timeout <= 0:
        raise ValueError("timeout must be positive")

    names = [b.name for b in backends]
    if len(set(names)) != len(names):
        raise ValueError(f"duplicate backend names in {names}")
    indices = [v.index for v in vectors]
    if len(set(indices)) != len(indices):
        raise ValueError(f"duplicate vector indices in {indices}")

    logger.info("running %d backends against %d vectors", len(backends), len(vectors))

    matrix = ComplianceMatrix()
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="harness") as pool:
        cells = {pool.submit(_call, b, v, timeout): (b.name, v.index) for b in backends for v in vectors}
        for future in as_completed(cells):
            outcome, error = future.result()
            matrix._record(cells[future], outcome, error)

    logger.info("finished with %d failed calls", len(matrix.errors))
    return matrix
