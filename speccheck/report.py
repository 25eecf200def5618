""" renders a ComplianceMatrix as a markdown table, one row per backend and one column per vector index """

from typing import Optional, Sequence

from speccheck.data import Outcome
from speccheck.errors import FormatError
from speccheck.harness import ComplianceMatrix
from speccheck.vectors import SPECIFICATION_TABLE

REFERENCE_ROW_NAME = "[CGN20e] Alg.2"
LIBRARY_COLUMN = "Library"

SYMBOLS = {
    Outcome.ACCEPT: "V",
    Outcome.REJECT: "X",
    Outcome.ERROR: " ",  # untested / failed calls are left blank
}


def _line(name: str, cells: Sequence[str]) -> str:
    return f"|{name} |" + "".join(f" {c} |" for c in cells)


def reference_row(indices: Sequence[int]) -> str:
    expectations = {spec.index: spec.algorithm2 for spec in SPECIFICATION_TABLE}
    try:
        cells = ["V" if expectations[i] else "X" for i in indices]
    except KeyError as e:
        raise FormatError(f"vector index {e.args[0]} is not part of the specification table") from e
    return _line(REFERENCE_ROW_NAME, cells)


def format_table(
    matrix: ComplianceMatrix, backends: Optional[Sequence[str]] = None, vectors: Optional[Sequence[int]] = None
) -> str:
    """ backends / vectors select and order the rows / columns, default is all of them sorted """
    if backends is None:
        backends = matrix.backends
    if vectors is None:
        vectors = [spec.index for spec in SPECIFICATION_TABLE]

    unknown = [name for name in backends if name not in matrix.backends]
    if unknown:
        raise FormatError(f"no results for backends {unknown}")

    lines = [
        _line(LIBRARY_COLUMN, [str(i) for i in vectors]),
        "|---|" + "---|" * len(vectors),
        reference_row(vectors),
    ]
    for name in backends:
        try:
            cells = [SYMBOLS[matrix[(name, i)]] for i in vectors]
        except KeyError as e:
            raise FormatError(f"missing outcome for backend {name!r}: {e}") from e
        lines.append(_line(name, cells))
    return "\n".join(lines) + "\n"


def write_report(path: str, matrix: ComplianceMatrix, backends: Optional[Sequence[str]] = None) -> str:
    table = format_table(matrix, backends)
    with open(path, "w") as f:
        f.write(table)
    return table
