import pytest

from speccheck import harness, report
from speccheck.data import NUM_VECTORS, Outcome
from speccheck.errors import FormatError


def _matrix(rows):
    matrix = harness.ComplianceMatrix()
    for name, symbols in rows.items():
        for index, symbol in enumerate(symbols):
            matrix._record((name, index), {"V": Outcome.ACCEPT, "X": Outcome.REJECT, "E": Outcome.ERROR}[symbol])
    return matrix


def test_format_table():
    matrix = _matrix({"zebra": "XXVVVVXXXXXX", "dalek": "VVVVVVVVVVVV", "broken": "VVVVVEVVVVVV"})
    lines = report.format_table(matrix).splitlines()

    assert lines[0] == "|Library | 0 | 1 | 2 | 3 | 4 | 5 | 6 | 7 | 8 | 9 | 10 | 11 |"
    assert lines[1].startswith("|---|")
    assert lines[2] == "|[CGN20e] Alg.2 | X | X | V | V | V | V | X | X | X | X | X | X |"
    # backends sorted by name, errors left blank
    assert lines[3] == "|broken | V | V | V | V | V |   | V | V | V | V | V | V |"
    assert lines[4] == "|dalek |" + " V |" * NUM_VECTORS
    assert lines[5] == "|zebra | X | X | V | V | V | V | X | X | X | X | X | X |"
    assert len(lines) == 6


def test_format_table_selected_backends():
    matrix = _matrix({"a": "V" * NUM_VECTORS, "b": "X" * NUM_VECTORS})
    lines = report.format_table(matrix, backends=["b"]).splitlines()
    assert len(lines) == 4
    assert lines[3].startswith("|b |")


def test_format_table_unknown_backend():
    matrix = _matrix({"a": "V" * NUM_VECTORS})
    with pytest.raises(FormatError):
        report.format_table(matrix, backends=["nope"])


def test_format_table_missing_cell():
    matrix = _matrix({"a": "V" * (NUM_VECTORS - 1)})
    with pytest.raises(FormatError):
        report.format_table(matrix)


def test_format_table_unknown_vector():
    matrix = _matrix({"a": "V" * NUM_VECTORS})
    with pytest.raises(FormatError):
        report.format_table(matrix, vectors=[0, 12])


def test_write_report(tmp_path):
    matrix = _matrix({"a": "V" * NUM_VECTORS})
    path = tmp_path / "results.md"
    table = report.write_report(str(path), matrix)
    assert path.read_text() == table
