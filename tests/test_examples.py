"""
Test the example programs.

Output contains random values, so only structure and exit codes are checked.
"""

from densela.examples import basic_matrix_operations, matrix_creation


def test_matrix_creation_runs(capsys):
    assert matrix_creation.main() == 0
    out = capsys.readouterr().out
    assert out.count("Vector size: 3") == 2
    assert out.count("Vector size: 4") == 2
    assert "Rows: 4" in out
    assert "Cols: 4" in out
    # Diagonal set by hand on a zeroed 3x3
    assert "Matrix: \n1 0 0\n0 1 0\n0 0 1\n" in out


def test_basic_matrix_operations_runs(capsys):
    assert basic_matrix_operations.main() == 0
    out = capsys.readouterr().out
    for label in (
        "Dot product:",
        "vector1 (norm):",
        "Added vectors (transpose):",
        "Scaled Vector (norm):",
        "Cross product:",
        "Matrix-vector multiplication:",
        "Addition:",
        "Multiplication:",
        "Chained evaluation:",
    ):
        assert label in out


def test_normalized_vector_reports_unit_norm(capsys):
    basic_matrix_operations.main()
    out = capsys.readouterr().out
    line = next(l for l in out.splitlines() if l.startswith("Normalized vector1 (norm):"))
    assert abs(float(line.split(":")[1]) - 1.0) < 1e-5
    line = next(l for l in out.splitlines() if l.startswith("Scaled Vector (norm):"))
    assert abs(float(line.split(":")[1]) - 5.0) < 1e-4
