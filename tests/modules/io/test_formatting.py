"""
Unit tests for result formatting.
"""
import numpy as np

from quatreg.modules.io.formatting import TRANSFORM_HEADING, format_matrix, format_result
from quatreg.modules.registration import RegistrationEngine, register


class TestFormatMatrix:
    """Tests for format_matrix function"""

    def test_one_line_per_row(self):
        text = format_matrix(np.eye(4), precision=3)
        lines = text.splitlines()
        assert len(lines) == 4
        assert lines[0].split() == ["1.000", "0.000", "0.000", "0.000"]

    def test_negative_values(self):
        text = format_matrix([[-1.5, 2.25]], precision=2)
        assert text.split() == ["-1.50", "2.25"]


class TestFormatResult:
    """Tests for format_result function"""

    def test_contains_transform_and_error(self, tetrahedron):
        result = register(tetrahedron, tetrahedron + [1.0, 2.0, 3.0])
        text = format_result(result)

        assert TRANSFORM_HEADING in text
        assert "Mean error of registration algorithm =" in text
        assert "0.000000000000" in text
        assert "quality" not in text

    def test_graded_result_shows_quality(self, tetrahedron):
        result = RegistrationEngine().register(tetrahedron, tetrahedron)
        assert "Registration quality: excellent" in format_result(result)
