"""Test module to run examples from the examples package

The tests are run using pytest.
"""

import pytest  # pylint: disable=unused-import

from examples.qnd import bezier_2_quadratic_spacing


def test_examples_bezier_2_quadratic_spacing(capsys):
    """Test function for bezier_2_quadratic_spacing example"""
    bezier_2_quadratic_spacing.main()
    assert "Uniform" in capsys.readouterr().out
