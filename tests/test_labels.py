"""Tests for display label helpers."""

import pytest

from finsight.utils.labels import capitalize


@pytest.mark.parametrize(
    "label,expected",
    [
        ("food", "Food"),
        ("salary payment", "Salary payment"),
        ("ETF", "ETF"),
        ("iPhone case", "IPhone case"),
        ("", ""),
    ],
)
def test_capitalize(label, expected):
    assert capitalize(label) == expected
