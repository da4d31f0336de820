import pytest
from app.core.text_utils import strip_text


@pytest.mark.parametrize(
    "value, expected",
    [
        ("  Roy Thomson Hall ", "Roy Thomson Hall"),
        ("A1", "A1"),
        ("", None),
        (" \t\n ", None),
        (None, None),
        (" Balcony ", "Balcony"),
        ("  Rock  concert ", "Rock  concert"),
    ]
)
def test_strip_text(value, expected):
    assert strip_text(value) == expected


@pytest.mark.parametrize("value", [0, 12, ["a"]])
def test_strip_text_passes_through_non_strings(value):
    assert strip_text(value) is value
