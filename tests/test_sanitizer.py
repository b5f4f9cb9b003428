import pytest

from app.services.sanitizer import sanitize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("nf.pdf", "nf.pdf"),
        ("abc-DEF_1.2", "abc-DEF_1.2"),
        ("nota fiscal#1.pdf", "nota_fiscal_1.pdf"),
        ("../../etc/passwd", ".._.._etc_passwd"),
        ("ação", "a__o"),
        ("a b\tc", "a_b_c"),
    ],
)
def test_sanitize_replaces_each_disallowed_character(raw, expected):
    assert sanitize(raw) == expected


def test_sanitize_empty_input():
    assert sanitize("") == ""
    assert sanitize(None) == ""


def test_sanitize_keeps_length():
    raw = "x/y\\z:*?\"<>|"
    assert len(sanitize(raw)) == len(raw)
