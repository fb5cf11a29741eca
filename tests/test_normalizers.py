import pytest

from polysum.languages import LANGUAGE_CODES, PIVOT_CODE, resolve_language_code
from polysum.normalizers import finalize_summary, word_count


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("this is a test", "This is a test."),
        ("  padded summary \n", "Padded summary."),
        ("already done.", "Already done."),
        ("exciting news!", "Exciting news!"),
        ("is it?", "Is it?"),
        ("Keep the REST as is", "Keep the REST as is."),
        ("नमस्ते दुनिया", "नमस्ते दुनिया."),
        ("", ""),
    ],
)
def test_finalize_summary(raw, expected):
    assert finalize_summary(raw) == expected


def test_word_count_ignores_extra_whitespace():
    assert word_count("  one\ttwo \n\n three  ") == 3
    assert word_count("") == 0
    assert word_count(None) == 0


def test_language_table():
    assert len(LANGUAGE_CODES) == 13
    assert len(set(LANGUAGE_CODES.values())) == 13
    assert resolve_language_code("Urdu") == "ur_PK"
    assert resolve_language_code("Hindi") == "hi_IN"
    assert resolve_language_code("Esperanto") == PIVOT_CODE


def test_language_table_is_read_only():
    with pytest.raises(TypeError):
        LANGUAGE_CODES["French"] = "fr_XX"
