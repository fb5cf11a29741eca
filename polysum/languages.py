"""Language-name to mBART-50 code table.

Built once at import and handed to the pipeline; never mutated.
"""
from types import MappingProxyType
from typing import Mapping

PIVOT_LANGUAGE = "English"
PIVOT_CODE = "en_XX"

LANGUAGE_CODES: Mapping[str, str] = MappingProxyType({
    "English": PIVOT_CODE,
    "Hindi": "hi_IN",
    "Bengali": "bn_IN",
    "Telugu": "te_IN",
    "Tamil": "ta_IN",
    "Marathi": "mr_IN",
    "Gujarati": "gu_IN",
    "Kannada": "kn_IN",
    "Malayalam": "ml_IN",
    "Punjabi": "pa_IN",
    "Odia": "or_IN",
    "Assamese": "as_IN",
    "Urdu": "ur_PK",
})


def resolve_language_code(name: str, table: Mapping[str, str] = LANGUAGE_CODES) -> str:
    """Unknown names fall back to the pivot code."""
    return table.get(name, PIVOT_CODE)
