from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from polysum.model_client import InferenceError


class FakeInferenceClient:
    """Stands in for InferenceClient; records every call made through it."""

    def __init__(
        self,
        summary: str = "the model wrote a short summary",
        translate_prefix: str = "",
        fail_summary: Optional[Exception] = None,
        fail_chunk_containing: Optional[str] = None,
        delays: Optional[Dict[int, float]] = None,
        blank_for_target: Optional[str] = None,
    ):
        self.summary = summary
        self.translate_prefix = translate_prefix
        self.fail_summary = fail_summary
        self.fail_chunk_containing = fail_chunk_containing
        self.delays = delays or {}
        self.blank_for_target = blank_for_target
        self.summarize_calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.translate_calls: List[Tuple[str, str, str]] = []
        self.completed: List[str] = []
        self.cancelled: List[str] = []

    async def summarize(self, endpoint: str, inputs: str, parameters: Dict[str, Any]) -> str:
        self.summarize_calls.append((endpoint, inputs, parameters))
        if self.fail_summary is not None:
            raise self.fail_summary
        return self.summary

    async def translate(self, endpoint: str, inputs: str, src_lang: str, tgt_lang: str) -> str:
        index = len(self.translate_calls)
        self.translate_calls.append((inputs, src_lang, tgt_lang))
        try:
            await asyncio.sleep(self.delays.get(index, 0))
        except asyncio.CancelledError:
            self.cancelled.append(inputs)
            raise
        if self.fail_chunk_containing and self.fail_chunk_containing in inputs:
            raise InferenceError("API Error: translation failed")
        self.completed.append(inputs)
        if tgt_lang == self.blank_for_target:
            return "   "
        return f"{self.translate_prefix}{inputs}"


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_words(n: int, word: str = "word") -> str:
    """n space-separated words and no sentence terminators."""
    return " ".join(f"{word}{i}" for i in range(n))


@pytest.fixture
def fake_client() -> FakeInferenceClient:
    return FakeInferenceClient()
