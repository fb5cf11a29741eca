import math
import time
from typing import Mapping

from ..languages import LANGUAGE_CODES, PIVOT_CODE, PIVOT_LANGUAGE, resolve_language_code
from ..logging import logger
from ..model_client import InferenceClient, InferenceError
from ..normalizers import finalize_summary, word_count
from ..schemas import PipelineResult, SummaryParameters
from .translator import Translator

MAX_SUMMARY_LENGTH = 150
SUMMARY_RATIO = 0.3


class ValidationError(Exception):
    """Input rejected before any outbound call."""
    pass


def summary_parameters(words: int) -> SummaryParameters:
    """Summary length tracks the input (30% of its words) under a hard ceiling."""
    return SummaryParameters(max_length=min(MAX_SUMMARY_LENGTH, math.ceil(words * SUMMARY_RATIO)))


class SummarizationPipeline:
    """translate to English -> summarize -> translate back -> tidy up.

    Non-English input is routed through the pivot language because the
    summarization model only reads English.
    """

    def __init__(
        self,
        client: InferenceClient,
        translator: Translator,
        summary_endpoint: str,
        languages: Mapping[str, str] = LANGUAGE_CODES,
        min_words: int = 100,
    ):
        self.client = client
        self.translator = translator
        self.summary_endpoint = summary_endpoint
        self.languages = languages
        self.min_words = min_words

    def validate(self, text: str) -> int:
        words = word_count(text)
        if words < self.min_words:
            raise ValidationError(f"Please enter at least {self.min_words} words.")
        return words

    async def summarize(self, text: str, language: str) -> PipelineResult:
        t0 = time.time()
        words = self.validate(text)

        lang_code = None
        pivot_text = text
        if language != PIVOT_LANGUAGE:
            lang_code = resolve_language_code(language, self.languages)
            pivot_text = await self.translator.translate(text, lang_code, PIVOT_CODE)

        params = summary_parameters(word_count(pivot_text))
        summary = await self.client.summarize(self.summary_endpoint, pivot_text, params.model_dump())
        if not summary.strip():
            raise InferenceError("API Error: empty summary")

        if lang_code is not None:
            summary = await self.translator.translate(summary, PIVOT_CODE, lang_code)
            if not summary.strip():
                raise InferenceError("API Error: empty translated summary")

        result = PipelineResult(summary=finalize_summary(summary), original_language=language)
        logger.info(
            "pipeline.completed",
            language=language,
            input_words=words,
            max_length=params.max_length,
            summary_words=word_count(result.summary),
            latency_ms=int((time.time() - t0) * 1000),
        )
        return result
