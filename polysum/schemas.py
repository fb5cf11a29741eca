from typing import List

from pydantic import BaseModel, ConfigDict, TypeAdapter


class SummarizationItem(BaseModel):
    """One element of the summarization endpoint's response array."""

    summary_text: str


class TranslationItem(BaseModel):
    """One element of the translation endpoint's response array."""

    translation_text: str


SummarizationResult = TypeAdapter(List[SummarizationItem])
TranslationResult = TypeAdapter(List[TranslationItem])


class SummaryParameters(BaseModel):
    """Generation parameters sent with every summarization call."""

    max_length: int
    min_length: int = 30
    do_sample: bool = False
    num_beams: int = 4
    length_penalty: float = 2.0
    early_stopping: bool = True


class PipelineResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    original_language: str
