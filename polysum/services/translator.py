import asyncio
import time

from ..chunker import chunk_text
from ..logging import logger
from ..model_client import InferenceClient


class Translator:
    """Chunked, concurrent translation through the many-to-many translation endpoint."""

    def __init__(self, client: InferenceClient, endpoint: str, max_chars: int = 1000):
        self.client = client
        self.endpoint = endpoint
        self.max_chars = max_chars

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate ``text``; any failed chunk fails the whole call.

        Results are joined in chunk order (gather keeps argument order, not
        completion order).
        """
        if source_lang == target_lang:
            return text.strip()

        chunks = chunk_text(text, self.max_chars)
        if not chunks:
            return ""

        t0 = time.time()
        logger.info(
            "translate.start",
            src_lang=source_lang,
            tgt_lang=target_lang,
            chunks=len(chunks),
            chars=len(text),
        )
        tasks = [
            asyncio.ensure_future(self.client.translate(self.endpoint, chunk, source_lang, target_lang))
            for chunk in chunks
        ]
        try:
            translated = await asyncio.gather(*tasks)
        except Exception:
            # the request has already failed; stop the sibling chunks
            for task in tasks:
                task.cancel()
            raise
        logger.info(
            "translate.completed",
            src_lang=source_lang,
            tgt_lang=target_lang,
            chunks=len(chunks),
            latency_ms=int((time.time() - t0) * 1000),
        )
        return " ".join(t.strip() for t in translated)
