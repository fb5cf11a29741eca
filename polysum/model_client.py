import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import config
from .logging import logger
from .schemas import SummarizationResult, TranslationResult

LOADING_SIGNAL = "currently loading"


class InferenceError(Exception):
    pass


class TransientLoadError(Exception):
    """The model behind the endpoint is still warming up; safe to resend."""
    pass


def _error_message(body: Any) -> Optional[str]:
    """Pull the provider's error text out of an error body, if it has one."""
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, str):
        return err
    if isinstance(err, list):
        return "; ".join(str(e) for e in err)
    return None


def _first_item(adapter: TypeAdapter, data: Any, endpoint: str):
    try:
        items = adapter.validate_python(data)
    except ValidationError as e:
        raise InferenceError(f"API Error: unexpected response shape from {endpoint}") from e
    if not items:
        raise InferenceError(f"API Error: empty response from {endpoint}")
    return items[0]


class InferenceClient:
    """Posts ``{inputs, parameters}`` payloads to hosted model endpoints.

    The only retried condition is a cold model ("currently loading" in the
    error body): the same payload is resent up to ``max_retries`` times with
    a fixed ``retry_delay`` between attempts. Everything else fails at once.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: Optional[str],
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._http = http
        self._token = token
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, http: httpx.AsyncClient) -> "InferenceClient":
        return cls(
            http,
            token=config.HUGGINGFACE_API_TOKEN,
            timeout=config.INFERENCE_TIMEOUT,
            max_retries=config.MAX_RETRIES,
            retry_delay=config.RETRY_DELAY,
        )

    async def invoke(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        attempt = 0
        while True:
            try:
                return await self._post(endpoint, payload)
            except TransientLoadError as e:
                if attempt >= self.max_retries:
                    logger.error("inference.retries_exhausted", endpoint=endpoint, attempts=attempt + 1)
                    raise InferenceError(f"API Error: {e}") from e
                attempt += 1
                logger.warn(
                    "inference.model_loading",
                    endpoint=endpoint,
                    retry=attempt,
                    max_retries=self.max_retries,
                    delay_s=self.retry_delay,
                )
                await self._sleep(self.retry_delay)

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        t0 = time.time()
        # httpx times each phase separately; wait_for bounds the whole call
        try:
            resp = await asyncio.wait_for(
                self._http.post(endpoint, json=payload, headers=headers, timeout=self.timeout),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise InferenceError(f"API Error: timeout of {self.timeout:g}s exceeded") from e
        except httpx.HTTPError as e:
            raise InferenceError(f"API Error: {e.__class__.__name__}: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        latency_ms = int((time.time() - t0) * 1000)
        if resp.is_error:
            message = _error_message(body) or f"status:{resp.status_code}"
            logger.debug("inference.error_response", endpoint=endpoint, status=resp.status_code, latency_ms=latency_ms)
            if LOADING_SIGNAL in message:
                raise TransientLoadError(message)
            raise InferenceError(f"API Error: {message}")

        if body is None:
            raise InferenceError(f"API Error: non-JSON response from {endpoint}")
        logger.debug("inference.ok", endpoint=endpoint, status=resp.status_code, latency_ms=latency_ms)
        return body

    async def summarize(self, endpoint: str, inputs: str, parameters: Dict[str, Any]) -> str:
        data = await self.invoke(endpoint, {"inputs": inputs, "parameters": parameters})
        return _first_item(SummarizationResult, data, endpoint).summary_text

    async def translate(self, endpoint: str, inputs: str, src_lang: str, tgt_lang: str) -> str:
        data = await self.invoke(
            endpoint,
            {"inputs": inputs, "parameters": {"src_lang": src_lang, "tgt_lang": tgt_lang}},
        )
        return _first_item(TranslationResult, data, endpoint).translation_text
