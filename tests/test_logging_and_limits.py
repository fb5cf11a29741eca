import io
import json

from polysum.logging import JsonLogger
from polysum.ratelimit import SlidingWindowLimiter


def _lines(stream: io.StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_logger_emits_one_json_object_per_line():
    out = io.StringIO()
    log = JsonLogger("info", stream=out)

    log.info("translate.start", chunks=3, src_lang="hi_IN")
    log.debug("hidden")

    (rec,) = _lines(out)
    assert rec["event"] == "translate.start"
    assert rec["level"] == "INFO"
    assert rec["service"] == "polysum"
    assert rec["chunks"] == 3


def test_logger_redacts_secrets():
    out = io.StringIO()
    log = JsonLogger("debug", stream=out)

    log.warn("inference.call", headers={"Authorization": "Bearer hf_secret"}, note="sent Bearer hf_secret upstream")

    (rec,) = _lines(out)
    assert rec["level"] == "WARN"
    assert rec["headers"]["Authorization"] == "[REDACTED]"
    assert "hf_secret" not in rec["note"]


def test_logger_serializes_exceptions():
    out = io.StringIO()
    JsonLogger("info", stream=out).error("http.unhandled_error", error=RuntimeError("kaboom"))

    (rec,) = _lines(out)
    assert rec["error"] == {"type": "RuntimeError", "message": "kaboom"}


def test_limiter_window_slides():
    now = [0.0]
    limiter = SlidingWindowLimiter(2, 10, clock=lambda: now[0])

    assert limiter.allow("1.2.3.4")
    assert limiter.allow("1.2.3.4")
    assert not limiter.allow("1.2.3.4")
    assert limiter.allow("5.6.7.8")

    now[0] = 10.5
    assert limiter.allow("1.2.3.4")


def test_limiter_forgets_clients_after_their_window():
    now = [0.0]
    limiter = SlidingWindowLimiter(5, 60, clock=lambda: now[0])

    for i in range(10_000):
        limiter.allow(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter) == 10_000

    now[0] = 10_000.0
    assert limiter.allow("192.168.0.1")
    assert len(limiter) == 1


def test_limiter_sweep_keeps_active_clients():
    now = [0.0]
    limiter = SlidingWindowLimiter(5, 60, clock=lambda: now[0])

    limiter.allow("idle")
    now[0] = 50.0
    limiter.allow("busy")
    now[0] = 70.0
    limiter.allow("new")

    assert len(limiter) == 2
