# backend/app/logging_config.py

import logging
import time
from contextlib import contextmanager
from typing import Dict, Union

from .config import LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

log = logging.getLogger("screenshot-analyzer")

# Every /api/run request ends in exactly one of these.
REQUEST_OUTCOMES = ("succeeded", "failed", "rejected_missing", "rejected_too_large")

MetricValue = Union[int, float]
_metrics: Dict[str, MetricValue] = {}


def inc_metric(name: str, amount: int = 1) -> None:
    _metrics[name] = int(_metrics.get(name, 0)) + amount


def record_request(outcome: str) -> None:
    if outcome not in REQUEST_OUTCOMES:
        raise ValueError(f"Unknown request outcome: {outcome}")
    inc_metric("requests_total")
    inc_metric(f"requests_{outcome}")


def get_metrics_snapshot() -> Dict[str, MetricValue]:
    return dict(_metrics)


@contextmanager
def stage_timer(stage: str):
    """
    Time one pipeline stage (compress, model).

    Keeps the last duration and a running call count per stage, and logs
    the duration even when the stage raises.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
        log.info("⏱️ stage=%s took %.1fms", stage, elapsed_ms)
        _metrics[f"time_ms_last_{stage}"] = elapsed_ms
        inc_metric(f"stage_calls_{stage}")
