# backend/app/scoring.py

import math
from typing import Any, Dict

from .models import AnalysisMetadata, ScreenshotAnalysis, SectionScore

SECTION_KEYS = ("restrictedItems", "productPages", "ownership", "overallSafety")


def _safe_float(v: Any, default: float = 0.0) -> float:
    # bool is an int subclass; a model saying `true` is not a score
    if isinstance(v, bool) or not isinstance(v, (int, float, str)):
        return default
    try:
        value = float(v)
    except (ValueError, OverflowError):
        return default
    # "inf", "nan" and 1e999 parse fine but can't be rendered as JSON
    return value if math.isfinite(value) else default


def _section(raw: Any) -> SectionScore:
    if not isinstance(raw, dict):
        return SectionScore()
    message = raw.get("message")
    return SectionScore(
        score=_safe_float(raw.get("score")),
        message=message if isinstance(message, str) else "N/A",
    )


def normalize_analysis(parsed: Any) -> ScreenshotAnalysis:
    """
    Reshape whatever JSON the model returned into a complete ScreenshotAnalysis.

    The reply is treated as an untrusted partial record: each field is taken
    only if present and well-typed, otherwise its default is used.
    """
    data: Dict[str, Any] = parsed if isinstance(parsed, dict) else {}
    meta = data.get("metadata")
    if not isinstance(meta, dict):
        meta = {}

    summary = meta.get("summary")

    return ScreenshotAnalysis(
        score=_safe_float(data.get("score")),
        metadata=AnalysisMetadata(
            summary=summary if isinstance(summary, str) else "No summary.",
            **{key: _section(meta.get(key)) for key in SECTION_KEYS},
        ),
    )
