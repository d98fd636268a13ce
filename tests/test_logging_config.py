import pytest

from backend.app import logging_config
from backend.app.logging_config import get_metrics_snapshot, record_request, stage_timer


def test_record_request_counts_total_and_outcome():
    before = get_metrics_snapshot()
    record_request("rejected_too_large")
    after = get_metrics_snapshot()

    assert after["requests_total"] == before.get("requests_total", 0) + 1
    assert after["requests_rejected_too_large"] == before.get("requests_rejected_too_large", 0) + 1


def test_unknown_outcome_is_refused():
    with pytest.raises(ValueError, match="Unknown request outcome"):
        record_request("maybe")


def test_stage_timer_records_even_when_stage_raises():
    calls_before = get_metrics_snapshot().get("stage_calls_unit", 0)
    with pytest.raises(RuntimeError):
        with stage_timer("unit"):
            raise RuntimeError("boom")

    snapshot = get_metrics_snapshot()
    assert snapshot["stage_calls_unit"] == calls_before + 1
    assert snapshot["time_ms_last_unit"] >= 0


def test_outcomes_cover_every_endpoint_exit():
    assert set(logging_config.REQUEST_OUTCOMES) == {
        "succeeded", "failed", "rejected_missing", "rejected_too_large"
    }
