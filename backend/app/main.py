# backend/app/main.py
from dotenv import load_dotenv

load_dotenv()  # Loads .env automatically

from typing import Optional

import asyncio
import json
from fastapi import FastAPI, UploadFile, File, Form, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from .agents.safety_agent import run_safety_agent
from .alerts import broadcast_alert, make_alert, subscribe, unsubscribe
from .config import CORS_ORIGINS, MAX_UPLOAD_BYTES
from .imaging import compress_screenshot, image_to_base64
from .logging_config import log, record_request, stage_timer, get_metrics_snapshot
from .models import AnalysisResponse, ErrorResponse
from .scoring import normalize_analysis


app = FastAPI(title="Screenshot Safety Analyzer", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    # Older Starlette releases don't track size; measure the spooled file.
    upload.file.seek(0, 2)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def _megabytes(n: int) -> str:
    return f"{n / (1024 * 1024):g}"


def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity literals; a model reply may not use them.
    raise ValueError(f"Invalid JSON constant in model reply: {name}")


def _notify(type: str, message: str) -> None:
    try:
        broadcast_alert(make_alert(type, message))
    except Exception as e:
        log.warning(f"⚠️ Could not broadcast {type} alert: {e}")


# ==========================================================
#                    SCREENSHOT ANALYSIS
# ==========================================================


@app.post("/api/run")
async def run_analysis(
    screenshot: Optional[UploadFile] = File(None),
    business_name: Optional[str] = Form(None, alias="businessName"),
):
    """
    Compress one screenshot, ask the model for a safety assessment and
    return the normalized score breakdown.
    """
    if screenshot is None or not business_name:
        record_request("rejected_missing")
        return _error(400, "Missing screenshot or business name.")

    # ---- upload size guard ----
    if _upload_size(screenshot) > MAX_UPLOAD_BYTES:
        record_request("rejected_too_large")
        return _error(
            413,
            f"Screenshot exceeds {_megabytes(MAX_UPLOAD_BYTES)} MB. "
            "Compress on the client or use Blob storage.",
        )

    try:
        _notify("ImageCompression", "Compressing image")

        raw = await screenshot.read()
        with stage_timer("compress"):
            compressed = await asyncio.to_thread(compress_screenshot, raw)
        log.info(f"🗜️ Compressed screenshot {len(raw)} -> {len(compressed)} bytes")

        image_b64 = image_to_base64(compressed)

        _notify("ModelRequest", "Sending screenshot to the model")

        with stage_timer("model"):
            message = await run_safety_agent(image_b64, business_name)

        parsed = json.loads(message, parse_constant=_reject_constant)
        analysis = normalize_analysis(parsed)

        # Rendered here so a serialization failure still lands in the 500 envelope.
        response = JSONResponse(
            content=AnalysisResponse(
                message="Analysis completed",
                screenshotAnalysis=analysis,
            ).model_dump()
        )

    except Exception as e:
        record_request("failed")
        if str(e):
            log.error(f"❌ Error: {e!r}")
            return _error(500, f"Error: {e}")
        log.error(f"❌ Unknown error: {e!r}")
        return _error(500, "Unknown error")

    record_request("succeeded")
    log.info(f"🏁 Analysis complete for {business_name!r}, score {analysis.score}")
    return response


# ==========================================================
#                     PROGRESS ALERTS
# ==========================================================


async def _alert_stream(request: Request):
    queue = subscribe()
    try:
        while not await request.is_disconnected():
            try:
                alert = await asyncio.wait_for(queue.get(), timeout=15)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield f"data: {alert.model_dump_json()}\n\n"
    finally:
        unsubscribe(queue)


@app.get("/api/alerts")
async def alerts(request: Request):
    """Server-Sent Events feed of pipeline progress alerts."""
    return StreamingResponse(
        _alert_stream(request),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


# ==========================================================
#                     METRICS + HEALTH
# ==========================================================


@app.get("/metrics")
async def metrics():
    return get_metrics_snapshot()


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app.main:app", host="127.0.0.1", port=8000, reload=True)
