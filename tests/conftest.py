import io
import json

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from backend.app import main


FULL_REPLY = {
    "score": 8.5,
    "metadata": {
        "summary": "Legitimate hardware store with clear product listings.",
        "restrictedItems": {"score": 9, "message": "No restricted goods visible."},
        "productPages": {"score": 8, "message": "Priced product grid with descriptions."},
        "ownership": {"score": 7, "message": "Logo matches Acme branding."},
        "overallSafety": {"score": 8, "message": "Low onboarding risk."},
    },
}


def make_image(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    img = Image.new(mode, (width, height), color=(30, 120, 200) if mode == "RGB" else (30, 120, 200, 128))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def client():
    return TestClient(main.app)


@pytest.fixture
def fake_agent(monkeypatch):
    """
    Replace the Gemini call with a coroutine returning a canned reply.
    `calls` records what the endpoint sent.
    """

    class FakeAgent:
        def __init__(self):
            self.reply = json.dumps(FULL_REPLY)
            self.error = None
            self.calls = []

        async def __call__(self, image_b64, business_name):
            self.calls.append((image_b64, business_name))
            if self.error is not None:
                raise self.error
            return self.reply

    agent = FakeAgent()
    monkeypatch.setattr(main, "run_safety_agent", agent)
    return agent
