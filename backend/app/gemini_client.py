import asyncio
from typing import Optional

from google import genai
from google.genai import types

from .config import API_KEY, MODEL_NAME

_client: Optional[genai.Client] = None


def get_client() -> genai.Client:
    """Create the Gemini client on first use so the app can boot without a key."""
    global _client
    if _client is None:
        if not API_KEY:
            raise RuntimeError("Missing GOOGLE_API_KEY or GEMINI_API_KEY environment variable.")
        _client = genai.Client(api_key=API_KEY)
    return _client


# --- Image + prompt Gemini call ---

def generate_text_from_image(prompt: str, image_b64: str, model: str = MODEL_NAME) -> str:
    """
    Send a text prompt plus a base64 JPEG to Gemini and return the raw reply text.
    JSON output is requested but not parsed here.
    """
    contents = [
        {"text": prompt},
        {
            "inline_data": {
                "mime_type": "image/jpeg",
                "data": image_b64,
            }
        },
    ]

    resp = get_client().models.generate_content(
        model=model,
        contents=contents,
        config=types.GenerateContentConfig(response_mime_type="application/json"),
    )

    text = getattr(resp, "text", None)
    if not text:
        raise RuntimeError("Empty model response")
    return text


async def agenerate_text_from_image(prompt: str, image_b64: str, model: str = MODEL_NAME) -> str:
    # The SDK call is blocking; keep it off the event loop.
    return await asyncio.to_thread(generate_text_from_image, prompt, image_b64, model)
