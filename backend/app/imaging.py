# backend/app/imaging.py
import io
import base64

from PIL import Image

from .config import MAX_WIDTH, JPEG_QUALITY


def _open_image(image_bytes: bytes) -> Image.Image:
    """Decode raw bytes into a PIL Image."""
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
        return img
    except Exception as e:
        raise ValueError(f"Could not decode image: {e}")


def compress_screenshot(
    image_bytes: bytes,
    max_width: int = MAX_WIDTH,
    quality: int = JPEG_QUALITY,
) -> bytes:
    """
    Shrink a screenshot to at most `max_width` pixels wide and re-encode it
    as an optimized progressive JPEG.

    Aspect ratio is preserved and narrower images are never upscaled.
    """
    img = _open_image(image_bytes)

    # JPEG has no alpha channel
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    w, h = img.size
    if w > max_width:
        new_h = max(1, round(h * max_width / w))
        img = img.resize((max_width, new_h), Image.LANCZOS)

    buffered = io.BytesIO()
    img.save(buffered, format="JPEG", quality=quality, optimize=True, progressive=True)
    return buffered.getvalue()


def image_to_base64(img_bytes: bytes) -> str:
    """Plain base64 text (no data: prefix), as the model API expects."""
    return base64.b64encode(img_bytes).decode("utf-8")
