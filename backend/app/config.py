# backend/app/config.py

import os

API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
MODEL_NAME = os.getenv("ANALYZER_MODEL", "gemini-2.0-flash")

# Hosting platforms cap request bodies at ~4.5 MB, so reject before decoding.
MAX_UPLOAD_BYTES = int(os.getenv("ANALYZER_MAX_UPLOAD_BYTES", str(int(4.5 * 1024 * 1024))))

MAX_WIDTH = int(os.getenv("ANALYZER_MAX_WIDTH", "800"))
JPEG_QUALITY = int(os.getenv("ANALYZER_JPEG_QUALITY", "65"))

CORS_ORIGINS = [
    o.strip() for o in os.getenv("ANALYZER_CORS_ORIGINS", "*").split(",") if o.strip()
]

LOG_LEVEL = os.getenv("ANALYZER_LOG_LEVEL", "INFO")
