# backend/app/agents/safety_agent.py

import logging

from ..gemini_client import agenerate_text_from_image

log = logging.getLogger("screenshot-analyzer")

SAFETY_SYSTEM = """
You are a merchant compliance reviewer for a payments provider.

You will be given:
- A screenshot of a merchant's website or storefront.
- The business name the merchant registered with.

YOUR JOB
Assess whether the business shown is safe to onboard. Judge these areas:
1. restrictedItems : Are restricted or prohibited goods/services visible
   (weapons, drugs, adult content, gambling, counterfeit goods, etc.)?
2. productPages    : Does the site show real, coherent product or service pages
   with prices and descriptions, or does it look empty / placeholder?
3. ownership       : Does the screenshot plausibly belong to the stated business
   (name, branding, contact details match)?
4. overallSafety   : Your overall judgement of onboarding risk.

SCORING RULES
- Every score is 0–10. Higher means safer / more compliant.
- Be concrete in messages: say what you saw, not generic statements.

OUTPUT FORMAT (STRICT)
Return ONLY valid JSON, no extra text, in exactly this structure:

{
  "score": number,
  "metadata": {
    "summary": "one or two sentences on the overall assessment",
    "restrictedItems": {"score": number, "message": "string"},
    "productPages":    {"score": number, "message": "string"},
    "ownership":       {"score": number, "message": "string"},
    "overallSafety":   {"score": number, "message": "string"}
  }
}
"""


def build_prompt(business_name: str) -> str:
    return f"""{SAFETY_SYSTEM}

CONTEXT
-------
BUSINESS_NAME: {business_name}
"""


async def run_safety_agent(image_b64: str, business_name: str) -> str:
    """
    Safety agent — asks Gemini for a compliance assessment of one screenshot.

    Returns the model's raw reply text. Parsing and normalization are left
    to the caller so malformed replies surface there.
    """
    log.info("🛡️ Safety Agent started (business=%s)", business_name)
    message = await agenerate_text_from_image(build_prompt(business_name), image_b64)
    log.info("✅ Safety Agent got %d chars back", len(message))
    return message
