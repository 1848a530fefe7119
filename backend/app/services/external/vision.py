"""
Habit Verification Service - Vision-model judgement of habit photos
Sends the habit name/description and a base64 photo to the model and parses
a JSON verdict out of its free-text reply
"""
import json
import logging
import re
from typing import Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from app.core import dependencies
from app.core.config import settings
from app.core.constants import DEFAULT_IMAGE_MIME_TYPE, VERIFICATION_FAILED_EXPLANATION
from app.models.proof import VerificationResult
from app.utils.prompts import (
    VISION_HABIT_VERIFICATION_SYSTEM_PROMPT,
    format_habit_verification_prompt
)

logger = logging.getLogger(__name__)

# First "{" through last "}" of the reply
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

DATA_URL_MIME_TYPES = {
    "data:image/png;": "image/png",
    "data:image/gif;": "image/gif",
    "data:image/webp;": "image/webp",
    "data:image/jpeg;": "image/jpeg",
    "data:image/jpg;": "image/jpeg",
}

# Leading base64 characters of each format's magic bytes
BASE64_SIGNATURES = {
    "iVBORw0KGgo": "image/png",
    "R0lGOD": "image/gif",
    "UklGR": "image/webp",
    "/9j/": "image/jpeg",
}


def failed_verification() -> VerificationResult:
    """The fixed negative result returned for any technical failure"""
    return VerificationResult(is_verified=False, confidence=0, explanation=VERIFICATION_FAILED_EXPLANATION)


def split_data_url(image_base64: str) -> Tuple[Optional[str], str]:
    """
    Split an optional data: URL header from its base64 payload

    Line breaks and other whitespace (e.g. from the `base64` tool) are removed
    from the payload.

    Returns:
        Tuple of (header or None, base64 payload)
    """
    image_base64 = image_base64.strip()
    header = None
    if image_base64.startswith("data:") and "," in image_base64:
        header, image_base64 = image_base64.split(",", 1)
    return header, "".join(image_base64.split())


def detect_mime_type(image_base64: str) -> str:
    """
    Detect the image MIME type from a data: URL prefix or the base64 magic bytes

    Args:
        image_base64: Raw base64 or a data:image/...;base64, URL

    Returns:
        MIME type, image/jpeg when unknown
    """
    for prefix, mime_type in DATA_URL_MIME_TYPES.items():
        if image_base64.startswith(prefix):
            return mime_type

    _, payload = split_data_url(image_base64)
    for signature, mime_type in BASE64_SIGNATURES.items():
        if payload.startswith(signature):
            return mime_type

    return DEFAULT_IMAGE_MIME_TYPE


def parse_verification_reply(text: str) -> VerificationResult:
    """
    Extract the JSON verdict from the model's reply

    Args:
        text: Free-text reply that should contain one JSON object

    Returns:
        VerificationResult

    Raises:
        ValueError: If no JSON object is found or it does not match the schema
    """
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        raise ValueError("Failed to parse verification result")

    try:
        return VerificationResult.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise ValueError(f"Invalid verification result: {e}")


def _call_vision_api(image_base64: str, mime_type: str, user_prompt: str) -> str:
    """
    Call the vision model with the photo and the verification prompt

    Returns:
        The reply text

    Raises:
        Exception if the API call fails
    """
    _, payload = split_data_url(image_base64)

    response = dependencies.get_openai_client().chat.completions.create(
        model=settings.OPENAI_VISION_MODEL,
        messages=[
            {"role": "system", "content": VISION_HABIT_VERIFICATION_SYSTEM_PROMPT},
            {"role": "user", "content": [
                {"type": "text", "text": user_prompt},
                {
                    "type": "image_url",
                    "image_url": {
                        "url": f"data:{mime_type};base64,{payload}",
                        "detail": "high"
                    }
                }
            ]}
        ]
    )

    return response.choices[0].message.content or ""


def verify_habit_with_image(
    habit_name: str,
    habit_description: Optional[str],
    image_base64: str
) -> VerificationResult:
    """
    Ask the vision model whether a photo shows the habit being done

    Never raises: a missing API key, a network error or an unparseable reply
    all produce the fixed negative result.

    Args:
        habit_name: The habit being verified
        habit_description: Optional extra context
        image_base64: Raw base64 or a data: URL

    Returns:
        VerificationResult
    """
    if not settings.OPENAI_API_KEY:
        logger.error("[HABIT VERIFICATION] OPENAI_API_KEY is not set")
        return failed_verification()

    try:
        mime_type = detect_mime_type(image_base64)
        user_prompt = format_habit_verification_prompt(habit_name, habit_description)

        logger.info(f"[HABIT VERIFICATION] Starting verification for habit: {habit_name} ({mime_type})")
        reply = _call_vision_api(image_base64, mime_type, user_prompt)

        result = parse_verification_reply(reply)

        logger.info(f"[HABIT VERIFICATION] ✓ Verification complete")
        logger.info(f"[HABIT VERIFICATION] Verified: {result.is_verified}")
        logger.info(f"[HABIT VERIFICATION] Confidence: {result.confidence}")
        logger.info(f"[HABIT VERIFICATION] Explanation: {result.explanation}")

        return result

    except Exception as e:
        logger.error(f"[HABIT VERIFICATION] ✗ Verification failed: {e}", exc_info=True)
        return failed_verification()
