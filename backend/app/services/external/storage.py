"""
Storage Service - Verification photo uploads to Supabase Storage
"""
import base64
import binascii
import logging
import time
from typing import Optional

from app.core import dependencies
from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError
from .vision import detect_mime_type, split_data_url

logger = logging.getLogger(__name__)


def decode_image(image_base64: str) -> bytes:
    """
    Decode a base64 image (raw or data: URL) into bytes

    Raises:
        ValidationError: If the payload is empty or not valid base64
    """
    _, payload = split_data_url(image_base64)
    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image must be base64 encoded")

    if not image_bytes:
        raise ValidationError("Image is empty")
    return image_bytes


def build_verification_key(habit_id: str, timestamp_ms: Optional[int] = None) -> str:
    """Object key for a verification photo: verification_{habitId}_{millis}.jpg"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"verification_{habit_id}_{timestamp_ms}.jpg"


def upload_verification_image(habit_id: str, image_base64: str) -> str:
    """
    Upload a verification photo and return its public URL

    Args:
        habit_id: The habit the photo is evidence for
        image_base64: Raw base64 or a data: URL

    Returns:
        Public URL of the stored object

    Raises:
        ValidationError: If the image cannot be decoded
        StorageError: If the upload fails
    """
    image_bytes = decode_image(image_base64)
    key = build_verification_key(habit_id)
    bucket = dependencies.get_supabase_client().storage.from_(settings.VERIFICATION_BUCKET)

    try:
        logger.info(f"[STORAGE] Uploading {len(image_bytes)} bytes to {settings.VERIFICATION_BUCKET}/{key}")
        bucket.upload(key, image_bytes, {"content-type": detect_mime_type(image_base64)})
        return bucket.get_public_url(key)
    except Exception as e:
        logger.error(f"[STORAGE] Upload failed for habit {habit_id}: {e}")
        raise StorageError(f"Failed to upload verification image: {e}")
