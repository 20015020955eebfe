import os
import mimetypes
import logging
from functools import lru_cache
from uuid import uuid4

from dotenv import load_dotenv
from fastapi import UploadFile
from supabase import create_client, Client

from common.errors import InternalError, ValidationFailed

load_dotenv()

logger = logging.getLogger(__name__)

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
BUCKET_NAME = os.getenv("SUPABASE_BUCKET", "reports")


@lru_cache
def get_supabase() -> Client:
    if not SUPABASE_URL or not SUPABASE_KEY:
        raise InternalError("Image storage is not configured")
    return create_client(SUPABASE_URL, SUPABASE_KEY)


def upload_image(file: UploadFile, folder: str = "images") -> str:
    """Upload an image to Supabase Storage and return its public URL."""
    content_type = file.content_type or mimetypes.guess_type(file.filename or "")[0] or ""
    if not content_type.startswith("image/"):
        raise ValidationFailed(
            "Only image files are allowed",
            {"error": "Validation failed", "details": [
                {"field": "file", "message": f"Unsupported content type {content_type or 'unknown'}", "type": "content_type"}
            ]},
        )

    file_ext = os.path.splitext(file.filename or "")[1] or mimetypes.guess_extension(content_type) or ""
    file_name = f"{folder}/{uuid4()}{file_ext}"
    file_bytes = file.file.read()

    client = get_supabase()
    try:
        client.storage.from_(BUCKET_NAME).upload(file_name, file_bytes, {"content-type": content_type})
        url = client.storage.from_(BUCKET_NAME).get_public_url(file_name)
    except Exception as e:
        logger.exception(f"Upload to bucket {BUCKET_NAME} failed")
        raise InternalError(f"Upload gambar gagal: {str(e)}")

    logger.info(f"Uploaded {file_name} to bucket {BUCKET_NAME}")
    return url
