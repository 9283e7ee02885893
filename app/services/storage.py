"""
Upload de fichiers vers Supabase Storage.
"""
from typing import Dict, Optional
import logging
import os
import time

from supabase import Client

from app.core.config import settings
from app.core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "uploads"


def build_object_path(folder: str, user_id: str, filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """<folder>/<user_id>/<unix_ms>.<ext>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower() or "bin"
    folder = (folder or DEFAULT_FOLDER).strip("/") or DEFAULT_FOLDER
    return f"{folder}/{user_id}/{now_ms}.{ext}"


class StorageService:
    def __init__(self, db: Client, bucket: str = settings.STORAGE_BUCKET):
        self.db = db
        self.bucket = bucket

    def upload(
        self,
        user_id: str,
        content: bytes,
        filename: Optional[str],
        content_type: Optional[str] = None,
        folder: str = DEFAULT_FOLDER
    ) -> Dict[str, str]:
        if not content:
            raise ValidationError("No file provided")

        path = build_object_path(folder, user_id, filename)
        bucket = self.db.storage.from_(self.bucket)
        try:
            bucket.upload(path, content, {"content-type": content_type or "application/octet-stream"})
        except Exception as e:
            logger.error(f"✗ Upload {path} échoué: {e}")
            raise UpstreamError("Failed to upload file", details=str(e))

        logger.info(f"✓ Fichier stocké: {path}")
        return {"url": bucket.get_public_url(path), "path": path}
