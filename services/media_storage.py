# services/media_storage.py
"""
Object storage for uploaded videos (Firebase Storage / GCS bucket).
"""

import logging
from datetime import timedelta

from firebase_admin import storage

logger = logging.getLogger(__name__)


class FirebaseMediaStorage:
    """Uploads files to a bucket and hands out signed read URLs."""

    def __init__(self, bucket_name: str = None, signed_url_ttl_seconds: int = 31536000):
        self.bucket = storage.bucket(bucket_name)
        self.signed_url_ttl = timedelta(seconds=signed_url_ttl_seconds)

    def upload(self, file_name: str, data: bytes, content_type: str = None) -> str:
        """Store `data` as `file_name` and return a signed URL for it."""
        blob = self.bucket.blob(file_name)
        if blob.exists():
            raise FileExistsError(f"Object already exists: {file_name}")

        blob.upload_from_string(data, content_type=content_type or "application/octet-stream")
        logger.info("Uploaded %s (%d bytes) to %s", file_name, len(data), self.bucket.name)

        return blob.generate_signed_url(expiration=self.signed_url_ttl, method="GET")
