"""Storage service for Supabase Storage operations."""

from typing import Any, Dict, List, Sequence

import httpx
from fastapi import UploadFile

from fra_atlas.core.config import settings
from fra_atlas.core.exceptions import APIClientError, ConfigurationError, ValidationError
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


class StorageService:
    """Service for managing objects in Supabase Storage buckets."""

    def __init__(self, url: str = "", service_role_key: str = ""):
        self.url = (url or settings.supabase_url).rstrip("/")
        self.service_role_key = service_role_key or settings.supabase_service_role_key
        self.base_api_url = f"{self.url}/storage/v1"
        self.headers = {
            "Authorization": f"Bearer {self.service_role_key}",
            "apikey": self.service_role_key,
        }

    def _ensure_configured(self) -> None:
        if not self.url or not self.service_role_key:
            raise ConfigurationError("Storage is not configured")

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return f"{self.base_api_url}/object/public/{bucket}/{path}"

    async def upload_bytes(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> Dict[str, Any]:
        """Upload raw bytes to a bucket.

        Args:
            bucket: Target bucket name
            path: Object path within the bucket
            content: File body
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at the same path

        Returns:
            Storage API response body

        Raises:
            APIClientError: If the upload fails
        """
        self._ensure_configured()
        upload_url = f"{self.base_api_url}/object/{bucket}/{path}"
        headers = {**self.headers, "Content-Type": content_type}
        if upsert:
            headers["x-upsert"] = "true"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    upload_url,
                    headers=headers,
                    content=content,
                    timeout=settings.http_timeout,
                )
        except httpx.HTTPError as e:
            LOGGER.error(f"Error uploading file to Supabase: {str(e)}", exc_info=True)
            raise APIClientError(f"Storage upload error: {str(e)}", original_error=e)

        if response.status_code != 200:
            LOGGER.error(
                f"Failed to upload file to Supabase: {response.text}",
                extra={"bucket": bucket, "path": path, "status_code": response.status_code},
            )
            raise APIClientError(f"Upload failed: {response.text}")

        LOGGER.info(f"Uploaded {len(content)} bytes to {bucket}/{path}")
        return response.json()

    async def remove(self, bucket: str, paths: List[str]) -> None:
        """Delete objects from a bucket.

        Raises:
            APIClientError: If the storage API rejects the request
        """
        self._ensure_configured()
        url = f"{self.base_api_url}/object/{bucket}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    "DELETE",
                    url,
                    headers=self.headers,
                    json={"prefixes": paths},
                    timeout=settings.http_timeout,
                )
        except httpx.HTTPError as e:
            LOGGER.error(f"Error deleting objects from Supabase: {str(e)}", exc_info=True)
            raise APIClientError(f"Storage delete error: {str(e)}", original_error=e)

        if response.status_code != 200:
            LOGGER.error(
                f"Failed to delete objects: {response.text}",
                extra={"bucket": bucket, "paths": paths, "status_code": response.status_code},
            )
            raise APIClientError(f"Delete failed: {response.text}")


async def read_upload(file: UploadFile, allowed_types: Sequence[str], max_bytes: int) -> bytes:
    """Read an uploaded file after checking its declared type and size.

    Raises:
        ValidationError: If the type is not allowed, the file is empty or too large
    """
    if file.content_type not in allowed_types:
        raise ValidationError(f"File type {file.content_type} is not allowed")

    content = await file.read()
    await file.seek(0)

    if not content:
        raise ValidationError(f"File {file.filename} is empty")
    if len(content) > max_bytes:
        raise ValidationError(
            f"File {file.filename} exceeds the {max_bytes // (1024 * 1024)}MB limit"
        )
    return content
