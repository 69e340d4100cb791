"""Supabase Auth Admin API client (service role)."""

from typing import Any, Dict, Optional

import httpx

from fra_atlas.core.config import settings
from fra_atlas.core.exceptions import APIClientError, ConfigurationError, ValidationError
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    return body.get("msg") or body.get("message") or body.get("error_description") or str(body)


class AuthAdminService:
    """Creates auth identities on behalf of a super-admin."""

    def __init__(self, url: str = "", service_role_key: str = ""):
        self.url = (url or settings.supabase_url).rstrip("/")
        self.service_role_key = service_role_key or settings.supabase_service_role_key
        self.headers = {
            "Authorization": f"Bearer {self.service_role_key}",
            "apikey": self.service_role_key,
            "Content-Type": "application/json",
        }

    async def create_user(
        self,
        email: str,
        password: str,
        user_metadata: Optional[Dict[str, Any]] = None,
        email_confirm: bool = True,
    ) -> Dict[str, Any]:
        """Create a confirmed auth user.

        Args:
            email: Login email
            password: Initial password
            user_metadata: Metadata stored on the identity
            email_confirm: Mark the email as already confirmed

        Returns:
            The created auth user object

        Raises:
            ConfigurationError: If the service role key is missing
            ValidationError: If Supabase rejects the request (duplicate email, weak password)
            APIClientError: On network or server failures
        """
        if not self.url or not self.service_role_key:
            raise ConfigurationError("Supabase admin API is not configured")

        payload = {
            "email": email,
            "password": password,
            "email_confirm": email_confirm,
            "user_metadata": user_metadata or {},
        }

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.post(
                    f"{self.url}/auth/v1/admin/users",
                    headers=self.headers,
                    json=payload,
                )
        except httpx.HTTPError as e:
            LOGGER.error(f"Error calling Supabase admin API: {str(e)}", exc_info=True)
            raise APIClientError(f"Auth admin request failed: {str(e)}", original_error=e)

        if 400 <= response.status_code < 500:
            message = _error_message(response)
            LOGGER.warning(
                f"Supabase rejected user creation: {message}",
                extra={"status_code": response.status_code},
            )
            raise ValidationError(message)
        if response.status_code >= 500:
            LOGGER.error(
                "Supabase admin API server error",
                extra={"status_code": response.status_code, "body": response.text[:500]},
            )
            raise APIClientError(f"Auth admin error {response.status_code}")

        data = response.json()
        # Older GoTrue versions wrap the user object
        user = data.get("user", data)
        LOGGER.info(f"Created auth user {user.get('id')}")
        return user
