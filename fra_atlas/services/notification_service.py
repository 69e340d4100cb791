"""Claim status notification emails, rendered with Jinja2 and sent through Resend."""

from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import jinja2

from fra_atlas.core.config import settings
from fra_atlas.core.exceptions import APIClientError, ConfigurationError
from fra_atlas.schemas.claims import ClaimStatus
from fra_atlas.schemas.notifications import EmailSendResult
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

templates_path = Path(__file__).resolve().parent.parent / "templates" / "emails"
template_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(searchpath=templates_path),
    autoescape=True,
)

STATUS_MESSAGES = {
    ClaimStatus.APPROVED: "Your land claim has been approved! You can now proceed with the next steps.",
    ClaimStatus.REJECTED: (
        "Your land claim has been rejected. Please review the remarks and submit a new claim if needed."
    ),
    ClaimStatus.UNDER_REVIEW: (
        "Your land claim is now being reviewed by our officials. "
        "You will be notified once the review is complete."
    ),
    ClaimStatus.PENDING: "Your land claim has been received and is pending review.",
}
DEFAULT_STATUS_MESSAGE = "Your claim status has been updated."


def default_subject(status: ClaimStatus) -> str:
    return f"Claim Status Update - {status.value.upper()}"


def render_claim_status_email(
    user_name: str,
    claim_id: str,
    status: ClaimStatus,
    remarks: Optional[str] = None,
    portal_url: Optional[str] = None,
) -> str:
    """Render the HTML body of a claim status email.

    All values are HTML-escaped by the template environment.
    """
    template = template_env.get_template("claim_status.html")
    return template.render(
        user_name=user_name,
        claim_id=claim_id,
        status=status.value,
        status_label=status.value.upper().replace("_", " "),
        status_message=STATUS_MESSAGES.get(status, DEFAULT_STATUS_MESSAGE),
        remarks=remarks,
        portal_url=portal_url or settings.email.portal_url,
    )


class NotificationService:
    """Sends transactional email through the Resend HTTP API."""

    def __init__(self, api_key: str = "", api_url: str = "", sender: str = ""):
        self.api_key = api_key or settings.email.resend_api_key
        self.api_url = api_url or settings.email.resend_api_url
        self.sender = sender or settings.email.sender

    async def send_claim_status_email(
        self,
        to: str,
        claim_id: str,
        status: ClaimStatus,
        user_name: str,
        subject: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> EmailSendResult:
        """Email a claimant about their claim's status.

        Args:
            to: Recipient address
            claim_id: Claim identifier shown in the email
            status: New claim status
            user_name: Name used in the greeting
            subject: Subject line; defaults to "Claim Status Update - <STATUS>"
            remarks: Official remarks to include

        Returns:
            Provider message ID and raw response

        Raises:
            ConfigurationError: If RESEND_API_KEY is not set
            APIClientError: If the provider rejects the message or is unreachable
        """
        if not self.api_key:
            raise ConfigurationError("Email service not configured")

        LOGGER.info(f"Sending notification email to {to} for claim {claim_id}")

        payload: Dict[str, Any] = {
            "from": self.sender,
            "to": [to],
            "subject": subject or default_subject(status),
            "html": render_claim_status_email(user_name, claim_id, status, remarks),
        }

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            LOGGER.error(
                "Email provider rejected message",
                extra={"status_code": e.response.status_code, "body": e.response.text[:500]},
            )
            raise APIClientError(f"Failed to send email: {e.response.text}", original_error=e)
        except httpx.HTTPError as e:
            LOGGER.error(f"Error sending notification email: {str(e)}", exc_info=True)
            raise APIClientError(f"Failed to send email: {str(e)}", original_error=e)

        data = response.json()
        LOGGER.info("Email sent successfully", extra={"message_id": data.get("id")})
        return EmailSendResult(id=data.get("id"), provider_response=data)
