"""Document text extraction through the AI gateway."""

import json
import re
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.config import settings
from fra_atlas.core.exceptions import (
    APIClientError,
    ConfigurationError,
    PaymentRequiredError,
    RateLimitError,
    ValidationError,
)
from fra_atlas.core.http_client import AIGatewayClient, get_ai_gateway_client
from fra_atlas.prompts.system_prompts import OCR_SYSTEM_PROMPT, OCR_USER_INSTRUCTION
from fra_atlas.repositories.digitization_repository import DigitizationRepository
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.digitization import (
    DigitizationResultList,
    DigitizationResultResponse,
    ExtractionResult,
    ExtractTextRequest,
)
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

# First "{" through last "}" of the completion
JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def parse_structured_data(text: str) -> Optional[Dict[str, Any]]:
    """Best-effort parse of the JSON object embedded in a completion."""
    match = JSON_SPAN.search(text)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        LOGGER.info("No structured data found in response")
        return None
    return data if isinstance(data, dict) else None


def build_messages(image_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": OCR_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": OCR_USER_INSTRUCTION},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        },
    ]


def completion_text(response: Dict[str, Any]) -> str:
    choices = response.get("choices") or []
    if not choices:
        return ""
    return ((choices[0] or {}).get("message") or {}).get("content") or ""


class ExtractionService:
    """OCRs claim documents and keeps the results of signed-in users."""

    def __init__(self, db_session: AsyncSession, client: Optional[AIGatewayClient] = None):
        self.db_session = db_session
        self.repository = DigitizationRepository(db_session)
        self.client = client or get_ai_gateway_client()

    async def extract_text(
        self,
        request: ExtractTextRequest,
        user: Optional[CurrentUser] = None,
    ) -> ExtractionResult:
        """Extract English text and claim fields from a document image.

        Args:
            request: Image URL and optional original file name
            user: Signed-in caller; when present the result is stored

        Returns:
            Raw text, parsed structured data (or None) and a fixed confidence

        Raises:
            ValidationError: If no image URL was given
            ConfigurationError: If the gateway key is not configured
            RateLimitError: If the gateway is rate limiting
            PaymentRequiredError: If the gateway workspace is out of credits
            APIClientError: If extraction failed or returned nothing
        """
        image_url = (request.image_url or "").strip()
        if not image_url:
            raise ValidationError("No image URL provided")

        if not self.client.is_configured:
            LOGGER.error("AI_GATEWAY_API_KEY is not configured")
            raise ConfigurationError("AI service not configured")

        LOGGER.info(f"Processing document: {request.file_name or 'unknown'}")

        try:
            response = await self.client.chat_completion(build_messages(image_url))
        except (RateLimitError, PaymentRequiredError):
            raise
        except APIClientError as e:
            LOGGER.error(f"AI gateway error: {e.message}")
            raise APIClientError("AI extraction failed", original_error=e)

        raw_text = completion_text(response)
        if not raw_text:
            raise APIClientError("No text extracted")

        LOGGER.info("Text extraction successful")
        structured_data = parse_structured_data(raw_text)
        confidence = settings.ai_gateway.extraction_confidence

        result_id = None
        if user is not None:
            record = await self.repository.create(
                user_id=user.id,
                file_name=request.file_name,
                image_url=image_url,
                raw_text=raw_text,
                structured_data=structured_data,
                confidence=confidence,
            )
            await self.db_session.commit()
            result_id = record.id

        return ExtractionResult(
            id=result_id,
            raw_text=raw_text,
            structured_data=structured_data,
            confidence=confidence,
        )

    async def list_results(self, user: CurrentUser) -> DigitizationResultList:
        results = await self.repository.list_for_user(user.id)
        return DigitizationResultList(
            results=[DigitizationResultResponse.model_validate(r) for r in results]
        )
