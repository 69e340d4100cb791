from unittest.mock import AsyncMock, MagicMock

import pytest

from fra_atlas.core.exceptions import (
    APIClientError,
    APITimeoutError,
    ConfigurationError,
    PaymentRequiredError,
    RateLimitError,
    ValidationError,
)
from fra_atlas.core.http_client import AIGatewayClient
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.digitization import ExtractTextRequest
from fra_atlas.services.extraction_service import ExtractionService

COMPLETION = (
    "FORM A - Claim for Rights\n"
    "Name of claimant: Ramesh Kumar\n"
    "Village: Khairwani\n\n"
    '{"claimantName": "Ramesh Kumar", "village": "Khairwani", "landArea": "1.5 hectares"}'
)


def completion(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@pytest.fixture
def client():
    client = MagicMock(spec=AIGatewayClient)
    client.is_configured = True
    client.chat_completion = AsyncMock(return_value=completion(COMPLETION))
    return client


@pytest.fixture
def service(db_session, client):
    return ExtractionService(db_session, client=client)


@pytest.fixture
def user():
    return CurrentUser(id="citizen-1", email="asha@example.com")


def request(url: str = "https://cdn.test/scan.png", name: str = "scan.png") -> ExtractTextRequest:
    return ExtractTextRequest(imageUrl=url, fileName=name)


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "   "])
async def test_missing_image_url_never_calls_gateway(service, client, url):
    with pytest.raises(ValidationError, match="No image URL provided"):
        await service.extract_text(ExtractTextRequest(imageUrl=url))

    client.chat_completion.assert_not_awaited()


@pytest.mark.asyncio
async def test_unconfigured_gateway(service, client):
    client.is_configured = False

    with pytest.raises(ConfigurationError, match="AI service not configured"):
        await service.extract_text(request())

    client.chat_completion.assert_not_awaited()


@pytest.mark.asyncio
async def test_extract_text_parses_embedded_json(service, client):
    result = await service.extract_text(request())

    assert result.raw_text == COMPLETION
    assert result.structured_data == {
        "claimantName": "Ramesh Kumar",
        "village": "Khairwani",
        "landArea": "1.5 hectares",
    }
    assert result.confidence == 0.85
    assert result.id is None

    messages = client.chat_completion.call_args.args[0]
    assert messages[0]["role"] == "system"
    assert messages[1]["content"][1] == {"type": "image_url", "image_url": {"url": "https://cdn.test/scan.png"}}


@pytest.mark.asyncio
async def test_plain_text_has_no_structured_data(service, client):
    client.chat_completion.return_value = completion("Only a heading, no fields")

    result = await service.extract_text(request())

    assert result.raw_text == "Only a heading, no fields"
    assert result.structured_data is None


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [RateLimitError("slow down"), PaymentRequiredError("no credits")])
async def test_quota_errors_pass_through(service, client, error):
    client.chat_completion.side_effect = error

    with pytest.raises(type(error)) as exc_info:
        await service.extract_text(request())

    assert exc_info.value is error


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [APIClientError("bad gateway"), APITimeoutError("timed out")])
async def test_other_gateway_errors_are_generic(service, client, error):
    client.chat_completion.side_effect = error

    with pytest.raises(APIClientError) as exc_info:
        await service.extract_text(request())

    assert exc_info.value.message == "AI extraction failed"
    assert exc_info.value.original_error is error


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [completion(""), {"choices": []}, {}])
async def test_empty_completion(service, client, response):
    client.chat_completion.return_value = response

    with pytest.raises(APIClientError, match="No text extracted"):
        await service.extract_text(request())


@pytest.mark.asyncio
async def test_signed_in_results_are_stored(service, user):
    result = await service.extract_text(request(), user=user)

    assert result.id is not None
    listing = await service.list_results(user)
    assert [r.id for r in listing.results] == [result.id]
    stored = listing.results[0]
    assert stored.file_name == "scan.png"
    assert stored.image_url == "https://cdn.test/scan.png"
    assert stored.structured_data["claimantName"] == "Ramesh Kumar"


@pytest.mark.asyncio
async def test_anonymous_results_are_not_stored(service, user):
    await service.extract_text(request())

    listing = await service.list_results(user)
    assert listing.results == []
