"""Tests for claim and export endpoints with mocked services."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from fra_atlas.core.auth import get_current_profile
from fra_atlas.core.dependencies import get_claim_service, get_export_service, get_notification_service
from fra_atlas.core.exceptions import NotFoundError
from fra_atlas.main import app
from fra_atlas.schemas.claims import BulkStatusResult, ClaimResponse, ClaimStatus
from fra_atlas.schemas.exports import ExportFile, ExportFormat
from fra_atlas.schemas.notifications import EmailSendResult
from fra_atlas.schemas.profiles import Role

CLAIM_ID = uuid.UUID("6f1c2d4e-8a9b-4c3d-9e8f-0a1b2c3d4e5f")


def claim_response(status: ClaimStatus = ClaimStatus.PENDING, **fields) -> ClaimResponse:
    payload = dict(
        id=CLAIM_ID,
        user_id="user-1",
        claim_type="individual",
        village="Khairwani",
        district="Mandla",
        state="Madhya Pradesh",
        land_area=1.5,
        claim_description="Cultivation land held since 1998",
        status=status,
        submitted_at=datetime(2025, 3, 10, tzinfo=timezone.utc),
    )
    payload.update(fields)
    return ClaimResponse(**payload)


@pytest.fixture
def acting_as(make_profile):
    def _act(role: Role):
        profile = make_profile(role, user_id="user-1")
        app.dependency_overrides[get_current_profile] = lambda: profile
        return profile

    return _act


@pytest.fixture
def claim_service():
    service = AsyncMock()
    app.dependency_overrides[get_claim_service] = lambda: service
    return service


class TestClaimEndpoints:
    def test_submit_claim(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.CITIZEN)
        claim_service.create_claim.return_value = claim_response()

        response = test_client.post(
            "/api/v1/claims",
            json={
                "claim_type": "individual",
                "village": "Khairwani",
                "district": "Mandla",
                "state": "Madhya Pradesh",
                "land_area": 1.5,
                "claim_description": "Cultivation land held since 1998",
                "coordinates": "22.59, 80.37",
            },
        )

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        user_id, data = claim_service.create_claim.call_args.args
        assert user_id == "user-1"
        assert data.coordinates.lng == 80.37

    def test_submit_claim_validation_error(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.CITIZEN)

        response = test_client.post("/api/v1/claims", json={"claim_type": "individual"})

        assert response.status_code == 400
        assert "error" in response.json()
        claim_service.create_claim.assert_not_called()

    def test_list_claims_passes_filters(self, test_client: TestClient, acting_as, claim_service) -> None:
        profile = acting_as(Role.OFFICIAL)
        claim_service.list_claims.return_value = {"total": 1, "claims": [claim_response()]}

        response = test_client.get(
            "/api/v1/claims", params={"status": "pending", "search": "khair", "start_date": "2025-03-01"}
        )

        assert response.status_code == 200
        assert response.json()["total"] == 1
        called_profile, filters = claim_service.list_claims.call_args.args
        assert called_profile == profile
        assert filters.status == ClaimStatus.PENDING
        assert filters.search == "khair"
        assert str(filters.start_date) == "2025-03-01"

    def test_missing_claim(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.CITIZEN)
        claim_service.get_claim.side_effect = NotFoundError(f"Claim {CLAIM_ID} not found")

        response = test_client.get(f"/api/v1/claims/{CLAIM_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": f"Claim {CLAIM_ID} not found"}

    def test_official_reviews_claim(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.OFFICIAL)
        claim_service.update_status.return_value = claim_response(
            ClaimStatus.APPROVED, reviewed_by="user-1", remarks="Title issued"
        )

        response = test_client.patch(
            f"/api/v1/claims/{CLAIM_ID}/status",
            json={"status": "approved", "remarks": "Title issued", "notify": True},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        kwargs = claim_service.update_status.call_args.kwargs
        assert kwargs == {"remarks": "Title issued", "notify": True}

    def test_unknown_status_is_bad_request(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.OFFICIAL)

        response = test_client.patch(f"/api/v1/claims/{CLAIM_ID}/status", json={"status": "archived"})

        assert response.status_code == 400
        assert "error" in response.json()
        claim_service.update_status.assert_not_called()

    def test_bulk_status(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.OFFICIAL)
        claim_service.bulk_update_status.return_value = BulkStatusResult(updated=2, status=ClaimStatus.UNDER_REVIEW)
        ids = [str(uuid.uuid4()), str(uuid.uuid4())]

        response = test_client.post(
            "/api/v1/claims/bulk-status", json={"claim_ids": ids, "status": "under_review"}
        )

        assert response.status_code == 200
        assert response.json() == {"updated": 2, "status": "under_review"}

    def test_bulk_status_needs_ids(self, test_client: TestClient, acting_as, claim_service) -> None:
        acting_as(Role.OFFICIAL)

        response = test_client.post("/api/v1/claims/bulk-status", json={"claim_ids": [], "status": "approved"})

        assert response.status_code == 400
        claim_service.bulk_update_status.assert_not_called()


class TestExportEndpoint:
    def test_export_is_an_attachment(self, test_client: TestClient, acting_as) -> None:
        acting_as(Role.SUPER_ADMIN)
        export_service = AsyncMock()
        export_service.export_claims.return_value = ExportFile(
            content='Claim ID,Status\n"1","approved"',
            media_type="text/csv",
            filename="claims-export-2025-03-10T12:00:00.000Z.csv",
            count=1,
        )
        app.dependency_overrides[get_export_service] = lambda: export_service

        response = test_client.post(
            "/api/v1/exports/claims",
            json={"format": "csv", "filters": {"status": "approved", "startDate": "2025-03-01"}},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == (
            'attachment; filename="claims-export-2025-03-10T12:00:00.000Z.csv"'
        )
        assert response.text == 'Claim ID,Status\n"1","approved"'
        export_format, filters = export_service.export_claims.call_args.args
        assert export_format == ExportFormat.CSV
        assert filters.status == ClaimStatus.APPROVED
        assert filters.start_date == datetime(2025, 3, 1, tzinfo=timezone.utc)

    def test_unexpected_failure_is_json_500(self, acting_as) -> None:
        acting_as(Role.OFFICIAL)
        export_service = AsyncMock()
        export_service.export_claims.side_effect = RuntimeError("disk full")
        app.dependency_overrides[get_export_service] = lambda: export_service

        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/api/v1/exports/claims", json={"format": "json"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestNotificationEndpoint:
    def test_official_sends_status_email(self, test_client: TestClient, acting_as) -> None:
        acting_as(Role.OFFICIAL)
        notifications = AsyncMock()
        notifications.send_claim_status_email.return_value = EmailSendResult(id="email-1")
        app.dependency_overrides[get_notification_service] = lambda: notifications

        response = test_client.post(
            "/api/v1/notifications/claim-status",
            json={
                "to": "asha@example.com",
                "claimId": str(CLAIM_ID),
                "status": "approved",
                "userName": "Asha Devi",
            },
        )

        assert response.status_code == 200
        assert response.json()["id"] == "email-1"
        kwargs = notifications.send_claim_status_email.call_args.kwargs
        assert kwargs["to"] == "asha@example.com"
        assert kwargs["status"] == ClaimStatus.APPROVED
        assert kwargs["user_name"] == "Asha Devi"
