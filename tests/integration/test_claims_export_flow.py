"""End-to-end claim submission, review and export over a real database session."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from fra_atlas.core.auth import get_current_profile
from fra_atlas.core.database import get_db_session
from fra_atlas.main import app
from fra_atlas.repositories.profile_repository import ProfileRepository
from fra_atlas.schemas.profiles import ProfileResponse, Role
from fra_atlas.services.export_service import CSV_HEADERS

CLAIM = {
    "claim_type": "individual",
    "village": "Khairwani",
    "district": "Mandla",
    "state": "Madhya Pradesh",
    "land_area": 1.5,
    "claim_description": 'Cultivation land "Kheti" held since 1998',
}


@pytest_asyncio.fixture
async def people(db_session):
    repo = ProfileRepository(db_session)
    citizen = await repo.create(user_id="citizen-1", email="asha@example.com", full_name="Asha Devi", role="citizen")
    official = await repo.create(user_id="official-1", email="rao@gov.in", full_name="Officer Rao", role="official")
    await db_session.commit()
    return {
        Role.CITIZEN: ProfileResponse.model_validate(citizen),
        Role.OFFICIAL: ProfileResponse.model_validate(official),
    }


@pytest_asyncio.fixture
async def client(db_session):
    async def session_override():
        yield db_session

    app.dependency_overrides[get_db_session] = session_override
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def act_as(profile: ProfileResponse) -> None:
    app.dependency_overrides[get_current_profile] = lambda: profile


async def submit(client, people, **overrides) -> dict:
    act_as(people[Role.CITIZEN])
    response = await client.post("/api/v1/claims", json={**CLAIM, **overrides})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_submitted_claim_is_pending(client, people):
    claim = await submit(client, people)

    assert claim["status"] == "pending"
    assert claim["user_id"] == "citizen-1"
    assert claim["reviewed_at"] is None


@pytest.mark.asyncio
async def test_review_and_export_only_approved(client, people, db_session):
    approved = await submit(client, people)
    await submit(client, people, village="Bichhiya")

    act_as(people[Role.OFFICIAL])
    review = await client.patch(
        f"/api/v1/claims/{approved['id']}/status",
        json={"status": "approved", "remarks": "Title issued"},
    )
    assert review.status_code == 200
    assert review.json()["reviewed_by"] == "official-1"

    db_session.expunge_all()
    today = datetime.now(timezone.utc).date().isoformat()
    response = await client.post(
        "/api/v1/exports/claims",
        json={"format": "csv", "filters": {"status": "approved", "startDate": today, "endDate": today}},
    )

    assert response.status_code == 200
    assert response.headers["content-disposition"].startswith('attachment; filename="claims-export-')
    lines = response.text.split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 2
    assert lines[1] == (
        f'"{approved["id"]}","Asha Devi","asha@example.com","N/A","individual","Madhya Pradesh",'
        f'"Mandla","Khairwani","1.5","approved","{today}","{today}","Title issued"'
    )


@pytest.mark.asyncio
async def test_json_export_includes_applicant(client, people, db_session):
    claim = await submit(client, people)
    db_session.expunge_all()

    act_as(people[Role.OFFICIAL])
    response = await client.post("/api/v1/exports/claims", json={"format": "json"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    records = json.loads(response.text)
    assert [r["id"] for r in records] == [claim["id"]]
    assert records[0]["claim_description"] == 'Cultivation land "Kheti" held since 1998'
    assert records[0]["profiles"] == {"full_name": "Asha Devi", "email": "asha@example.com", "phone": None}


@pytest.mark.asyncio
async def test_export_with_no_matches_is_header_only(client, people):
    await submit(client, people)

    act_as(people[Role.OFFICIAL])
    response = await client.post(
        "/api/v1/exports/claims", json={"format": "csv", "filters": {"status": "rejected"}}
    )

    assert response.text == ",".join(CSV_HEADERS)


@pytest.mark.asyncio
async def test_citizen_sees_only_own_claims(client, people, db_session):
    await submit(client, people)
    other = await ProfileRepository(db_session).create(user_id="citizen-2", email="b@example.com", role="citizen")
    await db_session.commit()

    act_as(ProfileResponse.model_validate(other))
    response = await client.get("/api/v1/claims")

    assert response.status_code == 200
    assert response.json() == {"total": 0, "claims": []}


def iso_z(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@pytest.mark.asyncio
async def test_export_accepts_iso_timestamps(client, people, db_session):
    claim = await submit(client, people)
    db_session.expunge_all()
    now = datetime.now(timezone.utc)

    act_as(people[Role.OFFICIAL])
    around = await client.post(
        "/api/v1/exports/claims",
        json={
            "format": "json",
            "filters": {"startDate": iso_z(now - timedelta(hours=1)), "endDate": iso_z(now + timedelta(hours=1))},
        },
    )
    later = await client.post(
        "/api/v1/exports/claims",
        json={"format": "json", "filters": {"startDate": iso_z(now + timedelta(hours=1))}},
    )

    assert around.status_code == 200
    assert [r["id"] for r in json.loads(around.text)] == [claim["id"]]
    assert later.status_code == 200
    assert json.loads(later.text) == []
