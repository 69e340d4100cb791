from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from fra_atlas.core.exceptions import NotFoundError, ValidationError
from fra_atlas.schemas.auth import CurrentUser
from fra_atlas.schemas.profiles import NotificationPreferences, ProfileUpdate, Role
from fra_atlas.services.profile_service import ProfileService
from fra_atlas.services.storage_service import StorageService


@pytest.fixture
def storage():
    storage = MagicMock(spec=StorageService)
    storage.upload_bytes = AsyncMock(return_value={})
    storage.public_url.side_effect = lambda bucket, path: f"https://cdn.test/{bucket}/{path}"
    return storage


@pytest.fixture
def service(db_session, storage):
    return ProfileService(db_session, storage=storage)


def identity(user_id: str = "user-1", email: str = "asha@example.com", **metadata) -> CurrentUser:
    return CurrentUser(id=user_id, email=email, full_name=metadata.get("full_name"), user_metadata=metadata)


@pytest.mark.asyncio
async def test_first_sign_in_creates_citizen_profile(service):
    profile = await service.get_or_create_for_user(identity(full_name="Asha Devi"))

    assert profile.user_id == "user-1"
    assert profile.role == Role.CITIZEN
    assert profile.full_name == "Asha Devi"
    assert profile.notification_preferences == NotificationPreferences(email=True, sms=False)


@pytest.mark.asyncio
@pytest.mark.parametrize("requested", ["official", "super_admin"])
async def test_signup_metadata_never_grants_staff_role(service, requested):
    profile = await service.get_or_create_for_user(identity(role=requested))

    assert profile.role == Role.CITIZEN


@pytest.mark.asyncio
async def test_existing_profile_keeps_role_and_tracks_email(service):
    first = await service.get_or_create_for_user(identity())
    again = await service.get_or_create_for_user(identity(email="asha.new@example.com", role="official"))

    assert again.id == first.id
    assert again.role == Role.CITIZEN
    assert again.email == "asha.new@example.com"


@pytest.mark.asyncio
async def test_partial_update(service):
    await service.get_or_create_for_user(identity(full_name="Asha"))

    updated = await service.update_profile("user-1", ProfileUpdate(phone="+91 98765 43210"))

    assert updated.phone == "+91 98765 43210"
    assert updated.full_name == "Asha"


@pytest.mark.asyncio
async def test_update_notification_preferences(service):
    await service.get_or_create_for_user(identity())

    updated = await service.update_profile(
        "user-1", ProfileUpdate(notification_preferences=NotificationPreferences(email=False, sms=True))
    )

    assert updated.notification_preferences.email is False
    assert updated.notification_preferences.sms is True


@pytest.mark.asyncio
async def test_update_unknown_profile(service):
    with pytest.raises(NotFoundError):
        await service.update_profile("nobody", ProfileUpdate(phone="1"))


def image(name: str, content_type: str, content: bytes = b"\x89PNG\r\n\x1a\n") -> UploadFile:
    return UploadFile(file=BytesIO(content), filename=name, headers=Headers({"content-type": content_type}))


@pytest.mark.asyncio
async def test_avatar_upload_overwrites_fixed_path(service, storage):
    await service.get_or_create_for_user(identity())

    profile = await service.upload_avatar("user-1", image("Me.PNG", "image/png"))

    storage.upload_bytes.assert_awaited_once()
    args, kwargs = storage.upload_bytes.call_args
    assert args[:2] == ("profile-avatars", "user-1/avatar.png")
    assert kwargs["upsert"] is True
    assert profile.avatar_url == "https://cdn.test/profile-avatars/user-1/avatar.png"


@pytest.mark.asyncio
async def test_avatar_must_be_an_image(service, storage):
    await service.get_or_create_for_user(identity())

    with pytest.raises(ValidationError):
        await service.upload_avatar("user-1", image("cv.pdf", "application/pdf", b"%PDF-1.4"))

    storage.upload_bytes.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_profiles(service):
    await service.get_or_create_for_user(identity("user-1", "a@example.com"))
    await service.get_or_create_for_user(identity("user-2", "b@example.com"))

    profiles = await service.list_profiles()

    assert {p.user_id for p in profiles} == {"user-1", "user-2"}
