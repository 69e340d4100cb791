"""Claim service: submission, review and supporting documents."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from fra_atlas.core.config import ALLOWED_DOCUMENT_TYPES, settings
from fra_atlas.core.exceptions import (
    AppError,
    NotFoundError,
    PermissionDeniedError,
)
from fra_atlas.database.models import Claim
from fra_atlas.repositories.claim_repository import ClaimRepository
from fra_atlas.repositories.digitization_repository import DigitizationRepository
from fra_atlas.repositories.profile_repository import ProfileRepository
from fra_atlas.schemas.claims import (
    BulkStatusResult,
    ClaimCreate,
    ClaimFilters,
    ClaimListResponse,
    ClaimResponse,
    ClaimStatus,
    Coordinates,
    DocumentRef,
)
from fra_atlas.schemas.profiles import ProfileResponse, Role
from fra_atlas.services.notification_service import NotificationService
from fra_atlas.services.storage_service import StorageService, read_upload
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

STAFF_ROLES = {Role.OFFICIAL, Role.SUPER_ADMIN}


def can_view(profile: ProfileResponse, claim: Claim) -> bool:
    return profile.role in STAFF_ROLES or claim.user_id == profile.user_id


def storage_filename(filename: Optional[str]) -> str:
    name = (filename or "document").replace("\\", "/").rsplit("/", 1)[-1]
    return name or "document"


class ClaimService:
    """Service for claim business logic."""

    def __init__(
        self,
        db_session: AsyncSession,
        storage: Optional[StorageService] = None,
        notifications: Optional[NotificationService] = None,
    ):
        """Initialize service with database session and external clients.

        Args:
            db_session: SQLAlchemy async session
            storage: Storage client for claim documents
            notifications: Email sender used when a status change asks to notify
        """
        self.db_session = db_session
        self.repository = ClaimRepository(db_session)
        self.profiles = ProfileRepository(db_session)
        self.digitization = DigitizationRepository(db_session)
        self.storage = storage or StorageService()
        self.notifications = notifications or NotificationService()

    async def create_claim(self, user_id: str, data: ClaimCreate) -> ClaimResponse:
        """Submit a new claim for the given user.

        The claim always starts as ``pending``. Coordinates that could not be
        parsed are stored as absent.
        """
        coordinates = data.coordinates.model_dump() if isinstance(data.coordinates, Coordinates) else None

        claim = await self.repository.create(
            user_id=user_id,
            claim_type=data.claim_type.value,
            village=data.village,
            district=data.district,
            state=data.state,
            land_area=data.land_area,
            claim_description=data.claim_description,
            coordinates=coordinates,
            documents=[doc.model_dump(mode="json") for doc in data.documents],
            status=ClaimStatus.PENDING.value,
            submitted_at=datetime.now(timezone.utc),
            digitization_result_id=data.digitization_result_id,
        )

        if data.digitization_result_id:
            linked = await self.digitization.link_to_claim(data.digitization_result_id, claim.id, user_id)
            if not linked:
                LOGGER.warning(
                    f"Digitization result {data.digitization_result_id} not linked to claim {claim.id}"
                )

        await self.db_session.commit()
        LOGGER.info(f"Claim {claim.id} submitted", extra={"user_id": user_id, "claim_type": claim.claim_type})
        return ClaimResponse.model_validate(claim)

    async def list_claims(self, profile: ProfileResponse, filters: ClaimFilters) -> ClaimListResponse:
        """List claims visible to the caller; citizens only see their own."""
        owner_id = None if profile.role in STAFF_ROLES else profile.user_id
        claims, total = await self.repository.list_claims(filters, owner_id=owner_id)
        return ClaimListResponse(total=total, claims=[ClaimResponse.model_validate(c) for c in claims])

    async def _get_visible(self, profile: ProfileResponse, claim_id: UUID) -> Claim:
        claim = await self.repository.get_by_id(claim_id)
        # Hidden claims look the same as missing ones
        if claim is None or not can_view(profile, claim):
            raise NotFoundError(f"Claim {claim_id} not found")
        return claim

    async def get_claim(self, profile: ProfileResponse, claim_id: UUID) -> ClaimResponse:
        return ClaimResponse.model_validate(await self._get_visible(profile, claim_id))

    async def update_status(
        self,
        reviewer: ProfileResponse,
        claim_id: UUID,
        status: ClaimStatus,
        remarks: Optional[str] = None,
        notify: bool = False,
    ) -> ClaimResponse:
        """Move a claim to a new status.

        Args:
            reviewer: Profile of the acting official
            claim_id: Claim to update
            status: New status; overwrites the current one whatever it is
            remarks: Reviewer remarks, replacing any previous ones
            notify: Email the applicant after the update is committed

        Returns:
            Updated claim

        Raises:
            PermissionDeniedError: If the reviewer is not an official
            NotFoundError: If the claim does not exist
        """
        if reviewer.role != Role.OFFICIAL:
            raise PermissionDeniedError("Only officials can review claims")

        claim = await self.repository.get_by_id(claim_id)
        if claim is None:
            raise NotFoundError(f"Claim {claim_id} not found")

        previous = claim.status

        claim = await self.repository.update(
            claim,
            status=status.value,
            remarks=remarks,
            reviewed_at=datetime.now(timezone.utc),
            reviewed_by=reviewer.user_id,
        )
        await self.db_session.commit()

        LOGGER.info(
            f"Claim {claim_id} moved from {previous} to {status.value}",
            extra={"reviewer": reviewer.user_id},
        )

        if notify:
            await self._notify_applicant(claim)

        return ClaimResponse.model_validate(claim)

    async def bulk_update_status(
        self,
        reviewer: ProfileResponse,
        claim_ids: Sequence[UUID],
        status: ClaimStatus,
        remarks: Optional[str] = None,
    ) -> BulkStatusResult:
        """Apply one status to many claims, all or nothing.

        Raises:
            PermissionDeniedError: If the reviewer is not an official
            NotFoundError: If any claim is missing; names the missing IDs
        """
        if reviewer.role != Role.OFFICIAL:
            raise PermissionDeniedError("Only officials can review claims")

        unique_ids = list(dict.fromkeys(claim_ids))
        claims = await self.repository.get_many(unique_ids)

        found = {c.id for c in claims}
        missing = [str(cid) for cid in unique_ids if cid not in found]
        if missing:
            raise NotFoundError(f"Claims not found: {', '.join(missing)}")

        reviewed_at = datetime.now(timezone.utc)
        for claim in claims:
            await self.repository.update(
                claim,
                status=status.value,
                remarks=remarks,
                reviewed_at=reviewed_at,
                reviewed_by=reviewer.user_id,
            )
        await self.db_session.commit()

        LOGGER.info(f"Bulk updated {len(claims)} claims to {status.value}", extra={"reviewer": reviewer.user_id})
        return BulkStatusResult(updated=len(claims), status=status)

    async def _notify_applicant(self, claim: Claim) -> None:
        """Email the claim owner; failures are logged and otherwise ignored."""
        applicant = await self.profiles.get_by_user_id(claim.user_id)
        if applicant is None or not applicant.email:
            LOGGER.warning(f"No email on file for owner of claim {claim.id}")
            return
        if not (applicant.notification_preferences or {}).get("email", True):
            LOGGER.info(f"Owner of claim {claim.id} opted out of email notifications")
            return

        try:
            await self.notifications.send_claim_status_email(
                to=applicant.email,
                claim_id=str(claim.id),
                status=ClaimStatus(claim.status),
                user_name=applicant.full_name or applicant.email,
                remarks=claim.remarks,
            )
        except AppError as e:
            LOGGER.error(
                f"Failed to send status email for claim {claim.id}: {e.message}",
                extra={"claim_id": str(claim.id)},
            )

    async def upload_document(self, user_id: str, file: UploadFile) -> DocumentRef:
        """Store one supporting document and describe it.

        Raises:
            ValidationError: If the file type or size is not accepted
            APIClientError: If the storage upload fails
        """
        content = await read_upload(file, ALLOWED_DOCUMENT_TYPES, settings.max_upload_bytes)

        document_id = str(uuid.uuid4())
        name = storage_filename(file.filename)
        bucket = settings.supabase.documents_bucket
        path = f"{user_id}/{document_id}-{name}"

        await self.storage.upload_bytes(bucket, path, content, file.content_type)

        return DocumentRef(
            id=document_id,
            name=name,
            type=file.content_type,
            size=len(content),
            url=self.storage.public_url(bucket, path),
            path=path,
            uploaded_at=datetime.now(timezone.utc),
        )

    async def attach_documents(
        self,
        profile: ProfileResponse,
        claim_id: UUID,
        files: List[UploadFile],
    ) -> ClaimResponse:
        """Upload files one after another and append them to a claim.

        Only the claim's owner or an official may attach documents.
        """
        claim = await self._get_visible(profile, claim_id)
        if claim.user_id != profile.user_id and profile.role != Role.OFFICIAL:
            raise PermissionDeniedError("Only the applicant or an official can attach documents")

        documents = list(claim.documents or [])
        for file in files:
            ref = await self.upload_document(claim.user_id, file)
            documents.append(ref.model_dump(mode="json"))

        claim = await self.repository.update(claim, documents=documents)
        await self.db_session.commit()

        LOGGER.info(f"Attached {len(files)} documents to claim {claim_id}")
        return ClaimResponse.model_validate(claim)

    async def remove_document(
        self,
        profile: ProfileResponse,
        claim_id: UUID,
        document_id: str,
    ) -> ClaimResponse:
        """Drop a document from the claim, then delete its stored object.

        The claim is committed first. A failed storage delete is only
        logged, the reference stays removed.
        """
        claim = await self._get_visible(profile, claim_id)
        if claim.user_id != profile.user_id and profile.role != Role.OFFICIAL:
            raise PermissionDeniedError("Only the applicant or an official can remove documents")

        documents = list(claim.documents or [])
        target = next((d for d in documents if d.get("id") == document_id), None)
        if target is None:
            raise NotFoundError(f"Document {document_id} not found on claim {claim_id}")

        claim = await self.repository.update(
            claim, documents=[d for d in documents if d.get("id") != document_id]
        )
        await self.db_session.commit()

        if target.get("path"):
            try:
                await self.storage.remove(settings.supabase.documents_bucket, [target["path"]])
            except AppError as e:
                LOGGER.error(
                    f"Failed to delete stored document {target['path']}: {e.message}",
                    extra={"claim_id": str(claim_id)},
                )
        return ClaimResponse.model_validate(claim)
