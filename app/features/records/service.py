# Disease Records Feature - Service

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from app.core.logging import logger
from app.core.policy import Action, Ownership, Role, can, ownership_of
from app.features.records.lifecycle import ensure_editable, validate_transition
from app.features.records.models import RecordStatus
from app.features.records.schemas import (
    DiseaseRecordCreate,
    DiseaseRecordUpdate,
    DiseaseRecordResponse,
)
from app.features.roles.store import RoleStore
from app.shared.exceptions import ConflictException, ForbiddenException, NotFoundException, ValidationException
from app.shared.identity import Identity, require_identity
from app.shared.store import RecordStore


class DiseaseRecordService:
    """
    Lifecycle operations on disease records.

    Every operation resolves the caller's role from the role store and asks
    the policy before reading or writing a record.
    """

    def __init__(self, records: RecordStore, roles: RoleStore, hide_foreign_records: bool = False):
        self.records = records
        self.roles = roles
        self.hide_foreign_records = hide_foreign_records

    @staticmethod
    def to_response(doc: Dict[str, Any]) -> DiseaseRecordResponse:
        """Convert a stored document to the response schema."""
        return DiseaseRecordResponse(
            id=doc["id"],
            owner_identity=doc["owner_identity"],
            owner_role_at_creation=doc["owner_role_at_creation"],
            disease_name=doc["disease_name"],
            description=doc["description"],
            location=doc.get("location"),
            image_reference=doc.get("image_reference"),
            medical_supplies=[dict(line) for line in doc.get("medical_supplies") or []],
            status=doc["status"],
            created_at=doc["created_at"],
            updated_at=doc.get("updated_at"),
        )

    async def _authorize(
        self,
        actor: Optional[Identity],
        action: Action,
        ownership: Ownership = Ownership.NOT_APPLICABLE,
    ) -> tuple[Identity, Role]:
        actor = require_identity(actor)
        role = await self.roles.get_role(actor.user_id)
        if not can(role, action, ownership):
            logger.warning(f"Denied {action.value} for user {actor.user_id} (role={role.value})")
            raise ForbiddenException(f"Role '{role.value}' may not {action.value.replace('_', ' ')}")
        return actor, role

    async def _load_owned(self, actor: Identity, role: Role, record_id: str, action: Action) -> Dict[str, Any]:
        """Fetch a record and check the ownership rule for ``action``."""
        doc = await self.records.get(record_id)
        if doc is None:
            raise NotFoundException("Disease record not found")

        if not can(role, action, ownership_of(doc["owner_identity"], actor.user_id)):
            logger.warning(
                f"Denied {action.value} on record {record_id} for user {actor.user_id} "
                f"(role={role.value}, owner={doc['owner_identity']})"
            )
            if self.hide_foreign_records:
                raise NotFoundException("Disease record not found")
            raise ForbiddenException("You can only modify your own records")

        return doc

    async def create(self, actor: Optional[Identity], fields: Dict[str, Any]) -> str:
        """
        Create a draft record owned by the actor.

        Args:
            actor: Authenticated caller
            fields: Record fields (disease_name, description, location,
                image_reference, medical_supplies)

        Returns:
            The new record id
        """
        actor, role = await self._authorize(actor, Action.CREATE_RECORD)

        try:
            data = DiseaseRecordCreate.model_validate(fields)
        except ValidationError as e:
            raise ValidationException.from_pydantic(e)

        doc = data.model_dump()
        doc.update(
            owner_identity=actor.user_id,
            owner_role_at_creation=role.value,
            status=RecordStatus.DRAFT.value,
            created_at=datetime.utcnow(),
            updated_at=None,
        )
        record_id = await self.records.insert(doc)

        logger.info(f"Created draft record {record_id} '{data.disease_name}' by {actor.user_id} ({role.value})")

        return record_id

    async def get(self, actor: Optional[Identity], record_id: str) -> DiseaseRecordResponse:
        """Read one record: owners see their own drafts, registered records are visible to health workers."""
        actor, role = await self._authorize(actor, Action.VIEW_REGISTERED_RECORDS)

        doc = await self.records.get(record_id)
        if doc is None:
            raise NotFoundException("Disease record not found")

        is_own = doc["owner_identity"] == actor.user_id
        if doc["status"] != RecordStatus.REGISTERED and not is_own:
            raise NotFoundException("Disease record not found")

        return self.to_response(doc)

    async def list_own(self, actor: Optional[Identity]) -> List[DiseaseRecordResponse]:
        """All of the actor's records in any status, newest first."""
        actor, _ = await self._authorize(actor, Action.VIEW_OWN_RECORDS, Ownership.OWNED)

        docs = await self.records.scan({"owner_identity": actor.user_id})
        docs.sort(key=lambda doc: doc["created_at"], reverse=True)

        return [self.to_response(doc) for doc in docs]

    async def list_registered(
        self,
        actor: Optional[Identity],
        location: Optional[str] = None,
    ) -> List[DiseaseRecordResponse]:
        """
        Registered records, most recently changed first.

        Args:
            actor: Authenticated caller
            location: Optional exact location filter

        Returns:
            Records ordered by updated_at (created_at when never updated)
        """
        actor, _ = await self._authorize(actor, Action.VIEW_REGISTERED_RECORDS)

        filters: Dict[str, Any] = {"status": RecordStatus.REGISTERED.value}
        if location:
            filters["location"] = location.strip()

        docs = await self.records.scan(filters)
        docs.sort(key=lambda doc: doc.get("updated_at") or doc["created_at"], reverse=True)

        return [self.to_response(doc) for doc in docs]

    async def update(
        self,
        actor: Optional[Identity],
        record_id: str,
        fields: Dict[str, Any],
    ) -> DiseaseRecordResponse:
        """
        Change fields of a draft. Status and owner never change here.

        Raises:
            NotFoundException: Unknown record id
            ForbiddenException: Actor is neither owner nor admin
            ValidationException: Invalid field values
            ConflictException: Record is already registered
        """
        actor, role = await self._authorize(actor, Action.UPDATE_RECORD)
        doc = await self._load_owned(actor, role, record_id, Action.UPDATE_RECORD)

        try:
            changes = DiseaseRecordUpdate.model_validate(fields).model_dump(exclude_unset=True)
        except ValidationError as e:
            raise ValidationException.from_pydantic(e)

        ensure_editable(doc["status"])

        changes["updated_at"] = datetime.utcnow()
        applied = await self.records.patch(record_id, changes, expected={"status": RecordStatus.DRAFT.value})
        if not applied:
            logger.warning(f"Record {record_id} was registered before the update from {actor.user_id} applied")
            raise ConflictException("Registered records are read-only")

        logger.info(f"Updated record {record_id} fields {sorted(changes)} by {actor.user_id} ({role.value})")

        return self.to_response({**doc, **changes})

    async def register(self, actor: Optional[Identity], record_id: str) -> DiseaseRecordResponse:
        """
        Move a draft to registered.

        Registering an already registered record succeeds without writing,
        so retries are safe.
        """
        actor, role = await self._authorize(actor, Action.REGISTER_RECORD)
        doc = await self._load_owned(actor, role, record_id, Action.REGISTER_RECORD)

        if doc["status"] == RecordStatus.REGISTERED:
            logger.info(f"Record {record_id} already registered, nothing to do")
            return self.to_response(doc)

        validate_transition(doc["status"], RecordStatus.REGISTERED)

        changes = {
            "status": RecordStatus.REGISTERED.value,
            "updated_at": datetime.utcnow(),
        }
        applied = await self.records.patch(record_id, changes, expected={"status": RecordStatus.DRAFT.value})
        if not applied:
            logger.info(f"Record {record_id} was registered concurrently, nothing to do")
            current = await self.records.get(record_id)
            if current is None:
                raise NotFoundException("Disease record not found")
            return self.to_response(current)

        logger.info(f"Registered record {record_id} by {actor.user_id} ({role.value})")

        return self.to_response({**doc, **changes})
