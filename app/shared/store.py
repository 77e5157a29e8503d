"""
Record store port and its MongoDB adapter.

Services only see plain dicts through this interface, so an in-memory
implementation can stand in for MongoDB in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from beanie import Document, PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from app.core.logging import logger
from app.shared.exceptions import StoreUnavailableException


class RecordStore(ABC):
    """Document collection keyed by opaque string ids."""

    @abstractmethod
    async def insert(self, doc: Dict[str, Any]) -> str:
        """Insert a document and return its new id."""

    @abstractmethod
    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document with ``id`` set, or None if absent."""

    @abstractmethod
    async def patch(
        self,
        doc_id: str,
        fields: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Set the given fields on one document.

        The write only applies if the document still holds every value in
        ``expected``. Returns False when no document matched.
        """

    @abstractmethod
    async def scan(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return all documents whose fields equal every value in ``filters``."""


class BeanieRecordStore(RecordStore):
    """RecordStore over a Beanie document class."""

    def __init__(self, document_model: Type[Document]):
        self.document_model = document_model

    @property
    def collection(self) -> str:
        return self.document_model.get_settings().name or self.document_model.__name__

    @staticmethod
    def _parse_id(doc_id: str) -> Optional[PydanticObjectId]:
        try:
            return PydanticObjectId(doc_id)
        except (InvalidId, TypeError, ValueError):
            return None

    def _to_dict(self, document: Document) -> Dict[str, Any]:
        data = document.model_dump(exclude={"id", "revision_id"})
        data["id"] = str(document.id)
        return data

    def _unavailable(self, operation: str, error: Exception) -> StoreUnavailableException:
        logger.error(f"Store {operation} on '{self.collection}' failed: {type(error).__name__}: {error}")
        return StoreUnavailableException()

    async def insert(self, doc: Dict[str, Any]) -> str:
        document = self.document_model(**doc)
        try:
            await document.insert()
        except PyMongoError as e:
            raise self._unavailable("insert", e)
        return str(document.id)

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        object_id = self._parse_id(doc_id)
        if object_id is None:
            return None
        try:
            document = await self.document_model.get(object_id)
        except PyMongoError as e:
            raise self._unavailable("get", e)
        return self._to_dict(document) if document else None

    async def patch(
        self,
        doc_id: str,
        fields: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None,
    ) -> bool:
        object_id = self._parse_id(doc_id)
        if object_id is None:
            return False
        query = {"_id": object_id, **(expected or {})}
        try:
            result = await self.document_model.find_one(query).update({"$set": fields})
        except PyMongoError as e:
            raise self._unavailable("patch", e)
        return result.matched_count > 0

    async def scan(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            documents = await self.document_model.find(filters or {}).to_list()
        except PyMongoError as e:
            raise self._unavailable("scan", e)
        return [self._to_dict(document) for document in documents]
