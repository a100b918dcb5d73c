import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pydantic import ValidationError
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from student_records.core.exceptions import (
    DuplicateKeyException,
    NotFoundException,
    StoreFault,
    ValidationFailure,
)
from student_records.models.student import STUDENT_INDEXES, SYSTEM_FIELDS, UNIQUE_FIELDS
from student_records.schemas.student import Student, StudentCreate

logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND = "Student not found"


def _to_validation_failure(exc: ValidationError) -> ValidationFailure:
    errors = exc.errors()
    details = {}
    for error in errors:
        field = ".".join(str(x) for x in error["loc"]) or "body"
        details[field] = error["msg"]
    first = errors[0]
    field = ".".join(str(x) for x in first["loc"]) or "body"
    return ValidationFailure(
        field=field,
        rule=first["type"],
        message=f"{field}: {first['msg']}",
        details=details,
    )


def _parse_object_id(student_id: str) -> ObjectId:
    if not ObjectId.is_valid(student_id):
        raise NotFoundException(STUDENT_NOT_FOUND)
    return ObjectId(student_id)


class StudentStore:
    """
    Student records kept in a single MongoDB collection.

    Uniqueness of rollNumber and email is delegated to unique indexes so the
    check is atomic with the write it guards; call ensure_indexes() once
    before serving requests.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    @contextmanager
    def _store_errors(self, document: Optional[Mapping[str, Any]] = None, exclude_id: ObjectId = None):
        try:
            yield
        except DuplicateKeyError as exc:
            field = self._duplicate_field(exc, document or {}, exclude_id)
            value = (document or {}).get(field)
            logger.warning(f"Rejected duplicate {field}={value!r}")
            raise DuplicateKeyException(field, value) from exc
        except PyMongoError as exc:
            logger.error(f"MongoDB operation failed: {exc}")
            raise StoreFault(str(exc)) from exc

    def _duplicate_field(
        self,
        exc: DuplicateKeyError,
        document: Mapping[str, Any],
        exclude_id: Optional[ObjectId],
    ) -> str:
        details = exc.details or {}
        for key in ("keyValue", "keyPattern"):
            fields = list(details.get(key) or {})
            if fields:
                return fields[0]

        # Older servers and in-memory backends do not report the key
        for field in UNIQUE_FIELDS:
            query: Dict[str, Any] = {field: document.get(field)}
            if exclude_id is not None:
                query["_id"] = {"$ne": exclude_id}
            if self.collection.find_one(query, projection={"_id": 1}) is not None:
                return field
        return UNIQUE_FIELDS[0]

    def ensure_indexes(self) -> None:
        with self._store_errors():
            for keys, unique in STUDENT_INDEXES:
                self.collection.create_index(keys, unique=unique)
        logger.info(f"Indexes ensured on '{self.collection.name}'")

    def create(self, payload: Mapping[str, Any]) -> Student:
        try:
            record = StudentCreate.model_validate(payload)
        except ValidationError as exc:
            raise _to_validation_failure(exc) from exc

        document = record.to_document()
        now = datetime.now(timezone.utc)
        document["createdAt"] = now
        document["updatedAt"] = now

        with self._store_errors(document):
            result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return Student.from_document(document)

    def get(self, student_id: str) -> Student:
        object_id = _parse_object_id(student_id)
        with self._store_errors():
            document = self.collection.find_one({"_id": object_id})
        if document is None:
            raise NotFoundException(STUDENT_NOT_FOUND)
        return Student.from_document(document)

    def list(self, predicate: Optional[Mapping[str, Any]] = None) -> List[Student]:
        with self._store_errors():
            documents = list(
                self.collection.find(dict(predicate or {})).sort("rollNumber", ASCENDING)
            )
        return [Student.from_document(doc) for doc in documents]

    def update(self, student_id: str, payload: Mapping[str, Any]) -> Student:
        """
        Merge ``payload`` over the stored record and save it.

        The merged record is validated as a whole, so nothing is written
        unless every field is valid.
        """
        object_id = _parse_object_id(student_id)
        with self._store_errors():
            current = self.collection.find_one({"_id": object_id})
        if current is None:
            raise NotFoundException(STUDENT_NOT_FOUND)

        merged = {k: v for k, v in current.items() if k not in SYSTEM_FIELDS}
        merged.update({k: v for k, v in payload.items() if k not in SYSTEM_FIELDS})
        try:
            record = StudentCreate.model_validate(merged)
        except ValidationError as exc:
            raise _to_validation_failure(exc) from exc

        changes = record.to_document()
        changes["updatedAt"] = datetime.now(timezone.utc)
        with self._store_errors(changes, exclude_id=object_id):
            document = self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundException(STUDENT_NOT_FOUND)
        return Student.from_document(document)

    def delete(self, student_id: str) -> None:
        object_id = _parse_object_id(student_id)
        with self._store_errors():
            result = self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundException(STUDENT_NOT_FOUND)

    def count(self) -> int:
        with self._store_errors():
            return self.collection.count_documents({})

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        with self._store_errors():
            return list(self.collection.aggregate(pipeline))
