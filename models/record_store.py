# models/record_store.py

"""
The RecordStore is the single owner of the student collection and the "source of truth" for all records.

Records are held in an insertion-ordered dictionary keyed by id and mirrored to a `BlobStore`
as one JSON array under a fixed key. Every successful mutation rewrites the whole array.

Provides functions for loading the collection (with a seed-data fallback), validating raw form
input, and creating, updating, deleting, finding, and listing records. Manipulators return
structured `Response` objects and never raise for expected failures.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from core.config import DEFAULT_STORAGE_KEY
from core.response import ErrorCode, Response
from core.utils import generate_uuid
from models.student import StudentForm, StudentRecord
from models.validation import ValidationResult, validate_student_form
from storage.blob_store import BlobStore

logger = logging.getLogger(__name__)

SEED_STUDENTS: tuple[dict[str, Any], ...] = (
    {
        "name": "Ava Thomas",
        "regNo": "REG1023",
        "dept": "Computer Science",
        "age": 20,
        "gender": "Female",
        "marks": 86,
        "dob": "2004-06-12",
    },
    {
        "name": "Liam Patel",
        "regNo": "REG1044",
        "dept": "Mechanical Eng",
        "age": 22,
        "gender": "Male",
        "marks": 78,
        "dob": "2002-03-28",
    },
)


def build_seed_records() -> list[StudentRecord]:
    # fresh ids on every call
    return [
        StudentRecord.from_dict({"id": generate_uuid(), **seed})
        for seed in SEED_STUDENTS
    ]


class RecordStore:

    def __init__(self, blob_store: BlobStore, storage_key: str = DEFAULT_STORAGE_KEY):
        self._blob_store = blob_store
        self._storage_key = storage_key
        self._records: dict[str, StudentRecord] = {}

    # === properties ===

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def records(self) -> tuple[StudentRecord, ...]:
        return tuple(self._records.values())

    # === persistence and import ===

    def load(self) -> tuple[StudentRecord, ...]:
        """
        Loads the collection from the blob store, replacing whatever is held in memory.

        Returns:
            The loaded collection in stored order.

        Notes:
            - This method never raises. A missing or empty blob, unreadable storage, malformed JSON,
              a payload that is not a list, or any record that fails deserialization all fall back
              to the seed dataset.
            - When the seed dataset is substituted it is written back so its ids stay stable.
              A failed write is logged and otherwise ignored.
        """
        try:
            raw = self._blob_store.get(self._storage_key)

        except Exception as e:
            logger.error("Failed to read stored students: %s", e)
            return self._fall_back_to_seed()

        if not raw:
            logger.info("No stored students under '%s', using seed data.", self._storage_key)
            return self._fall_back_to_seed()

        try:
            self._records = self._parse_collection(raw)

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Failed to load students, using seed data: %s", e)
            return self._fall_back_to_seed()

        except Exception as e:
            # e.g. RecursionError from pathologically nested JSON
            logger.warning("Unexpected error loading students, using seed data: %r", e)
            return self._fall_back_to_seed()

        logger.debug("Loaded %d students from '%s'.", len(self._records), self._storage_key)

        return self.records

    def _parse_collection(self, raw: str) -> dict[str, StudentRecord]:
        """
        Deserializes a stored JSON array into an ordered id -> record dictionary.

        Raises:
            json.JSONDecodeError: If `raw` is not valid JSON.
            ValueError: If the payload is not a list, a record is malformed, or an id repeats.
            KeyError, TypeError: If a record dictionary is missing keys or is not a dictionary.
        """
        data = json.loads(raw)

        if not isinstance(data, list):
            raise ValueError(f"Expected a list of students, got {type(data).__name__}.")

        records: dict[str, StudentRecord] = {}

        for record_dict in data:
            record = StudentRecord.from_dict(record_dict)

            if record.id in records:
                raise ValueError(f"Duplicate student id: {record.id}")

            records[record.id] = record

        return records

    def _fall_back_to_seed(self) -> tuple[StudentRecord, ...]:
        self._records = {record.id: record for record in build_seed_records()}

        save_response = self.save()
        if not save_response.success:
            logger.warning("Seed data was not persisted: %s", save_response.detail)

        return self.records

    def save(self) -> Response:
        """
        Serializes the whole collection to JSON and overwrites the blob under the storage key.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the collection was written to the blob store.
                    - False for serialization or storage failures.
                - detail (str | None):
                    - On success, a simple confirmation message.
                    - On failure, a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if a record is not JSON serializable.
                    - `ErrorCode.STORAGE_ERROR` if the blob store rejects the key or raises OSError.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - This intentionally overwrites the existing blob. There are no partial writes.
        """
        try:
            payload = json.dumps([r.to_dict() for r in self._records.values()])

        except (TypeError, ValueError) as e:
            logger.error("Students are not JSON serializable: %s", e)
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        try:
            self._blob_store.set(self._storage_key, payload)

        except (OSError, ValueError) as e:
            logger.error("Failed to write students to storage: %s", e)
            return Response.fail(
                detail=f"Failed to write students to storage: {e}",
                error=ErrorCode.STORAGE_ERROR,
            )

        except Exception as e:
            logger.exception("Unexpected error while saving students")
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(detail="Students successfully saved.")

    def _persist(self) -> bool:
        # the in-memory mutation stands even if the write fails
        return self.save().success

    # === data validators ===

    def validate(self, form: StudentForm) -> ValidationResult:
        return validate_student_form(form)

    # === data accessors ===

    def list_records(self) -> tuple[StudentRecord, ...]:
        return self.records

    def find_record_by_id(self, id: str) -> Response:
        """
        Finds a `StudentRecord` by id.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the record was found.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no match is found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (StudentRecord): The matched record.

        Notes:
            - This method is read-only and does not raise.
        """
        record = self._records.get(id)

        if record is None:
            return Response.fail(
                detail=f"No matching student found for {id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": record})

    # === data manipulators ===

    def create(self, form: StudentForm) -> Response:
        """
        Validates raw form input and appends a new `StudentRecord` with a fresh id.

        Args:
            form (StudentForm): The raw field strings to validate.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was added.
                    - False if any field failed validation.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if any field failed validation.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (StudentRecord): The new record.
                        - "persisted" (bool): Whether the collection was written to the blob store.
                    - On failure:
                        - "errors" (dict[str, str]): Field name -> error message.

        Notes:
            - This method mutates the collection and persists it only if validation passes.
        """
        validation = validate_student_form(form)

        if not validation.is_valid:
            return self._validation_failure(validation)

        record = StudentRecord(
            id=self._unused_id(),
            **self._record_fields(form, validation),
        )

        self._records[record.id] = record
        persisted = self._persist()

        logger.debug("Created student %s (%s).", record.id, record.reg_no)

        return Response.succeed(
            detail="Student successfully created.",
            data={
                "record": record,
                "persisted": persisted,
            },
        )

    def update(self, id: str, form: StudentForm) -> Response:
        """
        Replaces every field except the id of an existing `StudentRecord`.

        Args:
            id (str): The id of the record to update.
            form (StudentForm): The raw field strings to validate.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was updated.
                    - False if validation failed or no record has the given id.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if any field failed validation.
                    - `ErrorCode.NOT_FOUND` if no record has the given id.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the record cannot be found
                    - 400 for validation failures
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (StudentRecord): The updated record.
                        - "persisted" (bool): Whether the collection was written to the blob store.
                    - On validation failure:
                        - "errors" (dict[str, str]): Field name -> error message.

        Notes:
            - Validation is checked before the id lookup.
            - The record keeps its position in the collection.
        """
        validation = validate_student_form(form)

        if not validation.is_valid:
            return self._validation_failure(validation)

        find_response = self.find_record_by_id(id)

        if not find_response.success:
            return find_response

        record: StudentRecord = find_response.data["record"]
        record.replace_fields(**self._record_fields(form, validation))

        persisted = self._persist()

        logger.debug("Updated student %s.", record.id)

        return Response.succeed(
            detail="Student successfully updated.",
            data={
                "record": record,
                "persisted": persisted,
            },
        )

    def delete(self, id: str) -> Response:
        """
        Removes the `StudentRecord` with the given id, if present.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - Always True. Deleting an unknown id is a harmless no-op.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - data (dict): Payload with the following keys:
                    - "removed" (bool): Whether a record was removed.
                    - "persisted" (bool): Whether the collection was written to the blob store.
                      False when nothing was removed.

        Notes:
            - The collection is only persisted when a record was actually removed.
        """
        record = self._records.pop(id, None)

        if record is None:
            return Response.succeed(
                detail=f"No student found for {id}. No changes made.",
                data={
                    "removed": False,
                    "persisted": False,
                },
            )

        persisted = self._persist()

        logger.debug("Deleted student %s.", id)

        return Response.succeed(
            detail="Student successfully deleted.",
            data={
                "removed": True,
                "persisted": persisted,
            },
        )

    # === helper methods ===

    def _unused_id(self) -> str:
        new_id = generate_uuid()
        while new_id in self._records:
            new_id = generate_uuid()
        return new_id

    def _record_fields(
        self, form: StudentForm, validation: ValidationResult
    ) -> dict[str, Any]:
        # text fields are stored trimmed, numbers come from validation
        return {
            "name": form.name.strip(),
            "reg_no": form.reg_no.strip(),
            "dept": form.dept.strip(),
            "age": validation.age,
            "gender": form.gender.strip(),
            "marks": validation.marks,
            "dob": form.dob.strip(),
        }

    def _validation_failure(self, validation: ValidationResult) -> Response:
        fields = ", ".join(validation.errors)
        return Response.fail(
            detail=f"Validation failed for: {fields}.",
            error=ErrorCode.VALIDATION_FAILED,
            data={
                "errors": dict(validation.errors),
            },
        )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, id: object) -> bool:
        return id in self._records
