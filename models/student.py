# models/student.py

"""
Represents a student record and the raw form input used to create or edit one.

`StudentRecord` is the stored shape: an immutable id plus the seven editable fields,
with age and marks already coerced to numbers. `StudentForm` is the fixed-shape raw
input: every field is the string exactly as entered, before validation.

Includes functionality for:
- Serializing records to and from JSON-compatible dictionaries
- Building a form from a mapping (JSON or Python key spelling)
- Pre-filling a form from an existing record for editing

The JSON keys match the stored collection format (`regNo` rather than `reg_no`).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class Gender(str, Enum):
    FEMALE = "Female"
    MALE = "Male"
    NON_BINARY = "Non-binary"
    OTHER = "Other"
    UNDISCLOSED = "Prefer not to say"


# python attribute name -> stored JSON key
FIELD_KEYS: dict[str, str] = {
    "name": "name",
    "reg_no": "regNo",
    "dept": "dept",
    "age": "age",
    "gender": "gender",
    "marks": "marks",
    "dob": "dob",
}

FIELD_LABELS: dict[str, str] = {
    "name": "Student Name",
    "reg_no": "Reg No",
    "dept": "Department",
    "age": "Age",
    "gender": "Gender",
    "marks": "Internal Marks",
    "dob": "Date of Birth",
}


class StudentRecord:

    def __init__(
        self,
        id: str,
        name: str,
        reg_no: str,
        dept: str,
        age: int,
        gender: str,
        marks: int | float,
        dob: str,
    ):
        self._id: str = id
        self._name: str = name
        self._reg_no: str = reg_no
        self._dept: str = dept
        self._age: int = age
        self._gender: str = gender
        self._marks: int | float = marks
        self._dob: str = dob

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def reg_no(self) -> str:
        return self._reg_no

    @property
    def dept(self) -> str:
        return self._dept

    @property
    def age(self) -> int:
        return self._age

    @property
    def gender(self) -> str:
        return self._gender

    @property
    def marks(self) -> int | float:
        return self._marks

    @property
    def dob(self) -> str:
        return self._dob

    # === data manipulators ===

    def replace_fields(
        self,
        name: str,
        reg_no: str,
        dept: str,
        age: int,
        gender: str,
        marks: int | float,
        dob: str,
    ) -> None:
        """
        Overwrites every editable field in place. The id is never touched.
        """
        self._name = name
        self._reg_no = reg_no
        self._dept = dept
        self._age = age
        self._gender = gender
        self._marks = marks
        self._dob = dob

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "regNo": self._reg_no,
            "dept": self._dept,
            "age": self._age,
            "gender": self._gender,
            "marks": self._marks,
            "dob": self._dob,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StudentRecord:
        """
        Rebuilds a record from its stored dictionary form.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If `data` is not a dictionary or a value has the wrong type.
            ValueError: If age or marks is not a number.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a dictionary, got {type(data).__name__}.")

        age = data["age"]
        marks = data["marks"]

        # bool is an int subclass but never a valid age or mark
        if isinstance(age, bool) or not isinstance(age, (int, float)):
            raise ValueError(f"age must be a number, got {age!r}")
        if isinstance(age, float) and not age.is_integer():
            raise ValueError(f"age must be a whole number, got {age!r}")
        if isinstance(marks, bool) or not isinstance(marks, (int, float)):
            raise ValueError(f"marks must be a number, got {marks!r}")

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            reg_no=str(data["regNo"]),
            dept=str(data["dept"]),
            age=int(age),
            gender=str(data["gender"]),
            marks=marks,
            dob=str(data.get("dob") or ""),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"StudentRecord({self._id}, {self._name}, {self._reg_no}, {self._dept}, "
            f"{self._age}, {self._gender}, {self._marks}, {self._dob})"
        )

    def __str__(self) -> str:
        return f"STUDENT: {self._name} - (Reg No: {self._reg_no}, ID: {self._id})"


@dataclass(frozen=True)
class StudentForm:
    """
    Raw, unvalidated field strings for a student record.
    """

    name: str = ""
    reg_no: str = ""
    dept: str = ""
    age: str = ""
    gender: str = ""
    marks: str = ""
    dob: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudentForm:
        """
        Builds a form from a mapping keyed by either the stored JSON names (`regNo`)
        or the Python attribute names (`reg_no`).

        Missing keys and None become "", any other value is converted with `str()`.
        """
        values = {}

        for field in fields(cls):
            raw = data.get(field.name, data.get(FIELD_KEYS[field.name]))
            values[field.name] = "" if raw is None else str(raw)

        return cls(**values)

    @classmethod
    def from_record(cls, record: StudentRecord) -> StudentForm:
        return cls(
            name=record.name,
            reg_no=record.reg_no,
            dept=record.dept,
            age=str(record.age),
            gender=record.gender,
            marks=str(record.marks),
            dob=record.dob or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {field.name: getattr(self, field.name) for field in fields(self)}
