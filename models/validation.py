# models/validation.py

"""
Pure validation of raw `StudentForm` input.

`validate_student_form()` checks every field independently and never raises. The
result carries a field -> message mapping for each failed rule along with the
coerced age and marks, so a caller can build a record without re-parsing.

Rules:
- name, reg_no, dept, gender, dob: required, non-empty after trimming whitespace
- age: required, must be a whole number greater than zero
- marks: required, must be a number between 0 and 100 inclusive
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.utils import narrow_number, parse_number
from models.student import StudentForm

REQUIRED_MESSAGE = "Required"
INVALID_AGE_MESSAGE = "Enter a valid age"
INVALID_MARKS_MESSAGE = "0 - 100 only"

MIN_MARKS = 0
MAX_MARKS = 100

REQUIRED_TEXT_FIELDS = ("name", "reg_no", "dept", "gender", "dob")


@dataclass(frozen=True)
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)
    age: int | None = None
    marks: int | float | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_student_form(form: StudentForm) -> ValidationResult:
    errors: dict[str, str] = {}

    for name in REQUIRED_TEXT_FIELDS:
        if not getattr(form, name).strip():
            errors[name] = REQUIRED_MESSAGE

    age = validate_age(form.age, errors)
    marks = validate_marks(form.marks, errors)

    return ValidationResult(errors=errors, age=age, marks=marks)


def validate_age(raw: str, errors: dict[str, str]) -> int | None:
    if not raw.strip():
        errors["age"] = REQUIRED_MESSAGE
        return None

    value = parse_number(raw)

    if value is None or not value.is_integer() or value <= 0:
        errors["age"] = INVALID_AGE_MESSAGE
        return None

    return int(value)


def validate_marks(raw: str, errors: dict[str, str]) -> int | float | None:
    if not raw.strip():
        errors["marks"] = REQUIRED_MESSAGE
        return None

    value = parse_number(raw)

    if value is None or not MIN_MARKS <= value <= MAX_MARKS:
        errors["marks"] = INVALID_MARKS_MESSAGE
        return None

    return narrow_number(value)
