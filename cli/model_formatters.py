# cli/model_formatters.py

# anything that renders student records or forms
from textwrap import dedent

import core.formatters as formatters
from models.student import FIELD_LABELS, StudentForm, StudentRecord

TABLE_HEADERS = [
    "Name",
    "Reg No",
    "Dept",
    "Age",
    "DOB",
    "Gender",
    "Internal Marks",
]

NAME_WIDTH = 24

# === record formatters ===


def format_student_oneline(record: StudentRecord) -> str:
    return f"{formatters.truncate(record.name, NAME_WIDTH):<{NAME_WIDTH}} | {record.reg_no} | {record.dept}"


def format_student_multiline(record: StudentRecord) -> str:
    return dedent(
        f"""\
        Student {record.reg_no}:
        ... Name: {record.name}
        ... Department: {record.dept}
        ... Age: {record.age}
        ... Date of Birth: {formatters.format_optional(record.dob)}
        ... Gender: {record.gender}
        ... Internal Marks: {record.marks}"""
    )


def format_student_table(records: tuple[StudentRecord, ...] | list[StudentRecord]) -> str:
    if not records:
        return "No students yet. Add one using the form."

    rows = [
        [
            formatters.truncate(r.name, NAME_WIDTH),
            r.reg_no,
            r.dept,
            str(r.age),
            formatters.format_optional(r.dob),
            r.gender,
            str(r.marks),
        ]
        for r in records
    ]

    return formatters.format_table(TABLE_HEADERS, rows)


# === form formatters ===


def format_form(form: StudentForm, errors: dict[str, str] | None = None) -> str:
    errors = errors or {}
    lines = []

    for field, value in form.to_dict().items():
        error = f"  [{errors[field]}]" if field in errors else ""
        lines.append(f"... {FIELD_LABELS[field]}: {formatters.format_optional(value)}{error}")

    return "\n".join(lines)
