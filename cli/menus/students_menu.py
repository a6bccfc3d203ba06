# cli/menus/students_menu.py

"""
Manage Students menu for the Student Records CLI.

This module defines the full interface for managing `StudentRecord` entries:
- Filling in the student form (create mode, or edit mode after selecting a record)
- Submitting the form to create or update a record
- Deleting records
- Viewing all records as a table

The working form lives in a `FormState`, so entered values and field errors survive
between menu actions. All mutations are routed through the `RecordStore`, which
validates input and persists the collection after every change.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.form_state import FormState
from cli.menu_helpers import MenuSignal
from models.record_store import RecordStore
from models.student import FIELD_LABELS, Gender, StudentRecord


def run(store: RecordStore) -> None:
    """
    Top-level loop with dispatch for the Manage Students menu.

    Args:
        store (RecordStore): The loaded `RecordStore`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    state = FormState()

    while True:
        title = formatters.format_banner_text(f"Student Records - {state.title}")
        options = [
            ("Fill in student form", fill_in_form),
            (f"Submit form ({state.submit_label})", submit_form),
            ("Edit a student", select_student_to_edit),
            ("Delete a student", select_student_to_delete),
            ("View students", view_students),
            ("Cancel edit" if state.is_editing else "Clear form", clear_form),
        ]

        menu_response = helpers.display_menu(title, options, "Exit Program")

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(state, store)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


# === form entry ===


def fill_in_form(state: FormState, _: RecordStore) -> None:
    """
    Walks through every form field, showing the current value and keeping it on blank input.

    Notes:
        - Gender is selected from the `Gender` choices.
        - Nothing is validated here; validation happens on submit.
    """
    print(f"\n{state.title}:")
    print(model_formatters.format_form(state.form, state.errors))

    for field, label in FIELD_LABELS.items():
        if field == "gender":
            value = prompt_gender_or_default(state.form.gender)
        else:
            value = prompt_field_or_default(label, getattr(state.form, field))

        if value is not MenuSignal.DEFAULT:
            state.set_field(field, cast(str, value))


def prompt_field_or_default(label: str, current: str) -> str | MenuSignal:
    hint = f"current: {current}" if current else "leave blank to skip"
    return helpers.prompt_user_input_or_default(f"Enter {label} ({hint}):")


def prompt_gender_or_default(current: str) -> str | MenuSignal:
    choices = [g.value for g in Gender]

    print(f"\nGender (current: {formatters.format_optional(current)}):")
    helpers.display_results(choices, show_index=True)

    while True:
        choice = helpers.prompt_user_input_or_default(
            "Select a gender (leave blank to keep current):"
        )

        if choice is MenuSignal.DEFAULT:
            return choice

        try:
            index = int(cast(str, choice)) - 1
            if index < 0:
                raise IndexError(index)
            return choices[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def clear_form(state: FormState, _: RecordStore) -> None:
    state.reset()
    print("\nForm cleared.")


# === submit ===


def submit_form(state: FormState, store: RecordStore) -> None:
    """
    Submits the form through `FormState.submit()` and reports the outcome.

    Notes:
        - Field errors are shown next to their fields and the form is kept for correction.
        - A write failure is reported, but the change remains in memory.
    """
    response = state.submit(store)

    if not response.success:
        helpers.display_response_failure(response)

        if state.errors:
            print(model_formatters.format_form(state.form, state.errors))
        return

    print(f"\n{response.detail}")
    print(model_formatters.format_student_multiline(response.data["record"]))

    if not response.data.get("persisted", True):
        print("\n[WARNING] The change could not be saved to storage.")


# === edit and delete ===


def select_student(store: RecordStore, description: str) -> StudentRecord | None:
    return helpers.prompt_selection_from_list(
        list(store.list_records()),
        description,
        model_formatters.format_student_oneline,
    )


def select_student_to_edit(state: FormState, store: RecordStore) -> None:
    record = select_student(store, "Students")

    if record is None:
        helpers.returning_without_changes()
        return

    response = state.begin_edit(store, record.id)

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\nEditing {record.name}. Use 'Fill in student form' to change fields.")
    print(model_formatters.format_form(state.form))


def select_student_to_delete(state: FormState, store: RecordStore) -> None:
    record = select_student(store, "Students")

    if record is None:
        helpers.returning_without_changes()
        return

    print("\nYou are about to delete the following student:")
    print(model_formatters.format_student_multiline(record))

    if not helpers.confirm_action("Do you want to delete this student?"):
        helpers.returning_without_changes()
        return

    response = state.delete(store, record.id)

    print(f"\n{response.detail}")

    if response.data.get("removed") and not response.data.get("persisted"):
        print("\n[WARNING] The change could not be saved to storage.")


# === view ===


def view_students(_: FormState, store: RecordStore) -> None:
    banner = formatters.format_banner_text("Student Records")
    print(f"\n{banner}\n")
    print(model_formatters.format_student_table(store.list_records()))
