# cli/form_state.py

"""
Form state for the Student Records CLI.

Holds the working `StudentForm`, the id of the record being edited (if any), and the
field errors from the last submission. The form is in create mode when no id is set
and in edit mode otherwise. Submitting routes to `RecordStore.create()` or
`RecordStore.update()` accordingly.
"""

from __future__ import annotations

from dataclasses import replace

from core.response import ErrorCode, Response
from models.record_store import RecordStore
from models.student import StudentForm


class FormState:

    def __init__(self):
        self._form: StudentForm = StudentForm()
        self._edit_id: str | None = None
        self._errors: dict[str, str] = {}

    # === properties ===

    @property
    def form(self) -> StudentForm:
        return self._form

    @property
    def edit_id(self) -> str | None:
        return self._edit_id

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def is_editing(self) -> bool:
        return self._edit_id is not None

    @property
    def title(self) -> str:
        return "Update Student" if self.is_editing else "Create Student"

    @property
    def submit_label(self) -> str:
        return "Update" if self.is_editing else "Create"

    # === data manipulators ===

    def set_field(self, field: str, value: str) -> None:
        """
        Raises:
            TypeError: If `field` is not a `StudentForm` field.
        """
        self._form = replace(self._form, **{field: value})

    def reset(self) -> None:
        self._form = StudentForm()
        self._edit_id = None
        self._errors = {}

    def begin_edit(self, store: RecordStore, id: str) -> Response:
        """
        Switches to edit mode for the record with the given id and pre-fills the form.

        Notes:
            - Leaves the current state untouched if the id is unknown.
        """
        find_response = store.find_record_by_id(id)

        if not find_response.success:
            return find_response

        self._form = StudentForm.from_record(find_response.data["record"])
        self._edit_id = id
        self._errors = {}

        return find_response

    def submit(self, store: RecordStore) -> Response:
        """
        Creates or updates a record from the current form.

        Notes:
            - On success the form is reset to create mode.
            - On validation failure the errors are kept for display and the form is left as entered.
            - If the edited record has disappeared, the form is reset.
        """
        if self._edit_id is None:
            response = store.create(self._form)
        else:
            response = store.update(self._edit_id, self._form)

        if response.success:
            self.reset()

        elif response.error is ErrorCode.VALIDATION_FAILED:
            self._errors = dict(response.data["errors"])

        elif response.error is ErrorCode.NOT_FOUND:
            self.reset()

        return response

    def delete(self, store: RecordStore, id: str) -> Response:
        response = store.delete(id)

        if self._edit_id == id:
            self.reset()

        return response
