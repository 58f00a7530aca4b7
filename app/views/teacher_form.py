"""
Add/edit teacher form.

One form serves both modes: edit mode when a teacher id is supplied at
``init``. Nothing is sent to the server until every field validates.
"""
from datetime import date
from typing import Any, Optional

from app.core.config import settings
from app.core.logging_config import get_logger
from app.schemas.teacher import TeacherCreate
from app.views import navigation
from app.views.base import View
from app.views.validation import (
    FIELD_DISPLAY_NAMES,
    ValidationFailure,
    error_message,
    parse_date,
    validate_form,
)

logger = get_logger(__name__)

FIELDS = list(FIELD_DISPLAY_NAMES)


def _empty_values() -> dict[str, Any]:
    return {field: "" for field in FIELDS}


class TeacherFormView(View):
    notification_ms = settings.form_notification_ms

    def __init__(self, *args, today: Optional[date] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.values = _empty_values()
        self.touched: set[str] = set()
        self.dirty: set[str] = set()
        self.is_edit_mode = False
        self.teacher_id: Optional[int] = None
        self.loading = False
        self._today = today

    @property
    def max_date(self) -> date:
        """Latest date the date picker offers."""
        return self._today or date.today()

    def set_mode(self, teacher_id: Optional[int] = None) -> None:
        self.is_edit_mode = teacher_id is not None
        self.teacher_id = teacher_id

    async def init(self, teacher_id: Optional[int] = None) -> None:
        """Pick the mode and, when editing, pre-populate from the server."""
        self.set_mode(teacher_id)
        if teacher_id is not None:
            await self._load_teacher(teacher_id)

    async def _load_teacher(self, teacher_id: int) -> None:
        self.loading = True
        result = await self.client.get_teacher(teacher_id)
        self.loading = False
        if not result.ok:
            logger.error(f"Error loading teacher {teacher_id}: {result.reason}")
            self.notify_error("Error loading teacher data")
            self.navigator.navigate(navigation.TEACHERS)
            return
        teacher = result.value
        self.values = {
            "full_name": teacher.full_name,
            "date_of_birth": teacher.date_of_birth,
            "number_of_classes": teacher.number_of_classes,
        }

    # ── Field state ─────────────────────────────────────────────

    def set_value(self, field: str, value: Any) -> None:
        if field not in self.values:
            raise KeyError(f"Unknown form field: {field}")
        self.values[field] = value
        self.dirty.add(field)

    def update(self, values: dict[str, Any]) -> None:
        for field, value in values.items():
            self.set_value(field, value)

    @property
    def errors(self) -> dict[str, list[ValidationFailure]]:
        return validate_form(self.values, self._today)

    @property
    def valid(self) -> bool:
        return not self.errors

    def mark_all_touched(self) -> None:
        self.touched.update(FIELDS)

    def has_error(self, field: str) -> bool:
        return field in self.errors and (field in self.dirty or field in self.touched)

    def get_error_message(self, field: str) -> str:
        return error_message(field, self.errors.get(field, []))

    # ── Actions ─────────────────────────────────────────────────

    def _build_payload(self) -> TeacherCreate:
        return TeacherCreate(
            full_name=str(self.values["full_name"]).strip(),
            date_of_birth=parse_date(self.values["date_of_birth"]),
            number_of_classes=int(str(self.values["number_of_classes"]).strip()),
        )

    async def submit(self) -> bool:
        if not self.valid:
            self.mark_all_touched()
            self.notify_error("Please correct the errors in the form")
            return False

        self.loading = True
        teacher = self._build_payload()
        if self.is_edit_mode and self.teacher_id:
            result = await self.client.update_teacher(self.teacher_id, teacher)
            success, failure = "Teacher updated successfully!", "Error updating teacher"
        else:
            result = await self.client.create_teacher(teacher)
            success, failure = "Teacher added successfully!", "Error creating teacher"
        self.loading = False

        if not result.ok:
            logger.error(f"{failure}: {result.reason}")
            self.notify_error(failure)
            return False
        self.notify_success(success)
        self.navigator.navigate(navigation.TEACHERS)
        return True

    def cancel(self) -> None:
        self.navigator.navigate(navigation.TEACHERS)

    def reset(self) -> None:
        self.values = _empty_values()
        self.dirty.clear()
        self.mark_all_touched()
