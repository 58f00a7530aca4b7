"""
Teacher list page: all teachers, server-side search and range filters,
delete with confirmation, and PDF/Excel export.
"""
from typing import Callable, Optional

from app.core.config import settings
from app.core.logging_config import get_logger
from app.schemas.teacher import ExportFile, FilterCriteria, Teacher
from app.services.teacher_store import StoreSnapshot
from app.views.base import View

logger = get_logger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this teacher?"


class TeacherListView(View):
    notification_ms = settings.list_notification_ms
    displayed_columns = ["id", "fullName", "age", "dateOfBirth", "numberOfClasses", "actions"]
    column_headers = {
        "id": "ID",
        "fullName": "Full Name",
        "age": "Age",
        "dateOfBirth": "Date of Birth",
        "numberOfClasses": "Number of Classes",
        "actions": "Actions",
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.teachers: list[Teacher] = []
        self.filtered_teachers: list[Teacher] = []
        self.loading = False

        # Search and filter fields
        self.search_term = ""
        self.min_age: Optional[int] = None
        self.max_age: Optional[int] = None
        self.min_classes: Optional[int] = None
        self.max_classes: Optional[int] = None

        self._seen_version = None
        self.watch(self._on_store_change)

    def _on_store_change(self, snapshot: StoreSnapshot) -> None:
        self.loading = snapshot.loading
        # A new list in the cache replaces whatever was displayed
        if snapshot.version != self._seen_version:
            self._seen_version = snapshot.version
            self.teachers = list(snapshot.teachers)
            self.filtered_teachers = self.teachers

    @property
    def has_active_filters(self) -> bool:
        return any(
            value is not None
            for value in (self.min_age, self.max_age, self.min_classes, self.max_classes)
        ) or bool(self.search_term.strip())

    async def load(self) -> None:
        result = await self.client.load_teachers()
        if not result.ok:
            self.notify_error("Error loading teachers")

    async def search(self) -> None:
        if not self.search_term.strip():
            self.filtered_teachers = self.teachers
            return
        result = await self.client.search_teachers(self.search_term)
        if result.ok:
            self.filtered_teachers = result.value
        else:
            logger.error(f"Error searching teachers: {result.reason}")
            self.notify_error("Error searching teachers")

    def build_criteria(self) -> FilterCriteria:
        # Unset and zero bounds both mean "no constraint"
        return FilterCriteria(
            search_term=self.search_term or None,
            min_age=self.min_age or None,
            max_age=self.max_age or None,
            min_classes=self.min_classes or None,
            max_classes=self.max_classes or None,
        )

    async def apply_filters(self) -> None:
        result = await self.client.filter_teachers(self.build_criteria())
        if result.ok:
            self.filtered_teachers = result.value
            self.notify_success(f"Found {len(result.value)} teachers")
        else:
            logger.error(f"Error filtering teachers: {result.reason}")
            self.notify_error("Error filtering teachers")

    def clear_filters(self) -> None:
        self.search_term = ""
        self.min_age = None
        self.max_age = None
        self.min_classes = None
        self.max_classes = None
        self.filtered_teachers = self.teachers
        self.notify_success("Filters cleared")

    async def delete_teacher(self, teacher_id: int, confirm: Callable[[str], bool]) -> bool:
        """Delete after confirmation. The client refreshes the cached list on success."""
        if not confirm(DELETE_CONFIRMATION):
            return False
        result = await self.client.delete_teacher(teacher_id)
        if not result.ok:
            logger.error(f"Error deleting teacher {teacher_id}: {result.reason}")
            self.notify_error("Error deleting teacher")
            return False
        self.notify_success("Teacher deleted successfully")
        return True

    async def export_pdf(self) -> Optional[ExportFile]:
        result = await self.client.export_pdf()
        if not result.ok:
            logger.error(f"Error exporting to PDF: {result.reason}")
            self.notify_error("Error exporting to PDF")
            return None
        self.notify_success("PDF exported successfully")
        return result.value

    async def export_excel(self) -> Optional[ExportFile]:
        result = await self.client.export_excel()
        if not result.ok:
            logger.error(f"Error exporting to Excel: {result.reason}")
            self.notify_error("Error exporting to Excel")
            return None
        self.notify_success("Excel exported successfully")
        return result.value
