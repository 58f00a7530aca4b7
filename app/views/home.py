from typing import Optional

from app.core.logging_config import get_logger
from app.schemas.teacher import ExportFile, TeacherStatistics
from app.views.base import View

logger = get_logger(__name__)


class HomeView(View):
    """Landing page: aggregate statistics and export shortcuts.

    Failures here are logged only; the statistics panel just stays empty.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.statistics: Optional[TeacherStatistics] = None
        self.loading = False

    async def load_statistics(self) -> None:
        self.loading = True
        result = await self.client.get_statistics()
        self.loading = False
        if result.ok:
            self.statistics = result.value
        else:
            logger.error(f"Error loading statistics: {result.reason}")

    async def export_pdf(self) -> Optional[ExportFile]:
        result = await self.client.export_pdf()
        if not result.ok:
            logger.error(f"Error exporting to PDF: {result.reason}")
            return None
        return result.value

    async def export_excel(self) -> Optional[ExportFile]:
        result = await self.client.export_excel()
        if not result.ok:
            logger.error(f"Error exporting to Excel: {result.reason}")
            return None
        return result.value
