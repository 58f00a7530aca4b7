from app.schemas.teacher import (
    ExportFile,
    FilterCriteria,
    Teacher,
    TeacherCreate,
    TeacherStatistics,
)

__all__ = [
    "Teacher", "TeacherCreate",
    "FilterCriteria",
    "TeacherStatistics",
    "ExportFile",
]
