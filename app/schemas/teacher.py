from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class TeacherCreate(BaseModel):
    """Body of create/update calls. Validation rules live in the form view."""
    full_name: str = Field(alias="fullName")
    date_of_birth: date = Field(alias="dateOfBirth")
    number_of_classes: int = Field(alias="numberOfClasses")

    class Config:
        populate_by_name = True

    def to_payload(self) -> dict:
        return self.model_dump(
            by_alias=True,
            mode="json",
            include={"full_name", "date_of_birth", "number_of_classes"},
        )


class Teacher(TeacherCreate):
    id: Optional[int] = None
    age: Optional[int] = None  # computed server-side


class FilterCriteria(BaseModel):
    search_term: Optional[str] = Field(default=None, alias="searchTerm")
    min_age: Optional[int] = Field(default=None, alias="minAge")
    max_age: Optional[int] = Field(default=None, alias="maxAge")
    min_classes: Optional[int] = Field(default=None, alias="minClasses")
    max_classes: Optional[int] = Field(default=None, alias="maxClasses")

    class Config:
        populate_by_name = True

    def to_payload(self) -> dict:
        # Absent fields mean "no constraint", so they are left out of the body
        return self.model_dump(by_alias=True, exclude_none=True)


class TeacherStatistics(BaseModel):
    total_teachers: int = Field(alias="totalTeachers")
    average_classes: float = Field(alias="averageClasses")

    class Config:
        populate_by_name = True


class ExportFile(BaseModel):
    filename: str
    media_type: str
    content: bytes
