"""
Google Classroom Schemas - courses and coursework.

Reference: https://developers.google.com/classroom/reference/rest
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """An active course the user belongs to."""
    id: str
    name: str
    section: Optional[str] = None


class DueDate(BaseModel):
    """Classroom's split date; any part may be missing."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    def as_text(self) -> str:
        # Unpadded, e.g. "2026-3-7"
        return f"{self.year}-{self.month}-{self.day}"


class DriveFileRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    drive_file_id: Optional[str] = Field(None, alias="driveFileId")
    title: Optional[str] = None


class Material(BaseModel):
    """
    One attachment on a coursework item.

    Only Drive files are linked from the panel; links, videos and forms are
    ignored.
    """
    model_config = ConfigDict(populate_by_name=True)

    drive_file: Optional[DriveFileRef] = Field(None, alias="driveFile")


class CourseWork(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: str = ""
    due_date: Optional[DueDate] = Field(None, alias="dueDate")
    materials: List[Material] = Field(default_factory=list)

    def due_text(self) -> str:
        return self.due_date.as_text() if self.due_date else "no due"

    def drive_file_ids(self) -> List[str]:
        """IDs of attached Drive files, in attachment order."""
        return [
            m.drive_file.drive_file_id
            for m in self.materials
            if m.drive_file and m.drive_file.drive_file_id
        ]


class CourseWithWork(BaseModel):
    """A course plus whatever coursework could be fetched for it."""
    course: Course
    course_work: List[CourseWork] = Field(default_factory=list)
