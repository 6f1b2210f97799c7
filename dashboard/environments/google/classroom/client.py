"""
Google Classroom API Client - active courses and their coursework.

API Reference:
==============
- Courses: https://developers.google.com/classroom/reference/rest/v1/courses/list
- CourseWork: https://developers.google.com/classroom/reference/rest/v1/courses.courseWork/list
"""

import logging
from typing import List
from urllib.parse import quote

from dashboard.environments.base import EnvironmentService, APIError
from dashboard.environments.google.classroom.schemas import (
    Course,
    CourseWork,
    CourseWithWork,
)


logger = logging.getLogger("dashboard.environments.google.classroom")


class GoogleClassroomClient(EnvironmentService):
    """
    Google Classroom API client.

    Example:
        client = GoogleClassroomClient(access_token="ya29.xxx")
        courses = await client.list_courses_with_work()
    """

    service_name = "classroom"
    required_scopes = [
        "https://www.googleapis.com/auth/classroom.coursework.me.readonly",
        "https://www.googleapis.com/auth/classroom.announcements.readonly",
    ]

    BASE_URL = "https://classroom.googleapis.com/v1"

    async def list_active_courses(self) -> List[Course]:
        data = await self._make_request("GET", "/courses", params={"courseStates": "ACTIVE"})
        courses = [Course(**c) for c in data.get("courses") or []]
        logger.info(f"Fetched {len(courses)} active courses")
        return courses

    async def list_course_work(self, course_id: str) -> List[CourseWork]:
        """Coursework of one course, ordered by due date."""
        data = await self._make_request(
            "GET",
            f"/courses/{quote(course_id, safe='')}/courseWork",
            params={"orderBy": "dueDate"},
        )
        return [CourseWork(**item) for item in data.get("courseWork") or []]

    async def list_courses_with_work(self) -> List[CourseWithWork]:
        """
        Active courses, each with its coursework.

        Courses are fetched one after another. A course whose coursework
        request fails is still returned, just without coursework.

        Raises:
            APIError: If the course list itself cannot be fetched
        """
        results = []
        for course in await self.list_active_courses():
            try:
                work = await self.list_course_work(course.id)
            except APIError as e:
                logger.warning(
                    f"Skipping coursework for course {course.id}: {e}",
                    extra={"status_code": e.status_code},
                )
                work = []
            results.append(CourseWithWork(course=course, course_work=work))
        return results
