"""
Google Classroom Module - courses and coursework for the Classroom panel.
"""

from dashboard.environments.google.classroom.client import GoogleClassroomClient
from dashboard.environments.google.classroom.schemas import Course, CourseWork, CourseWithWork

__all__ = [
    "GoogleClassroomClient",
    "Course",
    "CourseWork",
    "CourseWithWork",
]
