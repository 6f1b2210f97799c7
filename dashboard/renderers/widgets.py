"""
Widget HTML Renderer - panel fragments for the dashboard grid.

Each method returns an HTML fragment that the page drops into the matching
panel container (#classroom-widget, #drive-widget, #github-widget). Every
piece of upstream data is escaped; only URLs we build ourselves or that come
from a provider's link fields are placed in href attributes, and those are
escaped too.

Usage:
======
    renderer = WidgetRenderer()
    html = renderer.render_drive(files)
"""

from typing import List
import html as html_escape

from dashboard.environments.github.schemas import Repository
from dashboard.environments.google.classroom.schemas import CourseWithWork
from dashboard.environments.google.drive.schemas import DriveFile


DRIVE_FILE_VIEW_URL = "https://drive.google.com/file/d/{file_id}/view"


def _esc(value) -> str:
    return html_escape.escape("" if value is None else str(value), quote=True)


class WidgetRenderer:
    """Renders Classroom, Drive and GitHub data as panel fragments."""

    # -------------------------------------------------------------------------
    # CLASSROOM
    # -------------------------------------------------------------------------

    def _render_course(self, entry: CourseWithWork) -> str:
        course = entry.course
        header = (
            f"<div><strong>{_esc(course.name)}</strong> "
            f"<small>{_esc(course.section)}</small></div>"
        )
        if not entry.course_work:
            return header

        rows = []
        for work in entry.course_work:
            links = "".join(
                f' <a href="{_esc(DRIVE_FILE_VIEW_URL.format(file_id=file_id))}" '
                f'target="_blank">attachment</a>'
                for file_id in work.drive_file_ids()
            )
            rows.append(f"<li><span>{_esc(work.title)} ({_esc(work.due_text())})</span>{links}</li>")
        return header + "<ul>" + "".join(rows) + "</ul>"

    def render_classroom(self, courses: List[CourseWithWork]) -> str:
        if not courses:
            return '<p class="widget-empty">No active courses.</p>'
        return "".join(self._render_course(entry) for entry in courses)

    # -------------------------------------------------------------------------
    # DRIVE
    # -------------------------------------------------------------------------

    def render_drive(self, files: List[DriveFile]) -> str:
        items = []
        for f in files:
            modified = f.modified_time.strftime("%Y-%m-%d %H:%M") if f.modified_time else ""
            items.append(
                f'<li><a href="{_esc(f.web_view_link)}" target="_blank">{_esc(f.name)}</a> '
                f"<small>{_esc(modified)}</small></li>"
            )
        return "<ul>" + "".join(items) + "</ul>"

    # -------------------------------------------------------------------------
    # GITHUB
    # -------------------------------------------------------------------------

    def render_github(self, repos: List[Repository]) -> str:
        items = "".join(
            f'<li><a href="{_esc(r.html_url)}" target="_blank">{_esc(r.full_name)}</a></li>'
            for r in repos
        )
        return f"<ul>{items}</ul>"

    def render_github_connect(self) -> str:
        """Shown until the session has a GitHub personal access token."""
        return (
            '<form id="gh-auth" class="gh-connect">'
            '<input type="password" name="token" '
            'placeholder="GitHub personal access token (scopes: repo, codespaces)">'
            '<button type="submit">Connect GitHub</button>'
            "</form>"
        )

    # -------------------------------------------------------------------------
    # STATES
    # -------------------------------------------------------------------------

    def render_signed_out(self) -> str:
        return '<p class="widget-empty">Sign in with Google to load this panel.</p>'

    def render_error(self, error_message: str) -> str:
        return f'<p class="widget-error">{_esc(error_message)}</p>'
