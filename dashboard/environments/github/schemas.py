"""
GitHub Schemas - repository summaries.
"""

from pydantic import BaseModel


class Repository(BaseModel):
    full_name: str
    html_url: str
