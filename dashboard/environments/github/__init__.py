"""
GitHub Module - repositories for the GitHub panel.
"""

from dashboard.environments.github.client import GitHubClient
from dashboard.environments.github.schemas import Repository

__all__ = ["GitHubClient", "Repository"]
