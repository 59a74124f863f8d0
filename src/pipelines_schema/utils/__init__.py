"""Utility helpers for pipelines-schema."""
from .remote_url import get_repository_details_from_remote_url, is_azure_repos_url

__all__ = [
    "get_repository_details_from_remote_url",
    "is_azure_repos_url",
]
