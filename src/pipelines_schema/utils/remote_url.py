"""Parsing of Azure Repos remote URLs."""
import re
from typing import Optional
from urllib.parse import unquote

from ..exceptions import InvalidRemoteUrlError
from ..models.organization import RepositoryDetails

_AZURE_REPOS_PATTERNS = (
    # https://dev.azure.com/{org}/{project}/_git/{repo}, optionally https://{user}@dev.azure.com/...
    re.compile(
        r'^https://(?:[^@/]+@)?dev\.azure\.com/(?P<org>[^/]+)/(?P<project>[^/]+)/_git/(?P<repo>[^/?#]+)/?$',
        re.IGNORECASE,
    ),
    # https://{org}.visualstudio.com/[DefaultCollection/]{project}/_git/{repo}
    re.compile(
        r'^https://(?:[^@/]+@)?(?P<org>[^./@]+)\.visualstudio\.com/(?:DefaultCollection/)?'
        r'(?P<project>[^/]+)/_git/(?P<repo>[^/?#]+)/?$',
        re.IGNORECASE,
    ),
    # git@ssh.dev.azure.com:v3/{org}/{project}/{repo}
    re.compile(
        r'^(?:ssh://)?git@ssh\.dev\.azure\.com[:/]v3/(?P<org>[^/]+)/(?P<project>[^/]+)/(?P<repo>[^/?#]+)/?$',
        re.IGNORECASE,
    ),
    # {org}@vs-ssh.visualstudio.com:v3/{org}/{project}/{repo}
    re.compile(
        r'^(?:ssh://)?[^@/]+@vs-ssh\.visualstudio\.com[:/](?:22/)?v3/(?P<org>[^/]+)/(?P<project>[^/]+)/(?P<repo>[^/?#]+)/?$',
        re.IGNORECASE,
    ),
)


def _match(remote_url: str) -> Optional[re.Match]:
    url = remote_url.strip()
    for pattern in _AZURE_REPOS_PATTERNS:
        match = pattern.match(url)
        if match:
            return match
    return None


def is_azure_repos_url(remote_url: Optional[str]) -> bool:
    """Whether ``remote_url`` points at an Azure Repos repository."""
    return bool(remote_url) and _match(remote_url) is not None


def get_repository_details_from_remote_url(remote_url: str) -> RepositoryDetails:
    """
    Split an Azure Repos remote URL into organization, project and repository.

    Raises:
        InvalidRemoteUrlError: the URL is not a recognized Azure Repos URL
    """
    match = _match(remote_url or '')
    if match is None:
        raise InvalidRemoteUrlError(remote_url)
    return RepositoryDetails(
        organization_name=unquote(match.group('org')),
        project_name=unquote(match.group('project')),
        repository_name=unquote(match.group('repo')),
    )
