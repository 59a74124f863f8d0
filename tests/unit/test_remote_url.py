"""Unit tests for Azure Repos remote URL parsing."""
import pytest

from pipelines_schema.exceptions import InvalidRemoteUrlError
from pipelines_schema.utils.remote_url import get_repository_details_from_remote_url, is_azure_repos_url


class TestRepositoryDetails:
    """Organization, project and repository extraction for every supported URL shape."""

    @pytest.mark.parametrize("url", [
        "https://dev.azure.com/contoso/Fabrikam/_git/pipelines",
        "https://contoso@dev.azure.com/contoso/Fabrikam/_git/pipelines",
        "https://contoso.visualstudio.com/Fabrikam/_git/pipelines",
        "https://contoso.visualstudio.com/DefaultCollection/Fabrikam/_git/pipelines",
        "git@ssh.dev.azure.com:v3/contoso/Fabrikam/pipelines",
        "contoso@vs-ssh.visualstudio.com:v3/contoso/Fabrikam/pipelines",
    ])
    def test_supported_shapes(self, url):
        details = get_repository_details_from_remote_url(url)
        assert details.organization_name == "contoso"
        assert details.project_name == "Fabrikam"
        assert details.repository_name == "pipelines"
        assert is_azure_repos_url(url)

    def test_host_is_case_insensitive(self):
        details = get_repository_details_from_remote_url("HTTPS://Dev.Azure.COM/Contoso/Fabrikam/_git/pipelines")
        assert details.organization_name == "Contoso"

    def test_segments_are_percent_decoded(self):
        details = get_repository_details_from_remote_url(
            "https://dev.azure.com/contoso/My%20Project/_git/My%20Repo")
        assert details.project_name == "My Project"
        assert details.repository_name == "My Repo"

    def test_extraction_is_deterministic(self):
        url = "https://dev.azure.com/contoso/Fabrikam/_git/pipelines"
        assert get_repository_details_from_remote_url(url) == get_repository_details_from_remote_url(url)


class TestUnrecognizedUrls:

    @pytest.mark.parametrize("url", [
        "https://github.com/contoso/pipelines.git",
        "git@github.com:contoso/pipelines.git",
        "https://dev.azure.com/contoso",
        "",
    ])
    def test_not_azure_repos(self, url):
        assert not is_azure_repos_url(url)
        with pytest.raises(InvalidRemoteUrlError):
            get_repository_details_from_remote_url(url)

    def test_none_is_not_azure_repos(self):
        assert is_azure_repos_url(None) is False
