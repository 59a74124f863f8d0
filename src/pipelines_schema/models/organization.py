"""
Organization models.

Organizations are Azure DevOps accounts visible to an authenticated session.
The persisted choice for a workspace folder stores the organization name and
the tenant of the session that can reach it.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..services.identity.base import AuthSession


class Organization(BaseModel):
    """An organization returned by the accounts API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    account_name: str = Field(..., alias="accountName", description="Organization name")
    account_id: Optional[str] = Field(None, alias="accountId")
    account_uri: Optional[str] = Field(None, alias="accountUri")

    def matches(self, organization_name: str) -> bool:
        """Case-insensitive exact match on the organization name."""
        return self.account_name.lower() == organization_name.lower()


class OrganizationDetails(BaseModel):
    """Persisted organization choice for one workspace folder."""

    organization: str = Field(..., description="Organization name")
    tenant: str = Field(..., description="Tenant ID of the session that can access the organization")


class RepositoryDetails(BaseModel):
    """Components of an Azure Repos remote URL."""

    organization_name: str
    project_name: str
    repository_name: str


@dataclass
class OrganizationCandidate:
    """A selectable (organization, session) pair offered to the user."""
    label: str
    session: "AuthSession"
