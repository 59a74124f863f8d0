"""Interactive disambiguator: asks the user which organization a workspace belongs to."""
from logging import Logger
from typing import Optional

from scitrera_app_framework import Plugin, Variables, get_logger

from ... import messages
from ...models.organization import OrganizationCandidate, OrganizationDetails
from ...models.workspace import WorkspaceFolder
from ..identity.base import IdentityProvider
from ..notifier import AssociationNotifier
from ..prompt.base import PromptService
from ..session_matcher import SessionMatcher
from ..workspace_state.base import WorkspaceStateService
from .._constants import (
    EXT_DISAMBIGUATOR,
    EXT_ASSOCIATION_NOTIFIER,
    EXT_IDENTITY_PROVIDER,
    EXT_PROMPT_SERVICE,
    EXT_SESSION_MATCHER,
    EXT_WORKSPACE_STATE_SERVICE,
)


class Disambiguator:
    """
    Prompts that run detached from resolution.

    Both prompts end by firing the association notifier so the workspace gets
    re-resolved; declining or cancelling at any step does nothing.
    """

    def __init__(
            self,
            identity_provider: IdentityProvider,
            session_matcher: SessionMatcher,
            workspace_state: WorkspaceStateService,
            prompt: PromptService,
            notifier: AssociationNotifier,
            v: Variables = None,
            logger: Logger = None,
    ):
        self._identity_provider = identity_provider
        self._session_matcher = session_matcher
        self._workspace_state = workspace_state
        self._prompt = prompt
        self._notifier = notifier
        self.logger = logger or get_logger(v, name=self.__class__.__name__)

    async def prompt_for_organization(self, workspace: WorkspaceFolder) -> None:
        """Ask for the workspace's organization, remember it and request re-resolution."""
        action = await self._prompt.show_information_message(
            messages.SELECT_ORGANIZATION_FOR_ENHANCED_INTELLISENSE.format(workspace=workspace.name),
            messages.SELECT_ORGANIZATION_LABEL,
        )
        if action != messages.SELECT_ORGANIZATION_LABEL:
            self.logger.debug("Organization selection declined for %s", workspace.name)
            return

        # candidates are produced while the picker is already showing
        candidates = self._session_matcher.list_candidates(self._identity_provider.sessions)
        selected: Optional[OrganizationCandidate] = await self._prompt.show_quick_pick(
            candidates,
            messages.SELECT_ORGANIZATION_PLACEHOLDER.format(workspace=workspace.name),
        )
        if selected is None:
            self.logger.debug("Organization selection cancelled for %s", workspace.name)
            return

        details = OrganizationDetails(organization=selected.label, tenant=selected.session.tenant_id)
        await self._workspace_state.save_organization_details(workspace.name, details)
        self.logger.info("Associated %s with organization %s", workspace.name, details.organization)
        self._notifier.fire(workspace)

    async def prompt_for_login(self, workspace: WorkspaceFolder) -> None:
        """Offer to sign in; after a successful sign-in request re-resolution."""
        action = await self._prompt.show_information_message(
            messages.SIGN_IN_FOR_ENHANCED_INTELLISENSE,
            messages.SIGN_IN_LABEL,
        )
        if action != messages.SIGN_IN_LABEL:
            return

        signed_in = await self._prompt.with_progress(messages.WAIT_FOR_AZURE_SIGN_IN, self._identity_provider.login)
        if signed_in:
            self._notifier.fire(workspace)
        else:
            self.logger.info("Sign in did not produce any session")


class DisambiguatorPlugin(Plugin):
    """Plugin to register the interactive disambiguator."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_DISAMBIGUATOR

    def get_dependencies(self, v: Variables):
        return (EXT_IDENTITY_PROVIDER, EXT_SESSION_MATCHER, EXT_WORKSPACE_STATE_SERVICE,
                EXT_PROMPT_SERVICE, EXT_ASSOCIATION_NOTIFIER,)

    def initialize(self, v: Variables, logger: Logger) -> Optional[Disambiguator]:
        return Disambiguator(
            identity_provider=self.get_extension(EXT_IDENTITY_PROVIDER, v),
            session_matcher=self.get_extension(EXT_SESSION_MATCHER, v),
            workspace_state=self.get_extension(EXT_WORKSPACE_STATE_SERVICE, v),
            prompt=self.get_extension(EXT_PROMPT_SERVICE, v),
            notifier=self.get_extension(EXT_ASSOCIATION_NOTIFIER, v),
            v=v,
            logger=logger,
        )
