"""Prompt service package."""
from .base import PromptService, PromptServicePluginBase, EXT_PROMPT_SERVICE

from scitrera_app_framework import Variables, get_extension


def get_prompt_service(v: Variables = None) -> PromptService:
    """Get the prompt service instance."""
    return get_extension(EXT_PROMPT_SERVICE, v)


__all__ = (
    'PromptService',
    'PromptServicePluginBase',
    'get_prompt_service',
    'EXT_PROMPT_SERVICE',
)
