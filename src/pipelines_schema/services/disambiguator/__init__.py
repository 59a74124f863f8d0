"""Interactive disambiguator package."""
from .default import Disambiguator
from .._constants import EXT_DISAMBIGUATOR

from scitrera_app_framework import Variables, get_extension


def get_disambiguator(v: Variables = None) -> Disambiguator:
    """Get the interactive disambiguator instance."""
    return get_extension(EXT_DISAMBIGUATOR, v)


__all__ = (
    'Disambiguator',
    'get_disambiguator',
    'EXT_DISAMBIGUATOR',
)
