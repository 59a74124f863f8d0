"""Association publisher package."""
from .default import AssociationPublisher
from .._constants import EXT_ASSOCIATION_PUBLISHER

from scitrera_app_framework import Variables, get_extension


def get_association_publisher(v: Variables = None) -> AssociationPublisher:
    """Get the association publisher instance."""
    return get_extension(EXT_ASSOCIATION_PUBLISHER, v)


__all__ = (
    'AssociationPublisher',
    'get_association_publisher',
    'EXT_ASSOCIATION_PUBLISHER',
)
