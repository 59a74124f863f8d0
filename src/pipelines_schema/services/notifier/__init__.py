"""Association notifier package."""
from .default import AssociationListener, AssociationNotifier
from .._constants import EXT_ASSOCIATION_NOTIFIER

from scitrera_app_framework import Variables, get_extension


def get_association_notifier(v: Variables = None) -> AssociationNotifier:
    """Get the association notifier instance."""
    return get_extension(EXT_ASSOCIATION_NOTIFIER, v)


__all__ = (
    'AssociationListener',
    'AssociationNotifier',
    'get_association_notifier',
    'EXT_ASSOCIATION_NOTIFIER',
)
