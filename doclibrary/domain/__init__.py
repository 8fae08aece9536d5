"""Domain layer: value objects, enums, access policy, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from doclibrary.domain.access_policy import allowed_access_levels, has_access
from doclibrary.domain.enums import (
    AccessLevel,
    DocumentStatus,
    SubscriptionTier,
    UserRole,
)
from doclibrary.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DocLibraryException,
    RemoteException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Policy
    "allowed_access_levels",
    "has_access",
    # Enums
    "AccessLevel",
    "DocumentStatus",
    "SubscriptionTier",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "DocLibraryException",
    "RemoteException",
    "ResourceNotFoundException",
    "ValidationException",
]
