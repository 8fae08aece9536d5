"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from doclibrary.infrastructure or doclibrary.api.
"""

from doclibrary.application.interfaces.repositories import (
    IAuthProvider,
    IDocumentRepository,
    IDocumentStorage,
    IPaymentRepository,
    ISearchLogRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from doclibrary.application.interfaces.services import IPaymentGateway

__all__ = [
    "IAuthProvider",
    "IDocumentRepository",
    "IDocumentStorage",
    "IPaymentGateway",
    "IPaymentRepository",
    "ISearchLogRepository",
    "ISubscriptionRepository",
    "IUserRepository",
]
