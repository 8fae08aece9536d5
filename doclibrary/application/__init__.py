"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, storage, payment gateway).
"""

from doclibrary.application.interfaces import (
    IAuthProvider,
    IDocumentRepository,
    IDocumentStorage,
    IPaymentGateway,
    IPaymentRepository,
    ISearchLogRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from doclibrary.application.services import AuthorizationService, TwoStepWrite

__all__ = [
    "AuthorizationService",
    "IAuthProvider",
    "IDocumentRepository",
    "IDocumentStorage",
    "IPaymentGateway",
    "IPaymentRepository",
    "ISearchLogRepository",
    "ISubscriptionRepository",
    "IUserRepository",
    "TwoStepWrite",
]
