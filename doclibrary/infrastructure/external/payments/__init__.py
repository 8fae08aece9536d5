"""Payment backend client."""

from doclibrary.infrastructure.external.payments.http_gateway import HTTPPaymentGateway

__all__ = ["HTTPPaymentGateway"]
