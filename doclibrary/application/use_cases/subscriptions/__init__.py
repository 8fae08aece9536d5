"""Subscription use cases."""

from doclibrary.application.use_cases.subscriptions.subscription_admin import (
    SubscriptionAdminService,
)

__all__ = ["SubscriptionAdminService"]
