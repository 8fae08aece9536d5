"""Application services: role checks and two-step writes."""

from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.application.services.two_step_write import TwoStepWrite, WriteState

__all__ = ["AuthorizationService", "TwoStepWrite", "WriteState"]
