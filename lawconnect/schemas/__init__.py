"""Public schema exports."""

from .auth import (
    AuthorizationUrlResponse,
    OAuthExchangeRequest,
    OAuthExchangeResponse,
    OAuthRefreshRequest,
    OAuthRefreshResponse,
)
from .email import (
    EmailDispatchRequest,
    EmailDispatchResponse,
    ReminderCancelResponse,
)

__all__ = [
    "AuthorizationUrlResponse",
    "EmailDispatchRequest",
    "EmailDispatchResponse",
    "OAuthExchangeRequest",
    "OAuthExchangeResponse",
    "OAuthRefreshRequest",
    "OAuthRefreshResponse",
    "ReminderCancelResponse",
]
