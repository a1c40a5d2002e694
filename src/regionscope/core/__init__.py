"""Core module exports."""

from regionscope.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    PatternError,
    RegionScopeError,
)
from regionscope.core.events import EventEmitter, Subscription, SubscriptionGroup
from regionscope.core.logging import (
    bind_document_id,
    clear_document_id,
    configure_logging,
    get_document_id,
    get_logger,
)
from regionscope.core.scheduling import Debouncer

__all__ = [
    # Errors
    "RegionScopeError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "PatternError",
    # Events
    "EventEmitter",
    "Subscription",
    "SubscriptionGroup",
    # Logging
    "bind_document_id",
    "clear_document_id",
    "configure_logging",
    "get_document_id",
    "get_logger",
    # Scheduling
    "Debouncer",
]
