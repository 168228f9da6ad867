# File: app/core/request_context.py

"""Per-request identifiers scoped to the running task via contextvars."""

import contextvars
from typing import Optional

# Correlation id for the inbound HTTP request
current_request_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "current_request_id", default=None
)
