"""Request ID propagation for log correlation.

The ID lives in a ContextVar so it follows the request through async code
and into the threadpool used for sync endpoints.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def bind_request_id(incoming: Optional[str] = None) -> str:
    """Bind the caller's request ID (or a fresh UUID4) to the current context.

    Args:
        incoming: Value of the X-Request-ID request header, if any

    Returns:
        str: The bound request ID
    """
    request_id = (incoming or "").strip() or str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id
