"""Form session middleware using ContextVar.

Extracts the current form session from the X-Form-Session request header.
The session ID is stored in a ContextVar so that route handlers can call
get_current_session() without explicit parameter passing.
"""

from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

SESSION_HEADER = "X-Form-Session"

# ---------------------------------------------------------------------------
# Context variable: task-safe session state
# ---------------------------------------------------------------------------

_current_session: ContextVar[str] = ContextVar("current_form_session", default="default")


def get_current_session() -> str:
    """Return the form session ID for the current request."""
    return _current_session.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class FormSessionMiddleware(BaseHTTPMiddleware):
    """Bind the request to a form session.

    Uses the X-Form-Session header, falling back to "default".
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        session_id = request.headers.get(SESSION_HEADER, "").strip()
        token = _current_session.set(session_id or "default")
        try:
            response = await call_next(request)
            return response
        finally:
            _current_session.reset(token)
