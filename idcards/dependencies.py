from fastapi import Depends, HTTPException, Request

from .services.api_client import IdCardApiClient
from .session import SessionContext
from .state import ClientState


def get_api(request: Request) -> IdCardApiClient:
    """The shared remote API client."""
    return request.app.state.api


def get_client_state(request: Request) -> ClientState:
    """In-memory state of the visitor making this request."""
    return request.app.state.clients.for_session(request.session)


def get_session_context(
    request: Request,
    client: ClientState = Depends(get_client_state),
) -> SessionContext:
    return SessionContext(request.session, client)


def require_admin(session: SessionContext = Depends(get_session_context)) -> SessionContext:
    """Admin-only pages send everyone else back to the public form."""
    if not session.is_admin:
        raise HTTPException(status_code=303, headers={"Location": "/"})
    return session
