from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from idcards.dependencies import get_api, get_client_state, get_session_context
from idcards.routers.admin import show_dashboard
from idcards.routers.public import render_public
from idcards.services.api_client import IdCardApiClient
from idcards.session import SessionContext
from idcards.state import ClientState

router = APIRouter(tags=["main"])


@router.get("/", response_class=HTMLResponse, name="main.index")
async def index(
    request: Request,
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(get_session_context),
    client: ClientState = Depends(get_client_state),
):
    """
    Admins get the dashboard, everyone else the registration form. Loading
    the form starts a new draft.
    """
    if session.is_admin:
        return await show_dashboard(request, api, session, client)
    client.new_registration()
    return await render_public(request, api, client)
