from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from idcards.dependencies import get_api, get_client_state, get_session_context
from idcards.routers.public import render_public
from idcards.schemas import LoginRequest
from idcards.services import admin as commands
from idcards.services.api_client import IdCardApiClient
from idcards.session import SessionContext
from idcards.state import ClientState

router = APIRouter(tags=["auth"])


@router.get("/admin/login", response_class=HTMLResponse, name="auth.login")
async def login_form(
    request: Request,
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(get_session_context),
    client: ClientState = Depends(get_client_state),
):
    """The public page with the login dialog open over it."""
    if session.is_admin:
        return RedirectResponse("/", status_code=303)
    return await render_public(request, api, client, show_login=True)


@router.post("/admin/login", response_class=HTMLResponse, name="auth.login_post")
async def login_action(
    request: Request,
    credentials: LoginRequest = Depends(LoginRequest.as_form),
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(get_session_context),
    client: ClientState = Depends(get_client_state),
):
    outcome = await commands.login(api, session, credentials)
    if outcome:
        return RedirectResponse("/", status_code=303)
    return await render_public(
        request,
        api,
        client,
        show_login=True,
        login_error=outcome.message,
        login_username=credentials.username,
    )


@router.post("/logout", name="auth.logout")
def logout(session: SessionContext = Depends(get_session_context)):
    """Forget the token and the fetched students; back to the public form."""
    session.logout()
    return RedirectResponse("/", status_code=303)
