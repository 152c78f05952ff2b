from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from idcards.cards import build_card
from idcards.config import settings
from idcards.dependencies import get_api, get_client_state, require_admin
from idcards.media import id_card_url, logo_url, photo_url, principal_sign_url
from idcards.schemas import CollegeSettingsForm
from idcards.services import admin as commands
from idcards.services.api_client import IdCardApiClient
from idcards.session import SessionContext
from idcards.state import ClientState
from idcards.templating import render_template
from idcards.utils import flash, read_upload

router = APIRouter(prefix="/admin", tags=["admin"])


def _student_cards(client: ClientState) -> list:
    college = client.college
    return [
        (
            student,
            build_card(
                student,
                college,
                printed_card_url=id_card_url(student),
                photo_url=photo_url(student),
                logo_url=logo_url(college),
                principal_sign_url=principal_sign_url(college),
            ),
        )
        for student in client.students
    ]


def render_dashboard(request: Request, client: ClientState, **extra):
    """The dashboard from whatever the client last fetched."""
    context = {
        "request": request,
        "college": client.college,
        "students": client.students,
        "student_cards": _student_cards(client),
        "upload_target": client.upload_target,
        "settings_open": False,
        "settings_form": None,
        "settings_message": None,
        "settings_error": None,
        "close_after": None,
        "confirm_delete": None,
        "load_error": None,
        "current_logo_url": logo_url(client.college),
        **extra,
    }
    return render_template(request, "admin/dashboard.html", context)


async def show_dashboard(
    request: Request,
    api: IdCardApiClient,
    session: SessionContext,
    client: ClientState,
):
    """A page load of the dashboard: refetch the list and the college info."""
    load_error = await commands.load_dashboard(api, session, client)
    return render_dashboard(request, client, load_error=load_error)


@router.get("", response_class=HTMLResponse, name="admin.dashboard")
def dashboard(
    request: Request,
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    """Closes any open dialog without refetching."""
    return render_dashboard(request, client)


# -------- ID-card scans --------

@router.get("/students/{student_id}/idcard", response_class=HTMLResponse, name="admin.idcard_form")
def open_upload(
    request: Request,
    student_id: str,
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    client.upload_target = student_id
    return render_dashboard(request, client)


@router.post("/idcard/cancel", name="admin.idcard_cancel")
def cancel_upload(
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    client.upload_target = None
    return RedirectResponse("/admin", status_code=303)


@router.post("/students/{student_id}/idcard", response_class=HTMLResponse, name="admin.idcard_upload")
async def upload_id_card(
    request: Request,
    student_id: str,
    idcard: Optional[UploadFile] = File(None),
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    """
    Attach a printed-card scan. Nothing is sent until a file has been picked.
    """
    file = await read_upload(idcard)
    if file is None:
        client.upload_target = student_id
        return render_dashboard(request, client)

    outcome = await commands.upload_id_card(api, session, client, student_id, file)
    if outcome:
        flash(request, outcome.message, "alert")
        return RedirectResponse("/", status_code=303)
    flash(request, outcome.message, "error")
    return render_dashboard(request, client)


# -------- deletion --------

@router.post("/students/{student_id}/delete", response_class=HTMLResponse, name="admin.delete_student")
async def delete_student(
    request: Request,
    student_id: str,
    confirmed: str = Form(""),
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    """
    First post asks "are you sure?"; only a post with ``confirmed=yes`` deletes.
    """
    if confirmed != "yes":
        student = client.cached_student(student_id)
        return render_dashboard(
            request,
            client,
            confirm_delete={"id": student_id, "name": student.name if student else ""},
        )

    outcome = await commands.delete_student(api, session, student_id)
    if outcome:
        flash(request, outcome.message, "alert")
        return RedirectResponse("/", status_code=303)
    flash(request, outcome.message, "error")
    return render_dashboard(request, client)


# -------- college settings --------

@router.get("/settings", response_class=HTMLResponse, name="admin.settings")
def college_settings(
    request: Request,
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    college = client.college
    form = CollegeSettingsForm(
        name=college.name if college else "",
        address=college.address if college else "",
    )
    return render_dashboard(request, client, settings_open=True, settings_form=form)


@router.post("/settings", response_class=HTMLResponse, name="admin.settings_update")
async def update_college_settings(
    request: Request,
    form: CollegeSettingsForm = Depends(CollegeSettingsForm.as_form),
    logo: Optional[UploadFile] = File(None),
    api: IdCardApiClient = Depends(get_api),
    session: SessionContext = Depends(require_admin),
    client: ClientState = Depends(get_client_state),
):
    outcome = await commands.update_college(api, session, client, form, await read_upload(logo))
    if outcome:
        return render_dashboard(
            request,
            client,
            settings_open=True,
            settings_form=form,
            settings_message=outcome.message,
            close_after=settings.SETTINGS_CLOSE_DELAY,
        )
    return render_dashboard(
        request,
        client,
        settings_open=True,
        settings_form=form,
        settings_error=outcome.message,
    )
