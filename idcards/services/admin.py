"""
Data access for the views: page loads and admin commands.

Views hand these functions the session and client state; nothing in here
renders anything. Each command is one remote call and reports an Outcome
for the view to acknowledge. Refetching after a successful mutation is the
view's job (it redirects to the dashboard, which loads fresh data).
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from idcards.errors import ApiError, user_message
from idcards.schemas import CollegeSettingsForm, LoginRequest
from idcards.services.api_client import IdCardApiClient, UploadedFile
from idcards.session import SessionContext
from idcards.state import ClientState

log = logging.getLogger(__name__)

UPLOAD_OK = "ID Card uploaded successfully"
UPLOAD_FAILED = "Error uploading ID card"
DELETE_OK = "Student deleted successfully"
DELETE_FAILED = "Error deleting student"
SETTINGS_OK = "College information updated successfully!"
SETTINGS_FAILED = "Update failed"
LOGIN_FAILED = "Login failed"
LIST_FAILED = "Could not load students"


class Outcome:
    def __init__(self, ok: bool, message: str):
        self.ok = ok
        self.message = message

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        return f"Outcome(ok={self.ok}, message={self.message!r})"


# -------- loads --------

async def fetch_college(api: IdCardApiClient, client: ClientState) -> None:
    try:
        client.college = await api.get_college_info()
    except ApiError as e:
        log.warning("Error fetching college info: %s", e)


async def fetch_students(api: IdCardApiClient, session: SessionContext, client: ClientState) -> Optional[str]:
    """Replace the cached list with the server's; on failure keep the old one and return an error."""
    try:
        client.students = await api.list_students(session.token)
    except ApiError as e:
        log.warning("Error fetching students: %s", e)
        return user_message(e, LIST_FAILED)
    return None


async def load_dashboard(api: IdCardApiClient, session: SessionContext, client: ClientState) -> Optional[str]:
    """Fetch the student list and the college info side by side."""
    list_error, _ = await asyncio.gather(
        fetch_students(api, session, client),
        fetch_college(api, client),
    )
    return list_error


# -------- commands --------

async def login(api: IdCardApiClient, session: SessionContext, credentials: LoginRequest) -> Outcome:
    try:
        token = await api.login(credentials)
    except ApiError as e:
        return Outcome(False, user_message(e, LOGIN_FAILED))
    session.login(token)
    log.info("Admin %s logged in", credentials.username)
    return Outcome(True, "")


async def upload_id_card(
    api: IdCardApiClient,
    session: SessionContext,
    client: ClientState,
    student_id: str,
    file: UploadedFile,
) -> Outcome:
    try:
        await api.upload_id_card(session.token, student_id, file)
    except ApiError as e:
        return Outcome(False, user_message(e, UPLOAD_FAILED))
    client.upload_target = None
    return Outcome(True, UPLOAD_OK)


async def delete_student(api: IdCardApiClient, session: SessionContext, student_id: str) -> Outcome:
    try:
        await api.delete_student(session.token, student_id)
    except ApiError as e:
        return Outcome(False, user_message(e, DELETE_FAILED))
    return Outcome(True, DELETE_OK)


async def update_college(
    api: IdCardApiClient,
    session: SessionContext,
    client: ClientState,
    form: CollegeSettingsForm,
    logo: Optional[UploadedFile] = None,
) -> Outcome:
    try:
        await api.update_college_info(session.token, form.name, form.address, logo)
    except ApiError as e:
        return Outcome(False, user_message(e, SETTINGS_FAILED))
    await fetch_college(api, client)
    return Outcome(True, SETTINGS_OK)
