from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, Response

from idcards.cards import build_card
from idcards.dependencies import get_api, get_client_state
from idcards.media import logo_url, principal_sign_url
from idcards.registration import RegistrationFlow
from idcards.schemas import StudentFields
from idcards.services.admin import fetch_college
from idcards.services.api_client import IdCardApiClient
from idcards.services.images import preview_content_type
from idcards.state import ClientState
from idcards.templating import render_template
from idcards.utils import is_htmx, read_upload

router = APIRouter(tags=["registration"])


def public_context(request: Request, client: ClientState, **extra) -> dict:
    flow: RegistrationFlow = client.registration
    draft = flow.draft
    card = build_card(
        draft.fields,
        client.college,
        photo_url=draft.preview_url,
        logo_url=logo_url(client.college),
        principal_sign_url=principal_sign_url(client.college),
    )
    return {
        "request": request,
        "college": client.college,
        "flow": flow,
        "draft": draft,
        "card": card,
        "show_preview": not draft.is_blank(),
        "missing": [],
        **extra,
    }


async def render_public(request: Request, api: IdCardApiClient, client: ClientState, **extra):
    """The public page, with a freshly fetched college header."""
    await fetch_college(api, client)
    return render_template(request, "public/index.html", public_context(request, client, **extra))


def render_registration(request: Request, client: ClientState, **extra):
    """Just the form region for htmx; the whole page otherwise."""
    template = "public/_registration.html" if is_htmx(request) else "public/index.html"
    return render_template(request, template, public_context(request, client, **extra))


async def _apply(client: ClientState, fields: StudentFields, image: Optional[UploadFile]) -> None:
    picked = await read_upload(image)
    content_type = preview_content_type(picked.content, picked.content_type) if picked else None
    client.registration.update(fields.model_dump(), picked, content_type)


@router.post("/register/preview", response_class=HTMLResponse, name="register.preview")
async def preview(
    request: Request,
    fields: StudentFields = Depends(StudentFields.as_form),
    image: Optional[UploadFile] = File(None),
    client: ClientState = Depends(get_client_state),
):
    """Re-render the live card after any field change."""
    await _apply(client, fields, image)
    return render_template(request, "public/_preview.html", public_context(request, client))


@router.get("/register/photo/{key}", name="register.photo")
def photo(key: str, client: ClientState = Depends(get_client_state)):
    blob = client.previews.get(key)
    if blob is None:
        raise HTTPException(status_code=404, detail="Preview not found")
    data, content_type = blob
    return Response(content=data, media_type=content_type)


@router.post("/register", response_class=HTMLResponse, name="register.submit")
async def submit(
    request: Request,
    fields: StudentFields = Depends(StudentFields.as_form),
    image: Optional[UploadFile] = File(None),
    client: ClientState = Depends(get_client_state),
):
    """Open the confirmation step once every required input is filled in."""
    await _apply(client, fields, image)
    missing = client.registration.submit()
    return render_registration(request, client, missing=missing)


@router.post("/register/cancel", response_class=HTMLResponse, name="register.cancel")
async def cancel(request: Request, client: ClientState = Depends(get_client_state)):
    client.registration.cancel()
    return render_registration(request, client)


@router.post("/register/confirm", response_class=HTMLResponse, name="register.confirm")
async def confirm(
    request: Request,
    api: IdCardApiClient = Depends(get_api),
    client: ClientState = Depends(get_client_state),
):
    await client.registration.confirm(api)
    return render_registration(request, client)
