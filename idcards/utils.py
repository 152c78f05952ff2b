from typing import Any, Optional

from fastapi import Request, UploadFile

from .services.api_client import UploadedFile


def url_for(request: Request, name: str, **params: Any) -> str:
    """
    Route URL by name; static files take a ``filename``. Unknown names give "#".
    """
    if name == "static":
        path = params.get("filename", "")
        return str(request.url_for("static", path=path))
    try:
        return str(request.url_for(name, **params))
    except Exception:
        return "#"


def is_htmx(request: Request) -> bool:
    return request.headers.get("HX-Request") == "true"


def flash(request: Request, message: str, category: str = "info") -> None:
    """
    Queue a message for the next rendered page. ``alert`` and ``error``
    messages render as a blocking dialog the user has to acknowledge.
    """
    messages = request.session.setdefault("_flashes", [])
    messages.append((category, message))
    request.session["_flashes"] = messages


def get_flashed_messages(request: Request, with_categories: bool = True) -> list[Any]:
    """
    Retrieves and clears flash messages from the session.
    """
    messages = request.session.pop("_flashes", [])
    if not with_categories:
        return [message for _, message in messages]
    return messages


async def read_upload(upload: Optional[UploadFile]) -> Optional[UploadedFile]:
    """The picked file, or None when the file input was left empty."""
    if upload is None or isinstance(upload, str) or not upload.filename:
        return None
    content = await upload.read()
    return UploadedFile(upload.filename, content, upload.content_type or "application/octet-stream")
