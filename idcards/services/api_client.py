"""
Client for the remote ID-card API.

Every call is a single request: no retries, no backoff. Non-success
statuses raise ApiError carrying the body's ``message`` when the server sent
one; transport failures raise ApiUnavailable.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from idcards.errors import ApiError, ApiUnavailable
from idcards.schemas import CollegeInfo, LoginRequest, StudentRecord

log = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response from server"


class UploadedFile:
    """A file picked by the user, held in memory until an explicit action sends it."""

    def __init__(self, filename: str, content: bytes, content_type: str = "application/octet-stream"):
        self.filename = filename
        self.content = content
        self.content_type = content_type

    def as_part(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)

    def __repr__(self) -> str:
        return f"UploadedFile({self.filename!r}, {len(self.content)} bytes)"


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


_student_list = TypeAdapter(list[StudentRecord]).validate_python


class IdCardApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------- plumbing --------

    @staticmethod
    def _auth(token: Optional[str]) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.exception("%s %s failed", method, path)
            raise ApiUnavailable(str(e)) from e
        if response.is_success:
            log.debug("%s %s -> %s", method, path, response.status_code)
            return response
        message = _error_message(response)
        log.warning("%s %s -> %s (%s)", method, path, response.status_code, message or "no message")
        raise ApiError(message, response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(UNEXPECTED_RESPONSE, response.status_code) from e

    @staticmethod
    def _parse(response: httpx.Response, parse):
        try:
            return parse(IdCardApiClient._json(response))
        except ValidationError as e:
            log.warning("%s %s returned malformed data: %s", response.request.method, response.request.url.path, e)
            raise ApiError(UNEXPECTED_RESPONSE, response.status_code) from e

    # -------- students --------

    async def list_students(self, token: Optional[str]) -> list[StudentRecord]:
        response = await self._request("GET", "/students", headers=self._auth(token))
        return self._parse(response, _student_list)

    async def create_student(self, fields: dict[str, str], image: UploadedFile) -> None:
        await self._request(
            "POST",
            "/students",
            data=fields,
            files={"image": image.as_part()},
        )
        log.info("Registered student %s", fields.get("rollNumber"))

    async def upload_id_card(self, token: Optional[str], student_id: str, file: UploadedFile) -> None:
        await self._request(
            "POST",
            f"/students/{student_id}/idcard",
            headers=self._auth(token),
            files={"idcard": file.as_part()},
        )
        log.info("Uploaded ID card for student %s", student_id)

    async def delete_student(self, token: Optional[str], student_id: str) -> None:
        await self._request("DELETE", f"/students/{student_id}", headers=self._auth(token))
        log.info("Deleted student %s", student_id)

    # -------- college --------

    async def get_college_info(self) -> Optional[CollegeInfo]:
        response = await self._request("GET", "/college-info")
        return self._parse(response, lambda body: CollegeInfo.model_validate(body) if body else None)

    async def update_college_info(
        self,
        token: Optional[str],
        name: str,
        address: str,
        logo: Optional[UploadedFile] = None,
    ) -> None:
        # Text parts go in as filename-less parts so the body is multipart with or without a logo.
        files: dict[str, Any] = {"name": (None, name), "address": (None, address)}
        if logo:
            files["logo"] = logo.as_part()
        await self._request("POST", "/college-info", headers=self._auth(token), files=files)
        log.info("Updated college info")

    # -------- auth --------

    async def login(self, credentials: LoginRequest) -> str:
        response = await self._request("POST", "/admin/login", json=credentials.model_dump())
        body = self._json(response)
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise ApiError("Login response did not include a token", response.status_code)
        return token
