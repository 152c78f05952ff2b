"""
Registration drafts and the object URLs backing their photo previews.
"""
from __future__ import annotations

from typing import Optional
from uuid import uuid4

from idcards.schemas import STUDENT_FIELDS, BloodGroup
from idcards.services.api_client import UploadedFile


class PreviewImages:
    """Object-URL registry for locally picked images.

    ``create`` hands out a URL for bytes the user picked; ``revoke`` drops it.
    Callers must revoke a URL whenever the preview it backs is replaced or
    discarded.
    """

    prefix = "/register/photo/"

    def __init__(self) -> None:
        self._blobs: dict[str, tuple[bytes, str]] = {}

    def create(self, data: bytes, content_type: str) -> str:
        key = uuid4().hex
        self._blobs[key] = (data, content_type)
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[tuple[bytes, str]]:
        return self._blobs.get(key)

    def revoke(self, url: Optional[str]) -> None:
        if url and url.startswith(self.prefix):
            self._blobs.pop(url[len(self.prefix):], None)

    def clear(self) -> None:
        self._blobs.clear()

    def __len__(self) -> int:
        return len(self._blobs)


class DraftForm:
    """In-progress registration: field values plus the picked photo."""

    def __init__(self, previews: PreviewImages):
        self._previews = previews
        self.fields: dict[str, str] = {name: "" for name in STUDENT_FIELDS}
        self.image: Optional[UploadedFile] = None
        self.preview_url: Optional[str] = None

    def update(self, fields: dict[str, str]) -> None:
        for name in STUDENT_FIELDS:
            if name in fields:
                self.fields[name] = fields[name]

    def set_image(self, image: UploadedFile, content_type: str) -> None:
        if self.image is not None and (self.image.filename, self.image.content) == (image.filename, image.content):
            return
        self._previews.revoke(self.preview_url)
        self.image = image
        self.preview_url = self._previews.create(image.content, content_type)

    def missing_fields(self) -> list[str]:
        """Names of required inputs that would block the browser's submit."""
        missing = [name for name in STUDENT_FIELDS if not self.fields.get(name)]
        if "bloodGroup" not in missing and self.fields["bloodGroup"] not in BloodGroup.values():
            missing.append("bloodGroup")
        if self.image is None:
            missing.append("image")
        return missing

    def is_blank(self) -> bool:
        return not self.fields["name"] and self.preview_url is None

    def snapshot(self) -> dict[str, str]:
        return dict(self.fields)

    def reset(self) -> None:
        self._previews.revoke(self.preview_url)
        self.fields = {name: "" for name in STUDENT_FIELDS}
        self.image = None
        self.preview_url = None
