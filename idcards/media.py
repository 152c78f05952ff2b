"""URLs of files the remote API has stored (student photos, ID-card scans, logos)."""
from __future__ import annotations

from typing import Optional

from idcards.config import settings
from idcards.schemas import CollegeInfo, StudentRecord


def media_url(folder: str, ref: Optional[str], base: Optional[str] = None) -> Optional[str]:
    if not ref:
        return None
    if ref.startswith(("http://", "https://", "/")):
        return ref
    return f"{base or settings.media_url}/uploads/{folder}/{ref}"


def photo_url(student: StudentRecord) -> Optional[str]:
    return media_url("students", student.image)


def id_card_url(student: StudentRecord) -> Optional[str]:
    return media_url("idcards", student.idCardImage)


def logo_url(college: Optional[CollegeInfo]) -> Optional[str]:
    return media_url("logos", college.logo) if college else None


def principal_sign_url(college: Optional[CollegeInfo]) -> Optional[str]:
    return media_url("logos", college.principalSign) if college else None
