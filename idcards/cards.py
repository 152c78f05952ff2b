"""
ID-card layout.

``build_card`` turns a student-like record and the college branding into
everything the card template needs. It is pure: no state, no network.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel

from idcards.schemas import CollegeInfo

PLACEHOLDER = "-"
DEFAULT_COLLEGE_NAME = "INSTITUTE OF TECHNOLOGY"

PHOTO_PRINTED = "printed"
PHOTO_STUDENT = "photo"
PHOTO_NONE = "placeholder"


class CardLine(BaseModel):
    label: str
    value: str


class IdCard(BaseModel):
    college_name: str
    college_address: Optional[str] = None
    approval: Optional[str] = None
    accreditation: Optional[str] = None
    logo_url: Optional[str] = None
    principal_sign_url: Optional[str] = None

    photo_kind: str
    photo_src: Optional[str] = None

    name: str
    details: list[CardLine]
    blood_group: str
    contact: str
    address: str

    @property
    def has_contact(self) -> bool:
        return self.contact != PLACEHOLDER


def _value(student: Any, field: str) -> Optional[str]:
    if student is None:
        return None
    if isinstance(student, Mapping):
        return student.get(field)
    return getattr(student, field, None)


def _text(student: Any, field: str) -> str:
    return _value(student, field) or PLACEHOLDER


def build_card(
    student: Any,
    college: Optional[CollegeInfo],
    printed_card_url: Optional[str] = None,
    photo_url: Optional[str] = None,
    logo_url: Optional[str] = None,
    principal_sign_url: Optional[str] = None,
) -> IdCard:
    """Lay out one card.

    ``student`` is a mapping or object with the registration field names.
    ``photo_url`` defaults to the student's own ``image`` value. The photo
    shown is the printed-card scan when given, else the student photo, else
    a placeholder.
    """
    photo_url = photo_url or _value(student, "image")
    if printed_card_url:
        photo_kind, photo_src = PHOTO_PRINTED, printed_card_url
    elif photo_url:
        photo_kind, photo_src = PHOTO_STUDENT, photo_url
    else:
        photo_kind, photo_src = PHOTO_NONE, None

    college = college or CollegeInfo()
    return IdCard(
        college_name=college.name or DEFAULT_COLLEGE_NAME,
        college_address=college.address or None,
        approval=college.approval,
        accreditation=college.accreditation,
        logo_url=logo_url,
        principal_sign_url=principal_sign_url,
        photo_kind=photo_kind,
        photo_src=photo_src,
        name=_text(student, "name"),
        details=[
            CardLine(label="Branch", value=_text(student, "department")),
            CardLine(label="Validity", value=_text(student, "validity")),
            CardLine(label="USN No", value=_text(student, "rollNumber")),
        ],
        blood_group=_text(student, "bloodGroup"),
        contact=_text(student, "phone"),
        address=_text(student, "address"),
    )
