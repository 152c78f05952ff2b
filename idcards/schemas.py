from __future__ import annotations

from enum import Enum
from typing import Optional

from fastapi import Form
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BloodGroup(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# Wire names of the registration fields, in form order.
STUDENT_FIELDS = (
    "name",
    "email",
    "phone",
    "rollNumber",
    "department",
    "address",
    "bloodGroup",
    "validity",
)


class StudentRecord(BaseModel):
    """A registration as stored by the remote API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    email: str = ""
    phone: str = ""
    rollNumber: str = ""
    department: str = ""
    address: str = ""
    bloodGroup: str = ""
    validity: str = ""
    image: Optional[str] = None
    idCardImage: Optional[str] = None


class CollegeInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    address: str = ""
    logo: Optional[str] = None
    approval: Optional[str] = None
    accreditation: Optional[str] = None
    principalSign: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str

    @classmethod
    def as_form(
        cls,
        username: str = Form(...),
        password: str = Form(...),
    ):
        return cls(username=username, password=password)


class StudentFields(BaseModel):
    """Text fields of a registration form post. Empty strings mean 'not filled in'."""

    name: str = ""
    email: str = ""
    phone: str = ""
    rollNumber: str = ""
    department: str = ""
    address: str = ""
    bloodGroup: str = ""
    validity: str = ""

    @classmethod
    def as_form(
        cls,
        name: str = Form(""),
        email: str = Form(""),
        phone: str = Form(""),
        rollNumber: str = Form(""),
        department: str = Form(""),
        address: str = Form(""),
        bloodGroup: str = Form(""),
        validity: str = Form(""),
    ):
        return cls(
            name=name,
            email=email,
            phone=phone,
            rollNumber=rollNumber,
            department=department,
            address=address,
            bloodGroup=bloodGroup,
            validity=validity,
        )


class CollegeSettingsForm(BaseModel):
    name: str = ""
    address: str = ""

    @classmethod
    def as_form(
        cls,
        name: str = Form(""),
        address: str = Form(""),
    ):
        return cls(name=name, address=address)
