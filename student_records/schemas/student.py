from datetime import datetime, timezone
from typing import Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from student_records.models.student import Gender, StudentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StudentBase(BaseModel):
    roll_number: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    gender: Gender = Gender.OTHER
    date_of_birth: Optional[datetime] = None
    class_name: str = Field(min_length=1)
    section: str = "A"
    email: EmailStr
    phone: str = Field(min_length=1)
    guardian_name: str = Field(min_length=1)
    guardian_phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    enrollment_date: datetime = Field(default_factory=_utcnow)
    status: StudentStatus = StudentStatus.ACTIVE

    model_config = ConfigDict(
        alias_generator=to_camel,
        use_enum_values=True,
        validate_default=True,
    )


class StudentCreate(StudentBase):
    """Validated write payload; unknown keys are dropped."""

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class Student(BaseModel):
    """
    A stored record as returned to clients.

    Fields are read back as stored, with no defaults filled in, so documents
    written before the current rules (or by other tools) still list and
    show the same status the summary counts them under.
    """
    id: str = Field(alias="_id")
    roll_number: Optional[str] = None
    full_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    class_name: Optional[str] = None
    section: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    address: Optional[str] = None
    enrollment_date: Optional[datetime] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @field_validator(
        "roll_number", "full_name", "class_name", "section", "email",
        "phone", "guardian_name", "guardian_phone", "address",
        mode="before",
    )
    @classmethod
    def stringify_numbers(cls, v):
        # older rows hold numeric roll numbers, classes and phones
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_document(cls, doc: dict) -> "Student":
        return cls.model_validate(doc)


class StudentSummary(BaseModel):
    total: int
    status: Dict[str, int]
    classes: Dict[str, int]


class DeleteResponse(BaseModel):
    message: str
