"""Pydantic models for the entity records exchanged with the API.

Attributes are snake_case in Python and camelCase on the wire. Unknown
keys are kept as-is so derived columns (e.g. a user's ``tutorName``)
survive a round trip through the store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = int | float


class RecordIn(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: int | None = None


class OrganisationIn(RecordIn):
    organisation_name: str
    address: str = ""
    phone_number: str = ""
    email: str = ""
    website: str = ""
    location: str = ""
    latitude: float | None = None
    longitude: float | None = None
    logo: str | None = None
    header: str | None = None
    footer: str | None = None
    seal: str | None = None
    remarks: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class UserIn(RecordIn):
    username: str
    password: str | None = None
    user_id: str = ""
    tutor_id: int | None = None
    can_login: bool = True
    role: str = "user"
    created_at: str | None = None


class BatchIn(RecordIn):
    batch_name: str
    batch_code: str
    remarks: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class CourseIn(RecordIn):
    course_code: str
    course_name: str
    description: str = ""
    duration: int = 0
    total_fee: Number = 0
    batch_id: int | None = None
    batch_name: str = ""
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class PersonIn(RecordIn):
    reg_no: str
    name_of_applicant: str
    date: str = ""
    profile_image: str | None = None
    name_of_course: str = ""
    name_of_guardian: str = ""
    relationship_with_guardian: str = ""
    occupation_of_guardian: str = ""
    permanent_address: str = ""
    mobile_number: str = ""
    home_contact: str = ""
    date_of_birth: str = ""
    sex: str = ""
    marital_status: str = ""
    religion: str = ""
    religion_category: str = ""
    educational_qualification: str = ""
    email: str = ""
    application_number: str = ""
    class_time: str = ""
    total_course_fee: Number = 0
    fee_details: str = ""
    admitted_by: str = ""
    remarks: str = ""


class TransactionIn(RecordIn):
    """Shared shape of payments and receipts."""

    date: str
    reference_number: str
    transaction_type: str
    amount: Number
    student_id: int | None = None
    student_name: str | None = None
    student_reg_no: str | None = None
    tutor_id: int | None = None
    tutor_name: str | None = None
    tutor_reg_no: str | None = None
    remarks: str | None = None
    created_at: str | None = None


class PaymentIn(TransactionIn):
    pass


class ReceiptIn(TransactionIn):
    pass


RECORD_MODELS: dict[str, type[RecordIn]] = {
    "organisations": OrganisationIn,
    "users": UserIn,
    "batches": BatchIn,
    "courses": CourseIn,
    "persons": PersonIn,
    "payments": PaymentIn,
    "receipts": ReceiptIn,
}
