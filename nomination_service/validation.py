"""
Nomination input validation.

`validate_nomination` turns an arbitrary payload into either a normalized
record or the complete, ordered list of field errors. Every rule runs, so a
single response can report every problem with a submission.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from nomination_service.constants import ALL_DOMAINS, PHONE_PATTERN, is_valid_gender
from nomination_service.errors import FieldError, ValidationError

NOMINATION_FIELDS = (
    "name",
    "course",
    "phone_no",
    "domain",
    "email",
    "insta_id",
    "github_id",
    "gender",
)

MAX_TEXT_LENGTH = 255

_PHONE_RE = re.compile(PHONE_PATTERN)
_WHITESPACE_RE = re.compile(r"\s+")

_LABELS = {
    "name": "Name",
    "course": "Course",
    "phone_no": "Phone number",
    "domain": "Domain",
    "email": "Email",
    "insta_id": "Instagram ID",
    "github_id": "GitHub ID",
    "gender": "Gender",
}


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("nomination_field", message)


def _is_partial(info: ValidationInfo) -> bool:
    """True when a partial payload omits this field, so it may be skipped."""
    ctx = info.context or {}
    return bool(ctx.get("partial")) and info.field_name not in ctx.get("supplied", ())


def _required_text(value: Any, field_name: str, info: ValidationInfo) -> Optional[str]:
    label = _LABELS[field_name]
    if value is None:
        if _is_partial(info):
            return None
        raise _fail(f"{label} is required")
    if not isinstance(value, str):
        raise _fail(f"{label} must be a string")
    value = value.strip()
    if not value:
        raise _fail(f"{label} is required")
    return value


def _optional_text(value: Any, field_name: str) -> Optional[str]:
    label = _LABELS[field_name]
    if value is None:
        return None
    if not isinstance(value, str):
        raise _fail(f"{label} must be a string")
    value = value.strip()
    if not value:
        return None
    if len(value) > MAX_TEXT_LENGTH:
        raise _fail(f"{label} cannot exceed {MAX_TEXT_LENGTH} characters")
    return value


class NominationInput(BaseModel):
    """Raw nomination payload.

    Fields are typed as ``Any`` so every type check happens in the validators
    below and produces a message in the same register as the others.
    """

    model_config = ConfigDict(validate_default=True, extra="ignore")

    name: Any = None
    course: Any = None
    phone_no: Any = None
    domain: Any = None
    email: Any = None
    insta_id: Any = None
    github_id: Any = None
    gender: Any = None

    @field_validator("name", "course")
    @classmethod
    def _validate_length(cls, v: Any, info: ValidationInfo):
        v = _required_text(v, info.field_name, info)
        if v is None:
            return v
        label = _LABELS[info.field_name]
        if len(v) < 2:
            raise _fail(f"{label} must be at least 2 characters long")
        if len(v) > MAX_TEXT_LENGTH:
            raise _fail(f"{label} cannot exceed {MAX_TEXT_LENGTH} characters")
        return v

    @field_validator("phone_no")
    @classmethod
    def _validate_phone(cls, v: Any, info: ValidationInfo):
        v = _required_text(v, info.field_name, info)
        if v is None:
            return v
        v = _WHITESPACE_RE.sub("", v)
        if not _PHONE_RE.match(v):
            raise _fail("Phone number must be 10-15 digits")
        return v

    @field_validator("domain")
    @classmethod
    def _validate_domain(cls, v: Any, info: ValidationInfo):
        if v is None and _is_partial(info):
            return None
        if v is None or v == "":
            raise _fail("Domain is required")
        if v not in ALL_DOMAINS:
            raise _fail("Domain must be one of: " + ", ".join(ALL_DOMAINS))
        return v

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: Any, info: ValidationInfo):
        v = _required_text(v, info.field_name, info)
        if v is None:
            return v
        if len(v) > MAX_TEXT_LENGTH:
            raise _fail(f"Email cannot exceed {MAX_TEXT_LENGTH} characters")
        try:
            # Syntax only; the stored address stays as submitted
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise _fail("Please provide a valid email address")
        return v

    @field_validator("insta_id", "github_id")
    @classmethod
    def _validate_handle(cls, v: Any, info: ValidationInfo):
        return _optional_text(v, info.field_name)

    @field_validator("gender")
    @classmethod
    def _validate_gender(cls, v: Any, info: ValidationInfo):
        if v is None and _is_partial(info):
            return None
        if v is None or v == "":
            raise _fail("Gender is required")
        if not is_valid_gender(v):
            raise _fail("Gender must be Male, Female, or Others")
        return v


@dataclass
class ValidationResult:
    value: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ("body",)
        errors.append(FieldError(field=str(loc[0]), message=err.get("msg", "Invalid value")))
    return errors


def validate_nomination(data: Any, partial: bool = False) -> ValidationResult:
    """Validate a raw payload.

    With ``partial=True`` only the supplied fields are checked and returned;
    missing fields are not reported as required.
    """
    if not isinstance(data, Mapping):
        return ValidationResult(errors=[FieldError("body", "Request body must be a JSON object")])
    try:
        model = NominationInput.model_validate(
            dict(data), context={"partial": partial, "supplied": frozenset(data)}
        )
    except PydanticValidationError as exc:
        return ValidationResult(errors=_field_errors(exc))

    record = model.model_dump()
    if partial:
        record = {k: record[k] for k in NOMINATION_FIELDS if k in data}
    return ValidationResult(value=record)


def validate_or_raise(data: Any, partial: bool = False) -> Dict[str, Any]:
    result = validate_nomination(data, partial=partial)
    if not result.ok:
        raise ValidationError(result.errors)
    return result.value
