from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import ValidationError

MISSING_CONTACT_MESSAGE = (
    "Could not automatically extract Name and Email from the CV. "
    "Please fill in the optional fields."
)


# -------- Data models --------
@dataclass(frozen=True)
class GenerationRequest:
    resume_text: str
    job_description: str
    company_info: str
    model_name: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class ContactInfo:
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "ContactInfo":
        fields = _as_mapping(payload)
        return cls(
            full_name=_text(fields.get("fullName")),
            email=_text(fields.get("email")),
            phone=_text(fields.get("phone")),
            address=_text(fields.get("address")),
        )


@dataclass(frozen=True)
class LetterBody:
    company_name: str = ""
    hiring_manager_name: str = ""
    paragraph1: str = ""
    paragraph2: str = ""
    paragraph3: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "LetterBody":
        fields = _as_mapping(payload)
        return cls(
            company_name=_text(fields.get("companyName")),
            hiring_manager_name=_text(fields.get("hiringManagerName")),
            paragraph1=_text(fields.get("paragraph1")),
            paragraph2=_text(fields.get("paragraph2")),
            paragraph3=_text(fields.get("paragraph3")),
        )

    @property
    def paragraphs(self) -> tuple:
        return (self.paragraph1, self.paragraph2, self.paragraph3)


# -------- Parse-with-defaults helpers --------
def _as_mapping(payload: Any) -> dict:
    # Model output is untrusted: a list, string or null counts as "nothing extracted".
    return payload if isinstance(payload, dict) else {}


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return str(value).strip()


# -------- Field merge --------
def merge_contact_info(
    extracted: ContactInfo,
    full_name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
) -> ContactInfo:
    """Overlay non-empty user overrides on the extracted contact info.

    Phone always comes from the résumé. Raises ``ValidationError`` when the
    result has no full name or no email, since the letter cannot be signed
    or addressed without them.
    """
    resolved = ContactInfo(
        full_name=(full_name or "").strip() or extracted.full_name,
        email=(email or "").strip() or extracted.email,
        phone=extracted.phone,
        address=(address or "").strip() or extracted.address,
    )
    if not resolved.full_name or not resolved.email:
        raise ValidationError(MISSING_CONTACT_MESSAGE)
    return resolved
