"""
Registration validation.

Two layers:
  - ``validate_step`` - pure per-step gate run before leaving a step.
    Failures are returned as ``StepResult`` values, never raised.
  - Pydantic v2 input models - clean typed chat answers before they are
    written to the draft (strip, normalise dates / phones).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

from pydantic import BaseModel, ValidationError, field_validator

from funrun.models.form_layout import FieldKind
from funrun.models.models import RegistrationDraft, RegistrationSource

BIB_NAME_MAX_LENGTH = 10

_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y")
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-().]")
_PHONE_RE = re.compile(r"^\+?\d{7,15}$")


# ─────────────────────────── Step validation ──────────────────────────────────

@dataclass(frozen=True)
class StepResult:
    """
    Outcome of a step check.

    Attributes
    ----------
    ok          : True when the step may be left
    code        : machine-readable reason ("ok" on success)
    title       : short notification title
    description : notification body
    """

    ok: bool
    code: str = "ok"
    title: str = ""
    description: str = ""

    @property
    def message(self) -> str:
        if not self.title:
            return self.description
        return f"{self.title}\n{self.description}".strip()


PASSED = StepResult(ok=True)

INVALID_EMAIL = StepResult(
    False, "invalid_email",
    "Email tidak valid", "Mohon masukkan alamat email yang valid",
)
MISSING_FIELDS = StepResult(
    False, "missing_fields",
    "Data belum lengkap", "Mohon lengkapi semua informasi peserta",
)
NAME_REQUIRED = StepResult(
    False, "name_required",
    "Nama belum diisi", "Mohon isi nama komunitas/perusahaan/organisasi",
)
BIB_TOO_LONG = StepResult(
    False, "bib_too_long",
    "Nama BIB terlalu panjang", f"Maksimal {BIB_NAME_MAX_LENGTH} karakter",
)
QUESTIONNAIRE_INCOMPLETE = StepResult(
    False, "questionnaire_incomplete",
    "Kuesioner belum lengkap", "Mohon lengkapi semua pertanyaan kuesioner",
)
JERSEY_MISSING = StepResult(
    False, "jersey_missing",
    "Ukuran jersey belum dipilih", "Mohon pilih ukuran jersey Anda",
)
CATEGORY_MISSING = StepResult(
    False, "category_missing",
    "Kategori belum dipilih", "Mohon pilih kategori pendaftar",
)

PARTICIPANT_REQUIRED = (
    "full_name", "birth_date", "gender", "address",
    "id_number", "bib_name", "registered_from", "info_source",
)
QUESTIONNAIRE_REQUIRED = (
    "blood_type", "chronic_disease", "under_care",
    "medication", "complications", "emergency_contact",
)


def _filled(draft: RegistrationDraft, *names: str) -> bool:
    return all(getattr(draft, name).strip() for name in names)


def _check_email(draft: RegistrationDraft) -> StepResult:
    if not _filled(draft, "email") or "@" not in draft.email:
        return INVALID_EMAIL
    return PASSED


def _check_participant(draft: RegistrationDraft) -> StepResult:
    if not _filled(draft, *PARTICIPANT_REQUIRED):
        return MISSING_FIELDS
    if draft.registered_from != RegistrationSource.PERSONAL and not _filled(
        draft, "registered_from_name"
    ):
        return NAME_REQUIRED
    if len(draft.bib_name) > BIB_NAME_MAX_LENGTH:
        return BIB_TOO_LONG
    return PASSED


def _check_questionnaire(draft: RegistrationDraft) -> StepResult:
    if not _filled(draft, *QUESTIONNAIRE_REQUIRED):
        return QUESTIONNAIRE_INCOMPLETE
    return PASSED


def _check_race_pack(draft: RegistrationDraft) -> StepResult:
    return PASSED if _filled(draft, "jersey_size") else JERSEY_MISSING


def _check_category(draft: RegistrationDraft) -> StepResult:
    return PASSED if _filled(draft, "category") else CATEGORY_MISSING


_STEP_CHECKS = {
    1: _check_email,
    2: _check_participant,
    3: _check_questionnaire,
    4: _check_race_pack,
    5: _check_category,
}


def validate_step(step: int, draft: RegistrationDraft) -> StepResult:
    """Check the required fields of ``step``; unknown steps always pass."""
    check = _STEP_CHECKS.get(step)
    if check is None:
        return PASSED
    return check(draft)


# ─────────────────────────── Input models ─────────────────────────────────────

class TextAnswer(BaseModel):
    """
    Free-text answer typed into the chat.

    Attributes
    ----------
    value : stripped text, 1–200 chars
    """

    value: str

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Jawaban tidak boleh kosong")
        if len(v) > 200:
            raise ValueError("Jawaban terlalu panjang (maksimal 200 karakter)")
        return v


class EmailAnswer(BaseModel):
    """Email typed by the user; the "@" rule itself is a step-1 check."""

    value: str

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("Email tidak boleh kosong")
        if any(ch.isspace() for ch in v):
            raise ValueError("Email tidak boleh mengandung spasi")
        return v


class BirthDateAnswer(BaseModel):
    """
    Birth date in one of the common Indonesian notations.

    Stored on the draft as an ISO string (``YYYY-MM-DD``).
    """

    value: date

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v: object) -> object:
        if not isinstance(v, str):
            return v
        raw = v.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(raw, fmt).date()
            except ValueError:
                continue
        raise ValueError("Format tanggal tidak dikenali, gunakan DD-MM-YYYY")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Tanggal lahir tidak boleh di masa depan")
        return v

    @property
    def iso(self) -> str:
        return self.value.isoformat()


class PhoneAnswer(BaseModel):
    """Emergency phone number: optional leading "+", 7–15 digits."""

    value: str

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = _PHONE_SEPARATORS_RE.sub("", v.strip())
        if not _PHONE_RE.match(v):
            raise ValueError("Nomor telepon tidak valid, contoh: +62812345678")
        return v


def parse_answer(kind: str, raw: str) -> str:
    """
    Clean a typed answer for a field of the given ``FieldKind``.

    Raises pydantic ``ValidationError`` when the text is unusable.
    """
    if kind == FieldKind.DATE:
        return BirthDateAnswer(value=raw).iso
    if kind == FieldKind.EMAIL:
        return EmailAnswer(value=raw).value
    if kind == FieldKind.PHONE:
        return PhoneAnswer(value=raw).value
    return TextAnswer(value=raw).value


def first_error(exc: ValidationError) -> str:
    """User-facing text of the first error in a ValidationError."""
    errors = exc.errors()
    if not errors:
        return "Jawaban tidak valid"
    first = errors[0]
    # ValueErrors raised by our validators travel in ctx["error"]
    cause = (first.get("ctx") or {}).get("error")
    if isinstance(cause, Exception) and str(cause):
        return str(cause)
    return first.get("msg") or "Jawaban tidak valid"
