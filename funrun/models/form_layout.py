"""
Static layout of the registration form: which fields exist, how they are
labelled and answered, and which step each one belongs to.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from funrun.models.models import (
    BloodType,
    Category,
    Gender,
    InfoSource,
    JerseySize,
    RegisteringFor,
    RegistrationDraft,
    RegistrationSource,
    YesNo,
)


class FieldKind:
    TEXT   = "text"     # free text typed into the chat
    DATE   = "date"     # typed date, normalised to ISO
    EMAIL  = "email"
    PHONE  = "phone"
    CHOICE = "choice"   # inline buttons

    TYPED = (TEXT, DATE, EMAIL, PHONE)


@dataclass(frozen=True)
class FieldSpec:
    name:    str
    label:   str
    kind:    str = FieldKind.TEXT
    options: Dict[str, str] = field(default_factory=dict)   # value → label
    hint:    str = ""

    @property
    def is_choice(self) -> bool:
        return self.kind == FieldKind.CHOICE


@dataclass(frozen=True)
class StepSpec:
    number:      int
    short_label: str              # label under the progress bar
    title:       str
    subtitle:    str
    fields:      Tuple[str, ...]


FIELDS: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("email", "Email", FieldKind.EMAIL, hint="Contoh: nama@email.com"),
        FieldSpec("registering_for", "Mendaftar untuk", FieldKind.CHOICE, RegisteringFor.LABELS),
        FieldSpec("full_name", "Nama Lengkap", hint="Sesuai data eKTP / Akta Kelahiran"),
        FieldSpec("birth_date", "Tanggal Lahir", FieldKind.DATE, hint="Format: DD-MM-YYYY"),
        FieldSpec("gender", "Jenis Kelamin", FieldKind.CHOICE, Gender.LABELS),
        FieldSpec("address", "Alamat Saat Ini"),
        FieldSpec("id_number", "No KTP"),
        FieldSpec("bib_name", "Nama di BIB Number", hint="Maksimal 10 Karakter"),
        FieldSpec("registered_from", "Terdaftar dari", FieldKind.CHOICE, RegistrationSource.LABELS),
        FieldSpec(
            "registered_from_name",
            "Nama Komunitas/Perusahaan/Organisasi",
            hint="Nama",
        ),
        FieldSpec(
            "info_source",
            "Mengetahui informasi pendaftaran dari",
            FieldKind.CHOICE,
            InfoSource.LABELS,
        ),
        FieldSpec("blood_type", "Golongan Darah", FieldKind.CHOICE, BloodType.LABELS),
        FieldSpec(
            "chronic_disease",
            "Apakah Anda memiliki penyakit kronis / kondisi medis lainnya?",
            FieldKind.CHOICE,
            YesNo.LABELS,
        ),
        FieldSpec(
            "under_care",
            "Apakah saat ini Anda sedang berada di bawah perawatan dokter?",
            FieldKind.CHOICE,
            YesNo.LABELS,
        ),
        FieldSpec(
            "medication",
            "Apakah Anda diharuskan minum obat untuk penyakit tersebut?",
            FieldKind.CHOICE,
            YesNo.LABELS,
        ),
        FieldSpec(
            "complications",
            "Apakah Anda pernah mengalami kejadian buruk atau komplikasi yang terkait "
            "dengan penyakit Anda selama berkegiatan fisik?",
            FieldKind.CHOICE,
            YesNo.LABELS,
        ),
        FieldSpec(
            "emergency_contact",
            "Nomor Telepon Kontak Darurat",
            FieldKind.PHONE,
            hint="Contoh: +62812345678",
        ),
        FieldSpec("jersey_size", "Ukuran Jersey", FieldKind.CHOICE, JerseySize.LABELS),
        FieldSpec("category", "Kategori Pendaftar", FieldKind.CHOICE, Category.LABELS),
    )
}


STEPS: Dict[int, StepSpec] = {
    1: StepSpec(
        1, "Email",
        "Masukkan Email",
        "Mulai pendaftaran Anda dengan email",
        ("email", "registering_for"),
    ),
    2: StepSpec(
        2, "Informasi",
        "Informasi Peserta",
        "Lengkapi data diri Anda",
        (
            "full_name", "birth_date", "gender", "address", "id_number",
            "bib_name", "registered_from", "registered_from_name", "info_source",
        ),
    ),
    3: StepSpec(
        3, "Kuesioner",
        "Kuesioner Kesehatan",
        "Informasi penting untuk keamanan Anda",
        (
            "blood_type", "chronic_disease", "under_care",
            "medication", "complications", "emergency_contact",
        ),
    ),
    4: StepSpec(
        4, "Race Pack",
        "Race Pack",
        "Pilih ukuran jersey Anda",
        ("jersey_size",),
    ),
    5: StepSpec(
        5, "Pembayaran",
        "Pembayaran Pendaftaran",
        "Pilih kategori pendaftar",
        ("category",),
    ),
}

SIZE_GUIDE_TEXT = (
    "Jersey dalam ukuran standar. Silahkan dipilih sesuai tabel ukuran yang tertera. "
    "Mohon diperhatikan bahwa penukaran ukuran tidak tersedia setelah pemilihan ini."
)


def is_field_visible(name: str, draft: RegistrationDraft) -> bool:
    """Group name is only asked for when the registration source needs one."""
    if name == "registered_from_name":
        return draft.needs_group_name
    return True


def visible_fields(step: int, draft: RegistrationDraft) -> Tuple[FieldSpec, ...]:
    return tuple(
        FIELDS[name] for name in STEPS[step].fields if is_field_visible(name, draft)
    )


def display_value(spec: FieldSpec, draft: RegistrationDraft) -> Optional[str]:
    """Human-readable answer for a field, or None when unanswered."""
    value = getattr(draft, spec.name)
    if spec.name == "registering_for":
        return draft.registering_for_label
    if not value:
        return None
    if spec.is_choice:
        return spec.options.get(value, value)
    return value
