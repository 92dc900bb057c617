"""
Domain model for the Fun Run registration form.

Domain overview
---------------
RegistrationDraft - the in-progress answers of one registrant
  ├─ step 1  Email        - email, registering_for
  ├─ step 2  Informasi    - identity, BIB name, registration / info source
  ├─ step 3  Kuesioner    - blood type, health questionnaire, emergency contact
  ├─ step 4  Race Pack    - jersey size
  └─ step 5  Pembayaran   - registrant category

The draft lives only in the chat's FSM storage; nothing is persisted.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

# ─────────────────────────── Constants ────────────────────────────────────────

class RegisteringFor:
    SELF  = "self"
    OTHER = "other"

    LABELS = {
        SELF:  "Diri sendiri",
        OTHER: "Orang lain",
    }


class Gender:
    MALE   = "male"
    FEMALE = "female"

    LABELS = {
        MALE:   "Pria",
        FEMALE: "Wanita",
    }


class RegistrationSource:
    COMMUNITY    = "community"
    COMPANY      = "company"
    ORGANIZATION = "organization"
    PERSONAL     = "personal"     # no group name required

    LABELS = {
        COMMUNITY:    "Komunitas",
        COMPANY:      "Perusahaan",
        ORGANIZATION: "Organisasi",
        PERSONAL:     "Personal",
    }


class InfoSource:
    FRIEND = "friend"
    SOCIAL = "social"
    PRINT  = "print"

    LABELS = {
        FRIEND: "Teman",
        SOCIAL: "Sosial Media",
        PRINT:  "Media Cetak",
    }


class BloodType:
    A  = "A"
    B  = "B"
    O  = "O"
    AB = "AB"

    LABELS = {A: "A", B: "B", O: "O", AB: "AB"}


class YesNo:
    YES = "yes"
    NO  = "no"

    LABELS = {
        YES: "Ya",
        NO:  "Tidak",
    }


class JerseySize:
    S    = "S"
    M    = "M"
    L    = "L"
    XL   = "XL"
    XXL  = "XXL"
    XXXL = "XXXL"

    LABELS = {S: "S", M: "M", L: "L", XL: "XL", XXL: "XXL", XXXL: "XXXL"}


class Category:
    STUDENT = "student"
    GENERAL = "general"

    LABELS = {
        STUDENT: "Pelajar",
        GENERAL: "Umum",
    }

    DESCRIPTIONS = {
        STUDENT: "Untuk pelajar dan mahasiswa",
        GENERAL: "Untuk peserta umum",
    }


# ─────────────────────────── Draft ────────────────────────────────────────────

YesNoAnswer = Literal["", "yes", "no"]


class RegistrationDraft(BaseModel):
    """
    Flat record of registration answers.

    Every field starts as an empty string.  Choice fields are constrained to
    their option values on assignment; whether a field is *required* is decided
    per step by ``funrun.validators.validate_step``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # Step 1 - email
    email:                str = ""
    registering_for:      Literal["", "self", "other"] = ""

    # Step 2 - participant info
    full_name:            str = ""
    birth_date:           str = ""     # ISO YYYY-MM-DD
    gender:               Literal["", "male", "female"] = ""
    address:              str = ""
    id_number:            str = ""
    bib_name:             str = ""
    registered_from:      Literal["", "community", "company", "organization", "personal"] = ""
    registered_from_name: str = ""
    info_source:          Literal["", "friend", "social", "print"] = ""

    # Step 3 - health questionnaire
    blood_type:           Literal["", "A", "B", "O", "AB"] = ""
    chronic_disease:      YesNoAnswer = ""
    under_care:           YesNoAnswer = ""
    medication:           YesNoAnswer = ""
    complications:        YesNoAnswer = ""
    emergency_contact:    str = ""

    # Step 4 - race pack
    jersey_size:          Literal["", "S", "M", "L", "XL", "XXL", "XXXL"] = ""

    # Step 5 - category / payment
    category:             Literal["", "student", "general"] = ""

    @property
    def needs_group_name(self) -> bool:
        """True when the chosen registration source requires a group name."""
        return bool(self.registered_from) and self.registered_from != RegistrationSource.PERSONAL

    @property
    def registering_for_label(self) -> str:
        # An untouched choice is shown as "self", the form's preselected option
        key = self.registering_for or RegisteringFor.SELF
        return RegisteringFor.LABELS[key]

    @property
    def category_label(self) -> str:
        return Category.LABELS.get(self.category, "")
