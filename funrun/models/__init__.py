from funrun.models.models import (
    RegistrationDraft,
    RegisteringFor,
    Gender,
    RegistrationSource,
    InfoSource,
    BloodType,
    YesNo,
    JerseySize,
    Category,
)
from funrun.models.form_layout import (
    FieldKind,
    FieldSpec,
    StepSpec,
    FIELDS,
    STEPS,
    SIZE_GUIDE_TEXT,
    is_field_visible,
    visible_fields,
    display_value,
)

__all__ = [
    "RegistrationDraft",
    "RegisteringFor",
    "Gender",
    "RegistrationSource",
    "InfoSource",
    "BloodType",
    "YesNo",
    "JerseySize",
    "Category",
    "FieldKind",
    "FieldSpec",
    "StepSpec",
    "FIELDS",
    "STEPS",
    "SIZE_GUIDE_TEXT",
    "is_field_visible",
    "visible_fields",
    "display_value",
]
