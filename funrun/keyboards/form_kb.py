"""
Keyboards for the registration form screens.
"""
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from funrun.keyboards.callbacks import ChoiceCb, FieldCb, FormNavCb, MainMenuCb
from funrun.models.form_layout import FIELDS, visible_fields
from funrun.models.models import RegistrationDraft
from funrun.services.form_service import render_choice_label
from funrun.services.sequencer import FIRST_STEP, StepSequencer

# Button text is cut to keep long questionnaire labels on one line
_MAX_BUTTON_LABEL = 40


def _short(label: str) -> str:
    if len(label) <= _MAX_BUTTON_LABEL:
        return label
    return label[: _MAX_BUTTON_LABEL - 1].rstrip() + "…"


def step_kb(sequencer: StepSequencer) -> InlineKeyboardMarkup:
    """One button per visible field, then size chart (step 4) and navigation."""
    draft   = sequencer.draft
    step    = sequencer.current_step
    builder = InlineKeyboardBuilder()

    for spec in visible_fields(step, draft):
        mark = "✅" if getattr(draft, spec.name) else "✏️"
        builder.row(
            InlineKeyboardButton(
                text=f"{mark} {_short(spec.label)}",
                callback_data=FieldCb(name=spec.name).pack(),
            )
        )

    if step == 4:
        builder.row(
            InlineKeyboardButton(
                text="📏 Lihat Panduan Ukuran",
                callback_data=FormNavCb(action="size_chart").pack(),
            )
        )

    nav = []
    if step > FIRST_STEP:
        nav.append(InlineKeyboardButton(text="◀️ Kembali", callback_data=FormNavCb(action="back").pack()))
    if sequencer.is_last_step:
        nav.append(
            InlineKeyboardButton(
                text="✅ Selesaikan Pendaftaran",
                callback_data=FormNavCb(action="submit").pack(),
            )
        )
    else:
        nav.append(InlineKeyboardButton(text="Selanjutnya ▶️", callback_data=FormNavCb(action="next").pack()))
    builder.row(*nav)
    builder.row(InlineKeyboardButton(text="❌ Batal", callback_data=MainMenuCb(action="main").pack()))
    return builder.as_markup()


def choice_kb(name: str, draft: RegistrationDraft) -> InlineKeyboardMarkup:
    """Option buttons for a choice field; the current answer is marked."""
    spec    = FIELDS[name]
    current = getattr(draft, name)
    builder = InlineKeyboardBuilder()
    for value in spec.options:
        mark = "🔘" if value == current else "⚪️"
        builder.row(
            InlineKeyboardButton(
                text=f"{mark} {render_choice_label(spec, value, draft)}",
                callback_data=ChoiceCb(name=name, value=value).pack(),
            )
        )
    builder.row(InlineKeyboardButton(text="🔙 Kembali", callback_data=FormNavCb(action="show").pack()))
    return builder.as_markup()


def cancel_input_kb() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="🔙 Batal", callback_data=FormNavCb(action="show").pack()))
    return builder.as_markup()
