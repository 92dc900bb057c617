"""
Text rendering for the registration chat screens.

All user-supplied values go through ``html.quote`` - messages are sent with
``ParseMode.HTML``.
"""
from __future__ import annotations

from aiogram import html

from funrun.config import settings
from funrun.models.form_layout import (
    FIELDS,
    SIZE_GUIDE_TEXT,
    STEPS,
    FieldKind,
    FieldSpec,
    display_value,
    visible_fields,
)
from funrun.models.models import Category, RegistrationDraft
from funrun.services.sequencer import LAST_STEP, StepSequencer
from funrun.validators import BIB_NAME_MAX_LENGTH, StepResult

PROGRESS_WIDTH = 10


def render_progress(step: int) -> str:
    """Progress bar proportional to step/5 plus the step labels."""
    filled = round(PROGRESS_WIDTH * step / LAST_STEP)
    bar = "▰" * filled + "▱" * (PROGRESS_WIDTH - filled)
    labels = " · ".join(
        html.bold(spec.short_label) if spec.number <= step else spec.short_label
        for spec in STEPS.values()
    )
    return f"{bar} {step * 100 // LAST_STEP}%\n{labels}"


def render_summary(draft: RegistrationDraft) -> str:
    lines = [
        html.bold("Ringkasan Pendaftaran"),
        f"Nama: {html.quote(draft.full_name)}",
        f"Email: {html.quote(draft.email)}",
        f"Ukuran Jersey: {html.quote(draft.jersey_size)}",
        f"Kategori: {draft.category_label}",
    ]
    return "\n".join(lines)


def _render_field_line(spec: FieldSpec, draft: RegistrationDraft) -> str:
    value = display_value(spec, draft)
    if value is None:
        return f"▫️ {spec.label}: {html.italic('belum diisi')}"
    return f"✅ {spec.label}: {html.quote(value)}"


def render_step(sequencer: StepSequencer) -> str:
    """Full screen text for the sequencer's current step."""
    step = STEPS[sequencer.current_step]
    draft = sequencer.draft

    parts = [
        render_progress(step.number),
        "",
        f"{html.bold(step.title)}\n{html.italic(step.subtitle)}",
        "",
        "\n".join(_render_field_line(spec, draft) for spec in visible_fields(step.number, draft)),
    ]
    if step.number == 4:
        parts += ["", f"📏 {html.bold('Panduan Ukuran Jersey')}\n{SIZE_GUIDE_TEXT}"]
    if step.number == LAST_STEP:
        parts += ["", render_summary(draft)]
    return "\n".join(parts)


def render_field_prompt(name: str, draft: RegistrationDraft) -> str:
    """Question text shown when the user opens a field."""
    spec = FIELDS[name]
    text = html.bold(spec.label)
    if spec.hint:
        text += f"\n{html.italic(spec.hint)}"
    current = display_value(spec, draft)
    if current is not None:
        text += f"\n\nSaat ini: {html.quote(current)}"
    if spec.kind in FieldKind.TYPED:
        text += "\n\n✍️ Ketik jawaban Anda:"
    return text


def render_choice_label(spec: FieldSpec, value: str, draft: RegistrationDraft) -> str:
    label = spec.options[value]
    # The "self" option echoes the email being registered
    if spec.name == "registering_for" and value == "self":
        label = f"{label} ({draft.email or 'email'})"
    elif spec.name == "category":
        label = f"{label}: {Category.DESCRIPTIONS[value]}"
    return label


def render_validation_alert(result: StepResult) -> str:
    return f"⚠️ {result.message}"


def render_success(draft: RegistrationDraft, result: StepResult) -> str:
    return (
        f"🎉 {html.bold(result.title)}\n"
        f"{result.description}\n\n"
        f"{render_summary(draft)}"
    )


def render_about() -> str:
    return (
        f"🏆 {html.bold(settings.EVENT_NAME)}\n\n"
        f"{html.quote(settings.EVENT_TAGLINE)}\n\n"
        f"• Kategori Lengkap\n"
        f"• Jersey Gratis\n"
        f"• Sertifikat Digital\n\n"
        f"Nama BIB maksimal {BIB_NAME_MAX_LENGTH} karakter."
    )
