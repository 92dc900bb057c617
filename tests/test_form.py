"""
Unit tests - Form layout, keyboards and screen rendering.

  - Group-name field visibility (view-layer rule over the draft)
  - Step keyboards: field buttons, navigation, size chart button
  - Callback data stays within Telegram's 64-byte limit
  - Rendered screens: progress bar, summary, HTML escaping
"""
from __future__ import annotations

import pytest

from funrun.keyboards import ChoiceCb, FieldCb, FormNavCb, choice_kb, step_kb
from funrun.models.form_layout import FIELDS, STEPS, visible_fields
from funrun.models.models import RegistrationDraft
from funrun.services.form_service import (
    render_field_prompt,
    render_progress,
    render_step,
    render_summary,
)
from funrun.services.sequencer import StepSequencer


def _callbacks(markup) -> list[str]:
    return [button.callback_data for row in markup.inline_keyboard for button in row]


# ─────────────────────────── Layout ───────────────────────────────────────────

class TestLayout:
    def test_every_draft_field_is_on_exactly_one_step(self) -> None:
        placed = [name for step in STEPS.values() for name in step.fields]
        assert sorted(placed) == sorted(RegistrationDraft.model_fields)
        assert set(FIELDS) == set(placed)

    @pytest.mark.parametrize("source", ["community", "company", "organization"])
    def test_group_name_visible_for_group_sources(self, source: str) -> None:
        draft = RegistrationDraft(registered_from=source)
        names = [spec.name for spec in visible_fields(2, draft)]
        assert "registered_from_name" in names

    @pytest.mark.parametrize("source", ["personal", ""])
    def test_group_name_hidden_otherwise(self, source: str) -> None:
        draft = RegistrationDraft(registered_from=source)
        names = [spec.name for spec in visible_fields(2, draft)]
        assert "registered_from_name" not in names


# ─────────────────────────── Keyboards ────────────────────────────────────────

class TestStepKeyboard:
    def test_first_step_has_no_back_button(self) -> None:
        callbacks = _callbacks(step_kb(StepSequencer()))
        assert FormNavCb(action="back").pack() not in callbacks
        assert FormNavCb(action="next").pack() in callbacks
        assert FieldCb(name="email").pack() in callbacks

    def test_last_step_offers_submit_instead_of_next(self, complete_draft) -> None:
        callbacks = _callbacks(step_kb(StepSequencer(complete_draft, current_step=5)))
        assert FormNavCb(action="submit").pack() in callbacks
        assert FormNavCb(action="next").pack() not in callbacks
        assert FormNavCb(action="back").pack() in callbacks

    def test_race_pack_step_offers_size_chart(self) -> None:
        callbacks = _callbacks(step_kb(StepSequencer(current_step=4)))
        assert FormNavCb(action="size_chart").pack() in callbacks

    def test_personal_source_hides_group_name_button(self, make_draft) -> None:
        seq = StepSequencer(make_draft(registered_from="personal"), current_step=2)
        assert FieldCb(name="registered_from_name").pack() not in _callbacks(step_kb(seq))

    def test_community_source_shows_group_name_button(self, make_draft) -> None:
        seq = StepSequencer(make_draft(registered_from="community"), current_step=2)
        assert FieldCb(name="registered_from_name").pack() in _callbacks(step_kb(seq))

    def test_choice_keyboard_lists_every_option(self) -> None:
        callbacks = _callbacks(choice_kb("jersey_size", RegistrationDraft()))
        for size in ("S", "M", "L", "XL", "XXL", "XXXL"):
            assert ChoiceCb(name="jersey_size", value=size).pack() in callbacks
        assert FormNavCb(action="show").pack() in callbacks

    def test_self_option_shows_email(self) -> None:
        markup = choice_kb("registering_for", RegistrationDraft(email="a@b"))
        texts = [button.text for row in markup.inline_keyboard for button in row]
        assert any("Diri sendiri (a@b)" in text for text in texts)

    def test_all_callbacks_fit_telegram_limit(self) -> None:
        packed = [FieldCb(name=name).pack() for name in FIELDS]
        packed += [
            ChoiceCb(name=spec.name, value=value).pack()
            for spec in FIELDS.values()
            for value in spec.options
        ]
        assert max(len(data.encode()) for data in packed) <= 64


# ─────────────────────────── Rendering ────────────────────────────────────────

class TestRendering:
    def test_progress_is_proportional_to_step(self) -> None:
        assert "20%" in render_progress(1)
        assert render_progress(1).startswith("▰▰▱")
        assert render_progress(5).startswith("▰" * 10)
        assert "100%" in render_progress(5)

    def test_step_screen_lists_unanswered_fields(self) -> None:
        text = render_step(StepSequencer())
        assert "Masukkan Email" in text
        assert "belum diisi" in text

    def test_untouched_registering_for_reads_as_self(self) -> None:
        assert "Diri sendiri" in render_step(StepSequencer())

    def test_last_step_includes_summary(self, complete_draft) -> None:
        text = render_step(StepSequencer(complete_draft, current_step=5))
        assert "Ringkasan Pendaftaran" in text
        assert "Budi Santoso" in text
        assert "Pelajar" in text

    def test_user_values_are_html_escaped(self, make_draft) -> None:
        text = render_summary(make_draft(full_name="<b>Budi</b> & co"))
        assert "&lt;b&gt;Budi&lt;/b&gt; &amp; co" in text

    def test_typed_field_prompt_asks_for_input(self) -> None:
        text = render_field_prompt("bib_name", RegistrationDraft())
        assert "Maksimal 10 Karakter" in text
        assert "Ketik jawaban" in text

    def test_choice_field_prompt_shows_current_answer(self) -> None:
        text = render_field_prompt("category", RegistrationDraft(category="general"))
        assert "Saat ini: Umum" in text
        assert "Ketik jawaban" not in text
