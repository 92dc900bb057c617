"""
Unit tests - Step sequencer (services/sequencer.py).

Covers:
  - advance(): blocked on incomplete steps, moves forward on valid ones, caps at 5
  - retreat(): always exactly one step back, floor at 1, no validation
  - submit(): only from step 5, completion result, draft logged not stored
  - set_field / reset / session dict round trip
"""
from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from funrun.models.models import RegistrationDraft
from funrun.services.sequencer import (
    FIRST_STEP,
    LAST_STEP,
    StepSequencer,
)
from funrun.validators import PARTICIPANT_REQUIRED, QUESTIONNAIRE_REQUIRED

# (step, one required field of that step)
_BLOCKERS = (
    [(1, "email")]
    + [(2, f) for f in PARTICIPANT_REQUIRED]
    + [(3, f) for f in QUESTIONNAIRE_REQUIRED]
    + [(4, "jersey_size"), (5, "category")]
)


# ─────────────────────────── advance() ────────────────────────────────────────

class TestAdvance:
    def test_starts_on_first_step_with_empty_draft(self) -> None:
        seq = StepSequencer()
        assert seq.current_step == FIRST_STEP
        assert seq.draft == RegistrationDraft()
        assert seq.progress == pytest.approx(0.2)

    @pytest.mark.parametrize("step, field", _BLOCKERS)
    def test_incomplete_step_does_not_move(self, make_draft, step: int, field: str) -> None:
        seq = StepSequencer(make_draft(**{field: ""}), current_step=step)
        result = seq.advance()
        assert not result.ok
        assert seq.current_step == step

    @pytest.mark.parametrize("step", [1, 2, 3, 4])
    def test_valid_step_moves_forward_by_one(self, complete_draft, step: int) -> None:
        seq = StepSequencer(complete_draft, current_step=step)
        assert seq.advance().ok
        assert seq.current_step == step + 1

    def test_advance_on_last_step_stays_on_last_step(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=LAST_STEP)
        assert seq.advance().ok
        assert seq.current_step == LAST_STEP

    def test_failure_carries_user_message(self) -> None:
        seq = StepSequencer()
        result = seq.advance()
        assert result.message == "Email tidak valid\nMohon masukkan alamat email yang valid"

    def test_walk_through_all_steps(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft)
        for expected in range(2, LAST_STEP + 1):
            assert seq.advance().ok
            assert seq.current_step == expected
        assert seq.progress == pytest.approx(1.0)

    def test_earlier_steps_are_not_revalidated(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=3)
        seq.set_field("email", "")          # step 1 now invalid
        assert seq.advance().ok
        assert seq.current_step == 4


# ─────────────────────────── retreat() ────────────────────────────────────────

class TestRetreat:
    @pytest.mark.parametrize("step", [2, 3, 4, 5])
    def test_retreat_decrements_by_one_regardless_of_validity(self, step: int) -> None:
        seq = StepSequencer(current_step=step)      # empty, invalid draft
        assert seq.retreat() == step - 1
        assert seq.current_step == step - 1

    def test_retreat_from_first_step_stays(self) -> None:
        seq = StepSequencer()
        assert seq.retreat() == FIRST_STEP

    def test_retreat_keeps_answers(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=4)
        seq.retreat()
        assert seq.draft.jersey_size == "L"


# ─────────────────────────── submit() ─────────────────────────────────────────

class TestSubmit:
    def test_student_registration_completes(self, make_draft, caplog) -> None:
        caplog.set_level(logging.INFO, logger="funrun.services.sequencer")
        seq = StepSequencer(make_draft(category="student"), current_step=LAST_STEP)

        result = seq.submit()

        assert result.ok
        assert result.code == "submitted"
        assert result.title == "Pendaftaran Berhasil!"
        assert seq.closed
        assert "Registration submitted" in caplog.text

    def test_missing_category_blocks_submit(self, make_draft) -> None:
        seq = StepSequencer(make_draft(category=""), current_step=LAST_STEP)
        result = seq.submit()
        assert result.code == "category_missing"
        assert not seq.closed

    def test_submit_before_last_step_is_refused(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=3)
        result = seq.submit()
        assert result.code == "not_final_step"
        assert seq.current_step == 3
        assert not seq.closed


# ─────────────────────────── Draft & session ──────────────────────────────────

class TestDraftAndSession:
    def test_set_field_writes_answer(self) -> None:
        seq = StepSequencer()
        seq.set_field("bib_name", "SANTI")
        assert seq.draft.bib_name == "SANTI"

    def test_set_unknown_field_raises(self) -> None:
        with pytest.raises(KeyError):
            StepSequencer().set_field("shoe_size", "42")

    def test_set_invalid_choice_raises(self) -> None:
        with pytest.raises(ValidationError):
            StepSequencer().set_field("jersey_size", "XS")

    def test_reset_starts_over(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=4)
        seq.reset()
        assert seq.current_step == FIRST_STEP
        assert seq.draft.email == ""

    def test_dict_round_trip(self, complete_draft) -> None:
        seq = StepSequencer(complete_draft, current_step=3)
        restored = StepSequencer.from_dict(seq.to_dict())
        assert restored.current_step == 3
        assert restored.draft == complete_draft

    def test_from_empty_data_gives_fresh_sequencer(self) -> None:
        seq = StepSequencer.from_dict(None)
        assert seq.current_step == FIRST_STEP
        assert not seq.closed

    def test_out_of_range_step_is_clamped(self) -> None:
        assert StepSequencer.from_dict({"step": 9, "draft": {}}).current_step == LAST_STEP
        assert StepSequencer(current_step=0).current_step == FIRST_STEP
