"""
Step sequencer for the five-step registration form.

Holds the current step and the draft, and gates forward movement with
``validate_step``.  Going back is always allowed.  The sequencer is plain
in-memory state; ``to_dict`` / ``from_dict`` move it in and out of the chat's
FSM storage between updates.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from funrun.models.models import RegistrationDraft
from funrun.validators import StepResult, validate_step

logger = logging.getLogger(__name__)

FIRST_STEP = 1
LAST_STEP = 5

NOT_FINAL_STEP = StepResult(
    False, "not_final_step",
    "Pendaftaran belum selesai", "Mohon lengkapi semua langkah terlebih dahulu",
)
SUBMITTED = StepResult(
    True, "submitted",
    "Pendaftaran Berhasil!",
    "Terima kasih telah mendaftar. Kami akan mengirimkan konfirmasi ke email Anda.",
)


class StepSequencer:
    """
    Linear 1..5 form navigator over a ``RegistrationDraft``.

    Parameters
    ----------
    draft        : answers collected so far (a fresh draft when omitted)
    current_step : step currently shown, clamped into 1..5
    """

    def __init__(
        self,
        draft: Optional[RegistrationDraft] = None,
        current_step: int = FIRST_STEP,
    ) -> None:
        self.draft = draft if draft is not None else RegistrationDraft()
        self.current_step = min(max(current_step, FIRST_STEP), LAST_STEP)
        self.closed = False

    # ── Navigation ────────────────────────────────────────────────────────────

    @property
    def progress(self) -> float:
        return self.current_step / LAST_STEP

    @property
    def is_last_step(self) -> bool:
        return self.current_step == LAST_STEP

    def advance(self) -> StepResult:
        """Validate the current step and move forward on success."""
        result = validate_step(self.current_step, self.draft)
        if result.ok:
            self.current_step = min(self.current_step + 1, LAST_STEP)
        else:
            logger.debug("Step %d blocked: %s", self.current_step, result.code)
        return result

    def retreat(self) -> int:
        """Move back one step without validation; returns the new step."""
        self.current_step = max(self.current_step - 1, FIRST_STEP)
        return self.current_step

    def submit(self) -> StepResult:
        """
        Finish the registration from the last step.

        On success the sequencer is closed and the draft is logged, not stored.
        """
        if not self.is_last_step:
            return NOT_FINAL_STEP
        result = validate_step(LAST_STEP, self.draft)
        if not result.ok:
            return result
        self.closed = True
        logger.info("Registration submitted: %s", self.draft.model_dump())
        return SUBMITTED

    # ── Draft mutation ────────────────────────────────────────────────────────

    def set_field(self, name: str, value: str) -> None:
        """
        Write one answer to the draft.

        Raises KeyError for unknown fields and pydantic ``ValidationError``
        for values outside a choice field's options.
        """
        if name not in RegistrationDraft.model_fields:
            raise KeyError(name)
        setattr(self.draft, name, value)

    def reset(self) -> None:
        self.draft = RegistrationDraft()
        self.current_step = FIRST_STEP
        self.closed = False

    # ── Session storage ───────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {"step": self.current_step, "draft": self.draft.model_dump()}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "StepSequencer":
        """Rebuild from ``to_dict`` output; missing data gives a fresh sequencer."""
        if not data:
            return cls()
        draft = RegistrationDraft.model_validate(data.get("draft") or {})
        return cls(draft=draft, current_step=int(data.get("step", FIRST_STEP)))
