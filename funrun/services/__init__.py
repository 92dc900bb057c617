from funrun.services.sequencer import (
    StepSequencer, FIRST_STEP, LAST_STEP, NOT_FINAL_STEP, SUBMITTED,
)
from funrun.services.form_service import (
    render_progress, render_summary, render_step, render_field_prompt,
    render_choice_label, render_validation_alert, render_success, render_about,
)

__all__ = [
    # sequencer
    "StepSequencer", "FIRST_STEP", "LAST_STEP", "NOT_FINAL_STEP", "SUBMITTED",
    # rendering
    "render_progress", "render_summary", "render_step", "render_field_prompt",
    "render_choice_label", "render_validation_alert", "render_success", "render_about",
]
