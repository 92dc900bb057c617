"""
Fun Run registration form handler.

Flow:
  "Daftar Sekarang" → 1 Email → 2 Informasi → 3 Kuesioner → 4 Race Pack
                    → 5 Pembayaran (summary) → submit ✅

Every step is one screen: a message listing the step's fields and a keyboard
to edit them.  "Selanjutnya" validates the step being left; "Kembali" never
validates.  The StepSequencer is injected by SequencerMiddleware.
"""
import logging

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.filters import StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, FSInputFile, Message
from pydantic import ValidationError

from funrun.config import settings
from funrun.keyboards import (
    ChoiceCb, FieldCb, FormNavCb, MainMenuCb,
    cancel_input_kb, choice_kb, main_menu, step_kb,
)
from funrun.middlewares import SequencerMiddleware
from funrun.models.form_layout import FIELDS, STEPS, is_field_visible
from funrun.services import (
    StepSequencer, render_field_prompt, render_step, render_success,
    render_validation_alert,
)
from funrun.states import STEP_STATES, RegistrationStates, state_for_step
from funrun.validators import first_error, parse_answer

logger = logging.getLogger(__name__)
router = Router(name="registration")
router.message.middleware(SequencerMiddleware())
router.callback_query.middleware(SequencerMiddleware())

# Step screens stay clickable while a typed answer is awaited
ON_SCREEN = StateFilter(*STEP_STATES, RegistrationStates.enter_value)


def _field_on_screen(name: str, sequencer: StepSequencer) -> bool:
    """Field exists, belongs to the current step and is currently shown."""
    return (
        name in FIELDS
        and name in STEPS[sequencer.current_step].fields
        and is_field_visible(name, sequencer.draft)
    )


async def _drop_pending_input(state: FSMContext, sequencer: StepSequencer) -> None:
    """Abandon an awaited typed answer when a step-screen button is used."""
    if await state.get_state() == RegistrationStates.enter_value.state:
        await state.update_data(pending_field=None)
        await state.set_state(state_for_step(sequencer.current_step))


async def _show_step(
    callback: CallbackQuery,
    sequencer: StepSequencer,
    state: FSMContext,
) -> None:
    await state.set_state(state_for_step(sequencer.current_step))
    await callback.message.edit_text(
        render_step(sequencer),
        parse_mode=ParseMode.HTML,
        reply_markup=step_kb(sequencer),
    )


# ── Entry: "Daftar Sekarang" button ───────────────────────────────────────────

@router.callback_query(MainMenuCb.filter(F.action == "register"))
async def cq_start_registration(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    sequencer.reset()
    await state.update_data(pending_field=None)
    logger.info("Registration started by user %s", callback.from_user.id)
    await _show_step(callback, sequencer, state)
    await callback.answer()


# ── Back to the current step screen ───────────────────────────────────────────

@router.callback_query(FormNavCb.filter(F.action == "show"), ON_SCREEN)
async def cq_show_step(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await state.update_data(pending_field=None)
    await _show_step(callback, sequencer, state)
    await callback.answer()


# ── Open a field ──────────────────────────────────────────────────────────────

@router.callback_query(FieldCb.filter(), ON_SCREEN)
async def cq_edit_field(
    callback: CallbackQuery,
    callback_data: FieldCb,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    name = callback_data.name
    if not _field_on_screen(name, sequencer):
        await callback.answer("Isian ini tidak tersedia di langkah ini.", show_alert=True)
        return

    draft = sequencer.draft
    if FIELDS[name].is_choice:
        await callback.message.edit_text(
            render_field_prompt(name, draft),
            parse_mode=ParseMode.HTML,
            reply_markup=choice_kb(name, draft),
        )
    else:
        await state.set_state(RegistrationStates.enter_value)
        await state.update_data(pending_field=name)
        await callback.message.edit_text(
            render_field_prompt(name, draft),
            parse_mode=ParseMode.HTML,
            reply_markup=cancel_input_kb(),
        )
    await callback.answer()


# ── Choice picked ─────────────────────────────────────────────────────────────

@router.callback_query(ChoiceCb.filter(), ON_SCREEN)
async def cq_choice(
    callback: CallbackQuery,
    callback_data: ChoiceCb,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    name = callback_data.name
    if not _field_on_screen(name, sequencer) or callback_data.value not in FIELDS[name].options:
        await callback.answer("Pilihan tidak valid.", show_alert=True)
        return

    sequencer.set_field(name, callback_data.value)
    await _show_step(callback, sequencer, state)
    await callback.answer()


# ── Typed answer ──────────────────────────────────────────────────────────────

@router.message(RegistrationStates.enter_value)
async def msg_field_value(
    message: Message,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    data = await state.get_data()
    name = data.get("pending_field")

    if name in FIELDS and message.text:
        try:
            value = parse_answer(FIELDS[name].kind, message.text)
        except ValidationError as exc:
            await message.answer(
                f"⚠️ {first_error(exc)}\n\nSilakan ketik ulang:",
                reply_markup=cancel_input_kb(),
            )
            return
        sequencer.set_field(name, value)
    elif name in FIELDS:
        await message.answer(
            "⚠️ Kirim jawaban dalam bentuk teks:",
            reply_markup=cancel_input_kb(),
        )
        return

    await state.update_data(pending_field=None)
    await state.set_state(state_for_step(sequencer.current_step))
    await message.answer(
        render_step(sequencer),
        parse_mode=ParseMode.HTML,
        reply_markup=step_kb(sequencer),
    )


@router.message(StateFilter(*STEP_STATES))
async def msg_screen_hint(message: Message, sequencer: StepSequencer) -> None:
    """Catch accidental text input while a step screen is shown."""
    await message.answer(
        "👆 Gunakan tombol di bawah untuk mengisi formulir.\n\n" + render_step(sequencer),
        parse_mode=ParseMode.HTML,
        reply_markup=step_kb(sequencer),
    )


# ── Navigation ────────────────────────────────────────────────────────────────

@router.callback_query(FormNavCb.filter(F.action == "next"), ON_SCREEN)
async def cq_next_step(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    result = sequencer.advance()
    if not result.ok:
        await callback.answer(render_validation_alert(result), show_alert=True)
        return
    await _show_step(callback, sequencer, state)
    await callback.answer()


@router.callback_query(FormNavCb.filter(F.action == "back"), ON_SCREEN)
async def cq_prev_step(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    sequencer.retreat()
    await _show_step(callback, sequencer, state)
    await callback.answer()


@router.callback_query(FormNavCb.filter(F.action == "submit"), ON_SCREEN)
async def cq_submit(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    result = sequencer.submit()
    if not result.ok:
        await callback.answer(render_validation_alert(result), show_alert=True)
        return

    # Nothing is stored: the draft goes away with the FSM state
    await state.clear()
    logger.info("Registration completed by user %s", callback.from_user.id)
    await callback.message.edit_text(
        render_success(sequencer.draft, result),
        parse_mode=ParseMode.HTML,
        reply_markup=main_menu(),
    )
    await callback.answer("✅ Pendaftaran diterima!")


# ── Size chart (step 4) ───────────────────────────────────────────────────────

@router.callback_query(FormNavCb.filter(F.action == "size_chart"), ON_SCREEN)
async def cq_size_chart(
    callback: CallbackQuery,
    state: FSMContext,
    sequencer: StepSequencer,
) -> None:
    await _drop_pending_input(state, sequencer)
    path = settings.size_chart_file
    if path is None:
        await callback.answer("Panduan ukuran belum tersedia.", show_alert=True)
        return
    await callback.message.answer_photo(
        photo=FSInputFile(path),
        caption="📏 Panduan Ukuran Jersey",
    )
    await callback.answer()
