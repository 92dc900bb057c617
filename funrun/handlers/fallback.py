"""
Global fallback handler - included LAST in the dispatcher.

Catches any callback query that no other router handled, e.g. stale form
keyboards after a restart (MemoryStorage is wiped on redeploy).  A chat that
is still mid-registration keeps its draft and gets its current step redrawn.
"""
import logging

from aiogram import Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery

from funrun.keyboards import main_menu, step_kb
from funrun.middlewares import SESSION_KEY
from funrun.services import StepSequencer, render_step
from funrun.states import RegistrationStates, state_for_step

logger = logging.getLogger(__name__)
router = Router(name="fallback")


@router.callback_query()
async def cq_fallback(callback: CallbackQuery, state: FSMContext) -> None:
    logger.debug("Unhandled callback %r", callback.data)
    await callback.answer("⚠️ Tombol sudah kedaluwarsa.", show_alert=True)

    if await state.get_state() in RegistrationStates:
        data = await state.get_data()
        sequencer = StepSequencer.from_dict(data.get(SESSION_KEY))
        await state.update_data(pending_field=None)
        await state.set_state(state_for_step(sequencer.current_step))
        text, markup = render_step(sequencer), step_kb(sequencer)
    else:
        await state.clear()
        text, markup = "🔄 <b>Sesi direset.</b> Kembali ke menu utama:", main_menu()

    try:
        await callback.message.edit_text(text, parse_mode=ParseMode.HTML, reply_markup=markup)
    except TelegramBadRequest:
        pass  # Message too old to edit
