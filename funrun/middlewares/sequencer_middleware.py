"""
Registration session middleware.
Injects the chat's StepSequencer into handler data under key "sequencer"
and writes it back to FSM storage after the handler returns.
"""
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.fsm.context import FSMContext
from aiogram.types import TelegramObject

from funrun.services.sequencer import StepSequencer

SESSION_KEY = "registration"


class SequencerMiddleware(BaseMiddleware):
    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        state: FSMContext | None = data.get("state")
        if state is None:
            return await handler(event, data)

        stored = await state.get_data()
        sequencer = StepSequencer.from_dict(stored.get(SESSION_KEY))
        data["sequencer"] = sequencer

        result = await handler(event, data)
        # A submitted draft is discarded together with the FSM state
        if not sequencer.closed:
            await state.update_data({SESSION_KEY: sequencer.to_dict()})
        return result
