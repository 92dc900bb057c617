"""
Common handlers: /start, /cancel, main menu routing, event info.
"""
import logging

from aiogram import F, Router, html
from aiogram.enums import ParseMode
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from funrun.config import settings
from funrun.keyboards import MainMenuCb, back_to_main, main_menu
from funrun.services import render_about

logger = logging.getLogger(__name__)
router = Router(name="common")


def _welcome_text(first_name: str) -> str:
    return (
        f"🏃 Selamat datang di {html.bold(settings.EVENT_NAME)}, {html.quote(first_name)}!\n\n"
        f"Isi formulir pendaftaran untuk mengamankan tempat Anda:\n"
        f"• 📧 Email\n"
        f"• 👤 Informasi peserta\n"
        f"• ❤️ Kuesioner kesehatan\n"
        f"• 👕 Race pack\n"
        f"• 💳 Kategori pendaftar\n\n"
        f"Pilih menu:"
    )


# ── /start ────────────────────────────────────────────────────────────────────

@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext) -> None:
    await state.clear()
    name = message.from_user.first_name if message.from_user else ""
    await message.answer(
        _welcome_text(name), parse_mode=ParseMode.HTML, reply_markup=main_menu()
    )


# ── /cancel ───────────────────────────────────────────────────────────────────

@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext) -> None:
    if await state.get_state() is not None and message.from_user:
        logger.info("Registration cancelled by user %s", message.from_user.id)
    await state.clear()
    await message.answer(
        "❌ Pendaftaran dibatalkan. Data Anda tidak disimpan.",
        reply_markup=main_menu(),
    )


# ── Main menu callbacks ───────────────────────────────────────────────────────

@router.callback_query(MainMenuCb.filter(F.action == "main"))
async def cq_main_menu(callback: CallbackQuery, state: FSMContext) -> None:
    await state.clear()
    await callback.message.edit_text(
        f"🏃 {html.bold(settings.EVENT_NAME)}\n\nPilih menu:",
        parse_mode=ParseMode.HTML,
        reply_markup=main_menu(),
    )
    await callback.answer()


@router.callback_query(MainMenuCb.filter(F.action == "about"))
async def cq_about(callback: CallbackQuery) -> None:
    await callback.message.edit_text(
        render_about(), parse_mode=ParseMode.HTML, reply_markup=back_to_main()
    )
    await callback.answer()
