"""
Centralized CallbackData factories.
Telegram limits callback_data to 64 bytes - all prefixes are kept short.
"""
from aiogram.filters.callback_data import CallbackData


class MainMenuCb(CallbackData, prefix="mm"):
    action: str           # main | register | about


class FormNavCb(CallbackData, prefix="nav"):
    action: str           # show | next | back | submit | size_chart


class FieldCb(CallbackData, prefix="fld"):
    name: str             # RegistrationDraft field to edit


class ChoiceCb(CallbackData, prefix="chc"):
    name: str             # choice field
    value: str            # option value
