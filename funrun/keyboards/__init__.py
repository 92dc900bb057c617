from funrun.keyboards.callbacks import MainMenuCb, FormNavCb, FieldCb, ChoiceCb
from funrun.keyboards.main_menu import main_menu, back_to_main
from funrun.keyboards.form_kb import step_kb, choice_kb, cancel_input_kb

__all__ = [
    # callbacks
    "MainMenuCb", "FormNavCb", "FieldCb", "ChoiceCb",
    # main menu
    "main_menu", "back_to_main",
    # registration form
    "step_kb", "choice_kb", "cancel_input_kb",
]
