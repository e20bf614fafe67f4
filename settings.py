"""Difficulty presets shared by the terminal and tkinter front-ends."""

from game_logic import InvalidConfig, check_config

DIFFICULTIES = {
    "Beginner": (9, 9, 10),
    "Intermediate": (16, 16, 40),
    "Expert": (16, 30, 99),
}
DEFAULT_DIFFICULTY = "Beginner"

MENU_CHOICES = {
    "1": "Beginner",
    "2": "Intermediate",
    "3": "Expert",
}
CUSTOM_CHOICE = "4"


def validate_board(rows, cols, mines):
    return check_config(rows, cols, mines)


def resolve_choice(choice, custom=None):
    """Map a menu choice to ``((rows, cols, mines), message)``.

    Unknown choices and invalid custom boards fall back to the default
    preset; ``message`` then says why, otherwise it is ``None``.
    """
    choice = str(choice).strip()
    if choice in MENU_CHOICES:
        return DIFFICULTIES[MENU_CHOICES[choice]], None
    if choice == CUSTOM_CHOICE and custom is not None:
        try:
            return validate_board(*custom), None
        except InvalidConfig as exc:
            return DIFFICULTIES[DEFAULT_DIFFICULTY], f"Invalid settings ({exc})! Using beginner mode."
    return DIFFICULTIES[DEFAULT_DIFFICULTY], "Invalid choice! Using beginner mode."
