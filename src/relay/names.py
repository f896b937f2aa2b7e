"""
Room Code and Display Name Generation

Room codes are drawn uniformly from a fixed 36-character alphabet and
re-drawn while they collide with an active room. Display names are
pseudonyms built from three small word lists; they are not unique.
"""

import random
import string
from typing import Callable, Optional

ROOM_CODE_LENGTH = 6
ROOM_CODE_CHARS = string.ascii_uppercase + string.digits

USERNAME_SEPARATOR = "-"
USERNAME_PARTS = {
    "colors": ["Red", "Blue", "Green", "Yellow", "Purple"],
    "animals": ["Lion", "Tiger", "Bear", "Wolf", "Eagle"],
    "fruits": ["Apple", "Banana", "Orange", "Grape", "Mango"],
}


def generate_room_code(
    is_taken: Callable[[str], bool],
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a room code that is not currently in use.

    The caller must store the code before yielding control to the event
    loop, otherwise another connection could claim the same code.

    Args:
        is_taken: Predicate returning True if a code is already active
        rng: Optional random source (defaults to the random module)

    Returns:
        str: A fresh room code
    """
    rng = rng or random
    while True:
        code = "".join(
            rng.choice(ROOM_CODE_CHARS) for _ in range(ROOM_CODE_LENGTH)
        )
        if not is_taken(code):
            return code


def generate_display_name(rng: Optional[random.Random] = None) -> str:
    """Pick one word from each category, e.g. ``Blue-Wolf-Mango``."""
    rng = rng or random
    return USERNAME_SEPARATOR.join(
        rng.choice(words) for words in USERNAME_PARTS.values()
    )
