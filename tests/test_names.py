"""
Tests for room code and display name generation.
"""

import random

from relay.names import (
    ROOM_CODE_CHARS,
    ROOM_CODE_LENGTH,
    USERNAME_PARTS,
    generate_display_name,
    generate_room_code,
)


class SequenceRandom:
    """Random stand-in returning preset values from choice()."""

    def __init__(self, values):
        self._values = iter(values)

    def choice(self, seq):
        return next(self._values)


def test_alphabet_has_36_characters():
    assert len(ROOM_CODE_CHARS) == 36
    assert len(set(ROOM_CODE_CHARS)) == 36


def test_generated_codes_use_fixed_alphabet():
    rng = random.Random(1234)
    for _ in range(500):
        code = generate_room_code(lambda c: False, rng)
        assert len(code) == ROOM_CODE_LENGTH
        assert all(ch in ROOM_CODE_CHARS for ch in code)


def test_generate_room_code_redraws_on_collision():
    rng = SequenceRandom(list("AAAAAA") + list("AAAAAA") + list("B2B2B2"))
    taken = {"AAAAAA"}
    seen = []

    def is_taken(code):
        seen.append(code)
        return code in taken

    code = generate_room_code(is_taken, rng)

    assert code == "B2B2B2"
    assert seen == ["AAAAAA", "AAAAAA", "B2B2B2"]


def test_display_name_has_one_word_per_category():
    rng = random.Random(99)
    for _ in range(50):
        color, animal, fruit = generate_display_name(rng).split("-")
        assert color in USERNAME_PARTS["colors"]
        assert animal in USERNAME_PARTS["animals"]
        assert fruit in USERNAME_PARTS["fruits"]


def test_display_name_uses_default_random_source():
    name = generate_display_name()
    assert len(name.split("-")) == 3
