"""Shared fixtures for the sheet server tests."""

import pytest


class LoadedDice:
    """Stand-in for random.Random whose randint returns scripted faces in order."""

    def __init__(self, faces: list[int]) -> None:
        self.faces = list(faces)

    def randint(self, a: int, b: int) -> int:
        assert self.faces, "ran out of scripted dice"
        face = self.faces.pop(0)
        assert a <= face <= b, f"face {face} is not on a d{b}"
        return face


@pytest.fixture
def loaded_dice():
    """Factory for scripted dice: ``loaded_dice([4, 2])``."""
    return LoadedDice
