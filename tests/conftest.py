"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

import pytest

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

from gambit.core.board import Board, create_initial_board  # noqa: E402
from gambit.core.notation import find_move  # noqa: E402
from gambit.core.rules import RulesEngine  # noqa: E402


@pytest.fixture
def engine() -> RulesEngine:
    return RulesEngine()


@pytest.fixture
def initial_board() -> Board:
    return create_initial_board()


@pytest.fixture
def play(engine: RulesEngine) -> Callable[..., Board]:
    """Apply textual moves (``'e2e4'``, ``'O-O'``, ...) one after another."""

    def _play(board: Board, *moves: str) -> Board:
        for text in moves:
            board = engine.apply_move(board, find_move(board, text, engine))
        return board

    return _play
