"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from chessprog.core.board import Board
from chessprog.core.notation import board_from_placement

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def kings_only() -> Board:
    """White king on e1, black king on d8, nothing else."""
    return board_from_placement("3k4/8/8/8/8/8/8/4K3")
