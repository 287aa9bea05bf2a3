"""Emoji Tic-Tac-Toe package exposing the game engine and the web application."""

from .game import EmojiTicTacToe, InvalidCellError, Snapshot
from .ui import app

__all__ = ["EmojiTicTacToe", "InvalidCellError", "Snapshot", "app"]
