"""Qt bridge to run a strategy in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.board import Board
from gambit.core.move import Move
from gambit.search.interfaces import Strategy
from gambit.search.strategies import AlphaBetaStrategy

_LOGGER = logging.getLogger(__name__)


class StrategyWorker(QObject):
    """Thread-affine worker that asks a strategy for moves on demand.

    Move it to a ``QThread`` and connect a queued signal to
    :meth:`request_move`; results come back through the signals below,
    tagged with the caller's request id.
    """

    move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_strategy")

    def __init__(self, strategy: Strategy[Board, Move]) -> None:
        super().__init__()
        self._strategy = strategy
        self._cancel_event = threading.Event()

    @property
    def strategy(self) -> Strategy[Board, Move]:
        return self._strategy

    @pyqtSlot(object, int)
    def request_move(self, board_obj: object, request_id: int) -> None:
        """Select a move for *board_obj* and emit the outcome."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Strategy received invalid board")
            return

        self._cancel_event.clear()
        try:
            if isinstance(self._strategy, AlphaBetaStrategy):
                move = self._strategy.select(board_obj, is_cancelled=self._cancel_event.is_set)
            else:
                move = self._strategy.select(board_obj)
        except Exception as exc:
            _LOGGER.debug("Request %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return

        self.move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Stop an alpha-beta search early and discard the result of any search in progress."""
        self._cancel_event.set()

    def set_strategy(self, strategy: Strategy[Board, Move]) -> None:
        """Swap the strategy (takes effect on the next request)."""
        self._strategy = strategy
