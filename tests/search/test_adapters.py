"""Tests for the chess adapters and strategies playing real positions."""

import random

import pytest

from gambit.core.board import create_initial_board
from gambit.core.enums import PieceKind, Player, SpecialMoveType
from gambit.core.move import PlainMove, SpecialMove
from gambit.core.notation import STARTING_FEN, board_from_fen
from gambit.core.position import A1, A8, D1, D5, E1, E4
from gambit.core.rules import RulesEngine
from gambit.search.adapters import (
    MATE_SCORE,
    ChessApplier,
    ChessGenerator,
    MaterialEvaluator,
    PositionalEvaluator,
    piece_square_bonus,
)
from gambit.search.strategies import AlphaBetaStrategy, GreedyStrategy, RandomStrategy

HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"
BACK_RANK_MATE_IN_ONE = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"


def _resigned(player: Player):
    engine = RulesEngine()
    board = create_initial_board()
    if player == Player.BLACK:
        board = engine.apply_move(board, engine.generate_moves(board)[1])
    return engine.apply_move(board, SpecialMove(player, SpecialMoveType.RESIGN))


class TestMaterialEvaluator:
    def test_initial_is_balanced(self) -> None:
        assert MaterialEvaluator(Player.WHITE).evaluate(create_initial_board()) == 0

    def test_perspective(self) -> None:
        board = board_from_fen(STARTING_FEN.replace("rnbqkbnr", "rnb1kbnr"))
        assert MaterialEvaluator(Player.WHITE).evaluate(board) == 900
        assert MaterialEvaluator(Player.BLACK).evaluate(board) == -900

    def test_resignation_scores(self) -> None:
        board = _resigned(Player.WHITE)
        assert MaterialEvaluator(Player.WHITE).evaluate(board) == -MATE_SCORE
        assert MaterialEvaluator(Player.BLACK).evaluate(board) == MATE_SCORE

    def test_draw_scores_zero(self) -> None:
        board = board_from_fen(STALEMATE)
        assert MaterialEvaluator(Player.WHITE).evaluate(board) == 0

    def test_terminal_check_can_be_disabled(self) -> None:
        board = board_from_fen(STALEMATE)
        evaluator = MaterialEvaluator(Player.WHITE, terminal_aware=False)
        assert evaluator.evaluate(board) == 900
        assert evaluator.player == Player.WHITE


class TestPositionalEvaluator:
    def test_initial_is_balanced(self) -> None:
        assert PositionalEvaluator(Player.BLACK).evaluate(create_initial_board()) == 0

    def test_central_knight_beats_corner(self) -> None:
        centre = piece_square_bonus(PieceKind.KNIGHT, Player.WHITE, E4)
        corner = piece_square_bonus(PieceKind.KNIGHT, Player.WHITE, A1)
        assert centre > corner

    def test_mirrored_for_black(self) -> None:
        assert piece_square_bonus(PieceKind.PAWN, Player.WHITE, E4) == piece_square_bonus(
            PieceKind.PAWN, Player.BLACK, E4.offset(0, 1)
        )


class TestAdapters:
    def test_generator_and_applier(self) -> None:
        engine = RulesEngine()
        board = create_initial_board()
        moves = ChessGenerator(engine).generate(board)
        assert len(moves) == 21

        after = ChessApplier(engine).apply(board, moves[-1])
        assert len(after.history) == 1
        assert board == create_initial_board()

    def test_validating_applier(self) -> None:
        engine = RulesEngine()
        applier = ChessApplier(engine, validate=True)
        with pytest.raises(ValueError):
            applier.apply(create_initial_board(), SpecialMove(Player.BLACK, SpecialMoveType.RESIGN))


class TestStrategiesOnChess:
    def test_alpha_beta_takes_hanging_queen(self) -> None:
        engine = RulesEngine(caching=True)
        strategy = AlphaBetaStrategy(
            MaterialEvaluator(Player.WHITE, engine),
            ChessGenerator(engine),
            ChessApplier(engine),
            max_depth=1,
        )
        move = strategy.select(board_from_fen(HANGING_QUEEN))
        assert isinstance(move, PlainMove)
        assert (move.from_pos, move.to_pos) == (D1, D5)
        assert move.is_capture

    @pytest.mark.slow
    def test_alpha_beta_finds_mate_in_one(self) -> None:
        engine = RulesEngine(caching=True)
        strategy = AlphaBetaStrategy(
            MaterialEvaluator(Player.WHITE, engine),
            ChessGenerator(engine),
            ChessApplier(engine),
            max_depth=2,
        )
        move = strategy.select(board_from_fen(BACK_RANK_MATE_IN_ONE))
        assert isinstance(move, PlainMove)
        assert (move.from_pos, move.to_pos) == (A1, A8)
        assert strategy.last_result.score == MATE_SCORE

    def test_greedy_minimises_opponent_score(self) -> None:
        engine = RulesEngine()
        strategy = GreedyStrategy(
            MaterialEvaluator(Player.BLACK, engine),
            ChessGenerator(engine),
            ChessApplier(engine),
        )
        move = strategy.select(board_from_fen(HANGING_QUEEN))
        assert (move.from_pos, move.to_pos) == (D1, D5)

    def test_random_plays_legal_moves(self) -> None:
        engine = RulesEngine()
        strategy = RandomStrategy(ChessGenerator(engine), random.Random(7))
        board = create_initial_board()
        move = strategy.select(board)
        assert move in engine.generate_moves(board)

    @pytest.mark.parametrize("player", [Player.WHITE, Player.BLACK])
    def test_no_move_after_resignation(self, player: Player) -> None:
        engine = RulesEngine()
        board = _resigned(player)
        generator = ChessGenerator(engine)
        applier = ChessApplier(engine)
        evaluator = MaterialEvaluator(player, engine)
        assert RandomStrategy(generator).select(board) is None
        assert GreedyStrategy(evaluator, generator, applier).select(board) is None
        assert AlphaBetaStrategy(evaluator, generator, applier).select(board) is None

    def test_king_safety_respected(self) -> None:
        engine = RulesEngine()
        board = board_from_fen("4k3/8/8/8/8/8/3q4/4K3 w - - 0 1")
        strategy = RandomStrategy(ChessGenerator(engine), random.Random(0))
        for _ in range(10):
            move = strategy.select(board)
            assert move is not None
            if isinstance(move, PlainMove):
                assert move.from_pos == E1
