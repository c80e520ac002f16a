"""Command-line scorekeeper.

Usage:
    scorekeeper new Alice Bob Carol Dave [--variation half] [--shuffle]
    scorekeeper win 2 --faan 3 --self-drawn
    scorekeeper win 1 --faan 4 --from 2
    scorekeeper tie
    scorekeeper show
    scorekeeper history
    scorekeeper dice
    scorekeeper reset
    scorekeeper version

Seats are numbered 1-4 on the command line. The game is saved after every
successful command that changes it and never after a failed one.
"""

from __future__ import annotations

import argparse
import random
import sys
from typing import TYPE_CHECKING

import structlog

from game.cli.render import render_changelog, render_dice, render_history, render_scoreboard
from game.cli.settings import ScorekeeperSettings
from game.logic.enums import ScoringVariation, WinType
from game.logic.exceptions import CorruptStateError, GameRuleError
from game.logic.game import create_initial_state, resolve_tie, resolve_win_by_faan
from game.logic.seating import default_player_names, roll_dice, shuffle_seating
from game.logic.state import NUM_PLAYERS
from game.session.repository import GameStateRepository
from shared.build_info import APP_VERSION, CHANGELOG, GIT_COMMIT
from shared.logging import setup_logging
from shared.storage import LocalFileStore

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.state import GameState

logger = structlog.get_logger()


class SessionError(Exception):
    """The stored session does not allow this command (no game, or one already running)."""


def _seat_arg(value: str) -> int:
    """Parse a 1-based seat number into a 0-based seat index."""
    try:
        seat = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"seat must be a number from 1 to {NUM_PLAYERS}") from None
    if not 1 <= seat <= NUM_PLAYERS:
        raise argparse.ArgumentTypeError(f"seat must be a number from 1 to {NUM_PLAYERS}")
    return seat - 1


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None  # noqa: S311


def _require_game(repo: GameStateRepository) -> GameState:
    state = repo.load()
    if state is None:
        raise SessionError("no game in progress; start one with 'scorekeeper new'")
    return state


def _cmd_new(args: argparse.Namespace, repo: GameStateRepository, settings: ScorekeeperSettings) -> int:
    if repo.load() is not None:
        raise SessionError("a game is already in progress; run 'scorekeeper reset' first")

    names = default_player_names(args.names)
    if args.shuffle:
        names = shuffle_seating(names, _rng(args.seed))
    variation = args.variation or settings.default_variation

    state = create_initial_state(names, variation)
    repo.save(state)
    logger.info("game started", players=names, scoring_variation=state.scoring_variation)
    print(render_scoreboard(state))
    return 0


def _cmd_win(args: argparse.Namespace, repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    state = _require_game(repo)
    win_type = WinType.SELF_DRAWN if args.self_drawn else WinType.DISCARD
    state = resolve_win_by_faan(state, args.winner, win_type, args.discarder, args.faan)
    repo.save(state)
    print(render_scoreboard(state))
    return 0


def _cmd_tie(_args: argparse.Namespace, repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    state = resolve_tie(_require_game(repo))
    repo.save(state)
    print(render_scoreboard(state))
    return 0


def _cmd_show(_args: argparse.Namespace, repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    print(render_scoreboard(_require_game(repo)))
    return 0


def _cmd_history(_args: argparse.Namespace, repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    print(render_history(_require_game(repo)))
    return 0


def _cmd_dice(args: argparse.Namespace, _repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    print(render_dice(roll_dice(_rng(args.seed))))
    return 0


def _cmd_reset(_args: argparse.Namespace, repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    repo.clear()
    logger.info("game reset")
    print("Game reset.")
    return 0


def _cmd_version(_args: argparse.Namespace, _repo: GameStateRepository, _settings: ScorekeeperSettings) -> int:
    print(render_changelog(APP_VERSION, GIT_COMMIT, CHANGELOG))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scorekeeper", description="Keep score for a four-player mahjong session.")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="start a new game")
    new.add_argument("names", nargs=NUM_PLAYERS, metavar="NAME", help="player names in seat order")
    new.add_argument("--variation", choices=[v.value for v in ScoringVariation], help="discard payout rule")
    new.add_argument("--shuffle", action="store_true", help="randomize seat order")
    new.add_argument("--seed", type=int, help="seed for --shuffle")
    new.set_defaults(handler=_cmd_new)

    win = sub.add_parser("win", help="record a win")
    win.add_argument("winner", type=_seat_arg, help="winning seat (1-4)")
    win.add_argument("--faan", type=int, required=True, help="faan count of the winning hand")
    how = win.add_mutually_exclusive_group(required=True)
    how.add_argument("--self-drawn", action="store_true", help="winner drew the winning tile")
    how.add_argument("--from", dest="discarder", type=_seat_arg, metavar="SEAT", help="seat that discarded (1-4)")
    win.set_defaults(handler=_cmd_win)

    sub.add_parser("tie", help="record a round without a winner").set_defaults(handler=_cmd_tie)
    sub.add_parser("show", help="show scores and seating").set_defaults(handler=_cmd_show)
    sub.add_parser("history", help="show every recorded round").set_defaults(handler=_cmd_history)

    dice = sub.add_parser("dice", help="roll three dice")
    dice.add_argument("--seed", type=int, help="seed for the roll")
    dice.set_defaults(handler=_cmd_dice)

    sub.add_parser("reset", help="discard the current game").set_defaults(handler=_cmd_reset)
    sub.add_parser("version", help="show version and changelog").set_defaults(handler=_cmd_version)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = ScorekeeperSettings()
    setup_logging(log_dir=settings.log_dir)

    repo = GameStateRepository(LocalFileStore(settings.data_dir), key=settings.session_key)
    try:
        return args.handler(args, repo, settings)
    except (GameRuleError, CorruptStateError, SessionError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
