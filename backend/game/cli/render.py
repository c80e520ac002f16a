"""Plain-text rendering of game state for the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.logic.enums import WIND_CHARS
from game.logic.game import total_score
from game.logic.history import describe_record, format_change, format_score, latest_first
from game.logic.state import wind_name

if TYPE_CHECKING:
    from game.logic.seating import DiceRoll
    from game.logic.state import GameState
    from shared.build_info import ChangelogEntry


def _wind_label(wind: int) -> str:
    return f"{wind_name(wind).value} {WIND_CHARS[wind]}"


def render_scoreboard(state: GameState) -> str:
    """Render the round header and one line per seat."""
    lines = [
        f"Game {state.round_number} | Prevailing wind: {_wind_label(state.prevailing_wind)}"
        f" | {state.scoring_variation.value} gun",
        "",
    ]
    name_width = max(len(name) for name in state.names)
    for seat, (player, wind) in enumerate(zip(state.players, state.seat_winds(), strict=True)):
        markers = []
        if state.is_dealer(seat):
            markers.append("dealer")
        if seat == state.starting_dealer_index:
            markers.append("started")
        suffix = f"  ({', '.join(markers)})" if markers else ""
        lines.append(
            f"{seat + 1}. {_wind_label(wind):<8} {player.name:<{name_width}} {format_score(player.score):>8}{suffix}",
        )

    total = total_score(state)
    if total != 0:
        lines.append("")
        lines.append(f"warning: scores sum to {format_score(total)}, expected 0")
    return "\n".join(lines)


def render_history(state: GameState) -> str:
    """Render the ledger newest first."""
    if not state.history:
        return "No games recorded yet."

    blocks = []
    for record in latest_first(state):
        lines = [f"Game {record.game}: {describe_record(record)}"]
        lines.extend(f"    {c.name}: {format_change(c)}" for c in record.changes)
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def render_dice(roll: DiceRoll) -> str:
    return f"{' '.join(str(d) for d in roll.dice)} = {roll.total}"


def render_changelog(version: str, commit: str, changelog: tuple[ChangelogEntry, ...]) -> str:
    lines = [f"scorekeeper {version} ({commit})"]
    for entry in changelog:
        lines.append("")
        lines.append(entry.version)
        lines.extend(f"  - {change}" for change in entry.changes)
    return "\n".join(lines)
