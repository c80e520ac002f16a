"""End-to-end checks of the scorekeeper command line against a temporary data dir."""

import pytest

from game.cli.app import build_parser, main


@pytest.fixture(autouse=True)
def _skip_logging_setup(monkeypatch):
    """Keep the test structlog configuration instead of the CLI's."""
    monkeypatch.setattr("game.cli.app.setup_logging", lambda **_kwargs: None)


def _run(capsys, *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestNewGame:
    def test_starts_game_and_shows_scoreboard(self, capsys):
        code, out, _ = _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        assert code == 0
        assert "Game 1" in out
        assert "Prevailing wind: East" in out
        assert "Alice" in out
        assert "(dealer, started)" in out

    def test_refuses_to_replace_running_game(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        code, _, err = _run(capsys, "new", "W", "X", "Y", "Z")

        assert code == 1
        assert "already in progress" in err

    def test_half_gun_variation(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave", "--variation", "half")

        _run(capsys, "win", "1", "--faan", "4", "--from", "2")
        _, out, _ = _run(capsys, "show")

        rows = {line.split()[3]: line.split()[4] for line in out.splitlines() if line[:1].isdigit()}
        assert rows == {"Alice": "32", "Bob": "-16", "Carol": "-8", "Dave": "-8"}

    def test_seeded_shuffle_keeps_everyone(self, capsys):
        code, out, _ = _run(capsys, "new", "Alice", "Bob", "Carol", "Dave", "--shuffle", "--seed", "5")

        assert code == 0
        for name in ("Alice", "Bob", "Carol", "Dave"):
            assert name in out


class TestRecordingRounds:
    def test_self_drawn_win(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        code, out, _ = _run(capsys, "win", "2", "--faan", "3", "--self-drawn")

        assert code == 0
        assert "Game 2" in out
        bob_line = next(line for line in out.splitlines() if "Bob" in line)
        assert "24" in bob_line
        assert "dealer" in bob_line

    def test_tie_rotates_dealer(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        _, out, _ = _run(capsys, "tie")

        bob_line = next(line for line in out.splitlines() if "Bob" in line)
        assert "dealer" in bob_line

    def test_invalid_faan_reports_error_and_keeps_state(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        code, _, err = _run(capsys, "win", "2", "--faan", "14", "--self-drawn")
        _, out, _ = _run(capsys, "show")

        assert code == 1
        assert "faan must be between 0 and 13" in err
        assert "Game 1" in out

    def test_discarder_same_as_winner(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        code, _, err = _run(capsys, "win", "2", "--faan", "3", "--from", "2")

        assert code == 1
        assert "cannot be the discarder" in err

    def test_history_newest_first(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")
        _run(capsys, "tie")
        _run(capsys, "win", "1", "--faan", "4", "--from", "3")

        _, out, _ = _run(capsys, "history")

        lines = out.splitlines()
        assert lines[0] == "Game 2: Alice won from Carol - 4 faan (32 pts)"
        assert "    Alice: +32" in lines
        assert "    Carol: -32" in lines
        assert lines[-1] == "Game 1: Tie (No Winner)"

    def test_empty_history(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        _, out, _ = _run(capsys, "history")

        assert out.strip() == "No games recorded yet."


class TestSessionCommands:
    def test_commands_need_a_game(self, capsys):
        code, _, err = _run(capsys, "show")

        assert code == 1
        assert "no game in progress" in err

    def test_reset_clears_game(self, capsys):
        _run(capsys, "new", "Alice", "Bob", "Carol", "Dave")

        code, out, _ = _run(capsys, "reset")
        show_code, _, _ = _run(capsys, "show")

        assert code == 0
        assert "Game reset." in out
        assert show_code == 1

    def test_dice(self, capsys):
        code, out, _ = _run(capsys, "dice", "--seed", "3")

        dice_part, total = out.strip().split(" = ")
        assert code == 0
        assert sum(int(d) for d in dice_part.split()) == int(total)

    def test_version(self, capsys):
        code, out, _ = _run(capsys, "version")

        assert code == 0
        assert "1.0.0" in out
        assert "Initial release." in out


class TestParser:
    def test_seat_out_of_range_is_usage_error(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["win", "5", "--faan", "3", "--self-drawn"])

    def test_win_needs_self_drawn_or_from(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["win", "1", "--faan", "3"])

    def test_seats_are_converted_to_indices(self):
        args = build_parser().parse_args(["win", "4", "--faan", "3", "--from", "1"])

        assert args.winner == 3
        assert args.discarder == 0
        assert args.self_drawn is False
