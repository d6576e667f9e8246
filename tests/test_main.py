"""
Tests for the command line entry point.
"""

import pytest

from caos_engine.main import main, parse_arguments, parse_damage_notation


class TestParseDamageNotation:
    """Tests for damage notation parsing."""

    @pytest.mark.parametrize(
        "notation,expected",
        [
            ("2d6+3", (2, 6, 3)),
            ("d8", (1, 8, 0)),
            ("1D10-1", (1, 10, -1)),
        ],
    )
    def test_valid(self, notation, expected):
        """Test the supported notation forms."""
        assert parse_damage_notation(notation) == expected

    def test_invalid(self):
        """Test that malformed notation raises ValueError."""
        with pytest.raises(ValueError):
            parse_damage_notation("two dice")


class TestArguments:
    """Tests for argument parsing."""

    def test_roll_defaults(self):
        """Test the roll sub-command defaults."""
        args = parse_arguments(["roll", "3"])
        assert args.command == "roll"
        assert args.dice == 3
        assert args.die == "d6"
        assert args.seed is None

    def test_command_required(self):
        """Test that a sub-command must be given."""
        with pytest.raises(SystemExit):
            parse_arguments([])


class TestCommands:
    """Tests for running the sub-commands."""

    def test_roll(self, capsys):
        """Test a seeded pool roll prints a result."""
        assert main(["--seed", "1", "roll", "3", "--die", "d8"]) == 0
        assert "d8" in capsys.readouterr().out

    def test_roll_repeated_summary(self, capsys):
        """Test that repeated rolls print a total."""
        assert main(["--seed", "1", "roll", "2", "--times", "3"]) == 0
        assert "over 3 rolls" in capsys.readouterr().out

    def test_roll_summary_past_history_size(self, capsys):
        """Test that the total counts every roll, not just those kept in history."""
        assert main(["--seed", "4", "roll", "1", "--times", "60"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 61
        assert "over 60 rolls" in lines[-1]

    def test_penalty_roll(self, capsys):
        """Test that a zero pool is reported as a penalty roll."""
        assert main(["--seed", "3", "roll", "0"]) == 0
        assert "penalty" in capsys.readouterr().out

    def test_damage(self, capsys):
        """Test a critical damage roll."""
        assert main(["--seed", "2", "damage", "1d6+1", "--critical"]) == 0
        out = capsys.readouterr().out
        assert "2d6+1" in out
        assert "critical" in out

    def test_damage_bad_notation(self, capsys):
        """Test that a bad notation returns an error code."""
        assert main(["damage", "banana"]) == 2
        assert "Error" in capsys.readouterr().out

    def test_resource(self, capsys):
        """Test using a preset resource."""
        assert main(["--seed", "5", "resource", "Tocha", "--uses", "10"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Tocha: d8")
        assert "depleted" in out

    def test_unknown_resource(self, capsys):
        """Test that an unknown preset lists the choices."""
        assert main(["resource", "Lanterna"]) == 1
        assert "Presets" in capsys.readouterr().out

    def test_xp_lookup(self, capsys):
        """Test a single threshold lookup."""
        assert main(["xp", "--level", "1", "--experience", "60"]) == 0
        out = capsys.readouterr().out
        assert "50 XP" in out
        assert "10 XP carried over" in out

    def test_xp_table(self, capsys):
        """Test the standard table listing."""
        assert main(["xp"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 15
