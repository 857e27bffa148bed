"""Tests for the command-line entrypoint."""

from __future__ import annotations

import os

import pytest

from decayvote.entrypoints.cli import build_parser, main, parse_votes, resolve_params


class TestParseVotes:
    """Tests for vote list parsing."""

    def test_splits_and_trims(self):
        assert parse_votes(" A, B ,A") == ["A", "B", "A"]

    def test_skips_blank_entries(self):
        assert parse_votes("A,,B, ,") == ["A", "B"]

    def test_empty(self):
        assert parse_votes("") == []


class TestResolveParams:
    """Tests for merging flags with environment configuration."""

    def test_defaults(self):
        args = build_parser().parse_args(["--votes", "A"])
        params = resolve_params(args)
        assert params.decay.kind == "exp"
        assert params.window.duration_seconds == 300.0

    def test_decay_selector_honored(self):
        for kind in ["exp", "linear", "step"]:
            args = build_parser().parse_args(["--votes", "A", "--decay", kind])
            assert resolve_params(args).decay.kind == kind

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("DECAYVOTE__ESCALATOR__BASE", "0.9")
        args = build_parser().parse_args(["--votes", "A", "--base", "0.6"])
        assert resolve_params(args).escalator.base == 0.6

    def test_environment_used_without_flag(self, monkeypatch):
        monkeypatch.setenv("DECAYVOTE__ESCALATOR__BASE", "0.9")
        args = build_parser().parse_args(["--votes", "A"])
        assert resolve_params(args).escalator.base == 0.9


class TestMain:
    """Tests for end-to-end CLI runs on a simulated clock."""

    @pytest.mark.parametrize("decay", ["exp", "linear", "step"])
    def test_majority(self, capsys, decay):
        code = main(["--votes", "A,A,A,B", "--decay", decay, "--simulate"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Consensus: A"

    def test_no_consensus(self, capsys):
        code = main(["--votes", "A,B,A", "--base", "0.75", "--simulate"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "No consensus reached"

    def test_real_clock_with_no_delay(self, capsys):
        code = main(["--votes", "X,Y,Y", "--delay-ms", "0"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Consensus: Y"

    def test_verbose_prints_shares(self, capsys):
        main(["--votes", "A,B", "--simulate", "--delay-ms", "0", "--verbose"])
        out = capsys.readouterr().out
        assert "Votes: 2" in out
        assert "A: weight=1.0000 share=0.5000" in out
        assert "B: weight=1.0000 share=0.5000" in out
        # Tie at 0.5 is below the default 0.51 bar
        assert out.strip().endswith("No consensus reached")

    def test_configuration_error_exit_code(self, capsys):
        code = main(["--votes", "A", "--window", "0"])
        assert code == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_unknown_decay_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["--votes", "A", "--decay", "cubic"])
        assert exc.value.code == 2

    def test_blank_votes_rejected(self):
        with pytest.raises(SystemExit) as exc:
            main(["--votes", " , "])
        assert exc.value.code == 2

    def test_events_log_written(self, tmp_path, capsys):
        code = main(["--votes", "A", "--simulate", "--events-dir", str(tmp_path)])
        assert code == 0
        content = (tmp_path / "events.log").read_text()
        assert "decision winner=A votes=1" in content

    def test_invalid_log_level_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["--votes", "A", "--simulate", "--log-level", "bogus"])
        assert exc.value.code == 2

    def test_log_level_case_insensitive(self, capsys):
        code = main(["--votes", "A", "--simulate", "--log-level", "debug"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Consensus: A"
