"""
Tests for the command-line entry point, run fully offline.
"""
import json

import pytest

import main
from agentic_board.core.pacing import NoPacing
from agentic_board.tools.generator import ScriptedGenerator


def test_parse_args_defaults_to_interactive():
    args = main.parse_args([])

    assert args.request is None
    assert main.load_request(args) is None


def test_load_request_from_file(tmp_path):
    path = tmp_path / "request.txt"
    path.write_text("  Add CSV export\n", encoding="utf-8")

    args = main.parse_args(["--file", str(path)])

    assert main.load_request(args) == "Add CSV export"


def test_missing_file_exits(tmp_path):
    args = main.parse_args(["--file", str(tmp_path / "missing.txt")])

    with pytest.raises(SystemExit):
        main.load_request(args)


def test_build_engine_offline_uses_scripted_generator():
    args = main.parse_args(["--offline", "--interval", "0", "--iterations", "2", "x"])

    engine = main.build_engine(args)

    assert all(isinstance(agent.generator, ScriptedGenerator) for agent in engine.agents)
    assert all(agent.iteration_budget == 2 for agent in engine.agents)
    assert isinstance(engine.pacing, NoPacing)


def test_offline_run_prints_agent_summaries(capsys):
    code = main.main(["--offline", "--interval", "0", "--iterations", "1",
                      "Build a weekly dashboard"])

    out = capsys.readouterr().out
    assert code == 0
    assert "[agent summaries]" in out
    assert "- uiux (iterations: 1, last kind: uiux-spec): Offline draft responding to:" in out
    assert "- backend (iterations: 1, last kind: backend-plan):" in out


def test_offline_run_json_output(capsys):
    code = main.main(["--offline", "--interval", "0", "--iterations", "1", "--json-output",
                      "Build a weekly dashboard"])

    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{\n"):])
    assert code == 0
    assert payload["status"] == "idle-stopped"
    assert payload["message_count"] == 4


def test_blank_request_is_rejected():
    assert main.main(["--offline", "--interval", "0", "   "]) == 1


def test_interactive_loop_stops_at_sentinel(monkeypatch, capsys):
    answers = iter(["", "Build a weekly dashboard", "EXIT", "never read"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    code = main.main(["--offline", "--interval", "0", "--iterations", "1"])

    out = capsys.readouterr().out
    assert code == 0
    assert out.count("[agent summaries]") == 1
    assert next(answers) == "never read"


def test_zero_max_cycles_is_rejected():
    assert main.main(["--offline", "--interval", "0", "--max-cycles", "0", "x"]) == 1
