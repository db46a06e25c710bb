import json

import pytest

from terrascope.cli.graph import main


@pytest.fixture
def state_file(tmp_path, sample_bytes):
    path = tmp_path / "terraform.tfstate"
    path.write_bytes(sample_bytes)
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PRETTY", "INCLUDE_STATS", "PRUNE_DANGLING", "LOG_LEVEL"):
        monkeypatch.delenv(f"TERRASCOPE_{name}", raising=False)


def test_prints_graph(state_file, capsys):
    main([str(state_file)])
    out = json.loads(capsys.readouterr().out)
    assert [n["id"] for n in out["nodes"]] == ["aws_vpc.main", "module.app.aws_instance.web"]
    assert "stats" not in out


def test_stats_and_filters(state_file, capsys):
    main([str(state_file), "--stats", "--module", "module.app"])
    out = json.loads(capsys.readouterr().out)
    assert [n["id"] for n in out["nodes"]] == ["module.app.aws_instance.web"]
    assert out["edges"] == []
    assert out["stats"] == {
        "total_nodes": 1,
        "total_edges": 0,
        "resources_by_type": {"aws_instance": 1},
        "resources_by_mode": {"managed": 1},
    }


def test_pretty_from_env(state_file, capsys, monkeypatch):
    monkeypatch.setenv("TERRASCOPE_PRETTY", "true")
    main([str(state_file)])
    assert capsys.readouterr().out.startswith('{\n  "nodes"')


def test_invalid_state_exits(tmp_path, capsys):
    path = tmp_path / "broken.tfstate"
    path.write_bytes(b'{"version":4,"resources":[]}')
    with pytest.raises(SystemExit) as info:
        main([str(path)])
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid tfstate: invalid tfstate: missing terraform_version field" in captured.err


def test_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "nope.tfstate")])
    assert info.value.code == 1
    assert "Failed to read" in capsys.readouterr().err


@pytest.mark.parametrize("level", ["DEBUG", "info"])
def test_accepts_log_level(state_file, capsys, level):
    main([str(state_file), "--log-level", level])
    assert json.loads(capsys.readouterr().out)["nodes"]


def test_invalid_log_level_flag_exits(state_file, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(state_file), "--log-level", "LOUD"])
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid log level: 'LOUD'" in captured.err


def test_invalid_log_level_env_exits(state_file, capsys, monkeypatch):
    monkeypatch.setenv("TERRASCOPE_LOG_LEVEL", "verbose")
    with pytest.raises(SystemExit) as info:
        main([str(state_file)])
    assert info.value.code == 1
    assert "Invalid log level: 'verbose'" in capsys.readouterr().err
