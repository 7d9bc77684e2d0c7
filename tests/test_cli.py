from __future__ import annotations

import logging
from pathlib import Path

import pytest

from delve.__main__ import main


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # main() installs its own root handler; put pytest's back afterwards
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_prints_level_with_start_marker(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--seed", "5", "--width", "40", "--height", "30"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert len(out) == 31
    level, footer = out[:30], out[30]
    assert all(len(line) <= 40 for line in level)
    assert sum(line.count("@") for line in level) == 1
    assert any("." in line for line in level)
    assert footer.startswith("seed=5 start=(")


def test_same_seed_same_output(capsys: pytest.CaptureFixture[str]) -> None:
    args = ["--seed", "77", "--width", "30", "--height", "20", "--connections", "0"]
    assert main(args) == 0
    first = capsys.readouterr().out
    assert main(args) == 0
    assert capsys.readouterr().out == first


def test_yaml_config_and_flags(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    fp = tmp_path / "level.yaml"
    fp.write_text("width: 35\nheight: 25\nseed: 3\n", encoding="utf-8")

    # Flags take precedence over the file
    assert main(["--config", str(fp), "--height", "22"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 23
    assert out[-1].startswith("seed=3 ")


def test_env_is_applied(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("DELVE_WIDTH", "32")
    monkeypatch.setenv("DELVE_HEIGHT", "24")
    assert main(["--seed", "9"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 25


def test_invalid_size_returns_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--width", "2"]) == 1
    assert capsys.readouterr().out == ""


def test_missing_config_returns_error(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_impossible_level_returns_error(tmp_path: Path) -> None:
    fp = tmp_path / "tiny.yaml"
    fp.write_text(
        "width: 8\nheight: 8\nroom_min_size: 10\nroom_max_size: 11\n"
        "diamond_weight: 0\ncircle_weight: 0\nmax_seed_attempts: 5\n",
        encoding="utf-8",
    )
    assert main(["--config", str(fp), "--seed", "1"]) == 1


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "delve" in capsys.readouterr().out
