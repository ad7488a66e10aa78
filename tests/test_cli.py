from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from keyharvest import cli


def _write_routes(path: Path, routes: list) -> Path:
    path.write_bytes(orjson.dumps(routes))
    return path


def _args(tmp_path: Path, *extra: str) -> list[str]:
    return [*extra, "--env-file", str(tmp_path / "absent.env")]


def test_cli_writes_output_and_prints_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_routes(tmp_path / "routes.json", [{"description": "a"}, {"x": [{"description": "b"}]}])
    output = tmp_path / "out.txt"

    code = cli.main(_args(tmp_path, str(source), "--output", str(output), "--chunk-size", "1", "--json"))

    assert code == cli.EXIT_OK
    assert output.read_text(encoding="utf-8") == "a\nb"
    report = orjson.loads(capsys.readouterr().out)
    assert report["total_descriptions"] == 2
    assert report["total_chunks"] == 2
    assert report["success"] is True


def test_cli_reads_env_file(tmp_path: Path) -> None:
    source = _write_routes(tmp_path / "routes.json", [{"title": "t"}])
    output = tmp_path / "out.txt"
    env_file = tmp_path / ".env"
    env_file.write_text("KEYHARVEST_TARGET_KEY=title\n")

    code = cli.main([str(source), "--output", str(output), "--env-file", str(env_file)])

    assert code == cli.EXIT_OK
    assert output.read_text(encoding="utf-8") == "t"


def test_cli_empty_result_exit_code(tmp_path: Path) -> None:
    source = _write_routes(tmp_path / "routes.json", [{}, {}, []])
    code = cli.main(_args(tmp_path, str(source), "--output", str(tmp_path / "out.txt")))
    assert code == cli.EXIT_EMPTY_RESULT
    assert not (tmp_path / "out.txt").exists()


def test_cli_invalid_configuration_exit_code(tmp_path: Path) -> None:
    source = _write_routes(tmp_path / "routes.json", [{"description": "a"}])
    code = cli.main(_args(tmp_path, str(source), "--max-concurrency", "0"))
    assert code == cli.EXIT_INVALID_CONFIGURATION


def test_cli_decode_failure_exit_code(tmp_path: Path) -> None:
    source = tmp_path / "routes.json"
    source.write_text("not json")
    code = cli.main(_args(tmp_path, str(source), "--output", str(tmp_path / "out.txt")))
    assert code == cli.EXIT_FAILED


def test_cli_unreadable_config_exit_code(tmp_path: Path) -> None:
    source = _write_routes(tmp_path / "routes.json", [{"description": "a"}])
    code = cli.main(_args(tmp_path, str(source), "--config", str(tmp_path)))
    assert code == cli.EXIT_INVALID_CONFIGURATION


def test_cli_unreadable_env_file_exit_code(tmp_path: Path) -> None:
    source = _write_routes(tmp_path / "routes.json", [{"description": "a"}])
    env_dir = tmp_path / "env.d"
    env_dir.mkdir()
    code = cli.main([str(source), "--output", str(tmp_path / "out.txt"), "--env-file", str(env_dir)])
    assert code == cli.EXIT_INVALID_CONFIGURATION
