"""命令行端到端测试：覆盖文件级错误、三种调用形态与输出文件。"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from pm2_recover.config import get_settings
from pm2_recover.main import main


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PM2_HOME", str(tmp_path / "pm2-home"))
    for key in list(os.environ):
        if key.startswith("PM2_RECOVER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _write_dump(tmp_path: Path, records: list[dict[str, object]], name: str = "dump.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_missing_file_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """输入文件不存在时退出码为 1，stderr 提示 File not found。"""
    code = main(["-f", str(tmp_path / "does-not-exist.json")])
    captured = capsys.readouterr()
    assert code == 1
    assert "File not found" in captured.err
    assert captured.out == ""


def test_invalid_json_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """非法 JSON 退出码为 1，stderr 提示 Error processing file。"""
    path = tmp_path / "invalid.json"
    path.write_text("{ this is not json }", encoding="utf-8")
    code = main(["-f", str(path)])
    assert code == 1
    assert "Error processing file" in capsys.readouterr().err


def test_missing_keys_exit_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """缺少必需字段时退出码为 1，stderr 提示 missing required key。"""
    code = main(["-f", str(_write_dump(tmp_path, [{"name": "app1"}]))])
    assert code == 1
    assert "missing required key" in capsys.readouterr().err


def test_default_dump_path_uses_pm2_home(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """未指定 -f 时读取 $PM2_HOME/dump.pm2。"""
    home = tmp_path / "pm2-home"
    home.mkdir()
    _write_dump(
        home,
        [
            {
                "name": "api",
                "pm_cwd": "/srv/api",
                "pm_exec_path": "/srv/api/server.js",
                "status": "online",
                "args": [],
                "watch": False,
            }
        ],
        name="dump.pm2",
    )
    assert main([]) == 0
    assert f"pm2 start --name api '.{os.sep}server.js'" in capsys.readouterr().out


def test_all_patterns_end_to_end(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """三种调用形态一次输出，顺序与输入一致。"""
    path = _write_dump(
        tmp_path,
        [
            {
                "name": "shell-app",
                "pm_cwd": "/var/www/html",
                "pm_exec_path": "/usr/bin/npm",
                "status": "online",
                "args": ["-c", "npm run start:prod"],
                "watch": False,
            },
            {
                "name": "nvm-app",
                "pm_cwd": "/home/user/backend",
                "pm_exec_path": "/home/user/.nvm/versions/node/v18.0.0/bin/node",
                "status": "online",
                "args": ["node", "dist/server.js"],
                "watch": False,
            },
            {
                "name": "direct-app",
                "pm_cwd": "/home/user/app",
                "pm_exec_path": "/home/user/app/index.js",
                "status": "stopped",
                "args": ["--port", "3000"],
                "watch": True,
            },
        ],
    )

    code = main(["-f", str(path)])
    out = capsys.readouterr().out

    assert code == 0
    assert 'cd "/var/www/html"' in out
    assert "pm2 start --name shell-app" in out
    assert "'npm run start:prod'" in out
    assert 'cd "/home/user/backend"' in out
    assert "'node' -- 'dist/server.js'" in out
    assert 'cd "/home/user/app"' in out
    assert "--watch" in out
    assert f"'.{os.sep}index.js'" in out
    assert "'--port' '3000'" in out
    assert "pm2 stop direct-app" in out
    assert out.index("shell-app") < out.index("nvm-app") < out.index("direct-app")
    assert out.endswith("pm2 stop direct-app\n")


def test_skip_policy_keeps_siblings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--on-error skip 时其余进程照常输出，退出码仍为 1。"""
    path = _write_dump(
        tmp_path,
        [
            {"name": "broken", "pm_cwd": "/a", "pm_exec_path": "/bin/sh", "status": "online", "args": ["-c"], "watch": False},
            {"name": "ok", "pm_cwd": "/b", "pm_exec_path": "/b/run.js", "status": "online", "args": [], "watch": False},
        ],
    )
    code = main(["-f", str(path), "--on-error", "skip"])
    captured = capsys.readouterr()

    assert code == 1
    assert "pm2 start --name ok" in captured.out
    assert "broken" not in captured.out
    assert "broken" in captured.err
    assert "args[1]" in captured.err


def test_abort_policy_writes_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """默认 abort 策略下不输出任何命令。"""
    path = _write_dump(
        tmp_path,
        [{"name": "broken", "pm_cwd": "/a", "pm_exec_path": "/bin/sh", "status": "online", "args": ["-c"], "watch": False}],
    )
    code = main(["-f", str(path)])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "cannot rebuild start command for 'broken'" in captured.err


def test_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """-o 时命令写入文件，stdout 为空。"""
    path = _write_dump(
        tmp_path,
        [{"name": "api", "pm_cwd": "/srv", "pm_exec_path": "/usr/bin/api", "status": "online", "args": ["serve"], "watch": False}],
    )
    target = tmp_path / "out" / "restore.sh"

    assert main(["-f", str(path), "-o", str(target)]) == 0
    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8") == 'cd "/srv"\npm2 start --name api \'/usr/bin/api\' -- \'serve\'\n'


def test_unknown_log_level_is_rejected(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """未知日志级别由参数解析拒绝，退出码为 2。"""
    with pytest.raises(SystemExit) as exc_info:
        main(["-f", str(tmp_path / "dump.json"), "--log-level", "verbose"])
    assert exc_info.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--log-level info 与 INFO 等价，INFO 级别的完成日志出现在 stderr。"""
    path = _write_dump(
        tmp_path,
        [{"name": "api", "pm_cwd": "/srv", "pm_exec_path": "/usr/bin/api", "status": "online", "args": [], "watch": False}],
    )
    assert main(["-f", str(path), "--log-level", "info"]) == 0
    assert "Rebuilt 1 of 1 processes" in capsys.readouterr().err
