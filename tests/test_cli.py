# tests/test_cli.py

from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path

import pytest

from phase_loop.cli import main as cli_main
from phase_loop.config import Settings
from phase_loop.errors import CapacityExceeded


@pytest.mark.asyncio
async def test_run_demo_drains_all_tasks(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = replace(
        Settings.from_env(),
        data_dir=tmp_path,
        console_events=True,
        demo_min_delay_ms=0,
        demo_max_delay_ms=3,
        demo_quantity=4,
        demo_seed=11,
    )

    await asyncio.wait_for(cli_main.run_demo(settings), timeout=5.0)

    out = capsys.readouterr().out
    assert "[Event loop]: Started." in out
    assert out.rstrip().endswith("[Event loop]: Call stack empty, finished.")
    assert out.count("task completed") == 4


def test_main_reports_failure_with_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    settings = replace(Settings.from_env(), data_dir=tmp_path, demo_min_delay_ms=9, demo_max_delay_ms=1)
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)

    assert cli_main.main() == 1


@pytest.mark.asyncio
async def test_run_demo_surfaces_fire_and_forget_landing_failure(tmp_path: Path) -> None:
    settings = replace(
        Settings.from_env(),
        data_dir=tmp_path,
        console_events=False,
        queue_capacity=1,
        demo_min_delay_ms=0,
        demo_max_delay_ms=0,
        demo_quantity=6,
        demo_seed=4,
        demo_sequential=False,
    )

    with pytest.raises(CapacityExceeded):
        await asyncio.wait_for(cli_main.run_demo(settings), timeout=5.0)
