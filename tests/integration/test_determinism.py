from __future__ import annotations

from pathlib import Path

from microchip_update.logging.diagnostics import DiagnosticsLog
from microchip_update.models.config_models import RunConfig
from microchip_update.services.orchestrator import RunPaths, run

"""Identical inputs must give byte-identical errors files."""

DOGS_OLD = [
    {"number": n, "name": f"Dog{n}", "microchip": f"9810234567890{n:02d}" if n % 3 else ""}
    for n in range(1, 40)
]
DOGS_NEW = [
    {
        "number": n,
        "name": f"Dog{n}",
        "microchip": f"9810234567890{n:02d}",
        "status": "Adopted" if n % 4 == 0 else "Available",
        "disposition_date": "2023-01-01" if n % 5 == 0 else "",
    }
    for n in range(2, 45)
]


def _run_once(workdir: Path, tag: str) -> tuple[str, str]:
    paths = RunPaths(
        old=workdir / "old.csv",
        new=workdir / "new.csv",
        updates=workdir / f"updates_{tag}.csv",
        errors=workdir / f"errors_{tag}.csv",
    )
    run(RunConfig(), paths, DiagnosticsLog())
    return paths.errors.read_text(encoding="utf-8"), paths.updates.read_text(encoding="utf-8")


def test_identical_inputs_identical_anomalies(temp_workdir: Path, write_dir):
    write_dir(temp_workdir / "old.csv", DOGS_OLD)
    write_dir(temp_workdir / "new.csv", DOGS_NEW)
    errors_a, updates_a = _run_once(temp_workdir, "a")
    errors_b, updates_b = _run_once(temp_workdir, "b")
    assert errors_a == errors_b
    assert updates_a == updates_b
    assert len(errors_a.splitlines()) > 1
