from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from microchip_update.cli import main as cli_main
from microchip_update.logging.diagnostics import DiagnosticsLog
from microchip_update.models.config_models import RunConfig
from microchip_update.services.orchestrator import ProcessingError, RunPaths, run
from microchip_update.tabular.file import TabularFile

CHIP_A = "981023456789012"
CHIP_B = "956000001234567"
CHIP_C = "985112345678901"

ADOPTER = {
    "adoption_fname": "Jane",
    "adoption_lname": "Doe",
    "adoption_address": "1 Main St",
    "adoption_city": "San Jose",
    "adoption_state": "",
    "adoption_zip": "95123",
    "adoption_email": "jane@example.org",
    "adoption_home_phone": "(408) 555-1212",
}

OLD_DOGS = [
    {"number": 100, "name": "Buddy"},
    {"number": 200, "name": "Max", "microchip": CHIP_B, "status": "Adopted", **ADOPTER},
    {"number": 300, "name": "Sam", "microchip": CHIP_C},
    {"number": 400, "name": "Gone", "microchip": "123 456 789"},
    {"number": 50, "name": "Ancient", "date_acquired": "2015-03-01", "microchip": "981000000000001"},
]

NEW_DOGS = [
    {"number": 100, "name": "Buddy", "microchip": CHIP_A},
    {"number": 200, "name": "Max", "microchip": CHIP_B, "status": "Available"},
    {"number": 300, "name": "Sam", "microchip": CHIP_C, "status": "Adopted", **ADOPTER},
    {"number": 500, "name": "Newbie", "microchip": "4A0B7C2D1F", "sex": "?"},
    {"number": 600, "name": "Nochip", "status": "Evaluation"},
]


@pytest.fixture()
def inputs(temp_workdir: Path, write_dir) -> RunPaths:
    write_dir(temp_workdir / "data" / "old.csv", OLD_DOGS)
    write_dir(temp_workdir / "data" / "new.csv", NEW_DOGS)
    return RunPaths(
        old=temp_workdir / "data" / "old.csv",
        new=temp_workdir / "data" / "new.csv",
        updates=temp_workdir / "updates.csv",
        errors=temp_workdir / "errors.csv",
    )


def test_run_end_to_end(inputs: RunPaths):
    sink = DiagnosticsLog()
    result = run(RunConfig(), inputs, sink, today=date(2024, 6, 1))

    # dog 50 was acquired before the cutoff year
    assert (result.old.rows, result.old.dogs, result.old.chips) == (5, 4, 3)
    assert (result.new.rows, result.new.dogs, result.new.chips) == (5, 5, 4)

    updates = TabularFile()
    updates.read(inputs.updates)
    rows = {row[12]: row for row in list(updates)[1:]}
    # chip added, returned, adopted, acquired; in new file order
    assert [row[12] for row in list(updates)[1:]] == [CHIP_A, CHIP_B, CHIP_C, "4A0B7C2D1F"]
    assert rows[CHIP_A][:2] == ["NGRR", "Rescue"]
    assert rows[CHIP_B][:2] == ["NGRR", "Rescue"]
    assert rows[CHIP_C][:11] == [
        "Jane", "Doe", "jane@example.org", "1 Main St", "", "San Jose", "CA", "95123", "4085551212", "", "",
    ]
    assert rows[CHIP_C][13:15] == ["2024-06-01", "03/15/2017"]
    assert rows["4A0B7C2D1F"][16] == "Male"
    assert rows[CHIP_A][21] == "NGRR #100"
    assert result.updates == 4

    assert [(r.number, r.message) for r in sink] == [
        ("400", "has microchip 123 456 789 but is not found in new dog report"),
        ("600", "no microchip number recorded"),
        ("500", 'invalid sex "?"'),
    ]
    assert result.anomalies == 3
    assert result.updates_path == inputs.updates


def test_run_audit_missing_microchips(inputs: RunPaths):
    sink = DiagnosticsLog()
    run(RunConfig(audit_missing_microchips=True), inputs, sink)
    assert [(r.number, r.message) for r in sink][-2:] == [
        ("600", "should have a microchip!!"),
        ("500", 'invalid sex "?"'),
    ]


def test_run_cutoff_year_filters_both_snapshots(inputs: RunPaths):
    result = run(RunConfig(cutoff_year=2021), inputs, DiagnosticsLog())
    assert result.old.dogs == 0
    assert result.new.dogs == 0
    assert result.updates == 0


def test_run_missing_input(inputs: RunPaths):
    inputs.old.unlink()
    with pytest.raises(ProcessingError, match="unable to open"):
        run(RunConfig(), inputs)


def test_run_unknown_layout(inputs: RunPaths):
    with pytest.raises(ProcessingError, match="unknown DIR layout"):
        run(RunConfig(old_layout="2019"), inputs)


def test_cli_end_to_end(inputs: RunPaths, write_config: Path, capsys):
    code = cli_main(["data/old", "data/new"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Read 5 rows from data/old.csv" in out
    assert "INFO dog Buddy #100 microchip was added" in out
    assert "INFO dog Max #200 was returned to NGRR" in out
    assert "INFO dog Sam #300 was adopted by Jane Doe" in out
    assert "INFO Wrote 4 rows to updates.csv" in out
    assert "INFO Wrote 3 bad dogs to errors.csv" in out
    assert "SUMMARY old_dogs=4 new_dogs=5 updates=4 anomalies=3" in out
    assert inputs.updates.exists()
    assert inputs.errors.exists()

    updates = TabularFile()
    updates.read(inputs.updates)
    # organization phone comes from the config file
    assert updates[1][8] == "4085551212"
