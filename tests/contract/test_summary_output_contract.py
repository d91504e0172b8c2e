from __future__ import annotations

import re
from pathlib import Path

from microchip_update.cli import main as cli_main

SUMMARY_RE = re.compile(
    r"^SUMMARY old_dogs=\d+ new_dogs=\d+ updates=\d+ anomalies=\d+ elapsed_sec=[0-9.]+$"
)


def test_summary_is_last_line_and_matches_format(temp_workdir: Path, write_dir, capsys):
    write_dir(temp_workdir / "old.csv", [{"number": 1}, {"number": 2}])
    write_dir(temp_workdir / "new.csv", [{"number": 1, "microchip": "981023456789012"}, {"number": 2}])
    assert cli_main(["old", "new"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert SUMMARY_RE.match(lines[-1])
    assert sum(1 for line in lines if line.startswith("SUMMARY")) == 1
