# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from microchip_update.logging.init import reset_logging
from microchip_update.models.layouts import NEW_LAYOUT, ColumnLayout
from microchip_update.tabular.file import TabularFile
from microchip_update.tabular.row import TabularRow

# Values every generated DIR row gets unless a test overrides them
DEFAULT_DOG = {
    "name": "Buddy",
    "age": "3 Years 2 Months",
    "sex": "Male",
    "breed": "Golden Retriever",
    "spayed_neutered": "Yes",
    "status": "Available",
    "location": "San Jose",
    "how_acquired": "Owner Surrender",
    "date_acquired": "2020-05-15",
    "primary_contact_fname": "Pat",
    "primary_contact_lname": "Contact",
    "originating_area": "South Bay",
}


class RecordingSink:
    """Diagnostics sink that just remembers what it was told."""

    def __init__(self) -> None:
        self.reports: list[tuple[object, str]] = []
        self.infos: list[str] = []

    def report(self, subject, message: str) -> None:
        self.reports.append((subject, message))

    def info(self, message: str) -> None:
        self.infos.append(message)

    @property
    def messages(self) -> list[str]:
        return [m for _, m in self.reports]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MICROCHIP_UPDATE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    # setup_logging binds the handler to the sys.stdout current at the time
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def dir_row() -> Callable[..., TabularRow]:
    """Build one DIR row; keyword arguments override DEFAULT_DOG."""

    def _make(number: int | str, layout: ColumnLayout = NEW_LAYOUT, **values: str) -> TabularRow:
        merged = {**DEFAULT_DOG, "number": str(number), **values}
        return TabularRow(merged.get(f, "") for f in layout.fields)

    return _make


@pytest.fixture()
def write_dir(dir_row) -> Callable[..., Path]:
    """Write a DIR export (header plus rows) in the given layout."""

    def _write(path: Path, dogs: list[dict], layout: ColumnLayout = NEW_LAYOUT) -> Path:
        csv = TabularFile()
        for dog in dogs:
            values = dict(dog)
            number = values.pop("number")
            csv.add_row(dir_row(number, layout, **values))
        csv.write(path, layout.header)
        return path

    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """cutoff_year: 2019
old_layout: new
new_layout: new
default_state: CA
audit_missing_microchips: false
organization:
  name: NGRR
  first_name: NGRR
  last_name: Rescue
  email: microchips@ngrr.org
  phone: "4085551212"
  species: Dog
  primary_breed: Golden Retriever
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "microchip_update.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
