from __future__ import annotations

from pathlib import Path

import pytest

from microchip_update.config.loader import ConfigError, load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "microchip_update.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_repository_sample_config_is_valid():
    sample = Path(__file__).resolve().parents[2] / "config" / "microchip_update.yml"
    cfg = load_config(sample)
    assert cfg.organization.name == "NGRR"


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("cutoff_year: 2009\n", "2009"),
        ("cutoff_year: '2019'\n", "'2019'"),
        ("old_layout: ancient\n", "ancient"),
        ("default_state: California\n", "California"),
        ("audit_missing_microchips: maybe\n", "maybe"),
        ("organization:\n  website: ngrr.org\n", "website"),
        ("colour: red\n", "colour"),
    ],
)
def test_schema_violations(tmp_path: Path, text: str, fragment: str):
    with pytest.raises(ConfigError, match="config validation failed") as exc_info:
        load_config(_write(tmp_path, text))
    assert fragment in str(exc_info.value)


def test_schema_accepts_full_config(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.default_state == "CA"
    assert cfg.audit_missing_microchips is False
