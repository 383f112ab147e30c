from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from callgeo.config import load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "CALLGEO_CONFIG",
        "CALLGEO_LOG_LEVEL",
        "CALLGEO_DEFAULT_COUNTRY_ISO",
        "CALLGEO_ALTERNATE_LOCATION_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings(env_path=tmp_path / "missing.env")
    assert settings.log_level == "INFO"
    assert settings.default_locale == "en"
    assert settings.default_country_iso is None
    assert settings.alternate_location_enabled is False


def test_precedence_os_env_over_dotenv_over_yaml(monkeypatch, tmp_path: Path) -> None:
    yaml_path = tmp_path / "callgeo.yaml"
    yaml_path.write_text(
        "log_level: WARNING\ndefault_country_iso: FR\nalternate_location_enabled: true\n",
        encoding="utf-8",
    )
    env_path = tmp_path / ".env"
    env_path.write_text("CALLGEO_DEFAULT_COUNTRY_ISO=DE\nCALLGEO_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("CALLGEO_LOG_LEVEL", "ERROR")

    settings = load_settings(yaml_path=yaml_path, env_path=env_path)

    assert settings.log_level == "ERROR"
    assert settings.default_country_iso == "DE"
    assert settings.alternate_location_enabled is True


def test_yaml_path_from_env(monkeypatch, tmp_path: Path) -> None:
    yaml_path = tmp_path / "callgeo.yaml"
    yaml_path.write_text("default_locale: de_DE\n", encoding="utf-8")
    monkeypatch.setenv("CALLGEO_CONFIG", str(yaml_path))

    settings = load_settings(env_path=tmp_path / "missing.env")
    assert settings.default_locale == "de_DE"


def test_invalid_value_raises(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CALLGEO_ALTERNATE_LOCATION_ENABLED", "definitely")
    with pytest.raises(ValidationError):
        load_settings(env_path=tmp_path / "missing.env")
