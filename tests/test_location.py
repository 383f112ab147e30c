from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from callgeo.location import (
    PrefixLocationSource,
    load_alternate_source,
    load_area_codes,
    number_key,
)

FIXTURE = Path(__file__).parent / "fixtures" / "area_codes.json"


def test_number_key_strips_prefixes_and_separators() -> None:
    assert number_key("+86 10 1234 5678") == "861012345678"
    assert number_key("0044 20 8366 1177") == "442083661177"
    assert number_key(None) == ""


def test_fixture_dataset_loads_and_matches() -> None:
    source = PrefixLocationSource(load_area_codes(FIXTURE))
    hit = source.lookup("12345")
    assert hit is not None
    assert hit.address == "Custom Region"
    assert hit.source == "fixture"


def test_longest_prefix_wins(tmp_path: Path) -> None:
    payload = [
        {"prefix": "86", "address": "China", "source": "unit"},
        {"prefix": "8610", "address": "Beijing", "source": "unit"},
        {"prefix": "", "address": "ignored"},
        {"prefix": "44", "address": ""},
    ]
    path = tmp_path / "codes.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    entries = load_area_codes(path)
    assert [e.area_code for e in entries] == ["86", "8610"]

    source = PrefixLocationSource(entries)
    beijing = source.lookup("+86 10 8888 8888")
    assert beijing is not None
    assert (beijing.address, beijing.area_code) == ("Beijing", "8610")

    china = source.lookup("+86 20 8888 8888")
    assert china is not None
    assert china.address == "China"

    assert source.lookup("+44 20 8366 1177") is None
    assert source.lookup("") is None


def test_load_area_codes_rejects_non_array(tmp_path: Path) -> None:
    path = tmp_path / "codes.json"
    path.write_text('{"prefix": "86"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_area_codes(path)


def test_no_path_means_no_alternate_source() -> None:
    assert load_alternate_source(None) is None


def test_missing_dataset_yields_no_source_and_warns(tmp_path: Path, caplog) -> None:
    missing = tmp_path / "missing.json"
    with caplog.at_level(logging.WARNING, logger="callgeo.location"):
        assert load_alternate_source(missing) is None
    assert caplog.records
    assert caplog.records[0].source_path == str(missing)


def test_unusable_dataset_yields_no_source(tmp_path: Path) -> None:
    path = tmp_path / "codes.json"
    path.write_text("not json", encoding="utf-8")
    assert load_alternate_source(path) is None


def test_configured_dataset_builds_source() -> None:
    source = load_alternate_source(FIXTURE)
    assert source is not None
    hit = source.lookup("+86 10 6666 6666")
    assert hit is not None
    assert hit.address == "Beijing"
