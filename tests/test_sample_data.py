from pathlib import Path

import pytest

from basel_compliance.forms.fields import FIELD_IDS
from basel_compliance.forms.sample_data import load_sample_scenario

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "config" / "test_data" / "basel_test_data.yaml"


def test_bundled_scenario_loads_and_is_coerced():
    scenario = load_sample_scenario(SAMPLE_PATH)

    assert scenario.scenario.startswith("Spent lead-acid batteries")
    assert set(scenario.data) <= FIELD_IDS
    assert scenario.data["4_total_intended_shipments_count"] == 24
    assert scenario.data["8_intended_carrier_means_road"] == 1
    assert scenario.data["3_notification_details_notification_no"] == "CA-2025-0417"


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_sample_scenario(tmp_path / "nope.yaml")


def test_missing_required_key(tmp_path: Path):
    path = tmp_path / "scenario.yaml"
    path.write_text("scenario: partial\n", encoding="utf-8")

    with pytest.raises(ValueError, match="data"):
        load_sample_scenario(path)


def test_unknown_field_is_rejected(tmp_path: Path):
    path = tmp_path / "scenario.yaml"
    path.write_text("scenario: bad\ndata:\n  not_a_field: 1\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_sample_scenario(path)
