from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from hr_audit.config.loader import SCHEMA_PATH

"""Config schema contract test."""


@pytest.fixture()
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _minimal() -> dict:
    return {
        "source": {
            "workbook": "./data/employees.xlsx",
            "data_sheet": "Employees",
            "approved_units_sheet": "ApprovedUnits",
            "directory_sheet": "Managers",
        }
    }


def test_minimal_valid_config(schema):
    jsonschema.validate(_minimal(), schema)


def test_sample_yaml_validates(schema, sample_config_yaml: str):
    jsonschema.validate(yaml.safe_load(sample_config_yaml), schema)


def test_shipped_example_config_validates(schema):
    from pathlib import Path

    example = Path(__file__).resolve().parents[2] / "config" / "audit.yml"
    jsonschema.validate(yaml.safe_load(example.read_text(encoding="utf-8")), schema)


def test_missing_source_rejected(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate({"output_path": "x.json"}, schema)


def test_extra_key_rejected(schema):
    config = _minimal() | {"extra_field": "not allowed"}
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)


def test_sentinel_requires_field(schema):
    config = _minimal() | {"rename_sentinels": [{"sentinel": "@"}]}
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)


def test_inclusion_policy_enum(schema):
    jsonschema.validate(_minimal() | {"inclusion_policy": "included_only"}, schema)
    with pytest.raises(ValidationError):
        jsonschema.validate(_minimal() | {"inclusion_policy": "sometimes"}, schema)


def test_unknown_reason_key_rejected(schema):
    with pytest.raises(ValidationError):
        jsonschema.validate(_minimal() | {"reasons": {"cond6": "x"}}, schema)
