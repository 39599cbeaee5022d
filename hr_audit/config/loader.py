from __future__ import annotations

import json
from dataclasses import fields as dataclass_fields
from datetime import date
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from hr_audit.models.config_models import (
    IMPORTANT_FIELD_PROFILES,
    INCLUSION_POLICIES,
    RETAIN_ALL,
    AuditConfig,
    DirectoryColumns,
    EngineConfig,
    ReasonPhrases,
    RenameSentinel,
    SourceConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (config/audit.yml by default)
- Validate shape against config_schema.json (shipped next to this module)
- Apply defaults for optional keys
- Resolve the named important-fields profile
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

DEFAULT_CONFIG_PATH = Path("config/audit.yml")
DEFAULT_OUTPUT_PATH = "./out/batches.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or if the
            config data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _resolve_important_fields(data: dict[str, Any]) -> tuple[str, tuple[str, ...]]:
    profiles = dict(IMPORTANT_FIELD_PROFILES)
    for name, field_list in (data.get("important_fields_profiles") or {}).items():
        profiles[name] = tuple(field_list)
    profile = data.get("important_fields_profile", "minimal")
    if profile not in profiles:
        raise ConfigError(
            f"unknown important_fields_profile '{profile}' (available: {sorted(profiles)})"
        )
    return profile, profiles[profile]


def _parse_epoch(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ConfigError(f"invalid date_epoch '{raw}': {e}") from e


def _overlay(cls: type, raw: dict[str, Any] | None, *, as_tuple: bool = False) -> Any:
    """Instantiate a config dataclass, overriding defaults with ``raw`` keys."""
    if not raw:
        return cls()
    known = {f.name for f in dataclass_fields(cls)}
    kwargs = {k: (tuple(v) if as_tuple else v) for k, v in raw.items() if k in known}
    return cls(**kwargs)


def build_engine_config(data: dict[str, Any]) -> EngineConfig:
    """Build the engine section from already validated config data."""
    profile, important = _resolve_important_fields(data)
    policy = data.get("inclusion_policy", RETAIN_ALL)
    if policy not in INCLUSION_POLICIES:
        raise ConfigError(f"unknown inclusion_policy '{policy}'")

    defaults = EngineConfig()
    epoch = _parse_epoch(data.get("date_epoch"))
    return EngineConfig(
        rename_sentinels=tuple(
            RenameSentinel(sentinel=s["sentinel"], field=s["field"].strip())
            for s in data.get("rename_sentinels") or []
        ),
        important_fields=important,
        important_fields_profile=profile,
        job_category_sentinel=data.get("job_category_sentinel", defaults.job_category_sentinel),
        date_fields=tuple(data.get("date_fields", defaults.date_fields)),
        date_epoch=epoch or defaults.date_epoch,
        unit_field=data.get("unit_field", defaults.unit_field),
        directory_columns=_overlay(DirectoryColumns, data.get("directory_columns"), as_tuple=True),
        reasons=_overlay(ReasonPhrases, data.get("reasons")),
        inclusion_policy=policy,
    )


def load_config(path: Path) -> AuditConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    src = data["source"]
    source = SourceConfig(
        workbook=src["workbook"],
        data_sheet=src["data_sheet"],
        approved_units_sheet=src["approved_units_sheet"],
        directory_sheet=src["directory_sheet"],
        header_row=src.get("header_row", 1),
    )
    return AuditConfig(
        source=source,
        output_path=data.get("output_path", DEFAULT_OUTPUT_PATH),
        engine=build_engine_config(data),
    )
