"""3-layer configuration system for sarforge.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.sarforge/config.yaml)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

CONFIG_DIR = ".sarforge"

DEFAULT_CONFIG: dict = {
    "organization": {
        "name": "",
    },
    "catalogue": {
        "bundled": "cmmc-level1",
        "path": "",
    },
    "assessor": {
        "name": "Self-Assessment",
        "organization": "",
        "credentials": [],
        "contact_info": "",
    },
    "scope": {
        "assessment_type": "Gap Analysis",
        "assessment_scope": [],
        "methodology": "",
        "systems_assessed": [],
        "documentation_reviewed": [],
        "interviews_conducted": [],
    },
    "report": {
        "target_level": "Level 2",
    },
    "output": {
        "format": "html",
        "dir": "reports",
        "max_recommendations": 5,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .sarforge/config.yaml.

    A missing or unreadable file yields an empty dict so defaults apply.
    """
    config_path = project_path / CONFIG_DIR / "config.yaml"
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def get_effective_config(
    project_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for a report run."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if project_path is not None:
        project_config = load_project_config(project_path)
        if project_config:
            config = deep_merge(config, project_config)
        config["_project_path"] = str(project_path)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config


def scope_overrides(config: dict) -> dict:
    """Non-empty scope settings, ready to pass as report scope overrides."""
    scope = config.get("scope")
    if not isinstance(scope, dict):
        return {}
    return {key: value for key, value in scope.items() if value}
