"""Framework catalogue and assessment record loading.

Catalogues are YAML files shaped as sections -> categories -> questions.
Sections may also list ``controls`` directly, in which case they form a
single unnamed category.
"""

from __future__ import annotations

import json
import re
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..core.errors import CatalogueError
from ..models.assessment import AssessmentRecord
from ..models.catalogue import Catalogue

BUNDLED_PACKAGE = "sarforge.data.frameworks"
DEFAULT_CATALOGUE = "cmmc-level1"

_CODE_SUFFIX = re.compile(r"\(([A-Z]{2,4})\)\s*$")


def _section_code(section: dict) -> str:
    code = section.get("code")
    if code:
        return str(code)
    m = _CODE_SUFFIX.search(section.get("name", ""))
    if m:
        return m.group(1)
    raise CatalogueError(f"Section '{section.get('name', '?')}' has no code")


def _normalize_control(ctrl: object, section_name: str) -> dict:
    if not isinstance(ctrl, dict):
        raise CatalogueError(f"Control entry {ctrl!r} in section '{section_name}' must be a mapping")
    return {
        "id": ctrl.get("id"),
        "title": ctrl.get("title") or ctrl.get("text", ""),
        "guidance": ctrl.get("guidance", ""),
        "priority": ctrl.get("priority"),
    }


def parse_catalogue(data: dict) -> Catalogue:
    """Build a Catalogue from raw YAML/JSON data.

    Raises:
        CatalogueError: required fields are missing or invalid.
    """
    if not isinstance(data, dict):
        raise CatalogueError("Catalogue document must be a mapping")

    sections: list[dict] = []
    for section in data.get("sections", []) or []:
        if not isinstance(section, dict):
            raise CatalogueError(f"Section entry {section!r} must be a mapping")
        categories = section.get("categories")
        if categories is None:
            categories = [{"name": section.get("name", ""), "questions": section.get("controls", [])}]
        for category in categories:
            if not isinstance(category, dict):
                raise CatalogueError(
                    f"Category entry {category!r} in section '{section.get('name', '?')}' must be a mapping"
                )
        sections.append({
            "name": section.get("name", ""),
            "code": _section_code(section),
            "categories": [
                {
                    "name": category.get("name", ""),
                    "questions": [
                        _normalize_control(q, section.get("name", "")) for q in (category.get("questions") or [])
                    ],
                }
                for category in categories
            ],
        })

    try:
        return Catalogue.model_validate({
            "id": data.get("id", ""),
            "name": data.get("name", ""),
            "version": str(data.get("version", "")),
            "standards": data.get("standards") or data.get("applicable_regulations") or [],
            "sections": sections,
        })
    except ValidationError as e:
        raise CatalogueError(f"Invalid catalogue '{data.get('id', '?')}': {e}") from e


def load_catalogue(path: Path) -> Catalogue:
    """Load a catalogue from a YAML (or JSON) file."""
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8-sig"))
    except (OSError, yaml.YAMLError) as e:
        raise CatalogueError(f"Cannot read catalogue {path}: {e}") from e
    return parse_catalogue(content or {})


def list_bundled_catalogues() -> list[str]:
    data_pkg = resources.files(BUNDLED_PACKAGE)
    return sorted(
        entry.name.removesuffix(".yaml")
        for entry in data_pkg.iterdir()
        if entry.name.endswith(".yaml")
    )


def load_bundled_catalogue(name: str = DEFAULT_CATALOGUE) -> Catalogue:
    """Load a catalogue shipped with the package."""
    entry = resources.files(BUNDLED_PACKAGE) / f"{name}.yaml"
    if not entry.is_file():
        raise CatalogueError(
            f"Unknown bundled catalogue '{name}'. Available: {', '.join(list_bundled_catalogues())}"
        )
    return parse_catalogue(yaml.safe_load(entry.read_text(encoding="utf-8")) or {})


def get_available_catalogues(catalogues_dir: Path) -> list[dict]:
    """List catalogue files in a directory with their headline metadata."""
    catalogues: list[dict] = []

    if not catalogues_dir.exists():
        return catalogues

    for yaml_file in sorted(catalogues_dir.rglob("*.yaml")):
        try:
            content = yaml.safe_load(yaml_file.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError):
            continue
        if content and content.get("id"):
            catalogues.append({
                "id": content["id"],
                "name": content.get("name", ""),
                "version": str(content.get("version", "")),
                "description": content.get("description", ""),
                "path": str(yaml_file),
            })

    return catalogues


def get_catalogue_by_id(catalogue_id: str, catalogues_dir: Path) -> Optional[Catalogue]:
    """Load a specific catalogue from a directory by its ``id``."""
    available = get_available_catalogues(catalogues_dir)
    match = next((c for c in available if c["id"] == catalogue_id), None)

    if not match:
        return None

    return load_catalogue(Path(match["path"]))


def load_assessment(path: Path) -> AssessmentRecord:
    """Load an assessment record from JSON or YAML.

    Accepts both snake_case keys and the camelCase export format
    (``questionEvidence``, ``createdAt``, ``organizationInfo.name``).

    Raises:
        ValueError: the document is not valid JSON/YAML or is not a mapping.
    """
    text = path.read_text(encoding="utf-8-sig")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Assessment document must be a mapping")
    data = dict(data)

    org_info = data.pop("organizationInfo", None)
    if isinstance(org_info, dict) and not data.get("organization_name"):
        data["organization_name"] = org_info.get("name", "")

    return AssessmentRecord.model_validate(data)
