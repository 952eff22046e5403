"""Framework catalogue integrity checks and control lookup."""

from __future__ import annotations

from ..core.errors import CatalogueError
from ..models.catalogue import Catalogue, Control, Section


def validate_catalogue(catalogue: Catalogue) -> Catalogue:
    """Fail fast on a catalogue the pipeline cannot analyse.

    Raises:
        CatalogueError: no sections, a section name or code used more than
            once, or a control id used more than once.
    """
    if not catalogue.sections:
        raise CatalogueError(f"Catalogue '{catalogue.id or catalogue.name}' has no sections")

    # findings are grouped back into domains by section name and code
    for attr in ("name", "code"):
        values = [getattr(section, attr) for section in catalogue.sections]
        duplicates = sorted({v for v in values if values.count(v) > 1})
        if duplicates:
            raise CatalogueError(f"Duplicate section {attr} '{duplicates[0]}'")

    seen: dict[str, str] = {}
    for section, control in catalogue.walk():
        if control.id in seen:
            raise CatalogueError(
                f"Duplicate control id '{control.id}' in sections "
                f"'{seen[control.id]}' and '{section.name}'"
            )
        seen[control.id] = section.name

    return catalogue


def get_all_controls(catalogue: Catalogue) -> list[Control]:
    """Flatten the catalogue into controls in traversal order."""
    return [control for _, control in catalogue.walk()]


def get_section_for_control(catalogue: Catalogue, control_id: str) -> Section | None:
    for section, control in catalogue.walk():
        if control.id == control_id:
            return section
    return None
