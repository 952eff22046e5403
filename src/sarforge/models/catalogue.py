"""Framework catalogue data models."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Control(BaseModel):
    """A single auditable requirement within a framework."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    guidance: str = ""
    priority: Priority


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    questions: tuple[Control, ...] = ()


class Section(BaseModel):
    """A domain of related controls, e.g. Access Control (AC)."""

    model_config = ConfigDict(frozen=True)

    name: str
    code: str
    categories: tuple[Category, ...] = ()

    def controls(self) -> Iterator[Control]:
        for category in self.categories:
            yield from category.questions


class Catalogue(BaseModel):
    """Static Section -> Category -> Control tree."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    version: str = ""
    standards: tuple[str, ...] = ()
    sections: tuple[Section, ...] = ()

    def walk(self) -> Iterator[tuple[Section, Control]]:
        """Yield (section, control) pairs in catalogue traversal order."""
        for section in self.sections:
            for control in section.controls():
                yield section, control

    def control_ids(self) -> set[str]:
        return {control.id for _, control in self.walk()}
