"""Errors raised by the report pipeline."""

from __future__ import annotations


class CatalogueError(ValueError):
    """The framework catalogue is malformed (duplicate ids, no sections, unreadable)."""


class ReportRenderError(ValueError):
    """A renderer was handed something that is not a complete report."""
