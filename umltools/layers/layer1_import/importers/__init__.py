"""Diagram importers."""

from .gliffy_importer import GliffyImporter

__all__ = ["GliffyImporter"]
