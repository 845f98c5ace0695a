"""Layer 1: Import - diagram documents to UML models."""

from .base_importer import BaseImporter
from .importer_factory import ImporterFactory
from .slots import DiagramSlot, NodeSlots

__all__ = [
    "BaseImporter",
    "ImporterFactory",
    "DiagramSlot",
    "NodeSlots",
]
