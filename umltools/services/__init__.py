"""Services for UML import and code generation."""

from .file_storage import FileStorage, get_file_storage
from .parameters import (
    ParameterProvider,
    DictParameterProvider,
    SettingsParameterProvider,
    resolve_parameters,
)
from .orchestrator import JobOrchestrator, get_orchestrator

__all__ = [
    "FileStorage",
    "get_file_storage",
    "ParameterProvider",
    "DictParameterProvider",
    "SettingsParameterProvider",
    "resolve_parameters",
    "JobOrchestrator",
    "get_orchestrator",
]
