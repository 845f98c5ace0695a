"""Data models for UML import and code generation."""

from .uml import (
    Stereotype,
    BaseEntity,
    BaseDefinition,
    AttributeDefinition,
    MethodDefinition,
    AssociationDefinition,
    GeneralizationDefinition,
    ImplementationDefinition,
    PackageDefinition,
    ComponentBase,
    InterfaceDefinition,
    ClassDefinition,
    EnumerationDefinition,
    ComponentDefinition,
    ModelDefinition,
)
from .job import (
    ImportStep,
    ExportStep,
    UmlJob,
    StepKind,
    StepStatus,
    StepResult,
    JobResult,
    JobEvent,
)

__all__ = [
    # UML models
    "Stereotype",
    "BaseEntity",
    "BaseDefinition",
    "AttributeDefinition",
    "MethodDefinition",
    "AssociationDefinition",
    "GeneralizationDefinition",
    "ImplementationDefinition",
    "PackageDefinition",
    "ComponentBase",
    "InterfaceDefinition",
    "ClassDefinition",
    "EnumerationDefinition",
    "ComponentDefinition",
    "ModelDefinition",
    # Job models
    "ImportStep",
    "ExportStep",
    "UmlJob",
    "StepKind",
    "StepStatus",
    "StepResult",
    "JobResult",
    "JobEvent",
]
