"""Pipeline steps for article extraction."""

from .classify import ClassifyStep
from .clean import PreserveFragmentsStep, RestoreFragmentsStep, SanitizeStep, TruncateFooterStep
from .convert import ConvertStep, NormalizeTablesStep, ProjectTextStep
from .metadata import MetadataStep
from .parse import ParseStep
from .select import SelectStep

__all__ = [
    "ClassifyStep",
    "ConvertStep",
    "MetadataStep",
    "NormalizeTablesStep",
    "ParseStep",
    "PreserveFragmentsStep",
    "ProjectTextStep",
    "RestoreFragmentsStep",
    "SanitizeStep",
    "SelectStep",
    "TruncateFooterStep",
]
