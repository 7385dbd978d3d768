from .config import MenuConfig
from .models import MenuDataError, MenuNode
from .parser import MenuDataSyntaxError, load_menudata, parse_menudata
from .serializer import dump, dumps
from .validator import MenuValidationError, ValidationIssue, check, validate
from .loader import MenuDataLoader
from .linkcheck import LinkChecker, LinkResult
from .exporters import BaseExporter, ExporterRegistry

__all__ = [
    "MenuConfig",
    "MenuNode",
    "MenuDataError",
    "MenuDataSyntaxError",
    "MenuValidationError",
    "ValidationIssue",
    "parse_menudata",
    "load_menudata",
    "dumps",
    "dump",
    "validate",
    "check",
    "MenuDataLoader",
    "LinkChecker",
    "LinkResult",
    "BaseExporter",
    "ExporterRegistry",
]
