import logging
from typing import Dict, List, Optional, Type

from ..config import MenuConfig
from .base import BaseExporter

logger = logging.getLogger(__name__)


class UnknownFormatError(KeyError):
    """Raised when no exporter is registered under a format name."""


class ExporterRegistry:
    """Registry for output formats."""

    _exporters: Dict[str, Type[BaseExporter]] = {}

    @classmethod
    def register(cls, name: str, exporter_class: Type[BaseExporter]) -> None:
        """
        Register an exporter.

        Args:
            name (str): Format name used on the command line
            exporter_class (Type[BaseExporter]): The exporter class
        """
        cls._exporters[name] = exporter_class
        logger.debug(f"Registered exporter: {name}")

    @classmethod
    def get_exporter(cls, name: str, config: Optional[MenuConfig] = None) -> BaseExporter:
        """
        Create the exporter for a format.

        Args:
            name (str): The format name
            config (Optional[MenuConfig]): Configuration handed to the exporter

        Returns:
            BaseExporter: A new exporter instance

        Raises:
            UnknownFormatError: If no exporter is registered under ``name``
        """
        try:
            exporter_class = cls._exporters[name]
        except KeyError:
            raise UnknownFormatError(
                f"Unknown format {name!r}, expected one of: {', '.join(cls.list_formats())}"
            ) from None
        return exporter_class(config)

    @classmethod
    def list_formats(cls) -> List[str]:
        """
        List all registered format names.

        Returns:
            List[str]: Names of registered exporters
        """
        return list(cls._exporters.keys())
