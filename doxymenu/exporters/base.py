import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..config import MenuConfig
from ..models import MenuNode

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """
    Base interface for menu tree output formats.

    Exporters write a whole tree to one file and share the configuration
    (encoding, variable name) of the tool.
    """

    extension = ""

    def __init__(self, config: Optional[MenuConfig] = None):
        self.config = config or MenuConfig()

    @abstractmethod
    def render(self, root: MenuNode) -> Union[str, bytes]:
        """
        Render a menu tree in this exporter's format.

        Args:
            root (MenuNode): Root of the menu tree

        Returns:
            Union[str, bytes]: Text for text formats, bytes for binary ones
        """

    def export(self, root: MenuNode, path: Union[str, Path]) -> Path:
        """Write the rendered tree to ``path``, creating parent directories."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            rendered = self.render(root)
            if isinstance(rendered, bytes):
                output_path.write_bytes(rendered)
            else:
                with open(output_path, "w", encoding=self.config.encoding, newline="") as f:
                    f.write(rendered)
            logger.info(f"Menu tree saved to {output_path}")
        except Exception as e:
            logger.error(f"Error saving {output_path}: {str(e)}")
            raise
        return output_path
