import json

from ..models import MenuNode
from .base import BaseExporter


class JsonExporter(BaseExporter):
    """Writes the tree in its mapping form, readable back by the loader."""

    extension = ".json"

    def render(self, root: MenuNode) -> str:
        return json.dumps(root.to_dict(), indent=2, ensure_ascii=False) + "\n"
