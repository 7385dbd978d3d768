from ..models import MenuNode
from ..serializer import dumps
from .base import BaseExporter


class JavaScriptExporter(BaseExporter):
    """Writes ``menudata.js`` exactly as Doxygen lays it out."""

    extension = ".js"

    def render(self, root: MenuNode) -> str:
        return dumps(root, self.config)
