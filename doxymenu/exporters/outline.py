from ..models import MenuNode
from .base import BaseExporter


class TextOutlineExporter(BaseExporter):
    """Indented plain text outline, one line per menu entry."""

    extension = ".txt"
    indent = "  "

    def render(self, root: MenuNode) -> str:
        return "".join(f"{line}\n" for line in outline_lines(root, self.indent))


def outline_lines(root: MenuNode, indent: str = "  ", max_depth: int = 0):
    """
    Yield outline lines for ``root`` and its descendants.

    ``max_depth`` limits how many menu levels below the root are shown; 0
    shows all of them.
    """
    for depth, node in root.walk():
        if max_depth and depth > max_depth:
            continue
        yield f"{indent * depth}{node.text} ({node.url})"
