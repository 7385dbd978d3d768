import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import MenuConfig
from .models import MenuNode
from .parser import root_text_for

logger = logging.getLogger(__name__)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_string(value: str) -> str:
    """Quote a string as a double-quoted JavaScript literal, keeping non-ASCII text as is."""
    parts = ['"']
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def _write_children(node: MenuNode, out: List[str]) -> None:
    out.append("children:[\n")
    for index, child in enumerate(node.children):
        if index:
            out.append(",\n")
        _write_node(child, out)
    out.append("]")


def _write_node(node: MenuNode, out: List[str]) -> None:
    out.append(f"{{text:{js_string(node.text)},url:{js_string(node.url)}")
    if node.children:
        out.append(",")
        _write_children(node, out)
    out.append("}")


def dumps(root: MenuNode, config: Optional[MenuConfig] = None) -> str:
    """
    Render a menu tree in the layout Doxygen uses for ``menudata.js``.

    The root's ``text`` and ``url`` are only written when they differ from
    the values the parser would fill in for a bare ``{children:[...]}`` root.

    Args:
        root (MenuNode): Root of the menu tree
        config (Optional[MenuConfig]): Variable name, header and root defaults

    Returns:
        str: The JavaScript source text
    """
    config = config or MenuConfig()
    out: List[str] = []
    if config.license_header:
        header = config.license_header
        out.append(header if header.endswith("\n") else header + "\n")

    out.append(f"var {config.variable_name}={{")
    if root.text != root_text_for(root.children, config):
        out.append(f"text:{js_string(root.text)},")
    if root.url != config.home_url:
        out.append(f"url:{js_string(root.url)},")
    _write_children(root, out)
    out.append("}\n")
    return "".join(out)


def dump(
    root: MenuNode, path: Union[str, Path], config: Optional[MenuConfig] = None
) -> Path:
    """Write a menu tree to ``path`` as ``menudata.js`` source."""
    config = config or MenuConfig()
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        # newline="" keeps the \n line endings Doxygen writes on every platform
        with open(output_path, "w", encoding=config.encoding, newline="") as f:
            f.write(dumps(root, config))
        logger.info(f"Menu data saved to {output_path}")
    except Exception as e:
        logger.error(f"Error saving menu data: {str(e)}")
        raise
    return output_path
