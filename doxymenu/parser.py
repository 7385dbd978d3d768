import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .config import MenuConfig
from .models import MenuDataError, MenuNode

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER = re.compile(r"-?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_KEYWORDS = {"true": True, "false": False, "null": None}
_DECLARATIONS = {"var", "let", "const"}
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "'": "'",
    '"': '"',
    "\\": "\\",
    "/": "/",
}
_LINE_TERMINATORS = "\n\r\u2028\u2029"

NODE_KEYS = ("text", "url", "children")


class MenuDataSyntaxError(MenuDataError):
    """Raised when menu data source is not a well-formed literal assignment."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} (line {line}, column {column})")
        self.line = line
        self.column = column


class _LiteralReader:
    """Recursive descent reader for the JavaScript literal subset Doxygen emits."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def error(self, message: str, pos: Optional[int] = None) -> MenuDataSyntaxError:
        pos = self.pos if pos is None else pos
        line = self.source.count("\n", 0, pos) + 1
        column = pos - (self.source.rfind("\n", 0, pos) + 1) + 1
        return MenuDataSyntaxError(message, line, column)

    def peek(self) -> str:
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def skip_blank(self) -> None:
        """Skip whitespace and comments."""
        source = self.source
        while self.pos < len(source):
            char = source[self.pos]
            if char.isspace() or char == "\ufeff":
                self.pos += 1
            elif source.startswith("//", self.pos):
                end = self.pos
                while end < len(source) and source[end] not in _LINE_TERMINATORS:
                    end += 1
                self.pos = end
            elif source.startswith("/*", self.pos):
                end = source.find("*/", self.pos + 2)
                if end < 0:
                    raise self.error("Unterminated comment")
                self.pos = end + 2
            else:
                break

    def expect(self, char: str) -> None:
        self.skip_blank()
        if self.peek() != char:
            found = self.peek() or "end of input"
            raise self.error(f"Expected '{char}' but found {found!r}")
        self.pos += 1

    def identifier(self) -> str:
        self.skip_blank()
        match = _IDENTIFIER.match(self.source, self.pos)
        if not match:
            raise self.error("Expected an identifier")
        self.pos = match.end()
        return match.group()

    def program(self) -> Tuple[str, Any]:
        """Read ``[var|let|const] name = literal [;]`` and return ``(name, literal)``."""
        name = self.identifier()
        if name in _DECLARATIONS:
            name = self.identifier()
        while True:
            self.skip_blank()
            if self.peek() != ".":
                break
            self.pos += 1
            name = self.identifier()
        self.expect("=")
        value = self.value()
        self.skip_blank()
        if self.peek() == ";":
            self.pos += 1
            self.skip_blank()
        if self.pos < len(self.source):
            raise self.error("Unexpected content after menu data")
        return name, value

    def value(self) -> Any:
        self.skip_blank()
        char = self.peek()
        if char == "{":
            return self.object()
        if char == "[":
            return self.array()
        if char in ("'", '"'):
            return self.string()
        if not char:
            raise self.error("Unexpected end of input")

        match = _NUMBER.match(self.source, self.pos)
        if match:
            self.pos = match.end()
            literal = match.group()
            if literal.lower().lstrip("-").startswith("0x"):
                return int(literal, 16)
            number = float(literal)
            return int(number) if number.is_integer() and "." not in literal else number

        start = self.pos
        word = self.identifier()
        if word in _KEYWORDS:
            return _KEYWORDS[word]
        raise self.error(f"Unexpected identifier {word!r}", start)

    def object(self) -> Dict[str, Any]:
        self.expect("{")
        result: Dict[str, Any] = {}
        while True:
            self.skip_blank()
            if self.peek() == "}":
                self.pos += 1
                return result

            start = self.pos
            char = self.peek()
            if char in ("'", '"'):
                key = self.string()
            elif _NUMBER.match(self.source, self.pos):
                key = str(self.value())
            else:
                key = self.identifier()
            if key in result:
                raise self.error(f"Duplicate key {key!r}", start)

            self.expect(":")
            result[key] = self.value()

            self.skip_blank()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                raise self.error("Expected ',' or '}' in object")

    def array(self) -> List[Any]:
        self.expect("[")
        result: List[Any] = []
        while True:
            self.skip_blank()
            if self.peek() == "]":
                self.pos += 1
                return result
            if self.peek() == ",":
                raise self.error("Empty array element")

            result.append(self.value())

            self.skip_blank()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                raise self.error("Expected ',' or ']' in array")

    def string(self) -> str:
        source = self.source
        quote = source[self.pos]
        start = self.pos
        self.pos += 1
        parts: List[str] = []
        while True:
            if self.pos >= len(source):
                raise self.error("Unterminated string", start)
            char = source[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(parts)
            if char in "\n\r":
                raise self.error("Line break inside string")
            if char != "\\":
                parts.append(char)
                self.pos += 1
                continue
            parts.append(self.escape())

    def escape(self) -> str:
        source = self.source
        escape_pos = self.pos
        self.pos += 1
        if self.pos >= len(source):
            raise self.error("Unterminated string", escape_pos)
        char = source[self.pos]
        self.pos += 1

        if char in _LINE_TERMINATORS:
            # Line continuation
            if char == "\r" and self.peek() == "\n":
                self.pos += 1
            return ""
        if char == "0" and self.peek().isdigit():
            raise self.error("Octal escapes are not supported", escape_pos)
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "x":
            return chr(self._hex_digits(2, escape_pos))
        if char == "u":
            if self.peek() == "{":
                end = source.find("}", self.pos)
                digits = source[self.pos + 1 : end] if end > 0 else ""
                if not digits or not re.fullmatch(r"[0-9a-fA-F]{1,6}", digits):
                    raise self.error("Invalid unicode escape", escape_pos)
                code = int(digits, 16)
                if code > 0x10FFFF:
                    raise self.error("Unicode escape out of range", escape_pos)
                self.pos = end + 1
                return chr(code)
            code = self._hex_digits(4, escape_pos)
            # Combine surrogate pairs written as two escapes
            if 0xD800 <= code <= 0xDBFF and source.startswith("\\u", self.pos):
                low = source[self.pos + 2 : self.pos + 6]
                if re.fullmatch(r"[dD][c-fC-F][0-9a-fA-F]{2}", low):
                    self.pos += 6
                    return chr(0x10000 + ((code - 0xD800) << 10) + (int(low, 16) - 0xDC00))
            return chr(code)
        # Non-special characters escape to themselves
        return char

    def _hex_digits(self, count: int, escape_pos: int) -> int:
        digits = self.source[self.pos : self.pos + count]
        if len(digits) != count or not re.fullmatch(r"[0-9a-fA-F]+", digits):
            raise self.error("Invalid hexadecimal escape", escape_pos)
        self.pos += count
        return int(digits, 16)


def root_text_for(children: Tuple[MenuNode, ...], config: MenuConfig) -> str:
    """Label given to a root that carries no ``text`` of its own."""
    for child in children:
        if child.url == config.home_url:
            return child.text
    return config.root_text


def _build_node(data: Any, path: str) -> MenuNode:
    if not isinstance(data, Mapping):
        raise MenuDataError(f"{path}: menu entry must be an object, got {type(data).__name__}")

    for key in ("text", "url"):
        if key not in data:
            raise MenuDataError(f"{path}: menu entry is missing '{key}'")
        if not isinstance(data[key], str):
            raise MenuDataError(f"{path}: '{key}' must be a string")

    for key in data:
        if key not in NODE_KEYS:
            logger.debug(f"{path}: ignoring unknown key {key!r}")

    return MenuNode(
        text=data["text"],
        url=data["url"],
        children=_build_children(data, path),
    )


def _build_children(data: Mapping[str, Any], path: str) -> Tuple[MenuNode, ...]:
    children = data.get("children")
    if children is None:
        return ()
    if not isinstance(children, list):
        raise MenuDataError(f"{path}: 'children' must be an array")
    if not children:
        logger.debug(f"{path}: empty 'children' array treated as a leaf")
    return tuple(
        _build_node(child, f"{path}.children[{index}]")
        for index, child in enumerate(children)
    )


def build_tree(data: Any, config: Optional[MenuConfig] = None) -> MenuNode:
    """
    Turn the parsed root literal into a MenuNode tree.

    Doxygen writes the root as ``{children:[...]}`` only, so a missing root
    ``url`` becomes ``config.home_url`` and a missing root ``text`` is taken
    from the top-level entry linking home.
    """
    config = config or MenuConfig()
    if not isinstance(data, Mapping):
        raise MenuDataError(f"root: menu data must be an object, got {type(data).__name__}")

    children = _build_children(data, "root")
    url = data.get("url", config.home_url)
    text = data.get("text")
    if text is None:
        text = root_text_for(children, config)
    if not isinstance(url, str) or not isinstance(text, str):
        raise MenuDataError("root: 'text' and 'url' must be strings")

    for key in data:
        if key not in NODE_KEYS:
            logger.debug(f"root: ignoring unknown key {key!r}")

    return MenuNode(text=text, url=url, children=children)


def parse_menudata(source: str, config: Optional[MenuConfig] = None) -> MenuNode:
    """
    Parse the contents of a ``menudata.js`` file.

    Args:
        source (str): JavaScript source text
        config (Optional[MenuConfig]): Expected variable name and root defaults

    Returns:
        MenuNode: The root of the menu tree

    Raises:
        MenuDataSyntaxError: If the source is not a literal assignment
        MenuDataError: If the literal does not describe a menu tree
    """
    config = config or MenuConfig()
    reader = _LiteralReader(source)
    reader.skip_blank()
    try:
        name, data = reader.program()
    except RecursionError:
        logger.error("Menu data is nested too deeply to parse")
        raise reader.error("Menu data is nested too deeply") from None
    if name != config.variable_name:
        raise MenuDataError(
            f"Expected a value named '{config.variable_name}', found '{name}'"
        )

    try:
        root = build_tree(data, config)
    except RecursionError:
        raise MenuDataError("Menu data is nested too deeply") from None
    logger.debug(f"Parsed {root.count() - 1} menu entries from '{name}'")
    return root


def load_menudata(path: Union[str, Path], config: Optional[MenuConfig] = None) -> MenuNode:
    """Read and parse a ``menudata.js`` file from disk."""
    config = config or MenuConfig()
    path = Path(path)
    try:
        source = path.read_text(encoding=config.encoding)
    except UnicodeDecodeError as e:
        logger.error(f"Could not decode {path} as {config.encoding}")
        raise MenuDataError(f"{path} is not valid {config.encoding}: {e}") from e
    return parse_menudata(source, config)
