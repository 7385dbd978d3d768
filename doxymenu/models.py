from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple


class MenuDataError(ValueError):
    """Raised when menu data does not have the shape of a menu tree."""


@dataclass(frozen=True)
class MenuNode:
    """
    One entry of a documentation navigation menu.

    Nodes are immutable. ``children`` is always a tuple; an empty tuple means
    the entry has no sub-menu and no ``children`` field is written for it.
    """

    text: str
    url: str
    children: Tuple["MenuNode", ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __iter__(self) -> Iterator["MenuNode"]:
        return iter(self.children)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[Tuple[int, "MenuNode"]]:
        """Yield ``(depth, node)`` pairs in depth-first pre-order, starting at this node."""
        stack: List[Tuple[int, MenuNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def paths(self) -> Iterator[Tuple[Tuple[str, ...], "MenuNode"]]:
        """Yield ``(labels, node)`` for every descendant, labels running from the top level down."""
        stack: List[Tuple[Tuple[str, ...], MenuNode]] = [
            ((child.text,), child) for child in reversed(self.children)
        ]
        while stack:
            labels, node = stack.pop()
            yield labels, node
            stack.extend(
                (labels + (child.text,), child) for child in reversed(node.children)
            )

    def find(self, url: str) -> Optional["MenuNode"]:
        """Return the first node (pre-order) whose url equals ``url``."""
        for _, node in self.walk():
            if node.url == url:
                return node
        return None

    def count(self) -> int:
        """Number of nodes in this subtree, this node included."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text, "url": self.url}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MenuNode":
        """
        Build a tree from its mapping form.

        Args:
            data (Mapping[str, Any]): A ``{"text", "url", "children"?}`` mapping

        Returns:
            MenuNode: The root of the built tree

        Raises:
            MenuDataError: If a node lacks a string ``text``/``url`` or has
                malformed ``children``
        """
        if not isinstance(data, Mapping):
            raise MenuDataError(f"Menu node must be an object, got {type(data).__name__}")

        for key in ("text", "url"):
            if not isinstance(data.get(key), str):
                raise MenuDataError(f"Menu node is missing a string '{key}': {dict(data)!r}")

        children = data.get("children", ())
        if not isinstance(children, Sequence) or isinstance(children, str):
            raise MenuDataError(f"'children' of {data['text']!r} must be a list")

        return cls(
            text=data["text"],
            url=data["url"],
            children=tuple(cls.from_dict(child) for child in children),
        )
