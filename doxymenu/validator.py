import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .config import MenuConfig
from .models import MenuDataError, MenuNode

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    code: str
    message: str
    severity: str = ERROR

    def __str__(self) -> str:
        return f"{self.severity}: {self.path}: {self.message} [{self.code}]"


class MenuValidationError(MenuDataError):
    """Raised by :func:`check` when a menu tree has structural errors."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        lines = "\n".join(f"  {issue}" for issue in issues)
        super().__init__(f"Menu data has {len(issues)} problem(s):\n{lines}")


def _fields(node: Any) -> Tuple[Any, Any, Any, bool]:
    """Return ``(text, url, children, has_children)`` for a MenuNode or a mapping."""
    if isinstance(node, MenuNode):
        return node.text, node.url, node.children, bool(node.children)
    return (
        node.get("text"),
        node.get("url"),
        node.get("children"),
        "children" in node,
    )


def validate(
    tree: Union[MenuNode, Mapping[str, Any]], config: Optional[MenuConfig] = None
) -> List[ValidationIssue]:
    """
    Check a menu tree for structural problems.

    Works on a built MenuNode tree as well as on the raw mapping form (for
    example JSON loaded from disk), where cycles and shared nodes can occur.

    Args:
        tree: Root of the tree, as a MenuNode or a ``{"text", "url", "children"}`` mapping
        config (Optional[MenuConfig]): Supplies the expected home url

    Returns:
        List[ValidationIssue]: Problems found, in pre-order; empty when the tree is valid
    """
    config = config or MenuConfig()
    issues: List[ValidationIssue] = []
    seen: Set[int] = set()
    stack: List[Tuple[str, Any]] = [("root", tree)]

    while stack:
        path, node = stack.pop()

        if not isinstance(node, (MenuNode, Mapping)):
            issues.append(
                ValidationIssue(path, "not-a-node", f"expected an object, got {type(node).__name__}")
            )
            continue

        if id(node) in seen:
            issues.append(
                ValidationIssue(path, "cycle", "node is reachable more than once (cycle or shared node)")
            )
            continue
        seen.add(id(node))

        text, url, children, has_children = _fields(node)
        for key, value in (("text", text), ("url", url)):
            if not isinstance(value, str):
                issues.append(ValidationIssue(path, f"missing-{key}", f"'{key}' must be a string"))
            elif not value.strip():
                issues.append(ValidationIssue(path, f"empty-{key}", f"'{key}' must not be empty"))

        if path == "root" and url != config.home_url:
            issues.append(
                ValidationIssue(path, "root-url", f"root url must be {config.home_url!r}, got {url!r}")
            )

        if not has_children:
            continue
        if not isinstance(children, Sequence) or isinstance(children, str):
            issues.append(ValidationIssue(path, "children-type", "'children' must be a list"))
            continue
        if not children:
            issues.append(
                ValidationIssue(path, "empty-children", "'children' must be omitted when empty")
            )
            continue

        labels: Dict[Any, int] = {}
        for index, child in enumerate(children):
            child_text = _fields(child)[0] if isinstance(child, (MenuNode, Mapping)) else None
            if isinstance(child_text, str) and child_text in labels:
                issues.append(
                    ValidationIssue(
                        f"{path}.children[{index}]",
                        "duplicate-label",
                        f"label {child_text!r} repeats children[{labels[child_text]}]",
                        WARNING,
                    )
                )
            elif isinstance(child_text, str):
                labels[child_text] = index

        # Reversed so the issues come out in menu order
        stack.extend(
            (f"{path}.children[{index}]", child)
            for index, child in reversed(list(enumerate(children)))
        )

    return issues


def errors(issues: List[ValidationIssue]) -> List[ValidationIssue]:
    return [issue for issue in issues if issue.severity == ERROR]


def check(
    tree: Union[MenuNode, Mapping[str, Any]],
    config: Optional[MenuConfig] = None,
    strict: bool = False,
) -> None:
    """Raise MenuValidationError when ``tree`` has errors (or any issue, if ``strict``)."""
    issues = validate(tree, config)
    failing = issues if strict else errors(issues)
    for issue in issues:
        logger.debug(str(issue))
    if failing:
        logger.error(f"Menu data failed validation with {len(failing)} problem(s)")
        raise MenuValidationError(failing)
