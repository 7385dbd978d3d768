import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set
from urllib.parse import unquote, urljoin

from bs4 import BeautifulSoup
from tqdm import tqdm

from .config import MenuConfig
from .loader import MenuDataLoader
from .models import MenuDataError, MenuNode
from .utils import ensure_trailing_slash, is_external_target, is_valid_url, split_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkResult:
    text: str
    url: str
    ok: bool
    reason: str = ""


@dataclass
class _PageStatus:
    ok: bool
    reason: str = ""
    anchors: Optional[Set[str]] = None


def collect_anchors(html: str) -> Set[str]:
    """Return every ``id`` and ``name`` attribute value in an HTML page."""
    soup = BeautifulSoup(html, "html.parser")
    anchors = set()
    for element in soup.find_all(True):
        for attribute in ("id", "name"):
            value = element.get(attribute)
            if isinstance(value, str) and value:
                anchors.add(value)
    return anchors


class LinkChecker:
    """Checks that every menu entry points at an existing page and anchor."""

    def __init__(
        self,
        config: Optional[MenuConfig] = None,
        loader: Optional[MenuDataLoader] = None,
    ):
        self.config = config or MenuConfig()
        self.loader = loader or MenuDataLoader(self.config)

    def _check_page(self, base: str, page: str) -> _PageStatus:
        if not page:
            return _PageStatus(False, "no page in url")

        if is_valid_url(base):
            try:
                html = self.loader.fetch(urljoin(ensure_trailing_slash(base), page))
            except MenuDataError as e:
                return _PageStatus(False, str(e))
        else:
            path = Path(base) / unquote(page)
            if not path.is_file():
                return _PageStatus(False, f"file not found: {path}")
            if not self.config.check_anchors:
                return _PageStatus(True)
            html = path.read_text(encoding=self.config.encoding, errors="replace")

        if not self.config.check_anchors:
            return _PageStatus(True)
        return _PageStatus(True, anchors=collect_anchors(html))

    def check(self, root: MenuNode, base: str) -> List[LinkResult]:
        """
        Check the targets of all menu entries.

        Args:
            root (MenuNode): Root of the menu tree
            base (str): Local directory or http(s) URL the menu urls are relative to

        Returns:
            List[LinkResult]: One result per menu entry below the root, in menu order
        """
        nodes = [node for _, node in root.paths()]
        pages = []
        for node in nodes:
            if is_external_target(node.url):
                continue
            page, _ = split_target(node.url)
            if page not in pages:
                pages.append(page)

        logger.info(f"Checking {len(pages)} pages for {len(nodes)} menu entries under {base}")
        statuses: Dict[str, _PageStatus] = {}

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_to_page = {
                executor.submit(self._check_page, base, page): page for page in pages
            }
            with tqdm(
                total=len(future_to_page),
                desc="Checking links",
                unit="page",
                disable=self.config.verbose_progress,
                leave=False,
            ) as pbar:
                for future in as_completed(future_to_page):
                    page = future_to_page[future]
                    try:
                        statuses[page] = future.result()
                    except Exception as e:
                        logger.error(f"Error checking {page}: {str(e)}")
                        statuses[page] = _PageStatus(False, str(e))
                    if self.config.verbose_progress:
                        logger.info(f"Checked {page}: {'ok' if statuses[page].ok else statuses[page].reason}")
                    pbar.update(1)

        results = [self._result_for(node, statuses) for node in nodes]
        broken = sum(1 for result in results if not result.ok)
        logger.info(f"Link check finished: {broken} broken of {len(results)}")
        return results

    def _result_for(self, node: MenuNode, statuses: Dict[str, _PageStatus]) -> LinkResult:
        if is_external_target(node.url):
            return LinkResult(node.text, node.url, True, "external, not checked")

        page, fragment = split_target(node.url)
        status = statuses[page]
        if not status.ok:
            return LinkResult(node.text, node.url, False, status.reason)
        if fragment and status.anchors is not None and fragment not in status.anchors:
            return LinkResult(node.text, node.url, False, f"missing anchor #{fragment}")
        return LinkResult(node.text, node.url, True)


def broken_links(results: List[LinkResult]) -> List[LinkResult]:
    return [result for result in results if not result.ok]
