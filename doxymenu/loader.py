import json
import logging
from collections import OrderedDict
from pathlib import Path, PurePosixPath
from typing import Optional, Union
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import MenuConfig
from .models import MenuDataError, MenuNode
from .parser import load_menudata, parse_menudata
from .utils import MENUDATA_FILENAME, ensure_trailing_slash, is_valid_url

logger = logging.getLogger(__name__)


def find_menudata_script(html: str, page_url: str) -> str:
    """
    Locate the menu data script referenced by a Doxygen HTML page.

    Args:
        html (str): The page markup
        page_url (str): URL or path of the page, used to resolve a relative ``src``

    Returns:
        str: Location of ``menudata.js``, falling back to the file beside the page
    """
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script", src=True):
        src = script.get("src")
        if isinstance(src, str) and PurePosixPath(urlparse(src).path).name == MENUDATA_FILENAME:
            return urljoin(page_url, src)

    logger.debug(f"No {MENUDATA_FILENAME} script tag in {page_url}, using default location")
    return urljoin(page_url, MENUDATA_FILENAME)


def site_base(location: str) -> str:
    """Directory (path or URL) that menu urls in the data file at ``location`` are relative to."""
    if is_valid_url(location):
        return urljoin(location, ".")
    return str(Path(location).parent)


class MenuDataLoader:
    """Reads menu trees from files, HTML directories and documentation sites."""

    def __init__(self, config: Optional[MenuConfig] = None):
        self.config = config or MenuConfig()
        self.headers = {"User-Agent": self.config.user_agent}
        self.session = self._create_session()
        self.response_cache = OrderedDict()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry strategy and connection pooling."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.config.retry_count,
            backoff_factor=self.config.retry_delay,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"],
        )
        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=self.config.pool_connections,
            pool_maxsize=self.config.pool_maxsize,
            pool_block=self.config.pool_block,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update(self.headers)

        return session

    def close(self) -> None:
        self.session.close()
        self.response_cache.clear()

    def fetch(self, url: str) -> str:
        """
        Fetch a text resource, decoding it with the configured encoding.

        Raises:
            MenuDataError: If the request fails or returns an error status
        """
        if url in self.response_cache:
            self.response_cache.move_to_end(url)
            return self.response_cache[url]

        try:
            response = self.session.get(
                url, timeout=self.config.timeout, allow_redirects=True
            )
            response.raise_for_status()
        except requests.Timeout:
            logger.error(f"Timeout while fetching {url}")
            raise MenuDataError(f"Request timed out after {self.config.timeout} seconds")
        except requests.RequestException as e:
            logger.error(f"Request failed for {url}: {str(e)}")
            if getattr(e, "response", None) is not None:
                raise MenuDataError(f"Failed to fetch {url} (HTTP {e.response.status_code})")
            raise MenuDataError(f"Failed to fetch {url}: {str(e)}")

        # Servers rarely declare a charset for .js files
        response.encoding = self.config.encoding
        text = response.text

        self.response_cache[url] = text
        if len(self.response_cache) > self.config.response_cache_size:
            self.response_cache.popitem(last=False)
        return text

    def locate(self, source: Union[str, Path]) -> str:
        """
        Resolve a source to the location of its menu data file.

        Directories resolve to the ``menudata.js`` inside them, HTML pages to
        the script they include. Data files are returned unchanged.
        """
        source = str(source)
        if is_valid_url(source):
            path = urlparse(source).path
            suffix = PurePosixPath(path).suffix.lower()
            if suffix in (".js", ".json"):
                return source
            page_url = source if suffix in (".html", ".htm") else ensure_trailing_slash(source)
            return find_menudata_script(self.fetch(page_url), page_url)

        path = Path(source)
        if path.is_dir():
            candidate = path / MENUDATA_FILENAME
            if not candidate.exists() and (path / "html" / MENUDATA_FILENAME).exists():
                candidate = path / "html" / MENUDATA_FILENAME
            return str(candidate)
        if path.suffix.lower() in (".html", ".htm"):
            html = self._read_local(path)
            located = find_menudata_script(html, path.name)
            if is_valid_url(located):
                return located
            return str(path.parent / located)
        return str(path)

    def _read_local(self, path: Path) -> str:
        """Read a local text file, reporting any failure as MenuDataError."""
        if not path.is_file():
            logger.error(f"File not found: {path}")
            raise MenuDataError(f"File not found: {path}")
        try:
            return path.read_text(encoding=self.config.encoding)
        except UnicodeDecodeError as e:
            logger.error(f"Could not decode {path} as {self.config.encoding}")
            raise MenuDataError(f"{path} is not valid {self.config.encoding}: {e}") from e
        except OSError as e:
            logger.error(f"Could not read {path}: {str(e)}")
            raise MenuDataError(f"Could not read {path}: {e}") from e

    def load(self, source: Union[str, Path]) -> MenuNode:
        """
        Load a menu tree.

        Args:
            source: A ``menudata.js`` or ``.json`` file, an HTML page or
                directory, or the http(s) URL of any of these

        Returns:
            MenuNode: Root of the menu tree

        Raises:
            MenuDataError: If the data cannot be read or is not a menu tree
        """
        location = self.locate(source)
        logger.info(f"Loading menu data from {location}")

        if location.lower().endswith(".json"):
            return self._load_json(location)

        if is_valid_url(location):
            return parse_menudata(self.fetch(location), self.config)

        if not Path(location).is_file():
            logger.error(f"Menu data file not found: {location}")
            raise MenuDataError(f"Menu data file not found: {location}")
        return load_menudata(location, self.config)

    def _load_json(self, location: str) -> MenuNode:
        if is_valid_url(location):
            text = self.fetch(location)
        else:
            text = self._read_local(Path(location))

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {location}: {str(e)}")
            raise MenuDataError(f"Invalid JSON in {location}: {e}") from e

        return MenuNode.from_dict(data)
