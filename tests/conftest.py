import shutil
from pathlib import Path

import pytest

from doxymenu.parser import parse_menudata

DATA_DIR = Path(__file__).parent / "data"
REFERENCE_MENUDATA = DATA_DIR / "menudata.js"

GLOBAL_ANCHORS = ["index__5F", "index_b", "index_c", "index_e", "index_g", "index_i",
                  "index_n", "index_p", "index_s", "index_t", "index_v"]

SITE_PAGES = [
    "index.html",
    "annotated.html",
    "classes.html",
    "functions.html",
    "functions_vars.html",
    "files.html",
    "globals.html",
    "globals_func.html",
    "globals_vars.html",
    "globals_type.html",
    "globals_defs.html",
]


def build_site(directory: Path, skip_pages=(), drop_anchors=()) -> Path:
    """Write a minimal Doxygen HTML site that the reference menu links into."""
    directory.mkdir(parents=True, exist_ok=True)
    shutil.copy(REFERENCE_MENUDATA, directory / "menudata.js")

    for page in SITE_PAGES:
        if page in skip_pages:
            continue
        anchors = ""
        if page == "globals.html":
            anchors = "\n".join(
                f'<h3><a id="{anchor}" name="{anchor}"></a>- {anchor[-1]} -</h3>'
                for anchor in GLOBAL_ANCHORS
                if anchor not in drop_anchors
            )
        (directory / page).write_text(
            "<!DOCTYPE html>\n<html><head>\n"
            '<script type="text/javascript" src="jquery.js"></script>\n'
            '<script type="text/javascript" src="menudata.js"></script>\n'
            '<script type="text/javascript" src="menu.js"></script>\n'
            f"</head><body><div class=\"contents\">{anchors}</div></body></html>\n",
            encoding="utf-8",
        )
    return directory


@pytest.fixture
def menudata_source():
    return REFERENCE_MENUDATA.read_text(encoding="utf-8")


@pytest.fixture
def menu_tree(menudata_source):
    return parse_menudata(menudata_source)


@pytest.fixture
def doxygen_site(tmp_path):
    return build_site(tmp_path / "html")
