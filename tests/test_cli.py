from unittest.mock import patch

from doxymenu.cli import main

from .conftest import REFERENCE_MENUDATA, build_site


def run(*args):
    with patch("sys.argv", ["doxymenu", *args]):
        return main()


def test_cli_show(capsys):
    """Test printing the outline of a menu file."""
    result = run("show", str(REFERENCE_MENUDATA))

    assert result == 0
    output = capsys.readouterr().out
    assert "  Arquivos (files.html)" in output
    assert "b (globals.html#index_b)" in output


def test_cli_show_depth(capsys):
    result = run("show", str(REFERENCE_MENUDATA), "--depth", "1")

    assert result == 0
    output = capsys.readouterr().out
    assert "Arquivos" in output
    assert "Todos" not in output


def test_cli_show_missing_file(tmp_path):
    assert run("show", str(tmp_path / "menudata.js")) == 1


def test_cli_validate(capsys):
    assert run("validate", str(REFERENCE_MENUDATA)) == 0
    assert "OK: 26 menu entries" in capsys.readouterr().out


def test_cli_validate_reports_issues(tmp_path, capsys):
    path = tmp_path / "menu.json"
    path.write_text('{"text": "Home", "url": "index.html", "children": [{"text": "", "url": "a.html"}]}')

    assert run("validate", str(path)) == 1
    output = capsys.readouterr().out
    assert "empty-text" in output
    assert "1 problem(s) found" in output


def test_cli_validate_strict(tmp_path, capsys):
    path = tmp_path / "menudata.js"
    path.write_text('var menudata={children:[{text:"a",url:"a.html"},{text:"a",url:"b.html"}]}')

    assert run("validate", str(path)) == 0
    assert run("validate", "--strict", str(path)) == 1
    assert "duplicate-label" in capsys.readouterr().out


def test_cli_export_js(tmp_path, capsys):
    """Test exporting back to menudata.js."""
    result = run("export", str(REFERENCE_MENUDATA), "-f", "js", "-o", str(tmp_path))

    assert result == 0
    assert (tmp_path / "menudata.js").read_bytes() == REFERENCE_MENUDATA.read_bytes()
    assert "Saved 26 menu entries" in capsys.readouterr().out


def test_cli_export_json_with_name(tmp_path):
    result = run("export", str(REFERENCE_MENUDATA), "-f", "json", "-o", str(tmp_path), "-n", "nav.json")

    assert result == 0
    assert (tmp_path / "nav.json").exists()


def test_cli_export_without_license(tmp_path):
    result = run("export", str(REFERENCE_MENUDATA), "-f", "js", "-o", str(tmp_path), "--no-license")

    assert result == 0
    assert (tmp_path / "menudata.js").read_text(encoding="utf-8").startswith("var menudata=")


def test_cli_export_unknown_format(tmp_path, capsys):
    """Usage errors become an exit code instead of a traceback."""
    result = run("export", str(REFERENCE_MENUDATA), "-f", "docx", "-o", str(tmp_path))

    assert result == 2
    assert "docx" in capsys.readouterr().err


def test_cli_missing_argument():
    assert run("show") == 2


def test_cli_invalid_variable_name(capsys):
    assert run("--variable-name", "not-valid", "show", str(REFERENCE_MENUDATA)) == 2
    assert "--variable-name" in capsys.readouterr().err


def test_cli_custom_variable_name(tmp_path, capsys):
    path = tmp_path / "nav.js"
    path.write_text('var navdata={children:[{text:"Start",url:"index.html"}]}')

    assert run("show", str(path)) == 1
    assert run("--variable-name", "navdata", "show", str(path)) == 0
    assert "Start (index.html)" in capsys.readouterr().out


def test_cli_check_links(tmp_path, capsys):
    site = build_site(tmp_path / "html", skip_pages=["globals_defs.html"])

    result = run("check-links", str(site), "--verbose-progress")

    assert result == 1
    output = capsys.readouterr().out
    assert "BROKEN globals_defs.html (Definições e Macros)" in output
    assert "25 of 26 links ok" in output


def test_cli_check_links_with_base(tmp_path, capsys):
    site = build_site(tmp_path / "html")

    result = run("check-links", str(REFERENCE_MENUDATA), "--base", str(site), "-w", "2")

    assert result == 0
    assert "26 of 26 links ok" in capsys.readouterr().out
