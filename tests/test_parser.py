import pytest

from doxymenu.config import MenuConfig
from doxymenu.models import MenuDataError, MenuNode
from doxymenu.parser import MenuDataSyntaxError, load_menudata, parse_menudata

from .conftest import REFERENCE_MENUDATA


def test_reference_top_level_entries(menu_tree):
    """The reference file has three top-level entries in display order."""
    assert [child.text for child in menu_tree.children] == [
        "Página Principal",
        "Estruturas de dados",
        "Arquivos",
    ]
    assert [child.url for child in menu_tree.children] == [
        "index.html",
        "annotated.html",
        "files.html",
    ]


def test_reference_root_is_synthesized(menu_tree):
    """A bare {children:[...]} root links home and borrows the home entry's label."""
    assert menu_tree.url == "index.html"
    assert menu_tree.text == "Página Principal"


def test_reference_nested_entries(menu_tree):
    structures = menu_tree.children[1]
    assert [child.text for child in structures.children] == [
        "Estruturas de Dados",
        "Índice das Estruturas de Dados",
        "Campos de Dados",
    ]
    fields = structures.children[2]
    assert [(child.text, child.url) for child in fields.children] == [
        ("Todos", "functions.html"),
        ("Variáveis", "functions_vars.html"),
    ]

    globals_ = menu_tree.children[2].children[1]
    assert globals_.text == "Globais"
    assert len(globals_.children) == 5
    everything = globals_.children[0]
    assert len(everything.children) == 11
    assert everything.children[0] == MenuNode("_", "globals.html#index__5F")
    assert menu_tree.find("globals.html#index_b").text == "b"
    assert menu_tree.count() == 27


def test_tolerant_syntax():
    """Comments, quoted keys, single quotes and trailing commas are accepted."""
    source = """
    // generated
    let menudata = {
      /* top level */
      children: [
        {"text": 'Start', url: "index.html",},
        {text: "API", 'url': "api.html", children: [{text: "Classes", url: "classes.html"},],},
      ],
    };
    """
    root = parse_menudata(source)
    assert [child.text for child in root.children] == ["Start", "API"]
    assert root.children[1].children[0].url == "classes.html"
    assert root.text == "Start"


def test_string_escapes():
    source = r'var menudata={children:[{text:"a\"b\\c é \x41 \u{1F600} 😀 it\'s",url:"x.html"}]}'
    root = parse_menudata(source)
    assert root.children[0].text == 'a"b\\c é A \U0001F600 \U0001F600 it\'s'


def test_line_continuation_in_string():
    source = 'var menudata={children:[{text:"long \\\nlabel",url:"x.html"}]}'
    root = parse_menudata(source)
    assert root.children[0].text == "long label"


def test_syntax_error_reports_position():
    source = 'var menudata={children:[\n{text:"a" url:"b"}]}'
    with pytest.raises(MenuDataSyntaxError) as exc_info:
        parse_menudata(source)
    assert exc_info.value.line == 2
    assert exc_info.value.column == 11
    assert "line 2" in str(exc_info.value)


@pytest.mark.parametrize("source", [
    "",
    "var menudata=",
    'var menudata={children:[{text:"a,url:"b"}]}',
    "var menudata={children:[]}; foo()",
    "var menudata={children:[,]}",
    "var menudata={children:[]} /* unterminated",
    "var menudata={children:[{text:foo,url:\"a\"}]}",
    'var menudata={text:"a",text:"b",children:[]}',
])
def test_malformed_sources_raise_syntax_error(source):
    with pytest.raises(MenuDataSyntaxError):
        parse_menudata(source)


def test_syntax_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_menudata("var menudata={")


def test_wrong_variable_name():
    with pytest.raises(MenuDataError) as exc_info:
        parse_menudata("var navtree={children:[]}")
    assert "menudata" in str(exc_info.value)


def test_custom_variable_name():
    config = MenuConfig(variable_name="navdata")
    root = parse_menudata('window.navdata = {children:[{text:"a",url:"index.html"}]};', config)
    assert root.children[0].text == "a"


def test_missing_url_names_the_entry():
    with pytest.raises(MenuDataError) as exc_info:
        parse_menudata('var menudata={children:[{text:"a",url:"a.html"},{text:"b"}]}')
    assert "root.children[1]" in str(exc_info.value)
    assert "'url'" in str(exc_info.value)


@pytest.mark.parametrize("source", [
    'var menudata={children:[{text:1,url:"a.html"}]}',
    'var menudata={children:[{text:"a",url:"a.html",children:"b"}]}',
    'var menudata={children:["a"]}',
    'var menudata=[]',
])
def test_shape_errors(source):
    with pytest.raises(MenuDataError) as exc_info:
        parse_menudata(source)
    assert not isinstance(exc_info.value, MenuDataSyntaxError)


def test_explicit_root_fields_are_kept():
    root = parse_menudata('var menudata={text:"Docs",url:"start.html",children:[{text:"a",url:"a.html"}]}')
    assert root.text == "Docs"
    assert root.url == "start.html"


def test_root_without_home_entry_uses_default_label():
    root = parse_menudata('var menudata={children:[{text:"a",url:"a.html"}]}')
    assert root.text == "Home"
    assert root.url == "index.html"


def test_empty_children_become_leaf():
    root = parse_menudata('var menudata={children:[{text:"a",url:"a.html",children:[]}]}')
    assert root.children[0].is_leaf


def test_unknown_keys_are_ignored():
    root = parse_menudata('var menudata={children:[{text:"a",url:"a.html",icon:"x.png",order:2}]}')
    assert root.children[0] == MenuNode("a", "a.html")


def test_load_menudata_from_file():
    root = load_menudata(REFERENCE_MENUDATA)
    assert len(root.children) == 3


def test_load_menudata_rejects_bad_encoding(tmp_path):
    path = tmp_path / "menudata.js"
    path.write_bytes(b'var menudata={children:[{text:"\xff",url:"a.html"}]}')
    with pytest.raises(MenuDataError):
        load_menudata(path)


def test_deep_nesting_raises_syntax_error():
    source = "var menudata=" + "[" * 3000 + "]" * 3000
    with pytest.raises(MenuDataSyntaxError) as exc_info:
        parse_menudata(source)
    assert "nested too deeply" in str(exc_info.value)
