"""Tests for @import extraction."""

from less_assets.models import ImportReference
from less_assets.scanner.imports import (
    extract_imports,
    infer_extension,
    is_leaf,
    strip_comments,
)


def _targets(text):
    return [ref.raw_target for ref in extract_imports(text)]


def test_double_and_single_quotes():
    text = '@import "mixins";\n@import \'colors.less\';\n'
    assert _targets(text) == ["mixins", "colors.less"]


def test_order_of_appearance_and_line_numbers():
    text = "// header\n@import 'a';\n\n  @import \"b/c\" ;\n"
    refs = list(extract_imports(text))
    assert [r.raw_target for r in refs] == ["a", "b/c"]
    assert [r.line_number for r in refs] == [2, 4]


def test_mismatched_quotes_are_not_imports():
    assert _targets("@import \"broken';\n") == []


def test_missing_semicolon_is_not_an_import():
    assert _targets('@import "a"\n.body { color: red; }') == []


def test_url_imports_are_not_matched():
    assert _targets('@import url("reset.css");') == []


def test_extraction_is_restartable():
    text = '@import "a";\n@import "b";'
    gen = extract_imports(text)
    assert next(gen).raw_target == "a"
    assert _targets(text) == ["a", "b"]
    assert _targets(text) == ["a", "b"]


def test_no_imports():
    assert _targets(".a { color: red; }") == []


def test_infer_extension():
    assert infer_extension("foo") == "foo.less"
    assert infer_extension("dir/foo") == "dir/foo.less"
    assert infer_extension("foo.less") == "foo.less"
    assert infer_extension("foo.lss") == "foo.lss"
    assert infer_extension("foo.css") == "foo.css"
    assert infer_extension("foo.min") == "foo.min.less"


def test_import_reference_target_infers_extension():
    assert ImportReference(raw_target="mixins").target == "mixins.less"
    assert ImportReference(raw_target="reset.css").target == "reset.css"


def test_is_leaf():
    assert is_leaf("reset.css")
    assert is_leaf("RESET.CSS")
    assert not is_leaf("mixins.less")


def test_strip_block_comments():
    text = '/* @import "old"; */\n@import "new";\n/*\n@import "gone";\n*/'
    stripped = strip_comments(text)
    assert _targets(stripped) == ["new"]
    # Line count is preserved
    assert stripped.count("\n") == text.count("\n")


def test_strip_line_comments():
    text = '// @import "old";\n@import "new"; // trailing\n'
    assert _targets(strip_comments(text)) == ["new"]


def test_strip_keeps_urls():
    text = '.a { background: url(http://example.com/x.png); }\n@import "//cdn/x.css";'
    stripped = strip_comments(text)
    assert "http://example.com/x.png" in stripped
    assert _targets(stripped) == ["//cdn/x.css"]


def test_strip_keeps_comment_markers_inside_strings():
    text = '.x{content:" //"} @import "b";\n.y{content:"/* not a comment */"} @import \'c\';'
    stripped = strip_comments(text)
    assert _targets(stripped) == ["b", "c"]
    assert '"/* not a comment */"' in stripped


def test_strip_quote_inside_comment():
    text = "// don't @import \"old\";\n/* it's gone @import \"gone\"; */\n@import \"new\";"
    assert _targets(strip_comments(text)) == ["new"]
