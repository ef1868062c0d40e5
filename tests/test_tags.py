"""Tests for the bundled tag formatters."""

from __future__ import annotations

import pytest

from html2txt import Options, convert


def _data_table_options() -> Options:
    options = Options()
    options.set_format("table", "dataTable")
    return options


class TestAnchors:
    def test_decodes_entities_in_href(self):
        assert convert('<a href="/foo?a&#x3D;b">test</a>') == "test [/foo?a=b]"

    def test_ampersands(self):
        html = '<a href="some-url?a=b&amp;b=c">Testing &amp; Done</a>'
        assert convert(html) == "Testing & Done [some-url?a=b&b=c]"

    def test_base_url_for_relative_links(self):
        options = Options()
        options.selector("a").options.base_url = "https://example.com"
        assert convert('<a href="/test.html">test</a>', options) == "test [https://example.com/test.html]"

    def test_strips_mailto(self):
        assert convert('<a href="mailto:foo@example.com">email me</a>') == "email me [foo@example.com]"

    def test_brackets_by_default(self):
        assert convert('<a href="https://my.link">test</a>') == "test [https://my.link]"

    def test_no_brackets(self):
        options = Options()
        options.selector("a").options.link_brackets = None
        assert convert('<a href="https://my.link">test</a>', options) == "test https://my.link"

    def test_empty_brackets(self):
        options = Options()
        options.selector("a").options.link_brackets.left = ""
        options.selector("a").options.link_brackets.right = ""
        assert convert('<a href="https://my.link">test</a>', options) == "test https://my.link"

    def test_custom_brackets(self):
        options = Options()
        options.selector("a").options.link_brackets.left = "===> "
        options.selector("a").options.link_brackets.right = " <==="
        assert convert('<a href="https://my.link">test</a>', options) == "test ===> https://my.link <==="

    def test_fragment_links_hidden_by_default(self):
        assert convert('<a href="#link">test</a>') == "test"

    def test_fragment_links_shown(self):
        options = Options()
        options.selector("a").options.no_anchor_url = False
        assert convert('<a href="#link">test</a>', options) == "test [#link]"

    def test_ignore_href(self):
        options = Options()
        options.selector("a").options.ignore_href = True
        assert convert('<a href="https://my.link">test</a>', options) == "test"

    def test_link_without_text_shows_href(self):
        assert convert('<a href="https://my.link"></a>') == "https://my.link"

    def test_link_without_href(self):
        assert convert("<a>just text</a>") == "just text"

    def test_links_in_headings_are_not_uppercased(self):
        html = '<h1><a href="https://example.com">Heading</a></h1>'
        assert convert(html) == "HEADING [https://example.com]"

    def test_links_in_header_cells_are_not_uppercased(self):
        html = """
            <table>
              <tr>
                <th>Header cell 1</th>
                <th><a href="https://example.com">Header cell 2</a></th>
                <td><a href="https://example.com">Regular cell</a></td>
              </tr>
            </table>
        """
        expected = "HEADER CELL 1   HEADER CELL 2 [https://example.com]   Regular cell [https://example.com]"
        assert convert(html, _data_table_options()) == expected

    def test_path_rewrite_with_metadata(self):
        options = Options()
        options.selector("a").options.base_url = "https://example.com"
        options.selector("a").options.path_rewrite = lambda path, meta, elem: None if meta is None else meta["path"] + path
        result = convert('<a href="/test.html">test</a>', options, {"path": "/foo/bar"})
        assert result == "test [https://example.com/foo/bar/test.html]"

    def test_path_rewrite_returning_none_keeps_path(self):
        options = Options()
        options.selector("a").options.path_rewrite = lambda path, meta, elem: None
        assert convert('<a href="page.html">test</a>', options) == "test [page.html]"


class TestBlockLevelElements:
    def test_common_block_elements_on_separate_lines(self):
        html = (
            "a<article>article</article>b<aside>aside</aside>c<div>div</div>d<footer>footer</footer>"
            "e<form>form</form>f<header>header</header>g<main>main</main>h<nav>nav</nav>i<section>section</section>j"
        )
        expected = "a\narticle\nb\naside\nc\ndiv\nd\nfooter\ne\nform\nf\nheader\ng\nmain\nh\nnav\ni\nsection\nj"
        assert convert(html) == expected


class TestBlockquote:
    def test_single_line(self):
        assert convert("foo<blockquote>test</blockquote>bar") == "foo\n\n> test\n\nbar"

    def test_multi_line(self):
        assert convert("<blockquote>a<br/>b</blockquote>") == "> a\n> b"

    def test_trims_empty_lines_unless_disabled(self):
        html = "<blockquote><br/>a<br/><br/><br/></blockquote>"
        assert convert(html) == "> a"
        options = Options()
        options.selector("blockquote").options.trim_empty_lines = False
        assert convert(html, options) == "> \n> a\n> \n> \n> "


class TestHeadings:
    HTML = """
        <h1>Heading 1</h1>
        <h2>heading 2</h2>
        <h3>heading 3</h3>
        <h4>heading 4</h4>
        <h5>heading 5</h5>
        <h6>heading 6</h6>
    """
    EXPECTED = "Heading 1\n\n\nheading 2\n\n\nheading 3\n\nheading 4\n\nheading 5\n\nheading 6"

    def test_uppercase_by_default(self):
        assert convert(self.HTML) == self.EXPECTED.upper()

    def test_uppercase_can_be_disabled(self):
        options = Options()
        for level in range(1, 7):
            options.selector(f"h{level}").options.uppercase = False
        assert convert(self.HTML, options) == self.EXPECTED


class TestHorizontalLine:
    HTML = "<div>foo</div><hr/><div>bar</div>"

    def test_default_length_is_wordwrap(self):
        assert convert(self.HTML) == "foo\n\n" + "-" * 80 + "\n\nbar"

    def test_specific_length(self):
        options = Options()
        options.selector("hr").options.length = 30
        assert convert(self.HTML, options) == "foo\n\n" + "-" * 30 + "\n\nbar"

    def test_length_40_without_wordwrap(self):
        assert convert(self.HTML, Options(wordwrap=0)) == "foo\n\n" + "-" * 40 + "\n\nbar"


class TestImages:
    def test_entities_in_alt(self):
        assert convert('<img src="test.png" alt="&quot;Awesome&quot;">') == '"Awesome" [test.png]'

    def test_base_url(self):
        options = Options()
        options.selector("img").options.base_url = "https://example.com"
        assert convert('<img src="/test.png">', options) == "[https://example.com/test.png]"

    def test_no_brackets(self):
        options = Options()
        options.selector("img").options.link_brackets = None
        assert convert('<img src="test.png" alt="Awesome">', options) == "Awesome test.png"

    def test_custom_brackets(self):
        options = Options()
        options.selector("img").options.link_brackets.left = "===> "
        options.selector("img").options.link_brackets.right = " <==="
        assert convert('<img src="test.png" alt="Awesome">', options) == "Awesome ===> test.png <==="

    def test_path_rewrite_with_metadata(self):
        options = Options()
        options.selector("img").options.path_rewrite = lambda path, meta, elem: path.replace(
            "pictures/", meta["assetsPath"]
        )
        result = convert('<img src="pictures/test.png">', options, {"assetsPath": "assets/"})
        assert result == "[assets/test.png]"

    def test_alt_only(self):
        assert convert('<img alt="Awesome">') == "Awesome"


class TestOrderedLists:
    def test_empty_list(self):
        assert convert("<ol></ol>") == ""

    def test_multiple_items(self):
        assert convert("<ol><li>foo</li><li>bar</li></ol>") == " 1. foo\n 2. bar"

    @pytest.mark.parametrize("ol_type", ["1", "whatever"])
    def test_numeric_types(self, ol_type):
        assert convert(f'<ol type="{ol_type}"><li>foo</li><li>bar</li></ol>') == " 1. foo\n 2. bar"

    def test_letter_types(self):
        assert convert('<ol type="a"><li>foo</li><li>bar</li></ol>') == " a. foo\n b. bar"
        assert convert('<ol type="A"><li>foo</li><li>bar</li></ol>') == " A. foo\n B. bar"

    def test_roman_types(self):
        assert convert('<ol type="i"><li>foo</li><li>bar</li></ol>') == " i.  foo\n ii. bar"
        assert convert('<ol start="8" type="i"><li>foo</li><li>bar</li></ol>') == " viii. foo\n ix.   bar"
        assert convert('<ol type="I"><li>foo</li><li>bar</li></ol>') == " I.  foo\n II. bar"
        assert convert('<ol start="8" type="I"><li>foo</li><li>bar</li></ol>') == " VIII. foo\n IX.   bar"

    def test_start_attribute(self):
        assert convert('<ol start="100"><li>foo</li><li>bar</li></ol>') == " 100. foo\n 101. bar"

    def test_invalid_start_falls_back_to_one(self):
        assert convert('<ol start="x"><li>foo</li></ol>') == " 1. foo"

    def test_letters_past_26(self):
        assert convert('<ol start="26" type="a"><li>foo</li><li>bar</li></ol>') == " z.  foo\n aa. bar"
        assert convert('<ol start="702" type="A"><li>foo</li><li>bar</li></ol>') == " ZZ.  foo\n AAA. bar"

    def test_nested(self):
        html = "<ol><li>foo<ol><li>bar<ol><li>baz</li><li>baz</li></ol></li></ol></li></ol>"
        assert convert(html) == " 1. foo\n    1. bar\n       1. baz\n       2. baz"

    def test_long_nested(self):
        item = (
            "At vero eos et accusam et justo duo dolores et ea rebum. Stet clita k a s d g u b e r g r e n, "
            "no sea takimata sanctus est Lorem ipsum dolor sit amet."
        )
        html = (
            f"<ol>\n  <li>{item}</li>\n  <li>{item}</li>\n  <li>Inner:\n    <ol>\n"
            f"      <li>{item}</li>\n      <li>{item}</li>\n    </ol>\n  </li>\n</ol>"
        )
        expected = (
            " 1. At vero eos et accusam et justo duo dolores et ea rebum. Stet clita k a s d\n"
            "    g u b e r g r e n, no sea takimata sanctus est Lorem ipsum dolor sit amet.\n"
            " 2. At vero eos et accusam et justo duo dolores et ea rebum. Stet clita k a s d\n"
            "    g u b e r g r e n, no sea takimata sanctus est Lorem ipsum dolor sit amet.\n"
            " 3. Inner:\n"
            "    1. At vero eos et accusam et justo duo dolores et ea rebum. Stet clita k a s\n"
            "       d g u b e r g r e n, no sea takimata sanctus est Lorem ipsum dolor sit\n"
            "       amet.\n"
            "    2. At vero eos et accusam et justo duo dolores et ea rebum. Stet clita k a s\n"
            "       d g u b e r g r e n, no sea takimata sanctus est Lorem ipsum dolor sit\n"
            "       amet."
        )
        assert convert(html) == expected

    def test_no_wrap_when_wordwrap_disabled(self):
        html = (
            "Good morning Jacob,\n"
            "  <p>Lorem ipsum dolor sit amet</p>\n"
            "  <p><strong>Lorem ipsum dolor sit amet.</strong></p>\n"
            "  <ul>\n"
            '    <li>run in the park <span style="color:#888888;">(in progress)</span></li>\n'
            "  </ul>\n"
        )
        expected = (
            "Good morning Jacob,\n\nLorem ipsum dolor sit amet\n\nLorem ipsum dolor sit amet.\n\n"
            " * run in the park (in progress)"
        )
        assert convert(html, Options(wordwrap=None)) == expected

    def test_non_li_children(self):
        html = (
            "\n  <ul>\n    <li>list item</li>\n    plain text\n    <li>list item</li>\n"
            "    <div>div</div>\n    <li>list item</li>\n    <p>paragraph</p>\n"
            "    <li>list item</li>\n  </ul>\n"
        )
        expected = " * list item\n   plain text\n * list item\n   div\n * list item\n\n   paragraph\n\n * list item"
        assert convert(html) == expected


class TestParagraphs:
    def test_two_line_breaks_around_paragraphs(self):
        assert convert("text<p>first</p><p>second</p>text") == "text\n\nfirst\n\nsecond\n\ntext"

    def test_custom_line_breaks(self):
        options = Options()
        options.selector("p").options.leading_line_breaks = 1
        options.selector("p").options.trailing_line_breaks = 1
        assert convert("text<p>first</p><p>second</p>text", options) == "text\nfirst\nsecond\ntext"


class TestPre:
    def test_simple_preformatted_text(self):
        html = "<P>Code fragment:</P><PRE>  body {\n    color: red;\n  }</PRE>"
        assert convert(html) == "Code fragment:\n\n  body {\n    color: red;\n  }"

    def test_inner_tags(self):
        html = (
            "<p>Code fragment:</p>\n"
            "<pre><code>  var total = 0;\n\n"
            '  <em style="color: green;">// Add 1 to total and display in a paragraph</em>\n'
            "  <strong style=\"color: blue;\">document.write('&lt;p&gt;Sum: ' + (total + 1) + '&lt;/p&gt;');</strong>"
            "</code></pre>"
        )
        expected = (
            "Code fragment:\n\n  var total = 0;\n\n  // Add 1 to total and display in a paragraph\n"
            "  document.write('<p>Sum: ' + (total + 1) + '</p>');"
        )
        assert convert(html) == expected

    def test_line_break_tags(self):
        assert convert("<pre> line 1 <br/> line 2 </pre>") == " line 1 \n line 2 "


class TestTables:
    BASIC = (
        "Good morning Jacob, <TABLE><TBODY><TR><TD>Lorem ipsum dolor sit amet.</TD></TR></TBODY></TABLE>"
    )

    def test_layout_table(self):
        assert convert(self.BASIC) == "Good morning Jacob,\n\nLorem ipsum dolor sit amet."

    def test_basic_data_table(self):
        assert convert(self.BASIC, _data_table_options()) == "Good morning Jacob,\n\nLorem ipsum dolor sit amet."

    def test_two_rows(self):
        html = (
            "Good morning Jacob, <TABLE><TBODY><TR><TD>Lorem ipsum dolor sit amet.</TD></TR>"
            "<TR><TD>Row two.</TD></TR></TBODY></TABLE>"
        )
        expected = "Good morning Jacob,\n\nLorem ipsum dolor sit amet.\nRow two."
        assert convert(html, _data_table_options()) == expected

    def test_three_columns(self):
        html = """
<table>
    <tr>
        <td>a</td><td>a</td><td>a</td>
    </tr>
    <tr>
        <td>b</td><td>b</td><td>b</td>
    </tr>
    <tr>
        <td>c</td><td>c</td><td>c</td>
    </tr>
</table>"""
        assert convert(html, _data_table_options()) == "a   a   a\nb   b   b\nc   c   c"

    def test_colspan(self):
        html = """
<table>
    <tr>
        <td colspan="2">a</td>
    </tr>
    <tr>
        <td>b</td><td>b</td>
    </tr>
    <tr>
        <td>c</td><td>c</td>
    </tr>
</table>"""
        assert convert(html, _data_table_options()) == "a\nb   b\nc   c"

    def test_zero_column_spacing(self):
        html = """
<table>
    <tr>
        <td colspan="2" rowspan="2">aa<br/>aa</td>
        <td>b</td>
    </tr>
    <tr>
        <td>c</td>
    </tr>
    <tr>
        <td>d</td>
        <td>e</td>
        <td>f</td>
    </tr>
</table>"""
        options = _data_table_options()
        options.selector("table").options.col_spacing = 0
        assert convert(html, options) == "aab\naac\ndef"

    def test_center_tag(self):
        html = (
            "Good morning Jacob, <TABLE><CENTER><TBODY><TR><TD>Lorem ipsum dolor sit amet.</TD></TR>"
            "</CENTER></TBODY></TABLE>"
        )
        assert convert(html, _data_table_options()) == "Good morning Jacob,\n\nLorem ipsum dolor sit amet."

    def test_rowspan(self):
        html = """
<table>
    <tr>
        <td>b</td><td rowspan="2">b</td><td>b</td>
    </tr>
    <tr>
        <td>c</td><td>c</td>
    </tr>
</table>"""
        assert convert(html, _data_table_options()) == "b   b   b\nc       c"

    def test_non_integer_colspan(self):
        html = (
            "Good morning Jacob,<table><tbody><tr>"
            '<td colspan="abc">Lorem ipsum dolor sit amet.</td>'
            "</tr></tbody></table>"
        )
        assert convert(html, _data_table_options()) == "Good morning Jacob,\n\nLorem ipsum dolor sit amet."

    def test_custom_spacing(self):
        html = """
<table>
    <tr>
        <td colspan="2" rowspan="2">aa<br/>aa</td>
        <td>b</td>
    </tr>
    <tr>
        <td>c</td>
    </tr>
    <tr>
        <td>d</td>
        <td>e</td>
        <td>f</td>
    </tr>
</table>"""
        options = _data_table_options()
        options.selector("table").options.col_spacing = 1
        options.selector("table").options.row_spacing = 2
        assert convert(html, options) == "aa  b\naa\n\n    c\n\n\nd e f"

    def test_thead_and_tfoot(self):
        html = """
<table>
    <thead>
        <tr><td>aaaaaaaaa</td><td colspan="2">b</td></tr>
    </thead>
    <tbody>
        <tr><td>ccc</td><td>ddd</td><td>eee</td></tr>
    </tbody>
    <tfoot>
        <tr><td colspan="2">f</td><td>ggggggggg</td></tr>
    </tfoot>
</table>"""
        expected = "aaaaaaaaa   b\nccc         ddd   eee\nf                 ggggggggg"
        assert convert(html, _data_table_options()) == expected

    def test_header_cells_can_keep_case(self):
        options = _data_table_options()
        options.selector("table").options.uppercase_header_cells = False
        assert convert("<table><tr><th>Name</th><td>x</td></tr></table>", options) == "Name   x"

    def test_max_column_width(self):
        html = """
<table>
    <tr>
        <td>short</td>
        <td>short</td>
        <td>Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat.</td>
    </tr>
    <tr>
        <td>short</td>
        <td>Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt mollit anim id est laborum.</td>
        <td>short</td>
    </tr>
</table>"""
        expected = (
            "short   short                           Lorem ipsum dolor sit amet,\n"
            "                                        consectetur adipiscing elit,\n"
            "                                        sed do eiusmod tempor\n"
            "                                        incididunt ut labore et dolore\n"
            "                                        magna aliqua. Ut enim ad minim\n"
            "                                        veniam, quis nostrud\n"
            "                                        exercitation ullamco laboris\n"
            "                                        nisi ut aliquip ex ea commodo\n"
            "                                        consequat.\n"
            "short   Duis aute irure dolor in        short\n"
            "        reprehenderit in voluptate\n"
            "        velit esse cillum dolore eu\n"
            "        fugiat nulla pariatur.\n"
            "        Excepteur sint occaecat\n"
            "        cupidatat non proident, sunt\n"
            "        in culpa qui officia deserunt\n"
            "        mollit anim id est laborum."
        )
        options = _data_table_options()
        options.selector("table").options.max_column_width = 30
        assert convert(html, options) == expected

    def test_variable_number_of_cells(self):
        html = """
<table>
    <tr><td>a</td></tr>
    <tr><td>b</td><td>c</td></tr>
    <tr></tr>
    <tr><td>d</td></tr>
</table>"""
        assert convert(html, _data_table_options()) == "a\nb   c\n\nd"


class TestUnorderedLists:
    def test_empty_list(self):
        assert convert("<ul></ul>") == ""

    def test_multiple_items(self):
        assert convert("<ul><li>foo</li><li>bar</li></ul>") == " * foo\n * bar"

    def test_item_prefix(self):
        options = Options()
        options.selector("ul").options.item_prefix = " test "
        assert convert("<ul><li>foo</li><li>bar</li></ul>", options) == " test foo\n test bar"

    def test_nested(self):
        html = "<ul><li>foo<ul><li>bar<ul><li>baz.1</li><li>baz.2</li></ul></li></ul></li></ul>"
        assert convert(html) == " * foo\n   * bar\n     * baz.1\n     * baz.2"

    def test_list_of_text_only_is_dropped(self):
        assert convert("<ul>just text</ul>") == ""

    def test_comments_between_items_are_ignored(self):
        assert convert("<ul><li>a</li><!-- note --><li>b</li></ul>") == " * a\n * b"
