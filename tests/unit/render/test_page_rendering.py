from unittest.mock import patch

import jinja2
import pytest

from conversion_gen.catalog import Kind
from conversion_gen.core.exceptions import HighlightError, TemplateError
from conversion_gen.render import (
    Highlighter,
    PageTemplate,
    render_content,
    render_nav,
    render_page,
)

pytestmark = pytest.mark.unit

SAMPLE = "pub fn str_to_string(input: &str) -> String {\n    input.to_string()\n}\n"


class TestHighlighter:
    """Pygments-backed highlighting."""

    def test_highlight_wraps_code_in_css_class(self):
        html = Highlighter().highlight(SAMPLE)
        assert html.startswith('<div class="highlight">')
        assert "str_to_string" in html

    def test_stylesheet_includes_background(self):
        css = Highlighter(background="#ffffff").stylesheet()
        assert ".highlight" in css
        assert "background: #ffffff;" in css

    def test_unknown_style_raises(self):
        with pytest.raises(HighlightError):
            Highlighter(style="no-such-style")

    def test_unknown_language_raises(self):
        with pytest.raises(HighlightError):
            Highlighter(language="no-such-language")

    def test_formatter_failure_is_wrapped(self):
        with (
            patch(
                "conversion_gen.render.highlight._pygments_highlight",
                side_effect=ValueError("bad token"),
            ),
            pytest.raises(HighlightError, match="bad token") as ei,
        ):
            Highlighter().highlight(SAMPLE)
        assert isinstance(ei.value.__cause__, ValueError)


class TestNavigationAndContent:
    """Markup around the highlighted sources."""

    def test_nav_links_each_anchor(self, catalog):
        nav = render_nav([Kind.STR, Kind.U8_VEC], catalog)
        assert nav == (
            '<ul><li><a href="#str">From <code>&str</code></a></li>'
            '<li><a href="#u8_vec">From <code>Vec&lt;u8&gt;</code></a></li></ul>'
        )

    def test_content_has_heading_per_anchor(self, catalog):
        content = render_content(
            [(Kind.STR, SAMPLE), (Kind.PATH_BUF, SAMPLE)], catalog, Highlighter()
        )
        assert "<a name=str><h2>From <code>&str</code></h2></a>" in content
        assert "<a name=path_buf><h2>From <code>PathBuf</code></h2></a>" in content
        assert content.count('<div class="highlight">') == 2


class TestPageTemplate:
    """The surrounding Jinja page."""

    def test_page_contains_nav_content_and_styles(self, catalog):
        page = render_page([(Kind.STR, SAMPLE)], catalog, Highlighter())
        assert page.startswith("<!DOCTYPE html>")
        assert '<a href="#str">' in page
        assert "<a name=str>" in page
        assert "background: #f3f6fa;" in page

    def test_markup_is_not_escaped(self):
        page = PageTemplate().render(nav="<ul></ul>", content="<p>x</p>")
        assert "<ul></ul>" in page
        assert "<p>x</p>" in page

    def test_missing_template_raises(self):
        env = jinja2.Environment(loader=jinja2.DictLoader({}))
        with pytest.raises(TemplateError):
            PageTemplate(env).render(nav="", content="")

    def test_undefined_variable_raises(self):
        env = jinja2.Environment(
            loader=jinja2.DictLoader({"index.html.j2": "{{ missing }}"}),
            undefined=jinja2.StrictUndefined,
        )
        with pytest.raises(TemplateError):
            PageTemplate(env).render(nav="", content="")
