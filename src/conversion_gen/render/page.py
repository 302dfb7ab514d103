"""Documentation page rendering.

Pure presentation over already generated source: a navigation list linking
every anchor, one highlighted section per anchor, and the surrounding page
from a Jinja template.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import jinja2

from conversion_gen.core.exceptions import TemplateError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from conversion_gen.catalog import Catalog, Kind
    from conversion_gen.render.highlight import Highlighter

log = logging.getLogger(__name__)

TEMPLATE_NAME = "index.html.j2"


def render_nav(anchors: Iterable[Kind], catalog: Catalog) -> str:
    """Return a `<ul>` linking each anchor's section."""
    kinds = catalog.kinds
    items = "".join(
        f'<li><a href="#{kinds.short_name(anchor)}">From '
        f"<code>{kinds.html_type_str(anchor)}</code></a></li>"
        for anchor in anchors
    )
    return f"<ul>{items}</ul>"


def render_content(
    sources: Sequence[tuple[Kind, str]],
    catalog: Catalog,
    highlighter: Highlighter,
) -> str:
    """Return one heading plus highlighted source per anchor."""
    kinds = catalog.kinds
    out = []
    for anchor, code in sources:
        out.append(
            f"<a name={kinds.short_name(anchor)}><h2>From "
            f"<code>{kinds.html_type_str(anchor)}</code></h2></a>"
        )
        out.append(highlighter.highlight(code))
    return "".join(out)


class PageTemplate:
    """Wraps navigation and content in the page template."""

    def __init__(self, environment: jinja2.Environment | None = None) -> None:
        self._env = environment or jinja2.Environment(  # noqa: S701
            loader=jinja2.PackageLoader("conversion_gen.render", "templates"),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

    def render(self, *, nav: str, content: str, stylesheet: str = "") -> str:
        """Return the final page markup.

        Raises:
            TemplateError: If the template is missing or fails to render.
        """
        try:
            template = self._env.get_template(TEMPLATE_NAME)
            return template.render(nav=nav, content=content, stylesheet=stylesheet)
        except jinja2.TemplateError as e:
            raise TemplateError(f"cannot render {TEMPLATE_NAME}: {e}") from e


def render_page(
    sources: Sequence[tuple[Kind, str]],
    catalog: Catalog,
    highlighter: Highlighter,
    template: PageTemplate | None = None,
) -> str:
    """Render the full documentation page for the generated sources."""
    page = (template or PageTemplate()).render(
        nav=render_nav((anchor for anchor, _ in sources), catalog),
        content=render_content(sources, catalog, highlighter),
        stylesheet=highlighter.stylesheet(),
    )
    log.debug("Rendered documentation page for %d anchors", len(sources))
    return page
