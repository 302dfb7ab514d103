"""Documentation rendering for generated conversion modules."""

from .highlight import Highlighter
from .page import PageTemplate, render_content, render_nav, render_page

__all__ = [
    "Highlighter",
    "PageTemplate",
    "render_content",
    "render_nav",
    "render_page",
]
