"""View records, composers and the Block Kit serialiser."""

from .blocks import (
    Actions,
    Block,
    Button,
    Context,
    Divider,
    Image,
    Markdown,
    Option,
    PlainText,
    Section,
    StaticSelect,
    View,
)
from .home import build_home_view, format_totals, render_home_surface
from .reviews import (
    REVIEW_DETAIL_FIELDS,
    REVIEW_MODAL_CALLBACK_ID,
    build_review_modal,
    format_date,
    render_compact_review,
    render_review_detail,
    render_user_summary,
)
from .serialize import serialize, serialize_blocks

__all__ = [
    "Actions",
    "Block",
    "Button",
    "Context",
    "Divider",
    "Image",
    "Markdown",
    "Option",
    "PlainText",
    "Section",
    "StaticSelect",
    "View",
    "REVIEW_DETAIL_FIELDS",
    "REVIEW_MODAL_CALLBACK_ID",
    "build_home_view",
    "build_review_modal",
    "format_date",
    "format_totals",
    "render_compact_review",
    "render_home_surface",
    "render_review_detail",
    "render_user_summary",
    "serialize",
    "serialize_blocks",
]
