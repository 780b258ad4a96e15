"""GUI package for OrgReact."""

from orgreact.gui.browser import (
    BrowserFilter,
    filter_reactions,
    format_compound_detail,
    format_reaction_detail,
    related_reactions,
)

__all__ = [
    "BrowserFilter",
    "filter_reactions",
    "format_compound_detail",
    "format_reaction_detail",
    "related_reactions",
]
