"""Navigation model: sidebars, navbar and footer link groups."""

from .builder import NavigationBuilder, build_navigation, route_to_identifier
from .models import (
    ExternalRef,
    InternalRef,
    LinkGroup,
    MalformedTreeError,
    NavCategory,
    NavigationModel,
    NavLeaf,
    NavNode,
    NavPath,
)

__all__ = [
    "ExternalRef",
    "InternalRef",
    "LinkGroup",
    "MalformedTreeError",
    "NavCategory",
    "NavLeaf",
    "NavNode",
    "NavPath",
    "NavigationBuilder",
    "NavigationModel",
    "build_navigation",
    "route_to_identifier",
]
