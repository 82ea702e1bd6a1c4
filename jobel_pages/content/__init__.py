"""Documentation pages and the registry that indexes them per locale."""

from .link_collector import LinkKind, classify_link, collect_links
from .loader import load_content_registry
from .models import ContentPage, is_valid_identifier
from .registry import ContentRegistry, DuplicateIdentifierError

__all__ = [
    "ContentPage",
    "ContentRegistry",
    "DuplicateIdentifierError",
    "LinkKind",
    "classify_link",
    "collect_links",
    "is_valid_identifier",
    "load_content_registry",
]
