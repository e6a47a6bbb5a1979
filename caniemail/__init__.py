"""Check HTML email markup against caniemail.com support data."""

from ._version import __version__
from .classify import check_html, create_compatibility_issues, embed_url, sort_issues
from .extract import extract_features
from .index import build_feature_index

__all__ = [
    "__version__",
    "build_feature_index",
    "check_html",
    "create_compatibility_issues",
    "embed_url",
    "extract_features",
    "sort_issues",
]
