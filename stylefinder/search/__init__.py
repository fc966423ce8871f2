"""Query construction and search result normalisation."""

from .normalizer import ResultNormalizer, display_source, parse_text_price, split_brand
from .query_builder import QueryBuilder
from .ranking import DEFAULT_POLICY, SimilarityPolicy

__all__ = [
    "DEFAULT_POLICY",
    "QueryBuilder",
    "ResultNormalizer",
    "SimilarityPolicy",
    "display_source",
    "parse_text_price",
    "split_brand",
]
