"""stencilQL result shaping: flat fetched rows → keyed structures."""
from stencilql.transform.base import ResultTransformer, Row
from stencilql.transform.keyed import GroupedTransformer, KeyedTransformer

__all__ = ["GroupedTransformer", "KeyedTransformer", "ResultTransformer", "Row"]
