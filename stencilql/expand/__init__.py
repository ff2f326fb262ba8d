"""stencilQL expansion layer: template + parameters → literal SQL."""
from stencilql.expand.base import ExpandedSQL, ValueQuoter
from stencilql.expand.context import SKIP, ExpansionContext
from stencilql.expand.escaper import ValueEscaper
from stencilql.expand.expander import TemplateExpander
from stencilql.expand.mysql import MySQLQuoter
from stencilql.expand.sqlite import SQLiteQuoter

__all__ = [
    "SKIP",
    "ExpandedSQL",
    "ExpansionContext",
    "MySQLQuoter",
    "SQLiteQuoter",
    "TemplateExpander",
    "ValueEscaper",
    "ValueQuoter",
]
