"""stencilQL connection layer: expanded templates over DB-API 2."""
from stencilql.session.session import Session

__all__ = ["Session"]
