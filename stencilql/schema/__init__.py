"""stencilQL configuration models."""
from stencilql.schema.profile import EngineProfile, QuoterTarget

__all__ = ["EngineProfile", "QuoterTarget"]
