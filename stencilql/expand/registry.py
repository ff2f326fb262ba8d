"""Target name → string-literal quoter.

Each dialect module registers its quoter class on import::

    @register_quoter("mysql")
    class MySQLQuoter(ValueQuoter):
        ...

``EngineProfile.target`` is resolved through :func:`create_quoter` whenever
no explicit quoter is handed to the expander.
"""
from __future__ import annotations

from collections.abc import Callable

from stencilql.errors import ConfigurationError
from stencilql.expand.base import ValueQuoter

_QUOTERS: dict[str, type[ValueQuoter]] = {}


def register_quoter(target: str) -> Callable[[type[ValueQuoter]], type[ValueQuoter]]:
    """Class decorator binding a quoter class to ``target``."""

    def bind(quoter_cls: type[ValueQuoter]) -> type[ValueQuoter]:
        _QUOTERS[target] = quoter_cls
        return quoter_cls

    return bind


def create_quoter(target: str) -> ValueQuoter:
    """Return a new quoter for ``target``.

    Raises:
        ConfigurationError: If no quoter class is bound to ``target``.
    """
    try:
        quoter_cls = _QUOTERS[target]
    except KeyError:
        known = ", ".join(sorted(_QUOTERS)) or "none"
        raise ConfigurationError(
            f"No string quoter for target {target!r} (known targets: {known})."
        ) from None
    return quoter_cls()
