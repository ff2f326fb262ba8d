"""Template expansion orchestrator.

``TemplateExpander`` wires the escaper, scanner, placeholder dispatcher and
optional-block resolver together and drives one expansion per call.

Sub-component graph
-------------------
TemplateExpander
  ├── ValueEscaper            (escaper.py)
  ├── TemplateScanner         (scanner.py)
  ├── PlaceholderDispatcher   (placeholders.py)  ── ?s ──▶ scanner
  └── OptionalBlockResolver   (blocks.py)        ── alternatives ──▶ scanner

Runtime context sharing
-----------------------
A single :class:`~stencilql.expand.context.ExpansionContext` is created per
``expand()`` call and threaded through the scanner and every recursive
entry into it (alternatives, nested blocks, ``?s`` sub-templates).  The
components themselves are stateless and may be shared between threads.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from stencilql.expand.base import ExpandedSQL, ValueQuoter
from stencilql.expand.blocks import OptionalBlockResolver
from stencilql.expand.context import ExpansionContext
from stencilql.expand.escaper import ValueEscaper
from stencilql.expand.placeholders import PlaceholderDispatcher
from stencilql.expand.registry import create_quoter
from stencilql.expand.scanner import TemplateScanner
from stencilql.schema.profile import EngineProfile

logger = logging.getLogger(__name__)


class TemplateExpander:
    """Expands SQL templates with typed placeholders and optional blocks.

    Args:
        profile: Engine settings; defaults to ``EngineProfile()``.
        quoter: Explicit string-literal quoter.  When omitted the quoter
            registered for ``profile.target`` is used.
    """

    def __init__(
        self,
        profile: EngineProfile | None = None,
        quoter: ValueQuoter | None = None,
    ) -> None:
        self._profile = profile or EngineProfile()
        self._quoter = quoter or create_quoter(self._profile.target)
        self._escaper = ValueEscaper(self._quoter)
        self._scanner = self._make_scanner()

    @property
    def profile(self) -> EngineProfile:
        return self._profile

    @property
    def escaper(self) -> ValueEscaper:
        return self._escaper

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def expand(self, template: str, params: Sequence[Any] = ()) -> ExpandedSQL:
        """Expand ``template`` against ``params``.

        Args:
            template: SQL template text.
            params: One value per placeholder and per ``{?...}`` control
                slot, in left-to-right template order.

        Returns:
            :class:`~stencilql.expand.base.ExpandedSQL` with the literal SQL.

        Raises:
            MalformedTemplateError: On unbalanced braces or unterminated
                literal regions.
            InvalidPlaceholderTypeError: If a value does not fit its tag.
            ParameterUnderflowError: If the template needs more parameters
                than were supplied.
        """
        ctx = ExpansionContext(params=params)
        sql = self._scanner.scan(template, ctx)
        result = ExpandedSQL(
            sql=sql,
            consumed=ctx.consumed,
            supplied=len(params),
            dialect=self._quoter.dialect_name,
        )

        if result.unconsumed and self._profile.warn_unconsumed_params:
            logger.warning(
                "Template consumed %d of %d parameters; %d ignored",
                result.consumed,
                result.supplied,
                result.unconsumed,
            )
        if self._profile.log_expanded_sql:
            logger.debug("Expanded SQL: %s", sql)
        return result

    # ------------------------------------------------------------------
    # Sub-component wiring
    # ------------------------------------------------------------------

    def _make_scanner(self) -> TemplateScanner:
        """Construct the scanner and its mutually dependent collaborators.

        The dispatcher (for ``?s``) and the block resolver (for
        alternatives) both re-enter the scanner, so the scanner is
        allocated first and initialised once they exist.
        """
        scanner = TemplateScanner.__new__(TemplateScanner)
        dispatcher = PlaceholderDispatcher(self._escaper, scanner.scan)
        resolver = OptionalBlockResolver(scanner.scan)
        scanner.__init__(dispatcher, resolver)  # type: ignore[misc]
        return scanner
