"""
Completion engine that coordinates the candidate providers.

The engine is the only public entry point: it resolves the scope and
context of a request, asks every enabled provider for matching candidates,
merges and ranks them. Nothing raised by a provider, the index or the
context parser escapes ``complete``; the worst outcome is a shorter list.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from types import ModuleType
from typing import Any

from kompl.application.config import CompletionConfig
from kompl.application.context import PythonContextParser
from kompl.application.documentation import documentation as render_documentation
from kompl.application.providers import CompletionProvider, CompletionRequest, default_providers
from kompl.core.protocols import ContextParser
from kompl.core.ranking import rank
from kompl.core.types import Candidate, ContextHint
from kompl.infrastructure.search_path import ScanLayout, SymbolIndex, get_layout
from kompl.logger import get_logger

logger = get_logger("engine")

# Passing this as ``context`` reuses the context parsed on the previous call
SAME_CONTEXT = ":same"

ScopeRef = ModuleType | str | None
ContextRef = ContextHint | str | None


class CompletionEngine:
    """Merges provider candidates into one ranked, de-duplicated list.

    Example:
        >>> engine = CompletionEngine()
        >>> engine.complete("isinst")
        ['isinstance']
    """

    def __init__(
        self,
        config: CompletionConfig | None = None,
        index: SymbolIndex | None = None,
        providers: Sequence[CompletionProvider] | None = None,
        context_parser: ContextParser | None = None,
    ) -> None:
        self.config = config or CompletionConfig()
        self.index = index or SymbolIndex(
            layout=get_layout(self.config.layout),
            scan_archives=self.config.scan_archives,
        )
        self._providers = list(providers) if providers is not None else default_providers(self.index)
        self._context_parser = context_parser or PythonContextParser()
        self._last_context: ContextHint | None = None
        # Indexes for per-call layout or archive settings differing from ``index``
        self._variants: dict[tuple[ScanLayout, bool], SymbolIndex] = {}

    @property
    def providers(self) -> list[CompletionProvider]:
        return list(self._providers)

    def complete(
        self,
        prefix: str,
        scope: ScopeRef = None,
        context: ContextRef = None,
        config: CompletionConfig | None = None,
    ) -> list[str] | list[Candidate]:
        """Return completions for ``prefix``.

        Args:
            prefix: Text typed so far; an empty prefix yields no completions
            scope: Module (object or name) whose names are in scope
            context: A parsed hint, a snippet containing ``__prefix__``,
                ``SAME_CONTEXT``, or None
            config: Per-call override of the engine configuration

        Returns:
            Candidate strings ordered by length then lexically; full
            ``Candidate`` records when metadata flags are configured
        """
        try:
            request = self._build_request(prefix, scope, context, config)
            if request is None:
                return []
            candidates: list[Candidate] = []
            for provider in self._active_providers(request):
                candidates.extend(self._run_provider(provider, request))
            return self._finish(candidates, request)
        except Exception:
            logger.exception(f"Completion failed for prefix {prefix!r}")
            return []

    async def complete_async(
        self,
        prefix: str,
        scope: ScopeRef = None,
        context: ContextRef = None,
        config: CompletionConfig | None = None,
        timeout: float | None = None,
    ) -> list[str] | list[Candidate]:
        """Like ``complete``, running providers in worker threads.

        A provider that does not finish within ``timeout`` seconds contributes
        no candidates; its thread is left to finish on its own.
        """
        try:
            request = self._build_request(prefix, scope, context, config)
            if request is None:
                return []

            async def run(provider: CompletionProvider) -> list[Candidate]:
                try:
                    return await asyncio.wait_for(
                        asyncio.to_thread(self._run_provider, provider, request), timeout
                    )
                except asyncio.TimeoutError:
                    logger.warning(f"Provider {provider.name!r} timed out after {timeout}s")
                    return []

            results = await asyncio.gather(*(run(provider) for provider in self._active_providers(request)))
            return self._finish([candidate for result in results for candidate in result], request)
        except Exception:
            logger.exception(f"Async completion failed for prefix {prefix!r}")
            return []

    def documentation(self, symbol: str, scope: ScopeRef = None) -> str:
        """Documentation for ``symbol``; empty when it cannot be resolved."""
        try:
            module = self._resolve_scope(scope)
            return render_documentation(symbol, vars(module) if module is not None else None)
        except Exception:
            logger.exception(f"Documentation lookup failed for {symbol!r}")
            return ""

    def flush_caches(self) -> None:
        """Drop every cached scan; the next completion rescans the search path."""
        self.index.flush()
        for variant in list(self._variants.values()):
            variant.flush()
        logger.info("Completion caches flushed")

    def _build_request(
        self,
        prefix: str,
        scope: ScopeRef,
        context: ContextRef,
        config: CompletionConfig | None,
    ) -> CompletionRequest | None:
        if not prefix:
            logger.debug("Ignoring completion request with empty prefix")
            return None
        config = config or self.config
        return CompletionRequest(
            prefix=prefix,
            scope=self._resolve_scope(scope),
            context=self._resolve_context(context),
            config=config,
            index=self._index_for(config),
        )

    def _index_for(self, config: CompletionConfig) -> SymbolIndex:
        layout = get_layout(config.layout)
        if layout == self.index.layout and config.scan_archives == self.index.scan_archives:
            return self.index
        key = (layout, config.scan_archives)
        index = self._variants.get(key)
        if index is None:
            logger.debug(f"Creating index for layout {layout.name!r}, scan_archives={config.scan_archives}")
            index = self._variants.setdefault(key, self.index.with_settings(layout, config.scan_archives))
        return index

    def _active_providers(self, request: CompletionRequest) -> list[CompletionProvider]:
        active = []
        for provider in self._providers:
            if not request.config.source_enabled(provider.name):
                continue
            try:
                if provider.can_handle(request):
                    active.append(provider)
            except Exception:
                logger.exception(f"Provider {provider.name!r} failed in can_handle")
        return active

    def _run_provider(self, provider: CompletionProvider, request: CompletionRequest) -> list[Candidate]:
        try:
            candidates = provider.get_candidates(request)
        except Exception:
            logger.exception(f"Provider {provider.name!r} failed")
            return []
        logger.debug(f"Provider {provider.name!r} returned {len(candidates)} candidates for {request.prefix!r}")
        return candidates

    def _finish(self, candidates: list[Candidate], request: CompletionRequest) -> list[str] | list[Candidate]:
        ranked = rank(candidates)
        if request.config.metadata:
            return ranked
        return [candidate.text for candidate in ranked]

    def _resolve_scope(self, scope: Any) -> ModuleType | None:
        if scope is None or isinstance(scope, ModuleType):
            return scope
        if isinstance(scope, str):
            module = sys.modules.get(scope.strip())
            if module is None:
                logger.debug(f"Unknown scope {scope!r}; completing without one")
            return module
        logger.debug(f"Unsupported scope reference {scope!r}; completing without one")
        return None

    def _resolve_context(self, context: Any) -> ContextHint | None:
        if context is None or isinstance(context, ContextHint):
            self._last_context = context
            return context
        if context == SAME_CONTEXT:
            return self._last_context
        if not isinstance(context, str):
            logger.debug(f"Unsupported context {context!r}; completing without one")
            return None
        try:
            hint = self._context_parser.parse(context)
        except Exception:
            logger.debug(f"Context parser rejected {context!r}")
            hint = None
        self._last_context = hint
        return hint
