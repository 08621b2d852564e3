"""Chat orchestrator: provider resolution with a single fallback hop.

Per request the orchestrator runs a small state machine::

    Resolving -> Invoking(primary) -> Success
                                   -> Invoking(fallback) -> Success | Failed

1. The target name is the request override when present and non-blank,
   otherwise the configured default.
2. An unknown target is a configuration defect: :class:`RoutingError`
   (``NO_PROVIDER_FOUND``) is raised and nothing is invoked.
3. The resolved adapter is invoked once. Adapters report backend failures as
   :class:`ProviderOutcome` values; an adapter that raises anyway is treated
   the same way.
4. On primary failure the fixed fallback provider is looked up
   (``NO_FALLBACK_AVAILABLE`` if unregistered) and invoked once with the same
   message and system prompt. Its failure is terminal and raised as the
   fallback's :class:`ProviderError`, chained to the primary failure.

If the primary already *is* the fallback provider, step 4 invokes the same
adapter a second time.

The orchestrator holds no mutable state; one instance serves concurrent
requests.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from ..errors import ErrorCode, ProviderError, RoutingError, RoutingErrorKind, wrap_exception
from ..interfaces import ChatProvider
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatRequest, ChatResponse, ProviderOutcome
from ..utils.prompts import normalize_provider_name
from .registry import ProviderRegistry


class ChatOrchestrator:
    """Routes chat messages to a named adapter, falling back once on failure."""

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        default_provider: str,
        fallback_provider: str,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create an orchestrator.

        Parameters
        ----------
        registry:
            Fixed set of adapters built at startup.
        default_provider:
            Name used when a request carries no override.
        fallback_provider:
            The single secondary provider retried when the primary fails. It
            does not have to be registered; if it is not, primary failures
            become ``NO_FALLBACK_AVAILABLE`` errors.
        """
        self._registry = registry
        self._default_provider = normalize_provider_name(default_provider)
        self._fallback_provider = normalize_provider_name(fallback_provider)
        self._logger = logger or get_logger("aichat.routing")

    @classmethod
    def from_config(cls, registry: ProviderRegistry, config) -> "ChatOrchestrator":
        """Build from a :class:`~aichat_providers.config.RoutingConfig`."""
        return cls(
            registry,
            default_provider=config.default_provider,
            fallback_provider=config.fallback_provider,
        )

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def default_provider(self) -> str:
        return self._default_provider

    @property
    def fallback_provider(self) -> str:
        return self._fallback_provider

    def resolve_target(self, provider_override: Optional[str]) -> str:
        """Return the primary provider name for a request."""
        if provider_override is not None and provider_override.strip():
            return normalize_provider_name(provider_override)
        return self._default_provider

    def chat(self, request: ChatRequest) -> ChatResponse:
        """DTO-facing variant of :meth:`route`."""
        text = self.route(
            request.message,
            provider_override=request.provider_override,
            system_prompt=request.system_prompt,
        )
        return ChatResponse(text=text)

    def route(
        self,
        message: str,
        provider_override: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Route ``message`` to the resolved provider and return its text.

        Raises
        ------
        RoutingError
            ``NO_PROVIDER_FOUND`` when the target name is unregistered (no
            adapter invoked); ``NO_FALLBACK_AVAILABLE`` when the primary
            failed and the fallback name is unregistered.
        ProviderError
            When the primary failed and the fallback failed too.
        """
        target = self.resolve_target(provider_override)
        ctx = LogContext(request_id=uuid.uuid4().hex)
        normalized_log_event(
            self._logger,
            "route.start",
            ctx,
            phase="resolve",
            target=target,
            override=bool(provider_override and provider_override.strip()),
            fallback=self._fallback_provider,
        )

        primary = self._registry.get(target)
        if primary is None:
            normalized_log_event(
                self._logger,
                "route.error",
                ctx,
                phase="resolve",
                level=logging.ERROR,
                error_code=RoutingErrorKind.NO_PROVIDER_FOUND.value,
                target=target,
                registered=list(self._registry.names()),
            )
            raise RoutingError(kind=RoutingErrorKind.NO_PROVIDER_FOUND, name=target)

        outcome = self._invoke(primary, message, system_prompt, ctx, attempt=1, phase="primary")
        if outcome.ok:
            self._log_end(ctx, outcome, fallback_used=False)
            return outcome.text  # type: ignore[return-value]

        primary_error = outcome.error
        normalized_log_event(
            self._logger,
            "route.primary_failed",
            ctx.with_provider(primary_error.provider, primary_error.model),
            phase="primary",
            attempt=1,
            level=logging.WARNING,
            error_code=primary_error.code.value,
            error=primary_error.message,
            fallback=self._fallback_provider,
        )

        fallback = self._registry.get(self._fallback_provider)
        if fallback is None:
            normalized_log_event(
                self._logger,
                "route.error",
                ctx,
                phase="fallback",
                level=logging.ERROR,
                error_code=RoutingErrorKind.NO_FALLBACK_AVAILABLE.value,
                target=self._fallback_provider,
            )
            raise RoutingError(
                kind=RoutingErrorKind.NO_FALLBACK_AVAILABLE,
                name=self._fallback_provider,
                cause=primary_error,
            ) from primary_error

        normalized_log_event(
            self._logger,
            "route.fallback",
            ctx,
            phase="fallback",
            attempt=2,
            primary=primary.provider_name,
            target=fallback.provider_name,
            same_provider=fallback is primary,
        )
        outcome = self._invoke(fallback, message, system_prompt, ctx, attempt=2, phase="fallback")
        if outcome.ok:
            self._log_end(ctx, outcome, fallback_used=True)
            return outcome.text  # type: ignore[return-value]

        fallback_error = outcome.error
        normalized_log_event(
            self._logger,
            "route.error",
            ctx.with_provider(fallback_error.provider, fallback_error.model),
            phase="fallback",
            attempt=2,
            level=logging.ERROR,
            error_code=fallback_error.code.value,
            error=fallback_error.message,
            primary=primary_error.provider,
            primary_error_code=primary_error.code.value,
        )
        raise fallback_error from primary_error

    def _invoke(
        self,
        provider: ChatProvider,
        message: str,
        system_prompt: Optional[str],
        ctx: LogContext,
        *,
        attempt: int,
        phase: str,
    ) -> ProviderOutcome:
        """Invoke one adapter, converting any stray exception to an outcome."""
        name = provider.provider_name
        t0 = time.perf_counter()
        try:
            outcome = provider.invoke(message, system_prompt)
        except Exception as exc:  # adapters should not raise; treat as a failure
            latency_ms = (time.perf_counter() - t0) * 1000.0
            normalized_log_event(
                self._logger,
                "route.adapter_raised",
                ctx.with_provider(name),
                phase=phase,
                attempt=attempt,
                level=logging.WARNING,
                error_code=ErrorCode.INTERNAL.value,
                exception=exc.__class__.__name__,
            )
            return ProviderOutcome.failure(wrap_exception(exc, provider=name), latency_ms=latency_ms)
        if not isinstance(outcome, ProviderOutcome):
            latency_ms = (time.perf_counter() - t0) * 1000.0
            normalized_log_event(
                self._logger,
                "route.adapter_contract_violation",
                ctx.with_provider(name),
                phase=phase,
                attempt=attempt,
                level=logging.WARNING,
                error_code=ErrorCode.INTERNAL.value,
                returned=type(outcome).__name__,
            )
            return ProviderOutcome.failure(
                ProviderError(
                    code=ErrorCode.INTERNAL,
                    message=f"adapter returned {type(outcome).__name__}, expected ProviderOutcome",
                    provider=name,
                ),
                latency_ms=latency_ms,
            )
        if outcome.ok and outcome.text is None:
            return ProviderOutcome.failure(
                ProviderError(
                    code=ErrorCode.MALFORMED_RESPONSE,
                    message="adapter returned neither text nor error",
                    provider=name,
                ),
                latency_ms=outcome.latency_ms,
            )
        return outcome

    def _log_end(self, ctx: LogContext, outcome: ProviderOutcome, *, fallback_used: bool) -> None:
        normalized_log_event(
            self._logger,
            "route.end",
            ctx.with_provider(outcome.provider),
            phase="finalize",
            emitted=True,
            fallback_used=fallback_used,
            latency_ms=outcome.latency_ms,
        )


__all__ = ["ChatOrchestrator"]
