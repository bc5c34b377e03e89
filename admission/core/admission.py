"""Admission control dependency for FastAPI routes.

This module wires the admission registry into the HTTP layer and renders each
admission outcome:

- admitted: the request proceeds to the route handler.
- rate limited: the request is dropped with HTTP 429.
- unknown client (or missing header): the request is ignored with HTTP 403.

No rate limiting logic lives here; decisions come from the registry.
"""

from __future__ import annotations

import logging
import math
import threading

from fastapi import HTTPException, Request, status

from admission.adapters.rate_limit.factory import create_rate_limiter
from admission.core.clients import hash_client_id, parse_client_ids
from admission.core.config import settings
from admission.services.registry import AdmissionRegistry, AdmissionResult

logger = logging.getLogger(__name__)


_registry: AdmissionRegistry | None = None
_registry_config: tuple[str, int, int, str] | None = None
_registry_lock = threading.Lock()


def _current_config() -> tuple[str, int, int, str]:
    cfg = settings.admission
    return (cfg.algorithm, cfg.capacity, cfg.window_millis, cfg.client_ids)


def get_registry() -> AdmissionRegistry:
    """Return the process-wide admission registry.

    The instance is cached in-module to preserve bucket state across requests.
    If configuration changes (primarily in tests), the registry is rebuilt
    with fresh buckets.

    Raises:
        InvalidConfigurationError: If the configured algorithm is unknown.
    """

    global _registry, _registry_config

    config = _current_config()

    # Sync routes run in the threadpool; only one caller may build the registry.
    with _registry_lock:
        if _registry is None or _registry_config != config:
            algorithm, capacity, window_millis, client_ids = config
            template = create_rate_limiter(
                algorithm,
                capacity=capacity,
                window_millis=window_millis,
            )
            _registry = AdmissionRegistry(parse_client_ids(client_ids), template)
            _registry_config = config
        return _registry


def reset_registry() -> None:
    """Drop the cached registry so the next request builds a fresh one."""

    global _registry, _registry_config
    with _registry_lock:
        _registry = None
        _registry_config = None


def _throttle_headers(registry: AdmissionRegistry, client_id: str) -> dict[str, str]:
    headers = {"X-RateLimit-Limit": str(registry.template.capacity)}
    limiter = registry.limiter_for(client_id)
    if limiter is not None:
        retry_after_s = max(1, math.ceil(limiter.wait_millis() / 1000))
        headers["Retry-After"] = str(retry_after_s)
    return headers


async def enforce_admission(request: Request) -> str:
    """FastAPI dependency enforcing per-client admission.

    Reads the client identifier from the configured header (default
    ``X-Client-ID``) and consumes one token from that client's bucket.

    Returns:
        str: The admitted client identifier.

    Raises:
        HTTPException: 403 for unrecognized clients, 429 when the client's
            rate limit is reached.
    """

    cfg = settings.admission
    client_id = request.headers.get(cfg.client_id_header, "")

    if not cfg.enabled:
        logger.debug("admission.skipped", extra={"reason": "admission_disabled"})
        return client_id

    registry = get_registry()
    result = registry.evaluate(client_id) if client_id else AdmissionResult.UNKNOWN_CLIENT
    log_extra = {
        "client_hash": hash_client_id(client_id),
        "outcome": result.value,
        "capacity": cfg.capacity,
        "window_ms": cfg.window_millis,
    }

    if result is AdmissionResult.ADMITTED:
        logger.info("admission.admitted", extra=log_extra)
        return client_id

    if result is AdmissionResult.RATE_LIMITED:
        logger.warning("admission.rate_limited", extra=log_extra)
        headers = _throttle_headers(registry, client_id) if cfg.include_headers else None
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit reached; dropping request",
            headers=headers,
        )

    logger.warning(
        "admission.unknown_client",
        extra={**log_extra, "client_id_present": bool(client_id)},
    )
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Unrecognized client ID; ignoring request",
    )
