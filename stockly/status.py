"""Health checks of the API's own endpoints, as shown on the status page."""
import asyncio
import logging
import time
from datetime import datetime, timezone

import httpx

from .schemas import EndpointStatus

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ('Authentication API', '/api/auth/session'),
    ('Products API', '/api/products'),
    ('Categories API', '/api/categories'),
    ('Suppliers API', '/api/suppliers'),
)

STARTED_AT = time.monotonic()


async def check_endpoint(
    client: httpx.AsyncClient,
    name: str,
    path: str,
    timeout: float,
    headers: dict | None = None,
) -> EndpointStatus:
    start = time.monotonic()
    try:
        response = await client.get(path, headers=headers, timeout=timeout)
        status = 'OK' if response.is_success else 'ERROR'
    except httpx.TimeoutException:
        status = 'TIMEOUT'
    except httpx.RequestError as exc:
        logger.warning('Health check of %s failed: %s', path, exc)
        status = 'ERROR'

    return EndpointStatus(
        name=name,
        path=path,
        status=status,
        response_time=int((time.monotonic() - start) * 1000),
        last_checked=datetime.now(timezone.utc),
    )


async def check_all(
    client: httpx.AsyncClient,
    timeout: float,
    headers: dict | None = None,
    endpoints=ENDPOINTS,
) -> list[EndpointStatus]:
    """Check every endpoint concurrently; one failure never cancels another."""
    return list(
        await asyncio.gather(
            *(
                check_endpoint(client, name, path, timeout, headers)
                for name, path in endpoints
            )
        )
    )


def overall_health(results: list[EndpointStatus]) -> str:
    ok_count = sum(1 for result in results if result.status == 'OK')
    if ok_count == len(results):
        return 'HEALTHY'
    if ok_count > 0:
        return 'DEGRADED'
    return 'DOWN'


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f'{hours}h {minutes}m {seconds}s'


def uptime() -> str:
    return format_uptime(time.monotonic() - STARTED_AT)
