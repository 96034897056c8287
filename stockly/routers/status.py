from datetime import datetime, timezone
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Header

from .. import schemas, status
from ..settings import Settings

settings = Settings()

router = APIRouter(prefix='/api/status', tags=['status'])


async def get_status_client():
    async with httpx.AsyncClient(base_url=settings.STATUS_BASE_URL) as client:
        yield client


T_StatusClient = Annotated[httpx.AsyncClient, Depends(get_status_client)]


@router.get('', response_model=schemas.SystemStatus)
async def read_status(
    client: T_StatusClient,
    authorization: Annotated[str | None, Header()] = None,
):
    headers = {'Authorization': authorization} if authorization else None
    endpoints = await status.check_all(
        client, settings.STATUS_TIMEOUT_SECONDS, headers
    )
    now = datetime.now(timezone.utc)

    return schemas.SystemStatus(
        project='Stockly Inventory Management',
        environment=settings.ENVIRONMENT,
        current_time=now,
        uptime=status.uptime(),
        api_health=status.overall_health(endpoints),
        endpoints=endpoints,
        last_checked=now,
    )
