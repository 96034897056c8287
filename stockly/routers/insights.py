from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import DB, models, schemas
from ..insights import MONTH_NAMES, summarize
from ..security import T_CurrentUser
from ..settings import Settings

settings = Settings()

T_Session = Annotated[Session, Depends(DB.get_session)]

router = APIRouter(prefix='/api/insights', tags=['insights'])


@router.get('', response_model=schemas.InsightsSummary)
def read_insights(session: T_Session, current_user: T_CurrentUser):
    """Dashboard analytics over every product the caller owns."""
    rows = session.scalars(
        select(models.Product)
        .where(models.Product.user_id == current_user.id)
        .order_by(models.Product.created_at, models.Product.id)
    ).all()
    products = [schemas.ProductPublic.model_validate(row) for row in rows]

    return summarize(
        products,
        month_names=MONTH_NAMES.get(settings.DISPLAY_LOCALE, MONTH_NAMES['en']),
        currency=settings.CURRENCY_SYMBOL,
    )
