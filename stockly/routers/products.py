import logging
import time
from http import HTTPStatus
from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import DB, models, schemas
from ..security import T_CurrentUser

logger = logging.getLogger(__name__)

T_Session = Annotated[Session, Depends(DB.get_session)]

router = APIRouter(prefix='/api/products', tags=['products'])


def get_owned_product(session: Session, product_id: str, user_id: int):
    db_product = session.scalar(
        select(models.Product).where(
            models.Product.id == product_id,
            models.Product.user_id == user_id,
        )
    )
    if not db_product:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail='Product not found',
        )
    return db_product


def ensure_sku_available(
    session: Session, sku: str, user_id: int, exclude_id: str | None = None
):
    query = select(models.Product.id).where(
        models.Product.sku == sku, models.Product.user_id == user_id
    )
    if exclude_id:
        query = query.where(models.Product.id != exclude_id)
    if session.scalar(query):
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail='SKU already registered',
        )


@router.post(
    '', status_code=HTTPStatus.CREATED, response_model=schemas.ProductPublic
)
def create_product(
    product: schemas.ProductSchema,
    session: T_Session,
    current_user: T_CurrentUser,
):
    ensure_sku_available(session, product.sku, current_user.id)

    db_product = models.Product(user_id=current_user.id, **product.model_dump())
    session.add(db_product)
    session.commit()
    session.refresh(db_product)

    return db_product


@router.get('', response_model=schemas.ProductListResponse)
def read_products(
    session: T_Session,
    current_user: T_CurrentUser,
    skip: int = 0,
    limit: int = 100,
    name: str | None = Query(None),
):
    query = select(models.Product).where(
        models.Product.user_id == current_user.id
    )
    if name:
        query = query.where(models.Product.name.contains(name))

    total_count = session.scalar(
        select(func.count()).select_from(query.subquery())
    )
    products = session.scalars(
        query.order_by(models.Product.created_at, models.Product.id)
        .offset(skip)
        .limit(limit)
    ).all()

    return schemas.ProductListResponse(
        products=products, total_count=total_count
    )


@router.get('/{product_id}', response_model=schemas.ProductPublic)
def get_product_by_id(
    product_id: str, session: T_Session, current_user: T_CurrentUser
):
    return get_owned_product(session, product_id, current_user.id)


@router.put('/{product_id}', response_model=schemas.ProductPublic)
def update_product(
    product_id: str,
    product: schemas.ProductUpdateSchema,
    session: T_Session,
    current_user: T_CurrentUser,
):
    db_product = get_owned_product(session, product_id, current_user.id)

    changes = product.model_dump(exclude_unset=True, exclude_none=True)
    if 'sku' in changes:
        ensure_sku_available(
            session, changes['sku'], current_user.id, exclude_id=product_id
        )

    for key, value in changes.items():
        setattr(db_product, key, value)

    session.commit()
    session.refresh(db_product)

    return db_product


@router.delete('/{product_id}', status_code=HTTPStatus.NO_CONTENT)
def delete_product(
    product_id: str, session: T_Session, current_user: T_CurrentUser
):
    db_product = get_owned_product(session, product_id, current_user.id)

    session.delete(db_product)
    session.commit()
    return None


@router.post(
    '/{product_id}/copy',
    status_code=HTTPStatus.CREATED,
    response_model=schemas.ProductPublic,
)
def copy_product(
    product_id: str, session: T_Session, current_user: T_CurrentUser
):
    """Clone a product under a fresh id, a "(copy)" name and a suffixed SKU."""
    source = get_owned_product(session, product_id, current_user.id)

    db_product = models.Product(
        user_id=current_user.id,
        name=f'{source.name} (copy)',
        # Millisecond stamp plus a random fragment keeps same-instant copies
        # from colliding on the (user_id, sku) constraint
        sku=f'{source.sku}-{int(time.time() * 1000)}-{uuid4().hex[:6]}',
        price=source.price,
        quantity=source.quantity,
        category=source.category or 'Unknown',
        supplier=source.supplier or 'Unknown',
        status=source.status,
    )
    session.add(db_product)
    session.commit()
    session.refresh(db_product)
    logger.info('Copied product %s into %s', source.id, db_product.id)

    return db_product
