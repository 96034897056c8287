"""Router factory for user-owned resources that only carry a name.

Categories and suppliers share one contract: every method lives on the
collection path and the ``id``/``name`` pair travels in the JSON body.
"""
import logging
from contextlib import contextmanager
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.routing import APIRoute
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import DB, schemas
from ..security import T_CurrentUser

logger = logging.getLogger(__name__)

T_Session = Annotated[Session, Depends(DB.get_session)]

ALLOWED_METHODS = ('POST', 'GET', 'PUT', 'DELETE')


@contextmanager
def store_errors(session: Session, action: str):
    """Turn any store failure inside the block into a logged 500."""
    try:
        yield
    except SQLAlchemyError:
        session.rollback()
        logger.exception('Error %s', action)
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f'Error {action}',
        )


class AnyMethodRoute(APIRoute):
    """Route that accepts any HTTP method once its path matches."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Without a method set, both matching and dispatch skip the check
        self.methods = None


def build_router(model, prefix: str, label: str, plural: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[plural])

    def owned(user_id: int, item_id: str | None):
        return select(model).where(model.id == item_id, model.user_id == user_id)

    @router.post(
        '', status_code=HTTPStatus.CREATED, response_model=schemas.NamedPublic
    )
    def create(
        payload: schemas.NamedPayload,
        session: T_Session,
        current_user: T_CurrentUser,
    ):
        with store_errors(session, f'creating {label}'):
            db_item = model(user_id=current_user.id, name=payload.name)
            session.add(db_item)
            session.commit()
            session.refresh(db_item)
        return db_item

    @router.get('', response_model=list[schemas.NamedPublic])
    def read_all(session: T_Session, current_user: T_CurrentUser):
        with store_errors(session, f'reading {plural}'):
            return session.scalars(
                select(model).where(model.user_id == current_user.id)
            ).all()

    @router.put('', response_model=schemas.NamedPublic)
    def update(
        session: T_Session,
        current_user: T_CurrentUser,
        payload: schemas.NamedPayload | None = None,
    ):
        payload = payload or schemas.NamedPayload()
        if not payload.id or not payload.name:
            raise HTTPException(
                status_code=HTTPStatus.BAD_REQUEST,
                detail='ID and name are required',
            )

        # An unknown id fails inside the store (NoResultFound) and is
        # reported as a 500, not a 404.
        with store_errors(session, f'updating {label}'):
            db_item = session.execute(
                owned(current_user.id, payload.id)
            ).scalar_one()
            db_item.name = payload.name
            session.commit()
            session.refresh(db_item)
        return db_item

    @router.delete('', status_code=HTTPStatus.NO_CONTENT)
    def delete(
        session: T_Session,
        current_user: T_CurrentUser,
        payload: schemas.NamedPayload | None = None,
    ):
        payload = payload or schemas.NamedPayload()
        logger.debug('Deleting %s %s', label, payload.id)
        with store_errors(session, f'deleting {label}'):
            db_item = session.scalar(owned(current_user.id, payload.id))
            if not db_item:
                raise HTTPException(
                    status_code=HTTPStatus.NOT_FOUND,
                    detail=f'{label.capitalize()} not found',
                )
            session.delete(db_item)
            session.commit()
        return None

    def method_not_allowed(current_user: T_CurrentUser):
        return Response(
            status_code=HTTPStatus.METHOD_NOT_ALLOWED,
            headers={'Allow': ', '.join(ALLOWED_METHODS)},
        )

    # Registered last: the CRUD routes above win for their own methods and
    # every other verb on the path lands here, after authentication.
    router.add_api_route(
        '',
        method_not_allowed,
        methods=['PATCH', 'OPTIONS', 'HEAD', 'TRACE', 'CONNECT'],
        include_in_schema=False,
        route_class_override=AnyMethodRoute,
    )

    return router
