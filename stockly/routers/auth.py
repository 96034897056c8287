import logging
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import DB, models, schemas, security

logger = logging.getLogger(__name__)

T_Session = Annotated[Session, Depends(DB.get_session)]

router = APIRouter(prefix='/api/auth', tags=['auth'])


@router.post(
    '/register', status_code=HTTPStatus.CREATED, response_model=schemas.UserPublic
)
def register(user: schemas.UserCreate, session: T_Session):
    db_user = session.scalar(
        select(models.User).where(models.User.email == user.email)
    )
    if db_user:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail='Email already registered',
        )

    db_user = models.User(
        name=user.name,
        email=user.email,
        password=security.get_password_hash(user.password),
    )
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info('Registered user %s', db_user.id)

    return db_user


@router.post('/token', response_model=schemas.Token)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: T_Session,
):
    """Log in with the e-mail address sent as the OAuth2 ``username``."""
    user = session.scalar(
        select(models.User).where(models.User.email == form_data.username)
    )

    if not user or not security.verify_password(
        form_data.password, user.password
    ):
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail='Incorrect email or password',
        )

    access_token = security.create_access_token(data={'sub': str(user.id)})
    return {'access_token': access_token, 'token_type': 'bearer'}


@router.post('/refresh_token', response_model=schemas.Token)
def refresh_access_token(user: security.T_CurrentUser):
    new_access_token = security.create_access_token(data={'sub': str(user.id)})
    return {'access_token': new_access_token, 'token_type': 'bearer'}


@router.get('/session', response_model=schemas.UserPublic)
def read_session(user: security.T_CurrentUser):
    return user
