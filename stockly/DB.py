from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from .settings import Settings

settings = Settings()

connect_args = {}
if settings.DATABASE_URL.startswith('sqlite'):
    # FastAPI runs sync routes in a threadpool
    connect_args['check_same_thread'] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)


def get_session():
    with Session(engine) as session:
        yield session
