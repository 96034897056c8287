import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import DB, models
from .routers import auth, categories, insights, products, status, suppliers
from .settings import Settings

settings = Settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    models.table_registry.metadata.create_all(DB.engine)
    logger.info('Stockly started (%s)', settings.ENVIRONMENT)
    yield


app = FastAPI(
    title='Stockly',
    description='Inventory API for products, categories, suppliers and insights.',
    version='1.0.0',
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(auth.router)
app.include_router(products.router)
app.include_router(categories.router)
app.include_router(suppliers.router)
app.include_router(insights.router)
app.include_router(status.router)


@app.get('/')
def read_root():
    return {'message': 'Welcome to Stockly'}
