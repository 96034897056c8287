from .. import models
from .named import build_router

router = build_router(
    models.Category, '/api/categories', label='category', plural='categories'
)
