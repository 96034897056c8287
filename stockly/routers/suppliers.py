from .. import models
from .named import build_router

router = build_router(
    models.Supplier, '/api/suppliers', label='supplier', plural='suppliers'
)
