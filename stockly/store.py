"""Client-side product store.

Keeps the signed-in user's full product list in memory and talks to the
Stockly API through an injected ``httpx.Client``. After every mutation the
list is reloaded from the API, which stays the single source of truth.
"""
import logging
from dataclasses import dataclass

import httpx

from . import schemas
from .insights import MONTH_NAMES, summarize

logger = logging.getLogger(__name__)


@dataclass
class StoreResult:
    success: bool
    product: schemas.ProductPublic | None = None
    error: str | None = None


class ProductStore:
    def __init__(
        self,
        client: httpx.Client,
        page_size: int = 100,
        month_names=MONTH_NAMES['en'],
        currency: str = '€',
    ):
        self.client = client
        self.page_size = page_size
        self.month_names = month_names
        self.currency = currency

        self.all_products: list[schemas.ProductPublic] = []
        self.selected_product: schemas.ProductPublic | None = None
        self.open_product_dialog = False

        self._insights = None
        self._insights_source = None

    def load_products(self) -> list[schemas.ProductPublic]:
        products = []
        while True:
            response = self.client.get(
                '/api/products',
                params={'skip': len(products), 'limit': self.page_size},
            )
            response.raise_for_status()
            page = schemas.ProductListResponse.model_validate(response.json())
            products.extend(page.products)
            if not page.products or len(products) >= page.total_count:
                break

        self.all_products = products
        return products

    def select_product(self, product: schemas.ProductPublic | None):
        self.selected_product = product
        self.open_product_dialog = product is not None

    def _mutate(self, action: str, method: str, url: str, **kwargs):
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning('Could not %s: %s', action, exc)
            return StoreResult(success=False, error=str(exc))

        product = None
        if response.status_code != httpx.codes.NO_CONTENT:
            product = schemas.ProductPublic.model_validate(response.json())

        # The mutation went through but the list may now be stale
        try:
            self.load_products()
        except httpx.HTTPError as exc:
            logger.warning(
                'Could not refresh products after %s: %s', action, exc
            )
            return StoreResult(success=False, product=product, error=str(exc))

        return StoreResult(success=True, product=product)

    def add_product(self, product: schemas.ProductSchema) -> StoreResult:
        return self._mutate(
            'add product', 'POST', '/api/products', json=product.model_dump()
        )

    def update_product(
        self, product_id: str, changes: schemas.ProductUpdateSchema
    ) -> StoreResult:
        return self._mutate(
            'update product',
            'PUT',
            f'/api/products/{product_id}',
            json=changes.model_dump(exclude_unset=True),
        )

    def delete_product(self, product_id: str) -> StoreResult:
        result = self._mutate(
            'delete product', 'DELETE', f'/api/products/{product_id}'
        )
        if (
            result.success
            and self.selected_product
            and self.selected_product.id == product_id
        ):
            self.select_product(None)
        return result

    def copy_product(self, product_id: str) -> StoreResult:
        return self._mutate(
            'copy product', 'POST', f'/api/products/{product_id}/copy'
        )

    def insights(self) -> schemas.InsightsSummary:
        """Analytics for ``all_products``, recomputed only when it is replaced."""
        if self._insights_source is not self.all_products:
            self._insights = summarize(
                self.all_products, self.month_names, self.currency
            )
            self._insights_source = self.all_products
        return self._insights
