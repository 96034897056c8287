import httpx
import pytest

from stockly.schemas import ProductSchema, ProductUpdateSchema
from stockly.store import ProductStore


@pytest.fixture
def store(client, auth_headers):
    client.headers.update(auth_headers)
    return ProductStore(client, page_size=2)


def new_product(sku, price=10.0, quantity=5, name=None):
    return ProductSchema(
        name=name or sku, sku=sku, price=price, quantity=quantity
    )


def test_load_products_pages_through_everything(store):
    for i in range(5):
        store.add_product(new_product(f'S{i}'))

    products = store.load_products()

    assert len(products) == 5
    assert store.all_products is products
    assert len({p.id for p in products}) == 5


def test_add_product_refreshes_list(store):
    result = store.add_product(new_product('A'))

    assert result.success
    assert result.product.sku == 'A'
    assert [p.sku for p in store.all_products] == ['A']


def test_add_product_failure_is_reported_not_raised(store):
    store.add_product(new_product('A'))
    before = store.all_products

    result = store.add_product(new_product('A'))

    assert not result.success
    assert result.product is None
    assert '400' in result.error
    assert store.all_products is before


def test_update_product(store):
    created = store.add_product(new_product('A', quantity=5)).product

    result = store.update_product(created.id, ProductUpdateSchema(quantity=1))

    assert result.success
    assert store.all_products[0].quantity == 1


def test_delete_product_clears_selection(store):
    created = store.add_product(new_product('A')).product
    store.select_product(created)
    assert store.open_product_dialog

    result = store.delete_product(created.id)

    assert result.success
    assert result.product is None
    assert store.all_products == []
    assert store.selected_product is None
    assert not store.open_product_dialog


def test_delete_missing_product(store):
    result = store.delete_product('missing')

    assert not result.success


def test_copy_product(store):
    created = store.add_product(new_product('A', name='Lamp')).product

    result = store.copy_product(created.id)

    assert result.success
    assert result.product.name == 'Lamp (copy)'
    assert len(store.all_products) == 2


def test_insights_recomputed_only_after_refresh(store):
    store.add_product(new_product('A', price=2, quantity=3))

    first = store.insights()
    assert store.insights() is first
    assert first.total_value == 6

    store.add_product(new_product('B', price=1, quantity=0))
    second = store.insights()

    assert second is not first
    assert second.total_products == 2
    assert second.out_of_stock_items == 1


def test_network_error_is_reported():
    def handler(request):
        raise httpx.ConnectError('refused', request=request)

    client = httpx.Client(
        transport=httpx.MockTransport(handler), base_url='http://stockly'
    )
    store = ProductStore(client)

    result = store.add_product(new_product('A'))

    assert not result.success
    assert 'refused' in result.error


def test_failed_refresh_after_mutation_is_reported():
    created = {
        'id': 'abc',
        'name': 'A',
        'sku': 'A',
        'price': 10.0,
        'quantity': 5,
        'category': 'Unknown',
        'supplier': 'Unknown',
        'status': 'Available',
        'created_at': '2025-01-01T00:00:00',
        'user_id': 1,
    }

    def handler(request):
        if request.method == 'POST':
            return httpx.Response(201, json=created)
        return httpx.Response(500, json={'detail': 'boom'})

    client = httpx.Client(
        transport=httpx.MockTransport(handler), base_url='http://stockly'
    )
    store = ProductStore(client)

    result = store.add_product(new_product('A'))

    assert not result.success
    assert result.product.id == 'abc'
    assert '500' in result.error
    assert store.all_products == []
