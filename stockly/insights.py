"""Business insights derived from a user's product list.

``summarize`` is a pure function: it reads the products it is given, never
mutates them and performs no I/O, so it can be recomputed whenever the list
changes. Products are expected to be normalized already (see
``schemas.ProductPublic``): ``price`` is a float and ``quantity`` an int.
"""
from collections.abc import Sequence
from datetime import date, datetime, timezone

from .schemas import (
    CategorySlice,
    InsightsSummary,
    MonthlyTrendPoint,
    PriceRangeSlice,
    ProductPublic,
    StatusSlice,
    TopProduct,
)

LOW_STOCK_THRESHOLD = 20
TOP_PRODUCTS_LIMIT = 5
LOW_STOCK_LIMIT = 5

MONTH_NAMES = {
    'es': (
        'Ene', 'Feb', 'Mar', 'Abr', 'May', 'Jun',
        'Jul', 'Ago', 'Sep', 'Oct', 'Nov', 'Dic',
    ),
    'en': (
        'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
        'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
    ),
}

# (lower, upper, upper_inclusive). The 1000-2000 bucket closes on 2000 and
# the open-ended bucket starts strictly above it, so 2000 lands only in
# 1000-2000.
PRICE_RANGES = (
    (0, 100, False),
    (100, 500, False),
    (500, 1000, False),
    (1000, 2000, True),
    (2000, None, False),
)


def is_low_stock(quantity: int) -> bool:
    return 0 < quantity <= LOW_STOCK_THRESHOLD


def stock_value(product) -> float:
    return product.price * product.quantity


def in_price_range(price: float, lower, upper, upper_inclusive: bool) -> bool:
    if upper is None:
        return price > lower
    if upper_inclusive:
        return lower <= price <= upper
    return lower <= price < upper


def price_range_label(lower, upper, currency: str) -> str:
    if upper is None:
        return f'{currency}{lower}+'
    return f'{currency}{lower}-{currency}{upper}'


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def monthly_trend(
    products: Sequence, month_names: Sequence[str], today: date | None = None
) -> list[MonthlyTrendPoint]:
    """Cumulative and per-month product counts for one calendar year.

    The year is taken from the first product's creation date, or from
    ``today`` (defaulting to the current UTC date) when there are none.
    Products created in other years are not counted.
    """
    if products:
        year = _as_utc(products[0].created_at).year
    else:
        year = (today or datetime.now(timezone.utc).date()).year

    added = [0] * 12
    for product in products:
        created = _as_utc(product.created_at)
        if created.year == year:
            added[created.month - 1] += 1

    trend = []
    cumulative = 0
    for index, month in enumerate(month_names):
        cumulative += added[index]
        trend.append(
            MonthlyTrendPoint(
                month=month, products=cumulative, monthly_added=added[index]
            )
        )
    return trend


def summarize(
    products: Sequence,
    month_names: Sequence[str] = MONTH_NAMES['en'],
    currency: str = '€',
    today: date | None = None,
) -> InsightsSummary:
    total_products = len(products)
    total_value = sum(stock_value(p) for p in products)
    total_quantity = sum(p.quantity for p in products)
    low_stock_items = sum(1 for p in products if is_low_stock(p.quantity))
    out_of_stock_items = sum(1 for p in products if p.quantity == 0)

    average_price = total_value / total_quantity if total_quantity > 0 else 0
    if total_products:
        stock_utilization = (
            (total_products - out_of_stock_items) / total_products * 100
        )
        value_density = total_value / total_products
        stock_coverage = total_quantity / total_products
    else:
        stock_utilization = value_density = stock_coverage = 0

    categories: dict[str, dict] = {}
    statuses: dict[str, int] = {}
    for product in products:
        category = product.category or 'Unknown'
        current = categories.setdefault(
            category, {'count': 0, 'quantity': 0, 'value': 0.0}
        )
        current['count'] += 1
        current['quantity'] += product.quantity
        current['value'] += stock_value(product)

        status = product.status or 'Unknown'
        statuses[status] = statuses.get(status, 0) + 1

    category_distribution = [
        CategorySlice(
            name=name,
            value=data['quantity'],
            count=data['count'],
            total_value=data['value'],
        )
        for name, data in categories.items()
    ]
    status_distribution = [
        StatusSlice(name=name, value=count) for name, count in statuses.items()
    ]

    price_range_distribution = [
        PriceRangeSlice(
            name=price_range_label(lower, upper, currency),
            value=sum(
                1
                for p in products
                if in_price_range(p.price, lower, upper, inclusive)
            ),
        )
        for lower, upper, inclusive in PRICE_RANGES
    ]

    # sorted() is stable: equal values keep their input order
    by_value = sorted(products, key=stock_value, reverse=True)
    top_products = [
        TopProduct(name=p.name, value=stock_value(p), quantity=p.quantity)
        for p in by_value[:TOP_PRODUCTS_LIMIT]
    ]

    low_stock = sorted(
        (p for p in products if is_low_stock(p.quantity)),
        key=lambda p: p.quantity,
    )
    low_stock_products = [
        ProductPublic.model_validate(p, from_attributes=True)
        for p in low_stock[:LOW_STOCK_LIMIT]
    ]

    return InsightsSummary(
        total_products=total_products,
        total_value=total_value,
        total_quantity=total_quantity,
        average_price=average_price,
        low_stock_items=low_stock_items,
        out_of_stock_items=out_of_stock_items,
        stock_utilization=stock_utilization,
        value_density=value_density,
        stock_coverage=stock_coverage,
        category_distribution=category_distribution,
        status_distribution=status_distribution,
        price_range_distribution=price_range_distribution,
        monthly_trend=monthly_trend(products, month_names, today),
        top_products=top_products,
        low_stock_products=low_stock_products,
    )
