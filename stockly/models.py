from datetime import datetime
from uuid import uuid4

from sqlalchemy import ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, registry

table_registry = registry()


def new_id() -> str:
    return uuid4().hex


@table_registry.mapped_as_dataclass
class User:
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str]
    email: Mapped[str] = mapped_column(unique=True)
    password: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(
        init=False, server_default=func.now()
    )


@table_registry.mapped_as_dataclass
class Product:
    __tablename__ = 'products'
    __table_args__ = (UniqueConstraint('user_id', 'sku'),)

    id: Mapped[str] = mapped_column(
        init=False, primary_key=True, insert_default=new_id
    )
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'))
    name: Mapped[str]
    sku: Mapped[str]
    price: Mapped[float]
    quantity: Mapped[int]
    category: Mapped[str] = mapped_column(default='Unknown')
    supplier: Mapped[str] = mapped_column(default='Unknown')
    status: Mapped[str] = mapped_column(default='Available')
    created_at: Mapped[datetime] = mapped_column(
        init=False, server_default=func.now()
    )


# Category and Supplier only carry a label; name stays nullable at the
# Python level so a missing name fails at the database like any store error.
@table_registry.mapped_as_dataclass
class Category:
    __tablename__ = 'categories'

    id: Mapped[str] = mapped_column(
        init=False, primary_key=True, insert_default=new_id
    )
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'))
    name: Mapped[str | None] = mapped_column(nullable=False)


@table_registry.mapped_as_dataclass
class Supplier:
    __tablename__ = 'suppliers'

    id: Mapped[str] = mapped_column(
        init=False, primary_key=True, insert_default=new_id
    )
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'))
    name: Mapped[str | None] = mapped_column(nullable=False)
