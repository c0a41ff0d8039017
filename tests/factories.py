"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from typing import Optional
from uuid import uuid4

from models.product import Category, Product
from models.catalog import CatalogData


class ProductFactory:
    """
    Factory for creating test Product data.

    Usage:
        # Create with defaults
        product = ProductFactory.create()

        # Create with overrides
        product = ProductFactory.create(sales_last_7_days=70, category="Toys")

        # Create multiple
        products = ProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create_dict(
        cls,
        id: Optional[str] = None,
        sku: Optional[str] = None,
        category: str = Category.ELECTRONICS.value,
        available_stock: int = 100,
        in_transit_stock: int = 0,
        planned_shipment: int = 0,
        sales_last_7_days: int = 70,
        **overrides
    ) -> dict:
        """
        Create a single product dict.

        Defaults give daily sales of 10 and 10 days of coverage.

        Returns:
            Product dict matching the stored schema
        """
        counter = cls._next_counter()

        return {
            "id": id or str(uuid4()),
            "sku": sku or f"TEST-{counter:03d}",
            "name": overrides.pop("name", f"Test Product {counter}"),
            "store": overrides.pop("store", "Test Store"),
            "category": category,
            "available_stock": available_stock,
            "in_transit_stock": in_transit_stock,
            "planned_shipment": planned_shipment,
            "sales_last_7_days": sales_last_7_days,
            **overrides,
        }

    @classmethod
    def create(cls, **kwargs) -> Product:
        """Create a single Product."""
        return Product(**cls.create_dict(**kwargs))

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list[Product]:
        """Create multiple products."""
        return [cls.create(**overrides) for _ in range(count)]


class CatalogFactory:
    """Factory for CatalogData."""

    @classmethod
    def create(cls, products: Optional[list] = None, sea_freight_days: int = 30) -> CatalogData:
        return CatalogData(
            products=products if products is not None else ProductFactory.create_batch(2),
            sea_freight_days=sea_freight_days,
        )
