from .product import Product, ProductCreate, ProductRead, empty_product

__all__ = [
    "Product", "ProductCreate", "ProductRead", "empty_product",
]
