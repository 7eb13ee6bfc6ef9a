from catalog.models.account import Account
from catalog.models.banner import Banner
from catalog.models.category import Category
from catalog.models.product import Product

__all__ = ["Account", "Banner", "Category", "Product"]
