from catalog.repositories.account_repository import AccountRepository
from catalog.repositories.banner_repository import BannerRepository
from catalog.repositories.category_repository import CategoryRepository
from catalog.repositories.product_repository import ProductRepository

__all__ = [
    "AccountRepository",
    "BannerRepository",
    "CategoryRepository",
    "ProductRepository",
]
