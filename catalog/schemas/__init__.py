from catalog.schemas.assets import ImageAsset
from catalog.schemas.auth import (
    AccountRead,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)
from catalog.schemas.banner import BannerFields, BannerRead, BannerUpdate
from catalog.schemas.category import (
    CategoryCreate,
    CategoryRead,
    CategorySummary,
    CategoryUpdate,
)
from catalog.schemas.common import ApiResponse, ErrorResponse, PaginatedResponse, build_pagination
from catalog.schemas.product import (
    Instruction,
    ProductFields,
    ProductRead,
    ProductUpdate,
    Specification,
)

__all__ = [
    "AccountRead",
    "ApiResponse",
    "BannerFields",
    "BannerRead",
    "BannerUpdate",
    "CategoryCreate",
    "CategoryRead",
    "CategorySummary",
    "CategoryUpdate",
    "ErrorResponse",
    "ImageAsset",
    "Instruction",
    "LoginRequest",
    "PaginatedResponse",
    "PasswordResetRequest",
    "ProductFields",
    "ProductRead",
    "ProductUpdate",
    "RegisterRequest",
    "Specification",
    "TokenResponse",
    "build_pagination",
]
