from .access_gate import AccessGate, GateDecision, GateResult, check_access, dashboard_for
from .auth_flow import LoginFlow, LoginOutcome, LoginState, end_session
from .auth_store import AuthStore, MemoryAuthStore
from .catalog import (
    categories_with_counts,
    featured_subset,
    filter_catalog,
    find_category_by_slug,
    products_in_category,
    search_products,
    sort_products,
)
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ForbiddenError,
    InvalidCredentialsError,
    NetworkError,
    NotFoundError,
    RoleMismatchError,
    ServerError,
    TransportError,
    ValidationError,
    to_user_message,
)
from .http_client import HttpClient
from .models import (
    Category,
    CategoryWithCount,
    Identity,
    LoginResponse,
    Product,
    ProductImage,
    Role,
    SessionData,
    StockAssignment,
)
from .normalizers import normalize_listing, unwrap_rows
from .session import SessionStore
from .stock import (
    StockLevel,
    StockSummary,
    distinct_category_names,
    filter_by_search_and_category,
    filter_by_stock_level,
    is_low_stock,
    margin,
    stock_summary,
)

__all__ = [
    "AccessGate",
    "ApiError",
    "AuthStore",
    "Category",
    "CategoryWithCount",
    "ClientConfig",
    "ConfigError",
    "ForbiddenError",
    "GateDecision",
    "GateResult",
    "HttpClient",
    "Identity",
    "InvalidCredentialsError",
    "LoginFlow",
    "LoginOutcome",
    "LoginResponse",
    "LoginState",
    "MemoryAuthStore",
    "NetworkError",
    "NotFoundError",
    "Product",
    "ProductImage",
    "Role",
    "RoleMismatchError",
    "ServerError",
    "SessionData",
    "SessionStore",
    "StockAssignment",
    "StockLevel",
    "StockSummary",
    "TransportError",
    "ValidationError",
    "categories_with_counts",
    "check_access",
    "dashboard_for",
    "distinct_category_names",
    "end_session",
    "featured_subset",
    "filter_by_search_and_category",
    "filter_by_stock_level",
    "filter_catalog",
    "find_category_by_slug",
    "is_low_stock",
    "load_config",
    "margin",
    "normalize_listing",
    "products_in_category",
    "search_products",
    "sort_products",
    "stock_summary",
    "to_user_message",
    "unwrap_rows",
]
