from .client import ServiceClient, client_fetcher
from .config import (
    ClientConfig,
    EndBehavior,
    IdenticalToken,
    OutputTokenEmpty,
    PaginationInfo,
    TruncationMember,
    parse_end_behavior,
)
from .endpoints import EndpointParameter, bind_builtins
from .exceptions import (
    AccessDeniedError,
    ConfigurationError,
    FetchError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ThrottlingError,
    TokenPagerError,
    ValidationError,
)
from .pagination import CursorState, aiter_items, apaginate, iter_items, paginate
from .paginator import Paginator
from .paths import read_path, with_member

__all__ = [
    # Engine
    "paginate",
    "apaginate",
    "iter_items",
    "aiter_items",
    "CursorState",
    # End-of-pagination policies
    "EndBehavior",
    "OutputTokenEmpty",
    "IdenticalToken",
    "TruncationMember",
    "parse_end_behavior",
    # Configuration
    "PaginationInfo",
    "Paginator",
    "ClientConfig",
    # boto3 binding
    "ServiceClient",
    "client_fetcher",
    # Endpoint builtins
    "EndpointParameter",
    "bind_builtins",
    # Helpers
    "read_path",
    "with_member",
    # Exceptions
    "TokenPagerError",
    "ConfigurationError",
    "FetchError",
    "ResourceNotFoundError",
    "ThrottlingError",
    "ValidationError",
    "AccessDeniedError",
    "RequestTimeoutError",
]
