"""
Per-operation paginators.

A Paginator binds a PaginationInfo to the pagination engine. All member paths
are resolved when the Paginator is built, so a misconfigured operation fails
before any request is sent.
"""

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ._logging import logger
from .config import EndBehavior, PaginationInfo, TruncationMember
from .exceptions import ConfigurationError
from .pagination import aiter_items, apaginate, iter_items, paginate
from .paths import MemberPath, is_boolean_member, is_model_shape, resolve_path, with_member


class Paginator:
    """
    Paginates one operation according to its PaginationInfo.

    Usage:
        info = PaginationInfo.from_trait(
            "ListObjectsV2",
            {"inputToken": "ContinuationToken", "outputToken": "NextContinuationToken",
             "items": "Contents", "pageSize": "MaxKeys"},
            end_behavior="TruncationMember:IsTruncated",
        )
        paginator = Paginator(info)
        for obj in paginator.paginate_items(fetch, {"Bucket": "logs"}, page_size=100):
            ...
    """

    def __init__(self, info: PaginationInfo):
        self.info = info
        self.operation_name = info.operation_name

        # Resolve every member up front. Names are kept in their wire form
        # (alias) so they address raw service dicts and pydantic models alike.
        self.input_token = self._wire_member(info.input_shape, info.input_token)
        self.page_size: str | None = None
        if info.page_size:
            self.page_size = self._wire_member(info.input_shape, info.page_size)

        self.output_token: MemberPath = resolve_path(
            info.output_shape, info.output_token, by_alias=True
        )
        if not self.output_token:
            raise ConfigurationError(
                f"Operation '{self.operation_name}' has an empty output token path"
            )

        self.items: MemberPath | None = None
        if info.items:
            self.items = resolve_path(info.output_shape, info.items, by_alias=True)

        self.end_behavior: EndBehavior = self._resolve_end_behavior(info)

        logger.debug(
            "Paginator configured",
            extra={
                "operation": self.operation_name,
                "policy": type(self.end_behavior).__name__,
                "has_items": self.items is not None,
            },
        )

    @staticmethod
    def _wire_member(shape: Any, name: str) -> str:
        (wire_name,) = resolve_path(shape, (name,), by_alias=True)
        return wire_name

    @classmethod
    def _resolve_end_behavior(cls, info: PaginationInfo) -> EndBehavior:
        behavior = info.end_behavior
        if not isinstance(behavior, TruncationMember):
            return behavior

        member_name = cls._wire_member(info.output_shape, behavior.member_name)
        if not is_boolean_member(info.output_shape, member_name):
            raise ConfigurationError(
                f"Truncation member '{behavior.member_name}' of '{info.operation_name}' "
                "must be a boolean",
                member=behavior.member_name,
                shape=info.output_shape,
            )
        return TruncationMember(member_name=member_name)

    def _initial_request(self, request: Any | None, page_size: int | None) -> Any:
        if request is None:
            request = self._empty_request()

        if page_size is not None:
            if self.page_size is None:
                raise ConfigurationError(
                    f"Operation '{self.operation_name}' does not define a page size member"
                )
            request = with_member(request, self.page_size, page_size)
        return request

    def _empty_request(self) -> Any:
        shape = self.info.input_shape
        if not is_model_shape(shape):
            return {}
        try:
            return shape()
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Operation '{self.operation_name}' needs an explicit request: "
                f"{shape.__name__} has required members",
                shape=shape,
                original_error=e,
            ) from e

    def _require_items(self) -> MemberPath:
        if self.items is None:
            raise ConfigurationError(
                f"Operation '{self.operation_name}' does not define an items member"
            )
        return self.items

    # --- EXECUTION ---

    def paginate(
        self,
        fetch_page: Callable[[Any], Any],
        request: Any | None = None,
        *,
        page_size: int | None = None,
    ) -> Iterator[Any]:
        """
        Lazily iterates over response pages.

        Args:
            fetch_page: Function invoking the operation with one request
            request: Initial request (None builds an empty one)
            page_size: Optional value for the page size member
        """
        return paginate(
            self._initial_request(request, page_size),
            self.end_behavior,
            fetch_page,
            input_token=self.input_token,
            output_token=self.output_token,
            operation_name=self.operation_name,
        )

    def paginate_items(
        self,
        fetch_page: Callable[[Any], Any],
        request: Any | None = None,
        *,
        page_size: int | None = None,
    ) -> Iterator[Any]:
        """Lazily iterates over the items of every page, across pages."""
        items = self._require_items()
        return iter_items(self.paginate(fetch_page, request, page_size=page_size), items)

    def apaginate(
        self,
        fetch_page: Callable[[Any], Awaitable[Any]],
        request: Any | None = None,
        *,
        page_size: int | None = None,
    ) -> AsyncIterator[Any]:
        return apaginate(
            self._initial_request(request, page_size),
            self.end_behavior,
            fetch_page,
            input_token=self.input_token,
            output_token=self.output_token,
            operation_name=self.operation_name,
        )

    def apaginate_items(
        self,
        fetch_page: Callable[[Any], Awaitable[Any]],
        request: Any | None = None,
        *,
        page_size: int | None = None,
    ) -> AsyncIterator[Any]:
        items = self._require_items()
        return aiter_items(self.apaginate(fetch_page, request, page_size=page_size), items)
