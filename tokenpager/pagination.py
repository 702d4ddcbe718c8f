"""
Cursor-driven pagination engine.

This module threads a continuation token through repeated calls to a paged
operation and decides, after every page, whether another page exists. It knows
nothing about I/O: the caller supplies the page-fetch function.

The produced sequences are lazy and cold. No fetch happens until the consumer
asks for the first page, and the next fetch is only issued once the consumer
asks for the next page (one page in flight, no prefetching).
"""

import copy
from collections.abc import (
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    Iterator,
    Mapping,
    Sequence,
)
from dataclasses import dataclass
from typing import Any, TypeVar

from ._logging import logger, redact_token
from .config import EndBehavior
from .exceptions import ConfigurationError
from .paths import MemberPath, parse_path, read_path, with_member

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


@dataclass
class CursorState:
    """
    Mutable state of a single pagination run.

    Attributes:
        cursor: Token the next request will carry
        has_next: False once the end-of-pagination policy says stop
        pages: Number of pages fetched so far
    """

    cursor: Any = None
    has_next: bool = True
    pages: int = 0

    def advance(
        self, policy: EndBehavior, result: Any, output_token: MemberPath, used_token: Any
    ) -> None:
        """Updates the state from a freshly fetched page."""
        next_token = read_path(result, output_token)
        self.cursor = next_token
        self.has_next = policy.has_next(result, next_token, used_token)
        self.pages += 1


def _prepare(input_token: str, output_token: str | Sequence[str]) -> MemberPath:
    if not input_token:
        raise ConfigurationError("An input token member is required for pagination")
    output_path = parse_path(output_token)
    if not output_path:
        raise ConfigurationError("An output token path is required for pagination")
    return output_path


def paginate(
    initial_request: RequestT,
    policy: EndBehavior,
    fetch_page: Callable[[RequestT], ResultT],
    *,
    input_token: str,
    output_token: str | Sequence[str],
    operation_name: str | None = None,
) -> Iterator[ResultT]:
    """
    Lazily iterates over the pages of a paged operation.

    Args:
        initial_request: Request for the first page. Its input token member may
                         already hold a cursor to resume from.
        policy: End-of-pagination policy for this operation
        fetch_page: Function invoking the paged operation with one request
        input_token: Name of the request member carrying the cursor
        output_token: Path (dotted or split) of the next cursor on the result
        operation_name: Used for logging only

    Returns:
        A single-pass iterator producing one result per fetched page.
        Errors raised by fetch_page surface from the next() call that
        demanded the failing page.

    Usage:
        pages = paginate(
            {"Bucket": "logs"},
            TruncationMember("IsTruncated"),
            client.list_objects_v2,
            input_token="ContinuationToken",
            output_token="NextContinuationToken",
        )
        for page in pages:
            ...
    """
    output_path = _prepare(input_token, output_token)
    return _paginate(
        initial_request, policy, fetch_page, input_token, output_path, operation_name
    )


def _paginate(
    initial_request: Any,
    policy: EndBehavior,
    fetch_page: Callable[[Any], Any],
    input_token: str,
    output_path: MemberPath,
    operation_name: str | None,
) -> Iterator[Any]:
    # The caller's cursor is copied so later pages never alias the original request
    state = CursorState(cursor=copy.deepcopy(read_path(initial_request, (input_token,))))

    logger.info(
        "Starting pagination",
        extra={
            "operation": operation_name,
            "policy": type(policy).__name__,
            "has_cursor": state.cursor is not None,
        },
    )

    while state.has_next:
        used_token = state.cursor
        request = with_member(initial_request, input_token, used_token)

        result = fetch_page(request)
        state.advance(policy, result, output_path, used_token)

        logger.debug(
            "Fetched page",
            extra={
                "operation": operation_name,
                "page": state.pages,
                "token_hash": redact_token(state.cursor),
                "has_next": state.has_next,
            },
        )
        yield result

    logger.info(
        "Pagination complete", extra={"operation": operation_name, "pages": state.pages}
    )


def apaginate(
    initial_request: RequestT,
    policy: EndBehavior,
    fetch_page: Callable[[RequestT], Awaitable[ResultT]],
    *,
    input_token: str,
    output_token: str | Sequence[str],
    operation_name: str | None = None,
) -> AsyncIterator[ResultT]:
    """
    Async counterpart of paginate() for coroutine page fetchers.
    Same laziness and termination rules; use with `async for`.
    """
    output_path = _prepare(input_token, output_token)
    return _apaginate(
        initial_request, policy, fetch_page, input_token, output_path, operation_name
    )


async def _apaginate(
    initial_request: Any,
    policy: EndBehavior,
    fetch_page: Callable[[Any], Awaitable[Any]],
    input_token: str,
    output_path: MemberPath,
    operation_name: str | None,
) -> AsyncIterator[Any]:
    # The caller's cursor is copied so later pages never alias the original request
    state = CursorState(cursor=copy.deepcopy(read_path(initial_request, (input_token,))))

    logger.info(
        "Starting pagination",
        extra={
            "operation": operation_name,
            "policy": type(policy).__name__,
            "has_cursor": state.cursor is not None,
        },
    )

    while state.has_next:
        used_token = state.cursor
        request = with_member(initial_request, input_token, used_token)

        result = await fetch_page(request)
        state.advance(policy, result, output_path, used_token)

        logger.debug(
            "Fetched page",
            extra={
                "operation": operation_name,
                "page": state.pages,
                "token_hash": redact_token(state.cursor),
                "has_next": state.has_next,
            },
        )
        yield result

    logger.info(
        "Pagination complete", extra={"operation": operation_name, "pages": state.pages}
    )


def _items_path(items: str | Sequence[str]) -> MemberPath:
    path = parse_path(items)
    if not path:
        raise ConfigurationError("An items path is required for item projection")
    return path


def _page_items(page: Any, path: MemberPath) -> Iterable[Any]:
    collection = read_path(page, path)
    if collection is None:
        return ()
    if isinstance(collection, Mapping):
        return collection.items()
    return collection


def iter_items(pages: Iterable[Any], items: str | Sequence[str]) -> Iterator[Any]:
    """
    Flattens pages into the elements of the collection at `items`.

    Pages without the collection contribute nothing. Map-typed collections
    produce (key, value) pairs.
    """
    path = _items_path(items)
    return (item for page in pages for item in _page_items(page, path))


def aiter_items(pages: AsyncIterable[Any], items: str | Sequence[str]) -> AsyncIterator[Any]:
    """Async counterpart of iter_items()."""
    path = _items_path(items)
    return _aiter_items(pages, path)


async def _aiter_items(pages: AsyncIterable[Any], path: MemberPath) -> AsyncIterator[Any]:
    async for page in pages:
        for item in _page_items(page, path):
            yield item
