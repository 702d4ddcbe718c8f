from collections.abc import Callable, Generator, Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import boto3
from botocore import xform_name
from pydantic import BaseModel

from ._logging import logger
from .config import ClientConfig, PaginationInfo
from .exceptions import ConfigurationError, handle_client_errors
from .paginator import Paginator


def client_fetcher(client: Any, operation_name: str) -> Callable[[Any], dict[str, Any]]:
    """
    Wraps a botocore client operation as a page-fetch function.

    The returned function accepts a request mapping (or pydantic model),
    drops members set to None (botocore rejects them), invokes the
    operation and translates ClientError into FetchError subclasses.
    """
    method = getattr(client, xform_name(operation_name))

    def fetch(request: Any) -> dict[str, Any]:
        if isinstance(request, BaseModel):
            params = request.model_dump(by_alias=True, exclude_none=True)
        else:
            params = {k: v for k, v in request.items() if v is not None}

        with handle_client_errors(operation_name=operation_name):
            return method(**params)

    return fetch


class ServiceClient:
    """
    Paginated access to one AWS service through boto3.

    Usage:
        s3 = ServiceClient("s3", [list_objects_info], config=ClientConfig(region="eu-south-1"))
        for obj in s3.paginate_items("ListObjectsV2", {"Bucket": "logs"}):
            print(obj["Key"])
    """

    def __init__(
        self,
        service_name: str,
        paginators: Iterable[PaginationInfo] | Mapping[str, PaginationInfo],
        *,
        client: Any | None = None,
        config: ClientConfig | None = None,
    ):
        self.service_name = service_name
        self.config = config or ClientConfig()
        self._client = client
        self._client_context: ContextVar[Any | None] = ContextVar(
            f"{service_name}_client", default=None
        )

        infos = paginators.values() if isinstance(paginators, Mapping) else paginators
        self._paginators: dict[str, Paginator] = {
            info.operation_name: Paginator(info) for info in infos
        }

    def _get_client(self) -> Any:
        """
        Returns the boto3 client for this service.
        Context override first, then the injected client, then a lazily created one.
        """
        ctx_client = self._client_context.get()
        if ctx_client is not None:
            return ctx_client

        if self._client is not None:
            return self._client

        logger.debug("Creating boto3 client", extra={"service": self.service_name})
        self._client = boto3.client(self.service_name, **self.config.client_kwargs())
        return self._client

    @contextmanager
    def using_client(self, client: Any) -> Generator[None, None, None]:
        """
        Context manager to scope a client to a block of code.
        Thread-safe and Async-safe using contextvars.
        """
        token = self._client_context.set(client)
        try:
            yield
        finally:
            self._client_context.reset(token)

    def set_client(self, client: Any) -> None:
        """Injects a custom client (useful for testing)."""
        self._client = client

    @property
    def operations(self) -> list[str]:
        return sorted(self._paginators)

    def get_paginator(self, operation_name: str) -> Paginator:
        """
        Raises:
            ConfigurationError: If the operation is not registered as paginated
        """
        paginator = self._paginators.get(operation_name)
        if paginator is None:
            raise ConfigurationError(
                f"Operation '{operation_name}' is not paginated on service '{self.service_name}'"
            )
        return paginator

    def paginate(
        self, operation_name: str, request: Any | None = None, *, page_size: int | None = None
    ) -> Iterator[Any]:
        """Lazily iterates over the response pages of a paginated operation."""
        paginator = self.get_paginator(operation_name)
        fetch = client_fetcher(self._get_client(), operation_name)
        return paginator.paginate(fetch, request, page_size=page_size)

    def paginate_items(
        self, operation_name: str, request: Any | None = None, *, page_size: int | None = None
    ) -> Iterator[Any]:
        """Lazily iterates over the items of every page of a paginated operation."""
        paginator = self.get_paginator(operation_name)
        fetch = client_fetcher(self._get_client(), operation_name)
        return paginator.paginate_items(fetch, request, page_size=page_size)
