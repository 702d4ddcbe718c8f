"""
Shared pytest fixtures and configuration for tokenpager tests.

Provides scripted page fetchers, a mocked boto3 client and pydantic shapes
modeled after real paginated operations.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, ConfigDict, Field


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against a stubbed service")


class ScriptedFetcher:
    """
    Page fetcher replaying a fixed list of responses.
    Records every request it receives; exceptions in the script are raised.
    """

    def __init__(self, pages: list[Any]):
        self.pages = list(pages)
        self.requests: list[Any] = []

    def __call__(self, request: Any) -> Any:
        self.requests.append(request)
        page = self.pages[len(self.requests) - 1]
        if isinstance(page, Exception):
            raise page
        return page

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def scripted_fetcher():
    """Factory fixture: scripted_fetcher([page1, page2, ...])."""
    return ScriptedFetcher


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 client.

    Unit tests configure the operation methods they need.
    """
    return MagicMock()


# --- Modeled shapes (aliases carry the wire member names) ---


class ListThingsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    owner: str | None = Field(default=None, alias="Owner")
    next_token: str | None = Field(default=None, alias="NextToken")
    max_results: int | None = Field(default=None, alias="MaxResults")


class Thing(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")


class ListThingsResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    things: list[Thing] | None = Field(default=None, alias="Things")
    next_token: str | None = Field(default=None, alias="NextToken")


class Page(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    marker: str | None = Field(default=None, alias="Marker")
    entries: list[str] | None = Field(default=None, alias="Entries")


class NestedListResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: Page | None = Field(default=None, alias="Page")
    is_truncated: bool | None = Field(default=None, alias="IsTruncated")
    status: str | None = Field(default=None, alias="Status")

