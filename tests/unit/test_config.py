"""
Unit tests for configuration dataclasses.

Tests PaginationInfo trait parsing, end-behavior parsing and ClientConfig.
"""

import pytest

from tokenpager.config import (
    ClientConfig,
    IdenticalToken,
    OutputTokenEmpty,
    PaginationInfo,
    TruncationMember,
    parse_end_behavior,
)
from tokenpager.exceptions import ConfigurationError


@pytest.mark.unit
class TestParseEndBehavior:
    """Test parsing of end-of-pagination policies."""

    def test_default_is_output_token_empty(self) -> None:
        assert parse_end_behavior(None) == OutputTokenEmpty()

    def test_named_policies(self) -> None:
        assert parse_end_behavior("OutputTokenEmpty") == OutputTokenEmpty()
        assert parse_end_behavior("IdenticalToken") == IdenticalToken()

    def test_truncation_member_string(self) -> None:
        assert parse_end_behavior("TruncationMember:IsTruncated") == TruncationMember(
            "IsTruncated"
        )

    def test_truncation_member_mapping(self) -> None:
        assert parse_end_behavior({"truncationMember": "IsTruncated"}) == TruncationMember(
            "IsTruncated"
        )

    def test_instances_pass_through(self) -> None:
        policy = TruncationMember("Truncated")
        assert parse_end_behavior(policy) is policy

    @pytest.mark.parametrize(
        "value",
        ["Unknown", "TruncationMember", "TruncationMember:", "IdenticalToken:x", {"other": 1}],
    )
    def test_invalid_values(self, value) -> None:
        with pytest.raises(ConfigurationError):
            parse_end_behavior(value)


@pytest.mark.unit
class TestPaginationInfo:
    """Test PaginationInfo construction from the paginated trait."""

    def test_from_trait_full(self) -> None:
        info = PaginationInfo.from_trait(
            "ListObjectsV2",
            {
                "inputToken": "ContinuationToken",
                "outputToken": "NextContinuationToken",
                "items": "Contents",
                "pageSize": "MaxKeys",
            },
            end_behavior="TruncationMember:IsTruncated",
        )

        assert info.operation_name == "ListObjectsV2"
        assert info.input_token == "ContinuationToken"
        assert info.output_token == ("NextContinuationToken",)
        assert info.items == ("Contents",)
        assert info.page_size == "MaxKeys"
        assert info.end_behavior == TruncationMember("IsTruncated")

    def test_from_trait_defaults(self) -> None:
        info = PaginationInfo.from_trait("Scan", {"inputToken": "A", "outputToken": "B"})

        assert info.items is None
        assert info.page_size is None
        assert info.end_behavior == OutputTokenEmpty()
        assert info.input_shape is None
        assert info.output_shape is None

    def test_dotted_paths_are_split(self) -> None:
        info = PaginationInfo.from_trait(
            "ListJobs",
            {"inputToken": "nextToken", "outputToken": "result.nextToken", "items": "result.jobs"},
        )

        assert info.output_token == ("result", "nextToken")
        assert info.items == ("result", "jobs")

    def test_service_trait_supplies_defaults(self) -> None:
        service_trait = {"inputToken": "NextToken", "outputToken": "NextToken", "pageSize": "Limit"}

        info = PaginationInfo.from_trait(
            "ListThings", {"items": "Things"}, service_trait=service_trait
        )

        assert info.input_token == "NextToken"
        assert info.output_token == ("NextToken",)
        assert info.page_size == "Limit"
        assert info.items == ("Things",)

    def test_operation_trait_overrides_service_trait(self) -> None:
        info = PaginationInfo.from_trait(
            "ListThings",
            {"outputToken": "Marker", "pageSize": None},
            service_trait={"inputToken": "Token", "outputToken": "NextToken", "pageSize": "Max"},
        )

        assert info.output_token == ("Marker",)
        # None values on the operation do not erase service defaults
        assert info.page_size == "Max"

    def test_missing_tokens_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="inputToken and outputToken"):
            PaginationInfo.from_trait("ListThings", {"inputToken": "NextToken"})

    def test_nested_input_token_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="top-level"):
            PaginationInfo.from_trait("ListThings", {"inputToken": "a.b", "outputToken": "c"})

    def test_empty_path_segment_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            PaginationInfo.from_trait("ListThings", {"inputToken": "a", "outputToken": "b..c"})

    def test_equality(self) -> None:
        trait = {"inputToken": "A", "outputToken": "B"}
        assert PaginationInfo.from_trait("Op", trait) == PaginationInfo.from_trait("Op", trait)
        assert PaginationInfo.from_trait("Op", trait) != PaginationInfo.from_trait("Other", trait)


@pytest.mark.unit
class TestClientConfig:
    """Test ClientConfig defaults, environment loading and boto3 kwargs."""

    def test_defaults(self) -> None:
        config = ClientConfig()

        assert config.region is None
        assert config.use_fips is False
        assert config.use_dual_stack is False
        assert config.endpoint_url is None

    def test_from_env(self) -> None:
        config = ClientConfig.from_env(
            {
                "AWS_REGION": "eu-south-1",
                "AWS_USE_FIPS_ENDPOINT": "true",
                "AWS_USE_DUALSTACK_ENDPOINT": "False",
                "AWS_ENDPOINT_URL": "http://localhost:4566",
            }
        )

        assert config.region == "eu-south-1"
        assert config.use_fips is True
        assert config.use_dual_stack is False
        assert config.endpoint_url == "http://localhost:4566"

    def test_from_env_falls_back_to_default_region(self) -> None:
        config = ClientConfig.from_env({"AWS_DEFAULT_REGION": "us-west-2"})

        assert config.region == "us-west-2"

    def test_from_env_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("AWS_REGION", "ap-south-1")
        monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)

        config = ClientConfig.from_env()

        assert config.region == "ap-south-1"
        assert config.endpoint_url is None

    def test_client_kwargs(self) -> None:
        config = ClientConfig(
            region="eu-south-1",
            use_fips=True,
            endpoint_url="http://localhost:4566",
            s3_force_path_style=True,
            s3_enable_accelerate=True,
        )

        kwargs = config.client_kwargs()

        assert kwargs["region_name"] == "eu-south-1"
        assert kwargs["endpoint_url"] == "http://localhost:4566"
        assert kwargs["config"].use_fips_endpoint is True
        assert kwargs["config"].use_dualstack_endpoint is False
        assert kwargs["config"].s3 == {
            "addressing_style": "path",
            "use_accelerate_endpoint": True,
        }

    def test_client_kwargs_omit_unset_values(self) -> None:
        kwargs = ClientConfig().client_kwargs()

        assert "region_name" not in kwargs
        assert "endpoint_url" not in kwargs
        assert kwargs["config"].s3 is None
