import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from botocore.config import Config

from ._logging import logger, redact_token
from .exceptions import ConfigurationError
from .paths import MemberPath, parse_path, read_path


def _is_empty(value: Any) -> bool:
    """Empty strings, collections and mappings count as an absent token."""
    if isinstance(value, (str, bytes, Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class OutputTokenEmpty:
    """Continue while the returned token is present and non-empty (Smithy default)."""

    def has_next(self, result: Any, next_token: Any, used_token: Any) -> bool:
        return next_token is not None and not _is_empty(next_token)


@dataclass(frozen=True)
class IdenticalToken:
    """
    Continue while the returned token is present and differs from the one just sent.
    Guards against services that echo the last token forever.
    """

    def has_next(self, result: Any, next_token: Any, used_token: Any) -> bool:
        if next_token is None:
            return False
        if next_token == used_token:
            logger.warning(
                "Service echoed the request token, stopping pagination",
                extra={"token_hash": redact_token(next_token)},
            )
            return False
        return True


@dataclass(frozen=True)
class TruncationMember:
    """
    Continue while a boolean member of the result is True (e.g. S3 "IsTruncated").
    The output token is still threaded into the next request.
    """

    member_name: str

    def has_next(self, result: Any, next_token: Any, used_token: Any) -> bool:
        return read_path(result, (self.member_name,)) is True


EndBehavior = Union[OutputTokenEmpty, IdenticalToken, TruncationMember]


def parse_end_behavior(value: "EndBehavior | str | Mapping[str, Any] | None") -> EndBehavior:
    """
    Parses an end-of-pagination policy.

    Accepts a policy instance, "OutputTokenEmpty", "IdenticalToken",
    "TruncationMember:<member>", or {"truncationMember": "<member>"}.
    None selects the default (OutputTokenEmpty).
    """
    if value is None:
        return OutputTokenEmpty()
    if isinstance(value, (OutputTokenEmpty, IdenticalToken, TruncationMember)):
        return value

    if isinstance(value, Mapping):
        member = value.get("truncationMember")
        if not member:
            raise ConfigurationError(f"Unsupported end behavior {dict(value)!r}")
        return TruncationMember(member_name=member)

    if isinstance(value, str):
        name, _, member = value.partition(":")
        if name == "OutputTokenEmpty" and not member:
            return OutputTokenEmpty()
        if name == "IdenticalToken" and not member:
            return IdenticalToken()
        if name == "TruncationMember":
            if not member:
                raise ConfigurationError("TruncationMember end behavior requires a member name")
            return TruncationMember(member_name=member)

    raise ConfigurationError(f"Unsupported end behavior {value!r}")


@dataclass
class PaginationInfo:
    """
    Describes how one paged operation is paginated.

    Mirrors the Smithy @paginated trait: the input token member, the path of
    the output token, the optional items path and page size member, plus the
    end-of-pagination policy. Shapes are optional pydantic models used to
    validate the members at setup time.
    """

    operation_name: str
    input_token: str
    output_token: MemberPath
    items: MemberPath | None = None
    page_size: str | None = None
    end_behavior: EndBehavior = OutputTokenEmpty()
    input_shape: Any | None = None
    output_shape: Any | None = None

    @classmethod
    def from_trait(
        cls,
        operation_name: str,
        trait: Mapping[str, Any],
        *,
        service_trait: Mapping[str, Any] | None = None,
        end_behavior: "EndBehavior | str | Mapping[str, Any] | None" = None,
        input_shape: Any | None = None,
        output_shape: Any | None = None,
    ) -> "PaginationInfo":
        """
        Builds a PaginationInfo from the JSON form of the @paginated trait.

        Values set on the operation's trait override the service-level trait.

        Raises:
            ConfigurationError: If inputToken or outputToken cannot be determined
        """
        merged: dict[str, Any] = dict(service_trait or {})
        merged.update({k: v for k, v in trait.items() if v is not None})

        input_token = merged.get("inputToken")
        output_token = merged.get("outputToken")
        if not input_token or not output_token:
            raise ConfigurationError(
                f"Operation '{operation_name}' is paginated but does not define "
                "both inputToken and outputToken"
            )

        input_path = parse_path(input_token)
        if len(input_path) != 1:
            raise ConfigurationError(
                f"inputToken of '{operation_name}' must be a top-level member, got {input_token!r}",
                member=input_token,
            )

        items = merged.get("items")
        return cls(
            operation_name=operation_name,
            input_token=input_path[0],
            output_token=parse_path(output_token),
            items=parse_path(items) if items else None,
            page_size=merged.get("pageSize"),
            end_behavior=parse_end_behavior(end_behavior),
            input_shape=input_shape,
            output_shape=output_shape,
        )


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass
class ClientConfig:
    """
    Client configuration that endpoint builtins and boto3 clients are bound from.
    """

    region: str | None = None
    use_fips: bool = False
    use_dual_stack: bool = False
    endpoint_url: str | None = None

    # S3 / S3 Control customizations
    s3_enable_accelerate: bool = False
    s3_force_path_style: bool = False
    s3_disable_mrap: bool = False
    s3_use_arn_region: bool = False
    s3_control_use_arn_region: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Reads the standard AWS_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
            use_fips=_env_flag(env, "AWS_USE_FIPS_ENDPOINT"),
            use_dual_stack=_env_flag(env, "AWS_USE_DUALSTACK_ENDPOINT"),
            endpoint_url=env.get("AWS_ENDPOINT_URL") or None,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """
        Renders keyword arguments for boto3.client().

        Returns:
            Dict with region_name/endpoint_url (when set) and a botocore Config
        """
        s3: dict[str, Any] = {}
        if self.s3_enable_accelerate:
            s3["use_accelerate_endpoint"] = True
        if self.s3_force_path_style:
            s3["addressing_style"] = "path"
        if self.s3_use_arn_region:
            s3["use_arn_region"] = True

        kwargs: dict[str, Any] = {
            "config": Config(
                use_fips_endpoint=self.use_fips,
                use_dualstack_endpoint=self.use_dual_stack,
                s3=s3 or None,
            )
        }
        if self.region:
            kwargs["region_name"] = self.region
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return kwargs
