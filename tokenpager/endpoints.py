"""
Binding of endpoint rule-set builtins.

Endpoint rule sets declare parameters that are sourced from the client
configuration rather than from the request (e.g. the region). This module
maps those builtin parameters onto a ClientConfig.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ._logging import logger
from .config import ClientConfig
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class EndpointParameter:
    """A parameter of an endpoint rule set, optionally bound to a builtin."""

    name: str
    builtin: str | None = None


def _config_attr(attr: str) -> Callable[[ClientConfig], Any]:
    return lambda config: getattr(config, attr)


def _endpoint_url(config: ClientConfig) -> str | None:
    return str(config.endpoint_url) if config.endpoint_url is not None else None


def _always_false(config: ClientConfig) -> bool:
    # Global endpoints are not supported, these are always regional
    return False


BUILTIN_BINDINGS: dict[str, Callable[[ClientConfig], Any]] = {
    "AWS::Region": _config_attr("region"),
    "AWS::UseFIPS": _config_attr("use_fips"),
    "AWS::UseDualStack": _config_attr("use_dual_stack"),
    "AWS::S3::Accelerate": _config_attr("s3_enable_accelerate"),
    "AWS::S3::ForcePathStyle": _config_attr("s3_force_path_style"),
    "AWS::S3::DisableMultiRegionAccessPoints": _config_attr("s3_disable_mrap"),
    "AWS::S3::UseArnRegion": _config_attr("s3_use_arn_region"),
    "AWS::S3Control::UseArnRegion": _config_attr("s3_control_use_arn_region"),
    "SDK::Endpoint": _endpoint_url,
    "AWS::S3::UseGlobalEndpoint": _always_false,
    "AWS::STS::UseGlobalEndpoint": _always_false,
}


def bind_builtins(
    config: ClientConfig, parameters: Iterable[EndpointParameter]
) -> dict[str, Any]:
    """
    Resolves builtin-backed endpoint parameters from the client config.

    Args:
        config: Client configuration to read values from
        parameters: Endpoint rule-set parameters; those without a builtin are skipped

    Returns:
        Mapping of parameter name -> bound value

    Raises:
        ConfigurationError: If a parameter references an unknown builtin
    """
    bound: dict[str, Any] = {}
    for param in parameters:
        if param.builtin is None:
            continue

        binding = BUILTIN_BINDINGS.get(param.builtin)
        if binding is None:
            raise ConfigurationError(
                f"Unsupported builtin '{param.builtin}' for endpoint parameter '{param.name}'",
                member=param.name,
            )
        bound[param.name] = binding(config)

    logger.debug("Bound endpoint builtins", extra={"parameters": sorted(bound)})
    return bound
