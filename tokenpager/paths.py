"""
Member path helpers.

Requests and responses are treated as opaque values. These helpers are the only
place that knows how to read a (possibly nested) member off a value, how to
copy a request with one member replaced, and how to check a path against a
pydantic shape before any request is sent.
"""

import dataclasses
import types
from collections.abc import Mapping, Sequence
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel

from .exceptions import ConfigurationError

MemberPath = tuple[str, ...]


def parse_path(path: str | Sequence[str] | None) -> MemberPath:
    """
    Normalizes a member path.

    Accepts the dotted form used by the Smithy paginated trait
    ("result.NextToken"), an already split sequence, or None (empty path).
    """
    if path is None:
        return ()
    if isinstance(path, str):
        parts = path.split(".") if path else []
    else:
        parts = list(path)

    if any(not part for part in parts):
        raise ConfigurationError(f"Invalid member path {path!r}: empty path segment")
    return tuple(parts)


def _model_attr(model: type[BaseModel], name: str) -> str | None:
    """Maps a field name or alias to the attribute name of a model field."""
    fields = model.model_fields
    if name in fields:
        return name
    for field_name, field_info in fields.items():
        if name in (field_info.alias, field_info.serialization_alias, field_info.validation_alias):
            return field_name
    return None


def _wire_name(model: type[BaseModel], attr_name: str) -> str:
    field_info = model.model_fields[attr_name]
    return field_info.serialization_alias or field_info.alias or attr_name


def read_path(value: Any, path: Sequence[str]) -> Any:
    """
    Follows a member path through mappings and objects.
    Model members may be named by attribute name or alias.
    Returns None as soon as a step yields no value.
    """
    for name in path:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(name)
        elif isinstance(value, BaseModel):
            value = getattr(value, _model_attr(type(value), name) or name, None)
        else:
            value = getattr(value, name, None)
    return value


def with_member(request: Any, member: str, value: Any) -> Any:
    """
    Returns a copy of `request` with one member replaced.
    The original request is never mutated.

    Mappings are written under `member` as given (the wire name for boto3
    requests); pydantic models accept the attribute name or the alias.

    Raises:
        ConfigurationError: If a pydantic request has no such field
    """
    if isinstance(request, BaseModel):
        attr_name = _model_attr(type(request), member)
        if attr_name is None:
            raise ConfigurationError(
                f"Member '{member}' does not exist on request {type(request).__name__}",
                member=member,
                shape=type(request),
            )
        return request.model_copy(update={attr_name: value})
    if dataclasses.is_dataclass(request) and not isinstance(request, type):
        return dataclasses.replace(request, **{member: value})
    if isinstance(request, Mapping):
        updated = dict(request)
        updated[member] = value
        return updated
    raise TypeError(
        f"Cannot copy request of type {type(request).__name__}: "
        "expected a pydantic model, a dataclass or a mapping"
    )


def is_model_shape(shape: Any) -> bool:
    return isinstance(shape, type) and issubclass(shape, BaseModel)


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    # Only unwrap Optional/Union; list[Model] is not traversable by a member path
    if is_model_shape(annotation):
        return annotation
    if get_origin(annotation) in (Union, types.UnionType):
        for arg in get_args(annotation):
            found = _nested_model(arg)
            if found is not None:
                return found
    return None


def _non_null_args(annotation: Any) -> tuple[Any, ...]:
    if get_origin(annotation) in (Union, types.UnionType):
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


def resolve_member(shape: Any, name: str) -> tuple[str, Any]:
    """
    Finds a member on a pydantic shape by field name or alias.

    Returns the attribute name and its annotation. Shapes that are not
    pydantic models are not checked and the name is returned unchanged.

    Raises:
        ConfigurationError: If the shape has no such member
    """
    if not is_model_shape(shape):
        return name, Any

    attr_name = _model_attr(shape, name)
    if attr_name is None:
        raise ConfigurationError(
            f"Member '{name}' does not exist on shape {shape.__name__}", member=name, shape=shape
        )
    return attr_name, shape.model_fields[attr_name].annotation


def resolve_path(
    shape: Any, path: str | Sequence[str] | None, *, by_alias: bool = False
) -> MemberPath:
    """
    Resolves a member path against a pydantic shape. Traversal stops checking
    once it leaves modeled shapes (e.g. a member typed as a plain dict).

    By default aliases are translated into attribute names. With by_alias=True
    every modeled step is returned under its wire name (alias) instead, which
    reads both raw service responses and models.
    """
    resolved: list[str] = []
    current = shape
    for name in parse_path(path):
        attr_name, annotation = resolve_member(current, name)
        if by_alias and is_model_shape(current):
            resolved.append(_wire_name(current, attr_name))
        else:
            resolved.append(attr_name)
        current = _nested_model(annotation)
    return tuple(resolved)


def is_boolean_member(shape: Any, name: str) -> bool:
    """Returns True if the member is a bool (optional or not), or the shape is unmodeled."""
    if not is_model_shape(shape):
        return True
    _, annotation = resolve_member(shape, name)
    return all(arg is bool for arg in _non_null_args(annotation))
