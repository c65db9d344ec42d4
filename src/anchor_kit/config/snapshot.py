"""Deep immutability for resolved configuration trees."""

from __future__ import annotations

from collections.abc import Mapping, Set
from types import MappingProxyType
from typing import Annotated, Any, Dict, Type, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    ValidatorFunctionWrapHandler,
    WrapSerializer,
    WrapValidator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.errors import ConfigError

M = TypeVar("M", bound=BaseModel)


def is_frozen(value: Any) -> bool:
    if isinstance(value, (MappingProxyType, frozenset)):
        return True
    if isinstance(value, BaseModel):
        return bool(value.model_config.get("frozen"))
    return False


def deep_freeze(value: Any) -> Any:
    """Return a read-only copy of ``value``.

    Children are frozen before their parent. Mappings become
    ``MappingProxyType`` over a private dict, sequences become tuples and sets
    become frozensets. Primitives and already-frozen values are returned as-is.
    """

    if is_frozen(value):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({key: deep_freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(deep_freeze(item) for item in value)
    if isinstance(value, Set):
        return frozenset(deep_freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return plain mutable containers for a frozen value, for serialization."""

    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [thaw(item) for item in value]
    return value


FrozenMapping = Annotated[
    Dict[str, Any],
    AfterValidator(deep_freeze),
    PlainSerializer(thaw),
]

# Any value at all, stored read-only. Used for fields whose type is checked by
# the validator rather than at construction.
FrozenValue = Annotated[
    Any,
    AfterValidator(deep_freeze),
    PlainSerializer(thaw),
]


def keep_unshaped(*shapes: type) -> WrapValidator:
    """Validate values of the expected outer shape; freeze anything else as-is.

    A section given as a string, or an asset list given as a mapping, survives
    construction untouched so ``validate()`` can report it.
    """

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if value is None or isinstance(value, shapes):
            return handler(value)
        return deep_freeze(value)

    return WrapValidator(validate)


def _dump_unshaped(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    if value is None or isinstance(value, BaseModel):
        return handler(value)
    return thaw(value)


DumpUnshaped = WrapSerializer(_dump_unshaped)


class FrozenModel(BaseModel):
    """Base for resolved configuration sections; instances reject assignment."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def snapshot(resolved: Mapping[str, Any], schema: Type[M]) -> M:
    """Build a frozen ``schema`` tree from an already-defaulted mapping.

    Pydantic validates nested sections before their parent, so every child is
    frozen by the time the enclosing model exists. Input that cannot be
    coerced into the schema is reported as a ``ConfigError``.
    """

    try:
        return schema.model_validate(dict(resolved))
    except PydanticValidationError as exc:
        problems = [
            {"field": ".".join(str(part) for part in error["loc"]), "reason": error["msg"]}
            for error in exc.errors()
        ]
        first = problems[0]["field"] if problems else "configuration"
        raise ConfigError(
            f"Malformed configuration value at {first}",
            {"field": first, "errors": problems},
        ) from exc


__all__ = [
    "DumpUnshaped",
    "FrozenMapping",
    "FrozenModel",
    "FrozenValue",
    "deep_freeze",
    "is_frozen",
    "keep_unshaped",
    "snapshot",
    "thaw",
]
