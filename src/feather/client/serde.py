"""Serialization and deserialization of JSON request/response bodies."""

import json
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Optional, Type, TypeVar, Union

T = TypeVar("T")

_PRIMITIVES = (str, int, float, bool)


def _is_list_type(cls: Type) -> bool:
    """Check if cls is a list-like type (list, List, List[T], or MutableSequence subclass)."""
    try:
        return issubclass(cls.__origin__, MutableSequence)
    except (AttributeError, TypeError):
        try:
            return issubclass(cls, MutableSequence)
        except TypeError:
            return False


def _is_dict_type(cls: Type) -> bool:
    """Check if cls is a dict-like type (dict, Dict, Dict[K,V], or MutableMapping subclass)."""
    try:
        return issubclass(cls.__origin__, MutableMapping)
    except (AttributeError, TypeError):
        try:
            return issubclass(cls, MutableMapping)
        except TypeError:
            return False


def serialize_body(body: Any) -> Any:
    """Serialize request body to JSON-compatible format.

    Supports:
    - None, dict, list, primitives (passed through)
    - Pydantic v2 models, objects with to_json() or to_dict() (duck typing)
    - Nested objects inside containers are recursively serialized

    Raises:
        ValueError: If body is str or bytes at top level (not supported as request body)
        TypeError: If body type is not supported
    """
    if body is None:
        return None
    if isinstance(body, (str, bytes)):
        raise ValueError("str and bytes data is not supported")
    return _serialize_value(body)


def _serialize_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, bytes):
        raise ValueError("bytes data is not supported")
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    if hasattr(value, "model_dump") and callable(value.model_dump):  # Pydantic v2
        return _serialize_value(value.model_dump(mode="json"))
    if hasattr(value, "to_json") and callable(value.to_json):
        return _serialize_value(value.to_json())
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return _serialize_value(value.to_dict())
    raise TypeError(
        f"Cannot serialize value of type {type(value).__name__}. Expected dict, list, primitive, or Serializable."
    )


def deserialize(data: Any, cls: Optional[Type[T]] = None) -> T:
    """Deserialize parsed JSON into ``cls``.

    Args:
        data: Parsed JSON (dict, list or primitive)
        cls: Target type. None or Any returns the data as-is. Supports primitives, Optional[X],
            list-like and dict-like generics, Pydantic v2 models and classes with from_dict()/from_json().

    Raises:
        TypeError: If the data does not have the shape ``cls`` expects
        ValueError: If model validation fails (pydantic.ValidationError is a ValueError)
    """
    if cls is None or cls is Any:
        return data

    if getattr(cls, "__origin__", None) is Union:
        args = [arg for arg in cls.__args__ if arg is not type(None)]
        if data is None and len(args) < len(cls.__args__):
            return None
        if len(args) == 1:
            return deserialize(data, args[0])
        return data

    if _is_dict_type(cls):
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        args = getattr(cls, "__args__", ())
        if len(args) != 2:
            return data
        return {k: deserialize(v, args[1]) for k, v in data.items()}

    if _is_list_type(cls):
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON array, got {type(data).__name__}")
        args = getattr(cls, "__args__", ())
        if not args:
            return data
        return [deserialize(item, args[0]) for item in data]

    if cls in _PRIMITIVES:
        return _check_primitive(data, cls)

    return _deserialize_object(data, cls)


def _check_primitive(data: Any, cls: Type) -> Any:
    if cls is float and isinstance(data, int) and not isinstance(data, bool):
        return float(data)
    if cls is int and isinstance(data, bool):
        raise TypeError("Expected int, got bool")
    if not isinstance(data, cls):
        raise TypeError(f"Expected {cls.__name__}, got {type(data).__name__}")
    return data


def _deserialize_object(data: Any, cls: Type) -> Any:
    """Deserialize a single object using duck-typed methods.

    Supports:
    - Pydantic v2 models (model_validate)
    - Classes with from_dict() class method
    - Classes with from_json() class method
    """
    if hasattr(cls, "model_validate") and callable(cls.model_validate):  # Pydantic v2
        return cls.model_validate(data)

    if hasattr(cls, "from_dict") and callable(cls.from_dict):
        return cls.from_dict(data)

    if hasattr(cls, "from_json") and callable(cls.from_json):
        return cls.from_json(data)

    raise TypeError(
        f"Cannot deserialize to {getattr(cls, '__name__', cls)}. "
        f"Class must have model_validate(), from_dict(), or from_json() class method."
    )


class JSONEncoder:
    """Encodes request bodies as UTF-8 JSON."""

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def encode(self, value: Any) -> bytes:
        return json.dumps(serialize_body(value), sort_keys=self.sort_keys, allow_nan=False).encode("utf-8")


class JSONDecoder:
    """Decodes JSON response bodies into typed values.

    Args:
        enveloped_key: Key the payload is wrapped in, e.g. "data". None (default) means no envelope.
    """

    def __init__(self, enveloped_key: Optional[str] = None):
        self.enveloped_key = enveloped_key

    def decode(self, cls: Optional[Type[T]], data: bytes) -> T:
        parsed = json.loads(data)

        if self.enveloped_key is not None:
            if not isinstance(parsed, dict) or self.enveloped_key not in parsed:
                found = list(parsed.keys()) if isinstance(parsed, dict) else type(parsed).__name__
                raise ValueError(
                    f"Expected enveloped key '{self.enveloped_key}' not found in response json. Found keys: {found}"
                )
            parsed = parsed[self.enveloped_key]

        return deserialize(parsed, cls)
