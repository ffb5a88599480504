"""Schema values to JSON primitives.

Used by the CLI and by anyone dumping extracted schema functions. Sum
type variants keep their class name under ``kind`` so a consumer can
tell ``Pure`` from ``Builder`` once the value is plain JSON.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


def serialize_to_primitives(data: Any) -> Any:
    """Recursively turn a schema value into dicts, lists and scalars.

    Enums become their value, dataclass instances a dict of their fields
    plus ``kind``, tuples and lists a list, sets a list sorted by repr.
    Objects exposing ``to_dict()`` (errors) use it; anything else is
    stringified.

    Examples:
        >>> from dslschema.extraction.types import DataTypeRef
        >>> serialize_to_primitives(DataTypeRef("int"))
        {'kind': 'DataTypeRef', 'fq_name': 'int'}
    """
    # StrEnum members are also str: check Enum first.
    if isinstance(data, Enum):
        return data.value
    if data is None or isinstance(data, (str, int, float, bool)):
        return data

    if is_dataclass(data) and not isinstance(data, type):
        # Not asdict(): it would drop the variant name of nested values.
        result: dict[str, Any] = {"kind": type(data).__name__}
        result.update((f.name, serialize_to_primitives(getattr(data, f.name))) for f in fields(data))
        return result

    if isinstance(data, dict):
        return {serialize_to_primitives(key): serialize_to_primitives(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return list(map(serialize_to_primitives, data))
    if isinstance(data, (set, frozenset)):
        return sorted(map(serialize_to_primitives, data), key=repr)

    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict):
        return serialize_to_primitives(to_dict())
    return str(data)
