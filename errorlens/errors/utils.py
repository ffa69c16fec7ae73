"""
Naming helpers shared by mappers, handlers and the metadata registry.
"""

import re
from typing import Iterator, Sequence, Type, Union

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])|(?<=[A-Z])([A-Z][a-z])")


def type_full_name(exception_type: Type[BaseException]) -> str:
    """
    Return the fully qualified name used as an override-table key.

    Built-in exceptions are keyed by their bare name (``ValueError``),
    everything else by ``module.QualName``.
    """
    module = exception_type.__module__
    if not module or module == "builtins":
        return exception_type.__qualname__
    return f"{module}.{exception_type.__qualname__}"


def iter_base_types(exception_type: Type[BaseException]) -> Iterator[type]:
    """Yield the base classes of ``exception_type`` outward, excluding ``object``."""
    for base in exception_type.__mro__[1:]:
        if base is object:
            break
        yield base


def split_words(name: str, separator: str) -> str:
    """
    Insert ``separator`` at word boundaries of a PascalCase name.

    Example: ``split_words("UserNotFound", "_") == "User_Not_Found"``
    """
    return _WORD_BOUNDARY.sub(lambda match: separator + match.group(0), name)


def to_camel_case(name: str) -> str:
    """
    Convert a (possibly dotted) name to camelCase segment by segment.

    Examples:
        "Address.ZipCode" -> "address.zipCode"
        "address.zip_code" -> "address.zipCode"
    """
    if not name:
        return name
    return ".".join(_segment_to_camel_case(part) for part in name.split("."))


def _segment_to_camel_case(segment: str) -> str:
    if not segment:
        return segment
    if "_" in segment.strip("_"):
        head, *rest = [part for part in segment.split("_") if part]
        segment = head + "".join(part[:1].upper() + part[1:] for part in rest)
    return segment[:1].lower() + segment[1:]


def format_location(location: Sequence[Union[str, int]]) -> str:
    """
    Join a validation error location into a dotted path.

    Integer items are rendered as indexes: ``("items", 0, "name")`` -> ``items[0].name``.
    """
    path = ""
    for item in location:
        if isinstance(item, int):
            path += f"[{item}]"
        elif path:
            path += f".{item}"
        else:
            path = str(item)
    return path
