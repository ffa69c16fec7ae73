"""
Exception metadata registry.

Exception classes can declare a custom error code, a custom HTTP status and
attributes to copy into the error response. Declarations are explicit
registrations, either through ``ExceptionMetadataRegistry.register`` or the
class decorators in this module:

    ```python
    @response_error_code("USER_MISSING")
    @response_status(404)
    @response_error_property("user_id")
    class UserNotFoundException(Exception):
        def __init__(self, user_id):
            super().__init__(f"User {user_id} not found")
            self.user_id = user_id
    ```
"""

import threading
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Dict, Optional, Tuple, Type

from errorlens.errors.utils import to_camel_case


@dataclass(frozen=True)
class ErrorProperty:
    """
    A value read from the exception and added to the response properties.

    Attributes:
        name: Property name in the response
        accessor: Callable reading the value from the exception instance
        include_if_null: Add the property even when the value is None
    """

    name: str
    accessor: Callable[[BaseException], Any]
    include_if_null: bool = False


@dataclass(frozen=True)
class ExceptionMetadata:
    """Declared overrides for one exception class."""

    code: Optional[str] = None
    status: Optional[int] = None
    properties: Tuple[ErrorProperty, ...] = field(default_factory=tuple)


_EMPTY = ExceptionMetadata()


class ExceptionMetadataRegistry:
    """
    Lookup table from exception class to declared metadata.

    Code and status apply to the exact class they are declared on.
    Properties accumulate along the class hierarchy, base classes first;
    a subclass property with the same name replaces the inherited one.
    """

    def __init__(self):
        self._entries: Dict[type, ExceptionMetadata] = {}
        self._cache: Dict[type, ExceptionMetadata] = {}
        self._lock = threading.RLock()

    def register(
        self,
        exception_type: Type[BaseException],
        code: Optional[str] = None,
        status: Optional[int] = None,
        properties: Tuple[ErrorProperty, ...] = (),
    ) -> ExceptionMetadata:
        """
        Register (or extend) the metadata for an exception class.

        Args:
            exception_type: The exception class
            code: Custom error code
            status: Custom HTTP status
            properties: Properties to copy into the response

        Returns:
            The merged metadata stored for the class
        """
        if code is not None and not code:
            raise ValueError("Error code must not be empty")

        with self._lock:
            current = self._entries.get(exception_type, _EMPTY)
            merged = ExceptionMetadata(
                code=code if code is not None else current.code,
                status=int(status) if status is not None else current.status,
                properties=_merge_properties(current.properties, properties),
            )
            self._entries[exception_type] = merged
            self._cache.clear()
        return merged

    def get_metadata(self, exception_type: Type[BaseException]) -> ExceptionMetadata:
        """Return the metadata that applies to ``exception_type``."""
        cached = self._cache.get(exception_type)
        if cached is not None:
            return cached

        with self._lock:
            own = self._entries.get(exception_type, _EMPTY)
            properties: Tuple[ErrorProperty, ...] = ()
            for klass in reversed(exception_type.__mro__):
                entry = self._entries.get(klass)
                if entry is not None:
                    properties = _merge_properties(properties, entry.properties)

            metadata = ExceptionMetadata(
                code=own.code, status=own.status, properties=properties
            )
            self._cache[exception_type] = metadata
        return metadata

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._cache.clear()


def _merge_properties(
    current: Tuple[ErrorProperty, ...], added: Tuple[ErrorProperty, ...]
) -> Tuple[ErrorProperty, ...]:
    merged = {prop.name: prop for prop in current}
    for prop in added:
        merged.pop(prop.name, None)
        merged[prop.name] = prop
    return tuple(merged.values())


default_registry = ExceptionMetadataRegistry()


def response_error_code(
    code: str, registry: Optional[ExceptionMetadataRegistry] = None
) -> Callable[[type], type]:
    """Class decorator declaring the error code of an exception class."""

    def decorator(exception_type: type) -> type:
        (registry or default_registry).register(exception_type, code=code)
        return exception_type

    return decorator


def response_status(
    status: int, registry: Optional[ExceptionMetadataRegistry] = None
) -> Callable[[type], type]:
    """Class decorator declaring the HTTP status of an exception class."""

    def decorator(exception_type: type) -> type:
        (registry or default_registry).register(exception_type, status=status)
        return exception_type

    return decorator


def response_error_property(
    attribute: str,
    name: Optional[str] = None,
    include_if_null: bool = False,
    registry: Optional[ExceptionMetadataRegistry] = None,
) -> Callable[[type], type]:
    """
    Class decorator copying an exception attribute into the response properties.

    Args:
        attribute: Attribute (or dotted attribute path) read from the exception
        name: Property name in the response; defaults to the camel-cased attribute
        include_if_null: Add the property even when the value is None
        registry: Registry to use instead of the default one
    """

    def decorator(exception_type: type) -> type:
        prop = ErrorProperty(
            name=name or to_camel_case(attribute),
            accessor=attrgetter(attribute),
            include_if_null=include_if_null,
        )
        (registry or default_registry).register(exception_type, properties=(prop,))
        return exception_type

    return decorator
