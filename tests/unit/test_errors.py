"""
Unit tests for the errors module (exceptions.py, metadata.py, utils.py).

Covers:
- Instantiation and attributes of the library exception classes
- Metadata registration through calls and class decorators
- Inheritance rules for declared codes, statuses and properties
- Naming helpers
"""

import pytest

from errorlens.errors import (
    BadRequestError,
    ErrorProperty,
    FieldValidationError,
    TypeMismatchError,
    response_error_code,
    response_error_property,
    response_status,
)
from errorlens.errors.utils import (
    format_location,
    iter_base_types,
    split_words,
    to_camel_case,
    type_full_name,
)


@pytest.mark.parametrize(
    "exc_cls,kwargs,expected",
    [
        (
            FieldValidationError,
            {},
            {"message": "Validation failed", "fields": [], "kind": None},
        ),
        (
            FieldValidationError,
            {"message": "Email is invalid", "fields": ("email",), "kind": "EmailAddress"},
            {"message": "Email is invalid", "fields": ["email"], "kind": "EmailAddress"},
        ),
        (
            TypeMismatchError,
            {"parameter": "age", "value": "abc", "expected_type": "int"},
            {"message": "Type mismatch", "parameter": "age", "value": "abc"},
        ),
        (BadRequestError, {}, {"message": "Bad request", "status_code": 400}),
        (BadRequestError, {"status_code": 413}, {"status_code": 413}),
    ],
)
def test_exception_attributes(exc_cls, kwargs, expected):
    err = exc_cls(**kwargs)
    for key, value in expected.items():
        assert getattr(err, key) == value


def test_type_mismatch_error_is_value_error():
    assert isinstance(TypeMismatchError(), ValueError)


class TestMetadataRegistry:
    def test_unregistered_type_has_empty_metadata(self, registry):
        metadata = registry.get_metadata(KeyError)
        assert metadata.code is None
        assert metadata.status is None
        assert metadata.properties == ()

    def test_decorators_register_metadata(self, registry):
        @response_error_code("USER_MISSING", registry=registry)
        @response_status(404, registry=registry)
        @response_error_property("user_id", registry=registry)
        class UserNotFoundException(Exception):
            def __init__(self, user_id):
                super().__init__(f"User {user_id} not found")
                self.user_id = user_id

        metadata = registry.get_metadata(UserNotFoundException)
        assert metadata.code == "USER_MISSING"
        assert metadata.status == 404
        assert [prop.name for prop in metadata.properties] == ["userId"]
        assert metadata.properties[0].accessor(UserNotFoundException(7)) == 7

    def test_code_and_status_apply_to_exact_type_only(self, registry):
        class Base(Exception):
            pass

        class Child(Base):
            pass

        registry.register(Base, code="BASE", status=409)
        metadata = registry.get_metadata(Child)
        assert metadata.code is None
        assert metadata.status is None

    def test_properties_are_inherited_and_overridable(self, registry):
        class Base(Exception):
            pass

        class Child(Base):
            pass

        registry.register(
            Base,
            properties=(
                ErrorProperty("tenant", lambda e: "base"),
                ErrorProperty("region", lambda e: "eu"),
            ),
        )
        registry.register(Child, properties=(ErrorProperty("tenant", lambda e: "child"),))

        properties = registry.get_metadata(Child).properties
        assert [prop.name for prop in properties] == ["region", "tenant"]
        assert properties[1].accessor(Child()) == "child"

    def test_registration_invalidates_cache(self, registry):
        class Sample(Exception):
            pass

        assert registry.get_metadata(Sample).code is None
        registry.register(Sample, code="SAMPLE")
        assert registry.get_metadata(Sample).code == "SAMPLE"

    def test_registration_merges_declarations(self, registry):
        class Sample(Exception):
            pass

        registry.register(Sample, code="SAMPLE")
        registry.register(Sample, status=418)
        metadata = registry.get_metadata(Sample)
        assert (metadata.code, metadata.status) == ("SAMPLE", 418)

    def test_empty_code_is_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register(KeyError, code="")

    def test_clear(self, registry):
        registry.register(KeyError, code="KEY")
        registry.clear()
        assert registry.get_metadata(KeyError).code is None

    def test_property_options(self, registry):
        @response_error_property("details.reason", name="reason", include_if_null=True, registry=registry)
        class Sample(Exception):
            pass

        prop = registry.get_metadata(Sample).properties[0]
        assert prop.name == "reason"
        assert prop.include_if_null is True


class TestUtils:
    def test_type_full_name(self):
        assert type_full_name(ValueError) == "ValueError"
        assert type_full_name(BadRequestError) == "errorlens.errors.exceptions.BadRequestError"

    def test_iter_base_types_excludes_object(self):
        bases = list(iter_base_types(TypeMismatchError))
        assert bases == [ValueError, Exception, BaseException]

    def test_split_words(self):
        assert split_words("UserNotFound", "_") == "User_Not_Found"
        assert split_words("HTTPError", "-") == "HTTP-Error"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Address.ZipCode", "address.zipCode"),
            ("address.zip_code", "address.zipCode"),
            ("email", "email"),
            ("", ""),
        ],
    )
    def test_to_camel_case(self, name, expected):
        assert to_camel_case(name) == expected

    def test_format_location(self):
        assert format_location(("items", 0, "name")) == "items[0].name"
        assert format_location(("address", "zip_code")) == "address.zip_code"
        assert format_location(()) == ""
