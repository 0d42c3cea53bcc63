"""Tests for the callwire exception hierarchy."""

import pytest

from callwire.exceptions import (
    CallwireCircularDependencyError,
    CallwireError,
    CallwireInvalidRegistrationError,
    CallwireServiceNotRegisteredError,
    CallwireUnresolvedDependencyError,
)


class Logger:
    pass


class Widget:
    pass


@pytest.mark.parametrize(
    "error",
    [
        CallwireUnresolvedDependencyError(Logger, Widget),
        CallwireServiceNotRegisteredError(Logger),
        CallwireCircularDependencyError(Logger),
        CallwireInvalidRegistrationError("invalid"),
    ],
)
def test_all_errors_derive_from_base(error: CallwireError) -> None:
    assert isinstance(error, CallwireError)


def test_unresolved_dependency_message_names_both_types() -> None:
    error = CallwireUnresolvedDependencyError(Logger, Widget)

    assert str(error) == (
        "Unable to resolve service for type 'Logger' while attempting to activate 'Widget'."
    )


def test_string_annotations_are_named_as_written() -> None:
    error = CallwireUnresolvedDependencyError("Engine", Widget)

    assert str(error) == (
        "Unable to resolve service for type 'Engine' while attempting to activate 'Widget'."
    )


def test_messages_use_repr_for_non_class_keys() -> None:
    error = CallwireServiceNotRegisteredError(list[Logger])

    assert repr(list[Logger]) in str(error)
