"""Shared pytest fixtures for callwire tests."""

import pytest

from callwire.compiler import CallSiteCompiler
from callwire.descriptors import ServiceCollection
from tests.helpers import StubProvider


@pytest.fixture()
def services() -> ServiceCollection:
    """Empty registration table."""
    return ServiceCollection()


@pytest.fixture()
def stub_provider() -> StubProvider:
    """Provider stub without any registration."""
    return StubProvider()


@pytest.fixture()
def compiler() -> CallSiteCompiler:
    """CallSiteCompiler instance."""
    return CallSiteCompiler()
