from enum import Enum


class Lifetime(str, Enum):
    """Defines the lifetime of a service in the provider."""

    TRANSIENT = "transient"
    """A new instance is created every time the service is requested."""

    SCOPED = "scoped"
    """Instance is shared within a scope, different instances across scopes."""

    SINGLETON = "singleton"
    """A single instance is created and shared for the lifetime of the root provider."""
