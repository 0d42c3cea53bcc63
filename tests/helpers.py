"""Test doubles shared across callwire tests."""

from typing import Any

from callwire.call_sites import CallSite, ProviderExpression


class StubProvider:
    """Provider returning preconfigured call sites and recording every request."""

    def __init__(self, call_sites: dict[Any, CallSite] | None = None) -> None:
        self.call_sites: dict[Any, CallSite] = dict(call_sites or {})
        self.requests: list[tuple[Any, set[Any]]] = []
        self.cache: dict[object, Any] = {}

    @property
    def root(self) -> "StubProvider":
        return self

    def get_service_call_site(self, service_type: Any, in_progress: set[Any]) -> CallSite | None:
        self.requests.append((service_type, in_progress))
        return self.call_sites.get(service_type)

    def get_or_create_service(self, key: object, create: Any) -> Any:
        if key not in self.cache:
            self.cache[key] = create()
        return self.cache[key]

    def get_service(self, service_type: Any) -> Any:
        call_site = self.call_sites.get(service_type)
        return None if call_site is None else call_site.invoke(self)


class RecordingCallSite:
    """Call site returning a fixed value and logging each evaluation."""

    def __init__(self, value: Any, log: list[Any]) -> None:
        self.value = value
        self.log = log

    def invoke(self, provider: Any) -> Any:
        self.log.append(self.value)
        return self.value

    def build(self, provider_expr: ProviderExpression) -> str:
        record = provider_expr.bind(self.invoke, prefix="record")
        return f"{record}({provider_expr.source})"
