"""Constructor selection: defaults and ambiguous constructors.

A single constructor with parameters is wired from the provider, with
unregistered parameters falling back to their defaults. A class declaring
several constructors through ``@overload`` is called without arguments.
"""

from __future__ import annotations

from typing import Any

from typing_extensions import overload

from callwire import ServiceCollection, ServiceProvider


class Logger:
    pass


class Widget:
    def __init__(self, log: Logger, retries: int = 3) -> None:
        self.log = log
        self.retries = retries


class Gadget:
    @overload
    def __init__(self, log: Logger) -> None: ...

    @overload
    def __init__(self, name: str) -> None: ...

    def __init__(self, log: Any = None, name: str = "gadget") -> None:
        self.log = log
        self.name = name


def main() -> None:
    services = ServiceCollection()
    services.add_transient(Logger)
    services.add_transient(Widget)
    services.add_transient(Gadget)
    provider = ServiceProvider(services)

    widget = provider.resolve(Widget)
    print(f"widget_log={type(widget.log).__name__} retries={widget.retries}")
    # => widget_log=Logger retries=3

    gadget = provider.resolve(Gadget)
    print(f"gadget_log={gadget.log} name={gadget.name}")  # => gadget_log=None name=gadget


if __name__ == "__main__":
    main()
