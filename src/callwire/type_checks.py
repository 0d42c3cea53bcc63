from __future__ import annotations

import types
from typing import Any, TypeGuard, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for construction.

    Args:
        candidate: Value being checked for eligibility.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def services_item_type(service_type: Any) -> Any | None:
    """Return ``T`` when ``service_type`` is ``list[T]``, otherwise ``None``.

    Args:
        service_type: Requested contract type.

    """
    if get_origin(service_type) is not list:
        return None
    args = get_args(service_type)
    if len(args) != 1:
        return None
    return args[0]


__all__ = ["is_runtime_class", "services_item_type"]
