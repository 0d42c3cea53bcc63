from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, cast

from callwire.call_sites import CallSite, ProviderExpression

CompiledCallSite = Callable[[Any], Any]
"""A function producing a service instance from the provider it is called with."""

_FUNCTION_NAME = "resolve_service"
_PROVIDER_ARGUMENT = "provider"
_FUNCTION_TEMPLATE = "def {name}({provider}):\n    return {expression}\n"
logger = logging.getLogger(__name__)


class CallSiteCompiler:
    """Compiles call sites into plain Python functions.

    The call site tree is rendered once into a single expression, so calling the
    compiled function repeats none of the resolution walk.
    """

    def render(self, call_site: CallSite) -> tuple[str, dict[str, Any]]:
        """Render the source of the compiled function and its global namespace.

        Args:
            call_site: Call site tree to render.

        """
        provider_expr = ProviderExpression(source=_PROVIDER_ARGUMENT)
        expression = call_site.build(provider_expr)
        code = _FUNCTION_TEMPLATE.format(
            name=_FUNCTION_NAME,
            provider=_PROVIDER_ARGUMENT,
            expression=expression,
        )
        return code, provider_expr.namespace

    def compile(self, call_site: CallSite) -> CompiledCallSite:
        """Compile a call site into a function of the provider.

        Args:
            call_site: Call site tree to compile.

        """
        code, namespace = self.render(call_site)
        logger.debug("Compiled call site %r:\n%s", call_site, code)

        function_globals = dict(namespace)
        exec(code, function_globals)  # noqa: S102
        return cast("CompiledCallSite", function_globals[_FUNCTION_NAME])
