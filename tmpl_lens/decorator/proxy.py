"""Decoration layer: builds a composite language service.

The composite behaves exactly like the host service, except for the
operations listed in `operations.OPERATIONS` whose hook the template-aware
service implements. Those are routed through one of the merge policies:

- replace if applicable: a template at the requested position takes the
  request over completely, even when its hook returns nothing.
- merge whole document: host result plus the results of every template.
- merge range filtered: host result plus the results of every template
  intersecting the requested range.
- global registry: supported fix codes come from a registry built once
  from host and template codes.

Exceptions raised by the host or by a hook propagate to the caller.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..service.base import TemplateLanguageService
from ..templates import TemplateLocator
from ..trace import trace
from .capabilities import ServiceCapabilities
from .fixes import SupportedFixRegistry
from .operations import OPERATIONS, OPERATIONS_BY_HOST_NAME, MergePolicy, OperationDescriptor

logger = logging.getLogger(__name__)

# (call_original, *host_args, **host_kwargs) -> result
Wrapper = Callable[..., Any]

# Leading positional arguments each policy wrapper reads from a host call.
_POSITIONAL_ARGUMENTS = {
    MergePolicy.REPLACE_IF_APPLICABLE: 2,       # file_name, offset
    MergePolicy.MERGE_WHOLE_DOCUMENT: 1,        # file_name
    MergePolicy.MERGE_RANGE_FILTERED: 3,        # file_name, start, end
    MergePolicy.GLOBAL_REGISTRY: 0,
}


def _bind_host_arguments(method: Callable[..., Any], args: tuple, kwargs: Dict[str, Any]):
    """Rewrite a keyword call into the host method's positional order.

    Returns None when the call does not bind against the host signature.
    """
    try:
        bound = inspect.signature(method).bind(*args, **kwargs)
    except (TypeError, ValueError):
        return None
    bound.apply_defaults()
    return bound.args, bound.kwargs


class ComposedLanguageService:
    """Host service with some operations replaced by decorated ones.

    Attributes not decorated are looked up on the host, so the composite
    exposes the host's full surface under the host's own names.
    """

    def __init__(self, host: Any, operations: Dict[str, Callable[..., Any]]):
        self.__dict__['_host'] = host
        self.__dict__['_decorated'] = frozenset(operations)
        self.__dict__.update(operations)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._host, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._host, name, value)

    def __dir__(self) -> Iterable[str]:
        return sorted(set(dir(self._host)) | self._decorated)

    def __repr__(self) -> str:
        return f"<ComposedLanguageService host={self._host!r} decorated={sorted(self._decorated)}>"


class LanguageServiceDecorator:
    """Assembles a composite service from a host and a template-aware service.

    Usage:
        locator = TemplateLocator(documents)
        decorator = LanguageServiceDecorator(host, template_service, locator)
        service = decorator.decorate()

        service.get_completions_at_position("app.ts", 120, None)
    """

    def __init__(
        self,
        host: Any,
        template_service: TemplateLanguageService,
        locator: TemplateLocator,
        fix_registry: Optional[SupportedFixRegistry] = None,
        trace_dispatch: bool = False,
    ):
        self.host = host
        self.template_service = template_service
        self.locator = locator
        self.capabilities = ServiceCapabilities.from_service(template_service)
        self._fix_registry = fix_registry
        self._trace_dispatch = trace_dispatch
        self._wrappers: Dict[str, Wrapper] = {}

        for op in OPERATIONS:
            if not self.capabilities.supports(op.hook_name):
                continue
            self._wrappers[op.host_name] = self._make_wrapper(op)

        logger.debug(
            "Decorating %d operation(s): %s",
            len(self._wrappers), ", ".join(self._wrappers)
        )

    @property
    def decorated_operations(self) -> List[str]:
        return list(self._wrappers)

    @property
    def fix_registry(self) -> Optional[SupportedFixRegistry]:
        """Registry answering get_supported_code_fixes, if that operation is decorated."""
        return self._fix_registry

    def decorate(self) -> ComposedLanguageService:
        """Return the composite service."""
        operations = {
            name: self._bind(name, wrapper, _POSITIONAL_ARGUMENTS[OPERATIONS_BY_HOST_NAME[name].policy])
            for name, wrapper in self._wrappers.items()
        }
        return ComposedLanguageService(self.host, operations)

    def _bind(self, name: str, wrapper: Wrapper, positional: int) -> Callable[..., Any]:
        host = self.host

        def operation(*args: Any, **kwargs: Any) -> Any:
            def call_original() -> Any:
                return getattr(host, name)(*args, **kwargs)

            if not kwargs:
                return wrapper(call_original, *args)

            bound = _bind_host_arguments(getattr(host, name), args, kwargs)
            if bound is None or len(bound[0]) < positional:
                logger.debug("%s: keyword call not mapped, passing to host", name)
                return call_original()
            bound_args, bound_kwargs = bound
            return wrapper(call_original, *bound_args, **bound_kwargs)

        operation.__name__ = name
        return operation

    def _make_wrapper(self, op: OperationDescriptor) -> Wrapper:
        hook = getattr(self.template_service, op.hook_name)

        if op.policy is MergePolicy.REPLACE_IF_APPLICABLE:
            def wrapper(call_original, file_name, offset, *args, **kwargs):
                return self._replace_if_applicable(op, hook, call_original, file_name, offset, *args, **kwargs)

        elif op.policy is MergePolicy.MERGE_WHOLE_DOCUMENT:
            def wrapper(call_original, file_name, *args, **kwargs):
                return self._merge_whole_document(op, hook, call_original, file_name)

        elif op.policy is MergePolicy.MERGE_RANGE_FILTERED:
            def wrapper(call_original, file_name, start, end, *args, **kwargs):
                return self._merge_range_filtered(op, hook, call_original, file_name, start, end, *args, **kwargs)

        else:
            if self._fix_registry is None:
                self._fix_registry = SupportedFixRegistry.build(self._host_fix_codes(), hook())
            registry = self._fix_registry

            def wrapper(call_original, *args, **kwargs):
                return list(registry.codes())

        return wrapper

    def _host_fix_codes(self) -> List[Any]:
        get_codes = getattr(self.host, "get_supported_code_fixes", None)
        if get_codes is None:
            return []
        return list(get_codes())

    def _trace(self, msg: str) -> None:
        if self._trace_dispatch:
            trace("Decorator", msg)

    def _replace_if_applicable(self, op, hook, call_original, file_name, offset, *args, **kwargs):
        template = self.locator.find_template_at(file_name, offset)
        if template is None:
            return call_original()

        local_offset = template.global_offset_to_local(offset)
        self._trace(f"replace {op.host_name} {file_name}@{offset} -> template[{template.start}:{template.end}]@{local_offset}")
        logger.debug("%s: routed %s@%d to template at %d", op.host_name, file_name, offset, template.start)

        result = hook(template, local_offset, *args, **kwargs)
        if result is None:
            return None
        return op.translate(result, template)

    def _merge_whole_document(self, op, hook, call_original, file_name):
        results = list(call_original() or ())
        host_count = len(results)

        for template in self.locator.find_all_templates(file_name):
            for item in hook(template) or ():
                results.append(op.translate(item, template))

        self._trace(f"merge {op.host_name} {file_name}: {host_count} host + {len(results) - host_count} template")
        return results

    def _merge_range_filtered(self, op, hook, call_original, file_name, start, end, *args, **kwargs):
        results = list(call_original() or ())
        host_count = len(results)

        for template in self.locator.find_all_templates(file_name):
            if not template.intersect_with(start, end):
                continue

            local_start, local_end = template.clamp_range(start, end)
            for item in hook(template, local_start, local_end, *args, **kwargs) or ():
                results.append(op.translate(item, template))

        self._trace(f"merge {op.host_name} {file_name}[{start}:{end}]: {host_count} host + {len(results) - host_count} template")
        return results
