"""Decoration layer composing a host service with a template-aware service.

Usage:
    from tmpl_lens.decorator import LanguageServiceDecorator

    service = LanguageServiceDecorator(host, template_service, locator).decorate()
"""

from .capabilities import ServiceCapabilities
from .fixes import SupportedFixRegistry
from .operations import OPERATIONS, MergePolicy, OperationDescriptor
from .proxy import ComposedLanguageService, LanguageServiceDecorator

__all__ = [
    'ComposedLanguageService',
    'LanguageServiceDecorator',
    'MergePolicy',
    'OPERATIONS',
    'OperationDescriptor',
    'ServiceCapabilities',
    'SupportedFixRegistry',
]
