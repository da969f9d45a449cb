"""Template-aware language service: contract, completion and bindings."""

from .base import TemplateLanguageService
from .bindings import Binding, BindingAnalyzer, analyze_bindings
from .complete_data import CompletionItem
from .completion import TemplateAnalyzer, TemplateCompletion
from .parts import (
    TemplateAttribute,
    TemplatePart,
    TemplatePartLocation,
    TemplatePartLocationType,
    TemplatePartType,
)
from .router import TemplateService

__all__ = [
    'Binding',
    'BindingAnalyzer',
    'CompletionItem',
    'TemplateAnalyzer',
    'TemplateAttribute',
    'TemplateCompletion',
    'TemplateLanguageService',
    'TemplatePart',
    'TemplatePartLocation',
    'TemplatePartLocationType',
    'TemplatePartType',
    'TemplateService',
    'analyze_bindings',
]
