"""Embedded template regions and their discovery."""

from .finder import TaggedTemplateFinder
from .locator import TemplateLocator
from .template import Template

__all__ = ['Template', 'TaggedTemplateFinder', 'TemplateLocator']
