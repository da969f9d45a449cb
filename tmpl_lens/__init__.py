# Template-aware language service package
#
# Augments a host language service with intelligence for templates embedded
# in source documents. Everything callers need is importable from here:
#
#   from tmpl_lens import (
#       DocumentStore, TemplateLocator, LanguageServiceDecorator,
#       TemplateService, create_plugin,
#   )
#
# Lazy loading: imports are deferred via __getattr__ so that importing a
# single submodule does not pull in the whole package.

# Mapping from public name -> (module_path, attribute_name)
_LAZY_IMPORTS = {
    # Configuration
    "TemplateServiceConfig": (".config", "TemplateServiceConfig"),
    "ConfigError": (".config", "ConfigError"),
    "load_config": (".config", "load_config"),
    # Documents and templates
    "Document": (".documents", "Document"),
    "DocumentStore": (".documents", "DocumentStore"),
    "Template": (".templates", "Template"),
    "TaggedTemplateFinder": (".templates", "TaggedTemplateFinder"),
    "TemplateLocator": (".templates", "TemplateLocator"),
    # Decoration layer
    "LanguageServiceDecorator": (".decorator", "LanguageServiceDecorator"),
    "ComposedLanguageService": (".decorator", "ComposedLanguageService"),
    "MergePolicy": (".decorator", "MergePolicy"),
    "ServiceCapabilities": (".decorator", "ServiceCapabilities"),
    "SupportedFixRegistry": (".decorator", "SupportedFixRegistry"),
    # Template-aware service
    "TemplateLanguageService": (".service", "TemplateLanguageService"),
    "TemplateService": (".service", "TemplateService"),
    "TemplateCompletion": (".service", "TemplateCompletion"),
    "BindingAnalyzer": (".service", "BindingAnalyzer"),
    # Plugin
    "TemplateServicePlugin": (".plugin", "TemplateServicePlugin"),
    "create_plugin": (".plugin", "create_plugin"),
}


def __getattr__(name):
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib
        module = importlib.import_module(module_path, __name__)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_LAZY_IMPORTS)
