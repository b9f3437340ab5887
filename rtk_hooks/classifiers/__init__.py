"""Read-only classifiers, auto-discovered from this package.

Every module may define one or more Classifier subclasses. Each declares the
tool names it owns; together they form the table of tools the hook rewrites.
"""

import importlib
import inspect
import pkgutil

from .base import Classifier

_cache: list[Classifier] | None = None


def discover_classifiers() -> list[Classifier]:
    """Instantiate every Classifier subclass in this package, sorted by priority."""
    global _cache  # noqa: PLW0603
    if _cache is not None:
        return _cache

    found = []
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name == "base":
            continue
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        for _name, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, Classifier) and obj is not Classifier and obj.__module__ == module.__name__:
                found.append(obj())

    found.sort(key=lambda c: (c.priority, c.name))
    _cache = found
    return found


def collect_tool_names() -> list[str]:
    """Return every tool name owned by a classifier, longest first."""
    names = set()
    for classifier in discover_classifiers():
        names.update(classifier.tools)
    return sorted(names, key=lambda n: (-len(n), n))


def classifier_for(tool: str) -> Classifier | None:
    """Return the classifier owning a tool, or None."""
    for classifier in discover_classifiers():
        if classifier.can_handle(tool):
            return classifier
    return None
