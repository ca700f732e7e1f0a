"""Buildable logging components (handlers, processors, formatters)."""

import importlib
from dataclasses import dataclass, field
from typing import Any, Callable

from chanlog.core.exceptions import ImplementationNotFoundError

# Registry of all buildable components, keyed by class id
COMPONENT_REGISTRY: dict[str, "ComponentSpec"] = {}

# Flag to prevent circular imports during loading
_components_loaded = False


@dataclass(frozen=True)
class Param:
    """A constructor parameter and its default (None when it has none)."""

    name: str
    default: Any = None


@dataclass
class ComponentSpec:
    """A constructible component and its ordered parameter schema."""

    class_id: str
    cls: type
    params: tuple[Param, ...] = field(default_factory=tuple)
    kind: str = "component"

    def defaults(self) -> dict[str, Any]:
        """Return the schema as a name -> default mapping, in declaration order."""
        return {p.name: p.default for p in self.params}


def register_component(
    class_id: str,
    params: list[Param] | tuple[Param, ...] = (),
    kind: str = "component",
) -> Callable[[type], type]:
    """Decorator to register a component class in the registry.

    Usage:
        @register_component("stream", params=[Param("stream"), Param("level", "DEBUG")])
        class StreamHandler(Handler):
            ...
    """

    def decorator(component_class: type) -> type:
        COMPONENT_REGISTRY[class_id] = ComponentSpec(
            class_id=class_id,
            cls=component_class,
            params=tuple(params),
            kind=kind,
        )
        return component_class

    return decorator


def get_component(class_id: str) -> ComponentSpec | None:
    """Get a component spec by its class id or by an importable class path.

    Paths may be written as ``package.module:Class`` or ``package.module.Class``.
    Importing the module triggers its registrations; only registered classes
    are returned.
    """
    _ensure_components_loaded()
    spec = COMPONENT_REGISTRY.get(class_id)
    if spec is not None:
        return spec

    cls = _import_class(class_id)
    if cls is None:
        return None
    for candidate in COMPONENT_REGISTRY.values():
        if candidate.cls is cls:
            return candidate
    return None


def list_components(kind: str | None = None) -> list[str]:
    """List all registered class ids, optionally filtered by kind."""
    _ensure_components_loaded()
    return [
        class_id
        for class_id, spec in COMPONENT_REGISTRY.items()
        if kind is None or spec.kind == kind
    ]


def _import_class(path: str) -> type | None:
    """Import a class from a ``module:Class`` or ``module.Class`` path."""
    path = path.lstrip(".")
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    except Exception as e:
        raise ImplementationNotFoundError(path, reason=f"importing {module_name} failed: {e}") from e
    obj = getattr(module, attr, None)
    return obj if isinstance(obj, type) else None


def _ensure_components_loaded() -> None:
    """Ensure all built-in component modules are loaded."""
    global _components_loaded
    if _components_loaded:
        return
    _components_loaded = True

    # Import component modules to trigger registration
    from chanlog.components import formatters  # noqa: F401
    from chanlog.components import processors  # noqa: F401
    from chanlog.components import handlers  # noqa: F401
