"""Build component instances from ``{class, params}`` definitions.

Example:
    new_instance({"class": "stream", "params": {"level": "INFO"}})

is equivalent to ``StreamHandler(stream=None, level="INFO")``: supplied
params are merged by name over the defaults of the component's registered
parameter schema.
"""

from collections.abc import Mapping
from typing import Any

from chanlog.components import get_component
from chanlog.config.definitions import Definition
from chanlog.core.exceptions import (
    ConstructionError,
    ImplementationNotFoundError,
    MissingImplementationIdError,
)


def new_instance(definition: Definition | Mapping[str, Any]) -> Any:
    """Create a fresh component instance from its definition.

    Raises:
        MissingImplementationIdError: No class id in the definition
        ImplementationNotFoundError: The class id is not a registered component,
            or importing its class path raised
        ConstructionError: Unknown parameter names, or the constructor failed
    """
    if isinstance(definition, Definition):
        class_id, params = definition.class_, definition.params
    elif isinstance(definition, Mapping):
        class_id, params = definition.get("class"), definition.get("params")
    else:
        raise MissingImplementationIdError(definition)

    if not class_id:
        raise MissingImplementationIdError(definition)

    spec = get_component(class_id)
    if spec is None:
        raise ImplementationNotFoundError(class_id)

    if not params:
        kwargs: dict[str, Any] = {}
    else:
        if not isinstance(params, Mapping):
            raise ConstructionError(class_id, "params must be a mapping")
        schema = spec.defaults()
        unknown = [name for name in params if name not in schema]
        if unknown:
            raise ConstructionError(class_id, f"unexpected parameter(s): {', '.join(unknown)}")
        kwargs = {**schema, **params}

    try:
        return spec.cls(**kwargs)
    except Exception as e:
        raise ConstructionError(class_id, str(e)) from e
