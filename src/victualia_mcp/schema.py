"""Translation of OpenAPI schema objects into pydantic validation types.

Everything produced here has to survive ``model_json_schema()`` because the
host advertises each tool's input as JSON Schema. For that reason only plain
types, ``Literal``, ``Optional``, ``List``, ``Dict`` and ``create_model``
classes are used; no custom validators or refinements. Scalars are strict so
that a value is only accepted when its JSON type matches the advertised one.
"""

from __future__ import annotations

import keyword
import logging
import re
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
)
from pydantic.fields import FieldInfo

from .models import EndpointDescriptor, EndpointParameter, RequestBody


logger = logging.getLogger(__name__)

COMPONENT_SCHEMA_PREFIX = "#/components/schemas/"

Number = Union[StrictInt, StrictFloat]

_RESERVED_FIELD_NAMES = frozenset(dir(BaseModel))


def _is_set(value: Any) -> bool:
    # an empty mapping still means "present" in a schema document
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _literal(values: Any, kinds: Tuple[type, ...] = (str,)) -> Optional[Any]:
    if not isinstance(values, list):
        return None
    choices = tuple(value for value in values if isinstance(value, kinds))
    if not choices:
        return None
    return Literal[choices]  # type: ignore[valid-type]


def _describe(annotation: Any, description: Any) -> Any:
    if isinstance(description, str) and description:
        return Annotated[annotation, Field(description=description)]
    return annotation


def _model_name(hint: str) -> str:
    name = re.sub(r"\W", "_", hint)
    return name or "Schema"


def _python_name(name: str) -> str:
    candidate = re.sub(r"\W", "_", name) or "field"
    if candidate[0].isdigit() or candidate.startswith("_") or candidate.startswith("model_"):
        candidate = f"f_{candidate}"
    if keyword.iskeyword(candidate) or candidate in _RESERVED_FIELD_NAMES:
        candidate = f"{candidate}_"
    return candidate


class FieldSet:
    """Ordered pydantic field definitions keyed by their wire names.

    Wire names that cannot be used as model attributes are kept as aliases,
    so both the JSON Schema and ``model_dump(by_alias=True)`` use the names
    from the API description. Adding a name twice replaces the earlier entry.
    """

    def __init__(self) -> None:
        self._keys: Dict[str, str] = {}
        self._fields: Dict[str, Tuple[Any, FieldInfo]] = {}

    def add(
        self,
        name: str,
        annotation: Any,
        required: bool = False,
        description: Optional[str] = None,
    ) -> None:
        key = self._keys.get(name)
        if key is None:
            key = _python_name(name)
            while key in self._fields:
                key = f"{key}_"
            self._keys[name] = key

        kwargs: Dict[str, Any] = {}
        if key != name:
            kwargs["alias"] = name
        if description:
            kwargs["description"] = description
        self._fields[key] = (annotation, Field(... if required else None, **kwargs))

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def __len__(self) -> int:
        return len(self._fields)

    def definitions(self) -> Dict[str, Tuple[Any, FieldInfo]]:
        return dict(self._fields)


class SchemaTranslator:
    """Translate JSON-Schema-like nodes into pydantic type expressions.

    ``registry`` maps component schema names to their nodes and is only read.
    The translation is total: anything it does not understand becomes ``Any``.
    ``$ref`` chains that come back to a schema already being resolved are cut
    off with ``Any`` as well, so cyclic documents terminate.

    Each component is translated once per translator and reused wherever it
    is referenced again. Components whose translation had to cut a cycle
    depend on where they were reached from and are not reused.
    """

    def __init__(self, registry: Mapping[str, Any]) -> None:
        self.registry = registry
        self._resolved: Dict[str, Any] = {}
        self._cycles_cut = 0

    def translate(self, node: Any, name: str = "Schema") -> Any:
        return self._translate(node, name, frozenset())

    def _translate(self, node: Any, name: str, resolving: FrozenSet[str]) -> Any:
        if not isinstance(node, dict):
            return Any

        ref = node.get("$ref")
        if ref and isinstance(ref, str):
            return self._resolve_ref(ref, resolving)

        schema_type = node.get("type")
        annotation: Any

        if schema_type == "string":
            annotation = _literal(node.get("enum"))
            if annotation is None:
                annotation = StrictStr
        elif schema_type in ("integer", "number"):
            annotation = Number
        elif schema_type == "boolean":
            annotation = StrictBool
        elif schema_type == "array":
            items = node.get("items")
            if _is_set(items):
                annotation = List[self._translate(items, f"{name}Item", resolving)]  # type: ignore[misc]
            else:
                annotation = List[Any]
        elif schema_type == "object":
            annotation = self._object(node, name, resolving)
        else:
            # anyOf/oneOf/allOf and unknown types are not discriminated
            annotation = Any

        if node.get("nullable") is True:
            annotation = Optional[annotation]

        return _describe(annotation, node.get("description"))

    def _resolve_ref(self, ref: str, resolving: FrozenSet[str]) -> Any:
        if not ref.startswith(COMPONENT_SCHEMA_PREFIX):
            logger.debug("Unsupported schema reference %s", ref)
            return Any

        schema_name = ref[len(COMPONENT_SCHEMA_PREFIX):]
        if schema_name in self._resolved:
            return self._resolved[schema_name]
        if schema_name in resolving:
            logger.debug("Cyclic schema reference %s", ref)
            self._cycles_cut += 1
            return Any

        referenced = self.registry.get(schema_name)
        if not referenced:
            logger.debug("Unresolved schema reference %s", ref)
            return Any
        cycles_cut = self._cycles_cut
        annotation = self._translate(referenced, schema_name, resolving | {schema_name})
        if self._cycles_cut == cycles_cut:
            self._resolved[schema_name] = annotation
        return annotation

    def _object(self, node: Dict[str, Any], name: str, resolving: FrozenSet[str]) -> Any:
        properties = node.get("properties")
        if isinstance(properties, dict):
            required = node.get("required")
            if not isinstance(required, list):
                required = []
            fields = FieldSet()
            for key, prop in properties.items():
                key = str(key)
                if not key:
                    continue
                fields.add(
                    key,
                    self._translate(prop, f"{name}_{key}", resolving),
                    required=key in required,
                )
            return create_model(_model_name(name), **fields.definitions())  # type: ignore[call-overload]

        if _is_set(node.get("additionalProperties")):
            return Dict[str, Any]

        return create_model(_model_name(name), __config__=ConfigDict(extra="allow"))


def json_schema_to_type(node: Any, registry: Mapping[str, Any], name: str = "Schema") -> Any:
    return SchemaTranslator(registry).translate(node, name)


def build_parameter_type(parameter: EndpointParameter) -> Any:
    """Scalar type for a path, query, header or cookie parameter."""
    schema = parameter.schema
    enum_type = _literal(schema.get("enum"), (str, int, bool))
    if enum_type is not None:
        return enum_type

    schema_type = schema.get("type")
    if schema_type in ("integer", "number"):
        return Number
    if schema_type == "boolean":
        return StrictBool
    if schema_type == "array":
        return List[Any]
    return StrictStr


def build_request_body_field(
    request_body: Optional[RequestBody],
    registry: Mapping[str, Any],
    name: str = "Body",
) -> Optional[Tuple[Any, bool]]:
    """Return ``(annotation, required)`` for the ``body`` argument.

    ``None`` means the operation has no JSON request body. When translation
    fails the body degrades to an open JSON object and the failure is logged.
    """
    if request_body is None:
        return None
    schema = request_body.json_schema()
    if not schema:
        return None

    try:
        annotation = json_schema_to_type(schema, registry, name)
    except Exception:
        logger.exception("Failed to convert request body schema for %s", name)
        annotation = Annotated[Dict[str, Any], Field(description="Request body (JSON object)")]
    return annotation, request_body.required


def build_input_model(
    descriptor: EndpointDescriptor, registry: Mapping[str, Any]
) -> type[BaseModel]:
    """Build the argument model for one endpoint tool.

    One field per parameter (later duplicates win) plus an optional ``body``.
    """
    model_name = _model_name(descriptor.name)
    fields = FieldSet()

    for parameter in descriptor.parameters:
        if not parameter.name:
            continue
        fields.add(
            parameter.name,
            build_parameter_type(parameter),
            required=parameter.required,
            description=parameter.description,
        )

    body = build_request_body_field(descriptor.request_body, registry, f"{model_name}Body")
    if body is not None:
        annotation, required = body
        fields.add("body", annotation, required=required)

    return create_model(f"{model_name}Input", **fields.definitions())  # type: ignore[call-overload]
