"""Translate Proxmox type tags and descriptors into OpenAPI schema fragments."""

from pve_openapi.parser.base import ParamSpec, ReturnSpec

JSON_CONTENT = "application/json"
SUCCESS_DESCRIPTION = "Successful response"

# OpenAPI 3.0 has no "null" type; it is approximated as a string.
TYPE_MAP = {
    "string": "string",
    "boolean": "boolean",
    "integer": "integer",
    "number": "number",
    "array": "array",
    "object": "object",
    "null": "string",
}
DEFAULT_TYPE = "string"


def map_type(tag: str | None) -> str:
    """Map a Proxmox type tag to an OpenAPI type. Unknown tags become ``string``."""
    return TYPE_MAP.get(tag, DEFAULT_TYPE)


def parameter_schema(spec: ParamSpec) -> dict:
    """Schema object for a path or query parameter."""
    schema = {"type": map_type(spec.type)}
    _copy_constraints(spec, schema)
    if spec.pattern:
        schema["pattern"] = spec.pattern
    if spec.format:
        schema["format"] = spec.format
    return schema


def body_property(spec: ParamSpec) -> dict:
    """Property schema for a request body field."""
    prop = {"type": map_type(spec.type), "description": spec.description}
    _copy_constraints(spec, prop)
    return prop


def _copy_constraints(spec: ParamSpec, target: dict) -> None:
    if spec.provided("default"):
        target["default"] = spec.default
    if spec.enum is not None:
        target["enum"] = list(spec.enum)
    for key in ("minimum", "maximum"):
        if spec.provided(key):
            target[key] = getattr(spec, key)


def data_schema(returns: ReturnSpec) -> dict:
    """Schema of the ``data`` field wrapping every Proxmox response.

    Object properties are translated one level deep only; nested objects and
    arrays show up as their mapped primitive type.
    """
    if returns.type == "null":
        return {"type": "object", "nullable": True}

    if returns.type == "array":
        if returns.items is None:
            return {"type": "array", "items": {"type": "object"}}
        return {"type": "array", "items": {"type": map_type(returns.items.type)}}

    if returns.type == "object" and returns.properties is not None:
        return {
            "type": "object",
            "properties": {
                name: {"type": map_type(prop.type), "description": prop.description}
                for name, prop in returns.properties.items()
            },
        }

    return {"type": map_type(returns.type or "object")}


def response_schema(returns: ReturnSpec | None) -> dict:
    """Build the responses object; there is always exactly one ``200`` entry."""
    if returns is None:
        return {"200": {"description": SUCCESS_DESCRIPTION}}

    return {
        "200": {
            "description": SUCCESS_DESCRIPTION,
            "content": {
                JSON_CONTENT: {
                    "schema": {
                        "type": "object",
                        "properties": {"data": data_schema(returns)},
                    }
                }
            },
        }
    }
