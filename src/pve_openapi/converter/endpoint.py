"""Endpoint converter: one source node's methods -> OpenAPI operations."""

import re

from pydantic import BaseModel

from pve_openapi.parser.base import MethodInfo, ParameterBag
from .types import JSON_CONTENT, body_property, parameter_schema, response_schema

METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")

PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")
NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


class Parameter(BaseModel):
    """A path or query parameter of one operation."""

    name: str
    location: str  # path / query
    description: str = ""
    required: bool
    param_schema: dict

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "in": self.location,
            "description": self.description,
            "required": self.required,
            "schema": self.param_schema,
        }


class Operation(BaseModel):
    """A single HTTP method at a single path."""

    method: str  # get / post / put / delete
    path: str
    summary: str
    description: str
    operation_id: str
    tags: list[str]
    parameters: list[Parameter] | None = None
    request_body: dict | None = None
    responses: dict

    def to_dict(self) -> dict:
        """Render as an OpenAPI operation object."""
        result = {
            "summary": self.summary,
            "description": self.description,
            "operationId": self.operation_id,
            "tags": list(self.tags),
        }
        if self.parameters is not None:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.request_body is not None:
            result["requestBody"] = self.request_body
        result["responses"] = self.responses
        return result


def extract_path_params(path: str) -> list[str]:
    """Names of the ``{var}`` segments in a path, in order."""
    return PATH_PARAM_RE.findall(path)


def operation_id(method: str, path: str) -> str:
    return f"{method.lower()}_{NON_ALNUM_RE.sub('_', path)}"


def path_tag(path: str) -> str:
    """First path segment, used to group operations; ``root`` for ``/``."""
    segments = path.split("/")
    return segments[1] if len(segments) > 1 and segments[1] else "root"


def convert_parameters(bag: ParameterBag, path_params: list[str]) -> list[Parameter]:
    """Convert every parameter of a method, classifying it as path or query."""
    result = []
    for name, spec in bag.properties.items():
        is_path = name in path_params
        result.append(
            Parameter(
                name=name,
                location="path" if is_path else "query",
                description=spec.description,
                required=is_path or not spec.is_optional,
                param_schema=parameter_schema(spec),
            )
        )
    return result


def convert_request_body(bag: ParameterBag, path_params: list[str]) -> dict | None:
    """Collect the non-path parameters into a JSON request body.

    Returns None when nothing is left over, meaning the method takes no body.
    """
    properties = {}
    required = []
    for name, spec in bag.properties.items():
        if name in path_params:
            continue
        properties[name] = body_property(spec)
        if not spec.is_optional:
            required.append(name)

    if not properties:
        return None

    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return {"content": {JSON_CONTENT: {"schema": schema}}}


def convert_method(method: str, info: MethodInfo, path: str) -> Operation:
    path_params = extract_path_params(path)

    parameters = None
    request_body = None
    if method in BODY_METHODS:
        path_only = [
            p for p in convert_parameters(info.parameters, path_params)
            if p.location == "path"
        ]
        if path_only:
            parameters = path_only
        request_body = convert_request_body(info.parameters, path_params)
    else:
        parameters = convert_parameters(info.parameters, path_params)

    description = info.description
    if info.permissions is not None and info.permissions.description:
        description += f"\n\nPermissions: {info.permissions.description}"

    return Operation(
        method=method.lower(),
        path=path,
        summary=info.name,
        description=description,
        operation_id=operation_id(method, path),
        tags=[path_tag(path)],
        parameters=parameters,
        request_body=request_body,
        responses=response_schema(info.returns),
    )


def convert_endpoint(info: dict[str, MethodInfo], path: str) -> dict[str, Operation]:
    """Convert each recognized method of a node, keyed by lowercase method name."""
    return {
        method.lower(): convert_method(method, info[method], path)
        for method in METHODS
        if method in info
    }
