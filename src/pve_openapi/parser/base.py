"""Tolerant data models for the Proxmox API schema tree.

The apidata tree is loosely shaped: fields come and go between nodes and
sometimes carry unexpected values. Every model here accepts whatever it is
given and falls back to an empty default instead of raising, so that one odd
node never aborts a conversion.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _as_mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _keyed_by_text(value: Any) -> dict:
    return {_as_text(key): item for key, item in _as_mapping(value).items()}


def _present(value: Any) -> bool:
    # Empty containers still count as present; only null, false, 0 and "" do not.
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _descriptor(value: Any) -> dict | None:
    """A present non-mapping decodes as an empty descriptor, an absent one as None."""
    if not _present(value):
        return None
    return _as_mapping(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class _Tolerant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def coerce_mapping(cls, data: Any) -> dict:
        return _as_mapping(data)

    def provided(self, field: str) -> bool:
        """True when the source explicitly carried ``field``, even as null."""
        return field in self.model_fields_set


class ParamSpec(_Tolerant):
    """A single parameter, or one property of a returned object."""

    type: str | None = None  # string / integer / number / boolean / array / object / null
    description: str = ""
    optional: Any = None
    default: Any = None
    enum: list | None = None
    minimum: Any = None
    maximum: Any = None
    pattern: Any = None
    format: Any = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type_tag(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("enum", mode="before")
    @classmethod
    def coerce_enum(cls, value: Any) -> list | None:
        return value if isinstance(value, list) else None

    @property
    def is_optional(self) -> bool:
        # Only the number 1 marks a parameter optional; true, "1" and 1.5 do not.
        return not isinstance(self.optional, bool) and self.optional == 1


class ParameterBag(_Tolerant):
    """All parameters accepted by one method, keyed by name."""

    properties: dict[str, ParamSpec] = {}

    @field_validator("properties", mode="before")
    @classmethod
    def coerce_properties(cls, value: Any) -> dict:
        return _keyed_by_text(value)


class ReturnSpec(_Tolerant):
    """Shape of the ``data`` field a method returns."""

    type: str | None = None
    items: "ReturnSpec | None" = None
    properties: dict[str, ParamSpec] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type_tag(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("items", mode="before")
    @classmethod
    def coerce_items(cls, value: Any) -> dict | None:
        return _descriptor(value)

    @field_validator("properties", mode="before")
    @classmethod
    def coerce_properties(cls, value: Any) -> dict | None:
        return _keyed_by_text(value) if isinstance(value, dict) else None


class Permissions(_Tolerant):
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, value: Any) -> str | None:
        return _as_text(value) or None


class MethodInfo(_Tolerant):
    """Metadata for one HTTP method of a node."""

    name: str = ""
    description: str = ""
    parameters: ParameterBag = Field(default_factory=ParameterBag)
    returns: ReturnSpec | None = None
    permissions: Permissions | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("returns", "permissions", mode="before")
    @classmethod
    def coerce_descriptor(cls, value: Any) -> dict | None:
        return _descriptor(value)


class SourceNode(_Tolerant):
    """One element of the API schema tree."""

    path: str | None = None
    text: str | None = None
    children: list["SourceNode"] = []
    info: dict[str, MethodInfo] = {}

    @field_validator("path", "text", mode="before")
    @classmethod
    def coerce_segment_name(cls, value: Any) -> str | None:
        return _as_text(value) or None

    @field_validator("children", mode="before")
    @classmethod
    def coerce_children(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [child for child in value if isinstance(child, dict)]

    @field_validator("info", mode="before")
    @classmethod
    def coerce_info(cls, value: Any) -> dict:
        return {
            method: desc
            for method, desc in _keyed_by_text(value).items()
            if _present(desc)
        }

    @property
    def segment(self) -> str | None:
        """The name this node adds to its parent's path, if any."""
        return self.path or self.text


def parse_nodes(data: list) -> list[SourceNode]:
    """Decode a list of raw node mappings, skipping anything that isn't one."""
    return [SourceNode.model_validate(item) for item in data if isinstance(item, dict)]
