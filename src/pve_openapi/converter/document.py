"""Assemble, serialize and write the OpenAPI document."""

import copy
import json
from pathlib import Path

import yaml

from pve_openapi.config import OPENAPI_VERSION, DocumentSettings
from pve_openapi.parser.base import SourceNode
from .walker import collect_paths

SECURITY_SCHEMES = {
    "ApiToken": {
        "type": "apiKey",
        "in": "header",
        "name": "Authorization",
        "description": "PVEAPIToken=USER@REALM!TOKENID=UUID",
    },
    "Cookie": {
        "type": "apiKey",
        "in": "cookie",
        "name": "PVEAuthCookie",
    },
}

YAML_SUFFIXES = (".yaml", ".yml")


class _NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        return True


def build_document(nodes: list[SourceNode], settings: DocumentSettings | None = None) -> dict:
    """Convert the whole tree into an OpenAPI document with sorted paths."""
    settings = settings or DocumentSettings()
    paths = collect_paths(nodes)

    return {
        "openapi": OPENAPI_VERSION,
        "info": settings.info(),
        "servers": [settings.server()],
        "paths": {
            path: {method: op.to_dict() for method, op in paths[path].items()}
            for path in sorted(paths)
        },
        "components": {"securitySchemes": copy.deepcopy(SECURITY_SCHEMES)},
        # Either scheme alone is enough.
        "security": [{name: []} for name in SECURITY_SCHEMES],
    }


def count_operations(document: dict) -> int:
    return sum(len(methods) for methods in document["paths"].values())


def render_document(document: dict, fmt: str = "json") -> str:
    """Serialize to indented JSON or YAML, keeping key order."""
    if fmt == "yaml":
        return yaml.dump(
            document,
            Dumper=_NoAliasDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_document(document: dict, output_path: Path) -> Path:
    """Write the document, choosing YAML or JSON from the file suffix."""
    fmt = "yaml" if output_path.suffix.lower() in YAML_SUFFIXES else "json"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_document(document, fmt), encoding="utf-8")
    return output_path
