"""Walk the API schema tree, deriving a path per node."""

import logging
import re

from pve_openapi.parser.base import SourceNode
from .endpoint import Operation, convert_endpoint

logger = logging.getLogger(__name__)

SLASH_RUN_RE = re.compile(r"/+")


def normalize_path(parent_path: str, segment: str | None) -> str:
    """Append ``segment`` to ``parent_path`` and collapse repeated slashes."""
    path = parent_path if segment is None else f"{parent_path}/{segment}"
    return SLASH_RUN_RE.sub("/", path) or "/"


def walk(nodes: list[SourceNode], parent_path: str = "") -> list[Operation]:
    """Recursively convert ``nodes`` and their descendants, in tree order."""
    operations = []
    for node in nodes:
        path = normalize_path(parent_path, node.segment)

        if node.info:
            converted = convert_endpoint(node.info, path)
            logger.debug("%s: %s", path, ", ".join(converted) or "no known methods")
            operations.extend(converted.values())

        if node.children:
            operations.extend(walk(node.children, path))
    return operations


def collect_paths(nodes: list[SourceNode]) -> dict[str, dict[str, Operation]]:
    """Group walked operations by path.

    When two nodes derive the same path, their methods merge into one entry
    and a later method replaces an earlier one with the same name.
    """
    paths: dict[str, dict[str, Operation]] = {}
    for operation in walk(nodes):
        paths.setdefault(operation.path, {})[operation.method] = operation
    return paths
