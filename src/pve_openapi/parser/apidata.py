"""Proxmox ``apidata.js`` loader.

The file is JavaScript holding a single assignment such as
``const apiSchema = [...];``. The literal on the right-hand side is decoded as
JSON, or with chompjs when it uses relaxed JavaScript syntax (unquoted keys,
single quotes, trailing commas). A file with no such assignment is read as a
plain JSON or YAML document.
"""

import json
import logging
import re
from pathlib import Path

import chompjs
import yaml

from pve_openapi.config import DEFAULT_VARIABLE
from .base import SourceNode, parse_nodes

logger = logging.getLogger(__name__)


class ApiDataError(Exception):
    """The API schema file is missing or holds no usable tree."""


def load_apidata(file_path: Path, variable: str = DEFAULT_VARIABLE) -> list[SourceNode]:
    """Read an apidata file and decode its schema tree."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ApiDataError(f"Cannot read {file_path}: {e}") from e

    literal = _extract_literal(text, variable)
    if literal is None:
        data = _decode_document(text, file_path)
    else:
        data = _decode_literal(literal, file_path)

    if isinstance(data, dict):
        logger.warning("%s holds a single node instead of a list, wrapping it", file_path)
        data = [data]
    if not isinstance(data, list):
        raise ApiDataError(
            f"Expected a list of API nodes in {file_path}, got {type(data).__name__}"
        )
    return parse_nodes(data)


def _extract_literal(text: str, variable: str) -> str | None:
    """Return everything after ``<variable> =``, or None if there is no such assignment."""
    pattern = re.compile(
        rf"^[ \t]*(?:(?:const|let|var)\s+)?{re.escape(variable)}\s*=\s*",
        re.MULTILINE,
    )
    match = pattern.search(text)
    if match is None:
        logger.debug("No assignment to %s found, decoding the whole file", variable)
        return None
    return text[match.end():]


def _decode_literal(literal: str, file_path: Path):
    # Both decoders stop at the end of the literal, so a trailing ';' or more code is fine.
    try:
        data, _ = json.JSONDecoder().raw_decode(literal.lstrip())
        return data
    except json.JSONDecodeError:
        logger.debug("%s is not strict JSON, retrying as a JavaScript literal", file_path)

    if not literal.lstrip().startswith(("[", "{")):
        raise ApiDataError(f"Cannot parse API schema in {file_path}: no array or object literal")
    try:
        return chompjs.parse_js_object(literal)
    except ValueError as e:
        raise ApiDataError(f"Cannot parse API schema in {file_path}: {e}") from e


def _decode_document(text: str, file_path: Path):
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("%s is not JSON, retrying as YAML", file_path)

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ApiDataError(f"Cannot parse API schema in {file_path}: {e}") from e
