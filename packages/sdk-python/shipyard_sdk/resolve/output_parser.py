"""
Package-Manager Output Parsing
==============================

Extracts structured payloads from the raw text printed by the package
manager:

- ``<pm> list --json --prod``     -> ``{"type":"tree","data":{"type":"list","trees":[...]}}``
- ``<pm> config current --json``  -> ``{"type":"log","data":"<escaped json>"}``

Both envelopes are matched against the whole captured output. Any other
shape is a ParseError carrying the raw text.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from shipyard_common import PackageManagerDefaults, ParseError
from shipyard_common.logger import get_logger

from .models import RawTreeNode

logger = get_logger("sdk.output_parser")

_TREE_ENVELOPE = re.compile(r'\{"type":"tree","data":\{"type":"list","trees":(.*)\}\}', re.DOTALL)
_CONFIG_ENVELOPE = re.compile(r'\{"type":"log","data":"(.*)"\}', re.DOTALL)


def parse_dependency_tree(stdout: str, command: Optional[str] = None) -> List[RawTreeNode]:
    """
    Parse the output of the "list production dependencies" command.

    Args:
        stdout: Raw standard output of the command
        command: Command line, used in error messages only

    Returns:
        Flat list of reported nodes, in reported order

    Raises:
        ParseError: If the envelope does not match or the array is invalid

    Examples:
        >>> nodes = parse_dependency_tree(
        ...     '{"type":"tree","data":{"type":"list","trees":[{"name":"a@1.0.0","children":[]}]}}'
        ... )
        >>> nodes[0].name
        'a@1.0.0'
    """
    match = _TREE_ENVELOPE.fullmatch(stdout.strip())
    if not match:
        raise ParseError(
            f"Not able to find a dependency tree when executing {command or 'list'}. Found {stdout}",
            raw_output=stdout,
            command=command,
        )

    try:
        trees = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid dependency tree JSON: {e}. Found {stdout}",
            raw_output=stdout,
            command=command,
        ) from e

    if not isinstance(trees, list):
        raise ParseError(
            f"Dependency tree is not a JSON array. Found {stdout}",
            raw_output=stdout,
            command=command,
        )

    try:
        nodes = [RawTreeNode.model_validate(tree) for tree in trees]
    except PydanticValidationError as e:
        raise ParseError(
            f"Malformed dependency tree entry: {e}",
            raw_output=stdout,
            command=command,
        ) from e

    logger.debug("Parsed dependency tree", nodes=len(nodes))
    return nodes


def parse_config(stdout: str, command: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse the output of the "current configuration" command.

    The configuration is a JSON document escaped into a string; ``\\n``
    sequences are dropped and ``\\"`` becomes ``"`` before decoding.

    Raises:
        ParseError: If the envelope does not match or the payload is not a JSON object

    Examples:
        >>> # stdout: {"type":"log","data":"{\"modulesFolder\":\"/tmp/nm\"}"}
        >>> parse_config(stdout)["modulesFolder"]
        '/tmp/nm'
    """
    match = _CONFIG_ENVELOPE.fullmatch(stdout.strip())
    if not match:
        raise ParseError(
            f"Not able to get package manager configuration when executing "
            f"{command or 'config'}. Found {stdout}",
            raw_output=stdout,
            command=command,
        )

    unescaped = match.group(1).replace("\\n", "").replace('\\"', '"')
    try:
        config = json.loads(unescaped)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid configuration JSON: {e}. Found {stdout}",
            raw_output=stdout,
            command=command,
        ) from e

    if not isinstance(config, dict):
        raise ParseError(
            f"Configuration is not a JSON object. Found {stdout}",
            raw_output=stdout,
            command=command,
        )

    return config


def resolve_modules_folder(config: Dict[str, Any], root_dir: str) -> str:
    """
    Get the module store directory.

    Uses ``modulesFolder`` from the configuration when set, otherwise
    ``<root_dir>/node_modules`` made absolute.
    """
    modules_folder = config.get("modulesFolder")
    if modules_folder:
        return str(modules_folder)

    fallback = str(Path(root_dir).resolve() / PackageManagerDefaults.MODULES_DIRECTORY)
    logger.debug("No modulesFolder in configuration, using default", modules_folder=fallback)
    return fallback
