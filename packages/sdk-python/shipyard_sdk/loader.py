"""
Bundlefile Loading
==================

Reads a Bundlefile from disk, expands environment references and hands the
result to the schema for validation.
"""

import os
import re
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from shipyard_common import ValidationError
from shipyard_common.logger import get_logger
from shipyard_schema import BundleSpec

logger = get_logger("sdk.loader")

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def expand_env_vars(value: Any) -> Any:
    """
    Expand ``${VAR}`` and ``${VAR:-default}`` references recursively.

    Raises:
        ValidationError: If a variable is unset and has no default

    Examples:
        >>> os.environ["PM"] = "yarn"
        >>> expand_env_vars({"binary": "${PM}", "dir": "${DIR:-.}"})
        {'binary': 'yarn', 'dir': '.'}
    """
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def replace(match: "re.Match[str]") -> str:
        name, default = match.group(1), match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        raise ValidationError(f"Environment variable '{name}' is not set and has no default")

    return _ENV_PATTERN.sub(replace, value)


def load_bundlespec(path: Union[str, Path]) -> BundleSpec:
    """
    Load and validate a Bundlefile.

    Args:
        path: Path to the Bundlefile (YAML)

    Returns:
        Validated BundleSpec

    Raises:
        ValidationError: If the file is missing, not YAML, or fails validation
    """
    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"Bundlefile not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(f"YAML parsing error in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Invalid Bundlefile format: {path}")

    try:
        spec = BundleSpec.model_validate(expand_env_vars(data))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid Bundlefile {path}: {e}") from e

    logger.debug("Loaded Bundlefile", path=str(path), root_module=spec.bundle.root_module)
    return spec
