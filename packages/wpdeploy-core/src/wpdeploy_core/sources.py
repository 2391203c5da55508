"""Parameter sources.

Helpers that turn the places deployment parameters come from into flat
string mappings for DeploymentParameters.from_mapping:

- the process environment
- `azd env get-values` output (KEY="value" lines)
- a flat YAML parameter file

Sources are merged with merge_sources; later sources win.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml

from wpdeploy_core.errors import ConfigurationError
from wpdeploy_core.models import PARAMETER_KEYS

logger = structlog.get_logger(__name__)

KNOWN_KEYS: frozenset[str] = frozenset(key for keys in PARAMETER_KEYS.values() for key in keys)


def read_environment(environ: Mapping[str, str]) -> dict[str, str]:
    """Pick the known parameter keys out of an environment mapping.

    Args:
        environ: Environment mapping (usually os.environ)

    Returns:
        Mapping restricted to parameter keys.
    """
    return {key: value for key, value in environ.items() if key in KNOWN_KEYS}


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env_values(text: str) -> dict[str, str]:
    """Parse `azd env get-values` output.

    Each non-blank, non-comment line is KEY=VALUE. The first '=' separates key
    from value, so values may contain '='. Surrounding quotes are removed and
    an optional leading `export ` is ignored. Unknown keys are kept so callers
    can read other azd values such as AZURE_SUBSCRIPTION_ID.

    Args:
        text: Raw dotenv-style text

    Returns:
        Parsed key-value mapping (last occurrence wins).

    Raises:
        ConfigurationError: If a line has no '=' or an empty key.

    Example:
        >>> parse_env_values('AZURE_ENV_NAME="wprod"\\nSITE_NAME="blog"\\n')
        {'AZURE_ENV_NAME': 'wprod', 'SITE_NAME': 'blog'}
    """
    values: dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(
                "Expected KEY=VALUE",
                file_path="env values",
                line_number=line_number,
            )
        values[key] = _unquote(value)

    logger.debug("env_values_parsed", keys=sorted(values))
    return values


def load_env_file(path: Path) -> dict[str, str]:
    """Read and parse an `azd env get-values` dump from disk.

    Raises:
        ConfigurationError: If the file cannot be read, decoded or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            "Env file is not valid UTF-8",
            file_path=str(path),
            internal_details=str(e),
        ) from e
    except OSError as e:
        raise ConfigurationError(
            "Cannot read env file",
            file_path=str(path),
            internal_details=str(e),
        ) from e

    try:
        return parse_env_values(text)
    except ConfigurationError as e:
        raise ConfigurationError(
            "Expected KEY=VALUE",
            file_path=str(path),
            line_number=e.line_number,
        ) from e


def _scalar_to_str(key: str, value: Any, file_path: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigurationError(
        f"Parameter '{key}' must be a scalar value",
        file_path=file_path,
    )


def load_yaml_values(path: Path) -> dict[str, str]:
    """Load a flat YAML mapping of parameter keys.

    Args:
        path: Path to the YAML parameter file

    Returns:
        Mapping of keys to string values.

    Raises:
        ConfigurationError: If the file cannot be read, on YAML syntax
            errors, a non-mapping document, or nested values.

    Example:
        Given wpdeploy.yaml::

            environmentName: wprod
            siteName: blog

        >>> load_yaml_values(Path("wpdeploy.yaml"))
        {'environmentName': 'wprod', 'siteName': 'blog'}
    """
    file_path = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            "Cannot read parameter file",
            file_path=file_path,
            internal_details=str(e),
        ) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None) or "invalid YAML"
        raise ConfigurationError(
            f"YAML syntax error: {problem}",
            file_path=file_path,
            line_number=mark.line + 1 if mark is not None else None,
            internal_details=str(e),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Parameter file must contain a mapping, got {type(data).__name__}",
            file_path=file_path,
        )

    values = {str(key): _scalar_to_str(str(key), value, file_path) for key, value in data.items()}
    unknown = sorted(set(values) - KNOWN_KEYS)
    if unknown:
        logger.warning("unknown_parameter_keys", file_path=file_path, keys=unknown)
    return values


def merge_sources(*sources: Mapping[str, str]) -> dict[str, str]:
    """Merge parameter sources, later sources overriding earlier ones.

    Empty values never override a non-empty value from an earlier source,
    matching the `${VAR:-default}` fallback of the deployment hooks.

    Example:
        >>> merge_sources({"SITE_NAME": "blog"}, {"SITE_NAME": ""}, {"AZURE_ENV_NAME": "dev"})
        {'SITE_NAME': 'blog', 'AZURE_ENV_NAME': 'dev'}
    """
    merged: dict[str, str] = {}
    for source in sources:
        for key, value in source.items():
            if value == "" and merged.get(key):
                continue
            merged[key] = value
    return merged
