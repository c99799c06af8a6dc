"""Load risk threshold configuration from YAML."""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..analytics.risk import DEFAULT_RISK_THRESHOLDS, RiskThresholds
from .error_handling import ConfigurationError

logger = logging.getLogger("options_calc.config")

CONFIG_SECTION = "risk_thresholds"


def load_risk_thresholds(path: str | Path | None = None) -> RiskThresholds:
    """Read risk thresholds from a YAML file.

    The file may hold the threshold fields at the top level or under a
    ``risk_thresholds:`` key. Fields it leaves out take their defaults.

    Args:
        path: YAML file path. None returns DEFAULT_RISK_THRESHOLDS.

    Returns:
        RiskThresholds instance

    Raises:
        ConfigurationError: If the file is missing, unparsable, or invalid

    Example:
        >>> thresholds = load_risk_thresholds("config/risk_thresholds.yaml")
        >>> thresholds.critical_days
        3
    """
    if path is None:
        return DEFAULT_RISK_THRESHOLDS

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Risk threshold config not found: {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {config_path}: {e}") from e

    section = _extract_section(raw, config_path)
    thresholds = RiskThresholds.from_dict(section)

    logger.info("Loaded risk thresholds from %s: %s", config_path, thresholds)
    return thresholds


def _extract_section(raw: Any, config_path: Path) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Expected a mapping in {config_path}, got {type(raw).__name__}")

    section = raw.get(CONFIG_SECTION, raw)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{CONFIG_SECTION}' in {config_path} must be a mapping")
    return section
