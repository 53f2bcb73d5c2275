"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "data", "pair_generation", "scoring", "evaluation"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    # Check profile source
    if "data" in config:
        profiles = config["data"].get("profiles", {}) or {}
        if "path" not in profiles:
            issues.append("Missing data.profiles.path")
        fmt = profiles.get("format", "json")
        if fmt not in ("json", "csv"):
            issues.append(f"Unsupported data.profiles.format: {fmt}")

    # Check pair limits
    if "pair_generation" in config:
        pairs = config["pair_generation"] or {}
        for key in ("max_pairs", "small_dataset_multiplier"):
            value = pairs.get(key, 1)
            if not isinstance(value, int) or value <= 0:
                issues.append(f"pair_generation.{key} must be a positive integer, got {value}")

    # Check scoring weights sum to 1
    if "scoring" in config:
        weights = (config["scoring"] or {}).get("weights", {}) or {}
        if weights:
            if any(w < 0 for w in weights.values()):
                issues.append(f"Scoring weights must be non-negative: {weights}")
            total = sum(weights.values())
            if abs(total - 1.0) > 0.01:
                issues.append(f"Scoring weights don't sum to 1: {total}")

        max_reasons = (config["scoring"] or {}).get("max_reasons", 3)
        if not isinstance(max_reasons, int) or max_reasons < 0:
            issues.append(f"scoring.max_reasons must be a non-negative integer, got {max_reasons}")

    # Check random seed is set
    if "global" in config:
        if "random_seed" not in config["global"]:
            issues.append("Missing global.random_seed (required for reproducibility)")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.personality")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
