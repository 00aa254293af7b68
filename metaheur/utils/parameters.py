"""
Parameter merging for the metaheuristic factories.
A run configuration is built from SEARCH_CONFIG, then an algorithm's
defaults, then an optional preset, then the caller's overrides.
"""
from typing import Dict, Optional

from metaheur.config import SEARCH_CONFIG, SEARCH_PRESETS
from metaheur.core.exceptions import InvalidConfigurationError


def merge_config(defaults: Optional[Dict] = None, overrides: Optional[Dict] = None,
                 preset: Optional[str] = None) -> Dict:
    """
    Merge configuration layers over a copy of SEARCH_CONFIG.

    Args:
        defaults: Algorithm defaults (e.g. SA_CONFIG)
        overrides: Caller-supplied values; None values are kept
        preset: Name of a SEARCH_PRESETS entry, applied before overrides

    Returns:
        New configuration dictionary

    Raises:
        InvalidConfigurationError: If the preset is unknown
    """
    config = SEARCH_CONFIG.copy()
    config.update(defaults or {})

    if preset is not None:
        if preset not in SEARCH_PRESETS:
            raise InvalidConfigurationError(
                parameter='preset',
                value=preset,
                expected=f"one of {list(SEARCH_PRESETS)}"
            )
        config.update(SEARCH_PRESETS[preset])

    config.update(overrides or {})
    return config
