"""Volume generation configuration.

``VolumeConfig`` holds the six scalars that size operation volumes. It is an
immutable value passed explicitly to every operation that needs it; there is
no global configuration. Missing values take the documented defaults:

    =====================  =========  ======================================
    Field                  Default    Meaning
    =====================  =========  ======================================
    tse_h   (TSE_H)        15.0 m     Horizontal total system error
    tse_v   (TSE_V)        10.0 m     Vertical total system error
    alpha_h (Alpha_H)      7.0        Horizontal dominance threshold
    alpha_v (Alpha_V)      1.0        Vertical dominance threshold
    tbuf                   5.0 s      Temporal buffer before/after a segment
    compression_factor     20         Waypoint decimation stride
    =====================  =========  ======================================

The names in parentheses are the wire names used by the authorization
service's callers; ``from_mapping`` and ``to_dict`` translate between them.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .constants import (
    DEFAULT_TSE_H,
    DEFAULT_TSE_V,
    DEFAULT_ALPHA_H,
    DEFAULT_ALPHA_V,
    DEFAULT_TBUF,
    DEFAULT_COMPRESSION_FACTOR,
)
from .decorators import log_calls
from .exceptions import ConfigurationError
from .input_validation import ValidationContext, validate_positive, validate_compression_factor

__all__ = [
    "VolumeConfig",
    "DEFAULT_CONFIG",
    "WIRE_NAMES",
    "ENV_VARS",
    "load_config_from_env",
]

# Python field name -> wire name
WIRE_NAMES = {
    "tse_h": "TSE_H",
    "tse_v": "TSE_V",
    "alpha_h": "Alpha_H",
    "alpha_v": "Alpha_V",
    "tbuf": "tbuf",
    "compression_factor": "compressionFactor",
}

# Python field name -> environment variable
ENV_VARS = {
    "tse_h": "UPLAN_TSE_H",
    "tse_v": "UPLAN_TSE_V",
    "alpha_h": "UPLAN_ALPHA_H",
    "alpha_v": "UPLAN_ALPHA_V",
    "tbuf": "UPLAN_TBUF",
    "compression_factor": "UPLAN_COMPRESSION_FACTOR",
}


@dataclass(frozen=True)
class VolumeConfig:
    """Error budgets and thresholds used to size operation volumes."""

    tse_h: float = DEFAULT_TSE_H
    tse_v: float = DEFAULT_TSE_V
    alpha_h: float = DEFAULT_ALPHA_H
    alpha_v: float = DEFAULT_ALPHA_V
    tbuf: float = DEFAULT_TBUF
    compression_factor: int = DEFAULT_COMPRESSION_FACTOR

    def __post_init__(self) -> None:
        with ValidationContext("Volume configuration") as ctx:
            for name in ("tse_h", "tse_v", "alpha_h", "alpha_v", "tbuf"):
                ctx.validate(
                    getattr(self, name),
                    lambda v, n=name: validate_positive(v, n),
                    WIRE_NAMES[name],
                )
            ctx.validate(
                self.compression_factor,
                validate_compression_factor,
                WIRE_NAMES["compression_factor"],
            )

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "VolumeConfig":
        """
        Build a configuration from a mapping of overrides.

        Keys may be Python field names (``tse_h``) or wire names (``TSE_H``).
        Keys with a ``None`` value are ignored and take the default.

        Args:
            values: Overrides, or None for all defaults

        Returns:
            Validated VolumeConfig

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if not values:
            return cls()

        by_wire = {wire: name for name, wire in WIRE_NAMES.items()}
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            name = key if key in WIRE_NAMES else by_wire.get(key)
            if name is None:
                raise ConfigurationError("Unknown configuration key", config_key=key)
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration keyed by wire names."""
        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = VolumeConfig()


def _parse_env_value(name: str, raw: str) -> Any:
    var = ENV_VARS[name]
    try:
        if name == "compression_factor":
            return int(raw)
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid value {raw!r}", config_key=var) from None


@log_calls
def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> VolumeConfig:
    """
    Build a configuration from ``UPLAN_*`` environment variables.

    Unset or empty variables take the default value.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated VolumeConfig

    Raises:
        ConfigurationError: If a variable is not numeric or out of range
    """
    if environ is None:
        environ = os.environ

    overrides = {}
    for name, var in ENV_VARS.items():
        raw = environ.get(var, "").strip()
        if raw:
            overrides[name] = _parse_env_value(name, raw)
    return VolumeConfig.from_mapping(overrides)
