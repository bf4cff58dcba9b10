"""Configuration validation for the U-plan volume generator.

This module validates the runtime environment before a CLI run so that
problems surface with clear messages instead of failing halfway through
volume generation. It checks:

1. File System:
   - The trajectory CSV exists, is readable and is not empty
   - Its header names the SimTime, Lat, Lon and Alt columns
   - The output directory exists (or can be created) and is writable

2. Dependencies:
   - numpy and pyproj are installed
"""

import csv
import os
from pathlib import Path
from typing import List, Tuple

from .constants import CSV_COMMENT_PREFIX, CSV_REQUIRED_COLUMNS, LARGE_FILE_WARNING_MB
from .exceptions import ConfigurationError
from .logger import logger

__all__ = [
    "ConfigValidator",
    "validate_environment",
]


class ConfigValidator:
    """Validates runtime configuration and environment."""

    REQUIRED_PACKAGES = {
        "numpy": "Bounding box computation",
        "pyproj": "WGS84 geodesic calculations",
    }

    def __init__(self) -> None:
        """Initialize the validator with empty error and warning lists."""
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self, input_path: str, output_dir: str) -> Tuple[bool, List[str], List[str]]:
        """
        Run all validation checks.

        Args:
            input_path: Path to the trajectory CSV
            output_dir: Directory the U-plan JSON is written to

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        self._validate_input_path(input_path)
        self._validate_output_dir(output_dir)
        self._validate_dependencies()

        return len(self.errors) == 0, self.errors, self.warnings

    def _validate_input_path(self, input_path: str) -> None:
        """Validate the trajectory CSV."""
        path = Path(input_path)

        if not path.exists():
            self.errors.append(f"Input path does not exist: {input_path}")
            return

        if not path.is_file():
            self.errors.append(f"Input path is not a file: {input_path}")
            return

        if path.suffix.lower() != ".csv":
            self.warnings.append(f"Input file doesn't have .csv extension: {input_path}")

        size = path.stat().st_size
        if size == 0:
            self.errors.append(f"Input file is empty: {input_path}")
            return

        if size > LARGE_FILE_WARNING_MB * 1024 * 1024:
            self.warnings.append(
                f"Large input file ({size / 1024 / 1024:.1f} MB), "
                "consider a higher compression factor"
            )

        if not os.access(path, os.R_OK):
            self.errors.append(f"No read permission for: {input_path}")
            return

        self._validate_csv_header(path)

    def _validate_csv_header(self, path: Path) -> None:
        """Check the first content line names the trajectory columns."""
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                header_line = next(
                    (
                        line
                        for line in f
                        if line.strip() and not line.strip().startswith(CSV_COMMENT_PREFIX)
                    ),
                    "",
                )
        except UnicodeDecodeError:
            self.errors.append(f"Input file is not a text CSV: {path}")
            return
        except OSError as e:
            self.errors.append(f"Cannot read input file {path}: {e}")
            return

        columns = [name.strip() for name in next(csv.reader([header_line]), [])]
        missing = [col for col in CSV_REQUIRED_COLUMNS if col not in columns]
        if missing:
            self.errors.append(f"Input file is missing column(s) {', '.join(missing)}: {path}")

    def _validate_output_dir(self, output_dir: str) -> None:
        """Validate output directory."""
        path = Path(output_dir)

        if not path.exists():
            try:
                path.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created output directory: {output_dir}")
            except OSError as e:
                self.errors.append(f"Cannot create output directory {output_dir}: {e}")
                return

        if not path.is_dir():
            self.errors.append(f"Output path is not a directory: {output_dir}")
            return

        if not os.access(path, os.W_OK):
            self.errors.append(f"No write permission for: {output_dir}")

    def _validate_dependencies(self) -> None:
        """Check required Python packages are installed."""
        for package, purpose in self.REQUIRED_PACKAGES.items():
            try:
                __import__(package)
            except ImportError:
                self.errors.append(
                    f"Required package '{package}' not installed ({purpose}). "
                    f"Run: pip install {package}"
                )


def validate_environment(input_path: str, output_dir: str, fail_on_warnings: bool = False) -> None:
    """
    Validate environment and raise exception if invalid.

    Args:
        input_path: Trajectory CSV path
        output_dir: Output directory path
        fail_on_warnings: If True, treat warnings as errors

    Raises:
        ConfigurationError: If validation fails
    """
    validator = ConfigValidator()
    is_valid, errors, warnings = validator.validate_all(input_path, output_dir)

    for warning in warnings:
        logger.warning(warning)

    if not is_valid or (fail_on_warnings and warnings):
        error_msg = "Configuration validation failed:\n"
        if errors:
            error_msg += "\nErrors:\n" + "\n".join(f"  • {err}" for err in errors)
        if fail_on_warnings and warnings:
            error_msg += "\nWarnings (treated as errors):\n" + "\n".join(
                f"  • {warn}" for warn in warnings
            )
        raise ConfigurationError(error_msg)

    if not warnings:
        logger.info("✓ Configuration validation passed")
