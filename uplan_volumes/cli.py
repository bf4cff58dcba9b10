"""Command-line interface."""

import json
import math
import os
import sys
from dataclasses import replace
from pathlib import Path

from .config import load_config_from_env
from .config_validator import validate_environment
from .exceptions import UplanVolumesError
from .logger import logger, set_debug_mode
from .orchestrator import generate_volumes
from .statistics import calculate_volume_statistics
from .trajectory import read_trajectory_file
from .uplan import build_uplan, export_uplan
from .validation import validate_operation_volumes

# CLI flag -> (VolumeConfig field, value type)
CONFIG_FLAGS = {
    '--tse-h': ('tse_h', float),
    '--tse-v': ('tse_v', float),
    '--alpha-h': ('alpha_h', float),
    '--alpha-v': ('alpha_v', float),
    '--tbuf': ('tbuf', float),
    '--compression-factor': ('compression_factor', int),
}


def print_help():
    """Print comprehensive help message."""
    help_text = """
U-plan Volume Generator
=======================

Turn a simulated drone trajectory into the operation volumes of a U-plan
submission: one oriented 4D box per trajectory segment, sized from the
navigation error budgets and aligned with the direction of travel.

USAGE:
    uplan-volumes <trajectory.csv> --scheduled-at POSIX [OPTIONS]

ARGUMENTS:
    <trajectory.csv>          Simulator CSV with SimTime, Lat, Lon and Alt columns

OPTIONS:
    --scheduled-at SECONDS    Scheduled start of the flight (POSIX seconds, required)
    --ground-elevation M      Ground elevation subtracted from Alt (default: 0)
    --tse-h M                 Horizontal total system error (default: 15)
    --tse-v M                 Vertical total system error (default: 10)
    --alpha-h X               Horizontal dominance threshold (default: 7)
    --alpha-v X               Vertical dominance threshold (default: 1)
    --tbuf S                  Temporal buffer around each segment (default: 5)
    --compression-factor N    Keep every Nth waypoint (default: 20)
    --details FILE            JSON with operator, contact, UAS and flight details
    --output FILE             Output U-plan JSON (default: <trajectory>_uplan.json)
    --legacy                  Generate legacy axis-aligned square volumes
    --debug                   Enable debug output
    --help, -h                Show this help message

ENVIRONMENT:
    UPLAN_TSE_H, UPLAN_TSE_V, UPLAN_ALPHA_H, UPLAN_ALPHA_V, UPLAN_TBUF and
    UPLAN_COMPRESSION_FACTOR set defaults; command-line flags override them.
    UPLAN_LOG_LEVEL sets the log level (DEBUG, INFO, WARNING, ERROR).

EXAMPLES:
    # Volumes for a flight starting 2024-01-01 00:00:00 UTC
    uplan-volumes flight.csv --scheduled-at 1704067200

    # Altitudes in the CSV are AMSL, the takeoff site is at 612 m
    uplan-volumes flight.csv --scheduled-at 1704067200 --ground-elevation 612

    # Tighter error budget and operator details
    uplan-volumes flight.csv --scheduled-at 1704067200 --tse-h 5 --details operator.json

OUTPUT:
    Writes the U-plan JSON and prints a summary of the generated plan.
"""
    print(help_text)


def _load_details(path):
    """Load the U-plan details JSON given with --details."""
    try:
        with open(path, 'r') as f:
            details = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read details file {path}: {e}")
        sys.exit(1)

    if not isinstance(details, dict):
        logger.error(f"Details file {path} must contain a JSON object")
        sys.exit(1)
    return details


def _print_statistics(stats, output_path):
    print(f"\n{'=' * 50}")
    print(f"  Volumes:          {stats['num_volumes']}")
    print(f"  Waypoints:        {stats['num_waypoints']}")
    print(f"  Trajectory:       {stats['trajectory_length_m']:.0f} m")
    print(f"  Flight time:      {stats['flight_time_str']}")
    if stats['min_altitude_m'] is not None:
        print(f"  Altitude band:    {stats['min_altitude_m']:.1f} - {stats['max_altitude_m']:.1f} m AGL")
        print(f"  Time window:      {stats['time_begin']} - {stats['time_end']}")
    segment_counts = ", ".join(f"{name}: {count}" for name, count in stats['segment_types'].items())
    print(f"  Segments:         {segment_counts}")
    print(f"  Output:           {output_path}")
    print(f"{'=' * 50}\n")


def main():
    """Main CLI entry point."""
    # Check for help flag first
    if len(sys.argv) < 2 or '--help' in sys.argv or '-h' in sys.argv:
        print_help()
        sys.exit(0 if '--help' in sys.argv or '-h' in sys.argv else 1)

    # Parse arguments
    input_file = None
    output_file = None
    details_file = None
    scheduled_at = None
    ground_elevation = 0.0
    legacy = False
    overrides = {}

    i = 1
    while i < len(sys.argv):
        arg = sys.argv[i]

        if arg == '--debug':
            set_debug_mode(True)
            i += 1
        elif arg == '--legacy':
            legacy = True
            i += 1
        elif arg in ('--output', '--details', '--scheduled-at', '--ground-elevation') or arg in CONFIG_FLAGS:
            if i + 1 >= len(sys.argv):
                print(f"Error: {arg} requires a value")
                sys.exit(1)
            value = sys.argv[i + 1]
            i += 2

            if arg == '--output':
                output_file = value
            elif arg == '--details':
                details_file = value
            else:
                field, cast = CONFIG_FLAGS.get(arg, (None, float))
                try:
                    number = cast(value)
                except ValueError:
                    print(f"Error: {arg} expects a number, got '{value}'")
                    sys.exit(1)
                if not math.isfinite(number):
                    print(f"Error: {arg} expects a finite number, got '{value}'")
                    sys.exit(1)

                if arg == '--scheduled-at':
                    scheduled_at = number
                elif arg == '--ground-elevation':
                    ground_elevation = number
                else:
                    overrides[field] = number
        elif arg.startswith('--'):
            logger.error(f"Unknown option: {arg}")
            sys.exit(1)
        elif input_file is None:
            input_file = arg
            i += 1
        else:
            logger.error(f"Unexpected argument: {arg}")
            sys.exit(1)

    if input_file is None:
        print("Error: No trajectory CSV specified!")
        sys.exit(1)

    if scheduled_at is None:
        print("Error: --scheduled-at is required")
        sys.exit(1)

    if output_file is None:
        input_path = Path(input_file)
        output_file = str(input_path.parent / f"{input_path.stem}_uplan.json")

    print("\nU-plan Volume Generator")
    print(f"{'=' * 50}\n")

    try:
        validate_environment(input_file, os.path.dirname(os.path.abspath(output_file)))

        config = replace(load_config_from_env(), **overrides)
        details = _load_details(details_file) if details_file else None

        logger.info(f"Reading trajectory: {input_file}")
        csv_text = read_trajectory_file(input_file)
        result = generate_volumes(
            csv_text,
            scheduled_at,
            config,
            ground_elevation=ground_elevation,
            legacy=legacy,
            file_path=input_file,
        )

        for error in validate_operation_volumes(result.volumes):
            logger.warning(error)

        document = build_uplan(result, details)
        output_path, _ = export_uplan(document, output_file)
    except UplanVolumesError as e:
        logger.error(str(e))
        sys.exit(1)

    stats = calculate_volume_statistics(result.volumes, result.waypoints, config)
    _print_statistics(stats, output_path)

