#!/usr/bin/env python3
"""
U-plan Volume Generator
Builds the operation volumes of a drone flight plan from a trajectory CSV.

Usage:
    python uplan-volumes.py flight.csv --scheduled-at 1704067200
    python uplan-volumes.py flight.csv --scheduled-at 1704067200 --ground-elevation 612
    python uplan-volumes.py --debug flight.csv --scheduled-at 1704067200  # Debug mode
"""

from uplan_volumes.cli import main


if __name__ == "__main__":
    main()
