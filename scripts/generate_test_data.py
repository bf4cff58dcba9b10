#!/usr/bin/env python3
"""
Generate test trajectory CSV files with random drone flights.

Creates simulator-style CSV files (SimTime, Lat, Lon, Alt plus attitude and
velocity columns) for short drone missions between sites around Valencia.
Useful for exercising the volume generator on realistic input sizes.

Features:
- Vertical takeoff, curved cruise leg and vertical landing, so every
  segment type (vertical, horizontal, mixed) appears
- Curved paths using quadratic Bezier curves
- Configurable sample rate and number of files
- Altitudes in meters AMSL on top of a per-site ground elevation
"""

import argparse
import math
import random
from pathlib import Path

# Site coordinates and ground elevation (m AMSL)
SITES = {
    "UPV": (39.4817, -0.3410, 10.0),
    "Albufera": (39.3329, -0.3528, 2.0),
    "Paterna": (39.5027, -0.4406, 60.0),
    "Manises": (39.4895, -0.4817, 62.0),
    "Sagunto": (39.6800, -0.2733, 45.0),
    "Cheste": (39.4800, -0.6840, 230.0),
}

HEADER = "SimTime,Lat,Lon,Alt,qw,qx,qy,qz,Vx,Vy,Vz"

METERS_PER_DEG_LAT = 111_320.0


def generate_trajectory(start, end, cruise_agl=60.0, speed=12.0, climb_rate=3.0, sample_rate=10):
    """Generate (time, lat, lon, alt_amsl) samples for one flight.

    The drone climbs vertically to ``cruise_agl``, flies a curved leg at
    ``speed`` m/s and descends vertically at the destination.
    """
    lat1, lon1, ground = start
    lat2, lon2, _ = end
    dt = 1.0 / sample_rate

    # Curve control point offset perpendicular to the leg (20-40%)
    offset = random.uniform(0.2, 0.4) * random.choice([-1, 1])
    mid_lat = (lat1 + lat2) / 2 - (lon2 - lon1) * offset
    mid_lon = (lon1 + lon2) / 2 + (lat2 - lat1) * offset

    dlat_m = (lat2 - lat1) * METERS_PER_DEG_LAT
    dlon_m = (lon2 - lon1) * METERS_PER_DEG_LAT * math.cos(math.radians(lat1))
    leg_length = math.hypot(dlat_m, dlon_m) * 1.2

    samples = []
    t = 0.0

    # Climb
    climb_time = cruise_agl / climb_rate
    while t < climb_time:
        samples.append((t, lat1, lon1, ground + climb_rate * t))
        t += dt

    # Cruise
    cruise_time = leg_length / speed
    start_cruise = t
    while t - start_cruise < cruise_time:
        s = (t - start_cruise) / cruise_time
        lat = (1 - s) ** 2 * lat1 + 2 * (1 - s) * s * mid_lat + s**2 * lat2
        lon = (1 - s) ** 2 * lon1 + 2 * (1 - s) * s * mid_lon + s**2 * lon2
        samples.append((t, lat, lon, ground + cruise_agl + random.uniform(-0.5, 0.5)))
        t += dt

    # Descend
    start_descent = t
    while t - start_descent < climb_time:
        samples.append((t, lat2, lon2, ground + cruise_agl - climb_rate * (t - start_descent)))
        t += dt
    samples.append((t, lat2, lon2, ground))

    return samples


def write_trajectory_csv(samples, filepath, sample_rate=10):
    """Write samples in the simulator's CSV format."""
    lines = [HEADER]
    previous = samples[0]
    for sample in samples:
        t, lat, lon, alt = sample
        vz = (alt - previous[3]) * sample_rate
        lines.append(f"{t:.2f},{lat:.8f},{lon:.8f},{alt:.3f},1,0,0,0,0,0,{vz:.3f}")
        previous = sample

    with open(filepath, "w") as f:
        f.write("\n".join(lines) + "\n")


def main():
    """Generate test trajectory files."""
    parser = argparse.ArgumentParser(
        description="Generate simulator-style drone trajectory CSV files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 10 files (default)
  %(prog)s

  # Generate 100 files at 50 Hz to a custom directory
  %(prog)s 100 --rate 50 --output custom_test_data

  # Build volumes for one of them
  uplan-volumes trajectories_10/flight_0000_UPV_Paterna.csv --scheduled-at 1704067200
        """,
    )
    parser.add_argument(
        "count",
        type=int,
        nargs="?",
        default=10,
        help="Number of trajectory files to generate (default: 10)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output directory (default: trajectories_<count>)",
    )
    parser.add_argument(
        "--rate",
        type=int,
        default=10,
        help="Samples per second (default: 10)",
    )
    args = parser.parse_args()

    output_dir = args.output or f"trajectories_{args.count}"
    Path(output_dir).mkdir(exist_ok=True)

    print(f"Generating {args.count:,} trajectory files in {output_dir}/")

    site_names = list(SITES.keys())
    for i in range(args.count):
        origin = random.choice(site_names)
        destination = random.choice([s for s in site_names if s != origin])

        samples = generate_trajectory(
            SITES[origin],
            SITES[destination],
            cruise_agl=random.choice([40.0, 60.0, 90.0, 120.0]),
            speed=random.uniform(8.0, 18.0),
            sample_rate=args.rate,
        )
        filepath = Path(output_dir) / f"flight_{i:04d}_{origin}_{destination}.csv"
        write_trajectory_csv(samples, filepath, sample_rate=args.rate)

    print(f"\n✓ Successfully generated {args.count:,} trajectory files in {output_dir}/")
    print("\nGround elevations (use with --ground-elevation):")
    for name, (_, _, ground) in SITES.items():
        print(f"  {name:10s} {ground:6.1f} m")


if __name__ == "__main__":
    main()
