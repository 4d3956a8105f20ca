#!/usr/bin/env python3
# store-dispatch/main.py
"""
Command-Line Interface for the Store Delivery Dispatch Simulation.

This script runs a scenario without the dashboard overhead and prints the
dispatch results.

Usage:
    python main.py                          # Run with defaults
    python main.py --dataset no_freezer     # Run specific dataset
    python main.py --traffic                # Start with increased traffic
    python main.py --seed 7                 # Reproducible vehicle distances
    python main.py --verbose                # Show detailed output

Exit Codes:
    0: Success
    1: Data loading error
    2: Simulation error
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Dict, Optional, Sequence

# Ensure store_dispatch package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from store_dispatch import config
from store_dispatch.errors import DispatchError
from store_dispatch.simulation import Simulation, SimulationResults


# Available datasets
DATASETS: Dict[str, Dict[str, str]] = {
    "downtown": {
        "path": os.path.join(config.DATA_DIR, "downtown"),
        "description": "3 stores, 4 vehicles, 10 orders incl. frozen and birthday orders",
    },
    "no_freezer": {
        "path": os.path.join(config.DATA_DIR, "no_freezer"),
        "description": "Frozen orders with no freezer vehicle in the fleet",
    },
}


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  STORE DISPATCH - Delivery Simulation")
    print("  Greedy Nearest-Vehicle Dispatch")
    print("=" * 60 + "\n")


def print_results_table(results: SimulationResults) -> None:
    """
    Print the KPI summary followed by one row per assignment.

    Args:
        results: Results of a finished simulation
    """
    print("\n" + "=" * 60)
    print("  FINAL RESULTS")
    print("=" * 60 + "\n")

    for metric, value in results.to_dict().items():
        print(f"| {metric:<25} | {str(value):^20} |")

    if results.assignments:
        print("\n" + "-" * 60)
        print(f"| {'Round':^5} | {'Order':^6} | {'Store':^5} | {'Vehicle':^8} | {'Dist':^4} | {'Frozen':^6} |")
        print("-" * 60)
        for row in results.assignments:
            frozen = "yes" if row["keep_frozen"] else ""
            print(f"| {row['round']:^5} | {row['order_number']:^6} | {row['store']:^5} | "
                  f"{row['vin']:^8} | {row['distance']:^4} | {frozen:^6} |")

    if results.stranded_orders:
        stranded = ", ".join(f"#{n}" for n in results.stranded_orders)
        print(f"\n  WARN: No eligible vehicle for {stranded}")

    print("=" * 60 + "\n")


def load_data_safe(dataset_name: str) -> Optional[tuple]:
    """
    Load data with graceful error handling.

    Args:
        dataset_name: Key from DATASETS dictionary

    Returns:
        Tuple of (stores, customers, vehicles, orders) or None if error
    """
    if dataset_name not in DATASETS:
        print(f"ERROR: Unknown dataset '{dataset_name}'")
        print(f"Available datasets: {', '.join(DATASETS.keys())}")
        return None

    data_dir = DATASETS[dataset_name]["path"]
    try:
        data = Simulation.load_data(data_dir)
    except FileNotFoundError as e:
        print(f"ERROR: {e}")
        print("Please ensure the data/ directory contains the required CSV files.")
        return None
    except ValueError as e:
        print(f"ERROR: Failed to load data: {e}")
        return None

    stores, customers, vehicles, orders = data
    print(f"Loaded {len(stores)} stores, {len(vehicles)} vehicles and "
          f"{len(orders)} orders from '{dataset_name}' dataset")
    return data


def run_simulation_safe(data: tuple, traffic: bool, seed: Optional[int], verbose: bool) -> Optional[SimulationResults]:
    """
    Run simulation with error handling.

    Returns:
        Results or None if error
    """
    stores, customers, vehicles, orders = data
    try:
        sim = Simulation(stores, customers, vehicles, orders, increased_traffic=traffic, seed=seed)
        return sim.run(verbose=verbose)
    except DispatchError as e:
        print(f"ERROR: Simulation failed: {e}")
        return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="Store Delivery Dispatch Simulation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Default: downtown dataset
  python main.py --dataset no_freezer     # Stranded frozen orders
  python main.py --traffic --seed 42      # Increased traffic, fixed distances
  python main.py --list-datasets          # Show available datasets
        """
    )

    parser.add_argument(
        "--dataset", "-d",
        type=str,
        default=config.DEFAULT_DATASET,
        help=f"Dataset to use (default: {config.DEFAULT_DATASET}). Options: {', '.join(DATASETS.keys())}"
    )

    parser.add_argument(
        "--traffic", "-t",
        action="store_true",
        help="Simulate increased traffic (frozen orders always need a freezer)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random vehicle-to-store distances"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed simulation progress"
    )

    parser.add_argument(
        "--list-datasets",
        action="store_true",
        help="List available datasets and exit"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # List datasets mode
    if args.list_datasets:
        print("\nAvailable Datasets:")
        print("-" * 50)
        for name, info in DATASETS.items():
            exists = "OK" if os.path.isdir(info["path"]) else "MISSING"
            print(f"  {name:15} [{exists}] - {info['description']}")
        return 0

    print_header()

    data = load_data_safe(args.dataset)
    if data is None:
        return 1

    results = run_simulation_safe(data, args.traffic, args.seed, args.verbose)
    if results is None:
        return 2

    print_results_table(results)

    return 0


if __name__ == "__main__":
    sys.exit(main())
