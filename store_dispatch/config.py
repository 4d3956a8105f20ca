# store-dispatch/store_dispatch/config.py
"""
Configuration parameters for the Store Delivery Dispatch Simulation.

This module centralizes all tunable parameters, making it easy to:
- Adjust the dispatcher's distance heuristic
- Bound the assignment loop
- Configure the delivery simulation and its bundled datasets

All parameters are documented with their purpose and typical value ranges.
"""

import os
from typing import Final

# =============================================================================
# DISTANCE PARAMETERS
# =============================================================================

MAX_DISTANCE_FROM_STORE: Final[int] = 20
"""
Upper bound (exclusive) for randomly assigned vehicle-to-store distances.
Distances are abstract units drawn uniformly from [0, MAX_DISTANCE_FROM_STORE).
"""

FROZEN_DISTANCE_THRESHOLD: Final[int] = 2
"""
Total distance above which a frozen order must ride in a freezer vehicle.
Under increased traffic the freezer is required regardless of distance.
"""

# =============================================================================
# DISPATCH PARAMETERS
# =============================================================================

MAX_DISPATCH_PASSES: Final[int] = 10_000
"""
Hard limit on passes over the not-scheduled orders in one dispatch call.
Each successful pass schedules exactly one order, so this only trips on
runaway input.
"""

DEFAULT_VEHICLE_CAPACITY: Final[int] = 3
"""Orders a vehicle can carry before it reports itself unavailable."""

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

MAX_DELIVERY_ROUNDS: Final[int] = 100
"""Maximum dispatch/deliver rounds before the simulation gives up."""

DATA_DIR: Final[str] = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
"""Directory holding the bundled scenario datasets (one sub-directory each)."""

DEFAULT_DATASET: Final[str] = "downtown"
"""Dataset used when none is requested."""

FROZEN_PRODUCT_MARKER: Final[str] = "*"
"""Suffix marking a frozen product in the orders CSV product list."""

# =============================================================================
# MESSAGES
# =============================================================================

ORDER_SCHEDULED_MESSAGE: Final[str] = (
    "Dear Customer, Order {order_number} has been scheduled for delivery.  "
    "Thank you for doing business with us!"
)
"""Text sent to a customer when their order is handed to a vehicle."""

ORDER_DELIVERED_MESSAGE: Final[str] = "Vehicle {vin} delivered order {order_number} ({distance} units)."
"""Status text a vehicle reports back to the dispatcher after a drop-off."""
