# store-dispatch/store_dispatch/utils.py
"""
Utility functions for the Store Delivery Dispatch Simulation.

Provides the distance heuristic the dispatcher ranks vehicles by, random
distance seeding for newly registered vehicles, and small formatting helpers.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from . import config
from .errors import DistanceLookupError
from .models import Customer, DistanceTable, Order, Store, Vehicle


def get_total_distance(store: Store, customer: Customer, vehicle: Vehicle) -> int:
    """
    Approximate how far a vehicle travels to deliver an order.

    This is the rough heuristic the dispatcher minimises: the customer's
    distance to the store plus the vehicle's distance to the store.

    Args:
        store: The store the order is picked up from
        customer: The customer receiving the order
        vehicle: The candidate delivery vehicle

    Returns:
        Total distance in abstract units

    Raises:
        DistanceLookupError: If either distance table has no entry for the store

    Example:
        >>> get_total_distance(store, customer, vehicle)  # customer 5, vehicle 3
        8
    """
    try:
        customer_to_store = customer.distances_from_each_store[store]
    except KeyError:
        raise DistanceLookupError(
            f"Customer {customer.customer_id} has no distance to store {store.store_id}"
        ) from None
    try:
        vehicle_to_store = vehicle.distances_from_each_store[store]
    except KeyError:
        raise DistanceLookupError(
            f"Vehicle {vehicle.vin} has no distance to store {store.store_id}"
        ) from None
    return customer_to_store + vehicle_to_store


def random_distance_table(
    stores: Iterable[Store],
    rng: Optional[random.Random] = None,
    max_distance: int = config.MAX_DISTANCE_FROM_STORE,
) -> DistanceTable:
    """
    Draw an independent random distance to every store.

    Args:
        stores: Stores to assign distances for
        rng: Random source (module-level ``random`` if omitted)
        max_distance: Exclusive upper bound of the uniform draw

    Returns:
        A fresh table with one integer in [0, max_distance) per store
    """
    draw = rng.randrange if rng is not None else random.randrange
    return {store: draw(max_distance) for store in stores}


def format_order_numbers(orders: Iterable[Order]) -> str:
    """
    Format order numbers as a compact comma-separated list.

    Example:
        >>> format_order_numbers(dispatcher.orders_in_transit)
        '#3, #7'
    """
    numbers = [f"#{o.order_number}" for o in orders]
    return ", ".join(numbers) if numbers else "-"
