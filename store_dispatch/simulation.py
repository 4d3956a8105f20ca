# store-dispatch/store_dispatch/simulation.py
"""
Simulation Engine for the Store Delivery Dispatch Simulation.

This module wires stores, customers, vehicles and orders to a single
Dispatcher and plays out delivery rounds. Key responsibilities:
- Scenario loading from CSV files
- Registration of stores and vehicles, order intake
- Round-based dispatch / delivery cycle
- KPI calculation and reporting

Each round:
1. The dispatcher assigns every order it can
2. Every loaded vehicle delivers its queue and reports back
3. Stop once all orders are scheduled, or when a round frees no vehicle
"""

from __future__ import annotations

import csv
import logging
import os
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from . import config, utils
from .dispatch import Dispatcher
from .errors import DispatchLimitExceeded, NoEligibleVehicleError
from .models import BirthdayOrder, Customer, Order, Product, Store, Vehicle

logger = logging.getLogger(__name__)


@dataclass
class SimulationResults:
    """
    Container for simulation results and KPIs.

    All the metrics needed to evaluate a dispatch run.
    """
    orders_delivered: int
    total_orders: int
    stranded_orders: List[int]
    rounds: int
    total_distance: int
    frozen_orders: int
    vehicles_used: int
    total_vehicles: int
    increased_traffic: bool

    # Row data for tables
    assignments: List[Dict[str, Any]] = field(default_factory=list)
    vehicle_summary: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def avg_distance_per_order(self) -> float:
        if not self.assignments:
            return 0.0
        return self.total_distance / len(self.assignments)

    @property
    def delivery_success_rate_pct(self) -> float:
        if self.total_orders == 0:
            return 0.0
        return self.orders_delivered / self.total_orders * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "Orders Delivered": f"{self.orders_delivered}/{self.total_orders}",
            "Delivery Success Rate": f"{self.delivery_success_rate_pct:.1f}%",
            "Stranded Orders": len(self.stranded_orders),
            "Delivery Rounds": self.rounds,
            "Total Distance": f"{self.total_distance} units",
            "Avg Distance/Order": f"{self.avg_distance_per_order:.2f} units",
            "Frozen Orders": self.frozen_orders,
            "Vehicles Used": f"{self.vehicles_used}/{self.total_vehicles}",
            "Traffic": "Increased" if self.increased_traffic else "Normal",
        }


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y")


def _parse_products(value: str) -> List[Product]:
    """Parse 'Milk;Ice Cream*' into products; a trailing marker means frozen."""
    products: List[Product] = []
    for name in value.split(";"):
        name = name.strip()
        if not name:
            continue
        keep_frozen = name.endswith(config.FROZEN_PRODUCT_MARKER)
        if keep_frozen:
            name = name[: -len(config.FROZEN_PRODUCT_MARKER)].strip()
        products.append(Product(name=name, keep_frozen=keep_frozen))
    return products


class Simulation:
    """
    Round-based simulation of store deliveries.

    Attributes:
        stores: All stores in the scenario
        customers: All customers in the scenario
        vehicles: The delivery fleet
        orders: Orders to submit, in submission order
        dispatcher: The one dispatcher every collaborator talks to
        assignments: One row per (order, vehicle) assignment made
    """

    def __init__(
        self,
        stores: List[Store],
        customers: List[Customer],
        vehicles: List[Vehicle],
        orders: List[Order],
        increased_traffic: bool = False,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the simulation and register everything with the dispatcher.

        Args:
            stores: Stores to register
            customers: Customers (their distance tables must cover every store)
            vehicles: Vehicles to register; each adopts a random distance table
            orders: Orders to submit
            increased_traffic: Start with the traffic flag set
            seed: Seed for vehicle distances; None draws fresh ones every run
        """
        self.stores: List[Store] = stores
        self.customers: List[Customer] = customers
        self.vehicles: List[Vehicle] = vehicles
        self.orders: List[Order] = orders

        rng = random.Random(seed) if seed is not None else None
        self.dispatcher = Dispatcher(rng=rng)

        self.rounds_run: int = 0
        self.assignments: List[Dict[str, Any]] = []

        for store in self.stores:
            self.dispatcher.register_store(store)
        # Stores first, so every vehicle gets a distance to each of them
        for vehicle in self.vehicles:
            vehicle.register_with(self.dispatcher)

        self.dispatcher.set_increased_traffic(increased_traffic)

        for order in self.orders:
            if isinstance(order, BirthdayOrder):
                self.dispatcher.place_birthday_order(order)
            else:
                self.dispatcher.receive_order(order)

    @staticmethod
    def load_data(data_dir: str) -> Tuple[List[Store], List[Customer], List[Vehicle], List[Order]]:
        """
        Load a scenario from a directory of CSV files.

        Expected files: stores.csv, customers.csv, customer_distances.csv,
        vehicles.csv, orders.csv.

        Args:
            data_dir: Directory holding the scenario files

        Returns:
            Tuple of (stores, customers, vehicles, orders) lists

        Raises:
            FileNotFoundError: If a file doesn't exist
            ValueError: If file format is invalid
        """
        paths = {
            name: os.path.join(data_dir, f"{name}.csv")
            for name in ("stores", "customers", "customer_distances", "vehicles", "orders")
        }
        for path in paths.values():
            if not os.path.exists(path):
                raise FileNotFoundError(f"Scenario file not found: {path}")

        stores: Dict[str, Store] = {}
        with open(paths["stores"], 'r', newline='') as f:
            for row in csv.DictReader(f):
                try:
                    store = Store(store_id=row['store_id'], name=row.get('name', ''))
                except KeyError as e:
                    raise ValueError(f"Invalid store data in {paths['stores']}: {e}")
                stores[store.store_id] = store

        customers: Dict[str, Customer] = {}
        with open(paths["customers"], 'r', newline='') as f:
            for row in csv.DictReader(f):
                try:
                    customer = Customer(customer_id=row['customer_id'], name=row.get('name', ''))
                except KeyError as e:
                    raise ValueError(f"Invalid customer data in {paths['customers']}: {e}")
                customers[customer.customer_id] = customer

        with open(paths["customer_distances"], 'r', newline='') as f:
            for row in csv.DictReader(f):
                try:
                    customer = customers[row['customer_id']]
                    store = stores[row['store_id']]
                    customer.distances_from_each_store[store] = int(row['distance'])
                except (KeyError, ValueError) as e:
                    raise ValueError(f"Invalid distance data in {paths['customer_distances']}: {e}")

        vehicles: List[Vehicle] = []
        with open(paths["vehicles"], 'r', newline='') as f:
            for row in csv.DictReader(f):
                try:
                    capacity = row.get('capacity') or config.DEFAULT_VEHICLE_CAPACITY
                    available = row.get('available') or "true"
                    vehicles.append(Vehicle(
                        vin=row['vin'],
                        vehicle_type=row.get('vehicle_type') or "van",
                        can_transport_frozen=_parse_bool(row['can_transport_frozen']),
                        capacity=int(capacity),
                        available=_parse_bool(available),
                    ))
                except (KeyError, ValueError) as e:
                    raise ValueError(f"Invalid vehicle data in {paths['vehicles']}: {e}")

        orders: List[Order] = []
        with open(paths["orders"], 'r', newline='') as f:
            for row in csv.DictReader(f):
                try:
                    order_kwargs: Dict[str, Any] = dict(
                        order_number=int(row['order_number']),
                        products=_parse_products(row['products']),
                        customer=customers[row['customer_id']],
                        store=stores[row['store_id']],
                    )
                    card_message = (row.get('birthday_card') or "").strip()
                    if card_message:
                        orders.append(BirthdayOrder.from_products(card_message=card_message, **order_kwargs))
                    else:
                        orders.append(Order.from_products(**order_kwargs))
                except (KeyError, ValueError) as e:
                    raise ValueError(f"Invalid order data in {paths['orders']}: {e}")

        return list(stores.values()), list(customers.values()), vehicles, orders

    def _record_assignments(self, round_number: int, assigned: List[Tuple[Order, Vehicle]]) -> None:
        """Keep one row per assignment for the results tables."""
        for order, vehicle in assigned:
            distance = next(d for o, d in vehicle.assigned_orders if o == order)
            self.assignments.append({
                "round": round_number,
                "order_number": order.order_number,
                "store": order.store.store_id,
                "customer": order.customer.customer_id,
                "vin": vehicle.vin,
                "vehicle_type": vehicle.vehicle_type,
                "distance": distance,
                "keep_frozen": order.keep_frozen,
                "products": str(order),
            })

    def _complete_deliveries(self) -> List[Order]:
        """Have every vehicle drop off its queue."""
        delivered: List[Order] = []
        for vehicle in self.vehicles:
            delivered.extend(vehicle.complete_deliveries())
        return delivered

    def tick(self, verbose: bool = True) -> Tuple[int, int]:
        """
        Execute a single dispatch / delivery round.

        Args:
            verbose: Whether to print progress

        Returns:
            Tuple of (orders_assigned, orders_delivered) in this round
        """
        self.rounds_run += 1

        try:
            assigned = self.dispatcher.dispatch_vehicles()
        except NoEligibleVehicleError as e:
            assigned = e.assignments
            logger.info("Round %d left %d order(s) waiting", self.rounds_run, len(e.orders))
        except DispatchLimitExceeded as e:
            assigned = e.assignments
            logger.warning("Round %d: %s", self.rounds_run, e)
        self._record_assignments(self.rounds_run, assigned)

        delivered = self._complete_deliveries()

        if verbose:
            print(f"[Round {self.rounds_run}] "
                  f"Assigned: {len(assigned)}, "
                  f"Delivered: {len(delivered)}, "
                  f"Waiting: {len(self.dispatcher.orders_not_scheduled)}")

        return len(assigned), len(delivered)

    def run(self, verbose: bool = True) -> SimulationResults:
        """
        Run rounds until every order is delivered or no progress is possible.

        Args:
            verbose: Whether to print progress

        Returns:
            SimulationResults with KPIs and assignment rows
        """
        if verbose:
            print("======== Starting Simulation ========")

        while self.rounds_run < config.MAX_DELIVERY_ROUNDS:
            _, delivered = self.tick(verbose)
            if not self.dispatcher.orders_not_scheduled:
                break
            if delivered == 0:
                # No vehicle was freed, so the next round would strand the same orders
                logger.warning(
                    "Giving up on orders %s",
                    utils.format_order_numbers(self.dispatcher.orders_not_scheduled),
                )
                break

        if verbose:
            print("Simulation complete. Calculating results...")

        return self.get_results()

    def get_results(self) -> SimulationResults:
        """Calculate KPI results from the dispatcher and fleet state."""
        total_orders = len({o.order_number for o in self.orders})
        used = {row["vin"] for row in self.assignments}

        vehicle_summary = [
            {
                "vin": v.vin,
                "vehicle_type": v.vehicle_type,
                "can_transport_frozen": v.can_transport_frozen,
                "available": v.available,
                "deliveries": len(v.deliveries),
                "total_distance": v.total_distance,
            }
            for v in self.vehicles
        ]

        return SimulationResults(
            orders_delivered=len(self.dispatcher.orders_delivery_complete),
            total_orders=total_orders,
            stranded_orders=[o.order_number for o in self.dispatcher.orders_not_scheduled],
            rounds=self.rounds_run,
            total_distance=sum(row["distance"] for row in self.assignments),
            frozen_orders=sum(1 for row in self.assignments if row["keep_frozen"]),
            vehicles_used=len(used),
            total_vehicles=len(self.vehicles),
            increased_traffic=self.dispatcher.increased_traffic,
            assignments=list(self.assignments),
            vehicle_summary=vehicle_summary,
        )
