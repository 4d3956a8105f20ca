# store-dispatch/store_dispatch/models.py
"""
Core domain models for the Store Delivery Dispatch Simulation.

This module defines the fundamental data structures used throughout the simulation:
- Store: A shop that produces orders
- Product: A single item on an order, possibly requiring a freezer
- Customer: The recipient of an order, with a distance to every store
- Order / BirthdayOrder: A delivery request from a store to a customer
- Vehicle: A delivery vehicle the dispatcher can hand orders to
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from . import config

if TYPE_CHECKING:
    from .dispatch import Dispatcher

logger = logging.getLogger(__name__)


class OrderStatus(Enum):
    """Lifecycle states for an order tracked by the dispatcher."""
    NOT_SCHEDULED = "NOT_SCHEDULED"          # Received, waiting for a vehicle
    IN_TRANSIT = "IN_TRANSIT"                # Handed to a vehicle
    DELIVERY_COMPLETE = "DELIVERY_COMPLETE"  # Vehicle acknowledged the drop-off


@dataclass(frozen=True)
class Store:
    """
    A store that produces orders.

    Stores are hashable so they can key a distance table.
    """
    store_id: str
    name: str = ""

    def __repr__(self) -> str:
        return f"Store({self.store_id})"


# Maps each known store to an abstract integer distance
DistanceTable = Dict[Store, int]


@dataclass(frozen=True)
class Product:
    """A product on an order."""
    name: str
    price: float = 0.0
    keep_frozen: bool = False

    def __str__(self) -> str:
        return f"{self.name} (frozen)" if self.keep_frozen else self.name


@dataclass(eq=False)
class Customer:
    """
    Represents a customer receiving deliveries.

    Attributes:
        customer_id: Unique identifier
        name: Display name
        distances_from_each_store: Distance from this customer to every store
        messages: Notifications received so far, oldest first
    """
    customer_id: str
    name: str = ""
    distances_from_each_store: DistanceTable = field(default_factory=dict)
    messages: List[str] = field(default_factory=list)

    def receive_message(self, message: str) -> None:
        self.messages.append(message)
        logger.info("Customer %s notified: %s", self.customer_id, message)

    def __repr__(self) -> str:
        return f"Customer({self.customer_id})"


@dataclass(frozen=True, eq=False)
class Order:
    """
    Represents a delivery order from a store to a customer.

    Orders are immutable once created. Two orders are the same order when
    they share an order number, whatever else they carry.

    Attributes:
        order_number: Unique identifier
        customer: Who receives the delivery
        store: Where the order is picked up
        products: Products on the order, in the order they were added
        keep_frozen: Whether the goods need temperature-controlled transport
    """
    order_number: int
    customer: Customer
    store: Store
    products: Tuple[Product, ...] = ()
    keep_frozen: bool = False

    @classmethod
    def from_products(
        cls,
        order_number: int,
        products: Iterable[Product],
        customer: Customer,
        store: Store,
        keep_frozen: Optional[bool] = None,
        **kwargs,
    ) -> Order:
        """
        Build an order, deriving the frozen flag from its products.

        If ``keep_frozen`` is not given, the order must be kept frozen when
        any of its products must.
        """
        products = tuple(products)
        if keep_frozen is None:
            keep_frozen = any(p.keep_frozen for p in products)
        return cls(
            order_number=order_number,
            customer=customer,
            store=store,
            products=products,
            keep_frozen=keep_frozen,
            **kwargs,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self.order_number == other.order_number

    def __hash__(self) -> int:
        return hash(self.order_number)

    def __str__(self) -> str:
        return ", ".join(str(p) for p in self.products)

    def __repr__(self) -> str:
        frozen = ", frozen" if self.keep_frozen else ""
        return f"Order({self.order_number}{frozen})"


@dataclass(frozen=True, eq=False, repr=False)
class BirthdayOrder(Order):
    """An order that ships with a birthday card. Compares and prints like any other order."""
    card_message: str = "Happy Birthday!"

    def __str__(self) -> str:
        return f"{super().__str__()} + card: {self.card_message!r}"


@dataclass(eq=False)
class Vehicle:
    """
    Represents a delivery vehicle in the fleet.

    Attributes:
        vin: Vehicle identification number
        vehicle_type: Free-form type label, e.g. 'van', 'truck', 'bike'
        can_transport_frozen: Whether the vehicle has a freezer (fixed)
        capacity: Orders it carries before reporting itself unavailable

    Dynamic State:
        available: Whether the dispatcher may hand it new orders
        distances_from_each_store: Distance table adopted at registration
        assigned_orders: (order, distance) pairs waiting to be delivered
        deliveries: (order, distance) pairs already delivered
        dispatcher: The dispatcher this vehicle reports to
    """
    vin: str
    vehicle_type: str = "van"
    can_transport_frozen: bool = False
    capacity: int = config.DEFAULT_VEHICLE_CAPACITY

    # Dynamic state
    available: bool = True
    distances_from_each_store: DistanceTable = field(default_factory=dict)
    assigned_orders: List[Tuple[Order, int]] = field(default_factory=list)
    deliveries: List[Tuple[Order, int]] = field(default_factory=list)
    dispatcher: Optional[Dispatcher] = field(default=None, repr=False)

    def register_with(self, dispatcher: Dispatcher) -> None:
        """Register with a dispatcher and adopt the distance table it hands back."""
        self.dispatcher = dispatcher
        self.distances_from_each_store = dispatcher.register_vehicle(self)

    def deliver_order(self, order: Order, distance: int) -> None:
        """
        Accept an order assignment.

        The order is queued for delivery. Once the queue reaches capacity the
        vehicle marks itself unavailable until it completes its deliveries.
        """
        self.assigned_orders.append((order, distance))
        logger.info(
            "Vehicle %s accepted order %d (%d units, %d/%d loaded)",
            self.vin, order.order_number, distance, len(self.assigned_orders), self.capacity,
        )
        if len(self.assigned_orders) >= self.capacity:
            self.available = False

    def complete_deliveries(self) -> List[Order]:
        """
        Drop off every queued order and report each one to the dispatcher.

        Returns:
            The orders delivered, in the order they were assigned

        Raises:
            RuntimeError: If the vehicle has queued orders but no dispatcher
        """
        if not self.assigned_orders:
            return []
        if self.dispatcher is None:
            raise RuntimeError(f"Vehicle {self.vin} is not registered with a dispatcher")

        delivered: List[Order] = []
        for order, distance in self.assigned_orders:
            self.dispatcher.remove_order_from_in_transit_orders(order)
            self.dispatcher.display_message_from_vehicle(
                config.ORDER_DELIVERED_MESSAGE.format(
                    vin=self.vin, order_number=order.order_number, distance=distance
                )
            )
            self.deliveries.append((order, distance))
            delivered.append(order)

        self.assigned_orders = []
        self.available = True
        return delivered

    @property
    def total_distance(self) -> int:
        """Sum of distances over delivered and queued orders."""
        return sum(d for _, d in self.deliveries) + sum(d for _, d in self.assigned_orders)

    def __repr__(self) -> str:
        return f"Vehicle({self.vin}, available={self.available}, load={len(self.assigned_orders)})"
