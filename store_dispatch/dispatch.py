# store-dispatch/store_dispatch/dispatch.py
"""
Store Dispatcher for the Store Delivery Dispatch Simulation.

The dispatcher is the one coordinator every store and vehicle talks to:
- Stores and vehicles register (and deregister) with it
- Stores submit orders to it
- It assigns each unscheduled order to the available vehicle with the
  smallest total travel distance, honouring the frozen-goods rule
- Vehicles report back when an order has been delivered

Order lifecycle:
    NOT_SCHEDULED -> IN_TRANSIT -> DELIVERY_COMPLETE

One Dispatcher is built per running system and handed to its collaborators
by reference; there is no module-level instance.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from . import config, utils
from .errors import DispatchLimitExceeded, DistanceLookupError, NoEligibleVehicleError
from .models import DistanceTable, Order, OrderStatus, Store, Vehicle

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Tracks stores, vehicles and orders, and matches orders to vehicles.

    Every order the dispatcher knows about sits in exactly one of three
    collections: not scheduled, in transit, or delivery complete. Orders are
    compared by order number.

    Collections are exposed as read-only tuples; mutate them only through
    the operations below.

    Args:
        rng: Random source for initial vehicle distances. Defaults to an
            unseeded ``random.Random``.
    """

    # Exposed on the class for callers that only hold a dispatcher
    get_total_distance = staticmethod(utils.get_total_distance)

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._registered_vehicles: List[Vehicle] = []
        self._registered_stores: List[Store] = []
        self._orders_not_scheduled: List[Order] = []
        self._orders_in_transit: List[Order] = []
        self._orders_delivery_complete: List[Order] = []
        self._increased_traffic: bool = False
        self._vehicle_messages: List[str] = []
        self._rng: random.Random = rng if rng is not None else random.Random()

    # =========================================================================
    # READ-ONLY VIEWS
    # =========================================================================

    @property
    def orders_not_scheduled(self) -> Tuple[Order, ...]:
        return tuple(self._orders_not_scheduled)

    @property
    def orders_in_transit(self) -> Tuple[Order, ...]:
        return tuple(self._orders_in_transit)

    @property
    def orders_delivery_complete(self) -> Tuple[Order, ...]:
        return tuple(self._orders_delivery_complete)

    @property
    def registered_vehicles(self) -> Tuple[Vehicle, ...]:
        return tuple(self._registered_vehicles)

    @property
    def registered_stores(self) -> Tuple[Store, ...]:
        return tuple(self._registered_stores)

    @property
    def increased_traffic(self) -> bool:
        return self._increased_traffic

    @property
    def vehicle_messages(self) -> Tuple[str, ...]:
        """Status messages reported by vehicles, oldest first."""
        return tuple(self._vehicle_messages)

    def status_of(self, order: Order) -> Optional[OrderStatus]:
        """Return the lifecycle state of an order, or None if it is not tracked."""
        if order in self._orders_in_transit:
            return OrderStatus.IN_TRANSIT
        if order in self._orders_delivery_complete:
            return OrderStatus.DELIVERY_COMPLETE
        if order in self._orders_not_scheduled:
            return OrderStatus.NOT_SCHEDULED
        return None

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def register_vehicle(self, vehicle: Vehicle) -> DistanceTable:
        """
        Register a vehicle and hand it a random distance to every store.

        Registering an already-registered vehicle leaves the fleet unchanged
        but still returns a freshly drawn table.

        Returns:
            Mapping of every registered store to a distance in
            [0, config.MAX_DISTANCE_FROM_STORE)
        """
        if vehicle not in self._registered_vehicles:
            self._registered_vehicles.append(vehicle)
            logger.info("Registered vehicle %s", vehicle.vin)
        return self.make_random_initial_distance_assignments()

    def remove_vehicle(self, vehicle: Vehicle) -> None:
        if vehicle in self._registered_vehicles:
            self._registered_vehicles.remove(vehicle)
            logger.info("Removed vehicle %s", vehicle.vin)

    def register_store(self, store: Store) -> None:
        if store not in self._registered_stores:
            self._registered_stores.append(store)
            logger.info("Registered store %s", store.store_id)

    def remove_store(self, store: Store) -> None:
        if store in self._registered_stores:
            self._registered_stores.remove(store)
            logger.info("Removed store %s", store.store_id)

    def make_random_initial_distance_assignments(self) -> DistanceTable:
        """
        Make a random distance assignment to all the registered stores.

        Returns:
            A new mapping whose keys are exactly the registered stores
        """
        return utils.random_distance_table(
            self._registered_stores, self._rng, config.MAX_DISTANCE_FROM_STORE
        )

    # =========================================================================
    # ORDER INTAKE AND COMPLETION
    # =========================================================================

    def receive_order(self, order: Order) -> None:
        """
        Receive a new order from a store.

        Orders the dispatcher already tracks, in any state, are ignored.
        """
        if self.status_of(order) is not None:
            logger.debug("Ignoring duplicate order %d", order.order_number)
            return
        self._orders_not_scheduled.append(order)
        logger.info("Received order %d from store %s", order.order_number, order.store.store_id)

    def place_birthday_order(self, order: Order) -> None:
        """
        Receive a birthday order without the duplicate check.

        A duplicate collapses during the next dispatch, once its twin is
        in transit.
        """
        self._orders_not_scheduled.append(order)
        logger.info("Received birthday order %d from store %s", order.order_number, order.store.store_id)

    def remove_order_from_in_transit_orders(self, order: Order) -> None:
        """
        Acknowledge delivery of an order.

        The order moves from in transit to delivery complete. Orders that are
        not in transit are ignored.
        """
        if order not in self._orders_in_transit:
            return
        self._orders_in_transit.remove(order)
        self._orders_delivery_complete.append(order)
        logger.info("Order %d delivered", order.order_number)

    def display_message_from_vehicle(self, message: str) -> None:
        """Record a status message sent by a vehicle."""
        self._vehicle_messages.append(message)
        logger.info("Vehicle report: %s", message)

    def set_increased_traffic(self, increased: bool) -> None:
        """Toggle traffic events on and off."""
        self._increased_traffic = increased
        if increased:
            logger.info("There is increased traffic at this time.")
        else:
            logger.info("Traffic levels are normal.")

    # =========================================================================
    # ASSIGNMENT LOOP
    # =========================================================================

    def dispatch_vehicles(self, max_passes: Optional[int] = None) -> List[Tuple[Order, Vehicle]]:
        """
        Assign vehicles to every order that has not been scheduled.

        Each pass walks the unscheduled orders in arrival order and gives the
        first order that can be served to its closest eligible vehicle, then
        starts over from the top.

        Args:
            max_passes: Pass limit (default config.MAX_DISPATCH_PASSES)

        Returns:
            (order, vehicle) pairs in the order they were assigned

        Raises:
            NoEligibleVehicleError: A full pass matched no order. The stranded
                orders stay in the not-scheduled collection.
            DispatchLimitExceeded: The pass limit was reached.

        Postcondition:
            The not-scheduled collection is empty and every order it held is
            in transit.
        """
        if max_passes is None:
            max_passes = config.MAX_DISPATCH_PASSES

        assignments: List[Tuple[Order, Vehicle]] = []
        passes = 0
        while self._orders_not_scheduled:
            # Orders already handed to a vehicle (or delivered) are dropped here,
            # which also collapses duplicate birthday submissions
            self._orders_not_scheduled = [
                o for o in self._orders_not_scheduled
                if o not in self._orders_in_transit and o not in self._orders_delivery_complete
            ]
            if not self._orders_not_scheduled:
                break

            if passes >= max_passes:
                raise DispatchLimitExceeded(
                    f"Stopped after {passes} passes with "
                    f"{len(self._orders_not_scheduled)} order(s) unscheduled",
                    assignments,
                )
            passes += 1

            assignment = self._schedule_next_order()
            if assignment is None:
                stranded = list(self._orders_not_scheduled)
                logger.warning(
                    "No eligible vehicle for orders %s", utils.format_order_numbers(stranded)
                )
                raise NoEligibleVehicleError(stranded, assignments)
            assignments.append(assignment)

        return assignments

    def _schedule_next_order(self) -> Optional[Tuple[Order, Vehicle]]:
        """Assign the first order that has an eligible vehicle. None if no order does."""
        for order in self._orders_not_scheduled:
            try:
                match = self._find_delivery_vehicle(order)
            except DistanceLookupError as e:
                logger.warning("Skipping order %d: %s", order.order_number, e)
                continue

            if match is None:
                logger.debug("No eligible vehicle for order %d this pass", order.order_number)
                continue

            vehicle, distance = match
            self._assign(order, vehicle, distance)
            return order, vehicle
        return None

    def _find_delivery_vehicle(self, order: Order) -> Optional[Tuple[Vehicle, int]]:
        """
        Find the available vehicle with the smallest total distance for an order.

        A frozen order travelling further than FROZEN_DISTANCE_THRESHOLD, or
        any frozen order during increased traffic, needs a vehicle with a
        freezer. Ties go to the vehicle registered first.

        Raises:
            DistanceLookupError: If a distance entry is missing
        """
        delivery_vehicle: Optional[Vehicle] = None
        smallest_total_distance = 0
        freezer_required = False

        for vehicle in self._registered_vehicles:
            total_distance = utils.get_total_distance(order.store, order.customer, vehicle)

            if not vehicle.available:
                continue

            needs_freezer = order.keep_frozen and (
                total_distance > config.FROZEN_DISTANCE_THRESHOLD or self._increased_traffic
            )
            if needs_freezer and not vehicle.can_transport_frozen:
                logger.debug(
                    "Vehicle %s cannot carry frozen order %d", vehicle.vin, order.order_number
                )
                continue

            if delivery_vehicle is None or total_distance < smallest_total_distance:
                delivery_vehicle = vehicle
                smallest_total_distance = total_distance
                freezer_required = needs_freezer

        if delivery_vehicle is None:
            return None
        if freezer_required:
            logger.info(
                "Frozen order %d needs a freezer, using vehicle %s",
                order.order_number, delivery_vehicle.vin,
            )
        return delivery_vehicle, smallest_total_distance

    def _assign(self, order: Order, vehicle: Vehicle, distance: int) -> None:
        """Hand an order to a vehicle, move it to in transit and notify the customer."""
        vehicle.deliver_order(order, distance)
        self._orders_in_transit.append(order)
        self._orders_not_scheduled.remove(order)

        order.customer.receive_message(
            config.ORDER_SCHEDULED_MESSAGE.format(order_number=order.order_number)
        )
