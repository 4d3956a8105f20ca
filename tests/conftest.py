"""Pytest configuration and shared fixtures."""

import random

import pytest

from store_dispatch.dispatch import Dispatcher
from store_dispatch.models import Customer, Order, Product, Store, Vehicle


@pytest.fixture
def store():
    """Fixture for the store every test order ships from."""
    return Store(store_id="S1", name="Corner Grocery")


@pytest.fixture
def other_store():
    """Fixture for a second store."""
    return Store(store_id="S2", name="Harbor Market")


@pytest.fixture
def customer(store):
    """Fixture for a customer 5 units from the store."""
    return Customer(
        customer_id="C1",
        name="Alex Moreno",
        distances_from_each_store={store: 5},
    )


@pytest.fixture
def dispatcher(store):
    """Fixture for a dispatcher with one registered store and seeded distances."""
    d = Dispatcher(rng=random.Random(42))
    d.register_store(store)
    return d


@pytest.fixture
def make_vehicle(dispatcher, store):
    """Factory registering a vehicle at a fixed distance from the store."""

    def _make(vin, distance, can_transport_frozen=False, capacity=3, available=True):
        vehicle = Vehicle(
            vin=vin,
            can_transport_frozen=can_transport_frozen,
            capacity=capacity,
            available=available,
        )
        vehicle.register_with(dispatcher)
        # Replace the random table with a known distance
        vehicle.distances_from_each_store = {store: distance}
        return vehicle

    return _make


@pytest.fixture
def make_order(customer, store):
    """Factory for orders from the store to the customer."""

    def _make(order_number, keep_frozen=False, customer_=None):
        products = (Product("Ice Cream", keep_frozen=True),) if keep_frozen else (Product("Bread"),)
        return Order(
            order_number=order_number,
            customer=customer_ or customer,
            store=store,
            products=products,
            keep_frozen=keep_frozen,
        )

    return _make
