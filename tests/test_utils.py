"""Tests for distance helpers."""

import random

import pytest

from store_dispatch import config
from store_dispatch.errors import DistanceLookupError
from store_dispatch.models import Customer, Order, Store, Vehicle
from store_dispatch.utils import format_order_numbers, get_total_distance, random_distance_table


class TestTotalDistance:
    """Tests for get_total_distance."""

    def test_sums_both_legs(self, store, customer):
        """Test total distance is customer leg plus vehicle leg."""
        vehicle = Vehicle(vin="V1", distances_from_each_store={store: 3})

        assert get_total_distance(store, customer, vehicle) == 8

    def test_missing_customer_entry(self, store, other_store):
        """Test a customer without the store raises DistanceLookupError."""
        customer = Customer(customer_id="C1", distances_from_each_store={other_store: 1})
        vehicle = Vehicle(vin="V1", distances_from_each_store={store: 3})

        with pytest.raises(DistanceLookupError, match="Customer C1"):
            get_total_distance(store, customer, vehicle)

    def test_missing_vehicle_entry(self, store, customer):
        """Test a vehicle without the store raises DistanceLookupError."""
        vehicle = Vehicle(vin="V1")

        with pytest.raises(DistanceLookupError, match="Vehicle V1"):
            get_total_distance(store, customer, vehicle)

    def test_lookup_error_is_lookup_error(self, store, customer):
        """Test callers catching LookupError also catch missing distances."""
        with pytest.raises(LookupError):
            get_total_distance(store, customer, Vehicle(vin="V1"))


class TestRandomDistanceTable:
    """Tests for random_distance_table."""

    def test_keys_and_range(self):
        """Test one in-range entry per store."""
        stores = [Store(store_id=f"S{i}") for i in range(50)]

        table = random_distance_table(stores, random.Random(0))

        assert set(table) == set(stores)
        assert all(0 <= d < config.MAX_DISTANCE_FROM_STORE for d in table.values())

    def test_seeded_tables_repeat(self):
        """Test the same seed draws the same table."""
        stores = [Store(store_id=f"S{i}") for i in range(10)]

        assert random_distance_table(stores, random.Random(7)) == random_distance_table(stores, random.Random(7))

    def test_custom_bound(self):
        """Test a bound of 1 always draws zero."""
        stores = [Store(store_id="S1"), Store(store_id="S2")]

        assert set(random_distance_table(stores, max_distance=1).values()) == {0}


def test_format_order_numbers(customer, store):
    """Test order number formatting, including the empty case."""
    assert format_order_numbers([Order(3, customer, store), Order(7, customer, store)]) == "#3, #7"
    assert format_order_numbers([]) == "-"
