"""Tests for domain models: orders, products, customers and vehicles."""

import dataclasses

import pytest

from store_dispatch.models import BirthdayOrder, Customer, Order, Product, Vehicle


class TestOrder:
    """Tests for Order and BirthdayOrder."""

    def test_orders_hash_by_number(self, customer, store):
        """Test orders with the same number collapse in a set."""
        orders = {Order(1, customer, store), Order(1, customer, store), Order(2, customer, store)}

        assert len(orders) == 2

    def test_order_is_immutable(self, customer, store):
        """Test orders cannot be modified after creation."""
        order = Order(1, customer, store)

        with pytest.raises(dataclasses.FrozenInstanceError):
            order.keep_frozen = True

    def test_from_products_derives_frozen_flag(self, customer, store):
        """Test an order with any frozen product must be kept frozen."""
        order = Order.from_products(1, [Product("Bread"), Product("Ice Cream", keep_frozen=True)], customer, store)

        assert order.keep_frozen is True
        assert order.products == (Product("Bread"), Product("Ice Cream", keep_frozen=True))

    def test_from_products_regular(self, customer, store):
        """Test an order without frozen products is not frozen."""
        order = Order.from_products(1, [Product("Bread")], customer, store)

        assert order.keep_frozen is False

    def test_from_products_explicit_flag_wins(self, customer, store):
        """Test an explicit frozen flag overrides the products."""
        order = Order.from_products(1, [Product("Bread")], customer, store, keep_frozen=True)

        assert order.keep_frozen is True

    def test_str_lists_products(self, customer, store):
        """Test an order prints as its products."""
        order = Order.from_products(1, [Product("Milk"), Product("Peas", keep_frozen=True)], customer, store)

        assert str(order) == "Milk, Peas (frozen)"

    def test_birthday_order_card(self, customer, store):
        """Test birthday orders carry a card message."""
        order = BirthdayOrder.from_products(
            6, [Product("Cake")], customer, store, card_message="Happy 30th!"
        )

        assert isinstance(order, BirthdayOrder)
        assert order.card_message == "Happy 30th!"
        assert "Happy 30th!" in str(order)

    def test_birthday_order_default_card(self, customer, store):
        """Test birthday orders have a default card."""
        assert BirthdayOrder(6, customer, store).card_message == "Happy Birthday!"

    def test_birthday_order_equals_plain_order(self, customer, store):
        """Test a birthday order is the same order as a plain order with its number."""
        plain = Order(7, customer, store)
        birthday = BirthdayOrder(7, customer, store, card_message="Happy 30th!")

        assert plain == birthday
        assert birthday == plain
        assert len({plain, birthday}) == 1
        assert birthday in [plain]
        assert birthday != BirthdayOrder(8, customer, store)

    def test_birthday_order_repr(self, customer, store):
        """Test birthday orders print as a short order repr."""
        assert repr(BirthdayOrder(7, customer, store, keep_frozen=True)) == "Order(7, frozen)"


class TestCustomer:
    """Tests for Customer."""

    def test_receive_message(self):
        """Test messages are kept oldest first."""
        customer = Customer(customer_id="C1")
        customer.receive_message("one")
        customer.receive_message("two")

        assert customer.messages == ["one", "two"]


class TestVehicle:
    """Tests for Vehicle."""

    def test_register_with_adopts_distances(self, dispatcher, store):
        """Test registering adopts a distance to every registered store."""
        vehicle = Vehicle(vin="V1")
        vehicle.register_with(dispatcher)

        assert vehicle.dispatcher is dispatcher
        assert set(vehicle.distances_from_each_store) == {store}
        assert vehicle in dispatcher.registered_vehicles

    def test_deliver_order_queues(self, customer, store):
        """Test an accepted order is queued with its distance."""
        vehicle = Vehicle(vin="V1", capacity=2)
        order = Order(1, customer, store)

        vehicle.deliver_order(order, 8)

        assert vehicle.assigned_orders == [(order, 8)]
        assert vehicle.available is True

    def test_deliver_order_at_capacity(self, customer, store):
        """Test the vehicle reports unavailable once full."""
        vehicle = Vehicle(vin="V1", capacity=2)
        vehicle.deliver_order(Order(1, customer, store), 8)
        vehicle.deliver_order(Order(2, customer, store), 9)

        assert vehicle.available is False

    def test_complete_deliveries(self, dispatcher, make_vehicle, make_order):
        """Test completing deliveries reports every order to the dispatcher."""
        vehicle = make_vehicle("V1", 3, capacity=2)
        orders = [make_order(1), make_order(2)]
        for order in orders:
            dispatcher.receive_order(order)
        dispatcher.dispatch_vehicles()
        assert vehicle.available is False

        delivered = vehicle.complete_deliveries()

        assert delivered == orders
        assert vehicle.assigned_orders == []
        assert vehicle.deliveries == [(orders[0], 8), (orders[1], 8)]
        assert vehicle.available is True
        assert vehicle.total_distance == 16
        assert dispatcher.orders_delivery_complete == tuple(orders)
        assert len(dispatcher.vehicle_messages) == 2
        assert "V1 delivered order 1" in dispatcher.vehicle_messages[0]

    def test_complete_with_nothing_queued(self):
        """Test completing with an empty queue does nothing."""
        assert Vehicle(vin="V1").complete_deliveries() == []

    def test_complete_without_dispatcher(self, customer, store):
        """Test a vehicle with orders but no dispatcher cannot report them."""
        vehicle = Vehicle(vin="V1")
        vehicle.deliver_order(Order(1, customer, store), 3)

        with pytest.raises(RuntimeError):
            vehicle.complete_deliveries()
