import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

from apps.api.exceptions import CartEmpty, Internal, NotFound, Unauthenticated, ValidationFailed
from apps.orders.services import OrderService


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class StubImages:
    def all(self):
        return []


class StubItems:
    def __init__(self, items):
        self._items = items

    def all(self):
        return list(self._items)


def make_product(product_id, price):
    return SimpleNamespace(
        id=product_id,
        name=f"Product {product_id}",
        slug=f"product-{product_id}",
        description="",
        price=Decimal(price),
        discount=None,
        stock=10,
        featured=False,
        category=None,
        images=StubImages(),
        created_at=None,
    )


def make_address(address_id, user_id):
    return SimpleNamespace(
        id=address_id,
        user_id=user_id,
        full_name="Test User",
        address_line1="1 Market St",
        address_line2=None,
        city="Pune",
        state="MH",
        postal_code="411001",
        phone_number="9999999999",
        is_default=True,
        created_at=None,
    )


class FakeOrderRepository:
    def __init__(self):
        self.orders = {}
        self._pk = 1

    def create(self, **data):
        order = SimpleNamespace(
            id=self._pk,
            status="PENDING",
            created_at=None,
            updated_at=None,
            line_items=[],
            **data,
        )
        order.items = StubItems(order.line_items)
        self.orders[order.id] = order
        self._pk += 1
        return order

    def list_for_user(self, user_id):
        return [o for o in reversed(list(self.orders.values())) if o.user_id == user_id]

    def get_for_user(self, user_id, order_id):
        order = self.orders.get(order_id)
        return order if order and order.user_id == user_id else None


class FakeOrderItemRepository:
    def __init__(self):
        self._pk = 1

    def create_for_order(self, order, lines):
        created = []
        for product, quantity, price in lines:
            item = SimpleNamespace(id=self._pk, product=product, quantity=quantity, price=price)
            self._pk += 1
            order.line_items.append(item)
            created.append(item)
        return created


class FakeCartRepository:
    def __init__(self):
        self.by_user = {}
        self.locked = []

    def get_for_user(self, user_id):
        return self.by_user.get(user_id)

    def lock_for_user(self, user_id):
        self.locked.append(user_id)
        return self.by_user.get(user_id)


class FakeCartItemRepository:
    def __init__(self):
        self.lines = []
        self.fail_on_delete = False

    def add(self, cart, product, quantity):
        self.lines.append(SimpleNamespace(cart_id=cart.id, product=product, quantity=quantity))

    def list_for_cart(self, cart_id):
        return [l for l in self.lines if l.cart_id == cart_id]

    def delete_for_cart(self, cart):
        if self.fail_on_delete:
            raise RuntimeError("database went away")
        before = len(self.lines)
        self.lines = [l for l in self.lines if l.cart_id != cart.id]
        return before - len(self.lines)


class FakeUserRepository:
    def __init__(self, user_ids):
        self.user_ids = set(user_ids)

    def get(self, **filters):
        uid = filters.get("id")
        return SimpleNamespace(id=uid) if uid in self.user_ids else None


class FakeAddressRepository:
    def __init__(self, addresses):
        self.addresses = {a.id: a for a in addresses}

    def get(self, **filters):
        address = self.addresses.get(filters.get("id"))
        if address and address.user_id == filters.get("user_id"):
            return address
        return None


class OrderServiceTests(unittest.TestCase):
    def setUp(self):
        self.atomic_patch = patch(
            "apps.orders.services.transaction.atomic", DummyAtomic()
        )
        self.atomic_patch.start()
        self.orders = FakeOrderRepository()
        self.carts = FakeCartRepository()
        self.cart_items = FakeCartItemRepository()
        self.service = OrderService(
            orders=self.orders,
            order_items=FakeOrderItemRepository(),
            carts=self.carts,
            cart_items=self.cart_items,
            users=FakeUserRepository([1, 2]),
            addresses=FakeAddressRepository([make_address(10, 1), make_address(20, 2)]),
        )
        self.cart = SimpleNamespace(id=100, user_id=1)
        self.carts.by_user[1] = self.cart
        self.p100 = make_product(1, "100.00")
        self.p50 = make_product(2, "50.00")

    def tearDown(self):
        self.atomic_patch.stop()

    def _fill_cart(self):
        self.cart_items.add(self.cart, self.p100, 2)
        self.cart_items.add(self.cart, self.p50, 1)

    def test_place_order_with_promo(self):
        self._fill_cart()
        dto = self.service.place_order(1, 10, "COD", " welcome10 ")
        self.assertEqual(dto.subtotal, "250.00")
        self.assertEqual(dto.promo_discount, "25.00")
        self.assertEqual(dto.tax, "11.25")
        self.assertEqual(dto.delivery_fee, "49.00")
        self.assertEqual(dto.total_amount, "285.25")
        self.assertEqual(dto.promo_code, "WELCOME10")
        self.assertEqual(dto.status, "PENDING")
        self.assertEqual(dto.address.id, 10)
        self.assertEqual([(i.product.id, i.quantity, i.price) for i in dto.items], [(1, 2, "100.00"), (2, 1, "50.00")])
        self.assertEqual(self.cart_items.list_for_cart(self.cart.id), [])
        self.assertEqual(self.carts.locked, [1])
        self.assertEqual(len(self.orders.orders), 1)

    def test_place_order_without_promo_free_delivery(self):
        self.cart_items.add(self.cart, make_product(3, "600.00"), 1)
        dto = self.service.place_order(1, "10", "Card")
        self.assertEqual(dto.total_amount, "630.00")
        self.assertEqual(dto.tax, "30.00")
        self.assertEqual(dto.delivery_fee, "0.00")
        self.assertIsNone(dto.promo_code)
        self.assertIsNone(dto.promo_discount)

    def test_unknown_promo_stores_no_code(self):
        self._fill_cart()
        dto = self.service.place_order(1, 10, "COD", "FREESTUFF")
        self.assertIsNone(dto.promo_code)
        self.assertEqual(dto.total_amount, "311.50")

    def test_prices_are_frozen_at_checkout(self):
        self._fill_cart()
        dto = self.service.place_order(1, 10, "COD")
        self.p100.price = Decimal("999.00")
        stored = self.service.get_order(1, dto.id)
        self.assertEqual(stored.items[0].price, "100.00")

    def test_requires_user(self):
        with self.assertRaises(Unauthenticated):
            self.service.place_order(None, 10, "COD")

    def test_missing_fields(self):
        self._fill_cart()
        with self.assertRaises(ValidationFailed) as ctx:
            self.service.place_order(1, None, "")
        self.assertEqual(set(ctx.exception.details), {"addressId", "paymentMethod"})
        self.assertEqual(self.orders.orders, {})

    def test_unknown_user(self):
        with self.assertRaises(NotFound):
            self.service.place_order(99, 10, "COD")

    def test_address_of_other_user_is_not_found(self):
        self._fill_cart()
        with self.assertRaises(NotFound) as ctx:
            self.service.place_order(1, 20, "COD")
        self.assertEqual(ctx.exception.details, {"addressId": "20"})
        self.assertEqual(len(self.cart_items.lines), 2)

    def test_empty_cart_rejected(self):
        with self.assertRaises(CartEmpty) as ctx:
            self.service.place_order(1, 10, "COD")
        self.assertEqual(ctx.exception.code, "CART_EMPTY")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.orders.orders, {})

    def test_missing_cart_rejected(self):
        with self.assertRaises(CartEmpty):
            self.service.place_order(2, 20, "COD")

    def test_second_checkout_sees_empty_cart(self):
        self._fill_cart()
        self.service.place_order(1, 10, "COD")
        with self.assertRaises(CartEmpty):
            self.service.place_order(1, 10, "COD")
        self.assertEqual(len(self.orders.orders), 1)

    def test_store_failure_becomes_internal(self):
        self._fill_cart()
        self.cart_items.fail_on_delete = True
        with self.assertRaises(Internal) as ctx:
            self.service.place_order(1, 10, "COD")
        self.assertEqual(ctx.exception.code, "SERVER_ERROR")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_list_and_get_orders(self):
        self._fill_cart()
        first = self.service.place_order(1, 10, "COD")
        self.cart_items.add(self.cart, self.p50, 1)
        second = self.service.place_order(1, 10, "COD")
        listed = self.service.list_orders(1)
        self.assertEqual([o.id for o in listed], [second.id, first.id])
        self.assertEqual(self.service.list_orders(2), [])
        with self.assertRaises(NotFound):
            self.service.get_order(2, first.id)

    def test_quote_does_not_write(self):
        self._fill_cart()
        quote = self.service.quote(1, "WELCOME10")
        self.assertEqual(quote.total, "285.25")
        self.assertEqual(quote.discount, "25.00")
        self.assertEqual(quote.item_count, 3)
        self.assertEqual(quote.promo_code, "WELCOME10")
        self.assertEqual(len(self.cart_items.lines), 2)
        self.assertEqual(self.orders.orders, {})

    def test_quote_empty_cart_is_zero(self):
        quote = self.service.quote(2)
        self.assertEqual(quote.total, "0.00")
        self.assertEqual(quote.delivery_fee, "0.00")
        self.assertEqual(quote.item_count, 0)
