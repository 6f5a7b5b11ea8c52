import pytest
from ordering.cart.items import AddToCart, ManageCartItemsHandler
from ordering.order.creation import PlaceOrder, PlaceOrderHandler

ADDRESS = {
    "street": "123 Main St",
    "city": "Anytown",
    "state": "CA",
    "zip_code": "90210",
    "country": "US",
}


@pytest.fixture()
def add_to_cart(database):
    def _add_to_cart(user, product, quantity=1, variant_id=None):
        command = AddToCart(product_id=product.id, quantity=quantity, variant_id=variant_id)
        return ManageCartItemsHandler(database).add_to_cart(user.id, command)

    return _add_to_cart


@pytest.fixture()
def place_order(database, make_product, add_to_cart):
    """Fill ``user``'s cart with one product and check out."""

    def _place_order(user, price=10.0, quantity=1, **overrides):
        product = make_product(price=price)
        add_to_cart(user, product, quantity)
        data = {"shipping_address": ADDRESS, "payment_method": "stripe"}
        data.update(overrides)
        return PlaceOrderHandler(database).place_order(user.id, PlaceOrder(**data))

    return _place_order
