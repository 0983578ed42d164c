from .cart import add_to_cart, cart_quantity, clear_cart, remove_from_cart, update_cart_item
from .checkout import (
    Totals,
    cart_totals,
    free_shipping_gap,
    generate_order_number,
    order_totals,
    place_order,
    shipping_for,
    subtotal_of,
    tax_for,
)
from .coupons import validate_coupon
