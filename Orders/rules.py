CHANNELS = ("Website", "Instagram", "WhatsApp", "Facebook")


class OrderRejected(Exception):
    """An order request that breaks a stock or price rule. Nothing was stored or sent."""


def check_order_request(current_stock, quantity, unit_price):
    """
    Return None when an order for `quantity` units at `unit_price` can be taken
    against `current_stock`, otherwise the message to show the operator.
    current_stock is None when no product is selected.
    """
    if current_stock is None or not unit_price or unit_price <= 0:
        return "Please select a product and enter a valid price"
    if current_stock < 0:
        return "Cannot create order: This product is oversold (negative stock)"
    if quantity is None or quantity < 1:
        return "Quantity must be at least 1"
    if quantity > current_stock:
        return f"Not enough stock: Only {current_stock} units available, but trying to order {quantity}"
    return None


def order_total(unit_price, quantity):
    """Orders store the line total, not the unit price."""
    return unit_price * quantity
