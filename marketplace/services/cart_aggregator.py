from decimal import Decimal
from typing import Dict, List, Optional

from marketplace.schemas.cart_schemas import CartLineItem, VendorGroup
from marketplace.services.errors import CartLineNotFound


def cart_total(cart: List[CartLineItem]) -> Decimal:
    return sum((item.subtotal for item in cart), Decimal("0"))


def group_by_vendor(cart: List[CartLineItem]) -> List[VendorGroup]:
    """
    Partition cart lines by seller id.

    Groups come back in the order their seller first appears in the cart;
    store name is taken from that first line.
    """
    groups: Dict[str, VendorGroup] = {}

    for item in cart:
        group = groups.get(item.seller_id)
        if group is None:
            group = VendorGroup(seller_id=item.seller_id, store_name=item.store_name)
            groups[item.seller_id] = group

        group.items.append(item)
        group.total += item.subtotal

    return list(groups.values())


def _clamp(quantity: int, stock: int) -> int:
    return max(1, min(stock, quantity))


def add_item(cart: List[CartLineItem], item: CartLineItem) -> List[CartLineItem]:
    updated = []
    merged = False

    for line in cart:
        if not merged and line.same_line(item.id, item.selected_size):
            line = line.model_copy(update={"quantity": _clamp(line.quantity + item.quantity, line.stock)})
            merged = True
        updated.append(line)

    if not merged:
        updated.append(item)

    return updated


def update_quantity(
    cart: List[CartLineItem],
    product_id: str,
    size: Optional[str],
    delta: int,
) -> List[CartLineItem]:
    if not any(line.same_line(product_id, size) for line in cart):
        raise CartLineNotFound(f"Cart line {product_id} ({size}) not found")

    return [
        line.model_copy(update={"quantity": _clamp(line.quantity + delta, line.stock)})
        if line.same_line(product_id, size)
        else line
        for line in cart
    ]


def remove_item(cart: List[CartLineItem], product_id: str, size: Optional[str]) -> List[CartLineItem]:
    remaining = [line for line in cart if not line.same_line(product_id, size)]

    if len(remaining) == len(cart):
        raise CartLineNotFound(f"Cart line {product_id} ({size}) not found")

    return remaining
