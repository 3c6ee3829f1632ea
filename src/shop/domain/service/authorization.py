"""Role and ownership checks used by every handler before it touches state."""

from __future__ import annotations

from shop.domain.exceptions import ForbiddenError
from shop.domain.model.order import Order
from shop.domain.model.user import Principal, Role


def require_role(principal: Principal, role: Role) -> None:
    """Raise ForbiddenError unless the principal holds *role*."""
    if principal.role != role:
        raise ForbiddenError(
            f"Only {role.value} users can perform this operation"
        )


def require_order_access(principal: Principal, order: Order) -> None:
    """Admins may read any order; customers only their own."""
    if principal.role == Role.CUSTOMER and not order.is_owned_by(principal.user_id):
        raise ForbiddenError("You can only view your own orders")
