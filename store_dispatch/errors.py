# store-dispatch/store_dispatch/errors.py
"""
Exceptions raised by the dispatcher and its distance helpers.

Every failure is local to a single order's assignment attempt: the loop
reports it instead of retrying forever.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .models import Order, Vehicle


class DispatchError(Exception):
    """Base exception for all dispatching errors"""
    pass


class DistanceLookupError(DispatchError, LookupError):
    """Raised when a customer or vehicle has no distance entry for a store"""
    pass


class NoEligibleVehicleError(DispatchError):
    """
    Raised when a full pass over the unscheduled orders matches nothing.

    Attributes:
        orders: The orders left stranded in the not-scheduled collection
        assignments: (order, vehicle) pairs made earlier in the same call
    """

    def __init__(
        self,
        orders: Sequence[Order],
        assignments: Optional[Sequence[Tuple[Order, Vehicle]]] = None,
    ) -> None:
        self.orders: List[Order] = list(orders)
        self.assignments: List[Tuple[Order, Vehicle]] = list(assignments or [])
        numbers = ", ".join(str(o.order_number) for o in self.orders)
        super().__init__(f"No eligible vehicle for {len(self.orders)} order(s): {numbers}")


class DispatchLimitExceeded(DispatchError):
    """
    Raised when the assignment loop hits its pass limit.

    Attributes:
        assignments: (order, vehicle) pairs made before the limit was reached
    """

    def __init__(
        self,
        message: str,
        assignments: Optional[Sequence[Tuple[Order, Vehicle]]] = None,
    ) -> None:
        self.assignments: List[Tuple[Order, Vehicle]] = list(assignments or [])
        super().__init__(message)
