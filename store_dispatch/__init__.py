# store-dispatch/store_dispatch/__init__.py

from .models import (
    BirthdayOrder,
    Customer,
    DistanceTable,
    Order,
    OrderStatus,
    Product,
    Store,
    Vehicle,
)
from .config import (
    MAX_DISTANCE_FROM_STORE,
    FROZEN_DISTANCE_THRESHOLD,
    MAX_DISPATCH_PASSES,
    DEFAULT_VEHICLE_CAPACITY,
)
from .errors import (
    DispatchError,
    DispatchLimitExceeded,
    DistanceLookupError,
    NoEligibleVehicleError,
)
from .dispatch import Dispatcher
from .simulation import Simulation, SimulationResults
from .utils import get_total_distance, random_distance_table

__version__ = "1.0.0"

__all__ = [
    # Models
    "Store",
    "Product",
    "Customer",
    "Order",
    "BirthdayOrder",
    "Vehicle",
    "OrderStatus",
    "DistanceTable",
    # Core
    "Dispatcher",
    "Simulation",
    "SimulationResults",
    # Errors
    "DispatchError",
    "DistanceLookupError",
    "NoEligibleVehicleError",
    "DispatchLimitExceeded",
    # Functions
    "get_total_distance",
    "random_distance_table",
    # Config
    "MAX_DISTANCE_FROM_STORE",
    "FROZEN_DISTANCE_THRESHOLD",
    "MAX_DISPATCH_PASSES",
    "DEFAULT_VEHICLE_CAPACITY",
]
