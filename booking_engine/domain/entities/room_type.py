"""Entidad RoomType - categoría reservable de habitación."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from booking_engine.domain.value_objects.price_breakdown import ZERO, to_amount


class RoomStatus(str, Enum):
    """Estados operativos de una habitación física."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_ORDER = "OUT_OF_ORDER"


# Habitaciones que cuentan para el inventario vendible
SELLABLE_ROOM_STATUSES = (RoomStatus.AVAILABLE, RoomStatus.OCCUPIED, RoomStatus.CLEANING)


@dataclass(frozen=True)
class RoomType:
    """
    Categoría reservable de habitación (ej: "Deluxe Suite").

    Define la capacidad y la tarifa base; es distinta de una habitación física.

    Attributes:
        base_occupancy: Adultos incluidos en la tarifa base. None = todos.
        extra_adult_rate: Recargo por noche por adulto sobre base_occupancy.
        extra_child_rate: Recargo por noche por niño.
    """

    id: str
    business_unit_id: str
    display_name: str
    max_occupancy: int
    max_adults: int
    max_children: int
    base_rate: Decimal
    currency_code: str = "PHP"
    base_occupancy: int | None = None
    extra_adult_rate: Decimal = ZERO
    extra_child_rate: Decimal = ZERO
    description: str | None = None
    is_active: bool = True

    def can_add_adult(self, adults: int, children: int) -> bool:
        return adults + 1 <= self.max_adults and adults + children + 1 <= self.max_occupancy

    def can_add_child(self, adults: int, children: int) -> bool:
        return children + 1 <= self.max_children and adults + children + 1 <= self.max_occupancy

    def nightly_surcharge(self, adults: int, children: int) -> Decimal:
        """Recargo por noche según ocupación (cero si el tipo no define recargos)."""
        surcharge = ZERO
        if self.base_occupancy is not None and adults > self.base_occupancy:
            surcharge += to_amount(self.extra_adult_rate) * (adults - self.base_occupancy)
        if children > 0:
            surcharge += to_amount(self.extra_child_rate) * children
        return surcharge


@dataclass(frozen=True)
class Room:
    """Habitación física perteneciente a un tipo."""

    id: str
    business_unit_id: str
    room_type_id: str
    status: RoomStatus = RoomStatus.AVAILABLE
    is_active: bool = True

    @property
    def is_sellable(self) -> bool:
        return self.is_active and self.status in SELLABLE_ROOM_STATUSES
