"""Value Object StayDates - rango de fechas de una estancia."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

SECONDS_PER_DAY = 24 * 60 * 60


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def nights_between(check_in: date | None, check_out: date | None) -> int:
    """
    Calcula las noches entre check-in y check-out.

    Regla de negocio: cualquier fracción de día cuenta como noche completa
    (techo de la diferencia en días). Un rango vacío o invertido retorna 0,
    nunca un número negativo.
    """
    if check_in is None or check_out is None:
        return 0
    start = _as_datetime(check_in)
    end = _as_datetime(check_out)
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


@dataclass(frozen=True)
class StayDates:
    """
    Value Object inmutable que representa las fechas de una estancia.

    A diferencia de un rango estricto, no lanza error si check_out <= check_in:
    la cotización debe poder degradarse a cero sin excepciones.

    Attributes:
        check_in: Fecha de entrada.
        check_out: Fecha de salida.
    """

    check_in: date
    check_out: date

    @property
    def nights(self) -> int:
        return nights_between(self.check_in, self.check_out)

    @property
    def is_valid(self) -> bool:
        """Verifica que la salida sea estrictamente posterior a la entrada."""
        return self.nights > 0

    def days(self) -> Iterator[date]:
        """Itera cada noche ocupada: [check_in, check_out)."""
        current = _as_datetime(self.check_in).date()
        for _ in range(self.nights):
            yield current
            current += timedelta(days=1)

    def occupies(self, day: date) -> bool:
        """Una estancia ocupa un día si check_in <= día < check_out."""
        start = _as_datetime(self.check_in).date()
        end = _as_datetime(self.check_out).date()
        return start <= day < end

    def overlaps_with(self, other: "StayDates") -> bool:
        return self.check_in < other.check_out and other.check_in < self.check_out

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
