from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .errors import ServerReportedError


# JSON null decodes to the field's zero value
def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    # str() first so 1.1 stays 1.1 instead of its binary expansion
    return Decimal(str(value))


def _int(value: Any) -> int:
    return 0 if value is None else int(value)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


# ---------- Tickets ----------
@dataclass(frozen=True)
class Ticket:
    id: int
    name: str
    type: int = 0
    currency: str = ""
    price: Decimal = Decimal("0")
    booking_fee: Decimal = Decimal("0")
    max: int = 0                # max_per_user
    sold_out: bool = False
    expired: bool = False
    invalid: bool = False       # not_yet_valid, only the server can judge it at booking time

    def __post_init__(self):
        object.__setattr__(self, "price", _decimal(self.price))
        object.__setattr__(self, "booking_fee", _decimal(self.booking_fee))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Ticket":
        return Ticket(
            id=_int(data.get("id")),
            name=_str(data.get("name")),
            type=_int(data.get("type")),
            currency=_str(data.get("currency")),
            price=_decimal(data.get("price")),
            booking_fee=_decimal(data.get("booking_fee")),
            max=_int(data.get("max_per_user")),
            sold_out=bool(data.get("sold_out")),
            expired=bool(data.get("expired")),
            invalid=bool(data.get("not_yet_valid")),
        )

    @property
    def total(self) -> Decimal:
        return self.price + self.booking_fee


# ---------- Events ----------
@dataclass
class Event:
    id: int = 0
    name: str = ""
    tickets: List[Ticket] = field(default_factory=list)
    # FIXR reports event lookup failures under "detail", not "message"
    detail: str = field(default="", repr=False, compare=False)

    def load(self, data: Dict[str, Any]) -> None:
        if "id" in data:
            self.id = _int(data["id"])
        if "name" in data:
            self.name = _str(data["name"])
        if "tickets" in data:
            self.tickets = [Ticket.from_dict(t) for t in data["tickets"] or []]
        self.detail = str(data.get("detail") or "")

    def error(self) -> Optional[ServerReportedError]:
        if self.detail:
            return ServerReportedError(self.detail)
        return None

    def clear_error(self) -> None:
        self.detail = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Event":
        event = Event()
        event.load(data)
        event.clear_error()
        return event


# ---------- Promo codes ----------
@dataclass
class PromoCode:
    code: str = ""
    price: Decimal = Decimal("0")
    booking_fee: Decimal = Decimal("0")
    currency: str = ""
    max: int = 0                # max_per_user
    remaining: int = 0
    message: str = field(default="", repr=False, compare=False)

    def load(self, data: Dict[str, Any]) -> None:
        if "code" in data:
            self.code = _str(data["code"])
        if "price" in data:
            self.price = _decimal(data["price"])
        if "booking_fee" in data:
            self.booking_fee = _decimal(data["booking_fee"])
        if "currency" in data:
            self.currency = _str(data["currency"])
        if "max_per_user" in data:
            self.max = _int(data["max_per_user"])
        if "remaining" in data:
            self.remaining = _int(data["remaining"])
        self.message = str(data.get("message") or "")

    def error(self) -> Optional[ServerReportedError]:
        if self.message:
            return ServerReportedError(self.message)
        return None

    def clear_error(self) -> None:
        self.message = ""


# ---------- Bookings ----------
@dataclass
class Booking:
    event: Event = field(default_factory=Event)
    name: str = ""              # user_full_name
    pdf: str = ""
    state: int = 0              # opaque FIXR booking state code
    message: str = field(default="", repr=False, compare=False)

    def load(self, data: Dict[str, Any]) -> None:
        if "event" in data and data["event"] is not None:
            self.event = Event.from_dict(data["event"])
        if "user_full_name" in data:
            self.name = _str(data["user_full_name"])
        if "pdf" in data:
            self.pdf = _str(data["pdf"])
        if "state" in data:
            self.state = _int(data["state"])
        self.message = str(data.get("message") or "")

    def error(self) -> Optional[ServerReportedError]:
        if self.message:
            return ServerReportedError(self.message)
        return None

    def clear_error(self) -> None:
        self.message = ""


# ---------- Stripe ----------
@dataclass
class CardToken:
    """Stripe's answer to a card tokenization request."""
    id: str = ""
    message: str = field(default="", repr=False, compare=False)

    def load(self, data: Dict[str, Any]) -> None:
        if "id" in data:
            self.id = _str(data["id"])
        # Stripe nests its errors: {"error": {"message": "...", "type": "..."}}
        err = data.get("error") or {}
        self.message = str(err.get("message") or "") if isinstance(err, dict) else str(err)

    def error(self) -> Optional[ServerReportedError]:
        if self.message:
            return ServerReportedError(self.message)
        return None

    def clear_error(self) -> None:
        self.message = ""
