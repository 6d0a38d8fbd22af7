"""
FIXR API client.

A Client is one user's session: it owns the auth token returned by `logon`
and is not safe to share between threads without external locking.
"""
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from . import keys, payload
from .config import ClientConfig
from .errors import (
    ExpiredError,
    FixrError,
    MaximumExceededError,
    ServerReportedError,
    SoldOutError,
)
from .models import Booking, CardToken, Event, PromoCode, Ticket
from .transport import Transport


class Client:
    """Client provides access to the FIXR API methods."""

    def __init__(self, email: str, config: Optional[ClientConfig] = None,
                 http_client: Optional[httpx.Client] = None):
        self.email = email
        self.first_name = ""
        self.last_name = ""
        self.magic_login_url = ""
        self.auth_token = ""
        self.stripe_user: Optional[Dict[str, Any]] = None
        self.message = ""
        self.config = config or ClientConfig()
        self._transport = Transport(self.config, http_client)

    def __repr__(self) -> str:
        return f"Client(email={self.email!r}, logged_in={bool(self.auth_token)})"

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    # ---- decode target for logon/me ----
    def load(self, data: Dict[str, Any]) -> None:
        if "first_name" in data:
            self.first_name = str(data["first_name"] or "")
        if "last_name" in data:
            self.last_name = str(data["last_name"] or "")
        if "magic_login_url" in data:
            self.magic_login_url = str(data["magic_login_url"] or "")
        if "auth_token" in data:
            self.auth_token = str(data["auth_token"] or "")
        if "stripe_user" in data:
            self.stripe_user = data["stripe_user"]
        self.message = str(data.get("message") or "")

    def error(self) -> Optional[ServerReportedError]:
        if self.message:
            return ServerReportedError(self.message)
        return None

    def clear_error(self) -> None:
        self.message = ""

    # ---- API ----
    def logon(self, password: str) -> None:
        """Authenticate with FIXR, filling in the profile fields and auth token."""
        data = payload.build({"email": self.email, "password": password})
        try:
            self._transport.post(self.config.login_url, data, self)
        except FixrError as e:
            raise e.wrap("error logging on") from e
        logger.info("Logged on as {}", self.email)

    def me(self) -> None:
        """Refresh the profile fields from the current session."""
        try:
            self._transport.get(self.config.me_url, self, authenticated=True, token=self.auth_token)
        except FixrError as e:
            raise e.wrap("error getting user details") from e

    def event(self, event_id: int) -> Event:
        """Return the event, with its tickets, for the given event ID."""
        event = Event()
        try:
            self._transport.get(self.config.event_url(event_id), event)
        except FixrError as e:
            raise e.wrap("error getting event") from e
        return event

    def promo(self, ticket_id: int, code: str) -> PromoCode:
        """
        Check a promotional code against a ticket.

        The returned PromoCode can be passed to `book`.
        """
        promo = PromoCode()
        try:
            self._transport.get(self.config.promo_url(ticket_id, code), promo,
                                authenticated=True, token=self.auth_token)
        except FixrError as e:
            raise e.wrap("error getting promo code") from e
        return promo

    def book(self, ticket: Ticket, amount: int, promo: Optional[PromoCode] = None) -> Booking:
        """
        Book `amount` of `ticket`, optionally applying a promo code.

        Sold-out, expired and over-the-limit selections are refused before
        anything is sent. `ticket.invalid` is left to the server: whether a
        ticket is valid yet depends on the time of release.
        """
        if ticket.sold_out:
            logger.info("Refusing to book {} (ticket {}): sold out", ticket.name, ticket.id)
            raise SoldOutError()
        if ticket.expired:
            logger.info("Refusing to book {} (ticket {}): expired", ticket.name, ticket.id)
            raise ExpiredError()
        if amount > ticket.max:
            logger.info("Refusing to book {} x {} (ticket {}): maximum is {}",
                        amount, ticket.name, ticket.id, ticket.max)
            raise MaximumExceededError(ticket.max)

        logger.debug("Booking {} x {} (ticket {})", amount, ticket.name, ticket.id)
        fields: Dict[str, Any] = {"ticket_id": ticket.id, "amount": amount}
        if ticket.total > 0:
            fields["purchase_key"] = keys.generate()
        if promo is not None:
            fields["promo_code"] = promo.code
        data = payload.build(fields)

        booking = Booking()
        try:
            self._transport.post(self.config.booking_url, data, booking,
                                 authenticated=True, token=self.auth_token)
        except FixrError as e:
            raise e.wrap("error booking ticket") from e
        logger.info("Booked {} x {} (state {})", amount, ticket.name, booking.state)
        return booking

    def add_card(self, number: str, exp_month: int, exp_year: int, cvc: str) -> None:
        """
        Attach a payment card to the FIXR account.

        The card is tokenized with Stripe first; only the token reaches FIXR.
        """
        form = payload.build_form({
            "card[number]": number,
            "card[exp_month]": exp_month,
            "card[exp_year]": exp_year,
            "card[cvc]": cvc,
        })
        token = CardToken()
        try:
            self._transport.post(self.config.card_url, form, token,
                                 authorization=f"Bearer {self.config.stripe_key}")
            data = payload.build({"stripe_token": token.id})
            self._transport.post(self.config.token_url, data, self,
                                 authenticated=True, token=self.auth_token)
        except FixrError as e:
            raise e.wrap("error adding card") from e
