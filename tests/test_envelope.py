import httpx
import pytest

from fixr import DecodeError, Event, ServerReportedError
from fixr.envelope import decode_json_response
from fixr.models import Booking, PromoCode


class Recorder(PromoCode):
    """PromoCode that remembers whether clear_error ran."""

    cleared = False

    def clear_error(self):
        self.cleared = True
        super().clear_error()


def test_clean_body_populates_target():
    promo = PromoCode()

    decode_json_response(httpx.Response(200, json={"code": "SAVE10", "max_per_user": 2}), promo)

    assert promo.code == "SAVE10"
    assert promo.max == 2
    assert promo.error() is None


def test_embedded_message_raises_and_is_cleared():
    promo = Recorder()

    with pytest.raises(ServerReportedError, match="Promo code has expired"):
        decode_json_response(httpx.Response(200, json={"message": "Promo code has expired"}), promo)

    assert promo.cleared
    assert promo.message == ""


def test_event_uses_detail_key():
    event = Event()

    with pytest.raises(ServerReportedError, match="Not found."):
        decode_json_response(httpx.Response(200, json={"detail": "Not found."}), event)
    assert event.detail == ""

    # "message" is not the event's carrier
    decode_json_response(httpx.Response(200, json={"id": 7, "message": "ignored"}), Event())


def test_empty_message_is_not_an_error():
    booking = Booking()

    decode_json_response(httpx.Response(200, json={"message": "", "state": 1}), booking)

    assert booking.state == 1


def test_invalid_json_raises_and_clears():
    promo = Recorder()

    with pytest.raises(DecodeError) as exc:
        decode_json_response(httpx.Response(200, content=b"{not json"), promo)

    assert isinstance(exc.value.__cause__, ValueError)
    assert promo.cleared
    assert promo.code == ""


def test_non_object_json_is_decode_error():
    with pytest.raises(DecodeError, match="expected an object"):
        decode_json_response(httpx.Response(200, json=[1, 2, 3]), PromoCode())


def test_bad_field_types_clear_error():
    promo = Recorder()

    with pytest.raises(DecodeError):
        decode_json_response(httpx.Response(200, json={"remaining": "lots", "message": "x"}), promo)

    assert promo.cleared
