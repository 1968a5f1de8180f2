"""Tests for payment and Telegram Stars operations."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botmethods.methods import (
    AnswerPreCheckoutQuery,
    AnswerShippingQuery,
    CreateInvoiceLink,
    EditUserStarSubscription,
    GetStarTransactions,
    RefundStarPayment,
    SendInvoice,
)
from botmethods.models import Message, StarTransactions
from botmethods.objects import LabeledPrice, ReplyParameters, ShippingOption


def _invoice(**overrides) -> SendInvoice:
    fields = dict(
        chat_id=42,
        title="Cat food",
        description="A month of premium cat food",
        payload="order-1",
        currency="USD",
        prices=[LabeledPrice(label="Food", amount=1500)],
    )
    fields.update(overrides)
    return SendInvoice(**fields)


def _link(**overrides) -> CreateInvoiceLink:
    fields = dict(
        title="Premium",
        description="Premium access",
        payload="sub-1",
        currency="XTR",
        prices=[LabeledPrice(label="Month", amount=100)],
    )
    fields.update(overrides)
    return CreateInvoiceLink(**fields)


# ── SendInvoice ──────────────────────────────────────────────────────────────


class TestSendInvoice:
    """Length, byte and tip rules on invoices."""

    def test_metadata(self) -> None:
        assert SendInvoice.endpoint == "sendInvoice"
        assert SendInvoice.result_type is Message
        assert SendInvoice.http_method == "POST"

    def test_valid(self) -> None:
        assert _invoice().validate() is None

    def test_title_boundaries(self) -> None:
        assert _invoice(title="t" * 32).validate() is None
        assert _invoice(title="t" * 33).validate().fields == ["title"]
        assert _invoice(title="").validate().fields == ["title"]

    def test_description_boundaries(self) -> None:
        assert _invoice(description="d" * 255).validate() is None
        assert _invoice(description="d" * 256).validate().fields == ["description"]

    def test_payload_counts_bytes(self) -> None:
        assert _invoice(payload="p" * 128).validate() is None
        assert _invoice(payload="ж" * 65).validate().fields == ["payload"]

    def test_chat_id_variants(self) -> None:
        assert _invoice(chat_id="@shop").validate() is None
        assert _invoice(chat_id=0).validate().fields == ["chat_id"]
        assert _invoice(chat_id="  ").validate().fields == ["chat_id"]

    def test_prices_required(self) -> None:
        assert _invoice(prices=[]).validate().fields == ["prices"]

    def test_nested_price_path(self) -> None:
        prices = [LabeledPrice(label="Food", amount=1), LabeledPrice(label="", amount=2)]
        assert _invoice(prices=prices).validate().fields == ["prices[1].label"]

    def test_tips(self) -> None:
        assert _invoice(max_tip_amount=50, suggested_tip_amounts=[10, 20, 30]).validate() is None
        assert _invoice(max_tip_amount=50, suggested_tip_amounts=[20, 10]).validate() is not None
        assert _invoice(max_tip_amount=50, suggested_tip_amounts=[-5, 10]).validate() is not None
        assert _invoice(max_tip_amount=50, suggested_tip_amounts=[1, 2, 3, 4, 5]).validate() is not None

    def test_negative_max_tip(self) -> None:
        assert _invoice(max_tip_amount=-1).validate().fields == ["max_tip_amount"]

    def test_stars_need_single_price_and_no_tips(self) -> None:
        assert _invoice(currency="XTR").validate() is None
        two = [LabeledPrice(label="a", amount=1), LabeledPrice(label="b", amount=2)]
        assert _invoice(currency="XTR", prices=two).validate().fields == ["prices"]
        error = _invoice(currency="XTR", suggested_tip_amounts=[1]).validate()
        assert error.fields == ["suggested_tip_amounts"]

    def test_nested_reply_parameters(self) -> None:
        error = _invoice(reply_parameters=ReplyParameters(message_id=0)).validate()
        assert error.fields == ["reply_parameters.message_id"]

    def test_accumulates_every_violation(self) -> None:
        error = _invoice(chat_id=0, title="", description="", payload="", currency=" ", prices=[]).validate()
        assert error.fields == ["chat_id", "title", "description", "payload", "currency", "prices"]

    def test_validate_is_deterministic(self) -> None:
        method = _invoice(title="", prices=[])
        assert method.validate() == method.validate()


# ── CreateInvoiceLink ────────────────────────────────────────────────────────


class TestCreateInvoiceLink:
    def test_valid_subscription(self) -> None:
        assert _link(subscription_period=2592000).validate() is None
        assert CreateInvoiceLink.result_type is str

    def test_subscription_period_value(self) -> None:
        assert _link(subscription_period=86400).validate().fields == ["subscription_period"]

    def test_subscription_requires_stars(self) -> None:
        error = _link(currency="USD", subscription_period=2592000).validate()
        assert error.fields == ["subscription_period"]

    def test_shares_invoice_rules(self) -> None:
        assert _link(title="t" * 33).validate().fields == ["title"]


# ── Query answers ────────────────────────────────────────────────────────────


class TestAnswerShippingQuery:
    """ok=True needs options, ok=False needs an error message."""

    def _option(self, **overrides) -> ShippingOption:
        fields = dict(id="std", title="Standard", prices=[LabeledPrice(label="Post", amount=300)])
        fields.update(overrides)
        return ShippingOption(**fields)

    def test_ok_with_options(self) -> None:
        method = AnswerShippingQuery(shipping_query_id="s1", ok=True, shipping_options=[self._option()])
        assert method.validate() is None

    def test_ok_without_options(self) -> None:
        assert AnswerShippingQuery(shipping_query_id="s1", ok=True).validate().fields == ["shipping_options"]
        error = AnswerShippingQuery(shipping_query_id="s1", ok=True, shipping_options=[]).validate()
        assert error.fields == ["shipping_options"]

    def test_not_ok_requires_message(self) -> None:
        assert AnswerShippingQuery(shipping_query_id="s1", ok=False).validate().fields == ["error_message"]
        method = AnswerShippingQuery(shipping_query_id="s1", ok=False, error_message="We don't ship there")
        assert method.validate() is None

    def test_option_paths(self) -> None:
        method = AnswerShippingQuery(
            shipping_query_id="s1",
            ok=True,
            shipping_options=[self._option(title="", prices=[])],
        )
        assert method.validate().fields == ["shipping_options[0].title", "shipping_options[0].prices"]


class TestAnswerPreCheckoutQuery:
    def test_ok(self) -> None:
        assert AnswerPreCheckoutQuery(pre_checkout_query_id="p1", ok=True).validate() is None

    def test_not_ok_requires_message(self) -> None:
        error = AnswerPreCheckoutQuery(pre_checkout_query_id="", ok=False).validate()
        assert error.fields == ["pre_checkout_query_id", "error_message"]


# ── Stars ────────────────────────────────────────────────────────────────────


class TestStarOperations:
    def test_get_star_transactions(self) -> None:
        assert GetStarTransactions.http_method == "GET"
        assert GetStarTransactions.result_type is StarTransactions
        assert GetStarTransactions(offset=0, limit=100).validate() is None
        assert GetStarTransactions(offset=-1, limit=101).validate().fields == ["offset", "limit"]
        assert GetStarTransactions(limit=0).validate().fields == ["limit"]

    @pytest.mark.parametrize("user_id", [0, -5])
    def test_refund_user_id(self, user_id: int) -> None:
        error = RefundStarPayment(user_id=user_id, telegram_payment_charge_id="c").validate()
        assert error.fields == ["user_id"]

    def test_refund_charge_id(self) -> None:
        error = RefundStarPayment(user_id=1, telegram_payment_charge_id=" ").validate()
        assert error.fields == ["telegram_payment_charge_id"]

    def test_edit_subscription(self) -> None:
        method = EditUserStarSubscription(user_id=1, telegram_payment_charge_id="c", is_canceled=True)
        assert method.validate() is None
        assert method.encode().body.read() == b'{"user_id":1,"telegram_payment_charge_id":"c","is_canceled":true}'
