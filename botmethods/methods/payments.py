"""Payments and Telegram Stars operations."""

from __future__ import annotations

from typing import List, Optional, Union

from botmethods.methods.base import TelegramMethod
from botmethods.models import Message, StarTransactions
from botmethods.objects import InlineKeyboardMarkup, LabeledPrice, ReplyParameters, ShippingOption
from botmethods.validation import Violations

STARS_CURRENCY = "XTR"
# Subscriptions are only offered for 30 days.
SUBSCRIPTION_PERIOD = 2592000


class _InvoiceMethod(TelegramMethod):
    """Fields and rules shared by :class:`SendInvoice` and :class:`CreateInvoiceLink`."""

    title: str
    description: str
    payload: str
    currency: str
    prices: List[LabeledPrice]
    provider_token: Optional[str] = None
    max_tip_amount: Optional[int] = None
    suggested_tip_amounts: Optional[List[int]] = None
    provider_data: Optional[str] = None
    photo_url: Optional[str] = None
    photo_size: Optional[int] = None
    photo_width: Optional[int] = None
    photo_height: Optional[int] = None
    need_name: Optional[bool] = None
    need_phone_number: Optional[bool] = None
    need_email: Optional[bool] = None
    need_shipping_address: Optional[bool] = None
    send_phone_number_to_provider: Optional[bool] = None
    send_email_to_provider: Optional[bool] = None
    is_flexible: Optional[bool] = None

    def collect_violations(self, v: Violations) -> None:
        v.length("title", self.title, 1, 32)
        v.length("description", self.description, 1, 255)
        v.byte_length("payload", self.payload, 1, 128)
        v.not_blank("currency", self.currency)
        v.count("prices", self.prices, minimum=1)
        v.nested_items("prices", self.prices)
        v.in_range("max_tip_amount", self.max_tip_amount, minimum=0)
        v.tip_amounts("suggested_tip_amounts", self.suggested_tip_amounts, self.max_tip_amount)
        if self.currency == STARS_CURRENCY:
            if len(self.prices) != 1:
                v.add("prices", f"must contain exactly one price for payments in {STARS_CURRENCY}")
            if self.max_tip_amount or self.suggested_tip_amounts:
                v.add("suggested_tip_amounts", f"tips are not supported for payments in {STARS_CURRENCY}")


class SendInvoice(_InvoiceMethod):
    """Send an invoice. On success, the sent :class:`Message` is returned."""

    endpoint = "sendInvoice"
    result_type = Message

    chat_id: Union[int, str]
    message_thread_id: Optional[int] = None
    start_parameter: Optional[str] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    allow_paid_broadcast: Optional[bool] = None
    message_effect_id: Optional[str] = None
    reply_parameters: Optional[ReplyParameters] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    def collect_violations(self, v: Violations) -> None:
        v.chat_id("chat_id", self.chat_id)
        super().collect_violations(v)
        v.nested("reply_parameters", self.reply_parameters)
        v.nested("reply_markup", self.reply_markup)


class CreateInvoiceLink(_InvoiceMethod):
    """Create a link for an invoice. Returns the created invoice link as a string."""

    endpoint = "createInvoiceLink"
    result_type = str

    business_connection_id: Optional[str] = None
    subscription_period: Optional[int] = None

    def collect_violations(self, v: Violations) -> None:
        super().collect_violations(v)
        if self.subscription_period is not None:
            if self.subscription_period != SUBSCRIPTION_PERIOD:
                v.add("subscription_period", f"must be {SUBSCRIPTION_PERIOD} seconds (30 days)")
            if self.currency != STARS_CURRENCY:
                v.add("subscription_period", f'requires currency "{STARS_CURRENCY}"')


class AnswerShippingQuery(TelegramMethod):
    """Reply to a shipping query sent for an invoice with a flexible price."""

    endpoint = "answerShippingQuery"
    result_type = bool

    shipping_query_id: str
    ok: bool
    shipping_options: Optional[List[ShippingOption]] = None
    error_message: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("shipping_query_id", self.shipping_query_id)
        if self.ok:
            v.count("shipping_options", self.shipping_options, minimum=1)
        else:
            v.require("error_message", self.error_message, "ok is false")
        v.nested_items("shipping_options", self.shipping_options)


class AnswerPreCheckoutQuery(TelegramMethod):
    """Respond to a pre-checkout query within 10 seconds."""

    endpoint = "answerPreCheckoutQuery"
    result_type = bool

    pre_checkout_query_id: str
    ok: bool
    error_message: Optional[str] = None

    def collect_violations(self, v: Violations) -> None:
        v.not_blank("pre_checkout_query_id", self.pre_checkout_query_id)
        if not self.ok:
            v.require("error_message", self.error_message, "ok is false")


class GetStarTransactions(TelegramMethod):
    """Get the bot's Telegram Star transactions in chronological order."""

    endpoint = "getStarTransactions"
    result_type = StarTransactions
    http_method = "GET"

    offset: Optional[int] = None
    limit: Optional[int] = None

    def collect_violations(self, v: Violations) -> None:
        v.in_range("offset", self.offset, minimum=0)
        v.in_range("limit", self.limit, 1, 100)


class RefundStarPayment(TelegramMethod):
    """Refund a successful payment in Telegram Stars."""

    endpoint = "refundStarPayment"
    result_type = bool

    user_id: int
    telegram_payment_charge_id: str

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.not_blank("telegram_payment_charge_id", self.telegram_payment_charge_id)


class EditUserStarSubscription(TelegramMethod):
    """Cancel or re-enable extension of a subscription paid in Telegram Stars."""

    endpoint = "editUserStarSubscription"
    result_type = bool

    user_id: int
    telegram_payment_charge_id: str
    is_canceled: bool

    def collect_violations(self, v: Violations) -> None:
        v.positive_id("user_id", self.user_id)
        v.not_blank("telegram_payment_charge_id", self.telegram_payment_charge_id)
