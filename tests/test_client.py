"""Tests for BotApiClient and the exception types it raises."""

import asyncio
import sys
import os
from unittest.mock import patch, MagicMock

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botmethods.client import BotApiClient
from botmethods.encoding import encode_json
from botmethods.exceptions import APIException, EncodingError, TransportError, ValidationError
from botmethods.files import FileUpload
from botmethods.methods import (
    GetCustomEmojiStickers,
    GetMe,
    GetStarTransactions,
    RefundStarPayment,
    SendMessage,
    SendSticker,
)
from botmethods.models import Message, Sticker, StarTransactions
from botmethods.objects import User

TOKEN = "123456:ABC-DEF"


def _response(body=None, status_code: int = 200, json_error: Exception = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


def _client(response: MagicMock = None, **kwargs) -> BotApiClient:
    session = MagicMock()
    session.post.return_value = response
    session.get.return_value = response
    return BotApiClient(TOKEN, session=session, **kwargs)


# ── APIException ─────────────────────────────────────────────────────────────


class TestAPIException:
    """Validate the API error type."""

    def test_attributes(self) -> None:
        exc = APIException(403, "Forbidden: bot was blocked by the user", response_body={"ok": False})
        assert exc.error_code == 403
        assert exc.response_body == {"ok": False}
        assert "403" in str(exc)
        assert "blocked" in str(exc)

    def test_default_description(self) -> None:
        exc = APIException(500)
        assert exc.response_body == {}
        assert "Unknown error" in str(exc)

    def test_retry_after(self) -> None:
        exc = APIException(429, "Too Many Requests", {"retry_after": 7})
        assert exc.retry_after == 7
        assert exc.migrate_to_chat_id is None
        assert "retry after 7 seconds" in str(exc)

    def test_migrate_to_chat_id(self) -> None:
        exc = APIException(400, "Bad Request", {"migrate_to_chat_id": -1001})
        assert exc.migrate_to_chat_id == -1001

    def test_is_exception(self) -> None:
        assert issubclass(APIException, Exception)


# ── Construction ─────────────────────────────────────────────────────────────


class TestClientInit:
    """Validate client initialisation."""

    def test_default_url(self) -> None:
        c = BotApiClient(TOKEN)
        assert c._url("getMe") == f"https://api.telegram.org/bot{TOKEN}/getMe"
        c.close()

    def test_custom_template(self) -> None:
        c = BotApiClient(TOKEN, url_template="http://localhost:8081/bot<token>/<method>")
        assert c._url("sendGift") == f"http://localhost:8081/bot{TOKEN}/sendGift"

    def test_default_timeout(self) -> None:
        assert BotApiClient(TOKEN)._timeout == 10

    def test_custom_timeout(self) -> None:
        assert BotApiClient(TOKEN, timeout=30)._timeout == 30

    @pytest.mark.parametrize("token", ["", "   "])
    def test_empty_token(self, token: str) -> None:
        with pytest.raises(ValueError):
            BotApiClient(token)

    @pytest.mark.parametrize(
        "template",
        ["https://api.telegram.org/bot<token>", "api.telegram.org/bot<token>/<method>", "https://x/<token>/<token>/<method>"],
    )
    def test_bad_template(self, template: str) -> None:
        with pytest.raises(ValueError):
            BotApiClient(TOKEN, url_template=template)

    def test_repr_hides_token(self) -> None:
        assert TOKEN not in repr(BotApiClient(TOKEN))

    def test_context_manager_closes_owned_session(self) -> None:
        with patch("botmethods.client.requests.Session") as session_cls:
            with BotApiClient(TOKEN):
                pass
        session_cls.return_value.close.assert_called_once()

    def test_external_session_is_left_open(self) -> None:
        session = MagicMock()
        with BotApiClient(TOKEN, session=session):
            pass
        session.close.assert_not_called()

    def test_from_env(self) -> None:
        with patch("botmethods.client.config.BOT_TOKEN", TOKEN):
            c = BotApiClient.from_env(session=MagicMock())
        assert c._token == TOKEN

    def test_from_env_without_token(self) -> None:
        with patch("botmethods.client.config.BOT_TOKEN", None):
            with pytest.raises(ValueError):
                BotApiClient.from_env()


# ── dispatch ─────────────────────────────────────────────────────────────────


class TestDispatch:
    """Validate envelope decoding and error mapping."""

    def test_success_decodes_result(self) -> None:
        c = _client(_response({"ok": True, "result": True}))
        payload = encode_json(RefundStarPayment(user_id=1, telegram_payment_charge_id="c"))
        assert c.dispatch("refundStarPayment", payload, bool) is True

        call = c._session.post.call_args
        assert call.args[0] == f"https://api.telegram.org/bot{TOKEN}/refundStarPayment"
        assert call.kwargs["headers"] == {"Content-Type": "application/json"}
        assert call.kwargs["data"] is payload.body
        assert call.kwargs["timeout"] == 10

    def test_per_call_timeout(self) -> None:
        c = _client(_response({"ok": True, "result": True}))
        payload = encode_json(RefundStarPayment(user_id=1, telegram_payment_charge_id="c"))
        c.dispatch("refundStarPayment", payload, bool, timeout=2.5)
        assert c._session.post.call_args.kwargs["timeout"] == 2.5

    def test_api_error_raises(self) -> None:
        body = {
            "ok": False,
            "error_code": 429,
            "description": "Too Many Requests: retry after 3",
            "parameters": {"retry_after": 3},
        }
        c = _client(_response(body, status_code=429))
        with pytest.raises(APIException) as exc_info:
            c.execute(RefundStarPayment(user_id=1, telegram_payment_charge_id="c"))
        assert exc_info.value.error_code == 429
        assert exc_info.value.retry_after == 3
        assert exc_info.value.response_body == body

    def test_api_error_without_code_uses_status(self) -> None:
        c = _client(_response({"ok": False, "description": "Unauthorized"}, status_code=401))
        with pytest.raises(APIException) as exc_info:
            c.execute(GetMe())
        assert exc_info.value.error_code == 401
        assert exc_info.value.description == "Unauthorized"

    def test_json_decode_failure(self) -> None:
        """A body that is not JSON is a transport failure, not an API error."""
        c = _client(_response(status_code=502, json_error=ValueError("No JSON")))
        with pytest.raises(TransportError) as exc_info:
            c.execute(GetMe())
        assert exc_info.value.status_code == 502
        assert exc_info.value.endpoint == "getMe"

    def test_invalid_envelope(self) -> None:
        c = _client(_response(["not", "an", "envelope"]))
        with pytest.raises(TransportError):
            c.execute(GetMe())

    def test_unexpected_result_shape(self) -> None:
        c = _client(_response({"ok": True, "result": {"nope": 1}}))
        with pytest.raises(TransportError):
            c.execute(GetMe())

    def test_network_error_is_wrapped(self) -> None:
        c = _client()
        c._session.post.side_effect = requests.ConnectionError("offline")
        with pytest.raises(TransportError) as exc_info:
            c.execute(SendMessage(chat_id=1, text="hi"))
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_timeout_is_wrapped(self) -> None:
        c = _client()
        c._session.get.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportError):
            c.execute(GetMe())


# ── execute ──────────────────────────────────────────────────────────────────


class TestExecute:
    """validate → encode → dispatch, with typed results."""

    def test_validation_error_skips_network(self) -> None:
        c = _client(_response({"ok": True, "result": True}))
        with pytest.raises(ValidationError) as exc_info:
            c.execute(SendMessage(chat_id=0, text=""))
        assert exc_info.value.fields == ["chat_id", "text"]
        c._session.post.assert_not_called()

    def test_get_me_returns_user(self) -> None:
        c = _client(_response({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot", "extra": 1}}))
        user = c.execute(GetMe())
        assert isinstance(user, User)
        assert user.first_name == "Bot"
        c._session.get.assert_called_once()
        assert c._session.get.call_args.kwargs["params"] == {}

    def test_send_message_returns_message(self) -> None:
        result = {
            "message_id": 10,
            "date": 1700000000,
            "chat": {"id": 42, "type": "private"},
            "from": {"id": 1, "is_bot": True, "first_name": "Bot"},
            "text": "hello",
        }
        c = _client(_response({"ok": True, "result": result}))
        message = c.execute(SendMessage(chat_id=42, text="hello"))
        assert isinstance(message, Message)
        assert message.from_user.first_name == "Bot"
        assert message.chat.id == 42

    def test_list_result(self) -> None:
        sticker = {
            "file_id": "f",
            "file_unique_id": "u",
            "type": "custom_emoji",
            "width": 100,
            "height": 100,
            "is_animated": False,
            "is_video": False,
        }
        c = _client(_response({"ok": True, "result": [sticker]}))
        stickers = c.execute(GetCustomEmojiStickers(custom_emoji_ids=["1"]))
        assert len(stickers) == 1
        assert isinstance(stickers[0], Sticker)

    def test_get_request_uses_query(self) -> None:
        c = _client(_response({"ok": True, "result": {"transactions": []}}))
        result = c.execute(GetStarTransactions(limit=5))
        assert isinstance(result, StarTransactions)
        assert c._session.get.call_args.kwargs["params"] == {"limit": "5"}

    def test_multipart_upload(self) -> None:
        captured = {}

        def fake_post(url, data=None, headers=None, timeout=None):
            captured["body"] = b"".join(data)
            captured["content_type"] = headers["Content-Type"]
            return _response({"ok": True, "result": {
                "message_id": 1, "date": 0, "chat": {"id": 1, "type": "private"},
            }})

        c = _client()
        c._session.post.side_effect = fake_post
        c.execute(SendSticker(chat_id=1, sticker=FileUpload.from_bytes(b"STICKER", "s.webp")))

        assert captured["content_type"].startswith("multipart/form-data; boundary=")
        assert b'name="sticker"; filename="s.webp"' in captured["body"]
        assert b"STICKER" in captured["body"]

    def test_payload_closed_after_dispatch(self) -> None:
        c = _client(_response({"ok": True, "result": True}))
        c.execute(RefundStarPayment(user_id=1, telegram_payment_charge_id="c"))
        assert c._session.post.call_args.kwargs["data"].closed

    def test_encoding_error_propagates(self, tmp_path) -> None:
        def fake_post(url, data=None, headers=None, timeout=None):
            b"".join(data)

        c = _client()
        c._session.post.side_effect = fake_post
        method = SendSticker(chat_id=1, sticker=FileUpload.from_path(tmp_path / "missing.webp"))
        with pytest.raises(EncodingError):
            c.execute(method)

    def test_execute_async(self) -> None:
        c = _client(_response({"ok": True, "result": True}))
        result = asyncio.run(c.execute_async(RefundStarPayment(user_id=1, telegram_payment_charge_id="c")))
        assert result is True


# ── Logging ──────────────────────────────────────────────────────────────────


class TestClientLogging:
    """The dispatcher logs with api_endpoint context."""

    def test_api_error_logged_as_warning(self) -> None:
        c = _client(_response({"ok": False, "error_code": 400, "description": "Bad Request"}, status_code=400))
        with patch("botmethods.client.logger") as mock_logger:
            with pytest.raises(APIException):
                c.execute(RefundStarPayment(user_id=1, telegram_payment_charge_id="c"))
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["extra"]["api_endpoint"] == "refundStarPayment"

    def test_validation_rejection_logged(self) -> None:
        c = _client()
        with patch("botmethods.client.logger") as mock_logger:
            with pytest.raises(ValidationError):
                c.execute(SendMessage(chat_id=0, text="hi"))
        assert mock_logger.warning.call_args.kwargs["extra"]["violations"] == 1

    def test_transport_error_logged(self) -> None:
        c = _client()
        c._session.post.side_effect = requests.ConnectionError("offline")
        with patch("botmethods.client.logger") as mock_logger:
            with pytest.raises(TransportError):
                c.execute(SendMessage(chat_id=1, text="hi"))
        mock_logger.error.assert_called_once()
