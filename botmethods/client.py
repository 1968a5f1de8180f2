"""BotApiClient -- dispatcher executing operations against the Telegram Bot API.

Every call goes through the same sequence: validate locally, encode to a
JSON or multipart payload, send it with ``requests`` and decode the response
envelope into the operation's declared result type.

The credential is injected per client, so several bots can share a process.
The async wrapper offloads blocking I/O via :func:`asyncio.to_thread`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from botmethods.core import config
from botmethods.core.logger import BotMethodsLogger
from botmethods.encoding import TransportPayload
from botmethods.exceptions import APIException, TransportError
from botmethods.methods.base import TelegramMethod
from botmethods.models import APIResponse

logger = BotMethodsLogger.get_logger(config.LOG_LEVEL)


class BotApiClient:
    """Synchronous dispatcher for :class:`TelegramMethod` operations.

    Usage::

        with BotApiClient(token) as bot:
            me = bot.execute(GetMe())
    """

    _DEFAULT_TIMEOUT: float = config.DEFAULT_TIMEOUT

    def __init__(
        self,
        token: str,
        url_template: str = config.DEFAULT_URL_TEMPLATE,
        timeout: float = _DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a client bound to one bot token.

        Args:
            token: Bot token issued by @BotFather.
            url_template: Endpoint URL with ``<token>`` and ``<method>`` placeholders.
            timeout: Default request timeout in seconds.
            session: Optional :class:`requests.Session`; one is created and owned otherwise.

        Raises:
            ValueError: If the token is empty or the template is malformed.
        """
        if not token or not token.strip():
            raise ValueError("bot token can't be empty")
        if not config.is_valid_url_template(url_template):
            raise ValueError(f"invalid API URL template: {url_template!r}")
        self._token = token
        self._url_template = url_template
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "BotApiClient":
        """Build a client from ``BOT_TOKEN``, ``BOTMETHODS_API_URL`` and ``BOTMETHODS_TIMEOUT``.

        Raises:
            ValueError: If ``BOT_TOKEN`` is not set.
        """
        if not config.BOT_TOKEN:
            raise ValueError("BOT_TOKEN is not set")
        return cls(
            config.BOT_TOKEN,
            url_template=config.API_URL_TEMPLATE,
            timeout=config.REQUEST_TIMEOUT,
            session=session,
        )

    # ------------------------------------------------------------------
    #  Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "BotApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        # Never leak the token.
        return f"BotApiClient(url_template={self._url_template!r}, timeout={self._timeout!r})"

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _url(self, endpoint: str) -> str:
        return self._url_template.replace("<token>", self._token).replace("<method>", endpoint)

    def _send(
        self,
        endpoint: str,
        payload: TransportPayload,
        http_method: str,
        timeout: float,
    ) -> requests.Response:
        headers: Dict[str, str] = {}
        if payload.content_type:
            headers["Content-Type"] = payload.content_type
        try:
            if http_method == "GET":
                return self._session.get(self._url(endpoint), params=payload.params, timeout=timeout)
            return self._session.post(self._url(endpoint), data=payload.body, headers=headers, timeout=timeout)
        except requests.RequestException as exc:
            logger.error(
                "Telegram request failed",
                extra={"api_endpoint": endpoint, "error": str(exc)},
            )
            raise TransportError(f"{endpoint}: request failed: {exc}", endpoint=endpoint) from exc

    # ------------------------------------------------------------------
    #  Public API
    # ------------------------------------------------------------------

    def dispatch(
        self,
        endpoint: str,
        payload: TransportPayload,
        result_type: Any = bool,
        http_method: str = "POST",
        timeout: Optional[float] = None,
    ) -> Any:
        """Send an encoded payload and decode the response envelope.

        Args:
            endpoint: Remote method name, e.g. ``"sendInvoice"``.
            payload: Encoded request body and its content type.
            result_type: Shape ``result`` is decoded into (``bool``, a model, ``List[model]``…).
            http_method: ``"POST"`` or ``"GET"``.
            timeout: Per-call timeout in seconds, the client default otherwise.

        Raises:
            TransportError: On network failures or a body that is not a valid envelope.
            APIException: If Telegram answered with ``ok: false``.
            EncodingError: If the payload stream fails while being sent.
        """
        logger.debug(
            "Dispatching Telegram request",
            extra={
                "api_endpoint": endpoint,
                "http_method": http_method,
                "content_type": payload.content_type,
            },
        )
        response = self._send(endpoint, payload, http_method, timeout if timeout is not None else self._timeout)

        try:
            body = response.json()
            envelope = APIResponse.model_validate(body)
        except (ValueError, PydanticValidationError) as exc:
            logger.error(
                "Telegram response is not a valid envelope",
                extra={"api_endpoint": endpoint, "status_code": response.status_code, "error": str(exc)},
            )
            raise TransportError(
                f"{endpoint}: invalid response (HTTP {response.status_code})",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from exc

        if not envelope.ok:
            parameters = envelope.parameters.model_dump(exclude_none=True) if envelope.parameters else None
            error_code = envelope.error_code or response.status_code
            logger.warning(
                "Telegram API error",
                extra={"api_endpoint": endpoint, "error_code": error_code, "description": envelope.description},
            )
            raise APIException(error_code, envelope.description, parameters, body)

        try:
            result = TypeAdapter(result_type).validate_python(envelope.result)
        except PydanticValidationError as exc:
            raise TransportError(
                f"{endpoint}: unexpected result shape",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from exc

        logger.info("Telegram request succeeded", extra={"api_endpoint": endpoint})
        return result

    def execute(self, method: TelegramMethod, timeout: Optional[float] = None) -> Any:
        """Validate, encode and dispatch *method*.

        Raises:
            ValidationError: Before any network I/O if *method* breaks a rule.
            EncodingError: If the request body can't be produced.
            TransportError: On network failures.
            APIException: If Telegram rejected the request.
        """
        error = method.validate()
        if error is not None:
            logger.warning(
                "Request rejected by local validation",
                extra={"api_endpoint": method.endpoint, "violations": len(error)},
            )
            raise error

        payload = method.encode()
        try:
            return self.dispatch(
                method.endpoint,
                payload,
                result_type=method.result_type,
                http_method=method.http_method,
                timeout=timeout,
            )
        finally:
            payload.close()

    async def execute_async(self, method: TelegramMethod, timeout: Optional[float] = None) -> Any:
        """Run :meth:`execute` in a worker thread so the event loop is never blocked."""
        return await asyncio.to_thread(self.execute, method, timeout)
