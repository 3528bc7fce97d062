"""Conversation session orchestration"""

from enum import Enum
from typing import Callable, List, Optional

from ..models.config import ChatSettings
from ..models.conversation import CompletionResult, Turn
from ..utils import logger
from ..utils.response_diagnostics import ResponseDiagnostics
from .config_validator import check_api_key_format
from .errors import ChatToolkitError, CredentialMissingError, SessionBusyError
from .model_profiles import ModelProfileResolver
from .request_builder import RequestBuilder
from .response_validator import ResponseValidator
from .token_budget import HistorySelector, estimate_turns
from .transport import TransportClient


# Called synchronously at the start of every call, so it must be cheap.
# ConfigLoader only re-parses its file when the file's mtime or size changes.
SettingsSource = Callable[[], ChatSettings]


class SessionState(Enum):
    """Controller states"""
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class SessionController:
    """Own one conversation's history and run one call at a time

    Each submit() re-reads settings, selects the most recent history that
    fits in half of max_tokens, sends [system, *history, user] through the
    transport and, on success only, commits the (user, assistant) pair and
    trims the stored history back to the same budget.
    """

    def __init__(
        self,
        settings_source: SettingsSource,
        transport: Optional[TransportClient] = None,
        resolver: Optional[ModelProfileResolver] = None,
        builder: Optional[RequestBuilder] = None,
        selector: Optional[HistorySelector] = None,
        debug_mode: bool = False,
    ):
        """
        Initialize session controller

        Args:
            settings_source: Callable returning the live settings snapshot
            transport: Transport client (created when omitted)
            resolver: Model profile resolver
            builder: Request payload builder
            selector: History window selector
            debug_mode: Log raw upstream responses
        """
        self.settings_source = settings_source
        self.transport = transport or TransportClient()
        self.resolver = resolver or ModelProfileResolver()
        self.builder = builder or RequestBuilder()
        self.selector = selector or HistorySelector()
        self.debug_mode = debug_mode

        self._history: List[Turn] = []
        self._state = SessionState.IDLE
        self._reset_pending = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> List[Turn]:
        """Committed history, oldest first"""
        return list(self._history)

    @property
    def reset_pending(self) -> bool:
        return self._reset_pending

    def reset(self) -> None:
        """Clear history; deferred until the in-flight call completes"""
        if self._state is SessionState.AWAITING_RESPONSE:
            self._reset_pending = True
            logger.info("History reset deferred until current request completes")
            return

        self._history = []
        self._reset_pending = False
        logger.info("Conversation history cleared")

    async def close(self) -> None:
        """Release the transport's HTTP client"""
        await self.transport.close()

    async def submit(self, text: str) -> str:
        """
        Run one conversational round

        Args:
            text: The new user message

        Returns:
            The assistant's reply

        Raises:
            CredentialMissingError: If no credential is configured
            ConfigurationError: If the settings source cannot produce valid settings
            SessionBusyError: If another call is outstanding
            TransportFailure: Timeout, network failure or upstream rejection
            ValidationFailure: Unparseable, empty or textless response
        """
        result = await self.complete(text)
        return result.text

    async def complete(self, text: str) -> CompletionResult:
        """Like submit(), returning the full CompletionResult"""
        if self._state is SessionState.AWAITING_RESPONSE:
            raise SessionBusyError()

        settings = self.settings_source()
        if not settings.api_key:
            logger.error("Request rejected: no API key configured")
            raise CredentialMissingError()

        for warning in check_api_key_format(settings.api_key):
            logger.warning(f"API key validation: {warning}")

        self._state = SessionState.AWAITING_RESPONSE
        logger.generate_request_id()

        try:
            result = await self._round_trip(settings, text)
            self._commit(text, result.text, settings.history_budget)
            return result

        except ChatToolkitError as e:
            logger.log_upstream_error(
                error_kind=e.code,
                error_message=e.message,
                status=getattr(e, "status", None),
                model=settings.model,
            )
            raise

        finally:
            self._state = SessionState.IDLE
            if self._reset_pending:
                self.reset()
            logger.set_request_id(None)

    async def _round_trip(self, settings: ChatSettings, text: str) -> CompletionResult:
        """Select history, build the payload, send it and validate the reply"""
        budget = settings.history_budget
        window, window_tokens = self.selector.select_with_cost(self._history, budget)
        logger.log_history_window(
            phase="request",
            kept=len(window),
            dropped=len(self._history) - len(window),
            estimated_tokens=window_tokens,
            budget=budget,
        )

        profile = self.resolver.resolve(settings.model)
        payload = self.builder.build(profile, settings, window, text)
        url = f"{settings.api_base}/{profile.endpoint_path}"

        logger.log_request(
            model=settings.model,
            endpoint=url,
            message_count=len(window) + 2,
            history_turns=len(window),
            user_chars=len(text),
            max_tokens=settings.max_tokens,
        )

        body = await self.transport.send(url, payload, settings.api_key, settings.timeout)

        if self.debug_mode:
            logger.log_raw_response(
                model=settings.model,
                response_data=ResponseDiagnostics.describe_body(body),
            )

        result = ResponseValidator.validate(body)
        logger.log_completion(
            model=result.model or settings.model,
            response_chars=len(result.text),
            usage=result.usage.model_dump() if result.usage else None,
        )
        return result

    def _commit(self, user_text: str, reply: str, budget: int) -> None:
        """Append the exchange and trim stored history to budget"""
        extended = self._history + [
            Turn(role="user", content=user_text),
            Turn(role="assistant", content=reply),
        ]
        self._history = self.selector.select(extended, budget)
        logger.log_history_window(
            phase="storage",
            kept=len(self._history),
            dropped=len(extended) - len(self._history),
            estimated_tokens=estimate_turns(self._history),
            budget=budget,
        )
