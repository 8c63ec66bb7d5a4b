"""Round manager service.

Owns round identity, the open/close time window, and the round-creation
policy. This is the leaf authority for "is voting open now".

Round Creation Rules (checked in order):
1. Caller must be the designated authority (AuthorizationError)
2. Neither start nor end may be zero (ConfigurationError)
3. Start must lie strictly in the future (ConfigurationError)
4. Start must be strictly before end (ConfigurationError)
5. Unless the permissive policy is configured, the previous round must
   have ended (ConfigurationError)

On success the next round id is allocated, the window stored, and a
round.opened event emitted.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from stakevote.application.services.base import LoggingMixin
from stakevote.config.voting_config import DEFAULT_VOTING_CONFIG, VotingConfig
from stakevote.domain.errors import (
    AuthorizationError,
    ConfigurationError,
    ConfigurationErrorReason,
)
from stakevote.domain.events import ROUND_OPENED_EVENT_TYPE, RoundOpenedPayload
from stakevote.domain.models.round import RoundRegistry, RoundWindow

if TYPE_CHECKING:
    from stakevote.application.ports.access_gate import AccessGateProtocol
    from stakevote.application.ports.time_authority import TimeAuthorityProtocol
    from stakevote.application.ports.voting_event_emitter import (
        VotingEventEmitterProtocol,
    )


class RoundManagerService(LoggingMixin):
    """Service for opening rounds and answering whether voting is open.

    Example:
        >>> manager = RoundManagerService(
        ...     registry=RoundRegistry(),
        ...     access_gate=gate,
        ...     time_authority=clock,
        ...     event_emitter=emitter,
        ... )
        >>> window = await manager.open_round(
        ...     start_time=clock.now() + 10,
        ...     end_time=clock.now() + 86400,
        ...     description="Adopt the new fee schedule",
        ...     caller_id="owner",
        ... )
        >>> window.round_id
        1
    """

    def __init__(
        self,
        registry: RoundRegistry,
        access_gate: AccessGateProtocol,
        time_authority: TimeAuthorityProtocol,
        event_emitter: VotingEventEmitterProtocol,
        config: VotingConfig = DEFAULT_VOTING_CONFIG,
        write_lock: asyncio.Lock | None = None,
    ) -> None:
        """Initialize the round manager.

        Args:
            registry: Store of all rounds, owned by the engine.
            access_gate: Authority check for round creation.
            time_authority: Injected clock.
            event_emitter: Sink for round.opened events.
            config: Round creation policy.
            write_lock: Single-writer lock shared with the other services.
        """
        self._registry = registry
        self._access_gate = access_gate
        self._time = time_authority
        self._event_emitter = event_emitter
        self._config = config
        self._write_lock = write_lock if write_lock is not None else asyncio.Lock()
        self._init_logger()

    async def open_round(
        self,
        start_time: int,
        end_time: int,
        description: str,
        caller_id: str,
    ) -> RoundWindow:
        """Open the next voting round.

        The start time is checked against the injected time authority;
        callers cannot supply their own clock reading.

        Args:
            start_time: Inclusive start of voting, epoch seconds.
            end_time: Exclusive end of voting, epoch seconds.
            description: Free-text description of the round.
            caller_id: Identity requesting the round.

        Returns:
            The newly created round window.

        Raises:
            AuthorizationError: Caller is not the designated authority.
            ConfigurationError: Window is zero, past, reversed, or the
                previous round is still live.
        """
        log = self._log_operation(
            "open_round",
            caller_id=caller_id,
            start_time=start_time,
            end_time=end_time,
        )

        async with self._write_lock:
            now = self._time.now()

            if not await self._access_gate.is_authority(caller_id):
                log.warning("Round creation rejected - caller is not the authority")
                raise AuthorizationError(caller_id, operation="open_round")

            reason = self._window_rejection(start_time, end_time, now)
            if reason is not None:
                log.warning("Round creation rejected", reason=reason.value, now=now)
                raise ConfigurationError(reason, start_time, end_time, now)

            window = self._registry.append(start_time, end_time, description)

            emitted = await self._event_emitter.emit(
                ROUND_OPENED_EVENT_TYPE,
                RoundOpenedPayload(
                    start_time=window.start_time,
                    end_time=window.end_time,
                    round_id=window.round_id,
                    description=window.description,
                ),
            )
            if not emitted:
                log.warning("Event emission failed", event_type=ROUND_OPENED_EVENT_TYPE)

        log.info("Round opened", round_id=window.round_id)
        return window

    def _window_rejection(
        self, start_time: int, end_time: int, now: int
    ) -> ConfigurationErrorReason | None:
        if start_time == 0 or end_time == 0:
            return ConfigurationErrorReason.ZERO_TIME
        if start_time <= now:
            return ConfigurationErrorReason.START_NOT_IN_FUTURE
        if start_time >= end_time:
            return ConfigurationErrorReason.START_NOT_BEFORE_END
        if (
            self._config.require_previous_round_ended
            and not self._registry.current.has_ended(now)
        ):
            return ConfigurationErrorReason.PREVIOUS_ROUND_LIVE
        return None

    def is_open(self, now: int | None = None) -> bool:
        """Check whether the current round is accepting votes.

        Args:
            now: Optional clock override; defaults to the time authority.

        Returns:
            True iff start_time <= now < end_time for the current round.
        """
        now = self._time.now() if now is None else now
        return self._registry.current.is_open(now)

    def current_window(self) -> RoundWindow:
        """Return (start, end, round_id, description) of the current round."""
        return self._registry.current

    def get_round(self, round_id: int) -> RoundWindow | None:
        """Return any past or current round by id, or None if unknown."""
        return self._registry.get(round_id)

    def has_ended(self, round_id: int, now: int | None = None) -> bool:
        """Check whether a round's window has fully passed.

        Unknown round ids are reported as ended: nothing can still be
        voted on in them.
        """
        now = self._time.now() if now is None else now
        window = self._registry.get(round_id)
        return window is None or window.has_ended(now)
