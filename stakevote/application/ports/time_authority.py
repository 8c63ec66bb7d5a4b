"""Time Authority Protocol - interface for clock readings.

This port defines the contract for obtaining the current time. Every
service that needs "now" MUST inject a TimeAuthorityProtocol
implementation instead of reading the host clock directly.

Time is expressed as integer epoch seconds, the unit round windows are
stored in.

Benefits:
1. **Determinism**: Round and withdrawal timing is reproducible
2. **Testability**: Tests can inject FakeTimeAuthority and advance time
3. **Consistency**: All services read time from a single source
"""

from abc import ABC, abstractmethod


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.now()  # NOT time.time()
                ...

    For production:
        Use SystemTimeAuthority from stakevote/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> int:
        """Return the current time.

        Returns:
            Current time in whole epoch seconds.
        """
        ...
