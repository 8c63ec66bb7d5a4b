"""Wall-clock time authority adapter.

The only place in the codebase allowed to read the host clock.
"""

import time

from stakevote.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """TimeAuthorityProtocol backed by the host clock, in whole epoch seconds."""

    def now(self) -> int:
        return int(time.time())
