import asyncio

import structlog

from src.application.interfaces.otp_challenge_store import OtpChallengeStore
from src.domain.entities.otp_challenge import OtpChallenge

logger = structlog.get_logger(__name__)


class InMemoryOtpChallengeStore(OtpChallengeStore):
    """
    Process-wide challenge map guarded by a single lock.

    Challenges never expire and the map is unbounded; restarting the process
    drops every pending challenge.
    """

    def __init__(self) -> None:
        self._challenges: dict[str, OtpChallenge] = {}
        self._lock = asyncio.Lock()

    async def put(self, email: str, challenge: OtpChallenge) -> None:
        async with self._lock:
            replaced = self._challenges.get(email)
            self._challenges[email] = challenge
        if replaced is not None:
            logger.info(
                "otp_challenge_replaced",
                previous_listing_id=replaced.listing_id,
                listing_id=challenge.listing_id,
            )

    async def get(self, email: str) -> OtpChallenge | None:
        async with self._lock:
            return self._challenges.get(email)

    async def remove(self, email: str, *, expected: OtpChallenge | None = None) -> bool:
        async with self._lock:
            current = self._challenges.get(email)
            if current is None:
                return False
            if expected is not None and current != expected:
                return False
            del self._challenges[email]
            return True

    def __len__(self) -> int:
        return len(self._challenges)
