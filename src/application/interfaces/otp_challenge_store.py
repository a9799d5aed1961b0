from abc import ABC, abstractmethod

from src.domain.entities.otp_challenge import OtpChallenge


class OtpChallengeStore(ABC):
    """Port for pending OTP challenges. At most one challenge per email."""

    @abstractmethod
    async def put(self, email: str, challenge: OtpChallenge) -> None:
        """Store ``challenge``, discarding any prior challenge for ``email``."""
        ...

    @abstractmethod
    async def get(self, email: str) -> OtpChallenge | None:
        ...

    @abstractmethod
    async def remove(self, email: str, *, expected: OtpChallenge | None = None) -> bool:
        """
        Drop the challenge for ``email``.

        When ``expected`` is given, only remove if the stored challenge is
        still that one. Returns whether anything was removed.
        """
        ...
