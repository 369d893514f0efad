"""
Capability Gate
Decides which phonemes are available: a fixed free set plus everything
once premium content is unlocked.
"""
import logging
from typing import Callable, Iterable, Optional

from speech_practice.config import settings


logger = logging.getLogger(__name__)


class CapabilityGate:
    """
    Boolean gate over premium content.

    `subscription_status` is any zero-argument callable returning whether
    premium content is unlocked (subscription state lives elsewhere).
    """

    def __init__(
        self,
        free_phonemes: Optional[Iterable[str]] = None,
        subscription_status: Optional[Callable[[], bool]] = None
    ):
        free = settings.FREE_PHONEMES if free_phonemes is None else free_phonemes
        self.free_phonemes = {self.normalize(s) for s in free}
        self._subscription_status = subscription_status or (lambda: settings.PREMIUM_UNLOCKED)

    @staticmethod
    def normalize(symbol: str) -> str:
        """Compare symbols without their enclosing slashes (/p/ -> p)."""
        return symbol.strip().strip("/")

    def is_premium_unlocked(self) -> bool:
        return bool(self._subscription_status())

    def is_unlocked(self, symbol: str, premium_unlocked: Optional[bool] = None) -> bool:
        """
        Whether a phoneme can be practiced.

        Args:
            symbol: Phoneme symbol, with or without slashes
            premium_unlocked: Previously read subscription flag; read now if None
        """
        if self.normalize(symbol) in self.free_phonemes:
            return True
        if premium_unlocked is None:
            premium_unlocked = self.is_premium_unlocked()
        return premium_unlocked


# Singleton instance
capability_gate = CapabilityGate()
