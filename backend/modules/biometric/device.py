"""
Simulated biometric device.

Stands in for the native sensor where there is none (the API process,
demos and tests). Answers come from its configuration or from a queue of
scripted results.
"""

from collections import deque
from typing import Iterable, Optional

from .models import AuthenticationType, BiometricResult


class SimulatedBiometricDevice:
    """
    Biometric device with configurable capabilities.

    Each authenticate() call pops the next scripted result; with no script
    left it answers ``default_success``. The last prompt shown is kept in
    ``last_prompt`` for inspection.
    """

    def __init__(
        self,
        supported_types: Optional[Iterable[AuthenticationType]] = None,
        enrolled: bool = True,
        default_success: bool = True,
    ):
        self._types = list(supported_types) if supported_types is not None else [
            AuthenticationType.FACIAL_RECOGNITION
        ]
        self._enrolled = enrolled
        self._default_success = default_success
        self._scripted: deque[BiometricResult] = deque()
        self.last_prompt: Optional[str] = None
        self.prompt_count = 0

    def script(self, *results: BiometricResult) -> None:
        """Queue results for the next prompts."""
        self._scripted.extend(results)

    async def has_hardware(self) -> bool:
        return bool(self._types)

    async def is_enrolled(self) -> bool:
        return self._enrolled

    async def supported_authentication_types(self) -> list[AuthenticationType]:
        return list(self._types)

    async def authenticate(
        self,
        prompt_message: str,
        cancel_label: str = "Cancel",
        fallback_label: str = "Use Passcode",
        disable_device_fallback: bool = False,
    ) -> BiometricResult:
        self.last_prompt = prompt_message
        self.prompt_count += 1
        if self._scripted:
            return self._scripted.popleft()
        if self._default_success:
            return BiometricResult(success=True)
        return BiometricResult(success=False, error="user_cancel")
