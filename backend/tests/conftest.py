"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory vault, OTP storage with a controllable clock, a recording
email sender, a simulated biometric device and a mocked credential gateway,
wired into a session state machine with no bootstrap delay.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import AsyncMock, MagicMock
import jwt  # PyJWT

from shared.config import get_settings
from shared.database import reset_client_cache
from shared.models import UserIdentity
from modules.credentials import AuthResult, CredentialCheck, reset_credential_gateway
from modules.email import EmailMessage, reset_email_sender
from modules.otp import InMemoryOTPStorage, OTPService, reset_otp_service
from modules.vault import InMemorySecureStore, TokenVault, reset_token_vault
from modules.biometric import BiometricGate, SimulatedBiometricDevice, reset_biometric_gate
from modules.session import AppStateChannel, AuthSessionStateMachine


TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_EMAIL = "jane.doe@example.com"
TEST_PASSWORD = "Secret123!"


def create_test_token(user_id: str = "user-123", expired: bool = False) -> str:
    """Create a provider-shaped access token."""
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


class FakeClock:
    """Controllable UTC clock for expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingEmailSender:
    """Email sender that keeps every message instead of sending it."""

    def __init__(self, configured: bool = True, result: bool = True):
        self.sent: list[EmailMessage] = []
        self._configured = configured
        self._result = result

    @property
    def is_configured(self) -> bool:
        return self._configured

    async def send(self, message: EmailMessage) -> bool:
        if not self._configured:
            return False
        self.sent.append(message)
        return self._result


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons before and after each test."""
    from api.dependencies import reset_container

    def reset():
        reset_container()
        reset_credential_gateway()
        reset_email_sender()
        reset_otp_service()
        reset_token_vault()
        reset_biometric_gate()
        reset_client_cache()
        get_settings.cache_clear()

    reset()
    yield
    reset()


@pytest.fixture
def make_token():
    """Factory for provider-shaped access tokens."""
    return create_test_token


@pytest.fixture
def test_user() -> UserIdentity:
    """Provide a consistent signed-in identity."""
    return UserIdentity(id="user-123", name="Jane", email=TEST_EMAIL)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def otp_storage() -> InMemoryOTPStorage:
    return InMemoryOTPStorage()


@pytest.fixture
def otp_service(otp_storage, email_sender, clock) -> OTPService:
    return OTPService(otp_storage, email_sender, ttl_seconds=300, clock=clock)


@pytest.fixture
def issued_code(otp_storage):
    """Read back the outstanding code for an email."""

    async def _issued_code(email: str = TEST_EMAIL) -> str:
        challenge = await otp_storage.get(email.strip().lower())
        assert challenge is not None, f"no code issued for {email}"
        return challenge.code

    return _issued_code


@pytest.fixture
def secure_store() -> InMemorySecureStore:
    return InMemorySecureStore()


@pytest.fixture
def vault(secure_store) -> TokenVault:
    return TokenVault(secure_store)


@pytest.fixture
def biometric_device() -> SimulatedBiometricDevice:
    return SimulatedBiometricDevice()


@pytest.fixture
def biometric_gate(biometric_device) -> BiometricGate:
    return BiometricGate(biometric_device)


@pytest.fixture
def gateway(test_user, make_token) -> MagicMock:
    """Credential gateway double with successful defaults."""
    access, refresh = make_token(), "refresh-1"
    gw = MagicMock()
    gw.validate_credentials = AsyncMock(return_value=CredentialCheck())
    gw.login = AsyncMock(
        return_value=AuthResult(user=test_user, access_token=access, refresh_token=refresh)
    )
    gw.create_account = AsyncMock(
        return_value=AuthResult(user=test_user, access_token=access, refresh_token=refresh)
    )
    gw.restore_session = AsyncMock(
        return_value=AuthResult(user=test_user, access_token=access, refresh_token=refresh)
    )
    gw.fetch_current_identity = AsyncMock(return_value=test_user)
    gw.revoke_server_session = AsyncMock(return_value=None)
    return gw


@pytest.fixture
def app_state_channel() -> AppStateChannel:
    return AppStateChannel()


@pytest.fixture
def machine(gateway, otp_service, vault, biometric_gate, app_state_channel):
    """State machine over the test doubles, attached to the app-state channel."""
    sm = AuthSessionStateMachine(
        gateway=gateway,
        otp=otp_service,
        vault=vault,
        biometric=biometric_gate,
        app_state_channel=app_state_channel,
        bootstrap_min_duration=0,
    )
    sm.attach()
    yield sm
    sm.detach()
