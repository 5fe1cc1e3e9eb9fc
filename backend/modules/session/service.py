"""
Auth session state machine.

Composes the credential gateway, OTP service, token vault and biometric
gate into the one authoritative session of the process. Every transition
runs under a single asyncio.Lock, so no two transitions interleave and the
app-state guard always sees either the state before a transition or the
state after it.

Transitions:
    bootstrap             Unbootstrapped -> Unauthenticated | Authenticated-*
    start_login           credential check, then OTP issue (login flow)
    start_signup          OTP issue (signup flow)
    verify_otp            login: session creation / signup: go create password
    create_account        signup session, always routed to biometric setup
    setup_biometric       commit to biometric unlock
    skip_biometric_setup  signup: abandon session / login: keep it
    unlock_with_biometric returning session -> main app
    complete_signup       leave the post-signup screen
    sign_out              any -> Unauthenticated
    handle_app_state      background guard
"""

import asyncio
import logging
import time
from typing import Optional

from modules.credentials import ICredentialGateway, NoSessionError
from modules.otp import IOTPService, normalize_email
from modules.vault import ITokenVault, VaultError
from modules.biometric import (
    BiometricFailedError,
    BiometricKind,
    BiometricUnavailableError,
    IBiometricGate,
)

from .exceptions import InvalidTransitionError
from .lifecycle import AppStateChannel, Subscription
from .models import (
    AppState,
    AuthFlow,
    BiometricStatus,
    FlowContext,
    FlowStep,
    Route,
    Session,
    SessionSnapshot,
)
from .passwords import validate_password

logger = logging.getLogger(__name__)

DEFAULT_BOOTSTRAP_MIN_DURATION = 2.0
UNLOCK_PROMPT = "Verify your identity to continue"


class AuthSessionStateMachine:
    """
    Single owner of the authentication session.

    Use as an async context manager to register with the app-state channel
    for the lifetime of the block:

        async with machine:
            await machine.bootstrap()
            ...
    """

    def __init__(
        self,
        gateway: ICredentialGateway,
        otp: IOTPService,
        vault: ITokenVault,
        biometric: IBiometricGate,
        app_state_channel: Optional[AppStateChannel] = None,
        bootstrap_min_duration: float = DEFAULT_BOOTSTRAP_MIN_DURATION,
    ):
        self._gateway = gateway
        self._otp = otp
        self._vault = vault
        self._biometric = biometric
        self._channel = app_state_channel or AppStateChannel()
        self._bootstrap_min_duration = bootstrap_min_duration

        self._session = Session()
        self._lock = asyncio.Lock()
        self._subscription: Optional[Subscription] = None
        # Email whose signup OTP was verified and that may now create an account.
        self._verified_signup_email: Optional[str] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def app_state_channel(self) -> AppStateChannel:
        return self._channel

    @property
    def attached(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def attach(self) -> None:
        """Register the background guard. Idempotent."""
        if not self.attached:
            self._subscription = self._channel.add_listener(self.handle_app_state)

    def detach(self) -> None:
        """Unregister the background guard."""
        if self._subscription is not None:
            self._subscription.remove()
            self._subscription = None

    async def __aenter__(self) -> "AuthSessionStateMachine":
        self.attach()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.detach()

    def snapshot(self) -> SessionSnapshot:
        """
        Current session view.

        Transitions only mutate the session in synchronous blocks, so a
        snapshot never shows half of a transition.
        """
        return self._session.snapshot()

    # -------------------------------------------------------------------------
    # Bootstrap
    # -------------------------------------------------------------------------

    async def bootstrap(self) -> SessionSnapshot:
        """
        Recover a persisted session, then mark bootstrap done.

        bootstrap_done flips no earlier than the minimum duration after the
        call started, however fast recovery is, so the splash screen has a
        guaranteed display time.
        """
        if self._session.bootstrap_done:
            return self.snapshot()

        started = time.monotonic()
        async with self._lock:
            await self._restore_session()

        remaining = self._bootstrap_min_duration - (time.monotonic() - started)
        if remaining > 0:
            await asyncio.sleep(remaining)

        async with self._lock:
            self._session.bootstrap_done = True
        snapshot = self.snapshot()
        logger.info(f"Bootstrap complete: {snapshot.state.value}")
        return snapshot

    async def _restore_session(self) -> None:
        if self._session.user is not None:
            logger.info("Bootstrap: session already established, skipping restore")
            return

        try:
            access_token = await self._vault.get_access()
            refresh_token = await self._vault.get_refresh()
        except VaultError as e:
            logger.error(f"Could not read persisted tokens: {e.message}")
            return

        if not access_token or not refresh_token:
            logger.info("Bootstrap: no persisted session")
            return

        try:
            restored = await self._gateway.restore_session(access_token, refresh_token)
            user = await self._gateway.fetch_current_identity()
        except NoSessionError as e:
            logger.info(f"Bootstrap: persisted session not usable ({e.message})")
            return

        if restored.has_session:
            access_token, refresh_token = restored.access_token, restored.refresh_token

        try:
            await self._vault.save(access_token, refresh_token)
            biometric_enabled = await self._vault.is_biometric_enabled()
        except VaultError as e:
            logger.error(f"Could not persist restored session: {e.message}")
            return
        logger.info(f"Bootstrap: user authenticated, biometric enabled: {biometric_enabled}")

        self._session.establish(user, access_token, refresh_token)
        self._session.biometric_setup_completed = True
        self._session.show_biometric_login = biometric_enabled
        self._session.just_completed_signup = False

    # -------------------------------------------------------------------------
    # Credentials and OTP
    # -------------------------------------------------------------------------

    def _require_signed_out(self, operation: str) -> None:
        if self._session.user is not None:
            raise InvalidTransitionError(operation, "a user is already signed in")

    async def start_login(self, email: str, password: str) -> FlowStep:
        """
        Check the password, then send an OTP.

        No session is created and nothing is written to the vault.
        """
        async with self._lock:
            self._require_signed_out("start login")
            await self._gateway.validate_credentials(email, password)
            await self._otp.issue(email)
            context = FlowContext(flow=AuthFlow.LOGIN, email=email, password=password)
            return FlowStep(route=Route.OTP_VERIFICATION, context=context)

    async def start_signup(self, email: str) -> FlowStep:
        """Send an OTP to prove ownership of the email."""
        async with self._lock:
            self._require_signed_out("start signup")
            await self._otp.issue(email)
            context = FlowContext(flow=AuthFlow.SIGNUP, email=email)
            return FlowStep(route=Route.OTP_VERIFICATION, context=context)

    async def resend_otp(self, context: FlowContext) -> FlowStep:
        """Issue a new code, voiding the previous one."""
        async with self._lock:
            await self._otp.issue(context.email)
            return FlowStep(route=Route.OTP_VERIFICATION, context=context)

    async def verify_otp(self, context: FlowContext, code: str) -> FlowStep:
        """
        Consume the code and advance the flow.

        Login: the real login runs, tokens are persisted and the user lands
        in the main app if biometric unlock is already enabled on this
        device, otherwise on biometric setup.
        Signup: the email is marked verified and the user goes on to create
        a password.
        """
        async with self._lock:
            self._require_signed_out("verify OTP")
            if context.flow is AuthFlow.LOGIN and context.password is None:
                raise InvalidTransitionError("verify OTP", "login context has no password")

            await self._otp.verify(context.email, code)

            if context.flow is AuthFlow.SIGNUP:
                self._verified_signup_email = normalize_email(context.email)
                return FlowStep(route=Route.CREATE_PASSWORD, context=context)

            result = await self._gateway.login(
                context.email, context.password.get_secret_value()
            )
            try:
                await self._vault.save(result.access_token, result.refresh_token)
                biometric_enabled = await self._vault.is_biometric_enabled()
            except VaultError:
                await self._revoke_quietly()
                raise

            self._session.establish(result.user, result.access_token, result.refresh_token)
            self._session.show_biometric_login = False
            self._session.biometric_setup_completed = biometric_enabled
            self._session.just_completed_signup = False
            logger.info(f"Signed in, biometric setup completed: {biometric_enabled}")

            route = Route.MAIN_APP if biometric_enabled else Route.BIOMETRIC_SETUP
            return FlowStep(route=route)

    async def create_account(
        self,
        context: FlowContext,
        password: str,
        name: Optional[str] = None,
    ) -> FlowStep:
        """
        Create the account for a verified signup email.

        Always routes to biometric setup. When the provider holds the
        session back for email confirmation no user is set, but the signup
        still goes through the biometric decision.
        """
        async with self._lock:
            self._require_signed_out("create account")
            if context.flow is not AuthFlow.SIGNUP:
                raise InvalidTransitionError("create account", "not a signup flow")
            if self._verified_signup_email != normalize_email(context.email):
                raise InvalidTransitionError("create account", "email has not been verified")

            validate_password(password)
            display_name = name or context.email.split("@")[0]

            result = await self._gateway.create_account(context.email, password, display_name)
            self._verified_signup_email = None

            if result.has_session and result.user is not None:
                await self._vault.save(result.access_token, result.refresh_token)
                self._session.establish(result.user, result.access_token, result.refresh_token)
            else:
                logger.info("Account created, email confirmation may be required")

            self._session.just_completed_signup = True
            self._session.biometric_setup_completed = False
            self._session.show_biometric_login = False
            return FlowStep(route=Route.BIOMETRIC_SETUP)

    # -------------------------------------------------------------------------
    # Biometric
    # -------------------------------------------------------------------------

    def _session_flow(self) -> AuthFlow:
        return AuthFlow.SIGNUP if self._session.just_completed_signup else AuthFlow.LOGIN

    def _require_setup_pending(self, operation: str) -> AuthFlow:
        flow = self._session_flow()
        if self._session.biometric_setup_completed:
            raise InvalidTransitionError(operation, "biometric setup already decided")
        if flow is AuthFlow.LOGIN and self._session.user is None:
            raise InvalidTransitionError(operation, "no session")
        return flow

    async def _require_available(self) -> None:
        availability = await self._biometric.is_available()
        if not availability.usable:
            raise BiometricUnavailableError(availability.has_hardware, availability.is_enrolled)

    async def biometric_status(self) -> BiometricStatus:
        """Capability, display label and device flag for the UI."""
        availability = await self._biometric.is_available()
        kind = await self._biometric.classify()
        return BiometricStatus(
            has_hardware=availability.has_hardware,
            is_enrolled=availability.is_enrolled,
            kind=kind.value,
            label=kind.label,
            enabled=await self._vault.is_biometric_enabled(),
        )

    async def setup_biometric(self, prompt_text: Optional[str] = None) -> FlowStep:
        """
        Run one biometric prompt to enable biometric unlock.

        Raises:
            BiometricUnavailableError: No hardware or nothing enrolled
            BiometricFailedError: Prompt rejected; the caller offers retry
                or cancel (cancel is skip_biometric_setup)
        """
        async with self._lock:
            flow = self._require_setup_pending("set up biometric")
            await self._require_available()

            if prompt_text is None:
                kind = await self._biometric.classify()
                if kind is BiometricKind.FACE_RECOGNITION:
                    prompt_text = f"Setup {kind.label} - Look at your device to authenticate"
                else:
                    prompt_text = f"Setup {kind.label}"

            result = await self._biometric.challenge(prompt_text)
            if not result.success:
                raise BiometricFailedError(result.error)

            await self._vault.set_biometric_enabled(True)
            self._session.biometric_setup_completed = True
            logger.info(f"Biometric setup successful ({flow.value} flow)")

            route = Route.SIGNUP_COMPLETE if flow is AuthFlow.SIGNUP else Route.MAIN_APP
            return FlowStep(route=route)

    async def skip_biometric_setup(self) -> FlowStep:
        """
        Decline biometric setup.

        After signup the new session is torn down and the user logs in
        again later. After login the session is kept.
        """
        async with self._lock:
            flow = self._require_setup_pending("skip biometric setup")
            if flow is AuthFlow.SIGNUP:
                logger.info("Biometric setup skipped after signup, signing out")
                await self._sign_out_locked()
                return FlowStep(route=Route.SIGNUP_COMPLETE)

            logger.info("Biometric setup skipped in login flow")
            self._session.biometric_setup_completed = True
            return FlowStep(route=Route.MAIN_APP)

    async def unlock_with_biometric(self, prompt_text: str = UNLOCK_PROMPT) -> FlowStep:
        """Re-enter a restored session. Identity and tokens are reused as they are."""
        async with self._lock:
            if self._session.user is None or not self._session.show_biometric_login:
                raise InvalidTransitionError("unlock", "no session waiting for biometric unlock")
            await self._require_available()

            result = await self._biometric.challenge(prompt_text)
            if not result.success:
                raise BiometricFailedError(result.error)

            self._session.show_biometric_login = False
            return FlowStep(route=Route.MAIN_APP)

    async def complete_signup(self) -> FlowStep:
        """Leave the signup-complete screen."""
        async with self._lock:
            if self._session.user is not None and not self._session.biometric_setup_completed:
                raise InvalidTransitionError("complete signup", "biometric setup not decided")

            self._session.just_completed_signup = False
            if self._session.user is None:
                return FlowStep(route=Route.SIGN_IN)
            if await self._vault.is_biometric_enabled():
                self._session.show_biometric_login = True
                return FlowStep(route=Route.BIOMETRIC_LOGIN)
            return FlowStep(route=Route.MAIN_APP)

    # -------------------------------------------------------------------------
    # Sign-out and lifecycle guard
    # -------------------------------------------------------------------------

    async def sign_out(self) -> FlowStep:
        """
        Forget the session on this device.

        Always completes locally; revoke and vault failures are logged. The
        device's biometric-enabled flag is kept.
        """
        async with self._lock:
            await self._sign_out_locked()
            return FlowStep(route=Route.WELCOME)

    async def _revoke_quietly(self) -> None:
        try:
            await self._gateway.revoke_server_session()
        except Exception as e:
            logger.warning(f"Server sign-out failed: {e}")

    async def _sign_out_locked(self) -> None:
        await self._revoke_quietly()

        try:
            await self._vault.clear()
        except VaultError as e:
            logger.error(f"Could not clear persisted tokens: {e.message}")

        self._session.clear()
        self._verified_signup_email = None

    async def handle_app_state(self, state: AppState) -> None:
        """
        Sign out when the app leaves the foreground with a session that has
        not committed to biometric setup or an explicit skip.
        """
        if state not in (AppState.BACKGROUND, AppState.INACTIVE):
            return

        async with self._lock:
            if self._session.user is not None and not self._session.biometric_setup_completed:
                logger.info(
                    f"App moved to {state.value} before biometric setup was decided, signing out"
                )
                await self._sign_out_locked()
