"""
Auth session API endpoints.

Exposes the session state machine to the UI client. Responses carry the
derived state and the screen to show; tokens and the pending login
password never leave the process.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from api.dependencies import (
    FlowStore,
    get_app_state_channel,
    get_flow_store,
    get_session_machine,
)
from shared.models import UserIdentity

from .exceptions import InvalidTransitionError
from .lifecycle import AppStateChannel
from .models import (
    AppState,
    AuthFlow,
    AuthState,
    BiometricStatus,
    FlowContext,
    FlowStep,
    Route,
    SessionSnapshot,
)
from .service import AuthSessionStateMachine

router = APIRouter()


# =============================================================================
# Request / response models
# =============================================================================


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Account password")


class SignupRequest(BaseModel):
    email: EmailStr = Field(..., description="Email to register")


class VerifyOTPRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=16, description="Code from the email")


class CreatePasswordRequest(BaseModel):
    password: str = Field(..., description="New account password")
    name: Optional[str] = Field(default=None, description="Display name")


class BiometricPromptRequest(BaseModel):
    prompt: Optional[str] = Field(default=None, description="Override the prompt text")


class AppStateRequest(BaseModel):
    state: AppState


class SessionResponse(BaseModel):
    """Session view for the UI. Never includes tokens."""

    state: AuthState
    route: Route
    bootstrap_done: bool
    user: Optional[UserIdentity] = None
    biometric_setup_completed: bool
    show_biometric_login: bool
    just_completed_signup: bool
    pending_flow: Optional[AuthFlow] = None

    @classmethod
    def build(
        cls, snapshot: SessionSnapshot, pending: Optional[FlowContext] = None
    ) -> "SessionResponse":
        return cls(
            state=snapshot.state,
            route=snapshot.route,
            bootstrap_done=snapshot.bootstrap_done,
            user=snapshot.user,
            biometric_setup_completed=snapshot.biometric_setup_completed,
            show_biometric_login=snapshot.show_biometric_login,
            just_completed_signup=snapshot.just_completed_signup,
            pending_flow=pending.flow if pending else None,
        )


class StepResponse(BaseModel):
    """Where the UI goes after a transition."""

    route: Route
    flow: Optional[AuthFlow] = None
    email: Optional[str] = None
    session: SessionResponse


def _step_response(
    step: FlowStep,
    machine: AuthSessionStateMachine,
    flows: FlowStore,
) -> StepResponse:
    flows.set(step.context)
    context = step.context
    return StepResponse(
        route=step.route,
        flow=context.flow if context else None,
        email=context.email if context else None,
        session=SessionResponse.build(machine.snapshot(), context),
    )


def _pending(flows: FlowStore, operation: str) -> FlowContext:
    context = flows.get()
    if context is None:
        raise InvalidTransitionError(operation, "no login or signup in progress")
    return context


# =============================================================================
# Session
# =============================================================================


@router.get("/session", response_model=SessionResponse)
async def get_session(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> SessionResponse:
    """Current state and the screen to show."""
    return SessionResponse.build(machine.snapshot(), flows.get())


@router.post("/signout", response_model=StepResponse)
async def sign_out(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    return _step_response(await machine.sign_out(), machine, flows)


@router.post("/app-state", response_model=SessionResponse)
async def report_app_state(
    request: AppStateRequest,
    channel: AppStateChannel = Depends(get_app_state_channel),
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> SessionResponse:
    """
    Report a foreground/background change.

    Returns after every subscriber has reacted, so the session in the
    response already reflects a background sign-out.
    """
    await channel.publish(request.state)
    return SessionResponse.build(machine.snapshot(), flows.get())


# =============================================================================
# Login and signup
# =============================================================================


@router.post("/login", response_model=StepResponse)
async def start_login(
    request: LoginRequest,
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    """Check the password and send a code. No session is created yet."""
    step = await machine.start_login(request.email, request.password)
    return _step_response(step, machine, flows)


@router.post("/signup", response_model=StepResponse)
async def start_signup(
    request: SignupRequest,
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    step = await machine.start_signup(request.email)
    return _step_response(step, machine, flows)


@router.post("/otp/resend", response_model=StepResponse)
async def resend_otp(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    step = await machine.resend_otp(_pending(flows, "resend OTP"))
    return _step_response(step, machine, flows)


@router.post("/otp/verify", response_model=StepResponse)
async def verify_otp(
    request: VerifyOTPRequest,
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    """
    Verify the emailed code.

    On failure the pending flow is kept so the user can retry or resend.
    """
    step = await machine.verify_otp(_pending(flows, "verify OTP"), request.code)
    return _step_response(step, machine, flows)


@router.post("/password", response_model=StepResponse)
async def create_password(
    request: CreatePasswordRequest,
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    """Create the account for the verified signup email."""
    context = _pending(flows, "create account")
    step = await machine.create_account(context, request.password, request.name)
    return _step_response(step, machine, flows)


@router.post("/signup/complete", response_model=StepResponse)
async def complete_signup(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    return _step_response(await machine.complete_signup(), machine, flows)


# =============================================================================
# Biometric
# =============================================================================


@router.get("/biometric", response_model=BiometricStatus)
async def get_biometric_status(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
) -> BiometricStatus:
    """Device capability and label, e.g. 'Face ID'."""
    return await machine.biometric_status()


@router.post("/biometric/setup", response_model=StepResponse)
async def setup_biometric(
    request: Optional[BiometricPromptRequest] = None,
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    prompt = request.prompt if request else None
    return _step_response(await machine.setup_biometric(prompt), machine, flows)


@router.post("/biometric/skip", response_model=StepResponse)
async def skip_biometric(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    return _step_response(await machine.skip_biometric_setup(), machine, flows)


@router.post("/biometric/unlock", response_model=StepResponse)
async def unlock_with_biometric(
    machine: AuthSessionStateMachine = Depends(get_session_machine),
    flows: FlowStore = Depends(get_flow_store),
) -> StepResponse:
    return _step_response(await machine.unlock_with_biometric(), machine, flows)
