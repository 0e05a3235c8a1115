"""
===============================================================================
Signature Workflow – role-gated request/complete state machine
-------------------------------------------------------------------------------
Purpose:
    Decide which commands are legal for the active role and signature status,
    and compute the resulting state. Everything here is pure: no drawing, no
    logging, no I/O.

Decisions implemented:
    - Only the initiator may request a signature; re-requesting after a
      completed signature is allowed and starts a fresh, blank surface.
    - Only the signer may complete, and only while a request is open.
    - Clear is always allowed; clearing a signed result invalidates it.
    - Toggling the role never touches the status or the input gate.
    - Export is never gated.
    - Illegal commands are no-ops that carry a denial reason instead of
      raising.

Integration:
    - SignaturePadEngine calls transition() and applies the returned effects
      to its surface.
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..models.pad_state import PadState
from ..models.signature_enums import PadAction, Role, SignatureStatus


class Effect(str, Enum):
    """Side effects the engine performs after a transition."""
    CLEAR_SURFACE = "clear_surface"
    EXPORT_IMAGE = "export_image"


@dataclass(frozen=True)
class Transition:
    """
    Result of evaluating one command.

    Fields
    ------
    state : PadState
        State after the command (identical to the input when denied).
    effects : tuple[Effect, ...]
        Side effects to apply, in order.
    denied_reason : Optional[str]
        Set when a precondition failed; the command was a no-op.
    """
    state: PadState
    effects: Tuple[Effect, ...] = ()
    denied_reason: Optional[str] = None

    @property
    def denied(self) -> bool:
        return self.denied_reason is not None


INITIAL_STATE = PadState()


def can_request(state: PadState) -> bool:
    """Return True if a signature request is legal right now."""
    return state.role is Role.INITIATOR


def can_complete(state: PadState) -> bool:
    """Return True if the signer may finish the open request."""
    return state.role is Role.SIGNER and state.status is SignatureStatus.REQUESTED


def transition(state: PadState, action: PadAction) -> Transition:
    """Evaluate ``action`` against ``state``."""
    action = PadAction(action)

    if action is PadAction.REQUEST_SIGNATURE:
        if not can_request(state):
            return Transition(state, denied_reason="only the initiator can request a signature")
        return Transition(
            state.evolve(status=SignatureStatus.REQUESTED, input_active=True, role=Role.SIGNER),
            effects=(Effect.CLEAR_SURFACE,),
        )

    if action is PadAction.COMPLETE_SIGNATURE:
        if state.role is not Role.SIGNER:
            return Transition(state, denied_reason="only the signer can complete a signature")
        if state.status is not SignatureStatus.REQUESTED:
            return Transition(state, denied_reason="no signature request is open")
        return Transition(
            state.evolve(status=SignatureStatus.SIGNED, input_active=False, role=Role.INITIATOR)
        )

    if action is PadAction.CLEAR:
        status = SignatureStatus.NOT_SIGNED if state.status is SignatureStatus.SIGNED else state.status
        return Transition(state.evolve(status=status), effects=(Effect.CLEAR_SURFACE,))

    if action is PadAction.TOGGLE_ROLE:
        return Transition(state.evolve(role=state.role.other()))

    # PadAction.EXPORT
    return Transition(state, effects=(Effect.EXPORT_IMAGE,))
