# signature_pad/models/pad_state.py
from __future__ import annotations
from dataclasses import dataclass, replace

from .signature_enums import Role, SignatureStatus


@dataclass(frozen=True)
class PadState:
    """
    Workflow part of the engine: active role, signature status and whether
    the surface currently accepts input.

    Fields
    ------
    role : Role
        Exactly one role is active at any time.
    status : SignatureStatus
        NOT_SIGNED and REQUESTED mean no final image exists; SIGNED means the
        current pixel buffer is the accepted result.
    input_active : bool
        True only between a signature request and its completion.
    """
    role: Role = Role.INITIATOR
    status: SignatureStatus = SignatureStatus.NOT_SIGNED
    input_active: bool = False

    def can_draw(self) -> bool:
        return self.role is Role.SIGNER and self.input_active

    def evolve(self, **changes) -> "PadState":
        return replace(self, **changes)
