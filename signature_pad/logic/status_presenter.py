# signature_pad/logic/status_presenter.py
from __future__ import annotations

from ..models.signature_enums import Role, SignatureStatus

_STATUS_TEXT = {
    SignatureStatus.SIGNED: "Signed",
    SignatureStatus.REQUESTED: "Waiting for signature",
    SignatureStatus.NOT_SIGNED: "Not signed",
}

_STATUS_COLOR = {
    SignatureStatus.SIGNED: "#4caf50",
    SignatureStatus.REQUESTED: "#ff9800",
    SignatureStatus.NOT_SIGNED: "#9e9e9e",
}

_ROLE_LABEL = {
    Role.INITIATOR: "Admin",
    Role.SIGNER: "Client",
}


def status_text(status: SignatureStatus) -> str:
    return _STATUS_TEXT[SignatureStatus(status)]


def status_color(status: SignatureStatus) -> str:
    """Hex colour of the status dot."""
    return _STATUS_COLOR[SignatureStatus(status)]


def role_label(role: Role) -> str:
    return _ROLE_LABEL[Role(role)]
