"""
signature_pad/tests/test_workflow.py

Pure transition rules of the request/complete workflow.
"""

from __future__ import annotations

import unittest

from signature_pad.logic.workflow import INITIAL_STATE, Effect, can_complete, can_request, transition
from signature_pad.models.pad_state import PadState
from signature_pad.models.signature_enums import PadAction, Role, SignatureStatus


class TestWorkflowTransitions(unittest.TestCase):
    def test_initial_state(self) -> None:
        self.assertEqual(INITIAL_STATE, PadState(Role.INITIATOR, SignatureStatus.NOT_SIGNED, False))
        self.assertFalse(INITIAL_STATE.can_draw())

    def test_request_hands_pad_to_signer(self) -> None:
        t = transition(INITIAL_STATE, PadAction.REQUEST_SIGNATURE)
        self.assertFalse(t.denied)
        self.assertEqual(t.state, PadState(Role.SIGNER, SignatureStatus.REQUESTED, True))
        self.assertEqual(t.effects, (Effect.CLEAR_SURFACE,))
        self.assertTrue(t.state.can_draw())

    def test_request_by_signer_is_denied(self) -> None:
        state = PadState(Role.SIGNER)
        t = transition(state, PadAction.REQUEST_SIGNATURE)
        self.assertTrue(t.denied)
        self.assertIs(t.state, state)
        self.assertEqual(t.effects, ())

    def test_complete_returns_pad_to_initiator(self) -> None:
        requested = transition(INITIAL_STATE, PadAction.REQUEST_SIGNATURE).state
        t = transition(requested, PadAction.COMPLETE_SIGNATURE)
        self.assertEqual(t.state, PadState(Role.INITIATOR, SignatureStatus.SIGNED, False))
        self.assertEqual(t.effects, ())

    def test_complete_by_initiator_is_noop(self) -> None:
        for status in SignatureStatus:
            with self.subTest(status=status):
                state = PadState(Role.INITIATOR, status, status is SignatureStatus.REQUESTED)
                t = transition(state, PadAction.COMPLETE_SIGNATURE)
                self.assertTrue(t.denied)
                self.assertEqual(t.state, state)

    def test_complete_without_open_request_is_noop(self) -> None:
        for status in (SignatureStatus.NOT_SIGNED, SignatureStatus.SIGNED):
            with self.subTest(status=status):
                state = PadState(Role.SIGNER, status, False)
                self.assertFalse(can_complete(state))
                self.assertTrue(transition(state, PadAction.COMPLETE_SIGNATURE).denied)

    def test_rerequest_after_signed(self) -> None:
        signed = PadState(Role.INITIATOR, SignatureStatus.SIGNED, False)
        self.assertTrue(can_request(signed))
        t = transition(signed, PadAction.REQUEST_SIGNATURE)
        self.assertEqual(t.state, PadState(Role.SIGNER, SignatureStatus.REQUESTED, True))

    def test_clear_invalidates_only_signed(self) -> None:
        cases = {
            SignatureStatus.SIGNED: SignatureStatus.NOT_SIGNED,
            SignatureStatus.REQUESTED: SignatureStatus.REQUESTED,
            SignatureStatus.NOT_SIGNED: SignatureStatus.NOT_SIGNED,
        }
        for role in Role:
            for before, after in cases.items():
                with self.subTest(role=role, status=before):
                    t = transition(PadState(role, before, False), PadAction.CLEAR)
                    self.assertFalse(t.denied)
                    self.assertEqual(t.state.status, after)
                    self.assertEqual(t.state.role, role)
                    self.assertEqual(t.effects, (Effect.CLEAR_SURFACE,))

    def test_toggle_role_touches_role_only(self) -> None:
        state = PadState(Role.SIGNER, SignatureStatus.REQUESTED, True)
        t = transition(state, PadAction.TOGGLE_ROLE)
        self.assertEqual(t.state, PadState(Role.INITIATOR, SignatureStatus.REQUESTED, True))
        self.assertFalse(t.state.can_draw())
        self.assertEqual(transition(t.state, PadAction.TOGGLE_ROLE).state, state)

    def test_export_is_never_gated(self) -> None:
        for role in Role:
            for status in SignatureStatus:
                t = transition(PadState(role, status, False), "export")
                self.assertFalse(t.denied)
                self.assertEqual(t.effects, (Effect.EXPORT_IMAGE,))

    def test_unknown_action_raises(self) -> None:
        with self.assertRaises(ValueError):
            transition(INITIAL_STATE, "sign_everything")


if __name__ == "__main__":
    unittest.main()
