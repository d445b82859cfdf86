"""Testing helpers.

:class:`RecordingSubmissionMechanism` stands in for a real submission
mechanism in unit tests: it records every dispatch instead of touching
a chain.

Example::

    from lp_router.testing import RecordingSubmissionMechanism

    submission = RecordingSubmissionMechanism()
    router = AxelarEVMRouter(config, submission=submission)
    router.send(sender, message)
    assert len(submission.dispatched) == 1
"""

from dataclasses import dataclass, field

from eth_utils import keccak
from hexbytes import HexBytes

from lp_router.exceptions import SendError
from lp_router.routers.base import Sender, SubmissionMechanism, SubmissionReceipt


@dataclass(slots=True, frozen=True)
class DispatchedCall:
    """One recorded dispatch."""

    sender: Sender

    call_data: bytes


@dataclass(slots=True)
class RecordingSubmissionMechanism(SubmissionMechanism):
    """Submission mechanism that records calls instead of submitting them."""

    #: Dispatches in call order
    dispatched: list[DispatchedCall] = field(default_factory=list)

    #: Number of :py:meth:`initialize` calls
    initialize_count: int = 0

    #: Raise this from :py:meth:`dispatch` instead of recording
    fail_with: SendError | None = None

    #: Gas reported in receipts
    gas_used: int = 21_000

    def initialize(self) -> None:
        self.initialize_count += 1

    def dispatch(self, sender: Sender, call_data: bytes) -> SubmissionReceipt:
        if self.fail_with is not None:
            raise self.fail_with

        self.dispatched.append(DispatchedCall(sender=sender, call_data=call_data))
        # Fake but stable transaction hash
        tx_hash = keccak(len(self.dispatched).to_bytes(8, "big") + call_data)
        return SubmissionReceipt(transaction_hash=HexBytes(tx_hash), gas_used=self.gas_used, success=True)
