"""Router and submission mechanism interfaces.

A :class:`Router` turns an outbound message into a transaction for one
destination domain. Most routers do not submit anything themselves: they
encode the message and hand it over to a :class:`SubmissionMechanism`,
which is injected at construction time so tests can swap in
:py:class:`lp_router.testing.RecordingSubmissionMechanism`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from hexbytes import HexBytes

#: Sender identity: a 32-byte account id, a 20-byte EVM address or its hex form
Sender = bytes | str


@dataclass(slots=True, frozen=True)
class SubmissionReceipt:
    """Outcome of a dispatched transaction."""

    #: Hash of the submitted transaction
    transaction_hash: HexBytes

    #: Gas consumed by the transaction, ``None`` if the mechanism does not account gas
    gas_used: int | None = None

    #: Did the transaction execute without reverting
    success: bool = True


class SubmissionMechanism(ABC):
    """Dispatches already encoded call data as a chain transaction."""

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the mechanism for dispatching.

        :raise RouterInitialisationFailed:
            If the mechanism is not usable.
        """

    @abstractmethod
    def dispatch(self, sender: Sender, call_data: bytes) -> SubmissionReceipt:
        """Submit call data on behalf of ``sender``.

        :raise SendError:
            If the transaction could not be submitted or it reverted.
        """


class Router(ABC):
    """Outbound transport for one destination domain."""

    @abstractmethod
    def initialize(self) -> None:
        """Initialise the router before first use."""

    @abstractmethod
    def send(self, sender: Sender, message: bytes) -> SubmissionReceipt:
        """Deliver an opaque message to the destination domain.

        :raise SendError:
            On any failure. Nothing is retried.
        """
