"""Router error taxonomy.

Every error carries a stable, human readable :py:attr:`RouterError.reason`
so callers can tell malformed input apart from a rejected submission
without parsing messages.

- :class:`RouterConfigError`: bad configuration, raised when a router
  config is constructed
- :class:`EncodeError`: the outbound message could not be ABI encoded
- :class:`SendError`: a send attempt failed, either before or during submission
- :class:`RouterInitialisationFailed`: the submission mechanism refused to initialise
- :class:`RouterNotFound`: no route configured for a destination domain
"""


class RouterError(Exception):
    """Base class for all router errors."""

    #: Default reason when the raiser does not give one
    default_reason = "router error"

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class RouterConfigError(RouterError, ValueError):
    """Router configuration is out of bounds or malformed."""

    default_reason = "invalid router configuration"


class EncodeError(RouterError):
    """ABI encoding of an outbound message failed."""

    default_reason = "cannot encode message"


class FunctionDescriptorUnavailable(EncodeError):
    """The fixed Axelar function descriptor could not be looked up.

    Indicates a broken build rather than bad input.
    """

    default_reason = "cannot retrieve Axelar contract function"


class InvalidChainIdEncoding(EncodeError):
    """Destination chain name is not valid UTF-8."""

    default_reason = "target chain conversion error"


class ArgumentEncodingFailed(EncodeError):
    """``eth_abi`` rejected the call arguments."""

    default_reason = "cannot encode input for Axelar contract function"


class SendError(RouterError):
    """Sending a message through a router failed."""

    default_reason = "cannot send message"


class MessageEncodingFailed(SendError):
    """Message was rejected by the encoder and nothing was submitted."""


class SubmissionFailed(SendError):
    """The submission mechanism rejected or reverted the transaction."""

    default_reason = "transaction submission failed"


class RouterInitialisationFailed(RouterError):
    """Router could not be initialised."""

    default_reason = "router initialisation failed"


class RouterNotFound(RouterError):
    """No router is configured for the destination domain."""

    default_reason = "router not found"
