"""
Provider error taxonomy

Drivers raise these; the dispatcher turns every one of them into the plain
failure string the caller shows to the user.
"""


class ProviderError(Exception):
    """Base class for every failure raised while resolving a generation."""


class AuthRequired(ProviderError):
    """The provider mandates a credential and none was supplied."""


class QueueRequestFailed(ProviderError):
    """The queue submission answered with a non-success HTTP status."""

    def __init__(self, status_code: int):
        super().__init__(f"Queue request failed: {status_code}")
        self.status_code = status_code


class NoEventId(ProviderError):
    """The queue submission response carried no event id."""

    def __init__(self):
        super().__init__("No event_id returned")


class QuotaExhausted(ProviderError):
    """The event stream reported an explicit error event."""

    def __init__(self):
        super().__init__("Quota exhausted, please set HF Token")


class NoCompleteEvent(ProviderError):
    """The event stream ended without a complete event."""

    def __init__(self, stream_prefix: str):
        super().__init__(f"No complete event in response: {stream_prefix}")
        self.stream_prefix = stream_prefix


class NoImageReturned(ProviderError):
    """A terminal result was received but carried no usable image."""


class UnknownProvider(ProviderError):
    def __init__(self, provider_id: str):
        super().__init__(f"Unknown provider: {provider_id}")


class UnknownModel(ProviderError):
    def __init__(self, model_id: str, provider_id: str):
        super().__init__(f"Unknown model '{model_id}' for provider '{provider_id}'")


class InvalidRequest(ProviderError):
    pass


class StreamTimedOut(ProviderError):
    """The event stream stayed open past its deadline without a terminal event."""

    def __init__(self):
        super().__init__("Timed out waiting for complete event")
