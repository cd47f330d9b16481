"""Error taxonomy shared by the tutor."""


class PccsError(Exception):
    """Base class for all tutor errors."""


class AdvisoryError(PccsError):
    """An advisory (language-model) call could not produce a usable answer."""


class ConfigurationError(AdvisoryError):
    """No credential is configured, so no call was attempted."""


class TransportError(AdvisoryError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(AdvisoryError):
    """The call succeeded but the reply did not have the expected shape."""
