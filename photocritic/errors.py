"""Pipeline error taxonomy — every failure names the stage it came from."""


class PhotoCriticError(Exception):
    stage = "pipeline"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        match self.__cause__:
            case None:
                return self.message
            case cause:
                return f"{self.message}: {cause}"


# ── client input (HTTP 400) ───────────────────────────────────────────────────


class ClientInputError(PhotoCriticError):
    """Malformed input from the caller."""


class InvalidRequest(ClientInputError):
    stage = "request"


class DecodeError(ClientInputError):
    stage = "decode"


# ── processing (HTTP 500) ─────────────────────────────────────────────────────


class ProcessingError(PhotoCriticError):
    """Anything that fails after the input was accepted."""


class NormalizationError(ProcessingError):
    stage = "normalize"


class InvocationError(ProcessingError):
    stage = "invoke"


class NoPayloadFound(ProcessingError):
    stage = "extract"


class MalformedPayload(ProcessingError):
    stage = "extract"

    def __init__(self, message: str, payload: str) -> None:
        super().__init__(message)
        self.payload = payload


class ValidationError(ProcessingError):
    stage = "validate"
