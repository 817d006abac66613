"""Application error taxonomy.

Every error carries a French, user-facing ``message``; the HTTP layer turns
it into ``{"detail": message}`` with the error's ``status_code``.
"""


class ResumeIAError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ResumeIAError):
    status_code = 503


class InputValidationError(ResumeIAError):
    status_code = 400


class FlowError(ResumeIAError):
    status_code = 502


class ModelClientError(FlowError):
    default_message = "Le service d'IA est momentanément indisponible. Veuillez réessayer plus tard."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class IdentityError(ResumeIAError):
    status_code = 400

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, status_code)
        self.code = code
