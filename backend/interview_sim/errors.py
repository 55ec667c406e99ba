class InterviewError(Exception):
    """Base class for every error raised by the interview engine."""


class ValidationError(InterviewError):
    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid configuration: {', '.join(self.errors)}")


class EmptyAnswerError(InterviewError):
    def __init__(self, detail: str = "Answer cannot be empty"):
        super().__init__(detail)


class SessionStateError(InterviewError):
    def __init__(self, detail: str = "Operation not allowed in the current session state"):
        super().__init__(detail)


class ServiceError(InterviewError):
    """Failure of a remote language-model service."""


class ServiceTimeoutError(ServiceError):
    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"LLM request timed out after {timeout_seconds:g}s")


class ServiceUnavailableError(ServiceError):
    pass


class MalformedResponseError(ServiceError):
    pass


class QuestionGenerationError(InterviewError):
    def __init__(self, cause: Exception | str):
        self.cause = cause
        message = str(cause).strip() or "Unknown error"
        super().__init__(f"Failed to generate questions from LLM: {message}")
