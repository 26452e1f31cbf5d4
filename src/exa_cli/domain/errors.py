"""Domain errors – every failure the CLI can surface to the user."""

from __future__ import annotations


class ExaCliError(Exception):
    """Base class for all errors terminal to an invocation."""


class MissingCredential(ExaCliError):
    """No API key was found in flags, environment, or .env."""

    def __init__(self, variable: str = "EXA_API_KEY") -> None:
        super().__init__(f"{variable} missing")
        self.variable = variable


class InvalidRawBody(ExaCliError):
    """The --body / --body-file fragment could not be read or parsed."""


class MissingField(ExaCliError):
    """A required request field is absent after merging flags and raw body."""

    def __init__(self, *keys: str) -> None:
        if len(keys) == 1:
            msg = f"missing {keys[0]}"
        else:
            msg = f"missing one of: {', '.join(keys)}"
        super().__init__(msg)
        self.keys = keys


class MalformedResponse(ExaCliError):
    """A successful response lacked a field we need (e.g. the task id)."""


class RemoteError(ExaCliError):
    """The API answered with a non-2xx status. *body* is kept verbatim."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"exa api failed status={status_code}")
        self.status_code = status_code
        self.body = body


class TransportError(ExaCliError):
    """The request never produced a response (DNS, TLS, reset, timeout)."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"exa request failed: {cause}")
        self.cause = cause
