"""Exception hierarchy for Taskpad MCP.

Tools catch ``TaskpadError`` at the boundary and turn it into an
``"Error: ..."`` response string.
"""


class TaskpadError(Exception):
    """Base class for all Taskpad errors."""


class InputValidationError(TaskpadError):
    """Input rejected locally before any storage or network call."""


class ImportRejectedError(TaskpadError):
    """An import document was not a JSON array of task records."""


class ConfigurationError(TaskpadError):
    """Required configuration is missing or malformed."""


class RequestInFlightError(TaskpadError):
    """A request of the same kind is still outstanding."""


class AuthError(TaskpadError):
    """The identity service refused a sign-in or sign-up."""


class UpstreamChatError(TaskpadError):
    """The hosted chat model call failed."""
