"""Decision entities returned by the decision protocol."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

INTERNAL_ERROR_MESSAGE = "internal server error"


class DecisionAction(Enum):
    """What the engine should do next.

    CONTINUE: proceed with normal parsing and execution.
    RESPOND: answer with the attached body.
    REJECT: the plugin call itself failed.
    """

    CONTINUE = "continue"
    RESPOND = "respond"
    REJECT = "reject"


class Visibility(Enum):
    """Whether an outcome was caused by the user or by the plugin."""

    USER = "user"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Decision:
    """Outcome of a single pre-parse or pre-response call.

    Attributes:
        action: What the engine should do next.
        status: HTTP status code to answer with.
        body: JSON body, or None for an empty response.
        label: Short description of why this decision was made.
        visibility: Whether the user or the plugin caused the outcome.
    """

    action: DecisionAction
    status: int
    body: Any
    label: str
    visibility: Visibility

    @property
    def is_error(self) -> bool:
        return self.action is DecisionAction.REJECT

    @classmethod
    def proceed(cls, label: str) -> "Decision":
        """Tell the engine to carry on executing the query."""
        return cls(DecisionAction.CONTINUE, 204, None, label, Visibility.USER)

    @classmethod
    def respond(cls, body: Any, label: str) -> "Decision":
        """Answer the engine with ``body``."""
        return cls(DecisionAction.RESPOND, 200, body, label, Visibility.USER)

    @classmethod
    def user_error(cls, message: str, status: int = 400) -> "Decision":
        """Reject a call the caller got wrong; the message is returned."""
        return cls(
            DecisionAction.REJECT,
            status,
            {"message": message},
            message,
            Visibility.USER,
        )

    @classmethod
    def server_error(cls, label: str) -> "Decision":
        """Reject a call the plugin failed to handle.

        The label is kept for the log only; the body is generic.
        """
        return cls(
            DecisionAction.REJECT,
            500,
            {"message": INTERNAL_ERROR_MESSAGE},
            label,
            Visibility.INTERNAL,
        )
