"""Exceptions for the feedback chat service and conversation driver."""


class FeedbackChatError(Exception):
    """The language-model exchange for a turn failed."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class EmptyReplyError(FeedbackChatError):
    """The model call succeeded but returned no text."""

    def __init__(self) -> None:
        super().__init__("Empty response from language model")


class ConversationError(Exception):
    """A turn was rejected before contacting the language model."""


class ConversationLimitError(ConversationError):
    """The conversation already holds the maximum number of turns."""

    def __init__(self, max_turns: int):
        self.max_turns = max_turns
        super().__init__(
            f"Conversation history is limited to {max_turns} turns. "
            "Please start a new conversation."
        )


class ConversationBusyError(ConversationError):
    """Another request for the same conversation is still outstanding."""

    def __init__(self) -> None:
        super().__init__("A reply is still pending for this conversation")


class ConversationCompleteError(ConversationError):
    """The report is ready to file; no further turns are accepted."""

    def __init__(self) -> None:
        super().__init__("This conversation is complete. Reset it to start a new report.")
