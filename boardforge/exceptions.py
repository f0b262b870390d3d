"""Exceptions raised by BoardForge."""


class BoardForgeError(RuntimeError):
    """Base class for BoardForge exceptions."""


class ListenerStillActive(BoardForgeError):
    """Raised when a registry is reset while a native listener still holds its entry point."""

    def __init__(self, kind: str | None = None) -> None:
        target = f"'{kind}' " if kind else ""
        super().__init__(
            f"Handler registry {target}is still attached to a native listener; "
            "deactivate the listener before resetting"
        )
        self.kind = kind


class UnknownSession(BoardForgeError):
    """Raised when a chat has no running game session."""

    def __init__(self, chat_id: int) -> None:
        super().__init__(f"No game session for chat {chat_id}")
        self.chat_id = chat_id
