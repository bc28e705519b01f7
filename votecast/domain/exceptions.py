"""Base exception classes for the votecast domain layer."""


class VotecastError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application
    and lets the (external) web layer map every failure it receives
    from the core to a response without catching bare ``Exception``.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
