"""
Domain exceptions.

Aggregation itself never raises for bad data; these cover the store and
service boundary only.
"""


class PollsightError(Exception):
    """Base class for application errors."""


class PollNotFoundError(PollsightError):
    """Raised when a poll id does not resolve to a poll."""

    def __init__(self, poll_id: str):
        self.poll_id = poll_id
        super().__init__(f"Poll not found: {poll_id}")


class DuplicateResponseError(PollsightError):
    """Raised when a user answers the same poll twice."""

    def __init__(self, poll_id: str, user_id: str):
        self.poll_id = poll_id
        self.user_id = user_id
        super().__init__("You have already responded to this poll.")
