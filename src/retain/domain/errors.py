"""Exception hierarchy shared by every layer."""


class RetainError(Exception):
    """Base class for all errors raised by retain."""


class InvalidArgumentError(RetainError, ValueError):
    """
    A caller broke the contract of a core function.

    Raised for unknown quality or difficulty values, negative counts,
    out-of-range state fields and malformed timestamps. Never retried.
    """


class ItemNotFoundError(RetainError, KeyError):
    """The repository holds no review state for the requested item id."""

    def __init__(self, item_id: str):
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"No review state for item '{self.item_id}'"


class StoreError(RetainError):
    """A persisted deck could not be read back."""
