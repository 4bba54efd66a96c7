"""
Domain errors for Langy.

Each error carries the HTTP status the API reports it with, so routers can
let them propagate and a single exception handler turns them into responses.
"""


class LangyError(Exception):
    """Base class for all domain errors."""

    status_code = 500


class CardNotFound(LangyError):
    """The card does not exist for this owner."""

    status_code = 404

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found")


class InvalidArgument(LangyError):
    """A request field is missing or out of range. Nothing was mutated."""

    status_code = 400


class EmptyCollection(LangyError):
    """The owner has no cards to study."""

    status_code = 404

    def __init__(self) -> None:
        super().__init__("No cards yet, add cards first")


class RevisionConflict(LangyError):
    """Another write updated the card between our read and our write."""

    status_code = 409

    def __init__(self, card_id: str, revision: int) -> None:
        self.card_id = card_id
        self.revision = revision
        super().__init__(
            f"Card {card_id} changed since revision {revision}, reload and retry"
        )
