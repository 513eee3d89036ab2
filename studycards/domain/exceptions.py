class DomainException(Exception):
    pass


class DeckNotFoundException(DomainException):
    def __init__(self, deck_id: str) -> None:
        super().__init__(f"Deck with ID {deck_id} not found")
        self.deck_id = deck_id


class StorageUnavailableException(DomainException):
    def __init__(self, reason: str, key: str | None = None) -> None:
        message = f"Storage unavailable: {reason}"
        if key is not None:
            message = f"Storage unavailable for key {key}: {reason}"
        super().__init__(message)
        self.reason = reason
        self.key = key
