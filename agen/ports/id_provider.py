from typing import Protocol

class IdProvider(Protocol):
    """Port odpowiedzialny za generowanie unikalnych identyfikatorów zadań (max 36 znaków)."""
    def new_id(self) -> str:
        pass
