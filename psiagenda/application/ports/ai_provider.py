from typing import Optional, Protocol


class AIProvider(Protocol):
    def generate_text(self, prompt: str, model: Optional[str] = None) -> str:
        ...
