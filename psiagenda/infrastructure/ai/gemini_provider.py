from typing import Optional

import google.generativeai as genai

from ...application.ports.ai_provider import AIProvider


class GeminiProvider(AIProvider):
    def __init__(self, api_key: str, default_model: str) -> None:
        genai.configure(api_key=api_key)
        self.default_model = default_model

    def generate_text(self, prompt: str, model: Optional[str] = None) -> str:
        result = genai.GenerativeModel(model or self.default_model).generate_content(prompt)
        return getattr(result, "text", str(result))
