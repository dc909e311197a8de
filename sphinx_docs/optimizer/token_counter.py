"""Token counting for chunk statistics."""

import tiktoken

DEFAULT_TIKTOKEN_MODEL = "gpt-4"
FALLBACK_ENCODING = "cl100k_base"


class TokenCounter:
    """Counts tokens with the tokenizer of a given model."""

    def __init__(self, model: str = DEFAULT_TIKTOKEN_MODEL):
        self.model = model
        try:
            self.tokenizer = tiktoken.encoding_for_model(model)
        except KeyError:
            # Fallback to a known encoding if model not found
            self.tokenizer = tiktoken.get_encoding(FALLBACK_ENCODING)

    def count(self, text: str) -> int:
        """Count tokens in text using tiktoken."""
        return len(self.tokenizer.encode(text))
