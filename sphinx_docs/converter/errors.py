"""Exceptions raised while converting markup text."""


class ParseError(Exception):
    """Input could not be read as text; aborts a single conversion."""

    def __init__(self, message: str, document_id: str = None):
        self.document_id = document_id
        if document_id:
            message = f"{document_id}: {message}"
        super().__init__(message)


class DirectiveMalformed(Exception):
    """A directive was recognized but cannot be rendered as structured content."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Malformed '{name}' directive: {reason}")
