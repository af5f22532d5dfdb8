class ParseError(ValueError):
    """The input does not match the requested production."""

    def __init__(self, production: str, data: str) -> None:
        self.production = production
        self.data = data
        super().__init__(f"failed to parse {production}: {data!r}")


class DecodeError(ValueError):
    """A percent-encoded sequence could not be decoded."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"failed to decode {text!r}: {reason}")
