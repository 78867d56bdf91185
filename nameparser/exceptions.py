from .constants import NameType


class NameParserError(Exception):
    """Base class for all failures to parse a name."""


class UnparsableNameError(NameParserError):
    """The name cannot be represented as a parsed name.

    name_type classifies the failure (virus, hybrid formula, placeholder, ...) and
    name is the original input, untouched.

    """

    def __init__(self, name_type: NameType, name: str) -> None:
        super().__init__(f"Unparsable {name_type.name} name: {name}")
        self.name_type = name_type
        self.name = name


class ParsingTimeoutError(NameParserError):
    def __init__(self, name: str, timeout_ms: int) -> None:
        super().__init__(f"Parsing of {name!r} took longer than {timeout_ms}ms")
        self.name = name
        self.timeout_ms = timeout_ms
