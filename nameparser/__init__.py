from .constants import NameType, NamePart, NomCode, Rank, State, Warnings
from .exceptions import NameParserError, ParsingTimeoutError, UnparsableNameError
from .model import Authorship, ParsedName
from .parser import NameParser, parse

__all__ = [
    "Authorship",
    "NameParser",
    "NameParserError",
    "NamePart",
    "NameType",
    "NomCode",
    "ParsedName",
    "ParsingTimeoutError",
    "Rank",
    "State",
    "UnparsableNameError",
    "Warnings",
    "parse",
]
