import argparse
import json
import logging
import sys

from .config import get_options
from .constants import Rank
from .exceptions import NameParserError, ParsingTimeoutError, UnparsableNameError
from .parser import NameParser


def parse_rank(text: str) -> Rank:
    key = text.lower()
    if key == "class":
        key = "class_"
    try:
        return Rank[key]
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown rank: {text}") from None


if __name__ == "__main__":
    parser = argparse.ArgumentParser("nameparser")
    parser.add_argument(
        "names", nargs="*", help="names to parse; read from stdin if omitted"
    )
    parser.add_argument("-r", "--rank", type=parse_rank, default=None)
    parser.add_argument("--timeout", type=int, default=None, help="timeout in ms")
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    args = parser.parse_args()
    level = "DEBUG" if args.verbose else get_options().log_level
    logging.basicConfig(level=level)

    name_parser = NameParser(timeout_ms=args.timeout)
    names = args.names or (line.strip() for line in sys.stdin)
    for name in names:
        if not name:
            continue
        try:
            pn = name_parser.parse(name, args.rank)
        except UnparsableNameError as e:
            output = {"name": name, "error": e.name_type.name}
        except ParsingTimeoutError:
            output = {"name": name, "error": "timeout"}
        except NameParserError as e:
            output = {"name": name, "error": str(e)}
        else:
            output = {**pn.to_json(), "canonical": pn.canonical_name()}
        print(json.dumps(output, ensure_ascii=False))
