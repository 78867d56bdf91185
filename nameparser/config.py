import configparser
import functools
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import NamedTuple

DEFAULT_PARSERDATA_PATH = Path(__file__).parent / "parserdata"


class Options(NamedTuple):
    # wall-clock budget for matching a single name against the grammar
    timeout_ms: int = 1000
    parserdata_path: Path = DEFAULT_PARSERDATA_PATH
    log_level: str = "WARNING"


DEFAULT_OPTIONS = Options()


def error(message: str) -> None:
    print(message, file=sys.stderr)


def parse_path(section: Mapping[str, str], key: str, base_path: Path) -> Path:
    if key not in section:
        return DEFAULT_PARSERDATA_PATH
    else:
        raw_path = section[key]
        path = Path(raw_path).expanduser()
        if not path.is_absolute():
            path = base_path / path
        return path


@functools.cache
def parse_config_file(filename: Path) -> Options:
    if not filename.exists():
        return DEFAULT_OPTIONS
    parser = configparser.ConfigParser()
    parser.read(filename)
    try:
        section = parser["nameparser"]
    except KeyError:
        error(f'config file {filename} missing required section "nameparser"')
        return DEFAULT_OPTIONS
    else:
        return Options(
            timeout_ms=section.getint("timeout_ms", DEFAULT_OPTIONS.timeout_ms),
            parserdata_path=parse_path(section, "parserdata_path", filename.parent),
            log_level=section.get("log_level", DEFAULT_OPTIONS.log_level).upper(),
        )


def get_options() -> Options:
    if "NAMEPARSER_CONFIG_FILE" in os.environ:
        config_file = Path(os.environ["NAMEPARSER_CONFIG_FILE"])
    else:
        config_file = Path(__file__).parent.parent / "nameparser.ini"
    return parse_config_file(config_file)
