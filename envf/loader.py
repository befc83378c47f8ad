#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
import tomllib  # py311+
from typing import *

from .coercion import stringify

EnvMap: TypeAlias = dict[str, str]


@dataclass(frozen=True)
class LoadError:
    """Why a file could not contribute anything to the environment."""
    reason: str

    def __str__(self) -> str:
        return self.reason


LoadResult: TypeAlias = Union[EnvMap, LoadError]
DocumentParser: TypeAlias = Callable[[str], Any]


def _invalid_name(key: str) -> bool:
    return not key or "=" in key or "\0" in key


def _add_field(acc: LoadResult, field: tuple[str, Any]) -> LoadResult:
    if isinstance(acc, LoadError):
        return acc  # first failure wins, later fields are not looked at
    key, value = field
    if _invalid_name(key):
        return LoadError(f"{key!r} is not a valid environment variable name")
    s = stringify(value)
    if s is None or "\0" in s:
        return LoadError(f"value for {key} ({value!r}) can't be converted into a string")
    acc[key] = s
    return acc


def table_into_env_map(table: Mapping[str, Any]) -> LoadResult:
    return reduce(_add_field, table.items(), {})


def load_env_file(path: str, parse: DocumentParser = tomllib.loads) -> LoadResult:
    """
    Read one TOML file and turn its top-level table into an EnvMap.

    Problems are checked in this order and the first one is returned as a LoadError:
      1) the file cannot be read (or is not UTF-8)
      2) the contents are not valid TOML
      3) the document is not a table
      4) some field is not a scalar
    A file either contributes all of its fields or none.
    """
    try:
        body = Path(path).read_bytes().decode("utf-8")
    except OSError as exc:
        return LoadError(f"Could not read contents: {exc.strerror or exc}")
    except UnicodeDecodeError as exc:
        return LoadError(f"Could not read contents: not valid UTF-8 ({exc.reason})")

    try:
        doc = parse(body)
    except ValueError as exc:  # tomllib.TOMLDecodeError is a ValueError
        return LoadError(f"Invalid TOML: {exc}")

    if not isinstance(doc, Mapping):
        return LoadError(f"Unexpected format: top level is a {type(doc).__name__}, not a table")
    return table_into_env_map(doc)
