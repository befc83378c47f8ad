#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
from dataclasses import dataclass
from enum import Enum, auto
from typing import *

HELP_FLAGS = ("-h", "--help")
SILENT_FLAG = "-s"
FILE_FLAG = "-f"
FILE_FLAG_INLINE = "-f="
END_OF_FLAGS = "--"

USAGE = """\
Usage: envf [(-f FILE) ...] [-f=FILE ...] [-s] [--] COMMAND [ARGS...]

Run COMMAND in an environment augmented with the variables listed in each FILE.

Options:
  -f FILE, -f=FILE  Add values read from FILE to the environment in which COMMAND is run.
                    FILE is a TOML (https://toml.io) table of scalar values.
                    Later files override earlier ones.
  -s                Silence warnings about unprocessable files.
  -h, --help        Display this message.
  --                Stop looking for options; what follows is COMMAND.

Source: https://github.com/thilp/envf"""


class ScanState(Enum):
    SCANNING_FLAGS = auto()
    COLLECTING_COMMAND = auto()


@dataclass(frozen=True)
class LauncherConfig:
    files: tuple[str, ...]
    silent: bool
    command: tuple[str, ...]

    def __post_init__(self):
        if not self.command:
            raise ValueError("LauncherConfig requires a non-empty command")


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class UsageError:
    message: str


ArgParseResult: TypeAlias = Union[LauncherConfig, Help, UsageError]


def parse_args(argv: Iterable[str]) -> ArgParseResult:
    """
    Split argv (without the program name) into launcher flags and the command.

    Flags are only recognized as a prefix: the first argument that is not one of
    ours (and everything after it) is the command, taken verbatim.
    """
    files: list[str] = []
    silent = False
    command: list[str] = []
    state = ScanState.SCANNING_FLAGS

    args = iter(argv)
    for arg in args:
        if state is ScanState.COLLECTING_COMMAND:
            command.append(arg)
        elif arg in HELP_FLAGS:
            return Help()
        elif arg == SILENT_FLAG:
            silent = True
        elif arg == FILE_FLAG:
            path = next(args, None)
            if path is None:
                return UsageError("Trailing -f")
            files.append(path)
        elif arg.startswith(FILE_FLAG_INLINE):
            files.append(arg[len(FILE_FLAG_INLINE):])
        elif arg == END_OF_FLAGS:
            state = ScanState.COLLECTING_COMMAND
        else:
            state = ScanState.COLLECTING_COMMAND
            command.append(arg)

    if not command:
        return UsageError("No command to execute was provided.")
    return LauncherConfig(files=tuple(files), silent=silent, command=tuple(command))
