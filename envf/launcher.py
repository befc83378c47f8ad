#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import os
import sys
from typing import *

from .arguments import USAGE, Help, UsageError, parse_args
from .configuration import EnvfConfiguration
from .environment import merge_env_files
from .loader import EnvMap
from .logger import get_logger, init_logging

ExecFn: TypeAlias = Callable[[str, Sequence[str], EnvMap], NoReturn]


def exec_process(path: str, args: Sequence[str], env: EnvMap) -> NoReturn:
    """
    Replace the current process with `path args...`, looked up on PATH.
    The new program sees the inherited environment with `env` laid over it.
    Only returns by raising (OSError when the program cannot be started).
    """
    os.execvpe(path, [path, *args], {**os.environ, **env})


def print_usage() -> None:
    print(USAGE, file=sys.stderr)


def run(argv: Sequence[str], exec_fn: ExecFn = exec_process) -> int:
    logger = get_logger()
    result = parse_args(argv)
    if isinstance(result, Help):
        print_usage()
        return 0
    if isinstance(result, UsageError):
        logger.error(result.message)
        print(file=sys.stderr)
        print_usage()
        return 1

    env = merge_env_files(result.files, result.silent)
    command = list(result.command)
    logger.debug("Executing command", command=command, variables=sorted(env))
    try:
        exec_fn(command[0], command[1:], env)
    except (OSError, ValueError) as exc:
        # no usage here: the invocation was fine, the command was not
        reason = getattr(exc, "strerror", None) or exc
        logger.error(f"Couldn't execute command {command!r}: {reason}")
        return 1


def main() -> None:
    try:
        configuration = EnvfConfiguration.load()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    init_logging(configuration)
    sys.exit(run(sys.argv[1:]))
