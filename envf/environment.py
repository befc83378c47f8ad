#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import tomllib  # py311+
from typing import *

from .loader import DocumentParser, EnvMap, LoadError, load_env_file
from .logger import get_logger


def merge_env_files(files: Sequence[str], silent: bool = False,
                    parse: DocumentParser = tomllib.loads) -> EnvMap:
    """
    Load every file in order and merge them, later files overriding earlier ones.
    A file that fails to load contributes nothing and only produces a warning (unless silent).
    """
    logger = get_logger()
    env: EnvMap = {}
    for path in files:
        result = load_env_file(path, parse)
        if isinstance(result, LoadError):
            if not silent:
                logger.warning(f"{path} ignored: {result}")
            continue
        logger.debug("Loaded environment file", path=path, count=len(result))
        env.update(result)
    return env
