"""
Dotenv file parser and environment materialization package.
"""

from .config import load_config
from .engine import EnvLoader
from .loader import SourceUnavailable, StrictModeError, load_env_file, load_env_text
from .materializer import EnvMaterializer, MappingEnvironment
from .parser import EnvFileParser, parse_env_text

__all__ = [
    "EnvFileParser",
    "EnvLoader",
    "EnvMaterializer",
    "MappingEnvironment",
    "SourceUnavailable",
    "StrictModeError",
    "load_config",
    "load_env_file",
    "load_env_text",
    "parse_env_text",
]
