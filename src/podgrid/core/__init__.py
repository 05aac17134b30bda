"""Core modules for podgrid."""

from podgrid.core.config import (
    ApiConfig,
    Config,
    DisplayConfig,
    get_config,
    load_config,
)
from podgrid.core.errors import (
    ConfigError,
    FetchError,
    HttpError,
    NetworkError,
    ParseError,
    PodgridError,
)
from podgrid.core.genres import (
    UNCATEGORIZED,
    UNKNOWN_GENRE,
    all_genres,
    enrich,
    lookup_genre,
)
from podgrid.core.state import Browser

__all__ = [
    "ApiConfig",
    "Browser",
    "Config",
    "ConfigError",
    "DisplayConfig",
    "FetchError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "PodgridError",
    "UNCATEGORIZED",
    "UNKNOWN_GENRE",
    "all_genres",
    "enrich",
    "get_config",
    "load_config",
    "lookup_genre",
]
