__version__ = "0.1.0"

# Public API exports
from .cache import CacheEntry, SizeCache
from .config import AppConfig, CacheConfig, LogConfig, load_config
from .walker import compute_size

__all__ = [
    "__version__",
    # Configuration
    "AppConfig",
    "CacheConfig",
    "LogConfig",
    "load_config",
    # Size computation
    "compute_size",
    "CacheEntry",
    "SizeCache",
]
