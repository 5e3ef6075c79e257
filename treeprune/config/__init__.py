from .loader import load_config
from .models import CompareConfig, JunkConfig, TreepruneConfig

__all__ = [
    "CompareConfig",
    "JunkConfig",
    "TreepruneConfig",
    "load_config",
]
