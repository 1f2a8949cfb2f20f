from .loader import load_config
from .models import (
    ApiConfig,
    CompareviewConfig,
    UIConfig,
)

__all__ = [
    "ApiConfig",
    "CompareviewConfig",
    "UIConfig",
    "load_config",
]
