"""Public configuration API."""

from .loader import CONFIG_FILENAME, load_config
from .models import AnalysisConfig, ChartsConfig, ClassificationConfig, RuleEntry

__all__ = [
    "CONFIG_FILENAME",
    "AnalysisConfig",
    "ChartsConfig",
    "ClassificationConfig",
    "RuleEntry",
    "load_config",
]
