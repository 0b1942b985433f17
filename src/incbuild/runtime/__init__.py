from .config import config_from_mapping, load_config, with_overrides
from .runner import BuildRunner

__all__ = ['config_from_mapping', 'load_config', 'with_overrides', 'BuildRunner']
