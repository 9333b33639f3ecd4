from vetogov.core.config.loader import default_config_dict, load_config, validate_and_normalize
from vetogov.core.config.models import SetupConfig

__all__ = ["SetupConfig", "default_config_dict", "load_config", "validate_and_normalize"]
