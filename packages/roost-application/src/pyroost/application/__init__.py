from .factory import create_config, create_root

__all__ = ["create_config", "create_root"]
