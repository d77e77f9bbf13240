"""Configuration utilities."""

from .config_loader import load_config, save_config, validate_config, DEFAULT_CONFIG_PATH

__all__ = ['load_config', 'save_config', 'validate_config', 'DEFAULT_CONFIG_PATH']
