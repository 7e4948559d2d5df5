"""
Configuration module for the mountebank client.

This module handles loading configuration from YAML files and environment variables.
"""

from .config import Config, load_config, setup_logging

__all__ = ["Config", "load_config", "setup_logging"]
