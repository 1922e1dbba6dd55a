"""Configuration management for multi-platform deployments."""

from .platform import Config, ProviderConfig, detect_platform, provider_config

__all__ = ["Config", "ProviderConfig", "detect_platform", "provider_config"]
