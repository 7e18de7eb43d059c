"""Configuration loading and resolution."""

from docnav.config.load import DEFAULT_CONFIG_FILE, load_config
from docnav.config.model import LocaleOptions, SiteOptions

__all__ = ["DEFAULT_CONFIG_FILE", "LocaleOptions", "SiteOptions", "load_config"]
