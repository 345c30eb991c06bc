"""
Initializes the Dynaconf settings object for the asset_onboarding component.
This module is the single source of truth for all configuration.

Values can be overridden from the environment with the ONBOARDING_ prefix,
e.g. ONBOARDING_CATALOG__API_TOKEN or ONBOARDING_IDENTITIES__CONNECTION_GUID.
"""

from pathlib import Path
from dynaconf import Dynaconf

PROJECT_ROOT = Path(__file__).parent.parent

settings = Dynaconf(
    root_path=PROJECT_ROOT,
    settings_files=["config/settings.toml"],
    secrets=["config/.secrets.toml"],
    envvar_prefix="ONBOARDING",
    merge_enabled=True,
)
