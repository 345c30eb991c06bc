"""
Core exceptions for the asset onboarding component.

Store failures are not exceptions at this level: the catalog port returns a
tagged StoreOutcome. The classes here cover the faults that still propagate,
such as broken configuration or a store response that cannot be understood.
"""


class OnboardingError(Exception):
    """Base exception for all component-specific errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(OnboardingError):
    """Raised for errors related to application configuration."""
    pass


# --- Infrastructure Errors ---

class InfrastructureError(OnboardingError):
    """Base class for errors related to external systems (network, API, etc.)."""
    pass


class CatalogAPIError(InfrastructureError):
    """Raised when the catalog server answers with something unreadable."""
    pass
