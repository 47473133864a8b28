"""Version information for GitHub Agent."""

__version__ = "0.3.0"
__version_info__ = tuple(int(i) for i in __version__.split("."))

# Feature flags based on version
FEATURES = {
    "generation": True,            # Available since 0.1.0
    "code_navigation": True,       # Available since 0.1.0
    "architecture_graph": True,    # Available since 0.2.0
    "pr_summary": True,            # Available since 0.3.0
}


def get_version() -> str:
    """Get the current version string."""
    return __version__


def get_features() -> dict:
    """Get available features for this version."""
    return FEATURES.copy()
