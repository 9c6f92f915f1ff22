import platform
from importlib import metadata

DISTRIBUTION_NAME = "tag-analyzer"
TITLE = "Tag Analyzer"
DESCRIPTION = "Counts 【bracketed】 tags in M-numbered text records"


def get_version():
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "Unknown"


def get_short_version():
    """Returns major.minor, or "Unknown" when the package is not installed."""
    version = get_version()
    if version == "Unknown":
        return version
    return ".".join(version.split(".")[:2])


def get_full_version_info():
    return (
        f"{TITLE}\n"
        f"Version: {get_short_version()} ({get_version()})\n"
        f"\n"
        f"{DESCRIPTION}\n"
        f"\n"
        f"Python runtime: {platform.python_version()}"
    )
