"""
agskills - Agent Skills Installer

Manage a library of agent skills: pick skills in an interactive terminal list,
group them into bundles, and link them into an AI assistant's skills directory.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("agskills")
except PackageNotFoundError:
    __version__ = "0.4.0"

__all__ = [
    "__version__",
]
