"""
Notebook - attach short notes to tags from the command line.

Notes are stored in a relational database and can be listed back by tag,
optionally restricted to the ones written today.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notebook")
except PackageNotFoundError:
    __version__ = "0.1.0"
