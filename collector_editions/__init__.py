"""Collector editions package.

Import resolver functions from `collector_editions.resolver`; submodules are
not imported here so that loading the package does not configure logging.
"""

__all__: list[str] = []
