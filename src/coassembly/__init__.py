"""
CoAssembly docs tooling - autolinking and translation tracking for the bylaws site.

Subpackages:
- coassembly.core: errors, logging, hashing, settings
- coassembly.glossary: term dictionary index
- coassembly.autolink: document tree, find-and-replace engine, linkers
- coassembly.i18n: manifest store, staleness detector, translation requests
- coassembly.tools.changelog: changelog pages from git history
- coassembly.cli: command-line interface
"""

__version__ = "0.1.0"
