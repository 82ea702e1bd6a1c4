"""Common literal values used across jobel_pages.

These constants keep filenames and default paths centralized so the CLI,
composer and tests can import the same values without drifting. Intended for
internal use within the jobel_pages package.

Examples
--------
>>> from jobel_pages import _constants
>>> _constants.MANIFEST_FILENAME
'site-manifest.json'
"""

from pathlib import Path

MANIFEST_FILENAME = "site-manifest.json"
DEFAULT_CONFIG = Path("config/site.yaml")
