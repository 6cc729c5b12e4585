"""Common literal values used across page_tags.

These constants keep filenames, defaults and URL bases centralized so tags,
builders and tests can import the same values without drifting. Intended for
internal use within the page_tags package.

Examples
--------
>>> from page_tags import _constants
>>> _constants.MANIFEST_FILENAME
'.page-tags-manifest.json'
>>> _constants.DEFAULT_DATE_FORMAT
'%A, %B %d, %Y'
"""

MANIFEST_FILENAME = ".page-tags-manifest.json"
DEFAULT_TAG_PREFIX = "r"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_PART_NAME = "body"
DEFAULT_DATE_FORMAT = "%A, %B %d, %Y"
DEFAULT_BREADCRUMB_SEPARATOR = " &gt; "
GRAVATAR_URL = "http://www.gravatar.com/avatar/"
