"""Tests for the EPA CAMD to EIA-860 crosswalk.

This package exists so that test modules share a parent logger.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
