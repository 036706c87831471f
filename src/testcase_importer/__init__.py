"""Test case import engine: format detection, column mapping and draft normalization."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
