import sys
import os

import pytest

_tests_dir = os.path.dirname(os.path.abspath(__file__))
_src_dir   = os.path.abspath(os.path.join(_tests_dir, '..'))

# Import the package from the source tree when it is not installed
# (e.g. running pytest straight from a checkout without 'pip install -e .').
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

import yamlite


@pytest.fixture
def events_of():
    """Parse text and return (ok, [str(event), ...])."""
    def _events_of(text, **kwargs):
        ok, events = yamlite.parse_events(text, **kwargs)
        return ok, [str(event) for event in events]
    return _events_of
