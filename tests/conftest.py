# tests/conftest.py
"""
Shared fixtures and sample event streams.
"""

import pytest

from php_reflection import DefaultBuilder, IdentifierAnalyzer


SAMPLE_EVENTS = '''
; a child declared before its parent
(class "app::Child" 3
    (extends "app::Base")
    (implements "app::Runnable")
    (method run 4 (parameter "$x" 4))
    (property "$name" 5)
    (constant MAX))

(class "app::Base" 10 (method "__construct" 11))
(interface "app::Runnable" 20 (method run 21))
(function helper 30 (parameter "$a" 30))
(proxy "vendor::lib::Thing")
'''

BROKEN_EVENTS = '''
(class "app::Child" 3
'''


@pytest.fixture
def builder():
    return DefaultBuilder()


@pytest.fixture
def analyzer():
    return IdentifierAnalyzer()
