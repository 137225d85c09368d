#!/usr/bin/env python3
"""
Identifier sanitizing for Component Mapper

Turns display strings from spreadsheet cells into stable node ids.
"""

import re

_INVALID_CHARS = re.compile(r'[^A-Za-z0-9\s\-_]')
_WHITESPACE = re.compile(r'\s+')


def sanitize_id(raw: str) -> str:
    """
    Normalize a raw display string into a node identifier.

    Surrounding whitespace is trimmed, characters outside ASCII letters,
    digits, whitespace, hyphen and underscore are removed, whitespace runs
    become a single underscore and the result is lowercased. Idempotent.

    Returns an empty string for blank input; callers must not insert a node
    with an empty id.
    """
    cleaned = _INVALID_CHARS.sub('', raw.strip())
    return _WHITESPACE.sub('_', cleaned).lower()
