"""Extraction of (parent, child) pairs from module graph lines.

Lines are split positionally on single spaces, so a leading space or a run of
spaces produces empty fields. Such lines fail the identifier check rather than
being normalized.
"""

import re

from modgrapher.graph.errors import InvalidIdentifierError, MalformedLineError

VALID_IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z]")

FIELD_SEPARATOR = " "
MIN_FIELDS = 2


def is_valid_identifier(identifier: str) -> bool:
    """Return True if the identifier starts with an ASCII letter."""
    return VALID_IDENTIFIER_PATTERN.match(identifier) is not None


def get_parent_and_child(line: str) -> tuple[str, str]:
    """Split one line into its parent and child identifiers.

    Only the first two fields are used; anything after them is ignored.

    Args:
        line: A single line of input without its line terminator

    Returns:
        Tuple of (parent, child), both taken verbatim

    Raises:
        MalformedLineError: If the line has fewer than two fields
        InvalidIdentifierError: If either identifier does not start with a letter

    Examples:
        >>> get_parent_and_child("example.com/app golang.org/x/text@v0.3.0")
        ('example.com/app', 'golang.org/x/text@v0.3.0')
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        raise MalformedLineError(line)

    parent, child = fields[0], fields[1]
    if not is_valid_identifier(parent) or not is_valid_identifier(child):
        raise InvalidIdentifierError(line)

    return parent, child
