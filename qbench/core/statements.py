"""
Splitting of multi-statement SQL scripts.
"""

from typing import List


def split_statements(script: str) -> List[str]:
    """
    Split a script on ``;``, keeping the delimiter with each statement.

    Each piece is trimmed. A trailing fragment after the last ``;`` is kept
    (trimmed), so callers must skip statements that are empty.

    NOTE: no SQL awareness; a ``;`` inside a string literal or comment splits
    the statement.

    Example:
        >>> split_statements("CREATE TABLE t(x int); INSERT INTO t VALUES (1);")
        ['CREATE TABLE t(x int);', 'INSERT INTO t VALUES (1);']
    """
    pieces: List[str] = []
    start = 0
    while True:
        idx = script.find(";", start)
        if idx == -1:
            break
        pieces.append(script[start : idx + 1].strip())
        start = idx + 1
    if start < len(script):
        pieces.append(script[start:].strip())
    return pieces
