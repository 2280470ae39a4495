"""Splits an access-log line into fields on its meaningful spaces.

The default nginx log_format is

    $remote_addr - $remote_user [$time_local] "$request" $status
    $body_bytes_sent "$http_referer" "$http_user_agent" "$http_x_forwarded_for"

Quoted and bracketed fields contain spaces of their own, so a plain
whitespace split is wrong. A whitespace character separates two fields only
in these neighbourhoods (prev = char before, next = char after):

  1. prev in  " ] - digit   and   next in  " - [ digit
  2. prev is  -             and   next is a word character
  3. prev is a word char    and   next is  [

Rules 2 and 3 cover a named $remote_user ("- frank [").
"""

import string

_DIGITS = frozenset(string.digits)
_WORD = frozenset(string.ascii_letters + string.digits + "_")

_CLOSERS = frozenset('"]-') | _DIGITS
_OPENERS = frozenset('"-[') | _DIGITS


def is_separator(line: str, index: int) -> bool:
    """True if the character at *index* is a field-separating space."""
    if index <= 0 or index >= len(line) - 1:
        return False
    if not line[index].isspace():
        return False

    prev = line[index - 1]
    nxt = line[index + 1]
    if prev in _CLOSERS and nxt in _OPENERS:
        return True
    if prev == "-" and nxt in _WORD:
        return True
    return prev in _WORD and nxt == "["


def split_fields(line: str) -> list[str]:
    """Split *line* into field tokens, dropping empty ones."""
    tokens = []
    start = 0
    for i, ch in enumerate(line):
        if ch.isspace() and is_separator(line, i):
            tokens.append(line[start:i])
            start = i + 1
    tokens.append(line[start:])
    return [t for t in tokens if t]
