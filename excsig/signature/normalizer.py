"""
excsig Message Normalizer

Strips non-deterministic spans (quoted values, bracketed details) from
exception messages so that messages differing only in incidental data
produce the same signature text.
"""

import logging

from excsig.errors import NullArgumentError


logger = logging.getLogger("excsig.normalizer")

# Opening character -> closing character. Quotes close on themselves and
# are never balance-tracked; brackets only nest with their own kind.
STOP_CHARS = {
    '(': ')',
    '{': '}',
    '[': ']',
    '"': '"',
    "'": "'",
}


def normalize(message: str) -> str:
    """
    Normalize an exception message for signature purposes.

    Only the text before the first ':' is kept (the remainder is usually
    free-form detail), then stop spans are removed from it.

    Example:
        >>> normalize("Timeout (after 30s): host=10.0.0.1")
        'Timeout '
    """
    if message is None:
        raise NullArgumentError("message")

    if not message:
        return message

    head, _, _ = message.partition(':')
    return remove_stop_spans(head)


def remove_stop_spans(value: str) -> str:
    """
    Remove every span delimited by a stop character pair.

    Brackets count nested occurrences of the same opening character and
    consume input until the balance returns to zero. Different bracket kinds
    are not balanced against each other. Quotes run to the next occurrence of
    the same quote. Unterminated spans consume to the end of the input.
    """
    if value is None:
        raise NullArgumentError("value")

    if not value or not any(c in STOP_CHARS for c in value):
        return value

    out = []
    length = len(value)
    pos = 0

    while pos < length:
        c = value[pos]
        seek = STOP_CHARS.get(c)

        if seek is None:
            out.append(c)
        elif seek == c:
            end = value.find(seek, pos + 1)
            pos = length if end == -1 else end
        else:
            balance = 0
            while pos < length:
                if value[pos] == c:
                    balance += 1
                elif value[pos] == seek:
                    balance -= 1

                if balance == 0:
                    break

                pos += 1

        pos += 1

    return "".join(out)
