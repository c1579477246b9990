"""
Comment stripping for JavaScript/JSX sources.

Removes line and block comments so that commented-out code never satisfies
a requirement, while copying string and template literals verbatim. This
is a small lexical state machine, not a parser: nested `${...}`
interpolations are not tracked, so a backtick inside one closes the
template literal.
"""

from enum import Enum


class LexState(Enum):
    """Lexical context of the scanner. Literal states carry their delimiter."""

    CODE = ""
    SINGLE_QUOTE = "'"
    DOUBLE_QUOTE = '"'
    TEMPLATE = "`"


_OPENERS: dict[str, LexState] = {
    LexState.SINGLE_QUOTE.value: LexState.SINGLE_QUOTE,
    LexState.DOUBLE_QUOTE.value: LexState.DOUBLE_QUOTE,
    LexState.TEMPLATE.value: LexState.TEMPLATE,
}


def transition(state: LexState, char: str, escaped: bool = False) -> LexState:
    """
    Compute the next lexical state after reading `char`.

    Args:
        state: Current state.
        char: Character being read.
        escaped: Whether `char` is preceded by an odd number of backslashes.

    Returns:
        The state after `char`.
    """
    if escaped:
        return state
    if state is LexState.CODE:
        return _OPENERS.get(char, LexState.CODE)
    if char == state.value:
        return LexState.CODE
    return state


def is_escaped(preceding: list[str] | str) -> bool:
    """Return True if `preceding` ends in an odd run of backslashes."""
    count = 0
    for char in reversed(preceding):
        if char != "\\":
            break
        count += 1
    return count % 2 == 1


def strip_comments(source: str) -> str:
    """
    Remove `//` and `/* */` comments from source text.

    `//` comments are dropped up to, but not including, the next newline.
    `/*` comments are dropped through the closing `*/`; an unterminated
    block comment runs to the end of input. Quoted strings and template
    literals are copied unchanged, including any comment markers inside
    them, and an unterminated literal runs to the end of input.

    Escapes are judged against the text already emitted, so removing a
    comment can never change whether a later quote is escaped on a second
    pass. This keeps the function idempotent.

    Args:
        source: Raw source text.

    Returns:
        The source with comments removed.
    """
    if not source:
        return source

    out: list[str] = []
    state = LexState.CODE
    length = len(source)
    i = 0

    while i < length:
        char = source[i]

        if state is LexState.CODE and char == "/" and i + 1 < length:
            following = source[i + 1]
            if following == "/":
                end = source.find("\n", i + 2)
                i = length if end == -1 else end
                continue
            if following == "*":
                end = source.find("*/", i + 2)
                i = length if end == -1 else end + 2
                continue

        if char in _OPENERS:
            state = transition(state, char, is_escaped(out))

        out.append(char)
        i += 1

    return "".join(out)
