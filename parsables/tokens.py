r"""
Parsables tokenizer: split one line of text into argument tokens, sh-style.

Supported
- whitespace outside quotes separates tokens (runs collapse, nothing empty)
- both kinds of quotes; a quoted region always yields a token, even '' or ""
- backslash outside quotes escapes exactly the next character
- backslash inside quotes escapes only that region's own delimiter and itself

Not supported (on purpose, this is not a shell)
- pipes, globbing, variables, command substitution
- escape sequences like \t or \n; they stay as written

Degrading instead of failing
- an unterminated quote consumes to the end of the line
- a trailing backslash outside quotes produces nothing

Examples
    >>> tokenize("echo 'foo \"bar\"' day")
    ['echo', 'foo "bar"', 'day']
    >>> tokenize("echo '' bar")
    ['echo', '', 'bar']
    >>> join(["echo", "foo bar", ""])
    "echo 'foo bar' ''"
"""
import re

_QUOTES = frozenset("\"'")
_ESCAPE = "\\"

# Anything that would make tokenize() see something other than the literal text.
_SPECIAL = re.compile(r"[\s\"'\\]")


def tokenize(line, /):
    """
    Tokenize a line of text in a manner similar to `sh`.

    parameters
    - line: str
      the raw text, typically one line read from a prompt.

    returns
    - list[str]: the tokens in order of appearance. Empty tokens only come
      from empty quoted regions.

    raises
    - TypeError: when line is not a string. Any string is accepted.
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")

    tokens = []
    # None means "no token yet", which is not the same as [] (an empty token in progress).
    buffer = None
    escaped = False
    chars = iter(line)

    for char in chars:
        if escaped:
            escaped = False
            piece = char
        elif char == _ESCAPE:
            escaped = True
            continue
        elif char in _QUOTES:
            piece = _quoted(chars, char)
        elif char.isspace():
            if buffer is not None:
                tokens.append("".join(buffer))
                buffer = None
            continue
        else:
            piece = char
        if buffer is None:
            buffer = []
        buffer.append(piece)

    if buffer is not None:
        tokens.append("".join(buffer))

    return tokens


def _quoted(chars, delimiter):
    """
    consume a quoted region from the shared iterator, up to its closing delimiter.

    - a backslash before the delimiter or before another backslash yields that
      character alone.
    - a backslash before anything else is kept together with that character.
    - a lone backslash at the end of input is kept.
    """
    buffer = []
    for char in chars:
        if char == delimiter:
            break
        if char != _ESCAPE:
            buffer.append(char)
            continue
        following = next(chars, None)
        if following is None:
            buffer.append(char)
        elif following == delimiter or following == _ESCAPE:
            buffer.append(following)
        else:
            buffer.append(char + following)
    return "".join(buffer)


def quote(token, /):
    """
    Return a spelling of token that tokenize() reads back as exactly token.

    Plain tokens are returned unchanged and the empty token becomes ''.
    Single quotes are preferred for readability, with backslashes doubled; when
    the token contains a ' every special character is backslash-escaped instead.
    """
    if not isinstance(token, str):
        raise TypeError("quote() argument must be a string")
    if not token:
        return "''"
    if not _SPECIAL.search(token):
        return token
    if "'" not in token:
        return "'%s'" % token.replace(_ESCAPE, _ESCAPE * 2)
    return _SPECIAL.sub(lambda match: _ESCAPE + match.group(), token)


def join(tokens, /):
    """
    Join tokens into a single line, quoting where needed (inverse of tokenize()).
    """
    return " ".join(map(quote, tokens))


__all__ = (
    "tokenize",
    "quote",
    "join",
)
