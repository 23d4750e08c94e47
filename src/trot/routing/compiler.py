"""Pattern compiler — turns route pattern strings into typed segments.

Pattern syntax::

    "/"                -> [Segment(STATIC, "/")]
    "/users/:id"       -> [Segment(STATIC, "users"), Segment(PARAMETER, "id")]
    "/users/:id?"      -> [Segment(STATIC, "users"), Segment(OPTIONAL, "id")]
    "/files/*"         -> [Segment(STATIC, "files"), Segment(ANY, "*")]

The same ``clean`` and ``split`` helpers normalise request paths in the
matcher, so patterns and paths are cut into pieces identically.
"""

import logging

from trot.errors import ConfigurationError
from trot.routing.route import Segment, SegmentType

logger = logging.getLogger("trot.routing")

SEPARATOR = "/"
PARAM_MARKER = ":"
OPTIONAL_MARKER = "?"
ANY_MARKER = "*"


def clean(path: str) -> str:
    """Strip every leading and trailing separator.

    An empty result collapses to the separator itself, so ``""``,
    ``"/"`` and ``"///"`` all clean to ``"/"``.
    """
    stripped = path.strip(SEPARATOR)
    return stripped or SEPARATOR


def split(path: str) -> list[str]:
    """Clean *path* and cut it into pieces.

    The root path is a single piece holding the separator; everything
    else is split on ``/`` (adjacent separators yield empty pieces).
    """
    cleaned = clean(path)
    if cleaned == SEPARATOR:
        return [SEPARATOR]
    return cleaned.split(SEPARATOR)


def append_separator(path: str) -> str:
    """Ensure *path* starts with a separator."""
    return path if path.startswith(SEPARATOR) else SEPARATOR + path


def compile_pattern(pattern: str) -> tuple[Segment, ...]:
    """Compile a route pattern into an ordered, flat tuple of segments.

    Raises ``ConfigurationError`` for a parameter without a name or a
    wildcard that is not the final segment.
    """
    original = pattern
    cleaned = clean(pattern)

    if cleaned == SEPARATOR:
        return (Segment(original, SegmentType.STATIC, SEPARATOR),)

    pieces = cleaned.split(SEPARATOR)
    segments: list[Segment] = []

    for position, piece in enumerate(pieces):
        if piece.startswith(ANY_MARKER):
            if position != len(pieces) - 1:
                msg = (
                    f"Wildcard in route {original!r} must be the final segment; "
                    f"found {SEPARATOR.join(pieces[position:])!r}."
                )
                raise ConfigurationError(msg)
            segments.append(Segment(original, SegmentType.ANY, piece))
            break

        if piece.startswith(PARAM_MARKER):
            name = piece[len(PARAM_MARKER):]
            segment_type = SegmentType.PARAMETER
            if OPTIONAL_MARKER in name:
                # Everything from the last "?" on is dropped
                name = name[: name.rindex(OPTIONAL_MARKER)]
                segment_type = SegmentType.OPTIONAL
            if not name:
                msg = f"Route {original!r} has a parameter segment {piece!r} without a name."
                raise ConfigurationError(msg)
            segments.append(Segment(original, segment_type, name))
            continue

        segments.append(Segment(original, SegmentType.STATIC, piece))

    logger.debug("compiled %r into %d segment(s)", original, len(segments))
    return tuple(segments)
