from __future__ import annotations

import os

SEP = os.sep


def _segments(part: str) -> list[str]:
    return [segment for segment in part.split(SEP) if segment]


def join(*parts: str) -> str:
    """
    Join path parts with a single separator between them.

    Unlike os.path.join/normpath, '.' and '..' are kept as literal segments.
    A leading separator is kept iff the first part has one, a trailing
    separator iff the last part has one.
    """
    if not parts:
        return ""
    head = SEP if parts[0].startswith(SEP) else ""
    tail = SEP if parts[-1].endswith(SEP) else ""
    center = SEP.join(segment for part in parts for segment in _segments(part))

    # join("/") must stay "/" rather than "//"
    if center or not head or not tail:
        return head + center + tail
    return head


def resolve(*parts: str) -> str:
    """
    Like join, except that an absolute part discards everything before it.
    Empty parts are ignored.
    """
    kept: list[str] = []
    for part in parts:
        if not part:
            continue
        if part.startswith(SEP):
            kept = [part]
        else:
            kept.append(part)
    return join(*kept)


def basename(path: str) -> str:
    if path.endswith(SEP):
        stripped = path.rstrip(SEP)
        return stripped[stripped.rfind(SEP) + 1:]
    return path[path.rfind(SEP) + 1:]


def dirname(path: str) -> str:
    """
    Parent of a path. A directory reference (trailing separator) yields a
    directory reference, a file reference yields the bare parent path.
    """
    if path.endswith(SEP):
        stripped = path.rstrip(SEP)
        if not stripped:
            return SEP
        index = stripped.rfind(SEP)
        if index == -1:
            return ""
        if index == 0:
            return SEP
        return stripped[:index] + SEP

    index = path.rfind(SEP)
    if index == -1:
        return ""
    if index == 0:
        return SEP
    return path[:index]


def append_separator(path: str) -> str:
    return path if path.endswith(SEP) else path + SEP


def strip_separator(path: str) -> str:
    stripped = path.rstrip(SEP)
    if not stripped and path.startswith(SEP):
        return SEP
    return stripped
