"""Path and file URI string helpers.

All functions are pure string transforms. Paths are handled POSIX style
regardless of platform; backslashes are treated as separators.
"""

import re
from urllib.parse import quote, unquote, urlsplit

FILE_SCHEME = "file://"
FILE_URI_PREFIX = "file:///"


def _to_unix(path: str) -> str:
    return path.replace("\\", "/")


def _trailing_slash(path: str) -> str:
    return path if path.endswith("/") else path + "/"


def path_to_uri(path: str) -> str:
    """Convert a path into a file URI, percent-encoding each segment.

    Args:
        path: File system path, absolute or relative

    Returns:
        URI of the form file:///segment/segment
    """
    segments = [segment for segment in _to_unix(path).split("/") if segment]
    return FILE_URI_PREFIX + "/".join(quote(segment, safe="") for segment in segments)


def uri_to_path(uri: str) -> str:
    """Convert a URI back into an absolute POSIX path.

    Malformed percent escapes are left untouched. path_to_uri always emits
    uppercase hex escapes, so a URI with lowercase escapes (%c3%a9) round
    trips to its uppercase form (%C3%A9).
    """
    if uri.startswith(FILE_SCHEME):
        host_and_path = uri[len(FILE_SCHEME):]
    else:
        host_and_path = urlsplit(uri).path
    segments = [unquote(segment) for segment in host_and_path.split("/") if segment]
    return "/" + "/".join(segments)


def parent_uri(uri: str) -> str:
    """Return the URI of the directory containing uri."""
    path = uri_to_path(uri)
    return path_to_uri(path.rsplit("/", 1)[0])


def vfs_path(path: str) -> str:
    """Normalize separators to / and collapse repeated slashes."""
    return re.sub(r"/+", "/", _to_unix(path))


def join_path(root: str, *elements: str) -> str:
    """Join path-like strings with POSIX semantics.

    Joining an absolute element discards everything accumulated before it,
    and empty elements are skipped.

    Examples:
        join_path("/a", "b", "c") -> "/a/b/c"
        join_path("/a", "/b", "c") -> "/b/c"
    """
    result = _trailing_slash(_to_unix(root))
    for element in elements:
        if not element:
            continue
        element = _trailing_slash(_to_unix(element))
        if element.startswith("/"):
            result = element
        else:
            result += element
    return result[:-1]


def concat_path(left: str, right: str) -> str:
    """Concatenate two path-like strings with exactly one separator between them.

    Unlike join_path this ignores path semantics: an absolute right side is
    appended, not substituted.
    """
    if not left.endswith("/") and not right.startswith("/"):
        return left + "/" + right
    elif left == FILE_URI_PREFIX and right.startswith("/"):
        return left
    else:
        return left + right


def path_starts_with(path: str, *prefixes: str) -> bool:
    """Check whether path starts with any of the prefixes after normalization."""
    normalized = vfs_path(path)
    return any(normalized.startswith(vfs_path(prefix)) for prefix in prefixes)


def uri_contains_or_equals(parent: str, child: str) -> bool:
    """Check whether child is parent itself or lies beneath it."""
    if parent == child:
        return True
    return child.startswith(_trailing_slash(parent))
