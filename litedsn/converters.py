from urllib.parse import parse_qsl, quote, unquote, urlencode

# https://url.spec.whatwg.org/#path-percent-encode-set, plus "%" so decoding
# gives back the original filename, and "[" / "]" which urlsplit() reserves
# for IPv6 hosts.
PATH_ESCAPED = ' "#%<>?[]`{}'

PATH_SAFE = "".join(
    chr(c) for c in range(0x21, 0x7F) if chr(c) not in PATH_ESCAPED
)


def pack_path(v):
    return quote(v, safe=PATH_SAFE)


def unpack_path(d):
    """Percent-decodes a path. Unlike a query string a '+' stays a '+'.

    Raises UnicodeDecodeError if the decoded bytes aren't valid UTF-8.
    """
    return unquote(d, encoding="utf8", errors="strict")


def pack_query(pairs):
    return urlencode(pairs)


def unpack_query(d):
    """Returns the (key, value) pairs of a query string in order, duplicates
    included, split on "&" only. Invalid UTF-8 is replaced rather than rejected.
    """
    return parse_qsl(
        d, keep_blank_values=True, encoding="utf8", errors="replace", separator="&"
    )
