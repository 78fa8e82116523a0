"""Find-and-replace over canonical text or hex-dump text."""

from __future__ import annotations

import logging
import re

from goatee.content import hexcodec
from goatee.errors import InvalidPatternError
from goatee.models import ReplaceOutcome, SearchOptions
from goatee.search.engine import compile_pattern

log = logging.getLogger(__name__)


def replace(
    text: str,
    pattern: str,
    replacement: str,
    options: SearchOptions,
    *,
    replace_all: bool = False,
    hex_mode: bool = False,
    group_size: int = 16,
) -> ReplaceOutcome:
    """Replace the first (or every) occurrence of *pattern* in *text*.

    Regex mode always replaces every occurrence; ``promoted_to_all`` tells
    the caller when a single replacement was asked for. In hex mode the
    pattern and replacement are hex byte strings and the whole buffer is
    re-encoded afterwards.
    """
    if hex_mode:
        return _replace_hex(text, pattern, replacement, replace_all, group_size)
    if not pattern:
        return ReplaceOutcome(text=text)

    if options.use_regex:
        regex = compile_pattern(pattern, options, flags=re.MULTILINE)
        try:
            new_text, count = regex.subn(replacement, text)
        except (re.error, IndexError) as e:
            # bad escapes or missing groups in the template; \g<name> raises IndexError
            raise InvalidPatternError(f"invalid replacement `{replacement}`", cause=e) from e
        promoted = not replace_all
        if promoted:
            log.info("regexp always replace all occurrences")
        return ReplaceOutcome(text=new_text, count=count, promoted_to_all=promoted)

    limit = 0 if replace_all else 1
    if options.case_sensitive:
        count = text.count(pattern)
        if limit:
            count = min(count, limit)
        return ReplaceOutcome(text=text.replace(pattern, replacement, limit or -1), count=count)

    # the match side is folded, the replacement goes in verbatim
    regex = compile_pattern(pattern, options)
    new_text, count = regex.subn(lambda _m: replacement, text, count=limit)
    return ReplaceOutcome(text=new_text, count=count)


def _replace_hex(
    text: str, pattern: str, replacement: str, replace_all: bool, group_size: int
) -> ReplaceOutcome:
    find = hexcodec.decode(pattern)
    repl = hexcodec.decode(replacement)
    data = hexcodec.decode(text)
    if not find:
        return ReplaceOutcome(text=text)

    count = data.count(find)
    if not count:
        return ReplaceOutcome(text=text)
    if replace_all:
        data = data.replace(find, repl)
    else:
        data = data.replace(find, repl, 1)
        count = min(count, 1)
    return ReplaceOutcome(text=hexcodec.encode(data, group_size), count=count)
