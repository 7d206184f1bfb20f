"""
Parsers for git output.

Every function here is pure: raw stdout bytes in, a domain value out. Output
is not guaranteed to be valid UTF-8 (commit messages and file names can be in
any encoding), so decoding substitutes invalid sequences instead of failing.
Shape violations raise ParseError; list parsers reject the whole output
rather than silently dropping a malformed line.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from gitwrapper.errors import ParseError
from gitwrapper.models import CommitId, RemoteDescriptor, StashEntry

# Null byte delimiter, see STASH_LIST_FORMAT
_NULL = '\x00'

# %gd: reflog selector (stash@{N}), %gs: reflog subject
STASH_LIST_FORMAT = '--format=%gd%x00%gs'

_STASH_SELECTOR = re.compile(r'^stash@\{(\d+)\}$')

# "origin\thttps://example.com/repo.git (fetch)", partial clones append " [blob:none]"
_REMOTE_LINE = re.compile(
    r'^(?P<name>\S+)\t(?P<url>.*) \((?P<direction>fetch|push)\)(?: \[[^\]]*\])?$'
)


def decode_output(data: bytes) -> str:
    """Decode git output, replacing invalid UTF-8 sequences."""
    return data.decode('utf-8', errors='replace')


def _excerpt(text: str, limit: int = 200) -> str:
    return text if len(text) <= limit else text[:limit] + '...'


def parse_lines(stdout: bytes) -> list[str]:
    """Split output into stripped, nonblank lines."""
    return [line.strip() for line in decode_output(stdout).splitlines() if line.strip()]


def parse_commit_id(stdout: bytes) -> CommitId:
    """
    Parse a single commit id, e.g. from ``rev-parse HEAD``.

    Surrounding whitespace and the trailing newline are stripped before
    validation.
    """
    text = decode_output(stdout).strip()
    if not text:
        raise ParseError("Expected a commit id, got empty output")
    try:
        return CommitId(text)
    except ValueError as e:
        raise ParseError(f"Expected a commit id, got {_excerpt(text)!r}", text) from e


def parse_optional_commit_id(stdout: bytes) -> Optional[CommitId]:
    """Like parse_commit_id, but empty output means None."""
    if not decode_output(stdout).strip():
        return None
    return parse_commit_id(stdout)


def parse_commit_ids(stdout: bytes) -> list[CommitId]:
    """
    Parse one commit id per line, e.g. from ``rev-list``.

    Only the first whitespace-separated field of each line is used, so
    ``rev-list --parents`` style output yields the listed commits.
    """
    ids = []
    for line in parse_lines(stdout):
        token = line.split()[0]
        try:
            ids.append(CommitId(token))
        except ValueError as e:
            raise ParseError(f"Malformed commit id line: {_excerpt(line)!r}", line) from e
    return ids


def parse_path(stdout: bytes) -> Path:
    """
    Parse a single path, e.g. from ``rev-parse --show-toplevel``.

    Uses the filesystem encoding with surrogate escapes so paths that are
    not valid UTF-8 still round-trip to the same file.
    """
    text = os.fsdecode(stdout).strip('\r\n')
    if not text.strip():
        raise ParseError("Expected a path, got empty output")
    return Path(text)


def parse_bool(stdout: bytes) -> bool:
    """Parse ``true``/``false`` as printed by ``rev-parse --is-*`` queries."""
    text = decode_output(stdout).strip()
    if text == 'true':
        return True
    if text == 'false':
        return False
    raise ParseError(f"Expected 'true' or 'false', got {_excerpt(text)!r}", text)


def parse_config_value(stdout: bytes) -> str:
    """Parse a single ``git config <key>`` value."""
    return decode_output(stdout).strip()


def parse_remotes(stdout: bytes) -> list[RemoteDescriptor]:
    """
    Parse ``git remote -v`` output into one descriptor per remote.

    Each remote usually appears twice, once with ``(fetch)`` and once with
    ``(push)``. Both lines are merged; a missing URL for one direction falls
    back to the other. Remotes keep their order of first appearance.

    Handles:
        - "origin\\thttps://example.com/a.git (fetch)"
        - URLs containing spaces (everything up to the last " (")
        - a trailing partial-clone filter, e.g. "(fetch) [blob:none]"
    """
    urls: dict[str, dict[str, str]] = {}

    for line in decode_output(stdout).splitlines():
        if not line.strip():
            continue
        match = _REMOTE_LINE.match(line.strip())
        if not match:
            raise ParseError(f"Malformed remote line: {_excerpt(line)!r}", line)
        entry = urls.setdefault(match.group('name'), {})
        # First URL wins; extra pushurl entries show up as repeated (push) lines
        entry.setdefault(match.group('direction'), match.group('url'))

    remotes = []
    for name, entry in urls.items():
        fetch_url = entry.get('fetch', entry.get('push', ''))
        push_url = entry.get('push', fetch_url)
        remotes.append(RemoteDescriptor(name=name, fetch_url=fetch_url, push_url=push_url))
    return remotes


def parse_stash_list(stdout: bytes) -> list[StashEntry]:
    """
    Parse ``git stash list`` output produced with STASH_LIST_FORMAT.

    Returns entries ordered most recent first (index 0).
    """
    entries = []
    for line in decode_output(stdout).splitlines():
        if not line.strip():
            continue
        selector, sep, message = line.partition(_NULL)
        match = _STASH_SELECTOR.match(selector.strip())
        if not sep or not match:
            raise ParseError(f"Malformed stash line: {_excerpt(line)!r}", line)
        entries.append(StashEntry(index=int(match.group(1)), message=message.strip()))
    return sorted(entries, key=lambda e: e.index)


def parse_ls_remote(stdout: bytes) -> list[tuple[CommitId, str]]:
    """
    Parse ``git ls-remote`` output into (commit id, ref name) pairs.

    ``ref: refs/heads/main\\tHEAD`` symref lines (from ``--symref``) are
    skipped; use parse_symref_head for those.
    """
    refs = []
    for line in decode_output(stdout).splitlines():
        if not line.strip() or line.startswith('ref: '):
            continue
        parts = line.split('\t')
        if len(parts) != 2:
            raise ParseError(f"Malformed ls-remote line: {_excerpt(line)!r}", line)
        try:
            refs.append((CommitId(parts[0].strip()), parts[1].strip()))
        except ValueError as e:
            raise ParseError(f"Malformed ls-remote line: {_excerpt(line)!r}", line) from e
    return refs


def parse_tag_names(stdout: bytes) -> list[str]:
    """Tag names from ``git ls-remote --refs --tags`` output."""
    prefix = 'refs/tags/'
    names = []
    for _, ref in parse_ls_remote(stdout):
        if not ref.startswith(prefix):
            raise ParseError(f"Expected a tag ref, got {ref!r}", ref)
        names.append(ref[len(prefix):])
    return names


def parse_symref_head(stdout: bytes) -> str:
    """
    Default branch name from ``git ls-remote --symref <remote> HEAD``.

    The first line looks like ``ref: refs/heads/main\\tHEAD``.
    """
    for line in decode_output(stdout).splitlines():
        if not line.startswith('ref: '):
            continue
        target = line[len('ref: '):].split('\t')[0].strip()
        prefix = 'refs/heads/'
        if not target.startswith(prefix) or len(target) == len(prefix):
            raise ParseError(f"Unexpected HEAD symref target: {target!r}", line)
        return target[len(prefix):]
    raise ParseError("Remote did not report a HEAD symref", decode_output(stdout))
