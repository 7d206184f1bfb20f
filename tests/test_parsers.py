"""Tests for the output parsers."""

from pathlib import Path

import pytest

from gitwrapper.errors import ParseError
from gitwrapper.models import CommitId, RemoteDescriptor, StashEntry
from gitwrapper.parsers import (
    decode_output,
    parse_bool,
    parse_commit_id,
    parse_commit_ids,
    parse_config_value,
    parse_lines,
    parse_ls_remote,
    parse_optional_commit_id,
    parse_path,
    parse_remotes,
    parse_stash_list,
    parse_symref_head,
    parse_tag_names,
)

SHA_A = 'a94a8fe5ccb19ba61c4c0873d391e987982fbbd3'
SHA_B = '1f2d3c4b5a69788796a5b4c3d2e1f0a9b8c7d6e5'


class TestDecoding:
    def test_invalid_utf8_is_replaced(self):
        assert decode_output(b'caf\xe9') == 'caf�'

    def test_lines_skip_blanks(self):
        assert parse_lines(b'one\n\n  two  \n') == ['one', 'two']


class TestCommitIds:
    def test_strips_trailing_newline(self):
        assert parse_commit_id(f'{SHA_A}\n'.encode()) == CommitId(SHA_A)

    def test_empty_output_fails(self):
        with pytest.raises(ParseError):
            parse_commit_id(b'\n')

    def test_garbage_fails(self):
        with pytest.raises(ParseError) as exc_info:
            parse_commit_id(b'fatal: something\n')
        assert 'fatal' in exc_info.value.output

    def test_optional_empty(self):
        assert parse_optional_commit_id(b'') is None
        assert parse_optional_commit_id(SHA_A.encode()) == CommitId(SHA_A)

    def test_list_uses_first_field(self):
        out = f'{SHA_A} {SHA_B}\n{SHA_B}\n'.encode()
        assert parse_commit_ids(out) == [CommitId(SHA_A), CommitId(SHA_B)]

    def test_list_rejects_malformed_line(self):
        with pytest.raises(ParseError):
            parse_commit_ids(f'{SHA_A}\nnot-a-sha\n'.encode())


class TestScalars:
    def test_path(self):
        assert parse_path(b'/tmp/repo\n') == Path('/tmp/repo')

    def test_path_keeps_inner_spaces(self):
        assert parse_path(b'/tmp/my repo \n') == Path('/tmp/my repo ')

    def test_empty_path_fails(self):
        with pytest.raises(ParseError):
            parse_path(b'\n')

    def test_bool(self):
        assert parse_bool(b'true\n') is True
        assert parse_bool(b'false\n') is False

    def test_bool_rejects_other_text(self):
        with pytest.raises(ParseError):
            parse_bool(b'yes\n')

    def test_config_value(self):
        assert parse_config_value(b'Test User\n') == 'Test User'


class TestParseRemotes:
    def test_merges_fetch_and_push(self):
        out = (
            b'origin\thttps://example.com/a.git (fetch)\n'
            b'origin\tgit@example.com:a.git (push)\n'
            b'upstream\thttps://example.com/u.git (fetch)\n'
            b'upstream\thttps://example.com/u.git (push)\n'
        )
        assert parse_remotes(out) == [
            RemoteDescriptor('origin', 'https://example.com/a.git', 'git@example.com:a.git'),
            RemoteDescriptor('upstream', 'https://example.com/u.git', 'https://example.com/u.git'),
        ]

    def test_missing_push_falls_back_to_fetch(self):
        out = b'origin\t/srv/repo (fetch)\n'
        assert parse_remotes(out) == [RemoteDescriptor('origin', '/srv/repo', '/srv/repo')]

    def test_first_url_wins(self):
        out = (
            b'origin\t/a (fetch)\n'
            b'origin\t/a (push)\n'
            b'origin\t/b (push)\n'
        )
        assert parse_remotes(out)[0].push_url == '/a'

    def test_url_with_spaces(self):
        out = b'local\t/srv/my repo (fetch)\nlocal\t/srv/my repo (push)\n'
        assert parse_remotes(out)[0].fetch_url == '/srv/my repo'

    def test_partial_clone_filter(self):
        out = (
            b'origin\thttps://example.com/a.git (fetch) [blob:none]\n'
            b'origin\thttps://example.com/a.git (push)\n'
        )
        assert parse_remotes(out) == [
            RemoteDescriptor('origin', 'https://example.com/a.git', 'https://example.com/a.git'),
        ]

    def test_empty(self):
        assert parse_remotes(b'') == []

    def test_malformed_line(self):
        with pytest.raises(ParseError):
            parse_remotes(b'origin https://example.com/a.git\n')


class TestParseStashList:
    def test_entries_sorted_by_index(self):
        out = b'stash@{1}\x00On main: older\nstash@{0}\x00On main: newer\n'
        assert parse_stash_list(out) == [
            StashEntry(0, 'On main: newer'),
            StashEntry(1, 'On main: older'),
        ]

    def test_empty(self):
        assert parse_stash_list(b'') == []

    def test_message_with_invalid_utf8(self):
        entries = parse_stash_list(b'stash@{0}\x00WIP caf\xe9\n')
        assert entries[0].message == 'WIP caf�'

    def test_missing_separator(self):
        with pytest.raises(ParseError):
            parse_stash_list(b'stash@{0}: On main: msg\n')

    def test_bad_selector(self):
        with pytest.raises(ParseError):
            parse_stash_list(b'refs/stash\x00msg\n')


class TestParseLsRemote:
    def test_pairs(self):
        out = f'{SHA_A}\tHEAD\n{SHA_B}\trefs/heads/main\n'.encode()
        assert parse_ls_remote(out) == [
            (CommitId(SHA_A), 'HEAD'),
            (CommitId(SHA_B), 'refs/heads/main'),
        ]

    def test_skips_symref_lines(self):
        out = f'ref: refs/heads/main\tHEAD\n{SHA_A}\tHEAD\n'.encode()
        assert parse_ls_remote(out) == [(CommitId(SHA_A), 'HEAD')]

    def test_malformed(self):
        with pytest.raises(ParseError):
            parse_ls_remote(f'{SHA_A} HEAD\n'.encode())

    def test_tag_names(self):
        out = f'{SHA_A}\trefs/tags/v1.0\n{SHA_B}\trefs/tags/release/2\n'.encode()
        assert parse_tag_names(out) == ['v1.0', 'release/2']

    def test_tag_names_reject_branches(self):
        with pytest.raises(ParseError):
            parse_tag_names(f'{SHA_A}\trefs/heads/main\n'.encode())


class TestParseSymrefHead:
    def test_default_branch(self):
        out = f'ref: refs/heads/trunk\tHEAD\n{SHA_A}\tHEAD\n'.encode()
        assert parse_symref_head(out) == 'trunk'

    def test_branch_with_slash(self):
        assert parse_symref_head(b'ref: refs/heads/release/1.x\tHEAD\n') == 'release/1.x'

    def test_no_symref(self):
        with pytest.raises(ParseError):
            parse_symref_head(f'{SHA_A}\tHEAD\n'.encode())

    def test_non_branch_target(self):
        with pytest.raises(ParseError):
            parse_symref_head(b'ref: refs/tags/v1\tHEAD\n')
