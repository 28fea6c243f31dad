"""Unit tests for app name resolution from the origin remote."""

import pytest
from conftest import FakeGit

from heroku_pipeline.config import ConfigError
from heroku_pipeline.naming import base_name_from_url, parse_remote_url, resolve_app_name


class TestBaseNameFromUrl:
    """Tests for base_name_from_url."""

    def test_https_url_with_git_suffix(self):
        assert base_name_from_url("https://github.com/org/myapp.git") == "myapp"

    def test_https_url_without_suffix(self):
        assert base_name_from_url("https://github.com/org/myapp") == "myapp"

    def test_scp_style_url(self):
        assert base_name_from_url("git@github.com:org/myapp.git") == "myapp"

    def test_scp_style_without_namespace(self):
        assert base_name_from_url("git@example.com:myapp.git") == "myapp"

    def test_ssh_url(self):
        assert base_name_from_url("ssh://git@example.com:2222/org/team/myapp.git") == "myapp"

    def test_trailing_slash(self):
        assert base_name_from_url("https://github.com/org/myapp/") == "myapp"

    def test_local_path(self):
        assert base_name_from_url("/srv/git/myapp.git") == "myapp"

    def test_dots_inside_name_kept(self):
        assert base_name_from_url("https://github.com/org/my.app.git") == "my.app"

    def test_only_suffix_yields_empty(self):
        assert base_name_from_url("https://github.com/org/.git") == ""


class TestParseRemoteUrl:
    """Tests for parse_remote_url."""

    def test_origin_fetch_url(self):
        listing = (
            "origin\thttps://github.com/org/myapp.git (fetch)\n"
            "origin\thttps://github.com/org/myapp.git (push)\n"
        )
        assert parse_remote_url(listing) == "https://github.com/org/myapp.git"

    def test_fetch_and_push_urls_differ(self):
        listing = (
            "origin\thttps://mirror.example.com/org/myapp.git (fetch)\n"
            "origin\tgit@github.com:org/other.git (push)\n"
        )
        assert parse_remote_url(listing) == "https://mirror.example.com/org/myapp.git"

    def test_other_remotes_ignored(self):
        listing = (
            "dev\thttps://git.heroku.com/myapp-dev.git (fetch)\n"
            "upstream\thttps://github.com/up/thing.git (fetch)\n"
            "origin\thttps://github.com/org/myapp.git (fetch)\n"
        )
        assert parse_remote_url(listing) == "https://github.com/org/myapp.git"

    def test_no_origin(self):
        listing = "upstream\thttps://github.com/up/thing.git (fetch)\n"
        assert parse_remote_url(listing) == ""

    def test_empty_listing(self):
        assert parse_remote_url("") == ""

    def test_remote_named_like_origin_prefix_not_matched(self):
        listing = "origin2\thttps://github.com/org/nope.git (fetch)\n"
        assert parse_remote_url(listing) == ""


class TestResolveAppName:
    """Tests for resolve_app_name."""

    def test_without_prefix(self, tmp_path):
        git = FakeGit(tmp_path, listing="origin\thttps://github.com/org/myapp.git (fetch)\n")
        assert resolve_app_name(git) == "myapp"

    def test_with_prefix(self, tmp_path):
        git = FakeGit(tmp_path, listing="origin\thttps://github.com/org/myapp.git (fetch)\n")
        assert resolve_app_name(git, prefix="co-") == "co-myapp"

    def test_missing_origin_raises(self, tmp_path):
        git = FakeGit(tmp_path, listing="")
        with pytest.raises(ConfigError, match="origin"):
            resolve_app_name(git)

    def test_empty_name_raises(self, tmp_path):
        git = FakeGit(tmp_path, listing="origin\thttps://github.com/org/.git (fetch)\n")
        with pytest.raises(ConfigError):
            resolve_app_name(git, prefix="co-")

    def test_git_failure_becomes_config_error(self, tmp_path):
        git = FakeGit(tmp_path, fail_on={"list_remotes"})
        with pytest.raises(ConfigError, match="remotes"):
            resolve_app_name(git)
