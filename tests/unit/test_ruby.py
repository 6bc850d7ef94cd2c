"""
Unit tests for gem / bundler command construction.
"""

import subprocess
from unittest.mock import patch

import pytest

from calabash_ios_step.services import ruby
from calabash_ios_step.utils.command import Command, CommandError

INSTALL_TYPE = "calabash_ios_step.services.ruby.ruby_install_type"

GEM_LIST_OUTPUT = """
*** LOCAL GEMS ***

calabash-cucumber (0.20.5, 0.19.0)
json (default: 2.1.0)
run_loop (2.6.3)
"""


class TestGemListParsing:
    def test_any_version(self):
        assert ruby.gem_version_installed_in_list_output(GEM_LIST_OUTPUT, "calabash-cucumber")

    def test_specific_version_present(self):
        assert ruby.gem_version_installed_in_list_output(
            GEM_LIST_OUTPUT, "calabash-cucumber", "0.19.0"
        )

    def test_specific_version_absent(self):
        assert not ruby.gem_version_installed_in_list_output(
            GEM_LIST_OUTPUT, "calabash-cucumber", "0.18.1"
        )

    def test_default_gem_marker(self):
        assert ruby.gem_version_installed_in_list_output(GEM_LIST_OUTPUT, "json", "2.1.0")

    def test_platform_suffix_ignored(self):
        output = "nokogiri (1.15.4 x86_64-darwin, 1.14.0 arm64-darwin)"
        assert ruby.gem_version_installed_in_list_output(output, "nokogiri", "1.15.4")
        assert ruby.gem_version_installed_in_list_output(output, "nokogiri", "1.14.0")
        assert not ruby.gem_version_installed_in_list_output(output, "nokogiri", "x86_64-darwin")

    def test_missing_gem(self):
        assert not ruby.gem_version_installed_in_list_output(GEM_LIST_OUTPUT, "cucumber")

    def test_name_prefix_does_not_match(self):
        assert not ruby.gem_version_installed_in_list_output(
            "calabash-cucumber-extras (1.0.0)", "calabash-cucumber"
        )


def test_is_gem_installed_runs_gem_list():
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=GEM_LIST_OUTPUT, stderr="")
    with patch("calabash_ios_step.utils.command.subprocess.run", return_value=completed) as mock_run:
        assert ruby.is_gem_installed("calabash-cucumber", "0.20.5")
    assert mock_run.call_args.args[0] == ["gem", "list"]


class TestRubyInstallType:
    @staticmethod
    def _which(mapping):
        return lambda name: mapping.get(name)

    def test_system_ruby(self):
        with patch("calabash_ios_step.services.ruby.shutil.which", self._which({"ruby": "/usr/bin/ruby"})):
            assert ruby.ruby_install_type() == ruby.SYSTEM_RUBY

    def test_brew_ruby(self):
        with patch("calabash_ios_step.services.ruby.shutil.which", self._which({"ruby": "/usr/local/bin/ruby"})):
            assert ruby.ruby_install_type() == ruby.BREW_RUBY

    def test_rbenv_ruby(self):
        which = self._which({
            "ruby": "/Users/vagrant/.rbenv/shims/ruby",
            "rbenv": "/usr/local/bin/rbenv",
        })
        with patch("calabash_ios_step.services.ruby.shutil.which", which):
            assert ruby.ruby_install_type() == ruby.RBENV_RUBY

    def test_rvm_ruby(self):
        which = self._which({
            "ruby": "/Users/vagrant/.rvm/rubies/ruby-2.4.1/bin/ruby",
            "rvm": "/Users/vagrant/.rvm/bin/rvm",
        })
        with patch("calabash_ios_step.services.ruby.shutil.which", which):
            assert ruby.ruby_install_type() == ruby.RVM_RUBY

    def test_rvm_checked_before_rbenv(self):
        which = self._which({
            "ruby": "/Users/vagrant/.rvm/rubies/ruby-2.4.1/bin/ruby",
            "rvm": "/Users/vagrant/.rvm/bin/rvm",
            "rbenv": "/usr/local/bin/rbenv",
        })
        with patch("calabash_ios_step.services.ruby.shutil.which", which):
            assert ruby.ruby_install_type() == ruby.RVM_RUBY

    def test_no_ruby(self):
        with patch("calabash_ios_step.services.ruby.shutil.which", self._which({})):
            assert ruby.ruby_install_type() == ruby.UNKNOWN_RUBY


@pytest.mark.parametrize(
    "install_type,args,expected",
    [
        (ruby.SYSTEM_RUBY, ["gem", "install", "calabash-cucumber"], True),
        (ruby.SYSTEM_RUBY, ["gem", "uninstall", "calabash-cucumber"], True),
        (ruby.SYSTEM_RUBY, ["bundle", "install"], True),
        (ruby.SYSTEM_RUBY, ["bundle", "exec", "cucumber"], False),
        (ruby.SYSTEM_RUBY, ["gem"], False),
        (ruby.RBENV_RUBY, ["gem", "install", "calabash-cucumber"], False),
        (ruby.BREW_RUBY, ["bundle", "install"], False),
    ],
)
def test_sudo_needed(install_type, args, expected):
    assert ruby.sudo_needed(install_type, args) is expected


class TestGemInstallCommands:
    def test_versioned_install(self):
        with patch(INSTALL_TYPE, return_value=ruby.BREW_RUBY):
            commands = ruby.gem_install_commands("calabash-cucumber", "0.20.5")
        assert [c.args for c in commands] == [
            ["gem", "install", "calabash-cucumber", "--no-document", "-v", "0.20.5"]
        ]

    def test_latest_install(self):
        with patch(INSTALL_TYPE, return_value=ruby.RVM_RUBY):
            commands = ruby.gem_install_commands("calabash-cucumber")
        assert commands[0].args == ["gem", "install", "calabash-cucumber", "--no-document"]

    def test_rbenv_rehash_appended(self):
        with patch(INSTALL_TYPE, return_value=ruby.RBENV_RUBY):
            commands = ruby.gem_install_commands("calabash-cucumber")
        assert commands[-1].args == ["rbenv", "rehash"]
        assert len(commands) == 2

    def test_system_ruby_uses_sudo(self):
        with patch(INSTALL_TYPE, return_value=ruby.SYSTEM_RUBY):
            commands = ruby.gem_install_commands("calabash-cucumber", "0.20.5")
        assert commands[0].args[:3] == ["sudo", "gem", "install"]


def test_bundle_install_command_sets_gemfile():
    with patch(INSTALL_TYPE, return_value=ruby.BREW_RUBY):
        cmd = ruby.bundle_install_command("/work/Gemfile")
    assert cmd.args == ["bundle", "install", "--jobs", "20", "--retry", "5"]
    assert cmd.envs == {"BUNDLE_GEMFILE": "/work/Gemfile"}


class TestRunCommands:
    def test_runs_in_order(self):
        first, second = Command("gem", "install", "x"), Command("rbenv", "rehash")
        with patch.object(Command, "run", autospec=True) as mock_run:
            ruby.run_commands([first, second])
        assert [c.args[0] for c in mock_run.call_args_list] == [first, second]

    def test_stops_on_first_failure(self):
        commands = [Command("gem", "install", "x"), Command("rbenv", "rehash")]
        with patch.object(
            Command, "run", autospec=True, side_effect=CommandError("exited with status 1", 1)
        ) as mock_run:
            with pytest.raises(CommandError, match="command failed"):
                ruby.run_commands(commands)
        assert mock_run.call_count == 1
