import subprocess
from unittest import mock

import pytest

from autodevterm.modules.module import OS, ModuleOptions, Shell
from autodevterm.modules.starship import StarshipModule, default_starship_config

OK = subprocess.CompletedProcess(args=[], returncode=0)
FAILED = subprocess.CompletedProcess(args=[], returncode=1)


def test_new_starship_module():
    m = StarshipModule()
    assert m.name == "starship"
    assert m.description != ""
    assert m.version == "1.16.0"
    assert m.dependencies == []


def test_install_unsupported_os():
    result = StarshipModule().install(
        ModuleOptions(os="freebsd", home_dir="/home/user", force=True)
    )
    assert result.success is False
    assert result.module == "starship"
    assert result.error == "unsupported operating system: freebsd"


@mock.patch("shutil.which", return_value=None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_already_installed(_run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.LINUX))
    assert result.success is True
    assert result.output == "Starship is already installed"


@mock.patch("shutil.which", return_value=None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_linux_falls_back_to_official_installer(run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.LINUX, home_dir="/home/user", force=True))
    assert result.success is True
    assert result.output == "Installed via official installer"
    assert result.version == "1.16.0"
    assert run.call_args[0][0] == [
        "sh",
        "-c",
        "curl -sS https://starship.rs/install.sh | sh -s -- -y",
    ]


@mock.patch("shutil.which", return_value=None)
@mock.patch("subprocess.run", return_value=FAILED)
def test_install_linux_installer_failure(_run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.LINUX, force=True))
    assert result.success is False
    assert result.error.startswith("running official installer")


@mock.patch("shutil.which", side_effect=lambda name: "/usr/bin/apt" if name == "apt" else None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_linux_apt_needs_sudo(_run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.LINUX, force=True))
    assert result.success is False
    assert result.error == "sudo is required to install Starship via APT"


@mock.patch("shutil.which", side_effect=lambda name: "/usr/bin/dnf" if name == "dnf" else None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_linux_dnf_with_sudo(run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.LINUX, force=True, sudo=True))
    assert result.output == "Installed via dnf"
    assert run.call_args[0][0] == ["sudo", "dnf", "install", "starship"]


@mock.patch("shutil.which", return_value=None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_darwin_without_brew(_run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.DARWIN, force=True))
    assert result.success is False
    assert result.error == "Homebrew is not installed"


@mock.patch("shutil.which", return_value="/opt/homebrew/bin/brew")
@mock.patch("subprocess.run", return_value=OK)
def test_install_darwin_with_brew(run, _which):
    result = StarshipModule().install(ModuleOptions(os=OS.DARWIN, force=True))
    assert result.success is True
    assert result.output == "Installed via Homebrew"
    assert run.call_args[0][0] == ["brew", "install", "starship"]


@mock.patch("shutil.which", return_value=None)
@mock.patch("subprocess.run", return_value=OK)
def test_install_windows_powershell_fallback(_run, _which, tmp_path):
    result = StarshipModule().install(ModuleOptions(os=OS.WINDOWS, home_dir=str(tmp_path), force=True))
    assert result.success is True
    assert "Invoke-Expression (&starship init powershell)" in result.output
    assert (tmp_path / ".config" / "starship").is_dir()


@pytest.mark.parametrize("os_name", [OS.WINDOWS, OS.DARWIN, OS.LINUX, "freebsd"])
@mock.patch("shutil.which", return_value=None)
def test_uninstall_result_names_module(_which, os_name, tmp_path):
    result = StarshipModule().uninstall(ModuleOptions(os=os_name, home_dir=str(tmp_path)))
    assert result.module == "starship"
    assert result.success is (os_name != "freebsd")


@mock.patch("shutil.which", return_value=None)
def test_uninstall_windows_manual(_which):
    result = StarshipModule().uninstall(ModuleOptions(os=OS.WINDOWS))
    assert result.output == "Manual removal required"


def test_uninstall_linux_removes_files(tmp_path):
    binary = tmp_path / ".local" / "bin" / "starship"
    binary.parent.mkdir(parents=True)
    binary.write_text("")
    config_dir = tmp_path / ".config" / "starship"
    config_dir.mkdir(parents=True)
    (config_dir / "starship.toml").write_text("")
    result = StarshipModule().uninstall(ModuleOptions(os=OS.LINUX, home_dir=str(tmp_path)))
    assert result.success is True
    assert result.output == "Removed starship binary and config"
    assert not binary.exists()
    assert not config_dir.exists()


@mock.patch("subprocess.run", side_effect=FileNotFoundError("starship"))
def test_is_installed_checks_paths(_run, tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    m = StarshipModule()
    assert m.is_installed() is False
    cargo = tmp_path / ".cargo" / "bin"
    cargo.mkdir(parents=True)
    (cargo / "starship").write_text("")
    assert m.is_installed() is True


@mock.patch("subprocess.run", return_value=OK)
def test_is_installed_when_command_runs(_run):
    assert StarshipModule().is_installed() is True


@pytest.mark.parametrize(
    "shell, expected",
    [
        (Shell.ZSH, 'eval "$(starship init zsh)"'),
        (Shell.BASH, 'eval "$(starship init bash)"'),
        (Shell.FISH, "starship init fish | source"),
        (Shell.POWERSHELL, "Invoke-Expression (&starship init powershell)"),
        (Shell.PWSH, "# Starship init not supported for this shell"),
        (Shell.CMD, "# Starship init not supported for this shell"),
        (Shell.TCSH, "# Starship init not supported for this shell"),
        (Shell.UNKNOWN, "# Starship init not supported for this shell"),
    ],
)
def test_init_command(shell, expected):
    assert StarshipModule().init_command(shell) == expected


def test_default_starship_config_sections():
    config = default_starship_config()
    assert config != ""
    for section in [
        "format =",
        "[character]",
        "[directory]",
        "[git_branch]",
        "[git_status]",
        "[nodejs]",
        "[python]",
        "[rust]",
    ]:
        assert section in config