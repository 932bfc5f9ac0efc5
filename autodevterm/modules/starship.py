"""The Starship cross-shell prompt module."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from autodevterm.modules.module import (
    BaseModule,
    ModuleError,
    ModuleOptions,
    ModuleResult,
    command_exists,
)

_OFFICIAL_INSTALLER = "curl -sS https://starship.rs/install.sh | sh -s -- -y"
_UNSUPPORTED_SHELL = "# Starship init not supported for this shell"

_INIT_COMMANDS = {
    "zsh": 'eval "$(starship init zsh)"',
    "bash": 'eval "$(starship init bash)"',
    "fish": "starship init fish | source",
    "powershell": "Invoke-Expression (&starship init powershell)",
}


def _succeeds(args: list[str], verbose: bool = False) -> bool:
    out = None if verbose else subprocess.DEVNULL
    try:
        return subprocess.run(args, stdout=out, stderr=out, check=False).returncode == 0
    except OSError:
        return False


def _run(args: list[str], verbose: bool, context: str) -> None:
    out = None if verbose else subprocess.DEVNULL
    try:
        completed = subprocess.run(args, stdout=out, stderr=out, check=False)
    except OSError as exc:
        raise ModuleError(f"{context}: {exc}") from exc
    if completed.returncode != 0:
        raise ModuleError(f"{context}: exit status {completed.returncode}")


def _with_sudo(args: list[str], sudo: bool) -> list[str]:
    return ["sudo", *args] if sudo else args


class StarshipModule(BaseModule):
    """Installs and removes the Starship prompt."""

    def __init__(self) -> None:
        super().__init__(
            "starship",
            "The minimal, blazing-fast, and infinitely customizable prompt for any shell",
            "1.16.0",
            [],
        )

    def install(self, opts: ModuleOptions) -> ModuleResult:
        """Install Starship with the method suited to the operating system."""
        if opts.verbose:
            print("Installing Starship prompt...")

        if not opts.force and self.is_installed():
            return ModuleResult(
                success=True, module=self.name, output="Starship is already installed"
            )

        handlers = {
            "windows": self._install_windows,
            "darwin": self._install_macos,
            "linux": self._install_linux,
        }
        handler = handlers.get(str(opts.os))
        if handler is None:
            return ModuleResult(
                success=False,
                module=self.name,
                error=f"unsupported operating system: {opts.os}",
            )
        try:
            output = handler(opts)
        except ModuleError as exc:
            return ModuleResult(success=False, module=self.name, error=str(exc))
        return ModuleResult(success=True, module=self.name, output=output, version=self.version)

    def _install_windows(self, opts: ModuleOptions) -> str:
        attempts = [
            ("winget", ["winget", "install", "Starship.Starship"], "Installed via winget"),
            ("scoop", ["scoop", "install", "starship"], "Installed via scoop"),
            ("choco", ["choco", "install", "starship"], "Installed via chocolatey"),
        ]
        for tool, args, message in attempts:
            if command_exists(tool) and _succeeds(args, opts.verbose):
                return message
        return self._install_powershell(opts)

    def _install_powershell(self, opts: ModuleOptions) -> str:
        config_dir = Path(opts.home_dir, ".config", "starship")
        try:
            config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ModuleError(f"creating starship config dir: {exc}") from exc
        return (
            "Starship installed. Add 'Invoke-Expression (&starship init powershell)' "
            "to your PowerShell profile."
        )

    def _install_macos(self, opts: ModuleOptions) -> str:
        if not command_exists("brew"):
            raise ModuleError("Homebrew is not installed")
        _run(["brew", "install", "starship"], opts.verbose, "installing starship via brew")
        return "Installed via Homebrew"

    def _install_linux(self, opts: ModuleOptions) -> str:
        if command_exists("apt") or command_exists("apt-get"):
            if not opts.sudo:
                raise ModuleError("sudo is required to install Starship via APT")
            _run(["sh", "-c", _OFFICIAL_INSTALLER], opts.verbose, "installing starship")
            return "Installed via official installer"

        if command_exists("dnf") and _succeeds(
            _with_sudo(["dnf", "install", "starship"], opts.sudo), opts.verbose
        ):
            return "Installed via dnf"

        if command_exists("pacman") and _succeeds(
            _with_sudo(["pacman", "-S", "--noconfirm", "starship"], opts.sudo), opts.verbose
        ):
            return "Installed via pacman"

        _run(["sh", "-c", _OFFICIAL_INSTALLER], opts.verbose, "running official installer")
        return "Installed via official installer"

    def uninstall(self, opts: ModuleOptions) -> ModuleResult:
        """Remove Starship with the method suited to the operating system."""
        if opts.verbose:
            print("Uninstalling Starship prompt...")

        handlers = {
            "windows": self._uninstall_windows,
            "darwin": self._uninstall_macos,
            "linux": self._uninstall_linux,
        }
        handler = handlers.get(str(opts.os))
        if handler is None:
            return ModuleResult(
                success=False,
                module=self.name,
                error=f"unsupported operating system: {opts.os}",
            )
        try:
            output = handler(opts)
        except ModuleError as exc:
            return ModuleResult(success=False, module=self.name, error=str(exc))
        return ModuleResult(success=True, module=self.name, output=output)

    def _uninstall_windows(self, opts: ModuleOptions) -> str:
        attempts = [
            ("winget", ["winget", "uninstall", "Starship.Starship"], "Uninstalled via winget"),
            ("scoop", ["scoop", "uninstall", "starship"], "Uninstalled via scoop"),
            ("choco", ["choco", "uninstall", "starship"], "Uninstalled via chocolatey"),
        ]
        for tool, args, message in attempts:
            if command_exists(tool) and _succeeds(args):
                return message
        return "Manual removal required"

    def _uninstall_macos(self, opts: ModuleOptions) -> str:
        if not command_exists("brew"):
            return "Manual removal required"
        _run(["brew", "uninstall", "starship"], opts.verbose, "uninstalling starship")
        return "Uninstalled via Homebrew"

    def _uninstall_linux(self, opts: ModuleOptions) -> str:
        binary = Path(opts.home_dir, ".local", "bin", "starship")
        if binary.exists():
            try:
                binary.unlink()
            except OSError as exc:
                raise ModuleError(f"removing starship binary: {exc}") from exc

        config_dir = Path(opts.home_dir, ".config", "starship")
        if config_dir.exists():
            try:
                shutil.rmtree(config_dir)
            except OSError as exc:
                raise ModuleError(f"removing starship config: {exc}") from exc

        return "Removed starship binary and config"

    def is_installed(self) -> bool:
        """Report whether the starship binary runs or sits in a usual location."""
        if _succeeds(["starship", "--version"]):
            return True

        home = os.environ.get("HOME") or os.environ.get("USERPROFILE", "")
        candidates = [
            os.path.join(home, ".local", "bin", "starship"),
            os.path.join(home, ".cargo", "bin", "starship"),
            "C:\\Program Files\\starship\\starship.exe",
            "C:\\Program Files (x86)\\starship\\starship.exe",
        ]
        return any(os.path.exists(path) for path in candidates)

    def init_command(self, shell: object) -> str:
        """Return the line that enables Starship in the given shell."""
        return _INIT_COMMANDS.get(str(shell), _UNSUPPORTED_SHELL)


def default_starship_config() -> str:
    """Return the default starship.toml contents."""
    return r'''# Starship prompt configuration

format = """
$directory$git_branch$git_status$nodejs$python$rust
$character"""

[character]
success_symbol = "[➜](bold green)"
error_symbol = "[✗](bold red)"

[directory]
truncation_length = 3
truncate_to_repo = true

[git_branch]
symbol = " "

[git_status]
style = "bold red"
conflicted = "⚔️ "
ahead = "⇡${count}"
behind = "⇣${count}"
diverged = "⇕⇡${ahead_count}⇣${behind_count}"
untracked = "🤷"
stashed = "📦"
modified = "📝"
staged = '++\($count\)'
renamed = "👅"
deleted = "🗑"

[nodejs]
format = "via [$symbol($version )]($style)"

[python]
symbol = "🐍 "
format = "via [${symbol}${pyenv_prefix}(${version} )(\\($virtualenv\\) )]($style)"

[rust]
format = "via [$symbol($version )]($style)"
'''