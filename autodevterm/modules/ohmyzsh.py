"""The Oh My Zsh framework module."""

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

_INSTALLER_SCRIPT = (
    'sh -c "$(curl -fsSL https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/'
    'tools/install.sh)" "" --unattended'
)

_RECOMMENDED_PLUGINS = (
    "zsh-autosuggestions",
    "zsh-syntax-highlighting",
    "zsh-completions",
    "z",
    "git",
    "docker",
    "kubectl",
)


def _run(args: list[str], verbose: bool, env: dict[str, str] | None = None) -> None:
    """Run a command, raising ModuleError when it cannot start or exits non-zero."""
    out = None if verbose else subprocess.DEVNULL
    try:
        completed = subprocess.run(args, stdout=out, stderr=out, env=env, check=False)
    except OSError as exc:
        raise ModuleError(str(exc)) from exc
    if completed.returncode != 0:
        raise ModuleError(f"exit status {completed.returncode}")


class OhMyZshModule(BaseModule):
    """Installs and removes the Oh My Zsh framework."""

    def __init__(self) -> None:
        super().__init__(
            "ohmyzsh",
            "A delightful, open source, community-driven framework for managing "
            "your Zsh configuration",
            "latest",
            [],
        )

    def install(self, opts: ModuleOptions) -> ModuleResult:
        """Run the official unattended installer and make zsh the login shell."""
        if opts.verbose:
            print("Installing Oh My Zsh...")

        if str(opts.os) == "windows":
            return ModuleResult(
                success=False,
                module=self.name,
                error="Oh My Zsh is not supported on Windows. Use WSL or MSYS2.",
            )

        if not opts.force and self.is_installed():
            return ModuleResult(
                success=True, module=self.name, output="Oh My Zsh is already installed"
            )

        if not command_exists("zsh"):
            return ModuleResult(
                success=False,
                module=self.name,
                error="Zsh is not installed. Please install Zsh first.",
            )

        env = {**os.environ, "RUNZSH": "no", "CHSH": "no"}
        try:
            _run(["sh", "-c", _INSTALLER_SCRIPT], opts.verbose, env=env)
        except ModuleError as exc:
            return ModuleResult(
                success=False,
                module=self.name,
                error=f"failed to install Oh My Zsh: {exc}",
            )

        try:
            self._set_default_shell(opts)
        except ModuleError as exc:
            return ModuleResult(
                success=True,
                module=self.name,
                output=f"Oh My Zsh installed, but failed to set as default shell: {exc}",
            )

        return ModuleResult(
            success=True,
            module=self.name,
            output="Oh My Zsh installed successfully",
            version=self._installed_version(),
        )

    def _set_default_shell(self, opts: ModuleOptions) -> None:
        chsh = shutil.which("chsh")
        if chsh is None:
            raise ModuleError("chsh not found: executable file not found in $PATH")
        zsh = shutil.which("zsh")
        if zsh is None:
            raise ModuleError("zsh not found: executable file not found in $PATH")
        args = [chsh, "-s", zsh]
        if opts.sudo:
            args.insert(0, "sudo")
        _run(args, opts.verbose)

    def uninstall(self, opts: ModuleOptions) -> ModuleResult:
        """Remove ~/.oh-my-zsh and restore a backed-up .zshrc if there is one."""
        if opts.verbose:
            print("Uninstalling Oh My Zsh...")

        if str(opts.os) == "windows":
            return ModuleResult(
                success=False,
                module=self.name,
                error="Oh My Zsh is not supported on Windows",
            )

        omz_dir = Path(opts.home_dir, ".oh-my-zsh")
        if omz_dir.exists():
            try:
                shutil.rmtree(omz_dir)
            except OSError as exc:
                return ModuleResult(
                    success=False,
                    module=self.name,
                    error=f"failed to remove .oh-my-zsh: {exc}",
                )

        backup = Path(opts.home_dir, ".zshrc.bak")
        if backup.exists():
            try:
                os.replace(backup, Path(opts.home_dir, ".zshrc"))
            except OSError as exc:
                return ModuleResult(
                    success=False,
                    module=self.name,
                    error=f"failed to restore .zshrc: {exc}",
                )

        return ModuleResult(
            success=True, module=self.name, output="Oh My Zsh uninstalled successfully"
        )

    def is_installed(self) -> bool:
        """Report whether ~/.oh-my-zsh exists."""
        return os.path.exists(os.path.join(os.environ.get("HOME", ""), ".oh-my-zsh"))

    def _installed_version(self) -> str:
        version_file = Path(os.environ.get("HOME", ""), ".oh-my-zsh", "VERSION")
        try:
            return version_file.read_text().strip()
        except OSError:
            return "unknown"

    def install_plugin(self, plugin_name: str, opts: ModuleOptions) -> ModuleResult:
        """Clone a plugin repository into the custom plugins directory."""
        plugin_dir = Path(opts.home_dir, ".oh-my-zsh", "custom", "plugins", plugin_name)
        if plugin_dir.exists():
            return ModuleResult(
                success=True,
                module=self.name,
                output=f"Plugin {plugin_name} is already installed",
            )

        url = f"https://github.com/{plugin_name}.git"
        try:
            _run(["git", "clone", "--depth", "1", url, str(plugin_dir)], opts.verbose)
        except ModuleError as exc:
            return ModuleResult(
                success=False,
                module=self.name,
                error=f"failed to install plugin {plugin_name}: {exc}",
            )
        return ModuleResult(
            success=True,
            module=self.name,
            output=f"Plugin {plugin_name} installed successfully",
        )

    def install_theme(self, theme_name: str, opts: ModuleOptions) -> ModuleResult:
        """Clone a theme repository into the themes directory."""
        themes_dir = Path(opts.home_dir, ".oh-my-zsh", "themes")
        if (themes_dir / f"{theme_name}.zsh-theme").exists():
            return ModuleResult(
                success=True,
                module=self.name,
                output=f"Theme {theme_name} is already installed",
            )

        url = f"https://github.com/{theme_name}.git"
        try:
            _run(["git", "clone", "--depth", "1", url, str(themes_dir)], opts.verbose)
        except ModuleError as exc:
            return ModuleResult(
                success=False,
                module=self.name,
                error=f"failed to install theme {theme_name}: {exc}",
            )
        return ModuleResult(
            success=True,
            module=self.name,
            output=f"Theme {theme_name} installed successfully",
        )

    def recommended_plugins(self) -> list[str]:
        """Return the names of recommended plugins."""
        return list(_RECOMMENDED_PLUGINS)