"""Loading module definitions from YAML or JSON files, and modules built from them."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import urllib.request
from functools import partial
from pathlib import Path
from typing import Callable

import yaml

from autodevterm.modules.module import (
    Module,
    ModuleConfig,
    ModuleError,
    ModuleLoaderConfig,
    ModuleOptions,
    ModuleResult,
    Requirement,
    command_exists,
)
from autodevterm.modules.registry import Registry, get_global_registry

_DEFINITION_SUFFIXES = (".yaml", ".yml", ".json")

_PACKAGE_VERBS: dict[str, dict[str, list[str]]] = {
    "apt": {"install": ["install", "-y"], "remove": ["remove", "-y"]},
    "apt-get": {"install": ["install", "-y"], "remove": ["remove", "-y"]},
    "dnf": {"install": ["install", "-y"], "remove": ["remove", "-y"]},
    "yum": {"install": ["install", "-y"], "remove": ["remove", "-y"]},
    "zypper": {"install": ["install", "-y"], "remove": ["remove", "-y"]},
    "pacman": {"install": ["-S", "--noconfirm"], "remove": ["-R", "--noconfirm"]},
    "apk": {"install": ["add"], "remove": ["del"]},
    "brew": {"install": ["install"], "remove": ["uninstall"]},
    "winget": {"install": ["install"], "remove": ["uninstall"]},
    "scoop": {"install": ["install"], "remove": ["uninstall"]},
    "choco": {"install": ["install", "-y"], "remove": ["uninstall", "-y"]},
}
_NO_SUDO_MANAGERS = {"brew", "winget", "scoop", "choco"}

_Step = tuple[str, Callable[[], None]]


class Loader:
    """Reads module definitions and registers them with a registry."""

    def __init__(self, registry: Registry | None = None) -> None:
        self.registry = registry if registry is not None else get_global_registry()

    def load_from_file(self, path: str | os.PathLike[str]) -> list[ModuleConfig]:
        """Read and parse the module definitions in one file."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise ModuleError(f"reading file {str(path)!r}: {exc}") from exc
        return self.parse(data)

    def parse(self, data: bytes | str) -> list[ModuleConfig]:
        """Parse module definitions from YAML or JSON text."""
        try:
            document = yaml.safe_load(data)
            return ModuleLoaderConfig.from_dict(document).modules
        except (yaml.YAMLError, ModuleError) as exc:
            raise ModuleError(f"parsing module config: {exc}") from exc

    def load_and_register(self, path: str | os.PathLike[str]) -> None:
        """Load the definitions in a file and register a module for each."""
        for config in self.load_from_file(path):
            self.registry.register(ConfigurableModule(config))

    def load_from_directory(self, dir_path: str | os.PathLike[str]) -> None:
        """Load every .yaml, .yml and .json definition file in a directory."""
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ModuleError(f"reading directory {str(dir_path)!r}: {exc}") from exc

        for entry in entries:
            if entry.is_dir() or not entry.name.endswith(_DEFINITION_SUFFIXES):
                continue
            try:
                self.load_and_register(entry.path)
            except ModuleError as exc:
                raise ModuleError(f"loading modules from {entry.path!r}: {exc}") from exc


def _run_shell(command: str, verbose: bool) -> None:
    out = None if verbose else subprocess.DEVNULL
    try:
        completed = subprocess.run(command, shell=True, stdout=out, stderr=out, check=False)
    except OSError as exc:
        raise ModuleError(f"command {command!r} failed: {exc}") from exc
    if completed.returncode != 0:
        raise ModuleError(f"command {command!r} failed with exit status {completed.returncode}")


def _run(args: list[str], verbose: bool) -> None:
    out = None if verbose else subprocess.DEVNULL
    try:
        completed = subprocess.run(args, stdout=out, stderr=out, check=False)
    except OSError as exc:
        raise ModuleError(f"command {' '.join(args)!r} failed: {exc}") from exc
    if completed.returncode != 0:
        raise ModuleError(
            f"command {' '.join(args)!r} failed with exit status {completed.returncode}"
        )


def _download(url: str, destination: str) -> None:
    try:
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
        urllib.request.urlretrieve(url, destination)
    except OSError as exc:
        raise ModuleError(f"downloading {url}: {exc}") from exc


def _remove_path(path: str) -> None:
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)
    except OSError as exc:
        raise ModuleError(f"removing {path}: {exc}") from exc


def _package_command(manager: str, action: str, packages: list[str], sudo: bool) -> list[str]:
    verbs = _PACKAGE_VERBS.get(manager)
    if verbs is None:
        raise ModuleError(f"unsupported package manager: {manager or '(none)'}")
    args = [manager, *verbs[action], *packages]
    if sudo and manager not in _NO_SUDO_MANAGERS:
        args.insert(0, "sudo")
    return args


class ConfigurableModule(Module):
    """A module whose behaviour is described by a ModuleConfig."""

    def __init__(self, config: ModuleConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.config.name

    @property
    def description(self) -> str:  # type: ignore[override]
        return self.config.description

    @property
    def version(self) -> str:  # type: ignore[override]
        return self.config.version

    @property
    def dependencies(self) -> list[str]:  # type: ignore[override]
        return self.config.dependencies

    def _expand(self, path: str, opts: ModuleOptions) -> str:
        if path.startswith("~") and opts.home_dir:
            return opts.home_dir + path[1:]
        return os.path.expanduser(path)

    def _check_requirement(self, req: Requirement, opts: ModuleOptions) -> bool:
        if req.type == "shell":
            return str(opts.shell) == req.value
        if req.type == "os":
            return str(opts.os) == req.value
        if req.type == "command":
            return command_exists(req.value)
        return False

    def _install_steps(self, opts: ModuleOptions) -> list[_Step]:
        action = self.config.install
        steps: list[_Step] = []
        if action.type == "package" and action.packages:
            manager = action.package_manager or str(opts.package_manager)
            args = _package_command(manager, "install", action.packages, opts.sudo)
            steps.append((" ".join(args), partial(_run, args, opts.verbose)))
        elif action.type == "script" and action.script_url:
            command = f"curl -fsSL {shlex.quote(action.script_url)} | sh"
            steps.append((command, partial(_run, ["sh", "-c", command], opts.verbose)))
        elif action.type == "git" and action.git_repo:
            dest = self._expand(
                action.destination or os.path.join(opts.home_dir, self.name), opts
            )
            args = ["git", "clone", "--depth", "1"]
            if action.git_branch:
                args += ["--branch", action.git_branch]
            args += [action.git_repo, dest]
            steps.append((" ".join(args), partial(_run, args, opts.verbose)))
        elif action.type == "download" and action.download_url:
            basename = action.download_url.rstrip("/").rsplit("/", 1)[-1]
            dest = self._expand(
                action.destination or os.path.join(opts.home_dir, basename), opts
            )
            steps.append(
                (f"download {action.download_url} -> {dest}",
                 partial(_download, action.download_url, dest))
            )
        for command in action.commands:
            steps.append((command, partial(_run_shell, command, opts.verbose)))
        return steps

    def _uninstall_steps(self, opts: ModuleOptions) -> list[_Step]:
        action = self.config.uninstall
        steps: list[_Step] = []
        if action.type == "package" and action.packages:
            manager = action.package_manager or str(opts.package_manager)
            args = _package_command(manager, "remove", action.packages, opts.sudo)
            steps.append((" ".join(args), partial(_run, args, opts.verbose)))
        for command in action.commands:
            steps.append((command, partial(_run_shell, command, opts.verbose)))
        for file in action.files:
            path = self._expand(file, opts)
            steps.append((f"remove {path}", partial(_remove_path, path)))
        return steps

    def _perform(self, steps_of: Callable[[], list[_Step]], opts: ModuleOptions, done: str) -> ModuleResult:
        try:
            steps = steps_of()
            if opts.dry_run:
                planned = "\n".join(description for description, _ in steps)
                return ModuleResult(success=True, module=self.name, output=planned)
            for _, step in steps:
                step()
        except ModuleError as exc:
            return ModuleResult(success=False, module=self.name, error=str(exc))
        return ModuleResult(success=True, module=self.name, output=done, version=self.version)

    def install(self, opts: ModuleOptions) -> ModuleResult:
        """Check the requirements, then run the configured install actions."""
        for req in self.config.requirements:
            if not req.optional and not self._check_requirement(req, opts):
                return ModuleResult(
                    success=False,
                    module=self.name,
                    error=f"requirement not met: {req.type} {req.value}",
                )
        return self._perform(partial(self._install_steps, opts), opts, f"Installed {self.name}")

    def uninstall(self, opts: ModuleOptions) -> ModuleResult:
        """Run the configured uninstall actions."""
        result = self._perform(
            partial(self._uninstall_steps, opts), opts, f"Uninstalled {self.name}"
        )
        result.version = ""
        return result

    def is_installed(self) -> bool:
        """Apply the configured check: commands on PATH, files or directories present."""
        check = self.config.check_installed
        if check.type == "command" and check.commands:
            return all(command_exists(cmd) for cmd in check.commands)
        if check.type == "file" and check.paths:
            return all(os.path.isfile(os.path.expanduser(p)) for p in check.paths)
        if check.type == "directory" and check.paths:
            return all(os.path.isdir(os.path.expanduser(p)) for p in check.paths)
        return False