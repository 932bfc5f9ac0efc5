"""Core types of the module system: options, results, configs and the Module base."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ModuleError(Exception):
    """Raised when a module operation or module definition is invalid."""


class OS(str, Enum):
    """Operating systems the modules know how to handle."""

    WINDOWS = "windows"
    DARWIN = "darwin"
    LINUX = "linux"

    def __str__(self) -> str:
        return self.value


class Shell(str, Enum):
    """Shells that can be detected on a system."""

    ZSH = "zsh"
    BASH = "bash"
    FISH = "fish"
    POWERSHELL = "powershell"
    PWSH = "pwsh"
    CMD = "cmd"
    TCSH = "tcsh"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class SystemInfo:
    """Information gathered about the host system."""

    os: OS | str = ""
    distro: str = ""
    distro_version: str = ""
    shell: Shell | str = ""
    shell_version: str = ""
    arch: str = ""
    home_dir: str = ""
    username: str = ""
    hostname: str = ""
    package_managers: list[str] = field(default_factory=list)


@dataclass
class DetectResult:
    """The subset of system detection results that modules need."""

    os: OS | str = ""
    distro: str = ""
    shell: Shell | str = ""
    package_manager: str = ""
    home_dir: str = ""
    username: str = ""


@dataclass
class ModuleOptions:
    """Options controlling a module install or uninstall."""

    sudo: bool = False
    yes: bool = False
    verbose: bool = False
    dry_run: bool = False
    force: bool = False
    home_dir: str = ""
    shell: Shell | str = ""
    os: OS | str = ""
    distro: str = ""
    package_manager: str = ""

    @classmethod
    def from_detect(cls, detect: DetectResult) -> ModuleOptions:
        """Build options from detection results, with every flag off."""
        return cls(
            home_dir=detect.home_dir,
            shell=detect.shell,
            os=detect.os,
            distro=detect.distro,
            package_manager=detect.package_manager,
        )


@dataclass
class ModuleResult:
    """The outcome of a module operation."""

    success: bool
    module: str
    error: str = ""
    output: str = ""
    version: str = ""


class Module(ABC):
    """Interface every module implements."""

    name: str
    description: str
    version: str
    dependencies: list[str]

    @abstractmethod
    def install(self, opts: ModuleOptions) -> ModuleResult:
        """Install the module."""

    @abstractmethod
    def uninstall(self, opts: ModuleOptions) -> ModuleResult:
        """Remove the module from the system."""

    @abstractmethod
    def is_installed(self) -> bool:
        """Report whether the module is currently installed."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, version={self.version!r})"


class BaseModule(Module, ABC):
    """Module holding the common metadata; subclasses supply the actions."""

    def __init__(
        self,
        name: str,
        description: str,
        version: str,
        dependencies: list[str] | None,
    ) -> None:
        self.name = name
        self.description = description
        self.version = version
        self.dependencies = list(dependencies or [])


def command_exists(cmd: str) -> bool:
    """Return True if *cmd* can be found on PATH."""
    return bool(cmd) and shutil.which(cmd) is not None


def _as_str(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ModuleError(f"{where}: expected a string, got {type(value).__name__}")


def _as_bool(value: Any, where: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ModuleError(f"{where}: expected a boolean, got {type(value).__name__}")


def _as_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise ModuleError(f"{where}: expected a list, got {type(value).__name__}")


def _as_map(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    raise ModuleError(f"{where}: expected a mapping, got {type(value).__name__}")


def _str_list(value: Any, where: str) -> list[str]:
    return [_as_str(item, where) for item in _as_list(value, where)]


@dataclass
class InstallAction:
    """How a module is installed: package, script, git or download."""

    type: str = ""
    package_manager: str = ""
    packages: list[str] = field(default_factory=list)
    script_url: str = ""
    git_repo: str = ""
    git_branch: str = ""
    download_url: str = ""
    commands: list[str] = field(default_factory=list)
    destination: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> InstallAction:
        d = _as_map(data, "install")
        return cls(
            type=_as_str(d.get("type"), "install.type"),
            package_manager=_as_str(d.get("package_manager"), "install.package_manager"),
            packages=_str_list(d.get("packages"), "install.packages"),
            script_url=_as_str(d.get("script_url"), "install.script_url"),
            git_repo=_as_str(d.get("git_repo"), "install.git_repo"),
            git_branch=_as_str(d.get("git_branch"), "install.git_branch"),
            download_url=_as_str(d.get("download_url"), "install.download_url"),
            commands=_str_list(d.get("commands"), "install.commands"),
            destination=_as_str(d.get("destination"), "install.destination"),
        )


@dataclass
class UninstallAction:
    """How a module is removed."""

    type: str = ""
    package_manager: str = ""
    packages: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> UninstallAction:
        d = _as_map(data, "uninstall")
        return cls(
            type=_as_str(d.get("type"), "uninstall.type"),
            package_manager=_as_str(d.get("package_manager"), "uninstall.package_manager"),
            packages=_str_list(d.get("packages"), "uninstall.packages"),
            commands=_str_list(d.get("commands"), "uninstall.commands"),
            files=_str_list(d.get("files"), "uninstall.files"),
        )


@dataclass
class CheckAction:
    """How to check whether a module is installed: command, file or directory."""

    type: str = ""
    commands: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CheckAction:
        d = _as_map(data, "check_installed")
        return cls(
            type=_as_str(d.get("type"), "check_installed.type"),
            commands=_str_list(d.get("commands"), "check_installed.commands"),
            paths=_str_list(d.get("paths"), "check_installed.paths"),
        )


@dataclass
class Requirement:
    """A prerequisite of a module: a shell, an OS or a command."""

    type: str = ""
    value: str = ""
    optional: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Requirement:
        d = _as_map(data, "requirement")
        return cls(
            type=_as_str(d.get("type"), "requirement.type"),
            value=_as_str(d.get("value"), "requirement.value"),
            optional=_as_bool(d.get("optional"), "requirement.optional"),
        )


@dataclass
class FileConfig:
    """A file to be created or linked."""

    source: str = ""
    destination: str = ""
    link: bool = False
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> FileConfig:
        d = _as_map(data, "file")
        variables = {
            _as_str(k, "file.variables"): _as_str(v, "file.variables")
            for k, v in _as_map(d.get("variables"), "file.variables").items()
        }
        return cls(
            source=_as_str(d.get("source"), "file.source"),
            destination=_as_str(d.get("destination"), "file.destination"),
            link=_as_bool(d.get("link"), "file.link"),
            variables=variables,
        )


@dataclass
class EnvVar:
    """An environment variable to set."""

    name: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> EnvVar:
        d = _as_map(data, "env")
        return cls(
            name=_as_str(d.get("name"), "env.name"),
            value=_as_str(d.get("value"), "env.value"),
        )


@dataclass
class ModuleConfig:
    """A module definition as loaded from YAML or JSON."""

    name: str = ""
    display_name: str = ""
    description: str = ""
    version: str = ""
    dependencies: list[str] = field(default_factory=list)
    install: InstallAction = field(default_factory=InstallAction)
    uninstall: UninstallAction = field(default_factory=UninstallAction)
    check_installed: CheckAction = field(default_factory=CheckAction)
    requirements: list[Requirement] = field(default_factory=list)
    files: list[FileConfig] = field(default_factory=list)
    env: list[EnvVar] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ModuleConfig:
        """Build a config from a parsed mapping; missing keys take defaults."""
        d = _as_map(data, "module")
        return cls(
            name=_as_str(d.get("name"), "name"),
            display_name=_as_str(d.get("display_name"), "display_name"),
            description=_as_str(d.get("description"), "description"),
            version=_as_str(d.get("version"), "version"),
            dependencies=_str_list(d.get("dependencies"), "dependencies"),
            install=InstallAction.from_dict(d.get("install")),
            uninstall=UninstallAction.from_dict(d.get("uninstall")),
            check_installed=CheckAction.from_dict(d.get("check_installed")),
            requirements=[
                Requirement.from_dict(r) for r in _as_list(d.get("requirements"), "requirements")
            ],
            files=[FileConfig.from_dict(f) for f in _as_list(d.get("files"), "files")],
            env=[EnvVar.from_dict(e) for e in _as_list(d.get("env"), "env")],
        )


@dataclass
class ModuleLoaderConfig:
    """Root of a module definition file."""

    version: str = ""
    modules: list[ModuleConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ModuleLoaderConfig:
        """Build the root config; an empty document yields no modules."""
        d = _as_map(data, "document")
        return cls(
            version=_as_str(d.get("version"), "version"),
            modules=[ModuleConfig.from_dict(m) for m in _as_list(d.get("modules"), "modules")],
        )