# autodevterm

A library for setting up a developer terminal from installable modules. It
provides:

- the module types (`Module`, `BaseModule`, `ModuleOptions`, `ModuleResult`)
  and two ready-made modules, `StarshipModule` and `OhMyZshModule`;
- a `Registry` that resolves the order in which dependent modules must be
  installed;
- a `Loader` that reads module definitions from YAML or JSON files and turns
  each into a `ConfigurableModule`;
- text screens and layout helpers for an interactive setup wizard.

It is a library only; it installs no command.

## Installation

Install the package with pip. The `test` extra adds pytest for running the
test suite.

## Modules

Every module has `name`, `description`, `version` and `dependencies`
attributes and three methods: `install(opts)`, `uninstall(opts)` and
`is_installed()`. `install` and `uninstall` do not raise on failure; they
return a `ModuleResult` with `success`, `module`, `error`, `output` and
`version`. Definition files that cannot be read or parsed, and failed
dependency lookups, raise `ModuleError`.

`ModuleOptions` carries the flags `sudo`, `yes`, `verbose`, `dry_run` and
`force`, and the target system: `home_dir`, `shell`, `os`, `distro` and
`package_manager`. `ModuleOptions.from_detect(DetectResult(...))` builds it
from detection results with every flag off. The `OS` and `Shell` enums hold
the values the modules compare against (`"linux"`, `"darwin"`, `"windows"`;
`"zsh"`, `"bash"`, `"fish"`, `"powershell"` and others).

```python
from autodevterm.modules.module import OS, ModuleOptions
from autodevterm.modules.starship import StarshipModule

starship = StarshipModule()
opts = ModuleOptions(os=OS.LINUX, home_dir="/home/user", sudo=True)
result = starship.install(opts)
print(result.success, result.output or result.error)
print(starship.init_command("zsh"))   # eval "$(starship init zsh)"
```

### Starship

`StarshipModule` installs the Starship prompt with winget, scoop or
Chocolatey on Windows, Homebrew on macOS, and on Linux with the official
install script (sudo is required where APT is present), dnf or pacman. Unless
`force` is set, an already installed Starship is left alone. `uninstall` uses
the same tools, or on Linux removes `~/.local/bin/starship` and
`~/.config/starship`. An unsupported `os` gives a failed result.
`init_command(shell)` returns the line that enables Starship in a shell, and
`default_starship_config()` returns a sample `starship.toml`.

### Oh My Zsh

`OhMyZshModule` runs the official unattended installer, then tries to make zsh
the login shell with `chsh`. It refuses to run on Windows and needs `zsh` on
`PATH`. `uninstall` removes `~/.oh-my-zsh` and restores `~/.zshrc.bak` if
present. `install_plugin(name, opts)` and `install_theme(name, opts)` clone
`https://github.com/<name>.git` into the custom plugins or themes directory;
`recommended_plugins()` lists suggested plugin names.

## Registries and dependencies

A `Registry` maps module names to modules and is safe to use from several
threads. Registering a name a second time replaces the earlier module.

```python
from autodevterm.modules.registry import Registry

registry = Registry()
registry.register(starship)
print(len(registry), "starship" in registry, registry.names())
print(registry.resolve_dependencies("starship"))
```

`resolve_dependencies(name)` returns an installation order in which every
module comes after the modules it needs, and raises `ModuleError` when a
dependency is not registered. `get_dependencies(name)` lists all transitive
dependencies and raises `ModuleError` for an unknown module.

The functions `register`, `unregister`, `get`, `list_modules` and `names` in
`autodevterm.modules.registry` work on a shared global registry;
`get_global_registry` returns it and `set_global_registry` replaces it.

## Module definitions from files

Modules can be described in YAML or JSON with a top-level `modules` list:

```yaml
version: "1"
modules:
  - name: ripgrep
    description: Fast recursive search
    version: "14.0"
    install:
      type: package
      package_manager: apt
      packages: [ripgrep]
    uninstall:
      type: package
      package_manager: apt
      packages: [ripgrep]
    check_installed:
      type: command
      commands: [rg]
    requirements:
      - type: os
        value: linux
```

```python
from autodevterm.modules.loader import Loader
from autodevterm.modules.registry import get_global_registry

loader = Loader(get_global_registry())
configs = loader.parse(open("modules.yaml").read())
loader.load_and_register("modules.yaml")
loader.load_from_directory("module-definitions")
```

`load_from_directory` reads every `.yaml`, `.yml` and `.json` file in the
directory, in name order. Each definition becomes a `ConfigurableModule`,
which:

- checks its non-optional requirements (`shell`, `os` or `command`) before
  installing, failing with `requirement not met: <type> <value>`;
- installs by `package` (apt, apt-get, dnf, yum, zypper, pacman, apk, brew,
  winget, scoop, choco), `script` (piped to `sh`), `git` (shallow clone) or
  `download`, then runs any extra `commands`;
- uninstalls by package removal, `commands` and deleting `files`;
- reports `is_installed()` from `check_installed`: all `commands` on `PATH`,
  or all `paths` present as files or directories.

With `dry_run` set, `install` and `uninstall` run nothing and return the
planned steps, one per line, as the result's output:

```python
from autodevterm.modules.loader import ConfigurableModule
from autodevterm.modules.module import ModuleConfig, ModuleOptions

module = ConfigurableModule(ModuleConfig.from_dict(
    {"name": "ripgrep", "install": {"type": "package", "packages": ["ripgrep"]}}
))
print(module.install(ModuleOptions(dry_run=True, sudo=True, package_manager="apt")).output)
# sudo apt install -y ripgrep
```

## Wizard screens

`autodevterm.wizard` renders the wizard's screens as strings with ANSI
colours; setting the `NO_COLOR` environment variable turns colour off.

- `autodevterm.wizard.ui`: the immutable `Style` (colours, bold, padding,
  borders, size; `render` and `derive`), the shared styles such as
  `PANEL_STYLE` and `TITLE_STYLE`, and the helpers `visible_width`,
  `join_vertical`, `progress_bar`, `repeat_char`, `centered`, `truncate`,
  `format_list`, `key_map` and `short_key_map`.
- `autodevterm.wizard.menu`: the `Screen` enum, `main_menu_options()`,
  `main_menu_view(model)` and `main_menu_help()`.
- `autodevterm.wizard.screens`: `welcome_view`, `exit_view`,
  `detection_view`, `module_selection_view`, `module_checkbox` and
  `module_status`.
- `autodevterm.wizard.progress`: `preview_view`, `confirm_view`,
  `installing_view`, `install_progress_view`, `installation_status`,
  `render_command_output` and `strip_ansi`.
- `autodevterm.wizard.results`: `results_view`, `error_results_view` and
  `wrap_text`.

The views take any object carrying the attributes they read, for example
`menu_cursor`; `system_info` (a `SystemInfo` or `None`) and `detection_err`;
`available_modules`, `module_cursor` and a `selected_modules()` method;
`install_progress`, `install_total`, `install_results`, `is_installing` and a
`success_count()` method.

```python
from types import SimpleNamespace

from autodevterm.modules.module import SystemInfo
from autodevterm.wizard.menu import main_menu_view
from autodevterm.wizard.screens import detection_view

print(main_menu_view(SimpleNamespace(menu_cursor=0)))
info = SystemInfo(os="linux", shell="zsh", arch="amd64", home_dir="/home/user",
                  package_managers=["apt"])
print(detection_view(SimpleNamespace(system_info=info, detection_err=None)))
```

## What the package does not do

- It does not detect the system; `SystemInfo` and `DetectResult` are filled in
  by the caller.
- It has no wizard state machine or keyboard handling and no interactive
  program: the screens are plain functions that render whatever state they are
  given.
- It ships no list of built-in modules and registers nothing by itself;
  modules must be registered explicitly. There is no module for Git
  configuration or fonts.