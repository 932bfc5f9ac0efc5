"""Registry of available modules and dependency resolution."""

from __future__ import annotations

import threading

from autodevterm.modules.module import Module, ModuleError


class Registry:
    """Thread-safe collection of modules keyed by name."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._lock = threading.RLock()

    def register(self, module: Module) -> None:
        """Add a module, replacing any module with the same name."""
        with self._lock:
            self._modules[module.name] = module

    def unregister(self, name: str) -> None:
        """Remove a module by name; unknown names are ignored."""
        with self._lock:
            self._modules.pop(name, None)

    def get(self, name: str) -> Module | None:
        """Return the named module, or None if it is not registered."""
        with self._lock:
            return self._modules.get(name)

    def list(self) -> list[Module]:
        """Return all registered modules."""
        with self._lock:
            return list(self._modules.values())

    def names(self) -> list[str]:
        """Return the names of all registered modules."""
        with self._lock:
            return list(self._modules)

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._modules

    def get_dependencies(self, name: str) -> list[str]:
        """Return all dependencies of a module, transitive ones included.

        A dependency reached along several paths is listed each time.
        """
        with self._lock:
            visited: set[str] = set()
            deps: list[str] = []

            def visit(mod_name: str) -> None:
                if mod_name in visited:
                    return
                visited.add(mod_name)
                module = self._modules.get(mod_name)
                if module is None:
                    raise ModuleError(f"module {mod_name!r} not found")
                for dep in module.dependencies:
                    deps.append(dep)
                    visit(dep)

            visit(name)
            return deps

    def resolve_dependencies(self, name: str) -> list[str]:
        """Return an installation order with every dependency before its dependents."""
        with self._lock:
            graph = {n: list(m.dependencies) for n, m in self._modules.items()}
            visited: set[str] = set()
            order: list[str] = []

            def visit(node: str) -> None:
                if node in visited:
                    return
                visited.add(node)
                for dep in graph.get(node, []):
                    if dep not in graph:
                        raise ModuleError(
                            f"missing dependency: {dep!r} for module {node!r}"
                        )
                    visit(dep)
                order.append(node)

            visit(name)
            return order


_global_registry = Registry()


def register(module: Module) -> None:
    """Register a module with the global registry."""
    _global_registry.register(module)


def unregister(name: str) -> None:
    """Remove a module from the global registry."""
    _global_registry.unregister(name)


def get(name: str) -> Module | None:
    """Get a module from the global registry."""
    return _global_registry.get(name)


def list_modules() -> list[Module]:
    """List all modules in the global registry."""
    return _global_registry.list()


def names() -> list[str]:
    """Return the names of all modules in the global registry."""
    return _global_registry.names()


def get_global_registry() -> Registry:
    """Return the global registry."""
    return _global_registry


def set_global_registry(registry: Registry) -> None:
    """Replace the global registry."""
    global _global_registry
    _global_registry = registry