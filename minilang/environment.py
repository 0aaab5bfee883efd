from typing import Any, Dict

from minilang.types import TypeSpec, default_value


class Environment:
    """Name tables for a single run of a program.

    `types` is filled by declarations during semantic checking and
    `values` by declarations and assignments during evaluation. Entries
    are only ever added or updated, never removed.
    """
    def __init__(self):
        self.types: Dict[str, TypeSpec] = {}
        self.values: Dict[str, Any] = {}

    def is_declared(self, name: str) -> bool:
        return name in self.types

    def declare_type(self, name: str, type_spec: TypeSpec) -> bool:
        """Record the declared type of a name; False if it already has one."""
        if name in self.types:
            return False
        self.types[name] = type_spec
        return True

    def type_of(self, name: str) -> TypeSpec:
        return self.types.get(name, TypeSpec.error())

    def declare(self, name: str, type_spec: TypeSpec):
        self.values[name] = default_value(type_spec)

    def get(self, name: str) -> Any:
        # the checker guarantees every name used at runtime was declared
        return self.values[name]

    def set(self, name: str, value: Any):
        self.values[name] = value
