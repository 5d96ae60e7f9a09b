from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, is_dataclass


@dataclass(frozen=True, slots=True)
class Injected:
    # Marker for a collaborator that an initializer fills in after construction.
    service_name: str
    optional: bool = False

    def resolve(self, services: Mapping[str, object]) -> object:
        if self.service_name in services:
            return services[self.service_name]
        if self.optional:
            return None
        raise KeyError(f"Missing service binding: {self.service_name}")


class _InjectFactory:
    # Convenience helper: inject.service("name") in context class bodies.
    def service(self, service_name: str, *, optional: bool = False) -> Injected:
        if not isinstance(service_name, str) or not service_name:
            raise ValueError("inject service name must be a non-empty string")
        return Injected(service_name=service_name, optional=optional)


def iter_injected_fields(obj: object) -> Iterator[tuple[str, Injected]]:
    # Instance attributes shadow class attributes of the same name.
    seen: set[str] = set()
    if is_dataclass(obj):
        for f in fields(obj):
            value = getattr(obj, f.name)
            if isinstance(value, Injected):
                seen.add(f.name)
                yield f.name, value
    for name, value in getattr(obj, "__dict__", {}).items():
        if name not in seen and isinstance(value, Injected):
            seen.add(name)
            yield name, value
    for klass in type(obj).__mro__:
        for name, value in vars(klass).items():
            if name in seen or not isinstance(value, Injected):
                continue
            # Skip class markers already replaced on the instance.
            if not isinstance(getattr(obj, name, None), Injected):
                continue
            seen.add(name)
            yield name, value


inject = _InjectFactory()
