from __future__ import annotations

from collections import OrderedDict
from pathlib import Path

import pytest

from context_env.context.factory import ContextFactoryRegistry
from context_env.errors import HandlerFrozenError, UnknownContextClassError


def test_registered_factory_receives_single_sequence() -> None:
    # Factories get the whole argument list as one positional parameter.
    registry = ContextFactoryRegistry()
    registry.register("Ctx", lambda arguments: ("built", arguments))
    assert registry.has("Ctx") is True
    assert registry.create("Ctx", ["a", "b"]) == ("built", ["a", "b"])


def test_later_registration_overrides() -> None:
    # Re-registering an identifier replaces the earlier factory.
    registry = ContextFactoryRegistry()
    registry.register("Ctx", lambda arguments: "first")
    registry.register("Ctx", lambda arguments: "second")
    assert registry.create("Ctx", []) == "second"


def test_register_validates_inputs() -> None:
    # Empty identifiers and non-callable factories are rejected up front.
    registry = ContextFactoryRegistry()
    with pytest.raises(ValueError):
        registry.register("", lambda arguments: None)
    with pytest.raises(TypeError):
        registry.register("Ctx", "not callable")  # type: ignore[arg-type]


def test_factories_are_not_an_init_parameter() -> None:
    # The factory map is only filled through register().
    with pytest.raises(TypeError):
        ContextFactoryRegistry(_factories={"Ctx": object})  # type: ignore[call-arg]


def test_frozen_registry_rejects_registration() -> None:
    # Once frozen, the constructor map is read-only but still resolves.
    registry = ContextFactoryRegistry()
    registry.register("Ctx", lambda arguments: "built")
    registry.freeze()
    assert registry.frozen is True
    with pytest.raises(HandlerFrozenError):
        registry.register("Other", lambda arguments: None)
    assert registry.create("Ctx", []) == "built"


@pytest.mark.parametrize("identifier", ["collections.OrderedDict", "collections:OrderedDict"])
def test_import_fallback_resolves_dotted_identifiers(identifier: str) -> None:
    # Unregistered dotted identifiers import the class and construct it.
    registry = ContextFactoryRegistry()
    context = registry.create(identifier, [("a", 1), ("b", 2)])
    assert isinstance(context, OrderedDict)
    assert list(context.items()) == [("a", 1), ("b", 2)]


@pytest.mark.parametrize(
    "identifier",
    [
        "Bare",
        "collections:",
        "no_such_module_xyz.Context",
        "no_such_package_xyz.contexts.Context",
        "collections.NoSuchContext",
        "collections.abc:Missing.Attr",
        "json.dumps",
        "json:dumps",
        "os.sep",
    ],
)
def test_import_fallback_unknown_identifiers_raise(identifier: str) -> None:
    # Missing modules, missing attributes and non-class targets are all unknown.
    registry = ContextFactoryRegistry()
    with pytest.raises(UnknownContextClassError):
        registry.get(identifier)


def test_import_fallback_propagates_broken_module_imports(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # A context module that exists but fails to import is not reported as unknown.
    (tmp_path / "ctxenv_broken_contexts.py").write_text(
        "import ctxenv_missing_dependency\n\n\nclass BrokenContext:\n    pass\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    registry = ContextFactoryRegistry()
    with pytest.raises(ModuleNotFoundError) as excinfo:
        registry.get("ctxenv_broken_contexts.BrokenContext")
    assert not isinstance(excinfo.value, UnknownContextClassError)
    assert excinfo.value.name == "ctxenv_missing_dependency"


def test_import_fallback_can_be_disabled() -> None:
    # With the fallback off only explicit registrations resolve.
    registry = ContextFactoryRegistry(import_fallback=False)
    with pytest.raises(UnknownContextClassError):
        registry.get("collections.OrderedDict")
