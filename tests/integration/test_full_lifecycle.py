# tests/integration/test_full_lifecycle.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from classkit import BaseClass, ClassDescriptor, ClassLookupError, ClassRegistry, SymbolTable


class TraceLog:
    """
    Collects lifecycle records from member functions so tests can compare the
    order of constructor, member and destroy calls against an expected trace.
    """

    def __init__(self):
        self.records = []

    def __call__(self, record):
        self.records.append(record)


@pytest.fixture
def app():
    """
    A small application model:
        App.Observable  mixin with on/emit
        App.Model       base model, mixes in Observable
        App.User        extends Model, overrides save via call_parent
        App.Store       singleton with alias "store", owns a User
    """
    trace = TraceLog()
    symbols = SymbolTable()
    registry = ClassRegistry(symbols=symbols)

    def on(self, event, handler):
        self.listeners = getattr(self, "listeners", {})
        self.listeners.setdefault(event, []).append(handler)

    def emit(self, event, *args):
        for handler in getattr(self, "listeners", {}).get(event, []):
            handler(*args)

    registry.define("App.Observable", {"mixin_id": "observable", "on": on, "emit": emit})

    def model_constructor(self, config=None):
        self.init_config(config)
        trace(f"construct:{self.class_name}")

    def save(self):
        trace(f"save:{self.class_name}")
        self.emit("saved", self)
        return True

    def model_destroy(self):
        trace(f"destroy:{self.class_name}")
        self.call_parent()

    registry.define(
        "App.Model",
        ClassDescriptor(
            mixins=["App.Observable"],
            statics={"TABLE": "models"},
            members={"constructor": model_constructor, "save": save, "destroy": model_destroy},
        ),
    )

    def user_factory(cls):
        def save(self):
            trace(f"validate:{self.name}")
            return self.call_parent()

        return {"extend": "App.Model", "alias": "user", "statics": {"TABLE": "users"}, "name": "", "save": save}

    registry.define("App.User", user_factory)

    def store_constructor(self):
        self.owner = registry.create_by_alias("user", {"name": "root"})
        trace("construct:store")

    registry.define("App.Store", {"singleton": True, "alias": "store", "constructor": store_constructor})

    return registry, symbols, trace


def test_scenario_define_create_dispatch(app):
    registry, symbols, trace = app
    user_cls = symbols.App.User
    saved = []

    user = registry.create("App.User", {"name": "ada"})
    user.on("saved", saved.append)

    assert user.save() is True
    assert saved == [user]
    assert trace.records[-2:] == ["validate:ada", "save:App.User"]

    assert user_cls.TABLE == "users"
    assert registry.get("App.Model").TABLE == "models"
    assert registry.mixes_in(user, "observable")
    assert isinstance(user, registry.get("App.Model"))
    assert isinstance(user, BaseClass)


def test_scenario_singleton_wiring(app):
    registry, symbols, trace = app
    store = registry.get_by_alias("store")

    assert symbols.App.Store is store
    assert store.owner.name == "root"
    assert trace.records[:2] == ["construct:App.User", "construct:store"]
    with pytest.raises(ClassLookupError):
        registry.create("App.Store")


def test_scenario_teardown(app):
    registry, symbols, trace = app
    store = registry.get("App.Store")
    owner = store.owner

    registry.destroy()

    assert "destroy:App.User" in trace.records
    assert vars(owner) == {}
    assert vars(store) == {}
    assert registry.classes == {}
    assert registry.aliases == {}
    assert symbols.roots() == ["ClassKit"]
    with pytest.raises(ClassLookupError):
        registry.create_by_alias("user")
