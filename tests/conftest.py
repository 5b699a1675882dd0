# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading

import pytest

from classkit.core.config import RegistryConfig
from classkit.core.registry import ClassRegistry
from classkit.runtime.namespace import SymbolTable


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def symbols():
    """An empty symbol table."""
    return SymbolTable()


@pytest.fixture
def registry(symbols):
    """A fresh registry publishing into the symbols fixture."""
    return ClassRegistry(symbols=symbols)


@pytest.fixture
def strict_registry():
    """A registry that refuses to redefine a registered name."""
    return ClassRegistry(config=RegistryConfig(allow_redefinition=False))


@pytest.fixture
def events():
    """A list that member functions append to, to record side effects."""
    return []


@pytest.fixture
def animal_classes(registry):
    """Animal <- Dog <- Puppy hierarchy with overriding members."""

    def constructor(self, name, sound="..."):
        self.name = name
        self.sound = sound

    def speak(self, volume=1):
        return f"{self.name} says {self.sound * volume}"

    def describe(self):
        return "animal"

    def dog_constructor(self, name, sound="woof"):
        self.call_parent(name, sound)
        self.tricks = []

    def dog_describe(self):
        return self.call_parent() + ">dog"

    def puppy_describe(self):
        return self.call_parent() + ">puppy"

    animal = registry.define(
        "Zoo.Animal", {"constructor": constructor, "speak": speak, "describe": describe, "legs": 4}
    )
    dog = registry.define("Zoo.Dog", {"extend": "Zoo.Animal", "constructor": dog_constructor, "describe": dog_describe})
    puppy = registry.define("Zoo.Puppy", {"extend": "Zoo.Dog", "describe": puppy_describe, "alias": "puppy"})
    return animal, dog, puppy


@pytest.fixture(autouse=True)
def cleanup_threads():
    yield
    # Cleanup any remaining threads after each test
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive():
            thread.join(timeout=1.0)
