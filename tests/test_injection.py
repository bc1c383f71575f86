import pytest

from locus.errors import UnresolvedCapability
from locus.injection import Inject, injectable
from locus.registry import Registry


class Greeter:
    def __init__(self, text: str):
        self._text = text

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str):
        self._text = text


class GreeterMock(Greeter):
    def __init__(self):
        super().__init__("")

    def get_text(self) -> str:
        return "I am a mock"

    def set_text(self, text: str):
        pass


registry = Registry("injection")


class SomeViewModel:
    service = Inject(Greeter, registry)

    def get_text(self) -> str:
        return self.service.get_text()

    def set_text(self, text: str):
        self.service.set_text(text)


class AnotherViewModel:
    service = Inject(Greeter, registry)

    def get_text(self) -> str:
        return self.service.get_text()


@pytest.fixture(autouse=True)
def reset_registry():
    registry.clear()
    yield
    registry.clear()


def test_injected_factory_value():
    registry.register(Greeter, lambda: Greeter("Hello"))

    assert SomeViewModel().get_text() == "Hello"


def test_singleton_is_shared_between_injection_points():
    registry.register(Greeter, lambda: Greeter("Hello"), singleton=True)

    some_view_model = SomeViewModel()
    another_view_model = AnotherViewModel()
    assert some_view_model.get_text() == another_view_model.get_text() == "Hello"

    some_view_model.set_text("World")

    assert another_view_model.get_text() == "World"


def test_factory_injection_points_are_independent():
    registry.register(Greeter, lambda: Greeter("Hello"))

    some_view_model = SomeViewModel()
    another_view_model = AnotherViewModel()
    some_view_model.set_text("World")

    assert another_view_model.get_text() == "Hello"
    assert some_view_model.service is not another_view_model.service


def test_injected_value_is_resolved_once_per_instance():
    registry.register(Greeter, lambda: Greeter("Hello"))
    view_model = SomeViewModel()

    assert view_model.service is view_model.service


def test_mock_can_be_substituted():
    registry.register_instance(Greeter, GreeterMock())

    assert SomeViewModel().get_text() == "I am a mock"


def test_injection_point_fails_at_construction():
    with pytest.raises(UnresolvedCapability, match="Greeter> is not registered"):
        SomeViewModel()


def test_injection_point_keeps_binding_in_force_at_construction():
    registry.register(Greeter, lambda: Greeter("first"))
    view_model = SomeViewModel()

    registry.register(Greeter, lambda: Greeter("second"))

    assert view_model.get_text() == "first"
    assert SomeViewModel().get_text() == "second"


def test_injection_point_runs_before_own_init():
    seen = []

    class ViewModel:
        service = Inject(Greeter, registry)

        def __init__(self):
            seen.append(self.__dict__.get("service"))

    registry.register(Greeter, lambda: Greeter("Hello"))
    view_model = ViewModel()

    assert seen == [view_model.service]


def test_inherited_injection_point_resolves_through_base_init():
    class Base:
        service = Inject(Greeter, registry)

    class Child(Base):
        def __init__(self, label: str):
            super().__init__()
            self.label = label

    registry.register(Greeter, lambda: Greeter("first"))
    child = Child("child")
    registry.register(Greeter, lambda: Greeter("second"))

    assert child.service.get_text() == "first"


def test_subclass_skipping_base_init_resolves_on_access():
    class Base:
        service = Inject(Greeter, registry)

    class Child(Base):
        def __init__(self):
            pass

    child = Child()
    registry.register(Greeter, lambda: Greeter("Hello"))

    assert child.service.get_text() == "Hello"


def test_descriptor_is_returned_from_class():
    assert isinstance(SomeViewModel.service, Inject)
    assert SomeViewModel.service.attribute_name == "service"
    assert repr(SomeViewModel.service) == "Inject(test_injection.Greeter)"


def test_injectable_resolves_at_construction():
    built = []

    @injectable
    class EagerViewModel:
        service = Inject(Greeter, registry)

        def __init__(self, label: str):
            built.append(self.__dict__["service"])
            self.label = label

    registry.register(Greeter, lambda: Greeter("Hello"))
    view_model = EagerViewModel("eager")

    assert built == [view_model.service]
    assert view_model.label == "eager"


def test_injectable_fails_fast_without_registration():
    @injectable
    class EagerViewModel:
        service = Inject(Greeter, registry)

    with pytest.raises(UnresolvedCapability):
        EagerViewModel()


def test_injectable_includes_inherited_injection_points():
    registry.register_instance("greeting", "Hi")

    class Base:
        service = Inject(Greeter, registry)

    @injectable
    class Child(Base):
        greeting = Inject("greeting", registry)

    registry.register(Greeter, lambda: Greeter("Hello"))
    child = Child()

    assert set(child.__dict__) == {"service", "greeting"}
    assert child.greeting == "Hi"


def test_injectable_skips_attributes_shadowed_in_subclass():
    class Base:
        service = Inject(Greeter, registry)

    @injectable
    class Child(Base):
        service = None

    assert Child().service is None
