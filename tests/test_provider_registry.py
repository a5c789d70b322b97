import unittest
from unittest import mock

from fakes import MIDDLEWARE, CollectOnlyProvider, FakeProvider

from pipeline import providers as providers_mod
from pipeline.providers import ProviderRegistry, provider_commands


class _EntryPoint:
    def __init__(self, name, obj):
        self.name = name
        self.value = f"tests:{name}"
        self._obj = obj

    def load(self):
        if isinstance(self._obj, Exception):
            raise self._obj
        return self._obj


class TestProviderRegistry(unittest.TestCase):
    def test_find_and_list(self) -> None:
        fake, only = FakeProvider(), CollectOnlyProvider()
        registry = ProviderRegistry([fake, only])

        self.assertIs(fake, registry.find_provider(MIDDLEWARE))
        self.assertIsNone(registry.find_provider("unknown"))
        self.assertEqual([fake, only], registry.list_providers())
        self.assertEqual([MIDDLEWARE, "collectonly"], registry.middleware_names())

    def test_duplicate_middleware_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ProviderRegistry([FakeProvider(), FakeProvider()])

    def test_run_is_synthesized_from_assess(self) -> None:
        names = [c.name for c in provider_commands(FakeProvider())]
        self.assertEqual(["collect", "assess", "report", "run"], names)

        names = [c.name for c in provider_commands(CollectOnlyProvider())]
        self.assertEqual(["collect"], names)

    def test_from_entry_points_loads_classes_and_instances(self) -> None:
        eps = [
            _EntryPoint("b_fake", FakeProvider),
            _EntryPoint("a_only", CollectOnlyProvider()),
            _EntryPoint("broken", ImportError("missing module")),
            _EntryPoint("not_provider", object()),
        ]
        with mock.patch.object(providers_mod, "entry_points", return_value=eps) as ep:
            registry = ProviderRegistry.from_entry_points()

        ep.assert_called_once_with(group=providers_mod.PROVIDER_GROUP)
        self.assertEqual(["collectonly", MIDDLEWARE], registry.middleware_names())


if __name__ == "__main__":
    unittest.main()
