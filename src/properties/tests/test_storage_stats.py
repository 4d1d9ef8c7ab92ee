import os
from decimal import Decimal
from tempfile import TemporaryDirectory

from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage
from django.test import SimpleTestCase, override_settings

from src.properties.exceptions import StorageProviderError
from src.properties.services.storage import (
    DjangoStorageProvider, StoredObject, classify, collect_storage_stats, get_storage_provider,
)

from .fakes import BROKEN_PROVIDER, FAKE_PROVIDER, MB, BrokenStorageProvider, FakeStorageProvider, scenario_objects


class ClassifyTests(SimpleTestCase):
    def test_extensions_are_case_insensitive(self):
        self.assertEqual(classify("properties/images/a.JPG"), "images")
        self.assertEqual(classify("properties/images/a.webp"), "images")
        self.assertEqual(classify("properties/brochures/x.Pdf"), "brochures")

    def test_unknown_extension_is_unclassified(self):
        self.assertIsNone(classify("properties/misc/notes.txt"))
        self.assertIsNone(classify("properties/images/pdf"))


@override_settings(PROPERTIES_STORAGE_PROVIDER=FAKE_PROVIDER, PROPERTIES_STORAGE_QUOTA_GB=5)
class CollectStorageStatsTests(SimpleTestCase):
    def setUp(self):
        FakeStorageProvider.objects = scenario_objects()
        self.addCleanup(setattr, FakeStorageProvider, "objects", [])

    def test_snapshot_groups_by_type(self):
        stats = collect_storage_stats()

        self.assertEqual(stats.total_files, 12)
        self.assertEqual(stats.total_size_mb, Decimal("340.50"))
        self.assertEqual(stats.images.count, 10)
        self.assertEqual(stats.images.size_mb, Decimal("300.50"))
        self.assertEqual(stats.brochures.count, 2)
        self.assertEqual(stats.brochures.size_mb, Decimal("40.00"))

    def test_quota_figures(self):
        stats = collect_storage_stats()

        self.assertEqual(stats.quota_gb, 5)
        self.assertEqual(stats.total_size_gb, Decimal("0.33"))
        self.assertEqual(stats.usage_percentage, Decimal("6.65"))
        self.assertEqual(stats.remaining_gb, Decimal("4.67"))
        self.assertEqual([t.type for t in stats.files_by_type], ["images", "brochures"])

    def test_other_files_only_count_towards_totals(self):
        FakeStorageProvider.objects = [
            StoredObject("properties/images/a.png", 2 * MB),
            StoredObject("properties/exports/list.csv", MB),
        ]
        stats = collect_storage_stats()

        self.assertEqual(stats.total_files, 2)
        self.assertEqual(stats.total_size_mb, Decimal("3.00"))
        self.assertEqual(stats.images.count, 1)
        self.assertEqual(stats.brochures.count, 0)

    def test_objects_outside_prefix_are_ignored(self):
        FakeStorageProvider.objects = [
            StoredObject("properties/images/a.jpg", MB),
            StoredObject("avatars/me.jpg", 5 * MB),
        ]
        stats = collect_storage_stats()
        self.assertEqual(stats.total_files, 1)

    def test_empty_bucket(self):
        FakeStorageProvider.objects = []
        stats = collect_storage_stats()

        self.assertEqual(stats.total_files, 0)
        self.assertEqual(stats.total_size_mb, Decimal("0.00"))
        self.assertEqual(stats.usage_percentage, Decimal("0.00"))

    def test_explicit_provider_wins_over_setting(self):
        with self.assertRaises(StorageProviderError):
            collect_storage_stats(BrokenStorageProvider())

    @override_settings(PROPERTIES_STORAGE_PROVIDER=BROKEN_PROVIDER)
    def test_provider_failure_is_wrapped(self):
        with self.assertRaises(StorageProviderError) as ctx:
            collect_storage_stats()
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)


class DjangoStorageProviderTests(SimpleTestCase):
    def setUp(self):
        self.tmpdir = TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.storage = FileSystemStorage(location=self.tmpdir.name)

    def test_walks_nested_directories_under_prefix(self):
        self.storage.save("properties/images/2024/06/01/a.jpg", ContentFile(b"x" * 10))
        self.storage.save("properties/brochures/2024/06/b.pdf", ContentFile(b"y" * 20))
        self.storage.save("avatars/c.png", ContentFile(b"z" * 30))

        found = DjangoStorageProvider(self.storage).list_objects("properties/")

        self.assertEqual(
            sorted((o.name, o.size) for o in found),
            [("properties/brochures/2024/06/b.pdf", 20), ("properties/images/2024/06/01/a.jpg", 10)],
        )

    def test_missing_prefix_lists_nothing(self):
        self.assertFalse(os.path.exists(os.path.join(self.tmpdir.name, "properties")))
        self.assertEqual(DjangoStorageProvider(self.storage).list_objects("properties/"), [])

    def test_default_provider_from_settings(self):
        self.assertIsInstance(get_storage_provider(), DjangoStorageProvider)
