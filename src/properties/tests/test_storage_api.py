from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from src.properties.models import StorageHistoryRecord
from src.properties.services.storage_history import month_key

from .fakes import BROKEN_PROVIDER, FAKE_PROVIDER, FakeStorageProvider, scenario_objects


@override_settings(PROPERTIES_STORAGE_PROVIDER=FAKE_PROVIDER)
class StorageStatsApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        User = get_user_model()
        cls.staff = User.objects.create_user(email="admin@example.com", password="x", is_staff=True)
        cls.user = User.objects.create_user(email="user@example.com", password="x")

    def setUp(self):
        FakeStorageProvider.objects = scenario_objects()
        self.addCleanup(setattr, FakeStorageProvider, "objects", [])
        self.url = reverse("properties:property-storage-stats")

    def test_anonymous_unauthorized(self):
        self.assertEqual(self.client.get(self.url).status_code, 401)

    def test_regular_user_forbidden(self):
        self.client.force_authenticate(self.user)
        self.assertEqual(self.client.get(self.url).status_code, 403)
        self.assertFalse(StorageHistoryRecord.objects.exists())

    def test_staff_gets_stats_and_current_month_record(self):
        self.client.force_authenticate(self.staff)
        r = self.client.get(self.url)

        self.assertEqual(r.status_code, 200)
        stats = r.data["stats"]
        self.assertEqual(stats["total_files"], 12)
        self.assertEqual(stats["total_size_mb"], Decimal("340.50"))
        self.assertEqual(stats["quota_gb"], 5)
        self.assertEqual(stats["usage_percentage"], Decimal("6.65"))
        by_type = {row["type"]: row for row in stats["files_by_type"]}
        self.assertEqual(by_type["images"]["count"], 10)
        self.assertEqual(by_type["brochures"]["size_mb"], Decimal("40.00"))

        self.assertEqual(r.data["history"]["record_month"], month_key())
        self.assertEqual(StorageHistoryRecord.objects.get().total_files, 12)

    @override_settings(PROPERTIES_STORAGE_PROVIDER=BROKEN_PROVIDER)
    def test_provider_failure_is_502(self):
        self.client.force_authenticate(self.staff)
        r = self.client.get(self.url)

        self.assertEqual(r.status_code, 502)
        self.assertEqual(r.data, {"detail": "Error fetching storage statistics"})
        self.assertFalse(StorageHistoryRecord.objects.exists())


class StorageHistoryApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.staff = get_user_model().objects.create_user(email="admin@example.com", password="x", is_staff=True)
        current = month_key()
        StorageHistoryRecord.objects.create(record_month=current, total_files=3)
        StorageHistoryRecord.objects.create(record_month="1999-01", total_files=1)

    def setUp(self):
        self.url = reverse("properties:property-storage-history")

    def test_staff_only(self):
        self.assertEqual(self.client.get(self.url).status_code, 401)

    def test_lists_trailing_months(self):
        self.client.force_authenticate(self.staff)
        r = self.client.get(self.url, {"months": 3})

        self.assertEqual(r.status_code, 200)
        self.assertEqual([row["record_month"] for row in r.data], [month_key()])
        self.assertEqual(r.data[0]["total_files"], 3)

    def test_months_must_be_integer(self):
        self.client.force_authenticate(self.staff)
        r = self.client.get(self.url, {"months": "many"})
        self.assertEqual(r.status_code, 400)
