from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError, IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from src.properties.exceptions import ViewRecordingError
from src.properties.factories import PropertyFactory
from src.properties.models import Property, PropertyView
from src.properties.services import view_tracking
from src.properties.services.view_tracking import (
    SessionIdentity, UserIdentity, ViewResult, identity_for, record_view, unique_viewers,
)


class RecordViewTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(email="viewer@example.com", password="x")
        self.prop = PropertyFactory()

    def _views(self):
        self.prop.refresh_from_db()
        return self.prop.views

    def test_same_session_twice_counts_once(self):
        first = record_view(self.prop.pk, SessionIdentity("s1"), ip_address="203.0.113.5")
        second = record_view(self.prop.pk, SessionIdentity("s1"), ip_address="203.0.113.5")

        self.assertEqual(first, ViewResult(is_new=True, view_count=1))
        self.assertEqual(second, ViewResult(is_new=False, view_count=1))
        self.assertEqual(self._views(), 1)
        self.assertEqual(PropertyView.objects.filter(property=self.prop).count(), 1)

    def test_same_user_twice_counts_once(self):
        identity = UserIdentity(self.user.pk)
        self.assertTrue(record_view(self.prop.pk, identity).is_new)
        self.assertFalse(record_view(self.prop.pk, identity).is_new)
        self.assertEqual(self._views(), 1)

    def test_user_and_session_are_separate_viewers(self):
        r_user = record_view(self.prop.pk, UserIdentity(self.user.pk))
        r_session = record_view(self.prop.pk, SessionIdentity("s2"))

        self.assertTrue(r_user.is_new)
        self.assertTrue(r_session.is_new)
        self.assertEqual(r_session.view_count, 2)
        self.assertEqual(self._views(), 2)
        self.assertEqual(PropertyView.objects.filter(property=self.prop).count(), 2)
        self.assertEqual(unique_viewers(self.prop.pk), 2)

    def test_deleted_user_row_leaves_unique_viewers_but_not_views(self):
        record_view(self.prop.pk, UserIdentity(self.user.pk))
        record_view(self.prop.pk, SessionIdentity("s2"))

        self.user.delete()

        self.assertEqual(PropertyView.objects.filter(property=self.prop).count(), 2)
        self.assertEqual(unique_viewers(self.prop.pk), 1)
        self.assertEqual(self._views(), 2)

    def test_no_identity_is_a_noop(self):
        result = record_view(self.prop.pk, None, ip_address="203.0.113.5")

        self.assertEqual(result, ViewResult(is_new=False, view_count=0))
        self.assertFalse(PropertyView.objects.exists())
        self.assertEqual(self._views(), 0)

    def test_repeat_view_refreshes_timestamp_and_keeps_ip(self):
        record_view(self.prop.pk, SessionIdentity("s1"), ip_address="198.51.100.1")
        row = PropertyView.objects.get(property=self.prop, session_id="s1")
        earlier = timezone.now() - timedelta(days=3)
        PropertyView.objects.filter(pk=row.pk).update(viewed_at=earlier)

        record_view(self.prop.pk, SessionIdentity("s1"), ip_address="198.51.100.99")

        row.refresh_from_db()
        self.assertGreater(row.viewed_at, earlier)
        self.assertEqual(row.ip_address, "198.51.100.1")

    def test_views_are_tracked_per_property(self):
        other = PropertyFactory()
        record_view(self.prop.pk, SessionIdentity("s1"))
        result = record_view(other.pk, SessionIdentity("s1"))

        self.assertTrue(result.is_new)
        self.assertEqual(self._views(), 1)
        other.refresh_from_db()
        self.assertEqual(other.views, 1)

    def test_lost_insert_race_is_reported_as_repeat_view(self):
        # Two requests for the same session both miss on refresh; the other one
        # commits its insert first, so ours collides on the unique constraint
        PropertyView.objects.create(property=self.prop, session_id="s1", viewed_at=timezone.now())
        Property.objects.filter(pk=self.prop.pk).update(views=1)

        with mock.patch.object(view_tracking, "_refresh_view", side_effect=[0, 1]):
            result = record_view(self.prop.pk, SessionIdentity("s1"))

        self.assertEqual(result, ViewResult(is_new=False, view_count=1))
        self.assertEqual(self._views(), 1)
        self.assertEqual(PropertyView.objects.filter(property=self.prop).count(), 1)

    def test_ledger_rejects_second_row_for_same_identity(self):
        PropertyView.objects.create(property=self.prop, user=self.user, viewed_at=timezone.now())
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                PropertyView.objects.create(property=self.prop, user=self.user, viewed_at=timezone.now())

    def test_database_failure_becomes_view_recording_error(self):
        with mock.patch.object(view_tracking, "_refresh_view", side_effect=DatabaseError("db down")):
            with self.assertRaises(ViewRecordingError):
                record_view(self.prop.pk, SessionIdentity("s1"))
        self.assertEqual(self._views(), 0)


class IdentityForTests(TestCase):
    def test_authenticated_user_wins_over_session(self):
        user = get_user_model().objects.create_user(email="u@example.com", password="x")
        self.assertEqual(identity_for(user, "s1"), UserIdentity(user.pk))

    def test_anonymous_with_session(self):
        self.assertEqual(identity_for(AnonymousUser(), " s1 "), SessionIdentity("s1"))

    def test_anonymous_without_session(self):
        self.assertIsNone(identity_for(AnonymousUser(), ""))
        self.assertIsNone(identity_for(None, None))
