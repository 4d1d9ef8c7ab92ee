from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APITestCase

from src.properties.factories import PropertyFactory
from src.properties.models import Property
from src.properties.throttling import PropertyViewThrottle


class PropertyCrudTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        User = get_user_model()
        cls.staff = User.objects.create_user(email="admin@example.com", password="x", is_staff=True)
        cls.user = User.objects.create_user(email="user@example.com", password="x")

    def payload(self, **overrides):
        data = {
            "title": "Sunny 2BHK near the park",
            "price": "7500000.00",
            "city": "Pune",
            "property_type": "apartment",
            "listing_type": "sale",
            "bedrooms": 2,
        }
        data.update(overrides)
        return data

    def test_staff_creates_property_as_creator(self):
        self.client.force_authenticate(self.staff)
        r = self.client.post(reverse("properties:property-list"), self.payload(), format="json")

        self.assertEqual(r.status_code, 201, r.data)
        prop = Property.objects.get(pk=r.data["id"])
        self.assertEqual(prop.created_by, self.staff)
        self.assertEqual(prop.views, 0)

    def test_views_counter_is_read_only(self):
        self.client.force_authenticate(self.staff)
        r = self.client.post(reverse("properties:property-list"), self.payload(views=500), format="json")
        self.assertEqual(r.status_code, 201)
        self.assertEqual(Property.objects.get(pk=r.data["id"]).views, 0)

    def test_regular_user_cannot_create(self):
        self.client.force_authenticate(self.user)
        r = self.client.post(reverse("properties:property-list"), self.payload(), format="json")
        self.assertEqual(r.status_code, 403)

    def test_negative_price_rejected(self):
        self.client.force_authenticate(self.staff)
        r = self.client.post(reverse("properties:property-list"), self.payload(price="-1"), format="json")
        self.assertEqual(r.status_code, 400)
        self.assertIn("price", r.data)


class PropertyListFilterTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.cheap = PropertyFactory(title="Cosy studio", city_key="pune", price=Decimal("2500000"), bedrooms=1)
        cls.mid = PropertyFactory(title="Family flat", city_key="mumbai", price=Decimal("9000000"), bedrooms=3)
        cls.top = PropertyFactory(title="Sea view villa", city_key="mumbai", price=Decimal("40000000"),
                                  bedrooms=5, is_featured=True)

    def ids(self, **params):
        r = self.client.get(reverse("properties:property-list"), params)
        self.assertEqual(r.status_code, 200)
        return {row["id"] for row in r.data["results"]}

    def test_price_range(self):
        self.assertEqual(self.ids(price_min=3000000, price_max=10000000), {self.mid.id})

    def test_city_and_bedrooms(self):
        self.assertEqual(self.ids(city="mumbai", bedrooms_min=4), {self.top.id})

    def test_featured_and_search(self):
        self.assertEqual(self.ids(is_featured="true"), {self.top.id})
        self.assertEqual(self.ids(q="studio"), {self.cheap.id})

    def test_ordering_by_views(self):
        Property.objects.filter(pk=self.mid.pk).update(views=7)
        r = self.client.get(reverse("properties:property-list"), {"ordering": "-views"})
        self.assertEqual(r.data["results"][0]["id"], self.mid.id)


class RecordViewThrottleTests(APITestCase):
    def test_anonymous_sessions_have_separate_buckets(self):
        prop = PropertyFactory()
        url = reverse("properties:property-record-view", args=[prop.pk])

        rates = {"property_view": "2/min"}
        with mock.patch.object(PropertyViewThrottle, "THROTTLE_RATES", rates):
            r1 = self.client.post(url, {"sessionId": "a"}, format="json")
            r2 = self.client.post(url, {"sessionId": "a"}, format="json")
            r3 = self.client.post(url, {"sessionId": "a"}, format="json")
            r4 = self.client.post(url, {"sessionId": "b"}, format="json")

        self.assertEqual([r1.status_code, r2.status_code, r3.status_code], [200, 200, 429])
        self.assertEqual(r4.status_code, 200)
