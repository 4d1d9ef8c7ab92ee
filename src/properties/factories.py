import random
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from factory import Faker, post_generation
from factory.django import DjangoModelFactory, ImageField

from .models import Property, PropertyImage

# Rough bounding boxes for a few Indian metros: (lat_min, lat_max, lon_min, lon_max)
CITY_BBOXES = {
    "pune": (18.45, 18.62, 73.75, 73.98),
    "mumbai": (18.90, 19.27, 72.80, 72.98),
    "bengaluru": (12.85, 13.10, 77.48, 77.75),
    "hyderabad": (17.32, 17.50, 78.35, 78.55),
    "ahmedabad": (22.95, 23.10, 72.50, 72.65),
}

PROPERTY_TYPES = tuple(v for v, _ in Property.PropertyType.choices)


def rand_city() -> str:
    return random.choice(list(CITY_BBOXES.keys()))


def rand_point_in_city(city_key: str):
    lat_min, lat_max, lon_min, lon_max = CITY_BBOXES[city_key]
    lat = round(random.uniform(lat_min, lat_max), 6)
    lon = round(random.uniform(lon_min, lon_max), 6)
    return lat, lon

# ---------------------------------------------------------------------------

class UserFactory(DjangoModelFactory):
    """
    Demo user. CustomUser has no 'username' field, so we only set email & names.
    Password is hashed in @post_generation.
    """
    class Meta:
        model = get_user_model()
        django_get_or_create = ("email",)
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = Faker("first_name")
    last_name = Faker("last_name")

    @post_generation
    def password(self, create, extracted, **kwargs):
        self.set_password(extracted or "Passw0rd!")
        if create:
            self.save()


class StaffFactory(UserFactory):
    """Site admin: manages listings and sees storage usage."""
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    is_staff = True

# ---------------------------------------------------------------------------

class PropertyFactory(DjangoModelFactory):
    class Meta:
        model = Property

    # service param used across fields (NOT passed to the model)
    class Params:
        city_key = factory.LazyFunction(rand_city)

    created_by = factory.SubFactory(StaffFactory)

    title = factory.LazyAttribute(
        lambda o: f"{random.choice(['Spacious', 'Sunny', 'Modern', 'Quiet'])} "
                  f"{random.choice(['2BHK', '3BHK', 'Villa', 'Office'])} in {o.city_key.capitalize()}"
    )
    description = Faker("paragraph", nb_sentences=4)
    property_type = factory.LazyFunction(lambda: random.choice(PROPERTY_TYPES))
    price = factory.LazyFunction(lambda: Decimal(random.randrange(25, 400)) * 100000)
    city = factory.LazyAttribute(lambda o: o.city_key.capitalize())
    address = Faker("street_address")
    bedrooms = factory.LazyFunction(lambda: random.randint(1, 5))
    bathrooms = factory.LazyFunction(lambda: random.randint(1, 3))
    area_sqft = factory.LazyFunction(lambda: Decimal(random.randint(450, 3200)))

    latitude = factory.LazyAttribute(lambda o: rand_point_in_city(o.city_key)[0])
    longitude = factory.LazyAttribute(lambda o: rand_point_in_city(o.city_key)[1])


class PropertyImageFactory(DjangoModelFactory):
    """Generated placeholder image 1280x720."""
    class Meta:
        model = PropertyImage

    property = factory.SubFactory(PropertyFactory)
    image = ImageField(width=1280, height=720, format="JPEG", filename="photo.jpg")
    caption = factory.LazyFunction(lambda: random.choice(["Living room", "Kitchen", "Bedroom", "Facade"]))
