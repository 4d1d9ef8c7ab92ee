import random

from django.core.management.base import BaseCommand
from django.db import transaction

from src.properties.factories import StaffFactory, PropertyFactory, PropertyImageFactory
from src.properties.models import Property


class Command(BaseCommand):
    """
    Seed the database with demo listings:
    - staff users (password: Passw0rd!)
    - properties spread over a few metros with map pins
    - 1-3 generated photos per property

    The storage ledger is refreshed once per commit by the upload signals.
    """

    help = "Seed the DB with demo properties and photos."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
        parser.add_argument("--wipe", action="store_true", help="Delete all properties before seeding.")
        parser.add_argument("--admins", type=int, default=2, help="How many staff users to create.")
        parser.add_argument("--properties", type=int, default=30, help="How many properties to create.")
        parser.add_argument("--images-max", type=int, default=3, help="Max photos per property.")

    @transaction.atomic
    def handle(self, *args, **opts):
        if opts["seed"] is not None:
            random.seed(opts["seed"])

        if opts["wipe"]:
            self.stdout.write(self.style.WARNING("Wiping all properties..."))
            for prop in Property.objects.all():
                prop.delete()

        admins = [StaffFactory() for _ in range(opts["admins"])]

        images = 0
        for _ in range(opts["properties"]):
            prop = PropertyFactory(created_by=random.choice(admins))
            for _ in range(random.randint(1, max(1, opts["images_max"]))):
                PropertyImageFactory(property=prop)
                images += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(admins)} admins, {opts['properties']} properties, {images} photos. "
                f"Default password: Passw0rd!"
            )
        )
