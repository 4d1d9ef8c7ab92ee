from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    """Accounts are keyed by email; there is no username."""
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError(_('An email address is required'))
        user = self.model(email=self.normalize_email(email), **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if not (extra_fields['is_staff'] and extra_fields['is_superuser']):
            raise ValueError(_('A superuser needs is_staff and is_superuser'))
        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """
    Buyer, tenant or site admin. Staff accounts are the admins: they manage
    listings and are the only ones who see storage usage.
    """
    username = None
    email = models.EmailField(_('email address'), unique=True)
    phone_number = models.CharField(_('phone number'), max_length=30, blank=True, default='')
    # free text, e.g. "Baner, Pune"
    location = models.CharField(_('location'), max_length=255, blank=True, default='')

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    @property
    def role(self) -> str:
        return 'admin' if self.is_staff else 'user'

    def __str__(self):
        return self.email
