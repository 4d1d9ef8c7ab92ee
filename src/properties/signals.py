# Signal handlers: clean up stored files on replace/delete and refresh the
# monthly storage ledger after any file mutation.

import logging

from django.db.models import QuerySet
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import Property, PropertyImage
from .tasks import schedule_storage_history_update

logger = logging.getLogger(__name__)


def _safe_delete_file(file_field):
    """Delete underlying file from storage if it exists."""
    try:
        if not file_field:
            return
        storage = file_field.storage
        name = file_field.name
        if name and storage.exists(name):
            storage.delete(name)
    except OSError as e:
        # Never break main flow because of FS issues
        logger.warning("could not delete stored file %s: %s", getattr(file_field, "name", ""), e)


@receiver(post_save, sender=PropertyImage)
def property_image_post_save(sender, instance: PropertyImage, created, **kwargs):
    if created or getattr(instance, "_file_replaced", False):
        instance._file_replaced = False
        schedule_storage_history_update(using=kwargs.get("using"))


@receiver(pre_save, sender=PropertyImage)
def property_image_pre_save_replace(sender, instance: PropertyImage, **kwargs):
    """
    If image file changes on update, delete the previous file from storage.
    """
    if not instance.pk:
        return
    try:
        old = PropertyImage.objects.get(pk=instance.pk)
    except PropertyImage.DoesNotExist:
        return
    if old.image and instance.image and old.image.name != instance.image.name:
        _safe_delete_file(old.image)
        instance._file_replaced = True


@receiver(post_delete, sender=PropertyImage)
def property_image_post_delete(sender, instance: PropertyImage, origin=None, **kwargs):
    """Remove file from storage when a PropertyImage row is deleted."""
    _safe_delete_file(instance.image)
    if not _cascaded_from_property(origin):
        schedule_storage_history_update(using=kwargs.get("using"))


def _cascaded_from_property(origin) -> bool:
    # cascades from a Property delete are accounted for by the property handler
    if isinstance(origin, Property):
        return True
    return isinstance(origin, QuerySet) and origin.model is Property


@receiver(pre_save, sender=Property)
def property_pre_save_brochure(sender, instance: Property, **kwargs):
    """Drop the previous brochure file when it is replaced or cleared."""
    if not instance.pk:
        instance._brochure_changed = bool(instance.brochure)
        return
    try:
        old = Property.objects.only("brochure").get(pk=instance.pk)
    except Property.DoesNotExist:
        instance._brochure_changed = bool(instance.brochure)
        return
    old_name = old.brochure.name if old.brochure else ""
    new_name = instance.brochure.name if instance.brochure else ""
    instance._brochure_changed = old_name != new_name
    if old_name and old_name != new_name:
        _safe_delete_file(old.brochure)


@receiver(post_save, sender=Property)
def property_post_save_brochure(sender, instance: Property, **kwargs):
    if getattr(instance, "_brochure_changed", False):
        instance._brochure_changed = False
        schedule_storage_history_update(using=kwargs.get("using"))


@receiver(post_delete, sender=Property)
def property_post_delete(sender, instance: Property, **kwargs):
    _safe_delete_file(instance.brochure)
    schedule_storage_history_update(using=kwargs.get("using"))
