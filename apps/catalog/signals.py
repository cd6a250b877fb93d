"""
Django signals for the catalog app.
Keeps the catalog signature in step with category, attribute and option edits.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Attribute, AttributeOption, Category
from .services.signature import signature_provider


@receiver(post_save, sender=Category)
@receiver(post_delete, sender=Category)
@receiver(post_save, sender=Attribute)
@receiver(post_delete, sender=Attribute)
@receiver(post_save, sender=AttributeOption)
@receiver(post_delete, sender=AttributeOption)
def invalidate_catalog_signature(sender, instance, **kwargs):
    """
    Drop the cached signature; the next search reloads it.
    """
    signature_provider.invalidate()
