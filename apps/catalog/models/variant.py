from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify
from decimal import Decimal
from imagekit.models import ProcessedImageField
from imagekit.processors import ResizeToFit


class Variant(models.Model):
    """
    Individual SKU with its own price, stock, and images.
    Each variant is a unique combination of attribute options.
    """
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    STATUS_OUT_OF_STOCK = 'OUT_OF_STOCK'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
        (STATUS_OUT_OF_STOCK, 'Out of stock'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Product'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Name',
        help_text='Custom name (generated automatically when empty)'
    )
    slug = models.SlugField(
        max_length=255,
        blank=True,
        verbose_name='Slug'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Price'
    )
    stock = models.IntegerField(
        default=0,
        verbose_name='Stock'
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
        verbose_name='Status'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    # Attribute options for this variant
    attribute_options = models.ManyToManyField(
        'catalog.AttributeOption',
        through='VariantAttribute',
        related_name='variants',
        verbose_name='Attribute options'
    )

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variant'
        verbose_name_plural = 'Variants'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self._generate_name()
        if not self.slug:
            self.slug = slugify(self.name or self.sku)
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Generate variant name from product name and attribute options."""
        if not self.pk:
            return self.sku

        assignments = self.variantattribute_set.select_related(
            'attribute', 'option'
        ).order_by('attribute__display_order')

        if not assignments.exists():
            return f"{self.product.name} - {self.sku}"

        option_strings = [a.option.get_display_value() for a in assignments]
        return f"{self.product.name} - {' / '.join(option_strings)}"

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    @property
    def is_in_stock(self):
        return self.stock > 0

    @property
    def primary_image(self):
        images = list(self.images.all())
        return images[0] if images else None

    def get_image_url(self):
        """Variant image, falling back to the product thumbnail."""
        image = self.primary_image
        if image and image.image:
            return image.image.url
        return self.product.get_thumbnail_url()


class VariantAttribute(models.Model):
    """
    Assignment of one option of an attribute to a variant.
    Ensures each variant has only one value per attribute.
    """
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        verbose_name='Variant'
    )
    attribute = models.ForeignKey(
        'catalog.Attribute',
        on_delete=models.CASCADE,
        verbose_name='Attribute'
    )
    option = models.ForeignKey(
        'catalog.AttributeOption',
        on_delete=models.CASCADE,
        verbose_name='Option'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['variant', 'attribute']
        verbose_name = 'Variant attribute'
        verbose_name_plural = 'Variant attributes'

    def __str__(self):
        return f"{self.variant.sku} - {self.option}"

    def clean(self):
        if self.option.attribute_id != self.attribute_id:
            raise ValidationError({
                'option': f"Option '{self.option.value}' does not belong to attribute '{self.attribute.name}'"
            })
        if self.attribute.category_id != self.variant.product.category_id:
            raise ValidationError({
                'attribute': f"Attribute '{self.attribute.name}' is not defined for the product category"
            })

    def save(self, *args, **kwargs):
        if not self.attribute_id and self.option_id:
            self.attribute_id = self.option.attribute_id

        # Ensure only one option per attribute per variant
        existing = VariantAttribute.objects.filter(
            variant=self.variant,
            attribute_id=self.attribute_id
        ).exclude(pk=self.pk)

        if existing.exists():
            existing.delete()

        super().save(*args, **kwargs)


class VariantImage(models.Model):
    """Ordered images for each variant; the first one is the primary image."""
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Variant'
    )
    image = ProcessedImageField(
        upload_to='variants/%Y/%m/',
        processors=[ResizeToFit(1200, 1200)],
        format='JPEG',
        options={'quality': 85},
        verbose_name='Image'
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Alt text'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    class Meta:
        ordering = ['display_order', 'id']
        verbose_name = 'Variant image'
        verbose_name_plural = 'Variant images'

    def __str__(self):
        return f"{self.variant.sku} - Image {self.display_order}"

    def save(self, *args, **kwargs):
        # Auto-generate alt text if empty
        if not self.alt_text:
            self.alt_text = str(self.variant)
        super().save(*args, **kwargs)
