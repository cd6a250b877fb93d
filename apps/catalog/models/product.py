from django.db import models
from django.core.validators import MinValueValidator
from django.utils.text import slugify
from decimal import Decimal
from imagekit.models import ProcessedImageField
from imagekit.processors import ResizeToFit


class Product(models.Model):
    """
    Base product model.
    Example: "iPhone 15" which has multiple variants (color x storage).
    """
    STATUS_DRAFT = 'DRAFT'
    STATUS_PUBLISHED = 'PUBLISHED'
    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_PUBLISHED, 'Published'),
    ]

    name = models.CharField(
        max_length=255,
        verbose_name='Name'
    )
    # Older rows were imported without a slug; search skips them.
    slug = models.SlugField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    brand = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Brand'
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.PROTECT,
        related_name='products',
        verbose_name='Category'
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Base price'
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        verbose_name='Status'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    class Meta:
        ordering = ['name']
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return self.name

    def _unique_slug(self):
        base = slugify(self.name)
        taken = set(
            Product.objects.filter(slug__startswith=base)
            .exclude(pk=self.pk)
            .values_list('slug', flat=True)
        )
        slug, counter = base, 1
        while slug in taken:
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED

    @property
    def thumbnail(self):
        """The image flagged as thumbnail, else the first image."""
        images = list(self.images.all())
        for image in images:
            if image.is_thumbnail:
                return image
        return images[0] if images else None

    def get_thumbnail_url(self):
        thumbnail = self.thumbnail
        if thumbnail and thumbnail.image:
            return thumbnail.image.url
        return None


class ProductImage(models.Model):
    """Product-level images, used when a variant has none of its own."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Product'
    )
    image = ProcessedImageField(
        upload_to='products/%Y/%m/',
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
    is_thumbnail = models.BooleanField(
        default=False,
        verbose_name='Thumbnail'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    class Meta:
        ordering = ['display_order', 'id']
        verbose_name = 'Product image'
        verbose_name_plural = 'Product images'

    def __str__(self):
        return f"{self.product.name} - Image {self.display_order}"
