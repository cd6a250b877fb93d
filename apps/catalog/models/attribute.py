from django.db import models
from django.core.validators import RegexValidator


class Attribute(models.Model):
    """
    Attribute defined by a category and shared by all of its products.
    Examples: Color, Storage, Size
    """
    name = models.CharField(
        max_length=100,
        verbose_name='Name'
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.CASCADE,
        related_name='attributes',
        verbose_name='Category'
    )
    is_filterable = models.BooleanField(
        default=True,
        verbose_name='Filterable',
        help_text='Filterable attributes expose their options as storefront facets'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        unique_together = ['category', 'name']
        verbose_name = 'Attribute'
        verbose_name_plural = 'Attributes'

    def __str__(self):
        return f"{self.name} [{self.category.name}]"


class AttributeOption(models.Model):
    """
    Possible values for an attribute.

    Inactive options are hidden from search and facet filtering but stay
    attached to the variants that already use them.

    Examples:
        - Attribute "Color" -> Options: "Gray", "Space Gray", "Silver"
        - Attribute "Storage" -> Options: "128GB", "256GB"
    """
    hex_color_validator = RegexValidator(
        regex=r'^#[0-9A-Fa-f]{6}$',
        message='Color must use the hexadecimal format (#RRGGBB)'
    )

    attribute = models.ForeignKey(
        Attribute,
        on_delete=models.CASCADE,
        related_name='options',
        verbose_name='Attribute'
    )
    value = models.CharField(
        max_length=100,
        verbose_name='Value'
    )
    display_value = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Display value',
        help_text='Alternative label shown to customers (optional)'
    )
    color_hex = models.CharField(
        max_length=7,
        blank=True,
        validators=[hex_color_validator],
        verbose_name='Color hex',
        help_text='For color swatches (#RRGGBB)'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['display_order', 'value']
        unique_together = ['attribute', 'value']
        verbose_name = 'Attribute option'
        verbose_name_plural = 'Attribute options'

    def __str__(self):
        return f"{self.attribute.name}: {self.get_display_value()}"

    def get_display_value(self):
        return self.display_value or self.value
