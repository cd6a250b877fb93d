from django.db import models
from django.utils.text import slugify


class Category(models.Model):
    """
    Hierarchical product categories.
    Examples: Electronics > Phones > Smartphones
    """
    name = models.CharField(
        max_length=200,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=200,
        unique=True,
        verbose_name='Slug'
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name='Parent category'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
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
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'
        constraints = [
            models.UniqueConstraint(
                fields=['parent', 'name'],
                name='catalog_category_unique_name_per_parent',
            ),
        ]

    def __str__(self):
        return self.full_path

    @property
    def full_path(self):
        """Category names from the root down, e.g. "Electronics > Phone"."""
        return ' > '.join(c.name for c in [*self.get_ancestors(), self])

    def get_ancestors(self):
        """Ancestors ordered root first, immediate parent last."""
        chain = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def get_descendants(self):
        """Children, grandchildren and so on, depth first in catalog order."""
        result = []
        pending = list(self.children.all())
        while pending:
            node = pending.pop(0)
            result.append(node)
            pending[:0] = list(node.children.all())
        return result

    @property
    def level(self):
        """0 for root categories."""
        return len(self.get_ancestors())

    def _unique_slug(self):
        base = slugify(self.name)
        taken = set(
            Category.objects.filter(slug__startswith=base)
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
