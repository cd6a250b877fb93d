"""
Catalog models for ecommerce with attribute-driven product variants.

Model Hierarchy:
- Category: Hierarchical categories (Electronics > Phones)
- Attribute: Attributes a category defines (Color, Storage)
- AttributeOption: Values for each attribute (Space Gray, 256GB)
- Product: Base product inside one category
- Variant: Individual SKU with price, stock, images and one option per attribute
"""

from .category import Category
from .attribute import Attribute, AttributeOption
from .product import Product, ProductImage
from .variant import Variant, VariantAttribute, VariantImage

__all__ = [
    'Category',
    'Attribute',
    'AttributeOption',
    'Product',
    'ProductImage',
    'Variant',
    'VariantAttribute',
    'VariantImage',
]
