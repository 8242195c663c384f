"""
Content Module

Persona-keyed content variants and persona-aware page assembly.
"""

from .variants import (
    VariantRegistry,
    VariantConfig,
    VariantTableName,
    HeroVariant,
    PromotionalCTA,
    NavigationOverride,
    CallToAction,
    ARCO_VARIANTS,
    default_registry,
)
from .assembly import ContentAssembler, PageType, coerce_page_type, compose_page

__all__ = [
    # Variants
    'VariantRegistry',
    'VariantConfig',
    'VariantTableName',
    'HeroVariant',
    'PromotionalCTA',
    'NavigationOverride',
    'CallToAction',
    'ARCO_VARIANTS',
    'default_registry',

    # Assembly
    'ContentAssembler',
    'PageType',
    'coerce_page_type',
    'compose_page',
]
