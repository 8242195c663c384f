"""
Page Assembly

Composes a page's data object from its base content and the visitor's
persona:
1. Resolve the effective persona (explicit tag, else the persona store)
2. Overlay variants or persona overrides according to the page type
3. Stamp the resolved persona and assembly time

Assembly never fails. A visitor with no persona, an unknown tag and an
unknown page type all fall back to default content.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from arcopersona.config import settings
from arcopersona.personas.store import PersonaStore
from arcopersona.personas.taxonomy import PersonaTag, coerce_persona
from .variants import VariantRegistry, default_registry

logger = logging.getLogger(__name__)

PERSONA_KEY = '_persona'
ASSEMBLED_AT_KEY = '_assembled_at'
PERSONA_OVERRIDES_KEY = 'persona_overrides'


class PageType(str, Enum):
    HOMEPAGE = 'homepage'
    PRODUCT_DETAIL = 'product-detail'
    GUIDE = 'guide'
    ARTICLE = 'article'
    EXPERIENCE = 'experience'
    TOOL = 'tool'
    BUNDLE = 'bundle'


# Names used by older page templates
PAGE_TYPE_ALIASES = {
    'pdp': PageType.PRODUCT_DETAIL,
    'blog': PageType.ARTICLE,
}


def coerce_page_type(value: Union[PageType, str, None]) -> Optional[PageType]:
    """Closed page type for a free-form name, None if unrecognised."""
    if value is None or isinstance(value, PageType):
        return value
    if value in PAGE_TYPE_ALIASES:
        return PAGE_TYPE_ALIASES[value]
    try:
        return PageType(value)
    except ValueError:
        return None


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContentAssembler:
    """
    Persona-aware page composition.

    Args:
        registry: Variant tables used for the homepage
        store: Persona store consulted when no explicit persona is given
        clock: Returns the assembly timestamp string
        product_limit: Products placed on the homepage
        article_limit: Articles placed on the homepage
    """

    def __init__(
        self,
        registry: VariantRegistry = None,
        store: Optional[PersonaStore] = None,
        clock: Callable[[], str] = utc_timestamp,
        product_limit: int = None,
        article_limit: int = None
    ):
        self.registry = registry or default_registry()
        self.store = store
        self.clock = clock
        self.product_limit = settings.homepage_product_limit if product_limit is None else product_limit
        self.article_limit = settings.homepage_article_limit if article_limit is None else article_limit

    def resolve_persona(self, tag: Union[PersonaTag, str, None]) -> Optional[PersonaTag]:
        """
        Effective persona for one assembly.

        A non-empty explicit tag always wins, even when it is not a declared
        persona (it then resolves to None). None or "" means no tag was
        given, and the store is read.
        """
        if tag:
            return coerce_persona(tag)
        if self.store is not None:
            return self.store.read()
        return None

    def compose(
        self,
        page_type: Union[PageType, str],
        tag: Union[PersonaTag, str, None],
        base_content: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """
        Assemble page data.

        Args:
            page_type: Page type name (unknown names get no personalisation)
            tag: Explicit persona, or None to use the persona store
            base_content: Base page data; never mutated

        Returns:
            Shallow copy of base_content with persona content applied,
            plus _persona and _assembled_at
        """
        persona = self.resolve_persona(tag)
        resolved_type = coerce_page_type(page_type)
        assembled = dict(base_content or {})

        if resolved_type is PageType.HOMEPAGE:
            self._apply_homepage_variants(assembled, persona)
        elif resolved_type is PageType.PRODUCT_DETAIL:
            self._apply_persona_overrides(assembled, persona)

        assembled[PERSONA_KEY] = persona.value if persona else None
        assembled[ASSEMBLED_AT_KEY] = self.clock()

        logger.debug(
            "Assembled page_type=%s persona=%s",
            resolved_type.value if resolved_type else page_type,
            assembled[PERSONA_KEY],
        )
        return assembled

    def _apply_homepage_variants(self, assembled: Dict[str, Any], persona: Optional[PersonaTag]):
        assembled['hero'] = self.registry.hero(persona)
        assembled['products'] = self.registry.products(persona, self.product_limit)
        assembled['article_feed'] = self.registry.article_feed(persona, self.article_limit)
        assembled['promotional_cta'] = self.registry.promotional_cta(persona)
        assembled['nav_override'] = self.registry.navigation(persona)

    def _apply_persona_overrides(self, assembled: Dict[str, Any], persona: Optional[PersonaTag]):
        if persona is None:
            return
        overrides = assembled.get(PERSONA_OVERRIDES_KEY)
        if not isinstance(overrides, Mapping):
            return
        override = overrides.get(persona.value)
        if isinstance(override, Mapping):
            # Shallow: nested values are replaced, not merged
            assembled.update(override)


def compose_page(
    page_type: Union[PageType, str],
    tag: Union[PersonaTag, str, None],
    base_content: Mapping[str, Any],
    store: Optional[PersonaStore] = None
) -> Dict[str, Any]:
    """Compose with the default registry."""
    return ContentAssembler(store=store).compose(page_type, tag, base_content)
