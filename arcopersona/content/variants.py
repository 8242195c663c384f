"""
Content Variants Module

Persona-keyed content tables used to personalise pages:
    - hero: headline, subtext and call to action
    - products: ordered product recommendations
    - article_feed: ordered article slugs
    - promotional_cta: experience call-to-action block
    - navigation: promoted/demoted navigation links

Every table carries its own default entry, so a lookup always resolves.
Tables never reference each other.
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar, Union

from arcopersona.personas.taxonomy import PersonaTag, coerce_persona

T = TypeVar('T')


class VariantTableName(str, Enum):
    HERO = 'hero'
    PRODUCTS = 'products'
    ARTICLE_FEED = 'article_feed'
    PROMOTIONAL_CTA = 'promotional_cta'
    NAVIGATION = 'navigation'


LIST_TABLES = frozenset({VariantTableName.PRODUCTS, VariantTableName.ARTICLE_FEED})


@dataclass(frozen=True)
class CallToAction:
    label: str
    url: str


@dataclass(frozen=True)
class HeroVariant:
    """Hero block copy."""
    headline: str
    subtext: str
    cta: CallToAction
    image_alt: str


@dataclass(frozen=True)
class PromotionalCTA:
    """Experience call-to-action block."""
    archetype: str
    headline: str
    body: str
    cta: CallToAction
    image_alt: str


@dataclass(frozen=True)
class NavigationOverride:
    """Navigation emphasis: links to promote, links to demote, optional nav CTA."""
    promote: Tuple[str, ...] = ()
    demote: Tuple[str, ...] = ()
    cta: Optional[CallToAction] = None


class VariantTable(Generic[T]):
    """Immutable persona -> entry table with a guaranteed default."""

    def __init__(self, name: VariantTableName, default: T, entries: Mapping[PersonaTag, T]):
        self.name = name
        self.default = default
        self.entries = MappingProxyType(dict(entries))

    def get(self, tag: Union[PersonaTag, str, None]) -> T:
        persona = coerce_persona(tag)
        if persona is None:
            return self.default
        return self.entries.get(persona, self.default)

    def __contains__(self, tag) -> bool:
        return coerce_persona(tag) in self.entries


class ListVariantTable(VariantTable[Tuple[str, ...]]):
    """Table of ordered lists; lookups take a limit."""

    def get_list(self, tag: Union[PersonaTag, str, None], limit: Optional[int] = None) -> List[str]:
        items = self.get(tag)
        if limit is None:
            return list(items)
        if limit <= 0:
            return []
        return list(items[:limit])


@dataclass(frozen=True)
class VariantConfig:
    """Authored content for all five tables."""
    hero_default: HeroVariant
    hero: Mapping[PersonaTag, HeroVariant]
    products_default: Tuple[str, ...]
    products: Mapping[PersonaTag, Tuple[str, ...]]
    article_feed_default: Tuple[str, ...]
    article_feed: Mapping[PersonaTag, Tuple[str, ...]]
    promotional_cta_default: PromotionalCTA
    promotional_cta: Mapping[PersonaTag, PromotionalCTA]
    navigation_default: NavigationOverride = field(default_factory=NavigationOverride)
    navigation: Mapping[PersonaTag, NavigationOverride] = field(default_factory=dict)


class VariantRegistry:
    """
    Lookup over the five content tables.

    get() returns the table entry as plain data (dicts and lists), freshly
    built on every call so callers may mutate what they receive.
    """

    def __init__(self, config: VariantConfig):
        self.tables: Dict[VariantTableName, VariantTable] = {
            VariantTableName.HERO: VariantTable(
                VariantTableName.HERO, config.hero_default, config.hero),
            VariantTableName.PRODUCTS: ListVariantTable(
                VariantTableName.PRODUCTS, tuple(config.products_default),
                {k: tuple(v) for k, v in config.products.items()}),
            VariantTableName.ARTICLE_FEED: ListVariantTable(
                VariantTableName.ARTICLE_FEED, tuple(config.article_feed_default),
                {k: tuple(v) for k, v in config.article_feed.items()}),
            VariantTableName.PROMOTIONAL_CTA: VariantTable(
                VariantTableName.PROMOTIONAL_CTA, config.promotional_cta_default, config.promotional_cta),
            VariantTableName.NAVIGATION: VariantTable(
                VariantTableName.NAVIGATION, config.navigation_default, config.navigation),
        }

    def table(self, name: Union[VariantTableName, str]) -> VariantTable:
        """
        Raises:
            KeyError: If name is not one of the five tables
        """
        try:
            return self.tables[VariantTableName(name)]
        except ValueError:
            raise KeyError(name) from None

    def get(self, table: Union[VariantTableName, str], tag: Union[PersonaTag, str, None] = None,
            limit: Optional[int] = None) -> Any:
        """
        Entry for a persona, or the table default.

        Args:
            table: Table name
            tag: Persona tag; None or an unknown tag selects the default
            limit: For list tables, maximum number of items (<= 0 gives [])
        """
        variant_table = self.table(table)
        if isinstance(variant_table, ListVariantTable):
            return variant_table.get_list(tag, limit)
        return _to_data(variant_table.get(tag))

    def hero(self, tag=None) -> Dict[str, Any]:
        return self.get(VariantTableName.HERO, tag)

    def products(self, tag=None, limit: int = 3) -> List[str]:
        return self.get(VariantTableName.PRODUCTS, tag, limit)

    def article_feed(self, tag=None, limit: int = 3) -> List[str]:
        return self.get(VariantTableName.ARTICLE_FEED, tag, limit)

    def promotional_cta(self, tag=None) -> Dict[str, Any]:
        return self.get(VariantTableName.PROMOTIONAL_CTA, tag)

    def navigation(self, tag=None) -> Dict[str, Any]:
        return self.get(VariantTableName.NAVIGATION, tag)


def _to_data(entry) -> Dict[str, Any]:
    data = asdict(entry)
    # asdict keeps tuples as tuples
    return {key: list(value) if isinstance(value, tuple) else value for key, value in data.items()}


# ---------------------------------------------------------------------------
# Authored Arco content
# ---------------------------------------------------------------------------

HERO_DEFAULT = HeroVariant(
    headline="Precision Brewing, Beautiful Design",
    subtext="Arco crafts espresso machines and grinders for people who care about every detail, from bean to cup.",
    cta=CallToAction("Explore Machines", "/products/espresso-machines"),
    image_alt="Arco espresso machine brewing a perfect shot on a sunlit kitchen counter",
)

HERO_VARIANTS = {
    PersonaTag.MORNING_MINIMALIST: HeroVariant(
        headline="One perfect cup. Every morning.",
        subtext=(
            "The Arco Primo is built for people who want quality without complexity. "
            "Heat up in 90 seconds, pull a beautiful shot, and start your day."
        ),
        cta=CallToAction("Meet the Primo", "/products/pdp-canonical/arco-primo"),
        image_alt="A calm kitchen counter at dawn with a single espresso in a white ceramic cup next to the Arco Primo",
    ),
    PersonaTag.UPGRADER: HeroVariant(
        headline="Ready for the real thing.",
        subtext=(
            "You've outgrown your first machine. The Arco Doppio gives you dual-boiler "
            "precision without the learning cliff."
        ),
        cta=CallToAction("Compare Machines", "/products/comparison/arco-primo-vs-arco-doppio"),
        image_alt="The Arco Doppio on a modern kitchen counter with a fresh double shot, steam wand in action",
    ),
    PersonaTag.CRAFT_BARISTA: HeroVariant(
        headline="Built for the obsessed.",
        subtext=(
            "The Arco Studio Pro puts pressure profiling, PID temperature control, and "
            "competition-grade build quality on your counter."
        ),
        cta=CallToAction("Explore Studio Pro", "/products/pdp-canonical/arco-studio-pro"),
        image_alt="Close-up of the Arco Studio Pro pressure gauge and portafilter with a perfectly extracted shot flowing",
    ),
    PersonaTag.TRAVELLER: HeroVariant(
        headline="Espresso, everywhere.",
        subtext=(
            "The Arco Viaggio weighs 340g and pulls genuine espresso from a mountain ledge, "
            "a hotel room, or a campervan."
        ),
        cta=CallToAction("Meet the Viaggio", "/products/pdp-canonical/arco-viaggio"),
        image_alt="The Arco Viaggio portable espresso maker on a granite rock with mountain peaks in soft focus behind",
    ),
    PersonaTag.NON_BARISTA: HeroVariant(
        headline="Great coffee. No barista required.",
        subtext=(
            "The Arco Automatico grinds, tamps, and brews with one touch. Specialty-grade "
            "espresso without the learning curve."
        ),
        cta=CallToAction("See the Automatico", "/products/pdp-canonical/arco-automatico"),
        image_alt="The Arco Automatico with a freshly brewed espresso, simple one-button interface visible",
    ),
    PersonaTag.OFFICE_MANAGER: HeroVariant(
        headline="Office coffee that people actually look forward to.",
        subtext=(
            "The Arco Ufficio is built for teams: high-volume, easy to maintain, and pays "
            "for itself in under six months."
        ),
        cta=CallToAction("Calculate Savings", "/tools/calculators/capsule-to-bean-cost-comparison"),
        image_alt="The Arco Ufficio in a bright modern office kitchen with multiple cups ready to serve",
    ),
}

PRODUCTS_DEFAULT = ('arco-primo', 'arco-doppio', 'arco-studio', 'arco-macinino', 'arco-preciso', 'arco-zero')

PRODUCT_RECOMMENDATIONS = {
    PersonaTag.MORNING_MINIMALIST: (
        'arco-nano', 'arco-primo', 'arco-macinino', 'arco-filtro', 'arco-doppio', 'arco-preciso'),
    PersonaTag.UPGRADER: (
        'arco-doppio', 'arco-studio', 'arco-preciso', 'arco-primo', 'arco-macinino', 'arco-zero'),
    PersonaTag.CRAFT_BARISTA: (
        'arco-studio-pro', 'arco-zero', 'arco-studio', 'arco-preciso', 'arco-filtro', 'arco-doppio'),
    PersonaTag.TRAVELLER: (
        'arco-viaggio', 'arco-nano', 'arco-macinino', 'arco-primo', 'arco-filtro', 'arco-doppio'),
    PersonaTag.NON_BARISTA: (
        'arco-automatico', 'arco-nano', 'arco-primo', 'arco-macinino', 'arco-doppio', 'arco-preciso'),
    PersonaTag.OFFICE_MANAGER: (
        'arco-ufficio', 'arco-doppio', 'arco-preciso', 'arco-studio', 'arco-automatico', 'arco-macinino'),
}

ARTICLE_FEED_DEFAULT = (
    'why-your-grinder-matters-more-than-your-machine',
    'a-visit-to-our-workshop',
    'the-architect-who-built-a-coffee-corner',
)

ARTICLE_FEEDS = {
    PersonaTag.MORNING_MINIMALIST: (
        '10-most-common-beginner-mistakes',
        'how-to-dial-in-espresso-in-under-10-minutes',
        'how-to-store-beans-properly',
    ),
    PersonaTag.UPGRADER: (
        'why-your-grinder-matters-more-than-your-machine',
        'pre-infusion-what-it-is-and-why-arco-uses-it',
        'how-to-clean-a-group-head',
    ),
    PersonaTag.CRAFT_BARISTA: (
        'why-arco-chose-brass-for-the-studio-boiler',
        'blind-tasting-your-espresso',
        'calibrating-a-burr-grinder',
    ),
    PersonaTag.TRAVELLER: (
        'the-van-lifer-and-the-viaggio',
        'espresso-bars-worth-visiting-in-milan',
        'altitude-and-espresso',
    ),
    PersonaTag.NON_BARISTA: (
        '10-most-common-beginner-mistakes',
        'descaling-step-by-step',
        'how-to-store-beans-properly',
    ),
    PersonaTag.OFFICE_MANAGER: (
        'the-startup-office-upgrade',
        'descaling-step-by-step',
        'coffee-certifications-explained',
    ),
}

PROMOTIONAL_CTA_DEFAULT = PromotionalCTA(
    archetype="Discover Your Style",
    headline="Not sure where to start?",
    body="Take our 30-second quiz and we'll match you with the right setup.",
    cta=CallToAction("Find Your Brew Style", "/experiences/core/morning-minimalist"),
    image_alt="A warm kitchen scene with multiple Arco machines arranged from simple to advanced",
)

PROMOTIONAL_CTAS = {
    PersonaTag.MORNING_MINIMALIST: PromotionalCTA(
        archetype="The Morning Minimalist",
        headline="Your morning, simplified.",
        body="Everything you need for a calm, quality-first start to the day.",
        cta=CallToAction("See Your Setup", "/experiences/core/morning-minimalist"),
        image_alt="A calm sunrise kitchen with a single espresso and the Arco Primo",
    ),
    PersonaTag.UPGRADER: PromotionalCTA(
        archetype="The Upgrade Path",
        headline="Ready for the next level?",
        body="See what a real upgrade looks like and what it means for your daily cup.",
        cta=CallToAction("Explore Upgrades", "/experiences/core/the-upgrade-path"),
        image_alt="Side by side comparison of entry-level and mid-range Arco equipment",
    ),
    PersonaTag.CRAFT_BARISTA: PromotionalCTA(
        archetype="Craft at Home",
        headline="The home setup you deserve.",
        body="Professional-grade equipment, pro-level technique guides, zero compromises.",
        cta=CallToAction("Build Your Station", "/experiences/core/craft-at-home"),
        image_alt="A dedicated coffee corner with the Arco Studio Pro, Zero grinder, and full accessories",
    ),
    PersonaTag.TRAVELLER: PromotionalCTA(
        archetype="Espresso Anywhere",
        headline="Your coffee, wherever you go.",
        body="Compact gear, travel guides, and the freedom to brew anywhere on earth.",
        cta=CallToAction("Pack Your Kit", "/experiences/core/espresso-anywhere"),
        image_alt="The Arco Viaggio on a wooden table overlooking a mountain landscape",
    ),
    PersonaTag.NON_BARISTA: PromotionalCTA(
        archetype="The Non-Barista",
        headline="No skills required.",
        body="Specialty-grade coffee with one button press. Welcome to the easy life.",
        cta=CallToAction("See How Easy It Is", "/experiences/core/the-non-barista"),
        image_alt="A person pressing a single button on the Arco Automatico with a perfect espresso appearing",
    ),
    PersonaTag.OFFICE_MANAGER: PromotionalCTA(
        archetype="Office Solutions",
        headline="Coffee that runs itself.",
        body="High-volume, low-maintenance equipment that your entire team will thank you for.",
        cta=CallToAction("Office Setup Guide", "/bundles/persona-kits/upgrader-kit"),
        image_alt="The Arco Ufficio in a bright office kitchen with happy colleagues",
    ),
}

NAVIGATION_OVERRIDES = {
    PersonaTag.MORNING_MINIMALIST: NavigationOverride(
        promote=('/products/espresso-machines', '/guides/fundamentals/your-first-week-with-a-machine'),
        demote=('/guides/advanced/flow-control-profiling',),
        cta=CallToAction("Your Morning Setup", "/experiences/core/morning-minimalist"),
    ),
    PersonaTag.UPGRADER: NavigationOverride(
        promote=('/products/comparison/arco-primo-vs-arco-doppio', '/guides/intermediate/dialing-in-new-beans'),
        demote=('/guides/fundamentals/tamping-technique',),
        cta=CallToAction("Find Your Upgrade", "/experiences/core/the-upgrade-path"),
    ),
    PersonaTag.CRAFT_BARISTA: NavigationOverride(
        promote=('/guides/advanced/flow-control-profiling', '/products/espresso-machines'),
        demote=('/guides/fundamentals/what-is-extraction',),
        cta=CallToAction("Pro Setup", "/experiences/core/craft-at-home"),
    ),
    PersonaTag.TRAVELLER: NavigationOverride(
        promote=('/blog/travel/espresso-bars-worth-visiting-in-milan', '/products/espresso-machines'),
        demote=('/guides/advanced/flow-control-profiling',),
        cta=CallToAction("Travel Gear", "/experiences/core/espresso-anywhere"),
    ),
    PersonaTag.NON_BARISTA: NavigationOverride(
        promote=('/products/espresso-machines', '/guides/fundamentals/your-first-week-with-a-machine'),
        demote=('/guides/advanced/tds-and-extraction-yield',),
        cta=CallToAction("Easy Setup", "/experiences/core/the-non-barista"),
    ),
    PersonaTag.OFFICE_MANAGER: NavigationOverride(
        promote=('/tools/calculators/capsule-to-bean-cost-comparison', '/products/espresso-machines'),
        demote=('/guides/advanced/flow-control-profiling',),
        cta=CallToAction("Office Solutions", "/bundles/persona-kits/upgrader-kit"),
    ),
}

ARCO_VARIANTS = VariantConfig(
    hero_default=HERO_DEFAULT,
    hero=HERO_VARIANTS,
    products_default=PRODUCTS_DEFAULT,
    products=PRODUCT_RECOMMENDATIONS,
    article_feed_default=ARTICLE_FEED_DEFAULT,
    article_feed=ARTICLE_FEEDS,
    promotional_cta_default=PROMOTIONAL_CTA_DEFAULT,
    promotional_cta=PROMOTIONAL_CTAS,
    navigation_default=NavigationOverride(),
    navigation=NAVIGATION_OVERRIDES,
)

_default_registry = None


def default_registry() -> VariantRegistry:
    """Registry over the authored Arco content."""
    global _default_registry
    if _default_registry is None:
        _default_registry = VariantRegistry(ARCO_VARIANTS)
    return _default_registry
