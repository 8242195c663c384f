"""
Persona Taxonomy

The six canonical personas, the five legacy brew-style slugs used by older
content, and the fixed many-to-one map between them.

Declaration order of PersonaTag is significant: the classifier breaks ties
in favour of the lower index, and persona 0 doubles as the default persona.
"""

from enum import Enum
from typing import Optional, Union


class PersonaTag(str, Enum):
    """Canonical persona tags, in scoring order."""
    MORNING_MINIMALIST = 'morning-minimalist'
    UPGRADER = 'upgrader'
    CRAFT_BARISTA = 'craft-barista'
    TRAVELLER = 'traveller'
    NON_BARISTA = 'non-barista'
    OFFICE_MANAGER = 'office-manager'


class LegacyStyle(str, Enum):
    """Legacy arco-brew-style values (also the experience page slugs)."""
    MORNING_MINIMALIST = 'morning-minimalist'
    UPGRADE_PATH = 'the-upgrade-path'
    CRAFT_AT_HOME = 'craft-at-home'
    ESPRESSO_ANYWHERE = 'espresso-anywhere'
    NON_BARISTA = 'the-non-barista'


# Persona 0 - also what an unanswered quiz resolves to
DEFAULT_PERSONA = PersonaTag.MORNING_MINIMALIST

PERSONA_ORDER = tuple(PersonaTag)

# Office managers are served the non-barista experience
LEGACY_STYLES = {
    PersonaTag.MORNING_MINIMALIST: LegacyStyle.MORNING_MINIMALIST,
    PersonaTag.UPGRADER: LegacyStyle.UPGRADE_PATH,
    PersonaTag.CRAFT_BARISTA: LegacyStyle.CRAFT_AT_HOME,
    PersonaTag.TRAVELLER: LegacyStyle.ESPRESSO_ANYWHERE,
    PersonaTag.NON_BARISTA: LegacyStyle.NON_BARISTA,
    PersonaTag.OFFICE_MANAGER: LegacyStyle.NON_BARISTA,
}

# Persona display names
PERSONA_NAMES = {
    PersonaTag.MORNING_MINIMALIST: 'The Morning Minimalist',
    PersonaTag.UPGRADER: 'The Upgrader',
    PersonaTag.CRAFT_BARISTA: 'The Craft Barista',
    PersonaTag.TRAVELLER: 'The Traveller',
    PersonaTag.NON_BARISTA: 'The Non-Barista',
    PersonaTag.OFFICE_MANAGER: 'The Office Manager',
}

PERSONA_TAGLINES = {
    PersonaTag.MORNING_MINIMALIST: 'Your setup is tuned for calm mornings and quality without effort.',
    PersonaTag.UPGRADER: "We're showing you content for someone ready to level up their setup.",
    PersonaTag.CRAFT_BARISTA: 'Advanced content and pro-level equipment, just for you.',
    PersonaTag.TRAVELLER: 'Portable gear and travel guides, prioritized for you.',
    PersonaTag.NON_BARISTA: 'Simple setups and zero-effort solutions, just the way you like it.',
    PersonaTag.OFFICE_MANAGER: 'Volume equipment and ROI tools, tailored for your team.',
}

RESULT_PAGE_PREFIX = '/experiences/core/'


def coerce_persona(value: Union[PersonaTag, str, None]) -> Optional[PersonaTag]:
    """
    Map a free-form value onto the closed taxonomy.

    Returns None for None and for any string that is not a declared tag.
    """
    if value is None:
        return None
    if isinstance(value, PersonaTag):
        return value
    try:
        return PersonaTag(value)
    except ValueError:
        return None


def coerce_legacy_style(value: Optional[str]) -> Optional[LegacyStyle]:
    """Map a free-form value onto the legacy slugs, None if undeclared."""
    if value is None:
        return None
    try:
        return LegacyStyle(value)
    except ValueError:
        return None


def legacy_style_for(tag: PersonaTag) -> LegacyStyle:
    """Legacy brew-style slug written alongside a canonical tag."""
    return LEGACY_STYLES[tag]


def result_page(tag: Union[PersonaTag, str, None]) -> str:
    """
    Experience page URL a visitor is sent to after the quiz.

    Unknown or missing personas get the default persona's page.
    """
    persona = coerce_persona(tag) or DEFAULT_PERSONA
    return f"{RESULT_PAGE_PREFIX}{legacy_style_for(persona).value}"


def persona_label(tag: Union[PersonaTag, str, None]) -> Optional[str]:
    persona = coerce_persona(tag)
    return PERSONA_NAMES[persona] if persona else None


def persona_tagline(tag: Union[PersonaTag, str, None]) -> Optional[str]:
    persona = coerce_persona(tag)
    return PERSONA_TAGLINES[persona] if persona else None
