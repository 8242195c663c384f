"""
Tests for Page Assembly

Tests persona resolution, page-type behaviour and stamping.
"""

import pytest
from arcopersona.content.assembly import ContentAssembler, PageType, coerce_page_type, compose_page
from arcopersona.content.variants import default_registry
from arcopersona.personas.store import PersonaStore, MemoryStorage
from arcopersona.personas.taxonomy import PersonaTag


class CountingClock:
    """Distinct timestamp per call."""

    def __init__(self):
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"2026-03-01T08:00:{self.calls:02d}+00:00"


@pytest.fixture
def store(clock):
    return PersonaStore(MemoryStorage(), clock=clock)


@pytest.fixture
def assembler(store):
    return ContentAssembler(store=store, clock=CountingClock())


def without_timestamp(content):
    return {k: v for k, v in content.items() if k != '_assembled_at'}


class TestPersonaResolution:
    """Tests for explicit tag vs persona store."""

    def test_explicit_tag_wins(self, assembler, store):
        store.persist(PersonaTag.TRAVELLER)

        result = assembler.compose('homepage', 'upgrader', {})

        assert result['_persona'] == 'upgrader'

    def test_store_used_without_tag(self, assembler, store):
        store.persist(PersonaTag.TRAVELLER)

        result = assembler.compose('homepage', None, {})

        assert result['_persona'] == 'traveller'
        assert result['hero']['headline'] == "Espresso, everywhere."

    def test_unknown_visitor(self, assembler):
        """Test a visitor with no persona gets defaults and a null stamp."""
        result = assembler.compose('homepage', None, {})

        assert result['_persona'] is None
        assert result['hero'] == default_registry().hero(None)

    def test_empty_tag_falls_back_to_store(self, assembler, store):
        """Test an empty explicit tag counts as no tag."""
        store.persist(PersonaTag.TRAVELLER)

        result = assembler.compose('homepage', '', {})

        assert result['_persona'] == 'traveller'
        assert result['products'][0] == 'arco-viaggio'

    def test_unrecognised_explicit_tag(self, assembler, store):
        """Test an unknown explicit tag resolves to no persona, not the store."""
        store.persist(PersonaTag.TRAVELLER)

        result = assembler.compose('homepage', 'espresso-snob', {})

        assert result['_persona'] is None
        assert result['products'] == default_registry().products(None, 3)

    def test_no_store_configured(self):
        assert ContentAssembler().compose('guide', None, {})['_persona'] is None

    def test_expired_persona_reverts_to_unknown(self, assembler, store, clock):
        store.persist(PersonaTag.TRAVELLER)
        clock.advance(days=90)

        assert assembler.compose('homepage', None, {})['_persona'] is None


class TestHomepage:
    """Tests for homepage variant overlay."""

    def test_variant_fields_overwritten(self, assembler):
        base = {'hero': 'authored hero', 'title': 'Arco', 'products': ['x']}

        result = assembler.compose('homepage', PersonaTag.CRAFT_BARISTA, base)

        registry = default_registry()
        assert result['hero'] == registry.hero(PersonaTag.CRAFT_BARISTA)
        assert result['products'] == ['arco-studio-pro', 'arco-zero', 'arco-studio']
        assert result['article_feed'] == registry.article_feed(PersonaTag.CRAFT_BARISTA, 3)
        assert result['promotional_cta'] == registry.promotional_cta(PersonaTag.CRAFT_BARISTA)
        assert result['nav_override'] == registry.navigation(PersonaTag.CRAFT_BARISTA)
        assert result['title'] == 'Arco'

    def test_configured_limits(self, store):
        assembler = ContentAssembler(store=store, product_limit=5, article_limit=0)

        result = assembler.compose('homepage', PersonaTag.UPGRADER, {})

        assert len(result['products']) == 5
        assert result['article_feed'] == []

    def test_idempotent_apart_from_timestamp(self, assembler):
        """Test two identical calls differ only in _assembled_at."""
        first = assembler.compose('homepage', None, {})
        second = assembler.compose('homepage', None, {})

        assert first['_assembled_at'] != second['_assembled_at']
        assert without_timestamp(first) == without_timestamp(second)

    def test_base_content_not_mutated(self, assembler):
        base = {'title': 'Arco'}

        assembler.compose('homepage', 'upgrader', base)

        assert base == {'title': 'Arco'}


class TestProductDetail:
    """Tests for persona overrides on product pages."""

    def test_override_applied(self, assembler):
        base = {'persona_overrides': {'upgrader': {'price': 10}}, 'price': 20, 'name': 'Doppio'}

        result = assembler.compose('product-detail', 'upgrader', base)

        assert result['price'] == 10
        assert result['name'] == 'Doppio'

    def test_override_is_shallow(self, assembler):
        """Test nested objects are replaced wholesale."""
        base = {
            'specs': {'boiler': 'dual', 'pressure': 9},
            'persona_overrides': {'craft-barista': {'specs': {'pressure': 12}}},
        }

        result = assembler.compose('product-detail', 'craft-barista', base)

        assert result['specs'] == {'pressure': 12}
        assert base['specs'] == {'boiler': 'dual', 'pressure': 9}

    def test_no_override_for_persona(self, assembler):
        base = {'persona_overrides': {'upgrader': {'price': 10}}, 'price': 20}

        assert assembler.compose('product-detail', 'traveller', base)['price'] == 20

    def test_no_persona(self, assembler):
        base = {'persona_overrides': {'upgrader': {'price': 10}}, 'price': 20}

        assert assembler.compose('product-detail', None, base)['price'] == 20

    def test_override_from_stored_persona(self, assembler, store):
        store.persist(PersonaTag.UPGRADER)
        base = {'persona_overrides': {'upgrader': {'price': 10}}, 'price': 20}

        assert assembler.compose('pdp', None, base)['price'] == 10

    def test_malformed_overrides_ignored(self, assembler):
        base = {'persona_overrides': ['upgrader'], 'price': 20}

        assert assembler.compose('product-detail', 'upgrader', base)['price'] == 20

    def test_homepage_ignores_overrides(self, assembler):
        base = {'persona_overrides': {'upgrader': {'price': 10}}, 'price': 20}

        assert assembler.compose('homepage', 'upgrader', base)['price'] == 20


class TestOtherPageTypes:
    """Tests for page types without personalisation."""

    @pytest.mark.parametrize("page_type", ['guide', 'article', 'experience', 'tool', 'bundle', 'blog', 'sitemap'])
    def test_only_stamped(self, assembler, page_type):
        base = {'title': 'Descaling', 'persona_overrides': {'upgrader': {'title': 'x'}}}

        result = assembler.compose(page_type, 'upgrader', base)

        assert without_timestamp(result) == {**base, '_persona': 'upgrader'}
        assert '_assembled_at' in result


class TestPageTypes:
    """Tests for page type names."""

    def test_aliases(self):
        assert coerce_page_type('pdp') == PageType.PRODUCT_DETAIL
        assert coerce_page_type('blog') == PageType.ARTICLE

    def test_unknown(self):
        assert coerce_page_type('sitemap') is None

    def test_compose_page_helper(self):
        result = compose_page('homepage', 'traveller', {'title': 'Arco'})

        assert result['_persona'] == 'traveller'
        assert result['products'][0] == 'arco-viaggio'
        assert result['_assembled_at'].endswith('+00:00')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
