"""Shared fixtures: an in-memory catalog store speaking the reader contract."""

import re
from contextlib import asynccontextmanager

import pytest

from catalog.core.errors import StoreUnavailable
from catalog.models.product import Product
from catalog.search.query_builder import EQUALS, MATCHES

# ts_rank default weights for A, B, C, D
WEIGHTS = (
    (1.0, ("name", "variant_name")),
    (0.4, ("manufacturer", "product_group")),
    (0.2, ("sku",)),
    (0.1, ("description",)),
)


def _tokens(value: str | None) -> list[str]:
    if not value:
        return []
    value = re.sub(r"<[^>]+>", " ", value)
    return [t for t in re.split(r"\W+", value.lower()) if t]


def _term_hits(term: str, tokens: list[str]) -> bool:
    # crude stand-in for stemming: "implantate" and "implantat" match
    return any(t.startswith(term) or term.startswith(t) for t in tokens if len(t) > 2)


def _rank(product: Product, text: str) -> float:
    terms = _tokens(text)
    score = 0.0
    for term in terms:
        for weight, fields in WEIGHTS:
            for field in fields:
                if _term_hits(term, _tokens(getattr(product, field))):
                    score += weight
    return score


def _matches(product: Product, text: str) -> bool:
    terms = _tokens(text)
    all_tokens = [
        token
        for _, fields in WEIGHTS
        for field in fields
        for token in _tokens(getattr(product, field))
    ]
    return bool(terms) and all(_term_hits(term, all_tokens) for term in terms)


class FakeReader:
    def __init__(self, store: "FakeCatalogStore"):
        self.store = store

    def _check(self):
        self.store.calls += 1
        if self.store.fail:
            raise StoreUnavailable("fake store down")

    def _filter(self, predicates):
        rows = [p for p in self.store.products if p.active]
        for predicate in predicates:
            if predicate.operator == MATCHES:
                rows = [p for p in rows if _matches(p, predicate.value)]
            elif predicate.operator == EQUALS:
                rows = [p for p in rows if getattr(p, predicate.column) == predicate.value]
            else:
                raise ValueError(predicate.operator)
        return rows

    async def query_active_products(self, predicates, order_by, limit, offset):
        self._check()
        rows = self._filter(predicates)
        text = next((p.value for p in predicates if p.operator == MATCHES), None)
        if text:
            rows.sort(key=lambda p: (-_rank(p, text), p.sku))
        else:
            rows.sort(key=lambda p: (p.name, p.sku))
        return rows[offset:offset + limit]

    async def count_active_products(self, predicates):
        self._check()
        return len(self._filter(predicates))

    async def group_count(self, predicates, column):
        self._check()
        counts: dict[str, int] = {}
        for p in self._filter(predicates):
            value = getattr(p, column)
            if value is not None:
                counts[value] = counts.get(value, 0) + 1
        return sorted(counts.items())

    async def get_active_by_sku(self, sku):
        self._check()
        return next((p for p in self.store.products if p.sku == sku and p.active), None)

    async def ping(self):
        self._check()


class FakeCatalogStore:
    def __init__(self, products=None):
        self.products = list(products or [])
        self.fail = False
        self.calls = 0
        self.open_readers = 0

    @asynccontextmanager
    async def reader(self):
        self.open_readers += 1
        try:
            yield FakeReader(self)
        finally:
            self.open_readers -= 1


def make_product(sku, name, manufacturer="Brand X", **fields) -> Product:
    fields.setdefault("active", True)
    return Product(sku=sku, name=name, manufacturer=manufacturer, **fields)


@pytest.fixture
def seed_products():
    """The development seed catalog plus one inactive row."""
    return [
        make_product(
            "TEST-001", "Dentalspiegel #5", "Brand X",
            variant_name="Standard", product_group="Instrumente", category="Spiegel",
            description="<p>Hochwertiger Dentalspiegel für die tägliche Praxis.</p>",
        ),
        make_product(
            "TEST-002", "Komposit-Kit", "Brand Y",
            variant_name="Premium Set", product_group="Restaurative", category="Komposite",
            description="<p>Komplettes Komposit-Set für alle Restaurationen.</p>",
        ),
        make_product(
            "TEST-003", "Implantat-System", "Brand Z",
            variant_name="4.0mm x 10mm", product_group="Implantologie", category="Implantate",
            description="<p>Hochwertiges Implantatsystem mit hervorragender Osseointegration.</p>",
        ),
        make_product(
            "TEST-004", "Prophylaxe-Paste", "Brand X",
            variant_name="Minze-Geschmack", product_group="Prophylaxe", category="Pasten",
            description="<p>Fluoridhaltige Prophylaxe-Paste mit angenehmem Minzgeschmack.</p>",
        ),
        make_product(
            "TEST-005", "Absaugkanüle", "Brand Y",
            variant_name="Steril 50 Stk", product_group="Verbrauchsmaterial", category="Absaugung",
            description="<p>Sterile Einweg-Absaugkanülen im 50er Pack.</p>",
        ),
        make_product(
            "TEST-006", "Implantat-Schlüssel", "Brand X",
            product_group="Implantologie", category="Spiegel", active=False,
        ),
    ]


@pytest.fixture
def fake_store(seed_products):
    return FakeCatalogStore(seed_products)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def store_factory():
    return FakeCatalogStore
