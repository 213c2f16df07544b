"""
BDD step definitions for the storefront feature (pytest-bdd).
Steps are sync; each async view call runs to completion in its own event loop.
"""

import asyncio

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from nexar.services.navigation import RecordingNavigator
from nexar.services.storefront import StorefrontService, StorefrontView

scenarios("../features/storefront.feature")


class CatalogSource:
    def __init__(self, records=(), error=None):
        self.records = list(records)
        self.error = error

    async def get_all(self, *, featured=None, category=None):
        if self.error:
            raise self.error
        rows = self.records
        if featured is not None:
            rows = [r for r in rows if r["featured"] is featured]
        if category:
            rows = [r for r in rows if r["category"] == category]
        return rows


def _record(id, *, featured=False, category="naked"):
    return {
        "id": id,
        "title": f"Motocicletă {id}",
        "price": 5000,
        "seller_id": 900 + id,
        "seller_name": "Vânzător",
        "seller_type": "individual",
        "category": category,
        "featured": featured,
    }


@pytest.fixture
def ctx():
    return {"navigate": RecordingNavigator()}


@given(parsers.parse("a catalog with {featured:d} featured and {regular:d} regular listings"))
def catalog(ctx, featured, regular):
    records = [_record(i, featured=True) for i in range(1, featured + 1)]
    records += [_record(i) for i in range(featured + 1, featured + regular + 1)]
    ctx["source"] = CatalogSource(records)


@given(parsers.parse('a catalog with {first:d} "{first_category}" listings and {second:d} "{second_category}" listings'))
def catalog_by_category(ctx, first, first_category, second, second_category):
    records = [_record(i, category=first_category) for i in range(1, first + 1)]
    records += [_record(i, category=second_category) for i in range(first + 1, first + second + 1)]
    ctx["source"] = CatalogSource(records)


@given("the listing source is unreachable")
def unreachable(ctx):
    ctx["source"] = CatalogSource(error=ConnectionRefusedError("network unreachable"))


def _open(ctx, category=None):
    service = StorefrontService(ctx["source"], featured_limit=4, recent_limit=8, fallback_image="/fallback.jpg")
    ctx["view"] = StorefrontView(service, ctx["navigate"])
    asyncio.run(ctx["view"].open(category))


@when("the visitor opens the home page")
def open_home(ctx):
    _open(ctx)


@when(parsers.parse('the visitor opens the home page with category "{category}"'))
def open_home_with_category(ctx, category):
    _open(ctx, category)


@when("the visitor clicks the seller link on the first featured card")
def click_seller(ctx):
    view = ctx["view"]
    ctx["card"] = view.featured[0]
    view.dispatch_card_click(ctx["card"], target="seller")


@then(parsers.parse('the page state is "{state}"'))
def page_state(ctx, state):
    assert ctx["view"].page().state == state


@then(parsers.parse("{featured:d} featured and {recent:d} recent listings are shown"))
def grid_sizes(ctx, featured, recent):
    page = ctx["view"].page()
    assert len(page.featured) == featured
    assert len(page.recent) == recent


@then("no listing is shown twice")
def no_duplicates(ctx):
    page = ctx["view"].page()
    ids = [l.id for l in page.featured + page.recent]
    assert len(ids) == len(set(ids))


@then("the page offers a retry")
def offers_retry(ctx):
    assert ctx["view"].page().retryable is True


@then("the visitor is on the seller profile page")
def on_seller_page(ctx):
    assert ctx["navigate"].history == [ctx["card"].seller_path]
