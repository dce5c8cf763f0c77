"""Shared fixtures for the draft room test suite."""

import random

import pytest

from src.draft_room.draft_engine import DraftEngine
from src.player_pool.item_pool import ItemPool
from src.player_pool.models import Category, Item

COMMISSIONER = "BD Crushers"


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

def make_items():
    """Enough players of every position for an 8-team draft."""
    counts = {
        Category.QB: 10,
        Category.RB: 20,
        Category.WR: 16,
        Category.TE: 12,
        Category.K: 10,
    }
    items = []
    for category, count in counts.items():
        for i in range(1, count + 1):
            pid = f"{category.value.lower()}{i}"
            items.append(
                Item(
                    item_id=pid,
                    name=f"Player {pid}",
                    category=category,
                    group="TST",
                    search_key=f"player {pid} tst {category.value.lower()}",
                )
            )
    return items


def make_pool():
    return ItemPool(make_items())


def make_engine(**kwargs):
    kwargs.setdefault("rng", random.Random(42))
    return DraftEngine(make_pool(), **kwargs)


def pick_for_current(engine):
    """Make a legal pick for whoever is on the clock. Returns the Pick."""
    team = engine.current_picker()
    for item in engine.get_available_items():
        if engine.policy.can_claim(team, item.category):
            return engine.pick(team.connection_id, item.item_id)
    raise AssertionError(f"No legal pick left for {team.name}")


def conn_of(engine, team_id):
    return engine.draft_state.get_team(team_id).connection_id


@pytest.fixture
def pool():
    return make_pool()


@pytest.fixture
def engine():
    return make_engine()


@pytest.fixture
def two_team_engine():
    """Alpha and Beta joined on connections sid-alpha / sid-beta."""
    engine = make_engine()
    engine.join("Alpha", "sid-alpha")
    engine.join("Beta", "sid-beta")
    return engine


@pytest.fixture
def commissioner_engine():
    """Commissioner plus one other team, draft started."""
    engine = make_engine()
    engine.join(COMMISSIONER, "sid-boss")
    engine.join("Alpha", "sid-alpha")
    engine.start()
    return engine
