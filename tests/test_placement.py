import pytest

from memory.allocator import Block
from memory.errors import InsufficientSpace
from policy.placement import Strategy, best_fit, first_fit, select_block, worst_fit


def hole_sizes(alloc):
    return [b.size for b in alloc.snapshot() if b.is_free]


def test_fixture_layout(holes):
    alloc = holes([20, 10, 30])
    assert alloc.extents_free() == [(0, 20), (25, 10), (40, 30)]


@pytest.mark.parametrize("strategy,start", [
    (Strategy.FIRST_FIT, 0),
    (Strategy.BEST_FIT, 0),     # 20 is the smallest hole >= 15
    (Strategy.WORST_FIT, 40),   # 30 is the largest
])
def test_strategies_on_20_10_30(holes, strategy, start, check):
    alloc = holes([20, 10, 30])
    block = alloc.request("R", 15, strategy)
    assert block.start == start
    check(alloc)


@pytest.mark.parametrize("strategy,start", [
    (Strategy.FIRST_FIT, 0),    # 20-byte hole
    (Strategy.BEST_FIT, 25),    # 15-byte hole, exact fit
    (Strategy.WORST_FIT, 45),   # 30-byte hole
])
def test_strategies_on_20_15_30(holes, strategy, start, check):
    alloc = holes([20, 15, 30])
    block = alloc.request("R", 15, strategy)
    assert block.start == start
    check(alloc)


def test_best_fit_exact_fit_removes_hole(holes):
    alloc = holes([20, 15, 30])
    alloc.request("R", 15, "B")
    assert hole_sizes(alloc) == [20, 30]


def test_ties_go_to_lowest_address():
    blocks = [Block(0, 10), Block(10, 5, "A"), Block(15, 10), Block(25, 5, "B"), Block(30, 10)]
    assert first_fit(blocks, 10) == 0
    assert best_fit(blocks, 10) == 0
    assert worst_fit(blocks, 10) == 0


def test_selectors_skip_allocated_blocks():
    blocks = [Block(0, 50, "A"), Block(50, 20)]
    for strategy in Strategy:
        assert select_block(blocks, 20, strategy) == 1
        assert select_block(blocks, 21, strategy) is None


def test_selectors_do_not_mutate():
    blocks = [Block(0, 10), Block(10, 5, "A"), Block(15, 30)]
    before = list(blocks)
    for strategy in Strategy:
        select_block(blocks, 8, strategy)
    assert blocks == before


@pytest.mark.parametrize("strategy", list(Strategy))
def test_no_fit_raises_for_every_strategy(holes, strategy):
    alloc = holes([20, 10, 30])
    before = alloc.snapshot()
    with pytest.raises(InsufficientSpace):
        alloc.request("R", 31, strategy)
    assert alloc.snapshot() == before


@pytest.mark.parametrize("text,expected", [
    ("F", Strategy.FIRST_FIT), ("b", Strategy.BEST_FIT), (" w ", Strategy.WORST_FIT),
    (Strategy.BEST_FIT, Strategy.BEST_FIT),
])
def test_strategy_parse(text, expected):
    assert Strategy.parse(text) is expected


@pytest.mark.parametrize("text", ["", "X", "FB", "first"])
def test_strategy_parse_rejects_unknown(text):
    with pytest.raises(ValueError):
        Strategy.parse(text)
