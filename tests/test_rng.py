import pytest

from atomgrid.rng import Random


def test_seed_equal_to_mixing_constant_gives_zero_state():
    rng = Random(0xD94B)
    assert rng.state == 0
    assert [rng.next() for _ in range(5)] == [0, 0, 0, 0, 0]


def test_same_seed_gives_same_sequence():
    first = Random(1234)
    second = Random(1234)
    assert [first.next() for _ in range(50)] == [second.next() for _ in range(50)]


def test_reseeding_restarts_sequence():
    rng = Random(77)
    values = [rng.next() for _ in range(10)]
    rng.seed(77)
    assert [rng.next() for _ in range(10)] == values


def test_seed_is_truncated_to_sixteen_bits():
    wide = Random(0x10000 + 5)
    narrow = Random(5)
    assert [wide.next() for _ in range(10)] == [narrow.next() for _ in range(10)]


def test_next_returns_state_and_stays_in_range():
    rng = Random(99)
    for _ in range(500):
        value = rng.next()
        assert value == rng.state
        assert 0 <= value <= 0xFFFF


def test_nonzero_state_never_collapses_to_zero():
    rng = Random(1)
    values = [rng.next() for _ in range(2000)]
    assert 0 not in values
    assert len(set(values)) > 100


@pytest.mark.parametrize("seed", [0, 1, 255, 4096, 65535])
def test_randint_stays_in_inclusive_range(seed):
    rng = Random(seed)
    results = {rng.randint(1, 6) for _ in range(300)}
    assert results <= set(range(1, 7))
    assert len(results) > 1


def test_randint_single_value_range():
    rng = Random(10)
    assert all(rng.randint(3, 3) == 3 for _ in range(20))


def test_randint_rejects_empty_range():
    with pytest.raises(ValueError):
        Random(10).randint(6, 1)