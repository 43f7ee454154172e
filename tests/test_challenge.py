import pytest

from atomgrid.challenge import (
    BAG_SIZE,
    MINIATOMS_TILE_INDEX,
    NUMBERS_TILE_INDEX,
    ChallengeMode,
    Phase,
    carry_score,
    two_digit_tiles,
)
from atomgrid.console import Console
from atomgrid.fixed import fixed_mul, fixed_to_int, to_fixed
from atomgrid.grid import cursor_sprite_positions
from atomgrid.pads import Key, Pads
from atomgrid.rng import Random
from atomgrid.sounds import SoundEffect


def make_mode(seed=1):
    console = Console()
    pads = Pads()
    calls = []
    mode = ChallengeMode(console, pads, Random(seed), lambda s, l: calls.append((s, l)))
    return mode, console, pads, calls


def started(seed=1):
    mode, console, pads, calls = make_mode(seed)
    mode.start()
    for _ in range(200):
        if mode.phase is Phase.PLAY:
            break
        pads.update(0)
        mode.update()
    assert mode.phase is Phase.PLAY
    return mode, console, pads, calls


def clear_grid(grid):
    for square in grid:
        square.player = 0
        square.size = 0
        square.grow_size = 0
        square.changed = 0
        square.change_anim = 0
        square.animate = 0


def test_two_digit_tiles():
    assert two_digit_tiles(42, 0) == (4, 2)
    assert two_digit_tiles(7, 0) == (0, 7)
    assert two_digit_tiles(150, 0) == (9, 9)
    assert two_digit_tiles(42, 100) == (104, 102)


def test_two_digit_tiles_negative():
    with pytest.raises(ValueError):
        two_digit_tiles(-1, 0)


def test_carry_score():
    assert carry_score([0, 0, 0, 0, 0, 12]) == [0, 0, 0, 0, 1, 2]
    assert carry_score([9, 9, 9, 9, 9, 10]) == [9, 0, 0, 0, 0, 0]


@pytest.mark.parametrize("bank", [[0, 0, 1, 9, 9, 25], [0, 3, 0, 0, 0, 99], [0] * 6])
def test_carry_score_preserves_value(bank):
    value = sum(d * 10 ** (5 - i) for i, d in enumerate(bank))
    result = carry_score(bank)
    assert all(0 <= d <= 9 for d in result)
    assert sum(d * 10 ** (5 - i) for i, d in enumerate(result)) == value


@pytest.mark.parametrize("seed,previous", [(1, 0), (7, 3), (1234, 6), (99, 1)])
def test_fill_bag_shuffles(seed, previous):
    mode, *_ = make_mode(seed)
    mode.fill_bag(previous)
    assert len(mode.bag) == BAG_SIZE
    for place in range(0, BAG_SIZE, 6):
        assert sorted(mode.bag[place : place + 6]) == [1, 2, 3, 4, 5, 6]
    assert mode.bag[0] != previous
    assert all(a != b for a, b in zip(mode.bag, mode.bag[1:]))


def test_randomise_grid_keeps_sizes_below_max():
    mode, *_ = make_mode(5)
    mode.randomise_grid()
    for square in mode.grid:
        assert square.animate == 1
        assert 0 <= square.player <= 6
        if square.player == 0:
            assert square.size == 0
        else:
            assert 1 <= square.size <= square.max_size - 1


def test_start_sets_up_first_level():
    mode, console, _, _ = make_mode(3)
    mode.start()
    assert mode.phase is Phase.COUNTDOWN
    assert mode.time == to_fixed(70.0)
    assert mode.level == 0
    assert mode.needed == [0, 2, 2, 2, 2, 2, 2]
    assert mode.level_needed == 2 + fixed_to_int(to_fixed(2.0) + to_fixed(1.25))
    assert mode.score == 0
    assert console.half_brightness
    assert 1 <= mode.current_atom <= 6
    assert console.tile_at(29, 1) == MINIATOMS_TILE_INDEX + mode.current_atom - 1
    assert [console.tile_at(x, 0) for x in range(2, 8)] == [NUMBERS_TILE_INDEX] * 6
    assert len(console.sprites) == 44
    assert all(not s.visible for row in mode.cursor_sprites for s in row)


def test_countdown_reaches_play():
    mode, console, pads, _ = make_mode(2)
    mode.start()
    for _ in range(89):
        mode.update()
    assert mode.phase is Phase.COUNTDOWN
    mode.update()
    assert mode.phase is Phase.PLAY
    assert console.last_sound == (SoundEffect.LASER_SHOOT, 3)
    assert not console.half_brightness
    assert all(not s.visible for s in mode.info_sprites)


def test_play_ticks_time_down():
    mode, _, pads, _ = started()
    before = mode.time
    pads.update(0)
    mode.update()
    assert mode.time == before - to_fixed(0.01666)


def test_time_out_ends_game():
    mode, _, pads, calls = started()
    mode.score = 17
    mode.time = 0
    pads.update(0)
    mode.update()
    assert mode.phase is Phase.GAME_OVER
    assert calls == []
    mode.update()
    assert calls == [(17, mode.level)]


def test_cursor_moves_and_clamps():
    mode, console, pads, _ = started()
    pads.update(Key.RIGHT)
    mode.update()
    assert mode.cursor_x == 1
    assert console.last_sound == (SoundEffect.BLIP, 0)
    assert (mode.cursor_sprites[0][0].x, mode.cursor_sprites[0][0].y) == cursor_sprite_positions(1, 0)[0][0]
    pads.update(Key.RIGHT)
    mode.update()
    assert mode.cursor_x == 1
    for _ in range(2):
        pads.update(0)
        mode.update()
        pads.update(Key.LEFT)
        mode.update()
    assert mode.cursor_x == 0
    pads.update(0)
    mode.update()
    pads.update(Key.UP)
    mode.update()
    assert mode.cursor_y == 0


def test_placing_atom_on_empty_square():
    mode, _, pads, _ = started()
    clear_grid(mode.grid)
    pads.update(Key.BUTTON_1)
    mode.update()
    assert mode.phase is Phase.PLAY
    pads.update(0)
    mode.update()
    assert mode.phase is Phase.ANIMATE
    square = mode.grid.square(0, 0)
    assert square.grow_size == 1
    assert square.player == mode.current_atom


def test_placing_atom_on_other_players_square_is_refused():
    mode, _, pads, _ = started()
    clear_grid(mode.grid)
    other = 1 if mode.current_atom != 1 else 2
    mode.grid.square(0, 0).player = other
    mode.grid.square(0, 0).size = 1
    pads.update(Key.BUTTON_1)
    mode.update()
    pads.update(0)
    mode.update()
    assert mode.phase is Phase.PLAY
    assert mode.grid.square(0, 0).player == other


def test_pause_and_resume():
    mode, console, pads, _ = started()
    console.request_pause()
    pads.update(0)
    mode.update()
    assert mode.phase is Phase.PAUSED
    assert console.half_brightness
    mode.update()
    assert mode.phase is Phase.PAUSED
    console.request_pause()
    mode.update()
    assert mode.phase is Phase.PLAY
    assert not console.half_brightness


def test_has_space():
    mode, *_ = started()
    clear_grid(mode.grid)
    other = 1 if mode.current_atom != 1 else 2
    for square in mode.grid:
        square.player = other
        square.size = 1
    assert mode.has_space() is False
    mode.grid.square(4, 4).player = mode.current_atom
    assert mode.has_space() is True


def test_animate_explosion_spreads():
    mode, console, _, _ = started()
    clear_grid(mode.grid)
    mode.grid.square(0, 0).player = 1
    mode.grid.square(0, 0).size = 1
    mode.grid.square(9, 6).player = 2
    mode.grid.square(9, 6).size = 1
    mode.needed[1] = 5
    mode.score_bank = [0] * 6
    score_before = mode.score
    time_before = mode.time
    mode.grid.increment(0, 0, 1)

    mode.animate()
    assert mode.phase is Phase.ANIMATE_WAIT
    assert console.last_sound == (SoundEffect.EXPLOSION, 0)
    assert mode.needed[1] == 4
    assert mode.score == score_before + mode.multiplier
    assert mode.time == time_before + mode.time_per_explosion
    assert mode.exploded

    mode.animate()
    assert mode.grid.player_at(0, 0) == 0
    assert mode.grid.player_at(1, 0) == 1
    assert mode.grid.player_at(0, 1) == 1
    assert mode.phase is Phase.ANIMATE_WAIT

    mode.animate()
    assert mode.grid.size_at(1, 0) == 1
    assert mode.grid.size_at(0, 1) == 1
    assert console.last_sound == (SoundEffect.HIT_HURT, 0)


def test_animate_single_owner_is_early_out():
    mode, *_ = started()
    clear_grid(mode.grid)
    mode.grid.square(5, 3).player = 4
    mode.grid.square(5, 3).size = 1
    mode.grid.increment(5, 3, 4)
    mode.animate()
    assert mode.early_out
    assert mode.phase is Phase.END_CHECK


def test_setup_level_raises_targets():
    mode, *_ = started()
    level = mode.level
    needed = mode.level_needed
    mode.setup_level()
    assert mode.level == level + 1
    assert mode.needed[0] == 0
    assert mode.needed[1:] == [needed] * 6
    assert needed <= mode.level_needed <= 99


def test_early_out_resets_with_time_penalty():
    mode, _, pads, _ = started()
    mode.needed = [0, 3, 3, 3, 3, 3, 3]
    mode.early_out = True
    mode.multiplier = 3
    mode.phase = Phase.END_CHECK
    pads.update(0)
    mode.update()
    assert mode.phase is Phase.RESET
    before = mode.time
    mode.update()
    assert mode.time == fixed_mul(before, to_fixed(0.60))
    assert mode.multiplier == 1


def test_end_clears_sprites():
    mode, console, _, _ = started()
    mode.end()
    assert console.sprites == []
    assert mode.cursor_sprites == []