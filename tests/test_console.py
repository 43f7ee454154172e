import pytest

from atomgrid.console import MAX_SPRITES, Console


def test_new_map_is_blank():
    console = Console()
    assert all(
        console.tile_at(x, y) == 0
        for y in range(console.height)
        for x in range(console.width)
    )


def test_load_tile_map_writes_a_row():
    console = Console()
    console.load_tile_map(2, 0, [7, 8, 9])
    assert [console.tile_at(x, 0) for x in range(2, 5)] == [7, 8, 9]
    assert console.tile_at(5, 0) == 0


def test_load_tile_map_wraps_to_next_row():
    console = Console()
    console.load_tile_map(console.width - 1, 0, [5, 6])
    assert console.tile_at(console.width - 1, 0) == 5
    assert console.tile_at(0, 1) == 6


def test_load_tile_map_past_end_raises():
    console = Console()
    with pytest.raises(IndexError):
        console.load_tile_map(console.width - 1, console.height - 1, [1, 2])


def test_load_tile_area_places_block():
    console = Console()
    console.load_tile_area(4, 6, [1, 2, 3, 4], 2, 2)
    assert console.tile_at(4, 6) == 1
    assert console.tile_at(5, 6) == 2
    assert console.tile_at(4, 7) == 3
    assert console.tile_at(5, 7) == 4


def test_load_tile_area_size_mismatch_raises():
    with pytest.raises(ValueError):
        Console().load_tile_area(0, 0, [1, 2, 3], 2, 2)


def test_load_tile_area_off_map_raises():
    console = Console()
    with pytest.raises(IndexError):
        console.load_tile_area(console.width - 1, 0, [1, 2, 3, 4], 2, 2)


def test_tile_at_off_map_raises():
    with pytest.raises(IndexError):
        Console().tile_at(-1, 0)


def test_sprites_are_added_in_order():
    console = Console()
    first = console.add_sprite(0, 0, 10)
    second = console.add_sprite(8, 0, 11)
    assert (first.index, second.index) == (0, 1)
    assert console.sprites == [first, second]


def test_move_and_hide_sprite():
    console = Console()
    sprite = console.add_sprite(0, 0, 10)
    console.hide_sprite(sprite)
    assert console.visible_sprites == []
    console.move_sprite(sprite, 40, 50)
    assert (sprite.x, sprite.y, sprite.visible) == (40, 50, True)
    assert console.visible_sprites == [sprite]


def test_sprite_table_limit():
    console = Console()
    for i in range(MAX_SPRITES):
        console.add_sprite(i, 0, i)
    with pytest.raises(RuntimeError):
        console.add_sprite(0, 0, 0)
    console.clear_sprites()
    assert console.add_sprite(0, 0, 0).index == 0


def test_brightness_toggles():
    console = Console()
    console.set_brightness(True)
    assert console.half_brightness is True
    console.set_brightness(False)
    assert console.half_brightness is False


def test_sounds_are_recorded():
    console = Console()
    assert console.last_sound is None
    console.play_sound("blip", 0)
    console.play_sound("laser", 3)
    assert console.sounds == [("blip", 0), ("laser", 3)]
    assert console.last_sound == ("laser", 3)


def test_pause_request_is_taken_once():
    console = Console()
    assert console.take_pause_request() is False
    console.request_pause()
    assert console.take_pause_request() is True
    assert console.take_pause_request() is False