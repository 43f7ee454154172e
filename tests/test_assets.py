import pytest

from atomgrid.assets import TILE_COUNTS, tile_count


def test_backing_count_matches_source():
    assert tile_count("Backing") == 6


def test_suffix_is_accepted():
    assert tile_count("Numbers_TILECOUNT") == tile_count("Numbers")


def test_unknown_asset_raises():
    with pytest.raises(KeyError):
        tile_count("NoSuchAsset")


def test_all_counts_positive():
    assert all(count > 0 for count in TILE_COUNTS.values())


@pytest.mark.parametrize("player", range(1, 7))
@pytest.mark.parametrize("frame", range(1, 5))
def test_animation_frames_share_sizes(player, frame):
    assert tile_count(f"p{player}_idle_anim_{frame}") == tile_count("p1_idle_anim_1")
    assert tile_count(f"p{player}_grow_anim_{frame}") == tile_count("p1_grow_anim_1")


def test_idle_frame_larger_than_grow_frame():
    assert tile_count("p1_idle_anim_1") > tile_count("p1_grow_anim_1")


def test_mapping_is_read_only():
    with pytest.raises(TypeError):
        TILE_COUNTS["Backing"] = 1
    assert tile_count("Backing") == 6