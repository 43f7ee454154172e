import pytest

from atomgrid.pads import ButtonState, Key, Pads, button_state


@pytest.mark.parametrize(
    "new, previous, expected",
    [
        (1, 1, ButtonState.HELD),
        (1, 0, ButtonState.PRESSED),
        (0, 1, ButtonState.RELEASED),
        (0, 0, ButtonState.UP),
    ],
)
def test_button_state_transitions(new, previous, expected):
    assert button_state(new, previous, 1) == expected


def test_button_state_values_match_constants():
    results = [button_state(n, p, 1) for n, p in ((0, 0), (0, 1), (1, 1), (1, 0))]
    assert [int(s) for s in results] == [0, 1, 2, 3]


def test_button_state_ignores_other_bits():
    assert button_state(Key.UP, Key.UP, Key.DOWN) == ButtonState.UP


def test_press_hold_release_cycle_on_port_a():
    pads = Pads()
    pads.update(Key.BUTTON_1)
    assert pads[0].a == ButtonState.PRESSED
    pads.update(Key.BUTTON_1)
    assert pads[0].a == ButtonState.HELD
    pads.update(0)
    assert pads[0].a == ButtonState.RELEASED
    pads.update(0)
    assert pads[0].a == ButtonState.UP


def test_directions_map_to_fields():
    pads = Pads()
    pads.update(Key.UP | Key.RIGHT | Key.BUTTON_2)
    pad = pads[0]
    assert pad.up == ButtonState.PRESSED
    assert pad.right == ButtonState.PRESSED
    assert pad.b == ButtonState.PRESSED
    assert pad.down == ButtonState.UP
    assert pad.left == ButtonState.UP


def test_port_b_keys_go_to_second_pad():
    pads = Pads()
    pads.update(Key.B_BUTTON_1 | Key.B_LEFT)
    assert pads[1].a == ButtonState.PRESSED
    assert pads[1].left == ButtonState.PRESSED
    assert pads[0].a == ButtonState.UP
    assert pads[0].left == ButtonState.UP


def test_status_words_are_tracked():
    pads = Pads()
    pads.update(Key.DOWN)
    pads.update(Key.LEFT)
    assert pads[0].current == Key.LEFT
    assert pads[0].previous == Key.DOWN


def test_reset_clears_previous_word():
    pads = Pads()
    pads.update(Key.DOWN)
    pads.update(Key.DOWN)
    pads.reset()
    assert all(pad.previous == 0 for pad in pads)


def test_there_are_two_pads():
    pads = Pads()
    assert len(pads) == 2
    with pytest.raises(IndexError):
        pads[2]