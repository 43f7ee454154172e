# atomgrid

A chain-reaction board game played on a 10 × 7 grid of squares.

Players take turns dropping an atom into an empty square or one they
already own. Corner squares explode when they reach two atoms, edge
squares at three and inner squares at four. An exploding square empties,
and its atoms go one each into its neighbours, which become the exploding
player's and may explode in turn. The last player left with atoms on the
board wins.

Two modes are included:

- **Classic** (`atomgrid.classic.ClassicGame`) – two to six players, each
  either a human or a computer opponent (`PlayerType.HUMAN`,
  `PlayerType.CPU`).
- **Challenge** (`atomgrid.challenge.ChallengeMode`) – a single-player
  mode against the clock. Each level asks for a number of explosions of
  every colour. Explosions add time and score, with a multiplier that
  grows while consecutive moves cause explosions. A board left all one
  colour, or with no room for the next atom, is reshuffled at the cost of
  part of the remaining time. The game ends when the time runs out.

## Installing

```
pip install .
```

## Running

The `atomgrid` command runs the game on scripted controller input and
reports which screen it ends on. Each argument is one frame: key names
from `atomgrid.pads.Key` joined with `+`, or `-` for a frame with no keys
held. `--idle N` adds N more frames with no keys held.

```
atomgrid BUTTON_1 - -
```

prints `ModeSelect after 3 frames`: button 1 is pressed, released (which
leaves the title screen), and the switch to the mode menu takes effect on
the following frame. With no arguments the game stays on the title
screen.

## Using it as a library

`atomgrid.game.Game` advances the whole game one frame at a time from a
controller status word:

```python
from atomgrid.console import Console
from atomgrid.game import Game
from atomgrid.pads import Key

console = Console()
game = Game(console)

game.frame(Key.BUTTON_1)   # press button 1 on the first pad
game.frame(0)              # release it: the title screen asks to move on
game.frame(0)              # the mode menu starts
print(type(game.state).__name__)   # ModeSelect

game.run([0] * 60)         # sixty frames with no input
print(console.visible_sprites, console.last_sound)
```

The pieces are usable on their own as well:

- `atomgrid.grid.Grid` holds the board's `GridSquare`s and gives the
  neighbours of a square, its drawing tiles, and draws changed squares
  onto a console.
- `atomgrid.screens` has the title screen, mode menu, player selection,
  help pages, winner and game-over screens.
- `atomgrid.statemachine.StateMachine` switches between `State`s; a change
  takes effect on the next update.
- `atomgrid.pads.Pads` turns the status word into pressed, held and
  released buttons (`ButtonState`) for two controllers.
- `atomgrid.console.Console` is an in-memory model of the screen: a
  32 × 28 tile map, a sprite table, a brightness flag, a list of requested
  sound effects and a pause request.
- `atomgrid.sounds.SoundEffect` holds the sound effects' command streams.
- `atomgrid.assets.tile_count` gives the tile count of each graphics asset.
- `atomgrid.rng.Random` is the 16-bit xorshift generator the game uses,
  and `atomgrid.fixed` holds the 8.8 fixed-point helpers used for the
  challenge timer.

## What it does not do

There is no window, graphics or audio output. The console only records
what would be shown and played: tile indices, sprite positions and the
sound effects requested. Pictures, palettes and animation frames are
tracked by name or index, not loaded or drawn, and there is no music.
The command does not read a live keyboard or gamepad; input is given as
status words or on the command line.

## Tests

```
pip install .[test]
pytest
```