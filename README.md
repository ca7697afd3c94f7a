# asteroidfield

A top-down asteroid shooter. You fly a small ship around a large square
world (10000 × 10000 units) full of drifting asteroids. Asteroids bounce off
each other according to their mass and are pushed back from the world's
edges; shots that leave the world disappear. Shooting an asteroid splits it
into two smaller halves, and shooting a half removes it. New asteroids keep
arriving near your ship, sooner as your score grows. You have two lives:
the second hit ends the game.

## Installing

```
pip install .
```

This pulls in `pygame`, which is used for the window, input and drawing.

## Playing

```
asteroidfield
```

The game opens on the main menu:

- **START GAME** opens the difficulty menu. Pick one of `GAME_JOURNALIST`,
  `LOW`, `MEDIUM`, `HIGH`, `VERY_HIGH`, `INSANE` or `DOFH`. Each asteroid you
  hit is worth as many points as the difficulty's number (0, 1, 2, 3, 4, 5
  and 10 respectively).
- **TESTING** starts an empty world with no ship. No asteroids arrive on
  their own there; with `--debug` (below) you can spawn them by hand.
- **EXIT** quits.

### Controls

In menus:

| Key              | Action                                   |
|------------------|------------------------------------------|
| `W` / `S`        | Move the highlight up / down (wraps)     |
| `Enter`, `Space` | Select the highlighted entry             |
| `Esc`            | Leave the difficulty menu back to main   |

In the game:

| Input               | Action                                          |
|---------------------|-------------------------------------------------|
| `W` / `S`           | Thrust forward / backward                       |
| `A` / `D`           | Rotate left / right                             |
| `Space`             | Fire (up to 5 shots per second)                 |
| `C`                 | Toggle the camera following the ship            |
| Right mouse drag    | Pan the camera (stops following the ship)       |
| Mouse wheel         | Zoom in / out (0.3× to 3×)                      |
| `Esc`               | Pause / resume                                  |

The pause menu offers **RESTART**, **MAIN MENU** and **EXIT**. When you run
out of lives, the game-over screen shows your score over the menu you last
used (the difficulty menu, or the pause menu if you had paused), and its
entries can still be selected. Closing the window or pressing Ctrl+C in the
terminal quits.

### Developer keys

Started with `--debug`, the game also accepts:

| Input          | Action                                                  |
|----------------|---------------------------------------------------------|
| Left mouse drag| Move an asteroid; releasing throws it with the mouse    |
| `Ctrl`+`C`     | Quit                                                    |
| `L`            | Toggle the 75 FPS cap                                   |
| `V`            | Toggle visual debugging (colliders, speeds, cursor)     |
| `O`            | Put the first object at the world origin, stopped       |
| `P`            | Freeze / unfreeze the simulation                        |
| `1` … `5`      | Spawn fixed collision test setups                       |
| `9`            | Spawn 999 asteroids                                     |
| `=` / `-`      | Spawn one asteroid / remove the last object             |
| `0`            | Remove everything but the ship                          |

## Logging

Every run writes a log file under `logs/` in the current directory, named
after the start time, for example `logs/asteroids-2024-05-01_18-30-00.log`.
How much is logged is chosen on the command line:

```
asteroidfield -lc 2 -lf 7
```

- `-lc LEVEL`, `--loglevelconsole LEVEL` sets the level for messages printed
  to the console.
- `-lf LEVEL`, `--loglevelfile LEVEL` sets the level for messages written to
  the log file.

Levels run from 0 to 8 (larger values are clamped to 8):

| Level | Name      |
|-------|-----------|
| 0     | NOLOG     |
| 1     | FATAL     |
| 2     | ERROR     |
| 3     | WARNING   |
| 4     | BENCH     |
| 5     | INFO      |
| 6     | TEST FAIL |
| 7     | TEST PASS |
| 8     | FIXME     |

Both default to `WARNING`. The file level is never lower than the console
level: anything shown on the console is also written to the file.

## Benchmark

```
asteroidfield-bench
```

fills the world with asteroids, runs the simulation and rendering for 20
seconds without a frame-rate cap (or until the window is closed), and then
prints a report: frames rendered, average frame rate and frame time, and the
total and average time spent in the action list, the screen render and the
world render. Benchmark-level log messages go to `asteroids-benchlog.log` in
the current directory. It takes the same `-lc` / `-lf` / `--debug` options
as the game.

## Using the game logic directly

The simulation does not need a window. `asteroidfield.app.StateMachine`
advances one frame per call to `step()`, given an
`asteroidfield.gamelogic.InputState` describing the keys and mouse for that
frame; per-run state lives in `asteroidfield.structs.Session`, and the
tracked objects in a `Tracker` made by `asteroidfield.objecthandler.init_tracker`.
`asteroidfield.actionlist.run_action_list` runs one pass over all objects.

## Not included

There is no sound, and scores are not saved between runs.

## Running the tests

```
pip install ".[test]"
pytest
```