# meez3d

The engine-independent core of a small first-person raycasting game. It
knows nothing about windows, graphics cards or audio devices: a front end
feeds it input events, calls it once per frame, and draws the lists of
sprites, rectangles, triangles and lines it produces.

## Modules

- `meez3d.constants` – render size (`RENDER_WIDTH`, `RENDER_HEIGHT`),
  `FRAME_RATE`, `CIRCLE_STEPS` and `MAX_LIGHTS`.
- `meez3d.geometry` – frozen `Point` and `Rect` dataclasses. Points add,
  subtract and scale; rectangles report `left()`, `top()`, `right()`,
  `bottom()` and `top_left()`, test `intersects()` and `contains()` (edges
  count), and can be moved by adding a `Point`.
- `meez3d.smallint` – `SmallIntMap`, a list-backed map keyed by small
  non-negative integers or integer enums, and `SmallIntSet`, a small set kept
  as a list.
- `meez3d.properties` – `PropertyMap`, typed properties read from a
  `<properties>` XML element (`PropertyMap.from_xml`,
  `PropertyMap.from_xml_string`). Values are `int`, `string` (the default
  type) or `bool`; `get_int`, `get_string` and `get_bool` return `None` for a
  missing key and raise `PropertyError` for a value of the wrong type.
  `set_defaults` copies in keys the map lacks.
- `meez3d.filemanager` – `FileManager`, which reads files either from the
  file system (`FileManager.from_fs`) or from a gzipped tar archive loaded
  into memory (`from_archive_file`, `from_archive_bytes`). It offers `read`,
  `read_to_string` and `read_dir`, the last returning `DirEntry` items with a
  `DirEntryType`. Failures raise `FileManagerError`.
- `meez3d.soundmanager` – the `Sound` enum, the `SoundPlayer` interface,
  `NoopSoundPlayer`, and `SoundManager`, which forwards `play` calls to a
  player (`SoundManager.noop_manager()` plays nothing).
- `meez3d.rendercontext` – `RenderContext` with a player and a HUD
  `SpriteBatch` selected by `RenderLayer`, `Color`, up to `MAX_LIGHTS`
  lights, and the batch operations `draw`, `fill_rect`, `fill_triangle`,
  `draw_line` (horizontal and vertical lines become filled rectangles),
  `fill_circle`, `fill_arc` and `draw_circle`. Batches hold `SpriteEntry`,
  `FillRectEntry`, `FillTriangleEntry` and `LineEntry` values.
- `meez3d.scene` – the abstract `Scene` (`update`, `draw`), `SceneResult`
  with its `SceneResultKind` (`SceneResult.kill_screen(text)` carries a
  message), and the abstract `Renderer` with `load_sprite`.
- `meez3d.inputstate` – raw keyboard, gamepad and mouse state
  (`InputState`), the inputs built on it (`KeyInput`, `JoystickButtonInput`,
  `JoystickThresholdInput`, `MouseButtonInput`, `CachedInput`,
  `TriggerInput`, `AnyOfInput`), and `create_input`, which gives the device
  bindings for each `BinaryInput` action.
- `meez3d.inputmanager` – `InputManager`, which takes window events
  (`KeyEvent`, `MouseMoveEvent`, `MouseButtonEvent`, `ResizeEvent`) and
  gamepad events (`GamepadEvent` with a `GamepadEventType`) and produces an
  `InputSnapshot` per frame. With a `RecordOption` it records the snapshots
  to a text file or plays them back from one (`InputRecorder`). Only the
  ok/cancel/menu flags and the mouse position are recorded; player movement
  flags are not.
- `meez3d.level` – `Level`, a `Scene` on a random 32×32 tile map
  (`create_random_map`) with a white border. It turns and moves the player
  with collision (`can_move_to`), casts rays through the map (`project`,
  returning a `Projection` and optionally the `PathIndex` cells visited), and
  draws the background, the 3D walls and a mini-map into the player batch.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Geometry and drawing:

```python
from meez3d.geometry import Point, Rect
from meez3d.rendercontext import Color, RenderContext, RenderLayer

rect = Rect(10, 20, 3, 4) + Point(100, 200)
assert (rect.left(), rect.top(), rect.right(), rect.bottom()) == (110, 220, 113, 224)

context = RenderContext(640, 400, 0)
context.fill_rect(context.logical_area(), RenderLayer.HUD, Color(0x33, 0x00, 0x33, 0xFF))
print(len(context.hud_batch.entries))  # 1
```

Input: a trigger action fires once per press, a held action stays on.

```python
from meez3d.inputmanager import InputManager, KeyEvent
from meez3d.inputstate import KeyboardKey

manager = InputManager(640, 400)
manager.handle_window_event(KeyEvent(KeyboardKey.ENTER, pressed=True))
first = manager.update(0)
second = manager.update(1)
print(first.ok_clicked, first.ok_down)    # True True
print(second.ok_clicked, second.ok_down)  # False True
```

Recording a session; the file is written when the manager is closed:

```python
from meez3d.inputmanager import InputManager, RecordMode, RecordOption

with InputManager(640, 400, record_option=RecordOption(RecordMode.RECORD, "session.txt")) as manager:
    for frame in range(600):
        manager.update(frame)
```

Reading assets from an archive:

```python
from meez3d.filemanager import FileManager

files = FileManager.from_archive_file("assets.tar.gz")
for entry in files.read_dir("assets"):
    print(entry.name, entry.file_type)
```

Running a level headlessly; `Level` only needs an object whose
`load_sprite(path)` returns something to draw:

```python
from meez3d.inputmanager import InputSnapshot
from meez3d.level import Level
from meez3d.rendercontext import RenderContext
from meez3d.soundmanager import SoundManager

class Images:
    def load_sprite(self, path):
        return str(path)

level = Level(Images())
context = RenderContext(640, 400, 0)
level.update(context, InputSnapshot(player_forward_down=True), SoundManager.noop_manager())
level.draw(context, None, None)
print(len(context.player_batch.entries) > 0)  # True
```

## What it does not do

This package has no program to run and no command. It opens no window,
reads no keyboard, mouse or gamepad directly, decodes no images and plays no
audio: a front end has to deliver events to `InputManager`, supply a sprite
loader, and draw the entries of the `SpriteBatch` lists itself. There are no
menus, fonts, cursor or scene stack here; `Level` is the only scene, and the
`SceneResult` it returns is for the caller to act on.