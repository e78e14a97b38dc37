# msgbox-kit

Themed message box models and a set of small helpers for desktop
applications.

## What it provides

| Module | Contents |
| --- | --- |
| `msgbox_kit.messagebox` | `MessageBox` with five icons (`MessageBoxIcon`) and four button layouts (`MessageBoxButtons`). It resolves theme colours (`ResolvedColors`) for dark and light modes and builds `Card` and `Overlay` descriptions. |
| `msgbox_kit.color` | `Color`, an immutable RGBA type whose channels run from 0.0 to 1.0. |
| `msgbox_kit.validation` | Field validators that raise `ValidationError`, plus `FormValidator`. |
| `msgbox_kit.scheduler` | `TaskScheduler`, which runs one-time and recurring callables on a background thread. |
| `msgbox_kit.pin_crypto` | Salted SHA-256 PIN hashing and PBKDF2 key derivation. |
| `msgbox_kit.remote_config` | `RemoteConfigSync` pulls and pushes a JSON file in a GitHub repository. `ConfigSyncManager` keeps a local copy of it. |
| `msgbox_kit.tab_bar` | `TabBar`, a tab bar model that handles selecting and reordering tabs. |
| `msgbox_kit.session` | `SessionManager` persists window geometry, active tabs, recent items and key-value data to a JSON file. |
| `msgbox_kit.settings_export` | `SettingsExporter` writes settings bundles (ZIP files with the `.yas` extension) and imports them safely. |

## Installation

```
pip install msgbox-kit
```

## Message boxes

```python
from msgbox_kit.color import Color
from msgbox_kit.messagebox import ButtonStatus, MessageBox

mb = MessageBox.ask_ok_cancel("Proceed", "This action cannot be undone.")
mb = mb.light().with_accent(Color.from_rgb(0.90, 0.40, 0.10)).with_corner_radius(8.0)

card = mb.card(lambda result: result)
overlay = mb.overlay(lambda result: result)

for button in card.buttons:
    print(button.label, button.message, button.background(ButtonStatus.HOVERED))
```

The convenience constructors are `info`, `success`, `warning`, `error`,
`ask_yes_no`, `ask_yes_no_cancel` and `ask_ok_cancel`. Each builder method
(`dark`, `light`, `with_colors`, `with_accent`, `with_corner_radius`,
`with_border_width`, `with_glyph`) returns a changed copy of the box.

A `Card` holds the glyph, title, body, resolved colours and buttons. Buttons
appear left to right, and the accent button comes last. Each `ButtonSpec` carries
the message that `on_result` returned for its `MessageBoxResult`. An `Overlay`
wraps the card and adds a black backdrop. The backdrop has alpha 0.55 in dark
mode and 0.35 in light mode.

You can replace an icon's default glyph:

```python
MessageBox.info("Star", "You earned a star!").with_glyph("\u2605")
```

## Validation

```python
from msgbox_kit.validation import FormValidator, validate_email, validate_required

form = FormValidator()
form.add_field("email", "user@example.com")
form.validate("email", [validate_required, validate_email])
assert form.is_valid()
print(form.error_summary())
```

The validators are `validate_required`, `validate_length`,
`validate_path_exists`, `validate_directory_exists`, `validate_file_exists`,
`validate_number_range`, `validate_url`, `validate_email`,
`validate_hex_color` and `validate_filename`. Two helpers go with them:
`is_valid_hex_color` and `normalize_hex_color`. `normalize_hex_color` returns
`#RRGGBB` in upper case.

## Scheduling

```python
from msgbox_kit.scheduler import TaskScheduler

with TaskScheduler() as scheduler:
    scheduler.schedule_recurring("sync", lambda: print("sync"), 3600.0, False)
    scheduler.schedule_once("reminder", lambda: print("reminder"), 300.0)
    print(scheduler.list_tasks())
```

Delays are given in seconds or as a `timedelta`. If the scheduler has not been
started, the scheduling calls return `False`. `stop()` drops every pending task.

## PIN hashing

```python
from msgbox_kit.pin_crypto import derive_key_from_pin, hash_pin, verify_pin_hash

pin_hash, salt_b64 = hash_pin("1234")
assert verify_pin_hash("1234", pin_hash, salt_b64)
key = derive_key_from_pin("1234", salt_b64)  # 32 bytes
```

## Remote configuration

```python
from msgbox_kit.remote_config import ConfigSyncManager, RemoteConfigSync

sync = RemoteConfigSync(github_token="token", repo="owner/config-repo",
                        config_file="settings.json").with_branch("main")
manager = ConfigSyncManager("config/settings.json", sync)
manager.load_and_sync()          # remote keys override local ones
manager.set("app.name", "Demo")
manager.save_and_sync(manager.config())
```

When a sync fails, `ConfigError` is raised, or one of its subclasses
`HttpError` or `NotFoundError`.

## Tab bar

```python
from msgbox_kit.tab_bar import TabBar, TabMoved

labels = ["A", "B", "C"]
action = TabBar().update(TabMoved(0, 2), labels, 0)
# labels == ["B", "C", "A"], action.selected == 2
```

## Sessions

```python
from msgbox_kit import session

manager = session.initialize(session.default_session_file("my_app"))
manager.set("last_tab", "settings")
manager.add_recent_item("files", "notes.txt", 10)
manager.save()
```

After `initialize`, `session.instance()` returns the same manager.

## Settings bundles

```python
from msgbox_kit.settings_export import SettingsExporter

exporter = SettingsExporter("config")
exporter.add_resource_dir("templates", "templates")
bundle = exporter.export_all_settings("backup.yas")
exporter.import_settings(bundle, backup=True)
```

An import backs up the current settings first, under `config/backups/`. It
rejects entries that try path traversal and bundles from a different major
version. It skips config files that are not JSON objects or arrays. It refuses
config files that contain suspicious script-like text.

## What it does not do

- It draws nothing. Message boxes and tab bars are data descriptions, and your
  UI toolkit renders them.
- `pin_crypto` does not encrypt or decrypt fields. It only hashes PINs and
  derives keys.
- There is no system tray or window title-bar integration, and no command-line
  tool.

## Running the tests

```
pip install "msgbox-kit[test]"
pytest
```