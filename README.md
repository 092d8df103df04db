# nekosys

A small desktop assistant core. Its parts can be used on their own from
Python, and the `nekosys` command starts them together.

- `nekosys.config` – a JSON configuration file mapped onto a dataclass,
  created with the dataclass defaults if it does not exist.
- `nekosys.logger` – a `logging` handler that prints coloured lines to
  stderr, with per-target level overrides and a hook that reports uncaught
  exceptions.
- `nekosys.nyannel` – named in-process broadcast channels.
- `nekosys.module_loader` – reads `modules/index.toml` and starts every
  enabled executable module, adding the variables from its own `.env` file.
- `nekosys.servx` – a small HTTP server on port 4989.
- `nekosys.commands` – picks command words such as `open` out of a sentence.
- `nekosys.cli`, `nekosys.startup_anim`, `nekosys.snips` – argument parsing,
  the start-up throbber and small helpers.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
nekosys
nekosys -c path/to/config.json
nekosys -m path/to/voice-model
```

Options:

- `-c`, `--config CONFIG` – use this configuration file instead of
  `nekosys_config.json` in the directory of the running program.
- `-m`, `--model MODEL` – voice model path; overrides `voice_model` from the
  configuration.
- `-w`, `--web` – accepted and parsed; it changes nothing at present.

On start the command installs the logger, prints the banner, plays the
throbber and loads the modules from `modules/index.toml` in the current
directory (this file must exist). It then parses the options, starts the web
server and checks the configuration, creating it with defaults if needed.

If neither `-m` nor the configuration names a voice model, an error asking
for one is logged and the command exits. Otherwise the model path is logged
and the command runs until the web server stops or Ctrl+C is pressed.

### Logging

The level comes from the `NEKOSYS_LOG` environment variable (`error`,
`warn`, `info`, `debug`, `trace`; anything else means `info`). Set
`NEKOSYS_BACKTRACE` to include the traceback when an uncaught exception is
reported.

### Web server

`servx.init()` creates the `tray` channel, logs the local and network
addresses and serves on `0.0.0.0:4989`:

- `/` – `index.html` from the server root;
- `/public/...` – files under `public/` in the root (a directory serves its
  `index.html`);
- `/api/hello` – the text `servx says hello :)`.

Everything else is 404. The command uses the package directory as the root,
which holds no `index.html`, so `/` answers 404 there; pass another root to
`servx.init(root)` or `servx.make_server(root)` to serve a UI.

## Modules

`modules/index.toml` lists modules by name:

```toml
[modules.hello]
enabled = true
module_path = "modules/hello"
```

Each enabled module directory holds a `module.index.toml`:

```toml
[config]
type = "exe"
exe_path = "modules/hello/hello"
args = ["--quiet"]
env_path = "modules/hello/.env"
```

A module is started only when `type`, `exe_path`, `args` and `env_path` are
all given. The variables in the `.env` file are added to that child process's
environment only; a missing file or a line without a value is logged and
skipped.

## Using the parts from Python

```python
from nekosys import commands, config, nyannel

cfg = config.app_config().filename("nekosys_config").init()
print(cfg.read().voice_model)
cfg.set("voice_model", "models/small")

rx = nyannel.create("tray")
nyannel.send("tray", '{"location": "http://localhost:4989"}')
print(rx.recv(timeout=1))

print(commands.handler("please open browser"))  # [('open', 'browser')]
```

`nyannel.send` raises `ChannelError` for an unknown channel or one with no
open receivers; `Receiver.recv` raises `Lagged` when more than 128 messages
were missed and `TimeoutError` when the timeout runs out.

## What it does not do

- It does not listen to a microphone or recognise speech: the command only
  checks that a voice model path is set. `commands.handler` works on text you
  give it, and the `open` command only logs its target.
- It shows no system-tray icon or menu.
- It ships no web UI files.