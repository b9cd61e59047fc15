# tigerkernel

A compact, self-contained model of a small hobby kernel. It gathers the
pieces such a kernel is built from into plain Python objects that you can
drive, inspect and test:

- **Memory**: `PageAllocator` (`tigerkernel.page_alloc`) hands out and takes
  back page-aligned addresses from a fixed range. It reports which pages it
  owns and raises `MemoryError` when no page is left.
- **Console**: `Console` (`tigerkernel.console`) writes to and reads from a
  pair of binary streams and turns each newline into CR LF.
- **Time and tasks**: `Clock` and `Timer` (`tigerkernel.clock`) program
  periodic timer deadlines. `TaskTable` and `Task` (`tigerkernel.task`) hold
  task control blocks. `RoundRobinScheduler` (`tigerkernel.sched`) switches
  between runnable tasks on every timer interrupt.
- **Traps**: `TrapHandler` (`tigerkernel.trap`) sends timer interrupts to the
  clock and the scheduler and handles the breakpoint self-test. It raises
  `TrapHalt` on any trap it does not expect.
- **Shell building blocks**:
  - `LineReader` (`tigerkernel.line_io`) reads lines with echo and backspace.
  - `split_args` and `parse_with_redirection` (`tigerkernel.parser`) handle
    one pipe and `>` / `>>` redirection, and raise `ParseError` on
    malformed input.
  - `FdTable` (`tigerkernel.fd_table`) sends stdout to the console or to a
    capture buffer and holds stdin text.
  - `PathState` and `FileStore` (`tigerkernel.path_state`) provide an
    in-memory directory tree with seed files and writable files.
- **Window manager**:
  - `Window`, `LayerStack`, `Focus`, `Framebuffer` and `Compositor` draw
    overlapping windows and return a deterministic FNV-1a checksum of the
    frame.
  - `EventQueue` and `DragController` turn queued mouse events into moves,
    clicks and title-bar drags.
  - `KeyboardDispatcher` routes key events to the endpoint bound to the
    focused window.
- **Terminals**: each `TerminalSession` has its own `PathState`.
  - It runs `help`, `echo`, `pwd`, `cd`, `mkdir`, `ls` and `cat`, and folds
    each result into a marker hash rather than printing it.
  - `TerminalWindow` pairs a session with a window.
  - `TerminalRouter` attaches terminal windows to a compositor and delivers
    keys to them by endpoint.
- **Boot checks**: `run_boot_checks` (`tigerkernel.boot`) runs the graphics,
  window, mouse and keyboard self-tests. It logs their markers to a console
  and returns a `BootReport`.

## Installation

```
pip install .
```

Only the standard library is needed at run time.

## Examples

```python
from tigerkernel.page_alloc import PageAllocator
from tigerkernel.parser import parse_with_redirection, ParseError

allocator = PageAllocator(0x80000000, 0x80004000)
page = allocator.alloc()
assert allocator.owns(page)
allocator.free(page)

result = parse_with_redirection("echo sink pipe | cat > /tmp/piped.txt")
assert result.left == ["echo", "sink", "pipe"]
assert result.right == ["cat"]
assert result.redir_path == "/tmp/piped.txt"

try:
    parse_with_redirection("| cat")
except ParseError:
    pass
```

The filesystem starts with `/etc`, `/home` and `/tmp`, and with the files
`/hello.txt`, `/etc/motd` and `/home/readme.txt`:

```python
from tigerkernel.path_state import FileStore, PathState

paths = PathState(FileStore())
paths.write_file("/tmp/out.txt", "alpha\n")
paths.write_file("/tmp/out.txt", "beta\n", append=True)
assert paths.cat("/tmp/out.txt") == "alpha\nbeta\n"
print([entry.name for entry in paths.ls("/")])
```

Compositor checksums depend only on the window layout and colours, so they
work well as regression markers:

```python
from tigerkernel.framebuffer import Framebuffer
from tigerkernel.compositor import Compositor
from tigerkernel.window import Window

fb = Framebuffer(640, 480, 640)
compositor = Compositor(fb)
compositor.reset(0x00161C26)
compositor.add_window(Window("Terminal", 32, 20, 220, 140))
marker = compositor.render()
```

## What it does not do

The package has no interactive shell and installs no command. It provides
the line reader, the parser, the stream table and the filesystem, but
nothing that runs typed commands at a prompt, prints their output, or
connects pipes and redirection to command execution. `TerminalSession`
runs its commands only to update its marker hash; it produces no output.

## Running the tests

```
pip install .[test]
pytest
```