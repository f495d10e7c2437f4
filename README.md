# taskframe

Small building blocks for asyncio programs that speak framed protocols.
The package uses nothing outside the standard library.

It has three modules:

- `taskframe.codec`: codecs that turn byte buffers into frames and back.
- `taskframe.framed`: `Framed`, which joins an async byte transport and a
  codec into one object that yields decoded frames and buffers encoded ones.
- `taskframe.runtime`: `Runtime`, a wrapper around one asyncio event loop
  that runs coroutines on the current thread.

## Codecs

A decoder takes bytes from the front of a `bytearray` and returns one frame,
or `None` when it needs more bytes. An encoder appends the serialized item to
a `bytearray`.

- `Decoder` and `Encoder` are the abstract bases. A decoder subclass only has
  to define `decode`. The inherited `decode_eof` returns the next frame, or
  `None` if the buffer is empty. If bytes are left that do not make a frame,
  it raises `ValueError`.
- `BytesCodec` passes bytes through unchanged. `decode` returns everything in
  the buffer as `bytes` and empties the buffer. `encode` appends the given
  bytes.
- `LinesCodec` splits input on `\n` or `\r\n`, and the trailing `\r` is
  dropped. `encode` writes the string as UTF-8 followed by `\n`.
  `decode_eof` also returns a final line that has no newline. Bytes that are
  not valid UTF-8 raise `UnicodeDecodeError`.

```python
from taskframe.codec import LinesCodec

codec = LinesCodec()

out = bytearray()
codec.encode("hello", out)
codec.encode("world", out)
assert bytes(out) == b"hello\nworld\n"

buf = bytearray(b"line 1\r\nline 2\npartial")
assert codec.decode(buf) == "line 1"
assert codec.decode(buf) == "line 2"
assert codec.decode(buf) is None           # no newline yet
assert codec.decode_eof(buf) == "partial"  # the stream has ended
```

## Framed streams

`Framed(io, codec)` works with any transport object that has these
coroutine methods:

- `read(n)` returns up to `n` bytes, or `b""` at the end of the stream.
- `write(data)` writes a prefix of `data` and returns how many bytes it
  wrote.
- `flush()` flushes the transport.
- `shutdown()` closes the writing side.

Reading:

- `await framed.next_item()` reads until a frame decodes. It returns `None`
  once the stream has ended and no frame is left.
- `async for frame in framed` does the same and stops at the end of the
  stream.

Writing:

- `write(item)` encodes the item into the write buffer and does not touch
  the transport.
- `await send(item)` first waits for room in the buffer, then encodes the
  item.
- `await ready()` flushes only when the buffer has reached the 8 KiB
  high-water mark.
- `await flush()` writes the whole buffer and then flushes the transport. It
  raises `OSError` if the transport accepts zero bytes.
- `await close()` flushes the transport and shuts it down. It does not write
  out the buffer, so call `flush()` first.

Buffer state is reported by `is_read_buf_empty()`, `is_write_buf_empty()`,
`is_write_buf_full()` and `is_write_ready()`.

```python
from taskframe.codec import LinesCodec
from taskframe.framed import Framed

async def echo(io):
    framed = Framed(io, LinesCodec())
    async for line in framed:
        await framed.send(line.upper())
        await framed.flush()
    await framed.close()
```

### Changing the codec or transport

These methods return a new `Framed` that keeps the current buffers:

- `replace_codec(codec)` uses a different codec.
- `into_map_codec(func)` uses `func(codec)` as the codec.
- `into_map_io(func)` uses `func(io)` as the transport.

`into_parts()` returns a `FramedParts` dataclass with `io`, `codec`,
`read_buf` and `write_buf`. `Framed.from_parts(parts)` builds a `Framed`
from it again. `FramedParts.with_read_buf(io, codec, read_buf)` starts a
`Framed` with data already in its read buffer.

## Runtime

`Runtime(loop=None)` owns an event loop, which is created by
`default_event_loop()` when none is given.

- `spawn(coro)` schedules a coroutine on the loop and returns its
  `asyncio.Task`.
- `block_on(awaitable)` runs the loop until the awaitable completes and
  returns its result. Spawned tasks run while it does. Tasks still pending
  afterwards stay on the loop and continue at the next `block_on`.
- An exception raised inside a spawned task is re-raised when the task is
  awaited or passed to `block_on`.
- `close()` cancels pending tasks and closes the loop. The runtime is also a
  context manager that calls `close()` on exit.

The module-level `spawn(coro)` schedules a coroutine on the loop running in
the current thread. It raises `RuntimeError` if no loop is running.

```python
from taskframe.runtime import Runtime, spawn

async def compute():
    return 42

async def outer():
    return await spawn(compute())

with Runtime() as rt:
    task = rt.spawn(compute())
    assert rt.block_on(task) == 42
    assert rt.block_on(outer()) == 42
```

## What this package does not do

Each `Runtime` drives one event loop on the thread that calls `block_on`.
The package does not:

- start threads, or manage a group of event loops across threads;
- provide a way to stop such a group as a whole or collect an exit code;
- provide decorators that run an `async def` function as a program entry
  point or test.

It has no command-line interface and no network server. The transport given
to `Framed` is supplied by the caller.