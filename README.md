# workbench

A set of small, independent tools and libraries in one package.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Command-line tools

| Command | What it does |
|---|---|
| `workbench-calc PROGRAM...` | Evaluates each argument as a program of `;`-separated expressions with `+ - * /`, unary minus, parentheses, variables (`x = 1`, unknown names are 0) and the constants `pi` and `e`, printing one result per expression. Division by zero gives `inf`, `-inf` or `NaN`. |
| `workbench-wc FILE...` | Prints `COUNT FILE` for each file, counting whitespace-separated words. A file that cannot be opened or holds no words is reported on standard error and the command exits with status 1. |
| `workbench-rolldice [-n N] [-r ROWSIZE]` | Rolls N six-sided dice (default 1) and draws them as ASCII art, at most ROWSIZE per row (`-r`/`--rowsize`, default 8, must be greater than 0). |
| `workbench-clog` | Reads log lines on standard input and prints them coloured by time, source and severity (`ERROR`, `WARNING`, `INFO`). |
| `workbench-webserver [--root DIR] [--host HOST] [--port PORT]` | An HTTP server on a pool of four worker threads, default `127.0.0.1:8080`. `GET /` answers with `DIR/index.html`, `GET /sleep` does the same after five seconds, anything else gets `DIR/404.html` with status 404. `DIR` defaults to `web-server`. |
| `workbench-shell` | An interactive shell at a `> ` prompt that runs commands and `|` pipelines, with single-quoted arguments; it exits at end of input. |
| `workbench-hello` | An HTTP server on `127.0.0.1:3000` that answers every request with `Hello, World!`. |
| `workbench-tftp COMMAND FILE` | One TFTP transfer against `127.0.0.1:34254`: `upload` and `download` act as a client, `send` and `recv` wait as a server for one read or write request. |
| `workbench-filestore` | An in-memory file store over HTTP on `127.0.0.1:8080`: `PUT` or `POST /{name}` stores the body, `GET /{name}` returns it as `application/octet-stream`, `DELETE /{name}` removes it; unknown names and other paths give 404. |
| `workbench-gameserver [--host HOST] [--port PORT]` | A WebSocket game server, default `127.0.0.1:8080`. Each client gets a square that moves 10 units on the text messages `L`, `R`, `U`, `D`; every 100 ms all clients receive a JSON array of every entity. |
| `workbench-wisdom [EVENT.json]` | Reads one voice-assistant request as JSON from the file or standard input and prints the JSON response, which speaks a programming quote. |

Example:

```
$ workbench-calc "r = 10; a = pi * r * r"
Calculating r = 10; a = pi * r * r
10
314.1592653589793
```

## Libraries

- `workbench.calculator`: `tokenize(text)`, `Token`, `TokenKind`, and `Calculator(tokens).calculate()`, which returns the result lines.
- `workbench.wordcount`: `count_words(stream)` on text or binary line streams; raises `EmptySourceError` when there are no words.
- `workbench.bloom`: `BloomFilter(items_count, fp_rate)` with `add` and `in`, plus `bitmap_size` and `optimal_k`.
- `workbench.dice`: `RollResult` (its `str()` is the drawn die), `RollResult.from_number`, `roll`, `multizip`, `format_row`.
- `workbench.socks5`: `ResponseCode` and `SocksReply(status).to_bytes()`, a 10-byte reply with an all-zero IPv4 bound address.
- `workbench.clog`: `parse_line`, `Field`, `StyleSheet`, `ParseError`.
- `workbench.ebml`: readers `vint`, `vid`, `vsize`, `uint`, `read_bool`, `read_float`, `read_string`, `binary`, `skip`, each returning `(rest, value)`; `EBMLHeader`, `EBMLSegment` and `parse`. Short input raises `IncompleteError`.
- `workbench.matroska`: `Level1Element.parse` with `ElementKind`, and the structures `SeekHead`, `Seek`, `Info`, `Tracks`, `Track`, `Video`, `Audio`, `ContentEncodings`.
- `workbench.threadpool`: `ThreadPool(size)` with `execute` and `shutdown`, usable as a context manager.
- `workbench.webserver`: `build_response(request, root)` and `handle_connection(conn, root)`.
- `workbench.shell`: `parse_command_line`, `Command`, `Pipeline`, `parse_and_execute`.
- `workbench.hello`: `make_server(host, port)` and `HelloHandler`.
- `workbench.tftp`: packets `ReadRequest`, `WriteRequest`, `DataPacket`, `AckPacket`, `ErrorPacket` with `to_bytes`, `parse_packet`, and the `Sender` and `Receiver` state machines.
- `workbench.tftp_transfer`: `upload`, `download`, `serve_file`, `receive_file`.
- `workbench.filestore`: `FileStore` (`put`, `get`, `delete`), `FileStoreHandler`, `make_server(host, port, store)`.
- `workbench.gameserver`: `Entity`, `GameState` and the `serve(host, port)` coroutine.
- `workbench.alexa`: request and response dataclasses; `RequestRoot.from_dict` and `ResponseRoot.to_dict` use the camel-case JSON keys.
- `workbench.wisdom`: `build_quote_response(quote, author)` and `handler(event, context)`.

```python
from workbench.bloom import BloomFilter

bf = BloomFilter(100, 0.01)
bf.add("item")
assert "item" in bf
```

## What it does not do

- `workbench-webserver` ships no pages; put `index.html` and `404.html` in the directory given by `--root`.
- The TFTP tools perform a single transfer with no timeouts or retransmission, and only in octet mode.
- `workbench.socks5` only encodes reply messages; there is no SOCKS proxy server.
- The shell has no redirection, variables or built-in commands such as `cd`.
- The Matroska reader skips clusters, cues, chapters, tags, attachments and content encodings without decoding them.
- `workbench-wisdom` answers one event from a file or standard input; it does not connect to any hosted skill runtime.
- The servers bind fixed local addresses where no options are listed above.

## Tests

```
pytest
```