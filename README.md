# ionbin

Low-level building blocks for reading and writing the binary Ion data format.

## What is inside

- `ionbin.decimal`: `Decimal`, an arbitrary-precision decimal equal to `coefficient * 10**exponent`. It keeps its precision and tells positive zero from negative zero. It supports arithmetic (`add`, `sub`, `mul`, `neg`, `abs`, and the `+`, `-`, `*` operators), comparison (`cmp`, `==`, `<` and so on), `shift_left`, `shift_right`, `truncate`, `truncate_to_int`, `round_to_int`, and JSON conversion with `to_json` and `Decimal.from_json`. `parse_decimal` reads text such as `1.23`, `-0d-1` or `12D4`. It raises `DecimalParseError` on bad input.
- `ionbin.bits`: length calculations and encoders for the primitive fields of the binary format:
  - `uint_len` and `encode_uint`
  - `int_len` and `encode_int`
  - `var_uint_len` and `encode_var_uint`
  - `var_int_len` and `encode_var_int`
  - `tag_len` and `encode_tag`
- `ionbin.buf`: `Atom`, `Datagram` and `Container`. These form a tree of partly serialised values. The tree is written to any object with a `write` method once every length is known.
- `ionbin.ctx`: `Context` and `ContextStack`. They track which container a reader or writer is in. An empty stack means the top level.
- `ionbin.byteinput`: `ByteInput`, a position-tracking byte source over `bytes` or a binary stream. It reads and skips var-uints and var-ints, and reads sign-and-magnitude integers and decimals.
- `ionbin.catalog`: `Catalog`, an in-memory collection of shared symbol tables. A table is any object with `name` and `version` attributes. `find_exact` looks up a table by name and version. `find_latest` returns the highest version of a name.
- `ionbin.bitstream`: `Bitstream`, a parser that walks binary Ion one item at a time, together with `Bitcode` and `parse_tag`. Its readers are:
  - `read_bvm`
  - `read_field_id`
  - `read_annotation_ids`
  - `read_int`
  - `read_float`
  - `read_decimal`
  - `read_symbol_id`
  - `read_string`
  - `read_bytes`

  Navigation is done with `next`, `skip_value`, `step_in` and `step_out`.
- `ionbin.errors`: the exception types. `IonError` is the base class. The others are `UsageError`, `IonIOError`, `IonSyntaxError`, `UnexpectedEOFError`, `UnsupportedVersionError`, `InvalidTagByteError`, `UnexpectedRuneError` and `UnexpectedTokenError`.

## Installation

```
pip install ionbin
```

## Examples

Working with decimals:

```python
from ionbin.decimal import parse_decimal

d = parse_decimal("1.23d-1")
print(d.add(parse_decimal("0.5")))              # 6.23d-1
print(parse_decimal("1d3").truncate_to_int())   # 1000
print(parse_decimal("-1d-3").to_json())         # -0.001
```

Encoding integers and tags:

```python
from ionbin.bits import encode_var_uint, encode_tag

encode_var_uint(0x7FFF)   # b"\x01\x7f\xff"
encode_tag(0x40, 0x0E)    # b"\x4e\x8e"
```

Walking a binary stream:

```python
from ionbin.bitstream import Bitstream, Bitcode

stream = Bitstream(bytes([0xE0, 0x01, 0x00, 0xEA, 0x21, 0x05]))
stream.next()
assert stream.code is Bitcode.BVM
print(stream.read_bvm())   # (1, 0)
stream.next()
print(stream.read_int())   # 5
```

## What it does not do

These are the pieces beneath a full Ion library, not the library itself. The package has no:

- high-level reader or writer
- symbol table that resolves symbol IDs to text; `Bitstream` hands back raw IDs
- timestamp type or timestamp reader
- text Ion support
- command-line tool

## Running the tests

```
pip install -e ".[test]"
pytest
```