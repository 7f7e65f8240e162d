# treebuf

Building blocks for writing, reading and inspecting Tree-Buf binary documents.
The package uses only the Python standard library.

## Install

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Modules

- `treebuf.varint`: variable-length unsigned 64-bit integers.
  - `encode_prefix_varint(value, into)` and `encode_suffix_varint(value, into)` append to a mutable byte sequence.
  - `decode_prefix_varint(data, offset)` returns `(value, next_offset)`.
  - `decode_suffix_varint(data, offset)` reads backwards and returns `(value, previous_offset)`. The previous offset is `-1` once the start of the data is passed.
  - `size_for_varint(value)` gives the encoded length in bytes.
- `treebuf.sequences`:
  - `decode_all(data, decoder)` calls `decoder(data, offset) -> (item, offset)` until the data is used up.
  - `delta_encode` and `delta_decode` convert between values and their differences.
- `treebuf.packed_bool`: `encode_packed_bool` and `decode_packed_bool` store eight booleans per byte, least significant bit first. Decoding returns eight booleans for every byte, so a final partial byte comes back padded with `False`.
- `treebuf.rle_bool`:
  - `bool_runs_and_id` splits booleans into runs and picks `RLE_BOOL_TRUE` or `RLE_BOOL_FALSE`. It needs at least 25 items.
  - `decode_rle_bool` expands the runs again.
- `treebuf.rle`:
  - `get_runs` and `rle_decode` do run-length coding of general values.
  - `Rle` is a compressor. It writes the distinct values, then the run lengths, each with its own list of compressors.
- `treebuf.dictionary`:
  - `get_lookup_table` and `dictionary_decode` do dictionary coding.
  - `Dictionary` is the matching compressor.
- `treebuf.gorilla`: XOR compression of 64-bit floats.
  - `compress(values, into)` writes the compressed bytes.
  - `size_for(values)` gives the exact output size.
  - `decompress(data)` reverses `compress`.
- `treebuf.compress`:
  - `compress(data, stream, compressors)` ranks compressors by their size estimate on a sample of at most 256 items. It then uses the first one that succeeds and discards whatever failed attempts wrote.
  - `fast_size_for` returns the smallest estimate.
  - A compressor that cannot help raises `NotCompressible`.
  - `within_rle()` is a context manager that stops run-length coding from nesting on one thread.
- `treebuf.stream`: `EncoderStream` collects the bytes of a document.
  - `encode_with_id` fills in a type-id byte after the value is written.
  - `encode_with_len` records section lengths.
  - `finish()` returns the document with those lengths appended as suffix varints.
- `treebuf.wire`:
  - `RootTypeId` and `ArrayTypeId` list the type ids.
  - `Cursor` reads data forwards and section lengths backwards.
  - `encode_ident` writes a length-prefixed UTF-8 name.
- `treebuf.root_branch` and `treebuf.array_branch`: decode a document into a tree of dataclasses, such as `RootObject`, `RootInteger` and `ArrayInteger`.
  - `decode_root(data)` is the entry point. An empty document decodes to `RootVoid()`.
- `treebuf.stats`: `size_breakdown(data)` reports which paths and encodings take the bytes of a document. The report is text for people to read, not for parsing.
- `treebuf.naming`: `canonical_ident` gives the camelCase form of a field or variant name, which is the form stored on the wire.
- `treebuf.buffer`: `Buffer` is a fixed-capacity list of items. `BufferPool` reuses empty buffers.
- `treebuf.options`:
  - `encode_options` accepts the overrides `LosslessFloat` and `LossyFloatTolerance`.
  - `decode_options` accepts the overrides `EnableParallel` and `DisableParallel`.
  - `parallel(a, b, options)` runs two callables on a thread pool when parallel decoding is on.
- `treebuf.errors`: `DecodeError` is the base class of `SchemaMismatch` and `InvalidFormat`.

## Examples

Varints:

```python
from treebuf.varint import encode_prefix_varint, decode_prefix_varint

buf = bytearray()
encode_prefix_varint(300, buf)
value, offset = decode_prefix_varint(bytes(buf), 0)
assert (value, offset) == (300, 2)
```

Write a small document by hand and decode its structure:

```python
from treebuf.root_branch import RootBoolean, RootObject, decode_root
from treebuf.stream import EncoderStream
from treebuf.wire import RootTypeId, encode_ident

def write_object(stream):
    encode_ident("x", stream)
    stream.encode_with_id(lambda s: RootTypeId.TRUE)
    return RootTypeId.OBJ1

stream = EncoderStream()
stream.encode_with_id(write_object)
document = stream.finish()

assert decode_root(document) == RootObject({"x": RootBoolean(True)})
```

Compress floats:

```python
from treebuf.gorilla import compress, decompress, size_for

values = [1.0, 1.0, 1.5, 2.25]
out = bytearray()
compress(values, out)
assert len(out) == size_for(values)
assert decompress(bytes(out)) == values
```

## What the package does not do

- There is no function that turns ordinary Python objects into a document, or a document back into Python objects. Documents are written by hand through `EncoderStream`, and reading stops at the branch tree from `decode_root`.
- Array columns keep their payload as raw bytes, labelled with their encoding: Simple16, DeltaZig, Zfp and Brotli columns are recognised but not decoded.
- Gorilla-compressed columns can be decompressed with `treebuf.gorilla.decompress`.

## Tests

```
pytest
```