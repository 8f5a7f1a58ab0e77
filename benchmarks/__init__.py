"""
Benchmark suite for jsoncomb parsing.

Compares jsoncomb against established JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different document shapes.
Combinator parsing is expected to be far slower than these; the suite tracks
regressions rather than competing with them.
"""
