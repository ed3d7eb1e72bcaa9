"""
Benchmark suite for jleaf parsing performance.

Compares jleaf against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different document shapes.
"""
