"""Core parsing, timing and segmentation modules.

WHY: The core package contains the stable heart of the converter:
the Cue IR, the time codec, the lenient SRT parser, the granularity
preset table, karaoke segmentation and the preview projector. These are
consumed by all formatters and must remain backward-compatible.

RULES:
- IR dataclasses are the contract; change with care
- Everything here is pure and synchronous; file output lives in output.py
"""
