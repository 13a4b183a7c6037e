"""Shared type definitions for dotview."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

# Absolute path of the single watched DOT file
type WatchedFile = Path

# Monotonic snapshot revision
type Revision = int

# SSE client identifier
type ClientID = str
