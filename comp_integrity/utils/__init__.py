"""Shared utilities for frame conversion and file I/O."""

from comp_integrity.utils.frames import records_from_frame, records_to_frame
