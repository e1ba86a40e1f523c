#!/usr/bin/env python3
"""
FBX Time Module
Conversion to KTime, the fixed-point unit FBX uses for key timestamps.
"""

# KTime ticks per second
KTIME_SECOND = 46186158000

DEFAULT_FRAME_RATE = 60


def frame_index_to_ktime(frame_index, frame_rate=DEFAULT_FRAME_RATE):
    """KTime of a frame number sampled at a fixed rate

    Raises:
        ValueError: If frame_rate is not positive
    """
    if frame_rate <= 0:
        raise ValueError(f"Frame rate must be positive, got {frame_rate}")
    return int(round(frame_index * KTIME_SECOND / frame_rate))


def seconds_to_ktime(seconds):
    """KTime of a time value in seconds"""
    return int(round(seconds * KTIME_SECOND))
