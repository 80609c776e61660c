# -*- coding: utf-8 -*-
"""
Partition the core region of a field into windows.

Each axis of the core region (the part of the field whose cells act as
correlation origins) is cut into a run of windows of nominal length
`winmulti * (cutoff + 1)`. The remainder that doesn't divide evenly is spread
over all windows, and whatever is still left over after that goes to the last
window, so every window except the last has the same length.

The windows of all axes are then combined into an iterable of tuples of
slices, each of which addresses one window's core in core coordinates.
"""

import numbers
from itertools import accumulate, product
from typing import List, Optional, Sequence

from .errors import DegenerateAxisError


def planWindows(coreLength: int, cutoff: int, winmulti: int, axis: Optional[int] = None) -> List[int]:
  """Window lengths covering one axis of the core region

  Returns a list of positive integers summing to `coreLength`. `axis` is only
  used to label a `DegenerateAxisError`, raised when not even one window of
  nominal length `winmulti * (cutoff + 1)` fits.

  >> planWindows(20, 1, 3)
  [6, 6, 8]
  """
  if cutoff < 0:
    raise ValueError('cutoff must be >= 0')
  if not isinstance(winmulti, numbers.Integral) or winmulti < 1:
    raise ValueError('winmulti must be an integer >= 1, got {!r}'.format(winmulti))
  nominal = winmulti * (cutoff + 1)
  count = coreLength // nominal if coreLength > 0 else 0
  if count < 1:
    raise DegenerateAxisError(
        axis, count, 'core length {} is shorter than one window ({} = winmulti {} * (cutoff {} + 1))'.format(
            coreLength, nominal, winmulti, cutoff))
  remainder = coreLength % nominal
  buffer = remainder // count
  # equals `remainder % buffer` whenever that tiles the axis without a gap
  leftover = remainder - count * buffer
  size = nominal + buffer
  return [size] * (count - 1) + [size + leftover]


def windowOffsets(plan: Sequence[int]) -> List[int]:
  "Start of each window along an axis, in core coordinates"
  return [stop - size for stop, size in zip(accumulate(plan), plan)]


def windowGrid(plans: Sequence[Sequence[int]]):
  """Iterable of every window's core, as a tuple of slices per axis

  Given one plan per axis (see `planWindows`), returns a lazy iterable over the
  cartesian product of windows. Calling this again restarts the enumeration.
  """
  axisSlices = [[slice(start, start + size)
                 for start, size in zip(windowOffsets(plan), plan)]
                for plan in plans]
  return product(*axisSlices)


def windowCount(plans: Sequence[Sequence[int]]) -> int:
  count = 1
  for plan in plans:
    count *= len(plan)
  return count
