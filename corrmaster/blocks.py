# -*- coding: utf-8 -*-
"""
Read one window's block (core plus a `cutoff`-wide halo) out of a store.

A store is anything that can be indexed with a tuple of slices and has a
`shape`: a Numpy array, a memory-mapped `.npy` file, or an HDF5 dataset. Only
the requested sub-array is ever read.

How the halo is filled depends on the boundary convention:

- `'interior'`: the core region is the field minus `cutoff` on each side, so
  every halo lies inside the store.
- `'zero'`: the core region is the whole field and halo cells outside it are
  zeros, just like overlap-save pads the start of its input.
- `'periodic'`: the core region is the whole field and halos wrap around.
"""

from itertools import product
from typing import List, Sequence, Tuple

import numpy as np

from .errors import DegenerateAxisError, OutOfRangeError, StoreAccessError

BOUNDARIES = ('interior', 'zero', 'periodic')


def checkBoundary(boundary: str):
  if boundary not in BOUNDARIES:
    raise ValueError('boundary must be one of {}, got {!r}'.format(BOUNDARIES, boundary))


def coreLength(length: int, cutoff: int, boundary: str, axis=None) -> int:
  """Length of the core region along an axis of `length` cells

  Raises `DegenerateAxisError` unless `length > 2 * cutoff`.
  """
  checkBoundary(boundary)
  if length <= 2 * cutoff:
    raise DegenerateAxisError(
        axis, 0, 'length {} must exceed 2 * cutoff = {}'.format(length, 2 * cutoff))
  return length - 2 * cutoff if boundary == 'interior' else length


def blockRange(core: Sequence[slice], cutoff: int, boundary: str) -> Tuple[slice, ...]:
  """Field-coordinate range of the block around a window core

  `core` is a tuple of slices in core coordinates (one entry of
  `windows.windowGrid`). The returned slices are `cutoff` longer on each side.
  For `'zero'` and `'periodic'` they may start below 0 or stop past the end of
  the field; `readBlock` takes care of those cells.
  """
  shift = 0 if boundary == 'interior' else cutoff
  return tuple(slice(s.start - shift, s.stop - shift + 2 * cutoff) for s in core)


def axisPieces(start: int, stop: int, length: int, boundary: str) -> List[Tuple[slice, slice]]:
  """Split one axis of a block range into contiguous reads

  Returns `(source, destination)` slice pairs: `source` indexes the store and
  `destination` the block. Cells with no source (outside the field with
  `'zero'` boundary) are left out.
  """
  if boundary == 'periodic':
    assert start > -length and stop < 2 * length
    segments = [(start, min(stop, 0), length), (max(start, 0), min(stop, length), 0),
                (max(start, length), stop, -length)]
  else:
    segments = [(max(start, 0), min(stop, length), 0)]
  return [(slice(lo + offset, hi + offset), slice(lo - start, hi - start))
          for lo, hi, offset in segments
          if hi > lo]


def checkRange(ranges: Sequence[slice], shape: Sequence[int], cutoff: int, boundary: str):
  "Raise `OutOfRangeError` if a block can't come from a store of `shape`"
  pad = 0 if boundary == 'interior' else cutoff
  if any(s.start < -pad or s.stop > n + pad for s, n in zip(ranges, shape)):
    raise OutOfRangeError([(s.start, s.stop) for s in ranges], shape)


def readBlock(store, ranges: Sequence[slice], cutoff: int, boundary: str = 'interior', dtype=None) -> np.ndarray:
  """Extract the block `ranges` (see `blockRange`) from `store`

  The result is always a fresh in-memory array of shape
  `[s.stop - s.start for s in ranges]`, converted to `dtype` if given.
  """
  checkBoundary(boundary)
  shape = store.shape
  checkRange(ranges, shape, cutoff, boundary)
  if dtype is None:
    dtype = store.dtype
  try:
    if boundary == 'interior':
      return np.array(store[tuple(ranges)], dtype=dtype)
    block = np.zeros([s.stop - s.start for s in ranges], dtype=dtype)
    pieces = [axisPieces(s.start, s.stop, n, boundary) for s, n in zip(ranges, shape)]
    for combo in product(*pieces):
      source = tuple(src for src, _ in combo)
      dest = tuple(dst for _, dst in combo)
      block[dest] = store[source]
    return block
  except OSError as e:
    path = getattr(store, 'filename', None) or getattr(getattr(store, 'file', None), 'filename', None)
    raise StoreAccessError(path, getattr(store, 'name', None), [(s.start, s.stop) for s in ranges], e) from e
