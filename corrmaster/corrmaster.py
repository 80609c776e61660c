# -*- coding: utf-8 -*-

import contextlib
import logging
import numbers
import time
from typing import Optional

import numpy as np

from .blocks import blockRange, checkBoundary, coreLength, readBlock
from .datafile import openStore
from .errors import CorrelationCancelled
from .kernel import checkDimensions, checkShapes, circularCorrelation, maskedCorrelation, workingDtype
from .progress import ProgressBar
from .windows import planWindows, windowCount, windowGrid

logger = logging.getLogger('corrmaster.engine')


def checkCutoff(cutoff):
  if not isinstance(cutoff, numbers.Integral) or cutoff < 0:
    raise ValueError('cutoff must be a non-negative integer, got {!r}'.format(cutoff))


class Accumulator:
  """Running sum of per-window vector counts

  Holds a zeroed `(2 * cutoff + 1)`-per-axis array that every window's
  contribution is added into. One accumulator belongs to one run.
  """

  def __init__(self, cutoff: int, ndim: int, dtype=np.float64):
    self.total = np.zeros([2 * cutoff + 1] * ndim, dtype=dtype)
    self.count = 0

  def add(self, contribution: np.ndarray):
    assert contribution.shape == self.total.shape, "contribution must cover lags -cutoff..cutoff"
    self.total += contribution
    self.count += 1
    return self.total


def fullCorrelation(field1: np.ndarray,
                    cutoff: int,
                    field2: Optional[np.ndarray] = None,
                    boundary: str = 'interior') -> np.ndarray:
  """Vector counts of in-memory fields

  Given a 2D or 3D array `field1` (and, for cross-correlation, `field2` of the
  same shape), returns the `(2 * cutoff + 1)`-per-axis array whose element
  `[cutoff + k0, cutoff + k1, ...]` is the sum over origins `x` of
  `field1[x + k] * field2[x]` (`field2 = field1` for auto-correlation, and
  `field2[x]` conjugated if complex).

  `boundary` picks the origins and what lies past the edges:

  - `'interior'`: origins are the cells at least `cutoff` from every edge;
  - `'zero'`: every cell is an origin and cells past the edges are zero;
  - `'periodic'`: every cell is an origin and the field wraps around (a plain
    circular FFT correlation of the whole field).

  The whole field is transformed at once. For fields that don't fit in memory
  several times over, use `patchedCorrelation`, which gives the same answer.
  """
  checkCutoff(cutoff)
  checkBoundary(boundary)
  field1 = np.asarray(field1)
  checkDimensions(field1.shape)
  if field2 is not None:
    field2 = np.asarray(field2)
    checkShapes(field1.shape, field2.shape)
  core = [coreLength(n, cutoff, boundary, axis) for axis, n in enumerate(field1.shape)]

  dtype = workingDtype(field1.dtype, *([] if field2 is None else [field2.dtype]))
  field1 = field1.astype(dtype, copy=False)
  field2 = None if field2 is None else field2.astype(dtype, copy=False)

  if boundary == 'periodic':
    return circularCorrelation(field1, field2, cutoff)
  if boundary == 'zero':
    field1 = np.pad(field1, cutoff)
    field2 = None if field2 is None else np.pad(field2, cutoff)
  return maskedCorrelation(field1, field2, core, cutoff)


def patchedCorrelation(dataFile,
                       cutoff: int,
                       winmulti: int,
                       dataFile2=None,
                       boundary: str = 'interior',
                       progress=None,
                       cancel=None) -> np.ndarray:
  """Low-memory vector counts of fields on disk

  Same result as `fullCorrelation` (to floating-point accuracy), but the field
  is processed one window at a time: each window's core, plus a `cutoff`-wide
  halo, is read from the store, correlated with the halo masked out of the
  origins, and added to the total. `dataFile2`, if given, makes this a
  cross-correlation.

  `dataFile` and `dataFile2` are `datafile.DataRef`s, `'file.ext/ArrayName'`
  strings (see `datafile.sepFilename`), or already-open sliceable arrays such
  as memmaps or h5py datasets.

  `winmulti` sets the nominal window core to `winmulti * (cutoff + 1)` cells
  per axis. Bigger windows use more memory but recompute fewer halos: a
  `winmulti` of 1 uses the least memory and is the slowest.

  `progress` is called after each window with `(completed, total,
  firstWindowSeconds)`; by default a `progress.ProgressBar` shows it, and
  `progress=False` turns reporting off. `cancel`, if given, is checked before
  each window (anything with `is_set()`, like `threading.Event`) and raises
  `CorrelationCancelled` once set.
  """
  checkCutoff(cutoff)
  checkBoundary(boundary)
  with contextlib.ExitStack() as stack:
    if progress is None:
      progress = ProgressBar()
      stack.callback(progress.close)
    store1 = stack.enter_context(openStore(dataFile))
    store2 = None if dataFile2 is None else stack.enter_context(openStore(dataFile2))
    shape = tuple(store1.shape)
    checkDimensions(shape)
    if store2 is not None:
      checkShapes(shape, store2.shape)

    plans = [
        planWindows(coreLength(n, cutoff, boundary, axis), cutoff, winmulti, axis)
        for axis, n in enumerate(shape)
    ]
    total = windowCount(plans)
    logger.info('Field %s, cutoff %d, winmulti %d: %s windows per axis (%d in all)', shape, cutoff,
                winmulti, [len(plan) for plan in plans], total)

    dtype = workingDtype(store1.dtype, *([] if store2 is None else [store2.dtype]))
    acc = Accumulator(cutoff, len(shape), dtype)
    firstWindowSeconds = 0.0
    for core in windowGrid(plans):
      if cancel is not None and cancel.is_set():
        raise CorrelationCancelled(acc.count, total)
      tic = time.perf_counter()

      ranges = blockRange(core, cutoff, boundary)
      block1 = readBlock(store1, ranges, cutoff, boundary, dtype)
      block2 = None if store2 is None else readBlock(store2, ranges, cutoff, boundary, dtype)
      acc.add(maskedCorrelation(block1, block2, [s.stop - s.start for s in core], cutoff))
      logger.debug('window %d/%d: block %s', acc.count, total, [(s.start, s.stop) for s in ranges])

      if acc.count == 1:
        firstWindowSeconds = time.perf_counter() - tic
      if progress:
        progress(acc.count, total, firstWindowSeconds)
    return acc.total


def corrMaster(memtype: str, corrtype: str, cutoff: int, *args, **kwargs) -> np.ndarray:
  """Vector counts for two-point statistics

  A proper two-point statistic calls this twice, once on the field and once
  on a reference (e.g., indicator) field, and divides the two.

  - `corrMaster('full', 'auto', cutoff, H1)`
  - `corrMaster('full', 'cross', cutoff, H1, H2)`
  - `corrMaster('patched', 'auto', cutoff, dataFile, winmulti)`
  - `corrMaster('patched', 'cross', cutoff, dataFile, winmulti, dataFile2)`

  Keyword arguments go to `fullCorrelation` or `patchedCorrelation`. The
  result has `2 * cutoff + 1` elements along every axis.

  `boundary` decides which cells count as origins and defaults to
  `'interior'`, where only cells at least `cutoff` from every edge do. For a
  10 by 10 field of ones and `cutoff=1` that gives 64 at every lag. Use
  `boundary='zero'` to count every cell, with cells past the edges taken as
  zero (100 at lag zero, 90 at the unit lags, 81 on the diagonals), or
  `boundary='periodic'` for a circular correlation over the whole field (100
  everywhere), which is what a plain whole-array FFT gives.
  """
  nargs = {
      ('full', 'auto'): 1,
      ('full', 'cross'): 2,
      ('patched', 'auto'): 2,
      ('patched', 'cross'): 3,
  }
  if (memtype, corrtype) not in nargs:
    raise ValueError("memtype must be 'full' or 'patched' and corrtype 'auto' or 'cross', got {!r}, {!r}".format(
        memtype, corrtype))
  if len(args) != nargs[(memtype, corrtype)]:
    raise TypeError('{}/{} takes {} data arguments, got {}'.format(memtype, corrtype,
                                                                  nargs[(memtype, corrtype)], len(args)))
  cross = corrtype == 'cross'
  if memtype == 'full':
    return fullCorrelation(args[0], cutoff, args[1] if cross else None, **kwargs)
  return patchedCorrelation(args[0], cutoff, args[1], args[2] if cross else None, **kwargs)
