# -*- coding: utf-8 -*-
"""Exceptions raised while computing vector counts

Every one of these aborts the run: no partially-filled result is returned.
"""


class CorrelationError(Exception):
  "Base class of everything `corrmaster` raises on its own"


class DimensionalityError(CorrelationError, ValueError):
  "Field has neither 2 nor 3 axes"

  def __init__(self, ndim: int):
    self.ndim = ndim
    super().__init__('Incorrect Number of Dimensions! Expected 2 or 3, got {}'.format(ndim))


class ShapeMismatchError(CorrelationError, ValueError):
  "The two fields of a cross-correlation differ in shape"

  def __init__(self, shape1, shape2):
    self.shape1 = tuple(shape1)
    self.shape2 = tuple(shape2)
    super().__init__('cross-correlation needs fields of identical shape, got {} and {}'.format(
        self.shape1, self.shape2))


class DegenerateAxisError(CorrelationError, ValueError):
  """Cutoff and window multiplier leave no window on an axis

  `axis` is the offending axis (or None if unknown) and `count` the number of
  windows that would fit.
  """

  def __init__(self, axis, count: int, message: str):
    self.axis = axis
    self.count = count
    super().__init__('axis {}: {} (window count {})'.format(axis, message, count))


class OutOfRangeError(CorrelationError, IndexError):
  "A block's extraction range falls outside the store"

  def __init__(self, ranges, shape):
    self.ranges = tuple(ranges)
    self.shape = tuple(shape)
    super().__init__('extraction range {} exceeds store of shape {}'.format(self.ranges, self.shape))


class StoreAccessError(CorrelationError):
  "Opening a store or reading a block from it failed"

  def __init__(self, path, arrayName, ranges=None, reason=None):
    self.path = path
    self.arrayName = arrayName
    self.ranges = ranges
    where = '{}:{}'.format(path, arrayName)
    if ranges is not None:
      where += ' range {}'.format(tuple(ranges))
    super().__init__('cannot read {}{}'.format(where, ': {}'.format(reason) if reason else ''))


class CorrelationCancelled(CorrelationError):
  "The cancellation token was set between two windows"

  def __init__(self, completed: int, total: int):
    self.completed = completed
    self.total = total
    super().__init__('cancelled after {} of {} windows'.format(completed, total))
