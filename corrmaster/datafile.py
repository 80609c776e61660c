# -*- coding: utf-8 -*-
"""
Field references for out-of-core runs.

A field stored on disk is named either by a `DataRef` or by a single string
of the form

    /path/to/DataFile.mat/ArrayName

where everything up to and including the last recognized container extension
is the path, and the rest (minus its leading `/`) is the name of the array
inside the container. Without an array name, `'H1'` is used. If no extension
is found the whole string is taken as the path.

`.npy` files hold a single array and are memory-mapped; `.mat` (v7.3),
`.h5` and `.hdf5` files are opened with h5py. HDF5 datasets are read in
storage order, so a MATLAB v7.3 array appears with its axes reversed.
"""

import contextlib
import os
from collections import namedtuple
from typing import Tuple

import h5py
import numpy as np

from .errors import StoreAccessError

DEFAULT_ARRAY_NAME = 'H1'
HDF5_EXTENSIONS = ('.mat', '.h5', '.hdf5')
EXTENSIONS = HDF5_EXTENSIONS + ('.npy',)

DataRef = namedtuple('DataRef', ['path', 'arrayName'])
DataRef.__new__.__defaults__ = (DEFAULT_ARRAY_NAME,)


def sepFilename(s: str) -> Tuple[str, str]:
  """Separate `'file.ext/ArrayName'` into `('file.ext', 'ArrayName')`"""
  ends = [(s.rfind(ext) + len(ext)) for ext in EXTENSIONS if s.rfind(ext) >= 0]
  if not ends:
    return s, DEFAULT_ARRAY_NAME
  end = max(ends)
  arrayName = s[end:].lstrip('/')
  return s[:end], arrayName or DEFAULT_ARRAY_NAME


def toDataRef(ref) -> DataRef:
  if isinstance(ref, DataRef):
    return ref
  if isinstance(ref, (str, os.PathLike)):
    return DataRef(*sepFilename(os.fspath(ref)))
  raise TypeError('expected a DataRef, a path or a "file.ext/ArrayName" string, got {}'.format(type(ref)))


def isArrayLike(obj) -> bool:
  return hasattr(obj, 'shape') and hasattr(obj, '__getitem__')


@contextlib.contextmanager
def openStore(ref):
  """Context manager yielding a read-only, sliceable array for `ref`

  `ref` can be a `DataRef`, a reference string (see `sepFilename`), or an
  already-open array (Numpy array, memmap, h5py dataset), which is yielded
  unchanged. Failures to open raise `StoreAccessError`.
  """
  if isArrayLike(ref):
    yield ref
    return

  path, arrayName = toDataRef(ref)
  if path.lower().endswith('.npy'):
    try:
      arr = np.load(path, mmap_mode='r')
    except (OSError, ValueError) as e:
      raise StoreAccessError(path, arrayName, reason=e) from e
    try:
      yield arr
    finally:
      del arr
    return

  try:
    fileHandle = h5py.File(path, 'r')
  except OSError as e:
    raise StoreAccessError(path, arrayName, reason=e) from e
  with fileHandle:
    try:
      dataset = fileHandle[arrayName]
    except KeyError as e:
      raise StoreAccessError(path, arrayName, reason='no such array') from e
    if not isinstance(dataset, h5py.Dataset):
      raise StoreAccessError(path, arrayName, reason='not an array')
    yield dataset
