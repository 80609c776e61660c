# -*- coding: utf-8 -*-
"""
FFT correlation of one block, restricted to origins in the block's core.

For a block `b` of shape `core + 2 * cutoff` and a mask `m` that is one on the
core and zero on the halo,

    G = ifftn(fftn(b1) * conj(fftn(b2 * m)))

holds, at lag `k`, the sum over core origins `x` of `b1[x + k] * b2[x]`.
Because `|k| <= cutoff` never reaches past the halo, no term wraps around the
FFT, so the FFT may be zero-padded to any convenient length `nfft >= shape`.
Summing `G` over windows that tile a field therefore gives exactly the
counts a single correlation of the whole field would give.
"""

from typing import List, Optional, Sequence

import numpy as np
import scipy.fft as sf
from nextprod import nextprod

from .errors import DimensionalityError, ShapeMismatchError

FFT_PRIMES = [2, 3, 5, 7]


def checkDimensions(shape: Sequence[int]):
  if len(shape) not in (2, 3):
    raise DimensionalityError(len(shape))


def checkShapes(shape1: Sequence[int], shape2: Sequence[int]):
  if tuple(shape1) != tuple(shape2):
    raise ShapeMismatchError(shape1, shape2)


def workingDtype(*dtypes):
  "Float64 for real (or integer, bool) fields, complex128 for complex ones"
  return np.result_type(np.float64, *dtypes)


def coreMask(shape: Sequence[int], core: Sequence[int], cutoff: int) -> np.ndarray:
  """Ones on the centered `core` sub-region of `shape`, zero on the halo

  `shape` must be `core + 2 * cutoff` along every axis.
  """
  assert all(n == c + 2 * cutoff for n, c in zip(shape, core)), "block must be core plus halo"
  mask = np.zeros(shape)
  mask[tuple(slice(cutoff, cutoff + c) for c in core)] = 1.0
  return mask


def cropLags(G: np.ndarray, cutoff: int) -> np.ndarray:
  """Keep lags `-cutoff..cutoff` of an (un-shifted) FFT correlation

  The array is `fftshift`ed so lag zero sits at `n // 2` and then cropped to
  `2 * cutoff + 1` elements per axis, centered on lag zero.
  """
  G = sf.fftshift(G)
  return G[tuple(slice(n // 2 - cutoff, n // 2 + cutoff + 1) for n in G.shape)]


def fftLengths(shape: Sequence[int]) -> List[int]:
  "Fast FFT lengths at least as big as `shape`"
  return [int(nextprod(FFT_PRIMES, n)) for n in shape]


def maskedCorrelation(block1: np.ndarray,
                      block2: Optional[np.ndarray],
                      core: Sequence[int],
                      cutoff: int,
                      nfft: Optional[List[int]] = None) -> np.ndarray:
  """Vector counts contributed by one window

  `block1` supplies the lagged cells and `block2` the origins; pass
  `block2=None` for auto-correlation. Both are `core + 2 * cutoff` long along
  every axis. Returns a `(2 * cutoff + 1)`-per-axis array: element
  `[cutoff + k0, cutoff + k1, ...]` is the sum over origins `x` in the core of
  `block1[x + k] * block2[x]` (`block2[x]` conjugated for complex blocks).

  `nfft` defaults to lengths with small prime factors (see `fftLengths`).
  """
  checkDimensions(block1.shape)
  if block2 is not None:
    checkShapes(block1.shape, block2.shape)
  mask = coreMask(block1.shape, core, cutoff)
  nfft = nfft or fftLengths(block1.shape)
  assert all(f >= n for f, n in zip(nfft, block1.shape)), "nfft can't crop the block"
  origins = (block1 if block2 is None else block2) * mask

  if np.iscomplexobj(block1) or np.iscomplexobj(origins):
    G = sf.ifftn(sf.fftn(block1, nfft) * np.conj(sf.fftn(origins, nfft)))
  else:
    G = sf.irfftn(sf.rfftn(block1, nfft) * np.conj(sf.rfftn(origins, nfft)), nfft)
  return cropLags(G, cutoff)


def circularCorrelation(field1: np.ndarray, field2: Optional[np.ndarray], cutoff: int) -> np.ndarray:
  """Periodic vector counts of whole fields

  Same lag convention as `maskedCorrelation` but every cell is an origin and
  lags wrap around each axis. The FFT is taken at exactly the field's shape,
  since padding would break the wrap-around.
  """
  checkDimensions(field1.shape)
  if field2 is not None:
    checkShapes(field1.shape, field2.shape)
  shape = field1.shape
  if np.iscomplexobj(field1) or np.iscomplexobj(field2):
    F1 = sf.fftn(field1)
    F2 = F1 if field2 is None else sf.fftn(field2)
    G = sf.ifftn(F1 * np.conj(F2))
  else:
    F1 = sf.rfftn(field1)
    F2 = F1 if field2 is None else sf.rfftn(field2)
    G = sf.irfftn(F1 * np.conj(F2), shape)
  return cropLags(G, cutoff)
