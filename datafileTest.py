from pathlib import Path

import h5py
import numpy as np
import pytest

from corrmaster.datafile import DataRef, openStore, sepFilename, toDataRef
from corrmaster.errors import StoreAccessError


def testSepFilename():
  assert sepFilename('/path/to/DataFile/DataFile.mat/ArrayName') == ('/path/to/DataFile/DataFile.mat', 'ArrayName')
  assert sepFilename('/path/to/DataFile.mat') == ('/path/to/DataFile.mat', 'H1')
  assert sepFilename('/path/to/DataFile.mat/') == ('/path/to/DataFile.mat', 'H1')
  assert sepFilename('/old.mat/new.mat/A') == ('/old.mat/new.mat', 'A')
  assert sepFilename('run.h5/group/field') == ('run.h5', 'group/field')
  assert sepFilename('big.hdf5') == ('big.hdf5', 'H1')
  assert sepFilename('field.npy') == ('field.npy', 'H1')
  assert sepFilename('no-extension') == ('no-extension', 'H1')


def testDataRef():
  assert DataRef('a.h5') == DataRef('a.h5', 'H1')
  assert toDataRef('a.mat/M') == DataRef('a.mat', 'M')
  ref = DataRef('b.h5', 'X')
  assert toDataRef(ref) is ref
  assert toDataRef(Path('/data/run.h5')) == DataRef('/data/run.h5', 'H1')
  assert toDataRef(Path('/data/run.h5/field')) == DataRef('/data/run.h5', 'field')
  with pytest.raises(TypeError):
    toDataRef(42)


def testOpenArray():
  x = np.zeros((3, 4))
  with openStore(x) as store:
    assert store is x


def testOpenNpy(tmp_path):
  x = np.random.randn(5, 6)
  np.save(tmp_path / 'x.npy', x)
  with openStore(str(tmp_path / 'x.npy')) as store:
    assert isinstance(store, np.memmap)
    assert np.array_equal(store[1:3, 2:5], x[1:3, 2:5])
  with openStore(tmp_path / 'x.npy') as store:
    assert np.array_equal(store[...], x)


def testOpenHdf5(tmp_path):
  x = np.random.randn(5, 6, 7)
  with h5py.File(tmp_path / 'x.h5', 'w') as f:
    f['H1'] = x
    f['sub/field'] = 2 * x
  with openStore(str(tmp_path / 'x.h5')) as store:
    assert store.shape == (5, 6, 7)
    assert np.array_equal(store[0:2, 1:3, 2:4], x[0:2, 1:3, 2:4])
  with openStore(DataRef(str(tmp_path / 'x.h5'), 'sub/field')) as store:
    assert np.array_equal(store[...], 2 * x)
  with pytest.raises(StoreAccessError):
    with openStore(str(tmp_path / 'x.h5/sub')):
      pass
  with pytest.raises(StoreAccessError):
    with openStore(str(tmp_path / 'x.h5/missing')):
      pass


def testOpenMissing(tmp_path):
  with pytest.raises(StoreAccessError) as info:
    with openStore(str(tmp_path / 'missing.mat/A')):
      pass
  assert info.value.path.endswith('missing.mat')
  assert info.value.arrayName == 'A'
