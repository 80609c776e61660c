import numpy as np
import pytest

from corrmaster.errors import DegenerateAxisError
from corrmaster.windows import planWindows, windowCount, windowGrid, windowOffsets


def testPlanExamples():
  assert planWindows(18, 1, 3) == [6, 6, 6]
  assert planWindows(20, 1, 3) == [6, 6, 8]  # remainder smaller than window count: all on the last
  assert planWindows(22, 1, 3) == [7, 7, 8]
  assert planWindows(23, 1, 3) == [7, 7, 9]
  assert planWindows(7, 0, 2) == [2, 2, 3]
  assert planWindows(5, 2, 1) == [5]
  assert planWindows(1, 0, 1) == [1]


def testPlanInvariants():
  for cutoff in range(4):
    for winmulti in range(1, 5):
      nominal = winmulti * (cutoff + 1)
      for coreLength in range(nominal, 8 * nominal + 3):
        plan = planWindows(coreLength, cutoff, winmulti)
        assert sum(plan) == coreLength
        assert len(plan) == coreLength // nominal
        assert all(size >= nominal for size in plan)
        assert len(set(plan[:-1])) <= 1
        assert plan[-1] >= plan[0]


def testDegenerateAxis():
  with pytest.raises(DegenerateAxisError) as info:
    planWindows(8, 2, 3, axis=1)
  assert info.value.axis == 1
  assert info.value.count == 0
  with pytest.raises(DegenerateAxisError):
    planWindows(0, 0, 1)


def testBadArguments():
  with pytest.raises(ValueError):
    planWindows(10, -1, 1)
  with pytest.raises(ValueError):
    planWindows(10, 1, 0)
  with pytest.raises(ValueError):
    planWindows(20, 1, 2.0)
  with pytest.raises(ValueError):
    planWindows(20, 1, '2')


def testOffsets():
  assert windowOffsets([6, 6, 8]) == [0, 6, 12]
  assert windowOffsets([5]) == [0]


def testGridCoversCoreOnce():
  plans = [planWindows(20, 1, 3), planWindows(7, 0, 2), planWindows(11, 1, 1)]
  hits = np.zeros([sum(plan) for plan in plans], dtype=int)
  cores = list(windowGrid(plans))
  assert len(cores) == windowCount(plans) == 3 * 3 * 5
  for core in cores:
    hits[core] += 1
  assert np.all(hits == 1)
  # a fresh call starts over
  assert list(windowGrid(plans)) == cores


if __name__ == '__main__':
  testPlanExamples()
  testPlanInvariants()
  testOffsets()
  testGridCoversCoreOnce()
