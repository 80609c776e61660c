from .corrmaster import Accumulator, corrMaster, fullCorrelation, patchedCorrelation
from .datafile import DataRef, openStore, sepFilename
from .errors import (CorrelationCancelled, CorrelationError, DegenerateAxisError, DimensionalityError,
                     OutOfRangeError, ShapeMismatchError, StoreAccessError)
from .progress import ProgressBar, setupLogging
from .windows import planWindows
