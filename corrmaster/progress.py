# -*- coding: utf-8 -*-
"""Logging setup and progress bars for patched runs"""

import logging
import sys
import time

from tqdm import tqdm

logger = logging.getLogger('corrmaster.progress')


def setupLogging(level=logging.INFO, stream=sys.stdout, **kwargs):
  """
  Set up logging for scripts.

  `level` is a `logging` level or one of `'debug'`, `'info'`, `'warning'`.
  Records go to `stream` prefixed with the seconds since this call. Other
  keyword arguments go to `logging.basicConfig`.
  """
  if isinstance(level, str):
    level = {'info': logging.INFO, 'debug': logging.DEBUG, 'warning': logging.WARNING}[level.lower()]
  for handler in logging.root.handlers[:]:
    logging.root.removeHandler(handler)

  t0 = time.time()

  class ElapsedFormatter(logging.Formatter):

    def format(self, record):
      self._style._fmt = '[%09.2f] ' % (time.time() - t0) + ' %(asctime)s %(name)-22s %(levelname)-8s %(message)s'
      return super().format(record)

  fmt = ElapsedFormatter(datefmt='%m-%d %H:%M ')
  handler = logging.StreamHandler(stream=stream)
  handler.setFormatter(fmt)
  logging.basicConfig(level=level, handlers=[handler], **kwargs)


class ProgressBar:
  """Default progress observer

  Called once per finished window with `(completed, total, firstWindowSeconds)`.
  Shows a `tqdm` bar over the windows and logs the estimated completion time
  after the first one. Keyword arguments go to `tqdm`.
  """

  def __init__(self, log=logger, **kwargs):
    self.log = log
    self.kwargs = dict(desc='windows', unit='win', mininterval=1.0)
    self.kwargs.update(kwargs)
    self.bar = None

  def __call__(self, completed: int, total: int, firstWindowSeconds: float):
    if self.bar is None:
      self.bar = tqdm(total=total, **self.kwargs)
      self.log.info('Estimated completion = %.2f minutes', (total - 1) * firstWindowSeconds / 60)
    self.bar.update(1)
    if completed == total:
      self.close()

  def close(self):
    if self.bar is not None:
      self.bar.close()
      self.bar = None
