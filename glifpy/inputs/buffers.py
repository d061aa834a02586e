# Copyright 2025 BrainX Ecosystem Limited. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""
Delayed input accumulation.
"""

import numpy as np

from glifpy import check
from glifpy._errors import InvalidParameterError

__all__ = [
    'RingBuffer',
]


class RingBuffer(object):
    """Accumulate delayed inputs of a population, one slot per time step.

    The buffer is a rotating array with the shape of ``(max_delay, size)``.
    Values added with a delay of ``d`` steps are summed into the slot which
    is read ``d`` calls of :py:meth:`get_value` later. A delay of ``1``
    means the value arrives in the next read.

    >>> buf = RingBuffer(size=2, max_delay=3)
    >>> buf.add_value(1, 5.)
    >>> buf.add_value(2, 1., index=0)
    >>> buf.get_value()
    array([5., 5.])
    >>> buf.get_value()
    array([1., 0.])

    Parameters
    ----------
    size: int
      The number of neurons.
    max_delay: int
      The number of slots. Delays from 1 up to it are accepted.
    """

    def __init__(self, size: int, max_delay: int = 2):
        self.size = check.is_integer(size, name='size', min_bound=1)
        max_delay = check.is_integer(max_delay, name='max_delay', min_bound=1)
        self.data = np.zeros((max_delay, self.size))
        self.idx = 0

    def __repr__(self):
        return f'{self.__class__.__name__}(size={self.size}, max_delay={self.max_delay})'

    @property
    def max_delay(self) -> int:
        return self.data.shape[0]

    def _slot(self, delay: int) -> int:
        # the slot read by the delay-th call of get_value() from now; with
        # delay == max_delay it is the slot cleared by the last read
        delay = check.is_integer(delay, name='delay', min_bound=1)
        if delay > self.max_delay:
            raise InvalidParameterError(f'The delay {delay} exceeds the buffer capacity. '
                                        f'Delays must not exceed {self.max_delay}.')
        return (self.idx + delay - 1) % self.max_delay

    def add_value(self, delay: int, value, index=None):
        """Accumulate ``value`` into the slot ``delay`` steps ahead.

        ``index`` selects the receiving neurons; all neurons by default.
        """
        slot = self._slot(delay)
        if index is None:
            self.data[slot] += value
        else:
            np.add.at(self.data[slot], index, value)

    def get_value(self) -> np.ndarray:
        """Read and clear the current slot, then advance."""
        value = self.data[self.idx].copy()
        self.data[self.idx] = 0.
        self.idx = (self.idx + 1) % self.max_delay
        return value

    def resize(self, max_delay: int):
        """Grow the buffer to ``max_delay`` slots, keeping pending values."""
        max_delay = check.is_integer(max_delay, name='max_delay', min_bound=1)
        if max_delay <= self.max_delay:
            return
        ordered = np.roll(self.data, -self.idx, axis=0)
        data = np.zeros((max_delay, self.size))
        data[:ordered.shape[0]] = ordered
        self.data = data
        self.idx = 0

    def clear(self):
        self.data[:] = 0.
        self.idx = 0
