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
from typing import Dict

import numpy as np

from glifpy._errors import InvalidParameterError

__all__ = [
    'SpikeArchive',
]


class SpikeArchive(object):
    """Spike history of a population.

    Keeps the time of the last spike (``-1`` before the first one) and the
    number of emitted spikes of every neuron. Its fields are merged into the
    status dictionary of the owning node.
    """

    keys = ('t_spike', 'spike_count')

    def __init__(self, size: int):
        self.size = size
        self.reset()

    def reset(self):
        self.t_spike = np.full((self.size,), -1., dtype=float)
        self.spike_count = np.zeros((self.size,), dtype=int)

    def record(self, t: float, spike):
        spike = np.asarray(spike, dtype=bool)
        self.t_spike = np.where(spike, t, self.t_spike)
        self.spike_count = self.spike_count + spike

    def get(self, d: Dict):
        d['t_spike'] = self.t_spike.copy()
        d['spike_count'] = self.spike_count.copy()
        return d

    def set(self, d: Dict) -> 'SpikeArchive':
        """Return a copy updated with the archive entries of ``d``."""
        a = SpikeArchive(self.size)
        a.t_spike = self.t_spike.copy()
        a.spike_count = self.spike_count.copy()
        if 't_spike' in d:
            a.t_spike = self._as_array(d['t_spike'], 't_spike', float)
        if 'spike_count' in d:
            a.spike_count = self._as_array(d['spike_count'], 'spike_count', int)
            if np.any(a.spike_count < 0):
                raise InvalidParameterError(f'"spike_count" must not be negative, but we got {a.spike_count}.')
        return a

    def _as_array(self, value, name, dtype):
        try:
            arr = np.asarray(value, dtype=dtype)
        except (TypeError, ValueError):
            raise InvalidParameterError(f'"{name}" must be numeric, but we got {value!r}.') from None
        if arr.shape not in ((), (self.size,)):
            raise InvalidParameterError(f'"{name}" must be a scalar or have the shape ({self.size},), '
                                        f'but we got {arr.shape}.')
        return np.broadcast_to(arr, (self.size,)).copy()
