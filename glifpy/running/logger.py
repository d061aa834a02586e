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
Recording of named quantities during a simulation.
"""

from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np

from glifpy import check
from glifpy._errors import InvalidParameterError, UnknownRecordableError
from glifpy.tools.dicts import DotDict

__all__ = [
    'RecordablesMap',
    'DataLogger',
]

# tolerance of the recording schedule, in ms
_TIME_EPS = 1e-9


class RecordablesMap(object):
    """The registry of quantities a node exposes to data loggers.

    It maps every name to an accessor ``fn(node) -> array``. The order of
    insertion is kept.

    >>> rmap = RecordablesMap([('V_m', lambda node: node.V_m)])
    >>> rmap.get_list()
    ['V_m']
    """

    def __init__(self, entries: Union[Dict[str, Callable], Sequence[Tuple[str, Callable]]] = ()):
        self._entries = dict()
        if isinstance(entries, dict):
            entries = entries.items()
        for name, fn in entries:
            self.insert(name, fn)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.get_list()})'

    def insert(self, name: str, fn: Callable):
        check.is_string(name, name='name')
        check.is_callable(fn, name=name)
        self._entries[name] = fn

    def get_list(self):
        return list(self._entries.keys())

    def __getitem__(self, name: str) -> Callable:
        if name not in self._entries:
            raise UnknownRecordableError(name, self.get_list())
        return self._entries[name]

    def __contains__(self, name):
        return name in self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)


class DataLogger(object):
    """Record named quantities of a node at a fixed interval.

    The logger is connected to a node with ``node.connect_logger(logger)``.
    The node calls :py:meth:`record_data` at the end of every step; the
    quantities are sampled at the first step and then every ``interval`` ms.

    Parameters
    ----------
    record_from: sequence of str
      The names of the recorded quantities. They must be in the
      ``recordables`` registry of the connected node.
    interval: float, optional
      The recording interval in ms. Record every step if ``None``.
    """

    def __init__(self, record_from: Sequence[str], interval: float = None):
        if isinstance(record_from, str):
            record_from = (record_from,)
        self.record_from = tuple(check.is_sequence(record_from, name='record_from', elem_type=str, allow_none=False))
        self.interval = check.is_float(interval, name='interval', allow_none=True)
        if self.interval is not None and self.interval <= 0.:
            raise InvalidParameterError(f'"interval" must be positive, but we got {self.interval}.')
        self.node = None
        self.reset()

    def __repr__(self):
        return f'{self.__class__.__name__}(record_from={self.record_from}, interval={self.interval})'

    def connect(self, node):
        """Validate the recorded names against the recordables of ``node``."""
        for name in self.record_from:
            node.recordables[name]
        self.node = node

    def reset(self):
        self._times = []
        self._values = {name: [] for name in self.record_from}
        self._next_time = None

    def record_data(self, node, t: float):
        if self._next_time is not None and t < self._next_time - _TIME_EPS:
            return
        self._times.append(t)
        for name in self.record_from:
            self._values[name].append(np.asarray(node.recordables[name](node)))
        if self.interval is not None:
            base = t if self._next_time is None else self._next_time
            self._next_time = base + self.interval

    @property
    def data(self) -> DotDict:
        """The recorded ``times`` and one ``(num_record, size)`` array per quantity."""
        res = DotDict(times=np.asarray(self._times, dtype=float))
        for name in self.record_from:
            values = self._values[name]
            res[name] = np.stack(values) if len(values) else np.zeros((0,))
        return res
