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
import logging
import time
from typing import Callable, Dict, Sequence, Union

import numpy as np
import tqdm.auto

from glifpy import check
from glifpy._errors import MonitorError, RunningError
from glifpy.context import share
from glifpy.math import environment
from glifpy.tools.dicts import DotDict

__all__ = [
    'GLIFRunner',
]

logger = logging.getLogger('glifpy.running')


class GLIFRunner(object):
    """The runner for a :py:class:`~.GLIF` population.

    It calibrates the target with its own time step and drives it step by
    step. Before every step, the time ``t``, the step index ``i`` and the
    step size ``dt`` are saved into :py:data:`glifpy.share`.

    Parameters
    ----------
    target : GLIF
      The target population.
    monitors: Optional, sequence of str, dict
      Quantities to monitor.

      - A list of string. Like ``monitors=['V_m', 'threshold', 'spike']``.
        The names must be recordables of the target, or ``'spike'``.
      - A dict with the callable function, like
        ``monitors={'V0': lambda: model.V_m[0]}``.
    inputs: float, ArrayType, callable, optional
      The default external current, used when :py:meth:`run` gets no inputs.

      - A scalar, injected into all neurons at every step.
      - An array with the shape of ``(num_step,)`` or ``(num_step, size)``.
      - A callable ``f(t, dt)`` returning the current of the step.
    dt: float, optional
      The time step. Default is ``glifpy.math.get_dt()``.
    t0: float
      The start time of the simulation.
    progress_bar: bool
      Use progress bar to report the running progress or not?
    """

    def __init__(
        self,
        target,
        monitors: Union[Sequence[str], Dict[str, Callable]] = None,
        inputs=None,
        dt: float = None,
        t0: float = 0.,
        progress_bar: bool = True,
    ):
        for attr in ('update', 'calibrate', 'reset_state', 'recordables', 'add_spike_callback'):
            if not hasattr(target, attr):
                raise RunningError(f'"target" must be a GLIF population, but we got {type(target)}.')
        self.target = target
        self.dt = check.is_float(environment.get_dt() if dt is None else dt, name='dt')
        if self.dt <= 0.:
            raise RunningError(f'"dt" must be positive, but we got {self.dt}.')
        self.t0 = check.is_float(t0, name='t0')
        self.progress_bar = progress_bar
        self._inputs = inputs
        self._monitors = self._format_monitors(monitors)

        self.mon = DotDict()
        self.spike_events = []
        self.i0 = 0
        target.add_spike_callback(self._record_spike_event)

    def __repr__(self):
        return f'{self.__class__.__name__}(target={self.target!r}, dt={self.dt})'

    def _format_monitors(self, monitors) -> Dict[str, Callable]:
        if monitors is None:
            return dict()
        res = dict()
        if isinstance(monitors, dict):
            for key, fn in monitors.items():
                if not isinstance(key, str):
                    raise MonitorError(f'The monitor key must be a string, but we got {key!r}.')
                if not callable(fn):
                    raise MonitorError(f'The monitor "{key}" must be a callable function, '
                                       f'but we got {type(fn)}.')
                res[key] = fn
        elif isinstance(monitors, (list, tuple)):
            for key in monitors:
                if not isinstance(key, str):
                    raise MonitorError(f'The monitor name must be a string, but we got {key!r}.')
                if key == 'spike':
                    res[key] = lambda: self.target.spike
                elif key in self.target.recordables:
                    res[key] = self._recordable_monitor(key)
                else:
                    raise MonitorError(f'"{key}" cannot be monitored. Available quantities are '
                                       f'{["spike"] + self.target.recordables.get_list()}.')
        else:
            raise MonitorError(f'"monitors" must be a sequence of str or a dict, but we got {type(monitors)}.')
        return res

    def _recordable_monitor(self, key):
        fn = self.target.recordables[key]
        return lambda: fn(self.target)

    def _record_spike_event(self, t, index, offset):
        self.spike_events.append((t, index, offset))

    def reset_state(self):
        """Reset state of the ``GLIFRunner``."""
        self.i0 = 0
        self.spike_events.clear()

    def _get_input_time_step(self, duration=None, xs=None) -> int:
        """Get the length of time step in the given ``duration`` and ``xs``."""
        if duration is not None:
            num_step = int(round(duration / self.dt))
            if isinstance(xs, np.ndarray) and xs.ndim > 0 and xs.shape[0] != num_step:
                raise RunningError(f'The inputs have {xs.shape[0]} time steps, but the '
                                   f'duration {duration} needs {num_step} steps.')
            return num_step
        if isinstance(xs, np.ndarray) and xs.ndim > 0:
            return xs.shape[0]
        raise RunningError('Please provide "duration", or "inputs" with the time information.')

    def _input_fun(self, inputs) -> Callable:
        if inputs is None:
            return lambda i, t: None
        if callable(inputs):
            return lambda i, t: inputs(t, self.dt)
        if isinstance(inputs, np.ndarray) and inputs.ndim > 0:
            if inputs.ndim > 2 or (inputs.ndim == 2 and inputs.shape[1] not in (1, self.target.size)):
                raise RunningError(f'The inputs must have the shape of (num_step,) or (num_step, '
                                   f'{self.target.size}), but we got {inputs.shape}.')
            return lambda i, t: inputs[i]
        return lambda i, t: inputs

    def run(self, duration: float = None, inputs=None, reset_state: bool = False, eval_time: bool = False):
        """Run the target for ``duration`` ms, continuing from the previous run.

        Parameters
        ----------
        duration: float
          The simulation time length.
          If the ``inputs`` is an array, there is no need to provide ``duration``.
        inputs: float, ArrayType, callable, optional
          The external current. Default is the ``inputs`` of the runner.
        reset_state: bool
          Whether reset the target and restart the time.
        eval_time: bool
          Whether to evaluate the running time.

        Returns
        -------
        spikes: np.ndarray
          The spike raster with the shape of ``(num_step, size)``, with the
          running time before it when ``eval_time`` is True.
        """
        inputs = self._inputs if inputs is None else inputs
        if isinstance(inputs, (list, tuple)):
            inputs = np.asarray(inputs, dtype=float)
        num_step = self._get_input_time_step(duration, inputs)
        input_fun = self._input_fun(inputs)

        # reset the states of the model and the runner
        if reset_state:
            self.target.reset_state()
            self.reset_state()
        self.target.calibrate(self.dt)

        indices = np.arange(self.i0, self.i0 + num_step)
        hists = {key: [] for key in self._monitors.keys()}
        spikes = []

        # init progress bar
        if self.progress_bar:
            self._pbar = tqdm.auto.tqdm(total=num_step)
            self._pbar.set_description(f'Running {num_step} steps: ', refresh=True)

        logger.debug('Run %s for %d steps from t=%s ms.', self.target, num_step, self.t0 + self.i0 * self.dt)
        if eval_time:
            t0 = time.time()
        for local_i, i in enumerate(indices):
            t = self.t0 + i * self.dt
            share.save(t=t, i=int(i), dt=self.dt)
            spikes.append(self.target.update(input_fun(local_i, t)))
            for key, fn in self._monitors.items():
                hists[key].append(np.asarray(fn()))
            if self.progress_bar:
                self._pbar.update()
        if eval_time:
            running_time = time.time() - t0

        # close the progress bar
        if self.progress_bar:
            self._pbar.close()

        # post-running for monitors
        self.mon = DotDict(hists).to_numpy()
        self.mon['ts'] = indices * self.dt + self.t0
        self.i0 += num_step
        logger.debug('Finished %d steps of %s.', num_step, self.target)

        spikes = np.asarray(spikes, dtype=bool).reshape((num_step, self.target.size))
        return spikes if not eval_time else (running_time, spikes)

    def __call__(self, *args, **kwargs):
        """Same as :py:func:`~.GLIFRunner.run`."""
        return self.run(*args, **kwargs)
