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
import itertools
import logging
from typing import Callable, Dict, Union

import jax.numpy as jnp
import numpy as np

from glifpy import check
from glifpy._errors import (ContractViolationError,
                            InvalidParameterError,
                            UnknownReceptorTypeError)
from glifpy.context import share
from glifpy.inputs.buffers import RingBuffer
from glifpy.integrators.linear import get_method_flag
from glifpy.math import environment
from glifpy.neurons.archive import SpikeArchive
from glifpy.neurons.model_types import (glif_model_name,
                                        has_spike_threshold,
                                        has_voltage_threshold)
from glifpy.neurons.params import (GLIFParameters,
                                   GLIFState,
                                   GLIFVariables,
                                   refractory_steps)
from glifpy.neurons.updates import get_update_function
from glifpy.running.logger import DataLogger, RecordablesMap

__all__ = [
    'GLIF',
]

logger = logging.getLogger('glifpy.neurons')

_READ_ONLY_KEYS = ('ASCurrents_sum', 'threshold', 'I', 'recordables', 'size', 'glif_model_name')

_name_counter = itertools.count()


class GLIF(object):
    r"""A population of Generalized Leaky Integrate-and-Fire neurons.

    **Model Descriptions**

    The GLIF family [1]_ contains five model levels, each one adding a
    mechanism to the previous ones:

    1. ``lif``: the leaky integrate-and-fire neuron with a fixed threshold,
    2. ``lif_r``: a linear voltage reset rule and a spike-triggered threshold,
    3. ``lif_asc``: after-spike currents,
    4. ``lif_r_asc``: reset rules, spike-triggered threshold and after-spike currents,
    5. ``lif_r_asc_a``: level 4 plus a voltage-dependent threshold.

    The membrane potential follows

    .. math::

       C_m \frac{dV}{dt} = -G (V - E_L) + I_e + \sum_j I_j

    where :math:`I_j` are the after-spike currents, each decaying with rate
    :math:`k_j`. The threshold is

    .. math::

       \Theta = \Theta_\infty + \Theta_s + \Theta_v

    with a spike component :math:`\Theta_s` decaying with rate ``b_spike``
    and a voltage component :math:`d\Theta_v/dt = a_v (V - E_L) - b_v \Theta_v`.
    When :math:`V \geq \Theta`, the neuron emits a spike and

    .. math::

       V \leftarrow V_{reset} \;\text{or}\; a_r V + b_r, \quad
       \Theta_s \leftarrow \Theta_s + a_s, \quad
       I_j \leftarrow r_j I_j + A_j

    after which the voltage is clamped for ``t_ref`` ms.

    **Model Examples**

    >>> import glifpy
    >>> neu = glifpy.GLIF(2, glif_model='lif_r_asc', V_dynamics_method='linear_exact')
    >>> runner = glifpy.GLIFRunner(neu, monitors=['V_m', 'threshold'], inputs=200.)
    >>> spikes = runner.run(100.)

    Parameters
    ----------
    size: int
      The number of neurons.
    glif_model: int, str
      The model level, ``1`` to ``5``, or one of its names.
    V_dynamics_method: str
      ``'linear_forward_euler'`` or ``'linear_exact'``.
    name: str, optional
      The node name.
    **params
      Initial parameters (``G``, ``k``, ...) and state (``V_m``, ``ASCurrents``).

    References
    ----------
    .. [1] Teeter, Corinne, et al. "Generalized leaky integrate-and-fire models
           classify multiple neuron types." Nature communications 9.1 (2018): 1-15.
    """

    def __init__(
        self,
        size: int = 1,
        glif_model: Union[int, str] = 'lif',
        V_dynamics_method: str = 'linear_forward_euler',
        name: str = None,
        **params
    ):
        self.size = check.is_integer(size, name='size', min_bound=1)
        self.name = check.is_string(name, name='name', allow_none=True)
        if self.name is None:
            self.name = f'{self.__class__.__name__}{next(_name_counter)}'
        self._check_keys(params)

        # parameters first, so that the initial state follows them
        p = GLIFParameters(glif_model).set(dict(params, V_dynamics_method=V_dynamics_method))
        self._params = p
        self._vars = None
        self._update_fn = None
        self._p_arrays = None
        self._dt = None
        self._spike_callbacks = []
        self._loggers = []
        self.reset_state()

        state = {key: value for key, value in params.items() if key not in GLIFParameters.keys}
        if len(state):
            self.set_status(state)

    def __repr__(self):
        return (f'{self.__class__.__name__}(name={self.name}, size={self.size}, '
                f'glif_model={glif_model_name(self.glif_model)!r})')

    @property
    def glif_model(self) -> int:
        return self._params.glif_model

    @property
    def params(self) -> GLIFParameters:
        return self._params

    @property
    def calibrated(self) -> bool:
        return self._update_fn is not None and self._vars.calibrated

    # status
    # ------

    def _check_keys(self, d: Dict):
        allowed = GLIFParameters.keys + GLIFState.keys + SpikeArchive.keys + _READ_ONLY_KEYS
        unknown = [key for key in d if key not in allowed]
        if len(unknown):
            raise InvalidParameterError(f'Unknown status keys {unknown} for "{self.name}". '
                                        f'Allowed keys are {allowed}.')

    def get_status(self) -> Dict:
        d = dict()
        self._params.get(d)
        self._state.get(d)
        self._archive.get(d)
        d['recordables'] = self.recordables.get_list()
        d['size'] = self.size
        d['glif_model_name'] = glif_model_name(self.glif_model)
        return d

    def set_status(self, d: Dict):
        """Update parameters, state and spike history from the mapping ``d``.

        All entries are validated on copies before anything is committed, so
        a rejected update leaves the node unchanged. Read-only entries
        (``ASCurrents_sum``, ``threshold``, ``I``, ...) are ignored. A
        successful update invalidates the calibration.
        """
        check.is_dict_data(d, key_type=str, name='status', allow_none=False)
        self._check_keys(d)
        d = {key: value for key, value in d.items() if key not in _READ_ONLY_KEYS}

        p = self._params.set(d)
        s = self._state.set(d, p)
        a = self._archive.set(d)

        self._params, self._state, self._archive = p, s, a
        self._vars.t_ref_total = None
        self._vars.method = None
        self._update_fn = None
        self._state.threshold = self._compose_threshold()

    def _compose_threshold(self):
        threshold = jnp.zeros((self.size,), dtype=environment.get_float()) + self._params.th_inf
        if has_spike_threshold(self.glif_model):
            threshold = threshold + self._vars.last_spike
        if has_voltage_threshold(self.glif_model):
            threshold = threshold + self._vars.last_voltage
        return threshold

    # simulation
    # ----------

    def calibrate(self, dt: float = None):
        """Derive the step-dependent variables and select the update routine.

        Calling it again with unchanged parameters gives the same result.
        """
        dt = share.dt if dt is None else dt
        dt = check.is_float(dt, name='dt')
        if dt <= 0.:
            raise InvalidParameterError(f'"dt" must be positive, but we got {dt}.')
        p = self._params
        if self._state.n_asc != p.n_asc:
            raise ContractViolationError(f'"{self.name}" holds {self._state.n_asc} after-spike currents, '
                                         f'but the parameters define {p.n_asc}.')

        self._vars.t_ref_total = refractory_steps(p.t_ref, dt)
        self._vars.method = get_method_flag(p.V_dynamics_method)
        self._vars.t_ref_remaining = jnp.maximum(self._vars.t_ref_remaining, 0)
        self._update_fn = get_update_function(p.glif_model, self._vars.method)
        self._p_arrays = p.as_arrays()
        self._dt = dt

        logger.debug('Calibrated %s: model %s, method %s, dt %s ms, %d refractory steps.',
                     self.name, glif_model_name(p.glif_model), p.V_dynamics_method, dt, self._vars.t_ref_total)
        if self._vars.method == 0 and dt * p.G / p.C_m >= 1.:
            logger.warning('Forward Euler is unstable for "%s": dt * G / C_m = %.3f >= 1. '
                           'Use "linear_exact" or a smaller dt.', self.name, dt * p.G / p.C_m)

    def reset_state(self):
        """Reset the state, the threshold components, the input buffers and the spike history.

        The calibration is kept.
        """
        old = self._vars
        self._state = GLIFState(self._params, self.size)
        self._vars = GLIFVariables(self.size)
        if old is not None:
            self._vars.t_ref_total = old.t_ref_total
            self._vars.method = old.method
        if hasattr(self, '_spike_buffer'):
            self._spike_buffer.clear()
            self._current_buffer.clear()
        else:
            self._spike_buffer = RingBuffer(self.size)
            self._current_buffer = RingBuffer(self.size)
        self._archive = SpikeArchive(self.size)
        self._spike = np.zeros((self.size,), dtype=bool)
        for lg in self._loggers:
            lg.reset()

    def update(self, x=None, dt: float = None):
        """Advance every neuron by one step.

        Parameters
        ----------
        x: float, ArrayType, optional
          An external current injected in this step, added to the buffered inputs.
        dt: float, optional
          The step size. Default is the step size of the last calibration.

        Returns
        -------
        spike: np.ndarray
          The boolean spike vector.
        """
        if not self.calibrated:
            raise ContractViolationError(f'"{self.name}" must be calibrated before its first update.')
        dt = self._dt if dt is None else dt
        t = share.load('t', 0.)

        I = self._spike_buffer.get_value() + self._current_buffer.get_value()
        if x is not None:
            I = I + np.broadcast_to(np.asarray(x, dtype=float), (self.size,))

        st = dict(V_m=self._state.V_m,
                  ASCurrents=self._state.ASCurrents,
                  ASCurrents_sum=self._state.ASCurrents_sum,
                  threshold=self._state.threshold,
                  I=self._state.I)
        var = dict(t_ref_remaining=self._vars.t_ref_remaining,
                   t_ref_total=self._vars.t_ref_total,
                   last_spike=self._vars.last_spike,
                   last_voltage=self._vars.last_voltage)
        I = jnp.asarray(I, dtype=environment.get_float())
        st, var, spike, offset = self._update_fn(self._p_arrays, st, var, I, dt)

        self._state.V_m = st['V_m']
        self._state.ASCurrents = st['ASCurrents']
        self._state.ASCurrents_sum = st['ASCurrents_sum']
        self._state.threshold = st['threshold']
        self._state.I = st['I']
        self._vars.t_ref_remaining = var['t_ref_remaining']
        self._vars.last_spike = var['last_spike']
        self._vars.last_voltage = var['last_voltage']

        # spikes are stamped at the end of the step
        t_end = t + dt
        self._spike = np.asarray(spike)
        self._archive.record(t_end, self._spike)
        if len(self._spike_callbacks) and self._spike.any():
            offset = np.asarray(offset)
            for i in np.flatnonzero(self._spike):
                for fn in self._spike_callbacks:
                    fn(t_end, int(i), float(offset[i]))
        for lg in self._loggers:
            lg.record_data(self, t_end)
        return self._spike

    def __call__(self, x=None, dt: float = None):
        return self.update(x, dt)

    # events
    # ------

    def handles_spike(self, receptor_type: int = 0) -> int:
        if receptor_type != 0:
            raise UnknownReceptorTypeError(receptor_type, self.name)
        return 0

    def handles_current(self, receptor_type: int = 0) -> int:
        if receptor_type != 0:
            raise UnknownReceptorTypeError(receptor_type, self.name)
        return 0

    @staticmethod
    def _deliver(buffer: RingBuffer, value, delay, index):
        delay = check.is_integer(delay, name='delay', min_bound=1)
        if delay > buffer.max_delay:
            buffer.resize(delay)
        buffer.add_value(delay, np.asarray(value, dtype=float), index=index)

    def handle_spike(self, weight, delay: int = 1, index=None):
        """Deliver a weighted spike ``delay`` steps from now."""
        self._deliver(self._spike_buffer, weight, delay, index)

    def handle_current(self, amplitude, delay: int = 1, index=None):
        """Inject a current during the step ``delay`` steps from now."""
        self._deliver(self._current_buffer, amplitude, delay, index)

    def add_spike_callback(self, fn: Callable):
        """Register ``fn(t, index, offset)``, called for every emitted spike."""
        self._spike_callbacks.append(check.is_callable(fn, name='fn'))

    def connect_logger(self, data_logger: DataLogger, receptor_type: int = 0) -> int:
        if receptor_type != 0:
            raise UnknownReceptorTypeError(receptor_type, self.name)
        data_logger.connect(self)
        self._loggers.append(data_logger)
        return 0

    # accessors
    # ---------

    @property
    def V_m(self) -> np.ndarray:
        return np.asarray(self._state.V_m)

    @property
    def ASCurrents(self) -> np.ndarray:
        return np.asarray(self._state.ASCurrents)

    @property
    def ASCurrents_sum(self) -> np.ndarray:
        return np.asarray(self._state.ASCurrents_sum)

    @property
    def threshold(self) -> np.ndarray:
        return np.asarray(self._state.threshold)

    @property
    def I(self) -> np.ndarray:
        return np.asarray(self._state.I)

    @property
    def spike(self) -> np.ndarray:
        return self._spike

    @property
    def last_spike(self) -> np.ndarray:
        return np.asarray(self._vars.last_spike)

    @property
    def last_voltage(self) -> np.ndarray:
        return np.asarray(self._vars.last_voltage)

    @property
    def t_ref_remaining(self) -> np.ndarray:
        return np.asarray(self._vars.t_ref_remaining)

    @property
    def t_ref_total(self):
        return self._vars.t_ref_total


GLIF.recordables = RecordablesMap([
    ('V_m', lambda node: node.V_m),
    ('AScurrents_sum', lambda node: node.ASCurrents_sum),
    ('threshold', lambda node: node.threshold),
    ('I', lambda node: node.I),
    ('last_spike', lambda node: node.last_spike),
    ('last_voltage', lambda node: node.last_voltage),
])
