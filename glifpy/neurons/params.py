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
"""Parameters, state and calibrated variables of a GLIF population.

``set()`` never mutates its receiver: it returns a validated copy, so a
failed update leaves the committed object untouched.
"""

import copy
import math
from typing import Dict, Optional, Tuple

import jax.numpy as jnp
import numpy as np

from glifpy import check
from glifpy._errors import InvalidParameterError
from glifpy.integrators.linear import V_DYNAMICS_METHODS
from glifpy.math import environment
from glifpy.neurons.model_types import parse_glif_model, has_asc, has_voltage_threshold

__all__ = [
    'GLIFParameters',
    'GLIFState',
    'GLIFVariables',
    'refractory_steps',
]

SCALAR_KEYS = (
    'V_reset',
    'th_inf',
    'G',
    'E_L',
    'C_m',
    't_ref',
    'a_spike',
    'b_spike',
    'voltage_reset_a',
    'voltage_reset_b',
    'a_voltage',
    'b_voltage',
)
ASC_KEYS = ('asc_init', 'k', 'asc_amps', 'r')

_DEFAULT_ASC = {
    'asc_init': (0., 0.),
    'k': (0.003, 0.1),
    'asc_amps': (-9.18, -198.94),
    'r': (1., 1.),
}


def refractory_steps(t_ref: float, dt: float) -> int:
    """Convert the refractory duration into whole simulation steps.

    Rounds to the nearest step (halves round up). A positive duration never
    rounds down to zero steps.
    """
    steps = int(math.floor(t_ref / dt + 0.5))
    if t_ref > 0. and steps == 0:
        steps = 1
    return steps


class GLIFParameters(object):
    """Physical constants of a GLIF population.

    Potentials are absolute (mV), ``G`` in nS, ``C_m`` in pF, ``t_ref`` in ms,
    rates (``b_spike``, ``a_voltage``, ``b_voltage``, ``k``) in 1/ms and
    currents in pA.

    Parameters
    ----------
    glif_model: int, str
      The model level or one of its aliases. It decides the default
      after-spike current channels: none for levels 1 and 2, two for
      levels 3 to 5.
    """

    keys = SCALAR_KEYS + ASC_KEYS + ('V_dynamics_method', 'glif_model')

    def __init__(self, glif_model=1):
        self.glif_model = parse_glif_model(glif_model)

        self.V_reset = -78.85  # mV
        self.th_inf = -51.68  # mV
        self.G = 9.43  # nS
        self.E_L = -78.85  # mV
        self.C_m = 58.72  # pF
        self.t_ref = 3.75  # ms

        self.a_spike = 0.03  # mV
        self.b_spike = 0.1  # 1/ms
        self.voltage_reset_a = 0.2
        self.voltage_reset_b = -44.57  # mV
        self.a_voltage = 0.005  # 1/ms
        self.b_voltage = 0.09  # 1/ms

        for key in ASC_KEYS:
            setattr(self, key, _DEFAULT_ASC[key] if has_asc(self.glif_model) else ())

        self.V_dynamics_method = 'linear_forward_euler'

    def __repr__(self):
        return f'{self.__class__.__name__}(glif_model={self.glif_model}, n_asc={self.n_asc})'

    @property
    def n_asc(self) -> int:
        return len(self.k)

    def get(self, d: Dict):
        for key in SCALAR_KEYS:
            d[key] = getattr(self, key)
        for key in ASC_KEYS:
            d[key] = list(getattr(self, key))
        d['V_dynamics_method'] = self.V_dynamics_method
        d['glif_model'] = self.glif_model
        return d

    def set(self, d: Dict) -> 'GLIFParameters':
        """Return a copy updated with the parameter entries of ``d``."""
        p = copy.copy(self)
        for key in SCALAR_KEYS:
            if key in d:
                value = check.is_float(d[key], name=key)
                if not math.isfinite(value):
                    raise InvalidParameterError(f'"{key}" must be finite, but we got {value}.')
                setattr(p, key, value)
        for key in ASC_KEYS:
            if key in d:
                setattr(p, key, check.is_finite_sequence(d[key], name=key))
        if 'V_dynamics_method' in d:
            p.V_dynamics_method = check.is_string(d['V_dynamics_method'],
                                                  name='V_dynamics_method',
                                                  candidates=V_DYNAMICS_METHODS)
        if 'glif_model' in d:
            p.glif_model = parse_glif_model(d['glif_model'])
        p.validate()
        return p

    def validate(self):
        if self.G <= 0.:
            raise InvalidParameterError(f'Membrane conductance "G" must be positive, but we got {self.G}.')
        if self.C_m <= 0.:
            raise InvalidParameterError(f'Capacitance "C_m" must be positive, but we got {self.C_m}.')
        if self.t_ref < 0.:
            raise InvalidParameterError(f'Refractory time "t_ref" must not be negative, but we got {self.t_ref}.')
        if self.b_spike < 0.:
            raise InvalidParameterError(f'"b_spike" must not be negative, but we got {self.b_spike}.')
        if self.b_voltage < 0.:
            raise InvalidParameterError(f'"b_voltage" must not be negative, but we got {self.b_voltage}.')
        if has_voltage_threshold(self.glif_model) and self.b_voltage == 0.:
            raise InvalidParameterError('"b_voltage" must be positive for the model "lif_r_asc_a".')

        lengths = {key: len(getattr(self, key)) for key in ASC_KEYS}
        if len(set(lengths.values())) != 1:
            raise InvalidParameterError(f'"asc_init", "k", "asc_amps" and "r" must have the same length, '
                                        f'but we got {lengths}.')
        n_asc = lengths['k']
        if has_asc(self.glif_model):
            if n_asc == 0:
                raise InvalidParameterError(f'GLIF model {self.glif_model} requires at least one '
                                            f'after-spike current, but "k" is empty.')
        elif n_asc != 0:
            raise InvalidParameterError(f'GLIF model {self.glif_model} has no after-spike currents, '
                                        f'but we got {n_asc} channels.')
        if any(k < 0. for k in self.k):
            raise InvalidParameterError(f'After-spike current rates "k" must not be negative, '
                                        f'but we got {self.k}.')

    def as_arrays(self) -> Dict:
        """The numerical parameters consumed by the update routines."""
        ftype = environment.get_float()
        p = {key: getattr(self, key) for key in SCALAR_KEYS}
        for key in ASC_KEYS:
            p[key] = jnp.asarray(getattr(self, key), dtype=ftype).reshape((self.n_asc,))
        return p


class GLIFState(object):
    """The evolving state of ``size`` independent GLIF neurons."""

    keys = ('V_m', 'ASCurrents', 'ASCurrents_sum', 'threshold', 'I')
    settable_keys = ('V_m', 'ASCurrents')

    def __init__(self, params: GLIFParameters, size: int):
        ftype = environment.get_float()
        self.size = size
        self.V_m = jnp.full((size,), params.E_L, dtype=ftype)
        self.ASCurrents = self._initial_asc(params, size)
        self.ASCurrents_sum = jnp.sum(self.ASCurrents, axis=-1)
        self.threshold = jnp.full((size,), params.th_inf, dtype=ftype)
        self.I = jnp.zeros((size,), dtype=ftype)

    @staticmethod
    def _initial_asc(params: GLIFParameters, size: int):
        asc = jnp.asarray(params.asc_init, dtype=environment.get_float()).reshape((1, params.n_asc))
        return jnp.tile(asc, (size, 1))

    @property
    def n_asc(self) -> int:
        return self.ASCurrents.shape[-1]

    def get(self, d: Dict):
        d['V_m'] = np.asarray(self.V_m)
        d['ASCurrents'] = np.asarray(self.ASCurrents)
        d['ASCurrents_sum'] = np.asarray(self.ASCurrents_sum)
        d['threshold'] = np.asarray(self.threshold)
        d['I'] = np.asarray(self.I)
        return d

    def set(self, d: Dict, params: GLIFParameters) -> 'GLIFState':
        """Return a copy updated with the state entries of ``d``.

        ``params`` is the (possibly updated) parameter set the state must be
        consistent with.
        """
        ftype = environment.get_float()
        s = copy.copy(self)
        if s.n_asc != params.n_asc:
            s.ASCurrents = self._initial_asc(params, s.size)

        if 'V_m' in d:
            V_m = self._as_array(d['V_m'], 'V_m', ((), (s.size,)))
            s.V_m = jnp.broadcast_to(jnp.asarray(V_m, dtype=ftype), (s.size,))
        if 'ASCurrents' in d:
            asc = self._as_array(d['ASCurrents'], 'ASCurrents', ((params.n_asc,), (s.size, params.n_asc)))
            s.ASCurrents = jnp.broadcast_to(jnp.asarray(asc, dtype=ftype), (s.size, params.n_asc))
        s.ASCurrents_sum = jnp.sum(s.ASCurrents, axis=-1)
        return s

    @staticmethod
    def _as_array(value, name: str, shapes: Tuple[Tuple[int, ...], ...]):
        check.is_finite(value, name=name)
        arr = np.asarray(value, dtype=float)
        if arr.shape not in shapes:
            raise InvalidParameterError(f'"{name}" must have one of the shapes {shapes}, '
                                        f'but we got {arr.shape}.')
        return arr


class GLIFVariables(object):
    """Quantities derived at calibration plus the decomposed threshold.

    ``t_ref_total`` and ``method`` stay ``None`` until the first calibration.
    """

    def __init__(self, size: int):
        self.t_ref_remaining = jnp.zeros((size,), dtype=environment.get_int())
        self.t_ref_total: Optional[int] = None
        self.last_spike = jnp.zeros((size,), dtype=environment.get_float())
        self.last_voltage = jnp.zeros((size,), dtype=environment.get_float())
        self.method: Optional[int] = None

    @property
    def calibrated(self) -> bool:
        return self.t_ref_total is not None and self.method is not None
