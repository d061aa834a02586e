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
r"""One-step state transitions of the five GLIF model levels.

Every routine has the signature ``(p, st, var, I, dt) -> (st, var, spike, offset)``
where ``p`` is the dict of numerical parameters, ``st`` the state dict
(``V_m``, ``ASCurrents``, ``ASCurrents_sum``, ``threshold``, ``I``), ``var``
the variables dict (``t_ref_remaining``, ``t_ref_total``, ``last_spike``,
``last_voltage``), ``I`` the total input current of this step and ``dt`` the
step size. All arrays are vectorized over the population.

A neuron whose refractory counter is positive keeps its voltage, counts the
counter down and does not spike. Otherwise its voltage is integrated with the
bound ``integral``. A spike restarts the counter at ``t_ref_total - 1``: the
spiking step is the first step of the refractory window.

The routines are self-contained, they only share the integration primitives.
"""

import functools
from typing import Callable, Union

import jax
import jax.numpy as jnp

from glifpy.integrators.linear import (exponential_decay,
                                       get_integral,
                                       get_method_flag,
                                       voltage_threshold_euler,
                                       voltage_threshold_exact,
                                       voltage_threshold_hold)
from glifpy.neurons.model_types import parse_glif_model

__all__ = [
    'update_glif1',
    'update_glif2',
    'update_glif3',
    'update_glif4',
    'update_glif5',
    'UPDATE_FUNCTIONS',
    'get_update_function',
]


def _spike_offset(spike, v_old, v_new, th_old, th_new, dt):
    # time from the linearly interpolated threshold crossing to the end of the step
    approach = (v_new - v_old) - (th_new - th_old)
    rising = approach > 0.
    frac = (th_old - v_old) / jnp.where(rising, approach, 1.)
    frac = jnp.where(rising, jnp.clip(frac, 0., 1.), 1.)
    return jnp.where(spike, (1. - frac) * dt, 0.)


def _restart_refractory(t_ref_total):
    return jnp.maximum(t_ref_total - 1, 0)


def update_glif1(p, st, var, I, dt, *, integral: Callable):
    """Leaky integrate-and-fire: fixed threshold, reset to ``V_reset``."""
    v_old = st['V_m']
    refractory = var['t_ref_remaining'] > 0

    V = jnp.where(refractory, v_old, integral(v_old, I, p['G'], p['E_L'], p['C_m'], dt))
    t_ref_remaining = jnp.where(refractory, var['t_ref_remaining'] - 1, var['t_ref_remaining'])
    threshold = jnp.zeros_like(V) + p['th_inf']

    spike = jnp.logical_and(jnp.logical_not(refractory), V >= threshold)
    offset = _spike_offset(spike, v_old, V, st['threshold'], threshold, dt)
    V = jnp.where(spike, p['V_reset'], V)
    t_ref_remaining = jnp.where(spike, _restart_refractory(var['t_ref_total']), t_ref_remaining)

    st = dict(st, V_m=V, threshold=threshold, I=I)
    var = dict(var, t_ref_remaining=t_ref_remaining)
    return st, var, spike, offset


def update_glif2(p, st, var, I, dt, *, integral: Callable):
    """LIF with the linear reset rule and a spike-triggered threshold."""
    v_old = st['V_m']
    refractory = var['t_ref_remaining'] > 0

    V = jnp.where(refractory, v_old, integral(v_old, I, p['G'], p['E_L'], p['C_m'], dt))
    t_ref_remaining = jnp.where(refractory, var['t_ref_remaining'] - 1, var['t_ref_remaining'])
    last_spike = exponential_decay(var['last_spike'], p['b_spike'], dt)
    threshold = p['th_inf'] + last_spike

    spike = jnp.logical_and(jnp.logical_not(refractory), V >= threshold)
    offset = _spike_offset(spike, v_old, V, st['threshold'], threshold, dt)
    V = jnp.where(spike, p['voltage_reset_a'] * V + p['voltage_reset_b'], V)
    last_spike = jnp.where(spike, last_spike + p['a_spike'], last_spike)
    threshold = p['th_inf'] + last_spike
    t_ref_remaining = jnp.where(spike, _restart_refractory(var['t_ref_total']), t_ref_remaining)

    st = dict(st, V_m=V, threshold=threshold, I=I)
    var = dict(var, t_ref_remaining=t_ref_remaining, last_spike=last_spike)
    return st, var, spike, offset


def update_glif3(p, st, var, I, dt, *, integral: Callable):
    """LIF with after-spike currents, reset to ``V_reset``."""
    v_old = st['V_m']
    refractory = var['t_ref_remaining'] > 0

    I_total = I + st['ASCurrents_sum']
    V = jnp.where(refractory, v_old, integral(v_old, I_total, p['G'], p['E_L'], p['C_m'], dt))
    t_ref_remaining = jnp.where(refractory, var['t_ref_remaining'] - 1, var['t_ref_remaining'])
    threshold = jnp.zeros_like(V) + p['th_inf']
    asc = exponential_decay(st['ASCurrents'], p['k'], dt)

    spike = jnp.logical_and(jnp.logical_not(refractory), V >= threshold)
    offset = _spike_offset(spike, v_old, V, st['threshold'], threshold, dt)
    V = jnp.where(spike, p['V_reset'], V)
    asc = jnp.where(spike[:, None], asc * p['r'] + p['asc_amps'], asc)
    t_ref_remaining = jnp.where(spike, _restart_refractory(var['t_ref_total']), t_ref_remaining)

    st = dict(st, V_m=V, ASCurrents=asc, ASCurrents_sum=jnp.sum(asc, axis=-1), threshold=threshold, I=I)
    var = dict(var, t_ref_remaining=t_ref_remaining)
    return st, var, spike, offset


def update_glif4(p, st, var, I, dt, *, integral: Callable):
    """LIF with reset rules, a spike-triggered threshold and after-spike currents."""
    v_old = st['V_m']
    refractory = var['t_ref_remaining'] > 0

    I_total = I + st['ASCurrents_sum']
    V = jnp.where(refractory, v_old, integral(v_old, I_total, p['G'], p['E_L'], p['C_m'], dt))
    t_ref_remaining = jnp.where(refractory, var['t_ref_remaining'] - 1, var['t_ref_remaining'])
    last_spike = exponential_decay(var['last_spike'], p['b_spike'], dt)
    threshold = p['th_inf'] + last_spike
    asc = exponential_decay(st['ASCurrents'], p['k'], dt)

    spike = jnp.logical_and(jnp.logical_not(refractory), V >= threshold)
    offset = _spike_offset(spike, v_old, V, st['threshold'], threshold, dt)
    V = jnp.where(spike, p['voltage_reset_a'] * V + p['voltage_reset_b'], V)
    last_spike = jnp.where(spike, last_spike + p['a_spike'], last_spike)
    threshold = p['th_inf'] + last_spike
    asc = jnp.where(spike[:, None], asc * p['r'] + p['asc_amps'], asc)
    t_ref_remaining = jnp.where(spike, _restart_refractory(var['t_ref_total']), t_ref_remaining)

    st = dict(st, V_m=V, ASCurrents=asc, ASCurrents_sum=jnp.sum(asc, axis=-1), threshold=threshold, I=I)
    var = dict(var, t_ref_remaining=t_ref_remaining, last_spike=last_spike)
    return st, var, spike, offset


def update_glif5(p, st, var, I, dt, *, integral: Callable, exact_threshold: bool):
    """Level 4 plus the voltage-dependent threshold component.

    ``exact_threshold`` selects the exact solution of the threshold component
    (paired with ``linear_exact``) instead of its forward Euler step.
    """
    v_old = st['V_m']
    refractory = var['t_ref_remaining'] > 0

    I_total = I + st['ASCurrents_sum']
    V = jnp.where(refractory, v_old, integral(v_old, I_total, p['G'], p['E_L'], p['C_m'], dt))
    t_ref_remaining = jnp.where(refractory, var['t_ref_remaining'] - 1, var['t_ref_remaining'])
    last_spike = exponential_decay(var['last_spike'], p['b_spike'], dt)
    if exact_threshold:
        free = voltage_threshold_exact(var['last_voltage'], v_old, I_total, p['a_voltage'], p['b_voltage'],
                                       p['G'], p['E_L'], p['C_m'], dt)
        held = voltage_threshold_hold(var['last_voltage'], v_old, p['a_voltage'], p['b_voltage'], p['E_L'], dt)
    else:
        free = voltage_threshold_euler(var['last_voltage'], v_old, p['a_voltage'], p['b_voltage'], p['E_L'], dt)
        held = free
    last_voltage = jnp.where(refractory, held, free)
    threshold = p['th_inf'] + last_spike + last_voltage
    asc = exponential_decay(st['ASCurrents'], p['k'], dt)

    spike = jnp.logical_and(jnp.logical_not(refractory), V >= threshold)
    offset = _spike_offset(spike, v_old, V, st['threshold'], threshold, dt)
    V = jnp.where(spike, p['voltage_reset_a'] * V + p['voltage_reset_b'], V)
    last_spike = jnp.where(spike, last_spike + p['a_spike'], last_spike)
    threshold = p['th_inf'] + last_spike + last_voltage
    asc = jnp.where(spike[:, None], asc * p['r'] + p['asc_amps'], asc)
    t_ref_remaining = jnp.where(spike, _restart_refractory(var['t_ref_total']), t_ref_remaining)

    st = dict(st, V_m=V, ASCurrents=asc, ASCurrents_sum=jnp.sum(asc, axis=-1), threshold=threshold, I=I)
    var = dict(var, t_ref_remaining=t_ref_remaining, last_spike=last_spike, last_voltage=last_voltage)
    return st, var, spike, offset


UPDATE_FUNCTIONS = {
    1: update_glif1,
    2: update_glif2,
    3: update_glif3,
    4: update_glif4,
    5: update_glif5,
}


@functools.lru_cache(maxsize=None)
def get_update_function(glif_model: Union[int, str], method: Union[int, str]) -> Callable:
    """Get the compiled update routine of a model level with its integrator bound.

    Repeated calls with the same arguments return the same callable.
    """
    level = parse_glif_model(glif_model)
    flag = get_method_flag(method) if isinstance(method, str) else method
    kwargs = dict(integral=get_integral(flag))
    if level == 5:
        kwargs['exact_threshold'] = flag == 1
    return jax.jit(functools.partial(UPDATE_FUNCTIONS[level], **kwargs))
