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
r"""Integrators for the linear membrane dynamics of GLIF neurons.

The membrane potential obeys the linear ODE

.. math::

   C_m \frac{dV}{dt} = -G (V - E_L) + I

where :math:`I` is the total current (external input plus the sum of the
after-spike currents). Two solvers are provided:

- ``linear_forward_euler``: the explicit first-order (RK1) step

  .. math:: V_{n+1} = V_n + \Delta t \frac{-G (V_n - E_L) + I}{C_m}

- ``linear_exact``: the closed-form solution of the linear ODE for a current
  held constant during the step,

  .. math:: V_{n+1} = V_\infty + (V_n - V_\infty) e^{-\Delta t G / C_m},
            \quad V_\infty = E_L + I / G

  which is exact for any :math:`\Delta t`. The forward Euler step becomes
  unstable once :math:`\Delta t G / C_m \geq 1`.

The voltage-dependent threshold component of the GLIF level-5 model follows

.. math:: \frac{d\theta_V}{dt} = a_V (V - E_L) - b_V \theta_V

and has solvers matching each membrane method.
"""

from typing import Callable, Union

import jax.numpy as jnp

from glifpy._errors import InvalidParameterError

__all__ = [
    'V_DYNAMICS_METHODS',
    'linear_forward_euler',
    'linear_exact',
    'exponential_decay',
    'voltage_threshold_euler',
    'voltage_threshold_exact',
    'voltage_threshold_hold',
    'get_method_flag',
    'get_integral',
]

V_DYNAMICS_METHODS = ('linear_forward_euler', 'linear_exact')


def linear_forward_euler(V, I, G, E_L, C_m, dt):
    return V + dt * (-G * (V - E_L) + I) / C_m


def linear_exact(V, I, G, E_L, C_m, dt):
    V_inf = E_L + I / G
    return V_inf + (V - V_inf) * jnp.exp(-dt * G / C_m)


def exponential_decay(x, rate, dt):
    """Exact decay of ``dx/dt = -rate * x`` over one step."""
    return x * jnp.exp(-rate * dt)


def voltage_threshold_euler(theta, V, a, b, E_L, dt):
    return theta + dt * (a * (V - E_L) - b * theta)


def voltage_threshold_exact(theta, V_old, I, a, b, G, E_L, C_m, dt):
    """Exact update of the voltage-dependent threshold component.

    The membrane potential is assumed to follow the exact linear trajectory
    ``V(t) = beta + (V_old - beta) exp(-G t / C_m)`` during the step, with
    ``beta = E_L + I / G`` (Teeter et al., 2018, Eq. 4). ``b`` must be
    positive.
    """
    g = G / C_m
    beta = E_L + I / G
    steady = (a / b) * (beta - E_L)
    decay_b = jnp.exp(-b * dt)
    decay_g = jnp.exp(-g * dt)
    resonant = b == g
    # keep the unused branch finite when b == G / C_m
    phi = a / jnp.where(resonant, 1., b - g)
    generic = (phi * (V_old - beta) * decay_g
               + decay_b * (theta - phi * (V_old - beta) - steady)
               + steady)
    degenerate = (a * (V_old - beta) * dt * decay_g
                  + decay_b * (theta - steady)
                  + steady)
    return jnp.where(resonant, degenerate, generic)


def voltage_threshold_hold(theta, V, a, b, E_L, dt):
    """Exact update of the voltage-dependent threshold component for a clamped voltage."""
    steady = (a / b) * (V - E_L)
    return steady + (theta - steady) * jnp.exp(-b * dt)


def get_method_flag(method: str) -> int:
    """Resolve a voltage dynamics method name to its flag (0: forward Euler, 1: exact)."""
    if method not in V_DYNAMICS_METHODS:
        raise InvalidParameterError(f'Unknown voltage dynamics method "{method}". '
                                    f'Supported methods are {V_DYNAMICS_METHODS}.')
    return V_DYNAMICS_METHODS.index(method)


def get_integral(method: Union[str, int]) -> Callable:
    """Get the membrane integrator by its name or flag."""
    if isinstance(method, str):
        method = get_method_flag(method)
    if method == 0:
        return linear_forward_euler
    elif method == 1:
        return linear_exact
    else:
        raise InvalidParameterError(f'Unknown voltage dynamics method flag {method}.')
