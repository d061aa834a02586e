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
import jax.numpy as jnp
from jax import config

from glifpy._errors import InvalidParameterError

__all__ = [
    'set_dt',
    'get_dt',
    'set_float',
    'get_float',
    'set_int',
    'get_int',
    'float_',
    'int_',
    'enable_x64',
    'disable_x64',
    'set_x64',
]


class _Defaults:
    dt = 0.1
    float_ = jnp.float32
    int_ = jnp.int32


defaults = _Defaults()


def set_dt(dt):
    """Set the default numerical integrator precision.

    Parameters
    ----------
    dt : float
        Numerical integration precision (ms).
    """
    if isinstance(dt, bool) or not isinstance(dt, (int, float)):
        raise InvalidParameterError(f'"dt" must a float, but we got {dt!r}')
    if not dt > 0.:
        raise InvalidParameterError(f'"dt" must be positive, but we got {dt}')
    defaults.dt = float(dt)


def get_dt():
    """Get the numerical integrator precision.

    Returns
    -------
    dt : float
        Numerical integration precision.
    """
    return defaults.dt


def set_float(dtype: type):
    """Set global default float type.

    Parameters
    ----------
    dtype: type
      The float type.
    """
    if dtype not in [jnp.float16, jnp.float32, jnp.float64, ]:
        raise TypeError(f'Float data type {dtype} is not supported.')
    defaults.float_ = dtype


def get_float():
    """Get the default float data type."""
    return defaults.float_


def set_int(dtype: type):
    """Set global default integer type.

    Parameters
    ----------
    dtype: type
      The integer type.
    """
    if dtype not in [jnp.int8, jnp.int16, jnp.int32, jnp.int64, ]:
        raise TypeError(f'Integer data type {dtype} is not supported.')
    defaults.int_ = dtype


def get_int():
    """Get the default int data type."""
    return defaults.int_


def float_():
    return defaults.float_


def int_():
    return defaults.int_


def enable_x64():
    config.update("jax_enable_x64", True)
    set_int(jnp.int64)
    set_float(jnp.float64)


def disable_x64():
    config.update("jax_enable_x64", False)
    set_int(jnp.int32)
    set_float(jnp.float32)


def set_x64(enable: bool):
    assert isinstance(enable, bool)
    if enable:
        enable_x64()
    else:
        disable_x64()
