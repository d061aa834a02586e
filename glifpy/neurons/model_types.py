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
"""GLIF model levels and their aliases.

============ ================= =========================================
**Level**    **Name**          **Description**
------------ ----------------- -----------------------------------------
1            ``lif``           Leaky integrate-and-fire.
2            ``lif_r``         LIF with biologically defined reset rules.
3            ``lif_asc``       LIF with after-spike currents.
4            ``lif_r_asc``     LIF with reset rules and after-spike currents.
5            ``lif_r_asc_a``   Level 4 with a voltage-dependent threshold.
============ ================= =========================================
"""

from typing import Union

import numpy as np

from glifpy._errors import InvalidParameterError

__all__ = [
    'GLIF_MODEL_NAMES',
    'parse_glif_model',
    'glif_model_name',
    'has_linear_reset',
    'has_spike_threshold',
    'has_asc',
    'has_voltage_threshold',
]

GLIF_MODEL_NAMES = ('lif', 'lif_r', 'lif_asc', 'lif_r_asc', 'lif_r_asc_a')


def parse_glif_model(value: Union[int, str]) -> int:
    """Normalize a GLIF model alias to its level in ``1..5``.

    Accepted are the levels themselves, their decimal strings, the short
    names (``'lif_r'``) and the ``glif_``-prefixed names (``'glif_lif_r'``).
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidParameterError(f'Unknown GLIF model {value!r}.')
    if isinstance(value, (int, np.integer)):
        level = int(value)
    elif isinstance(value, str):
        name = value[len('glif_'):] if value.startswith('glif_') else value
        if name in GLIF_MODEL_NAMES:
            level = GLIF_MODEL_NAMES.index(name) + 1
        elif value in ('1', '2', '3', '4', '5'):
            level = int(value)
        else:
            raise InvalidParameterError(f'Unknown GLIF model "{value}". Supported models are '
                                        f'{GLIF_MODEL_NAMES}, their "glif_" prefixed names, or 1 to 5.')
    else:
        raise InvalidParameterError(f'Unknown GLIF model {value!r}.')
    if not 1 <= level <= 5:
        raise InvalidParameterError(f'GLIF model level must be in 1 to 5, but we got {level}.')
    return level


def glif_model_name(level: int) -> str:
    return GLIF_MODEL_NAMES[parse_glif_model(level) - 1]


def has_linear_reset(level: int) -> bool:
    return level in (2, 4, 5)


def has_spike_threshold(level: int) -> bool:
    return level in (2, 4, 5)


def has_asc(level: int) -> bool:
    return level >= 3


def has_voltage_threshold(level: int) -> bool:
    return level == 5
