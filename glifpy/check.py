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
import math
from typing import Any, Callable, Dict, Sequence, Tuple, Type, Union

import numpy as np

from glifpy._errors import InvalidParameterError

__all__ = [
    'is_dict_data',
    'is_callable',
    'is_float',
    'is_finite',
    'is_integer',
    'is_string',
    'is_sequence',
    'is_finite_sequence',
]


def is_dict_data(a_dict: Dict,
                 key_type: Union[Type, Tuple[Type, ...]] = None,
                 val_type: Union[Type, Tuple[Type, ...]] = None,
                 name: str = None,
                 allow_none: bool = True):
    """Check the dictionary data.
    """
    if allow_none and a_dict is None:
        return None
    name = '' if (name is None) else f'"{name}"'
    if not isinstance(a_dict, dict):
        raise InvalidParameterError(f'{name} must be a dict, while we got {type(a_dict)}')
    for key, value in a_dict.items():
        if (key_type is not None) and (not isinstance(key, key_type)):
            raise InvalidParameterError(f'{name} must be a dict of ({key_type}, {val_type}), '
                                        f'while we got ({type(key)}, {type(value)})')
        if (val_type is not None) and (not isinstance(value, val_type)):
            raise InvalidParameterError(f'{name} must be a dict of ({key_type}, {val_type}), '
                                        f'while we got ({type(key)}, {type(value)})')
    return a_dict


def is_callable(fun: Callable,
                name: str = None,
                allow_none: bool = False):
    name = '' if name is None else name
    if fun is None:
        if allow_none:
            return None
        else:
            raise InvalidParameterError(f'{name} must be a callable function, but we got None.')
    if not callable(fun):
        raise InvalidParameterError(f'{name} should be a callable function. While we got {type(fun)}')
    return fun


def is_float(
    value: float,
    name: str = None,
    min_bound: float = None,
    max_bound: float = None,
    allow_none: bool = False,
    allow_int: bool = True
) -> float:
    """Check float type.

    Parameters
    ----------
    value: Any
    name: optional, str
    min_bound: optional, float
      The allowed minimum value.
    max_bound: optional, float
      The allowed maximum value.
    allow_none: bool
      Whether allow the value is None.
    allow_int: bool
      Whether allow the value be an integer.
    """
    if name is None: name = ''
    if value is None:
        if allow_none:
            return None
        else:
            raise InvalidParameterError(f'{name} must be a float, but got None')
    # ``bool`` is an ``int`` subclass, but never a physical constant
    if isinstance(value, (bool, np.bool_)):
        raise InvalidParameterError(f'{name} must be a float, but got {type(value)}')
    if allow_int:
        if not isinstance(value, (float, int, np.integer, np.floating)):
            raise InvalidParameterError(f'{name} must be a float, but got {type(value)}')
    else:
        if not isinstance(value, (float, np.floating)):
            raise InvalidParameterError(f'{name} must be a float, but got {type(value)}')
    if min_bound is not None and value < min_bound:
        raise InvalidParameterError(f"{name} must be a float bigger than {min_bound}, "
                                    f"while we got {value}")
    if max_bound is not None and value > max_bound:
        raise InvalidParameterError(f"{name} must be a float smaller than {max_bound}, "
                                    f"while we got {value}")
    return float(value)


def is_finite(value: Any, name: str = None):
    """Check that a scalar or an array contains only finite numbers."""
    if name is None: name = ''
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        raise InvalidParameterError(f'{name} must be numeric, but got {value!r}') from None
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError(f'{name} must be finite, but got {value!r}')
    return value


def is_integer(value: int, name=None, min_bound=None, max_bound=None, allow_none=False):
    """Check integer type.

    Parameters
    ----------
    value: int, optional
    name: optional, str
    min_bound: optional, int
      The allowed minimum value.
    max_bound: optional, int
      The allowed maximum value.
    allow_none: bool
      Whether allow the value is None.
    """
    if name is None: name = ''
    if value is None:
        if allow_none:
            return
        else:
            raise InvalidParameterError(f'{name} must be an int, but got None')
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f'{name} must be an int, but got {value!r}')
    if min_bound is not None and value < min_bound:
        raise InvalidParameterError(f"{name} must be an int bigger than {min_bound}, "
                                    f"while we got {value}")
    if max_bound is not None and value > max_bound:
        raise InvalidParameterError(f"{name} must be an int smaller than {max_bound}, "
                                    f"while we got {value}")
    return int(value)


def is_string(value: str, name: str = None, candidates: Sequence[str] = None, allow_none=False):
    """Check string type.
    """
    if name is None: name = ''
    if value is None:
        if allow_none:
            return None
        else:
            raise InvalidParameterError(f'{name} must be a str, but got None')
    if not isinstance(value, str):
        raise InvalidParameterError(f'{name} must be a str, but got {type(value)}')
    if candidates is not None:
        if value not in candidates:
            raise InvalidParameterError(f'{name} must be a str in {candidates}, '
                                        f'but we got {value}')
    return value


def is_sequence(
    value: Sequence,
    name: str = None,
    elem_type: Union[type, Sequence[type]] = None,
    allow_none: bool = True
):
    if name is None: name = ''
    if value is None:
        if allow_none:
            return
        else:
            raise InvalidParameterError(f'{name} must be a sequence, but got None')
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidParameterError(f'{name} should be a one-dimensional sequence, '
                                        f'but we got an array with shape {value.shape}')
        value = value.tolist()
    if not isinstance(value, (tuple, list)):
        raise InvalidParameterError(f'{name} should be a sequence, but we got a {type(value)}')
    if elem_type is not None:
        for v in value:
            if isinstance(v, (bool, np.bool_)) or not isinstance(v, elem_type):
                raise InvalidParameterError(f'Elements in {name} should be {elem_type}, '
                                            f'but we got {type(v)}: {v}')
    return value


def is_finite_sequence(value: Sequence, name: str = None) -> Tuple[float, ...]:
    """Check a sequence of finite real numbers and return it as a tuple of floats."""
    value = is_sequence(value, name=name, elem_type=(int, float, np.integer, np.floating), allow_none=False)
    for v in value:
        if not math.isfinite(v):
            raise InvalidParameterError(f'Elements in {name} must be finite, but we got {v}')
    return tuple(float(v) for v in value)
