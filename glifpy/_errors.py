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

# -*- coding: utf-8 -*-


__all__ = [
    'GlifError',
    'InvalidParameterError',
    'UnknownReceptorTypeError',
    'UnknownRecordableError',
    'ContractViolationError',
    'RunningError',
    'MonitorError',
]


class GlifError(Exception):
    """General glifpy error."""
    __module__ = 'glifpy'


class InvalidParameterError(GlifError, ValueError):
    """A configuration value was rejected.

    Raised at the validate-then-commit boundary of ``set_status``; the
    previously committed parameters and state are left untouched.
    """
    __module__ = 'glifpy'


class UnknownReceptorTypeError(GlifError):
    """A connection asked for a receptor port the neuron does not have."""
    __module__ = 'glifpy'

    def __init__(self, receptor_type, name):
        super().__init__(f'Receptor type {receptor_type} is not available in "{name}". '
                         f'Only receptor type 0 is supported.')
        self.receptor_type = receptor_type


class UnknownRecordableError(GlifError, KeyError):
    """The requested quantity is not in the recordables registry."""
    __module__ = 'glifpy'

    def __init__(self, key, available=()):
        super().__init__(f'"{key}" is not a recordable quantity. '
                         f'Available recordables are {tuple(available)}.')
        self.key = key

    def __str__(self):
        return self.args[0]


class ContractViolationError(GlifError, RuntimeError):
    """The surrounding driver broke the update contract.

    For example, ``update()`` was called before ``calibrate()``. This is
    not a recoverable condition.
    """
    __module__ = 'glifpy'


class RunningError(GlifError):
    """The error occurred in the running function."""
    __module__ = 'glifpy'


class MonitorError(GlifError):
    __module__ = 'glifpy'
