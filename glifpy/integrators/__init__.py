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

from .linear import (
    V_DYNAMICS_METHODS as V_DYNAMICS_METHODS,
    linear_forward_euler as linear_forward_euler,
    linear_exact as linear_exact,
    exponential_decay as exponential_decay,
    voltage_threshold_euler as voltage_threshold_euler,
    voltage_threshold_exact as voltage_threshold_exact,
    voltage_threshold_hold as voltage_threshold_hold,
    get_method_flag as get_method_flag,
    get_integral as get_integral,
)
