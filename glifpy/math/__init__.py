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

from .environment import (
    set_dt as set_dt,
    get_dt as get_dt,
    set_float as set_float,
    get_float as get_float,
    set_int as set_int,
    get_int as get_int,
    float_ as float_,
    int_ as int_,
    enable_x64 as enable_x64,
    disable_x64 as disable_x64,
    set_x64 as set_x64,
)
