# -*- coding: utf-8 -*-
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

__version__ = "0.1.0"
__version_info__ = tuple(map(int, __version__.split(".")))

from glifpy import _errors as errors
# fundamental supporting modules
from glifpy import check, tools
#  Part: Math Foundation  #
# ----------------------- #
from glifpy import math

# the GLIF dynamics are defined in double precision
math.enable_x64()

from glifpy.context import share

#  Part: Toolbox  #
# --------------- #
from . import (
    integrators,  # integration primitives of the linear dynamics
    inputs,  # input buffers and methods for generating input currents
)

#  Part: Models  #
# -------------- #
from . import neurons
from glifpy.neurons import (
    GLIF as GLIF,
    GLIFParameters as GLIFParameters,
    parse_glif_model as parse_glif_model,
)

#  Part: Running  #
# --------------- #
from . import running
from glifpy.running import (
    GLIFRunner as GLIFRunner,
    DataLogger as DataLogger,
)
