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

from .model_types import (
    GLIF_MODEL_NAMES as GLIF_MODEL_NAMES,
    parse_glif_model as parse_glif_model,
    glif_model_name as glif_model_name,
)
from .params import (
    GLIFParameters as GLIFParameters,
    GLIFState as GLIFState,
    GLIFVariables as GLIFVariables,
    refractory_steps as refractory_steps,
)
from .updates import (
    update_glif1 as update_glif1,
    update_glif2 as update_glif2,
    update_glif3 as update_glif3,
    update_glif4 as update_glif4,
    update_glif5 as update_glif5,
    get_update_function as get_update_function,
)
from .archive import (
    SpikeArchive as SpikeArchive,
)
from .glif import (
    GLIF as GLIF,
)
