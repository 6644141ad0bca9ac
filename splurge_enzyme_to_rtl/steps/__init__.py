"""Step modules for individual pipeline operations.

Each step module contains the concrete implementations of individual
pipeline steps that perform specific transformations.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .output_steps import WriteOutputStep
from .parse_steps import GenerateCodeStep, ParseSourceStep, TransformEnzymeStep

__all__ = [
    "ParseSourceStep",
    "TransformEnzymeStep",
    "GenerateCodeStep",
    "WriteOutputStep",
]
