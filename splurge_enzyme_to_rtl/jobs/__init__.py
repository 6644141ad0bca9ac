"""Job modules for high-level pipeline orchestration.

Each job module contains the logic for orchestrating a specific phase
of the enzyme to React Testing Library migration process.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .collector_job import CollectorJob
from .output_job import OutputJob

__all__ = ["CollectorJob", "OutputJob"]
