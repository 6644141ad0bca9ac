"""Pipeline architecture for functional composition.

This module provides the ``Step``, ``Task``, ``Job`` and ``Pipeline``
abstractions used to convert one test file: steps are single
transformations, tasks run steps in order, jobs group tasks into
phases (collect, output) and the pipeline runs the jobs. Every level
threads data forward and stops at the first failure.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .context import PipelineContext
from .events import (
    ErrorEvent,
    EventBus,
    JobCompletedEvent,
    JobStartedEvent,
    PipelineCompletedEvent,
    PipelineStartedEvent,
    StepCompletedEvent,
    StepStartedEvent,
)
from .result import Result

T = TypeVar("T")
R = TypeVar("R")


def _combine(results: list[Result[Any]]) -> Result[Any]:
    """Final result of a sequence: the last data and metadata plus every warning."""
    all_warnings: list[str] = []
    for result in results:
        if result.warnings:
            all_warnings.extend(result.warnings)

    final_result = results[-1]
    if all_warnings:
        return Result.warning(final_result.data, all_warnings, final_result.metadata)
    return Result.success(final_result.data, final_result.metadata)


def _next_input(result: Result[Any], current: Any) -> Any:
    # Success and warning results both carry data forward.
    if not result.is_error() and result.data is not None:
        return result.data
    return current


class Step(ABC, Generic[T, R]):
    """Atomic operation with a single responsibility.

    A ``Step`` transforms input of type ``T`` into output of type
    ``R``. Concrete steps implement ``execute`` and are run with the
    ``run`` helper that publishes start/completion events and handles
    exceptions.
    """

    def __init__(self, name: str, event_bus: EventBus) -> None:
        """Initialize step.

        Args:
            name: Unique name for this step.
            event_bus: Event bus for publishing events.
        """
        self.name = name
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Transformation to implement in subclasses.

        Args:
            context: Pipeline execution context.
            input_data: Input data for transformation.

        Returns:
            ``Result`` containing transformed data or an error.
        """

    def run(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the step with event publishing and error handling.

        Exceptions raised by ``execute`` are published as an ``ErrorEvent``
        and returned as a failure ``Result``.
        """
        self.event_bus.publish(
            StepStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
            )
        )

        start_time = time.time()

        try:
            self._logger.debug(f"Starting step: {self.name}")
            result = self.execute(context, input_data)
            self._logger.debug(f"Completed step: {self.name} ({result.status.value})")
        except Exception as e:
            self._logger.error(f"Exception in step {self.name}: {e}", exc_info=True)
            self.event_bus.publish(
                ErrorEvent(
                    timestamp=time.time(),
                    run_id=context.run_id,
                    context=context,
                    error=e,
                    error_type=type(e).__name__,
                    component=self.name,
                )
            )
            result = Result.failure(e, {"step": self.name, "context": context.run_id})

        self.event_bus.publish(
            StepCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
                result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

        return result


class Task(Generic[T, R]):
    """Collection of related steps executed sequentially.

    A ``Task`` threads data through its steps and short-circuits on the
    first step that produces an error.
    """

    def __init__(self, name: str, steps: list[Step], event_bus: EventBus) -> None:
        """Initialize task.

        Args:
            name: Unique name for this task
            steps: List of steps to execute in order
            event_bus: Event bus for publishing events
        """
        self.name = name
        self.steps = steps
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the configured steps in sequence.

        Args:
            context: Pipeline execution context.
            input_data: Input data for the first step.

        Returns:
            ``Result`` containing the final transformed data on success or
            the first error encountered.
        """
        self._logger.debug(f"Starting task: {self.name} with {len(self.steps)} steps")

        current_data: Any = input_data
        step_results: list[Result[Any]] = []

        for i, step in enumerate(self.steps):
            self._logger.debug(f"Executing step {i + 1}/{len(self.steps)}: {step.name}")

            result = step.run(context, current_data)

            if result.is_error():
                self._logger.error(f"Step {step.name} failed, aborting task {self.name}")
                error = result.error or RuntimeError(f"Task {self.name} failed at step {step.name}")
                return Result.failure(
                    error,
                    {"task": self.name, "failed_step": step.name, "step_index": i, "context": context.run_id},
                )

            step_results.append(result)
            current_data = _next_input(result, current_data)

        if not step_results:
            return Result.success(current_data)
        return _combine(step_results)

    def add_step(self, step: Step) -> None:
        """Add a step to the task.

        Args:
            step: Step instance to append to this task.
        """
        self.steps.append(step)
        self._logger.debug(f"Added step {step.name} to task {self.name}")

    def get_step_count(self) -> int:
        """Get number of steps in this task.

        Returns:
            Number of steps
        """
        return len(self.steps)


class Job(Generic[T, R]):
    """High-level processing unit composed of tasks.

    Jobs publish their own lifecycle events and thread either a new
    ``PipelineContext`` or plain data from one task to the next.
    """

    def __init__(self, name: str, tasks: list[Task], event_bus: EventBus) -> None:
        """Initialize job.

        Args:
            name: Unique name for this job
            tasks: List of tasks to execute in order
            event_bus: Event bus for publishing events
        """
        self.name = name
        self.tasks = tasks
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            JobCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all tasks and thread context/data through them.

        Args:
            context: Pipeline execution context.
            initial_input: Optional initial input for the first task.

        Returns:
            ``Result`` containing final transformed data on success or the
            first encountered error.
        """
        self.event_bus.publish(
            JobStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                task_count=len(self.tasks),
            )
        )

        self._logger.info(f"Starting job: {self.name} with {len(self.tasks)} tasks")
        start_time = time.time()

        current_context = context
        current_input = initial_input
        task_results: list[Result[Any]] = []

        for i, task in enumerate(self.tasks):
            self._logger.debug(f"Executing task {i + 1}/{len(self.tasks)}: {task.name}")

            result = task.execute(current_context, current_input)

            if result.is_error():
                self._logger.error(f"Task {task.name} failed, aborting job {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Job {self.name} failed at task {task.name}")
                return Result.failure(
                    error,
                    {"job": self.name, "failed_task": task.name, "task_index": i, "context": context.run_id},
                )

            task_results.append(result)

            if isinstance(result.data, PipelineContext):
                current_context = result.data
            else:
                current_input = _next_input(result, current_input)

        final_result = _combine(task_results) if task_results else Result.success(current_input)
        self._publish_completed(context, final_result, start_time)
        return final_result

    def add_task(self, task: Task) -> None:
        """Add a task to the job.

        Args:
            task: Task instance to append to this job.
        """
        self.tasks.append(task)
        self._logger.debug(f"Added task {task.name} to job {self.name}")

    def get_task_count(self) -> int:
        """Get number of tasks in this job.

        Returns:
            Number of tasks
        """
        return len(self.tasks)


class Pipeline(Generic[T, R]):
    """Main pipeline orchestrator.

    The pipeline runs its ``Job`` instances in order and manages overall
    data and context flow.
    """

    def __init__(self, name: str, jobs: list[Job], event_bus: EventBus) -> None:
        """Initialize pipeline.

        Args:
            name: Unique name for this pipeline
            jobs: List of jobs to execute in order
            event_bus: Event bus for publishing events
        """
        self.name = name
        self.jobs = jobs
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            PipelineCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all jobs in the pipeline in order.

        Args:
            context: Pipeline execution context.
            initial_input: Optional initial input for the pipeline.

        Returns:
            ``Result`` containing final transformed data on success or the
            first error encountered. Warnings from every job are collected
            on the final result.
        """
        self.event_bus.publish(PipelineStartedEvent(timestamp=time.time(), run_id=context.run_id, context=context))

        start_time = time.time()
        self._logger.info(f"Starting pipeline: {self.name} with {len(self.jobs)} jobs")

        current_context = context
        current_input = initial_input
        job_results: list[Result[Any]] = []

        for i, job in enumerate(self.jobs):
            self._logger.debug(f"Executing job {i + 1}/{len(self.jobs)}: {job.name}")

            result = job.execute(current_context, current_input)

            if result.is_error():
                self._logger.error(f"Job {job.name} failed, aborting pipeline {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Pipeline {self.name} failed at job {job.name}")
                return Result.failure(
                    error,
                    {"pipeline": self.name, "failed_job": job.name, "job_index": i, "context": context.run_id},
                )

            job_results.append(result)

            if isinstance(result.data, PipelineContext):
                current_context = result.data
            else:
                current_input = _next_input(result, current_input)

        final_result = _combine(job_results) if job_results else Result.success(current_input)
        self._publish_completed(context, final_result, start_time)
        return final_result

    def add_job(self, job: Job) -> None:
        """Add a job to the pipeline.

        Args:
            job: Job instance to append to this pipeline.
        """
        self.jobs.append(job)
        self._logger.debug(f"Added job {job.name} to pipeline {self.name}")

    def get_job_count(self) -> int:
        """Get number of jobs in this pipeline.

        Returns:
            Number of jobs
        """
        return len(self.jobs)


class PipelineFactory:
    """Factory for creating pipeline components on one event bus."""

    def __init__(self, event_bus: EventBus):
        """Initialize factory.

        Args:
            event_bus: Event bus for pipeline components
        """
        self.event_bus = event_bus

    def create_step(self, name: str, step_class: type[Step[Any, Any]], **kwargs: Any) -> Step[Any, Any]:
        """Create a step instance.

        Args:
            name: Name for the step
            step_class: Class to instantiate
            **kwargs: Additional arguments for step constructor

        Returns:
            Configured step instance
        """
        return step_class(name, self.event_bus, **kwargs)

    def create_task(self, name: str, steps: list[Step]) -> Task:
        """Create a task instance.

        Args:
            name: Name for the task
            steps: List of steps to include

        Returns:
            Configured task instance
        """
        return Task(name, steps, self.event_bus)

    def create_job(self, name: str, tasks: list[Task]) -> Job:
        """Create a job instance.

        Args:
            name: Name for the job
            tasks: List of tasks to include

        Returns:
            Configured job instance
        """
        return Job(name, tasks, self.event_bus)

    def create_pipeline(self, name: str, jobs: list[Job]) -> Pipeline:
        """Create a pipeline instance.

        Args:
            name: Name for the pipeline
            jobs: List of jobs to include

        Returns:
            Configured pipeline instance
        """
        return Pipeline(name, jobs, self.event_bus)
