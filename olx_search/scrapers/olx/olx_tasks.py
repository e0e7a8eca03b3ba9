"""
Failure-isolated parallel execution of independent tasks.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    """Result of one task: a value or the exception it raised."""
    
    value: Optional[T] = None
    error: Optional[Exception] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None


def settle(task: Callable[[], T]) -> Outcome[T]:
    """
    Run a task and capture its result or exception.
    
    Args:
        task: Zero-argument callable
        
    Returns:
        Outcome holding the value or the error
    """
    try:
        return Outcome(value=task())
    except Exception as e:
        return Outcome(error=e)


def run_all_settled(tasks: Sequence[Callable[[], T]], max_workers: int) -> List[Outcome[T]]:
    """
    Run tasks in parallel and wait for every one of them.
    
    A failing task never cancels its siblings.
    
    Args:
        tasks: Zero-argument callables
        max_workers: Thread pool size
        
    Returns:
        Outcomes in the same order as the tasks
    """
    if not tasks:
        return []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [executor.submit(settle, task) for task in tasks]
        return [future.result() for future in futures]
