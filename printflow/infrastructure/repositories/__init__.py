from .in_memory import (
    InMemoryClientRepository,
    InMemoryDepartmentRepository,
    InMemoryEmployeeRepository,
    InMemoryJobRepository,
    InMemoryTaskRepository,
)

__all__ = [
    "InMemoryClientRepository",
    "InMemoryDepartmentRepository",
    "InMemoryEmployeeRepository",
    "InMemoryJobRepository",
    "InMemoryTaskRepository",
]
