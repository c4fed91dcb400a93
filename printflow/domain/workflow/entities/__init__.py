from .client import Client
from .employee import Department, Employee
from .job import Job
from .task import Task

__all__ = ["Client", "Department", "Employee", "Job", "Task"]
